"""
Test Suite: Action Plan Generator

Tests plan synthesis from agent results:
- Action item coercion and the fallback plan
- Overall score and potential improvement
- Summary, timeline, quick wins and long-term goals
- Competitive intelligence, content strategy and progress tracking
"""

import json
from datetime import date

import pytest

from seo_intelligence.models import (
    AgentStatus,
    AgentType,
    BaselineMetrics,
    BusinessContext,
    Category,
    Effort,
    Impact,
    Priority,
    Timeframe,
    TopicPriority,
)
from seo_intelligence.planner import (
    ActionPlanGenerator,
    coerce_action_item,
    fallback_action_items,
)
from seo_intelligence.planner.generator import ensure_unique_ids, round_half_up
from seo_intelligence.planner.tracking import generate_kpis, generate_milestones

from conftest import ScriptedGenerator, make_result


def planner(baseline, results=None, generator=None, context=None):
    return ActionPlanGenerator(
        context or BusinessContext(domain="example-plumbing.com", business_type="plumber",
                                   industry="home services", location="Austin, Texas",
                                   services=("drain cleaning",)),
        baseline,
        results or [],
        generator or ScriptedGenerator(),
    )


class TestActionItemCoercion:
    """Test field-by-field coercion of generated items."""

    def test_unknown_priority_becomes_medium(self):
        item = coerce_action_item({"title": "X", "priority": "urgent"}, 0)
        assert item.priority == Priority.MEDIUM

    def test_defaults_for_missing_fields(self):
        item = coerce_action_item({}, 4)

        assert item.id == "action_5"
        assert item.title == "Untitled Action"
        assert item.description == "No description provided"
        assert item.impact == Impact.MEDIUM
        assert item.effort == Effort.MEDIUM
        assert item.category == Category.TECHNICAL
        assert item.timeframe == Timeframe.THIS_WEEK
        assert item.steps == ["Review and implement this action"]
        assert item.expected_improvement == "Improved SEO performance"
        assert item.tools is None
        assert item.dependencies is None

    def test_empty_steps_get_default(self):
        item = coerce_action_item({"steps": []}, 0)
        assert item.steps == ["Review and implement this action"]

    def test_non_list_tools_dropped(self):
        item = coerce_action_item({"tools": "Screaming Frog"}, 0)
        assert item.tools is None

    def test_non_object_element(self):
        item = coerce_action_item("just a string", 2)
        assert item.id == "action_3"
        assert item.priority == Priority.MEDIUM

    def test_valid_item_kept(self):
        item = coerce_action_item({
            "id": "fix_titles",
            "title": "Fix titles",
            "priority": "critical",
            "impact": "high",
            "effort": "low",
            "category": "local_seo",
            "timeframe": "next_quarter",
            "steps": ["Step 1: Audit"],
            "tools": ["Search Console"],
            "expectedImprovement": "More clicks",
            "dependencies": ["action_2"],
        }, 0)

        assert item.id == "fix_titles"
        assert item.priority == Priority.CRITICAL
        assert item.category == Category.LOCAL_SEO
        assert item.timeframe == Timeframe.NEXT_QUARTER
        assert item.tools == ["Search Console"]
        assert item.expected_improvement == "More clicks"
        assert item.dependencies == ["action_2"]

    def test_duplicate_ids_are_renamed(self):
        items = [coerce_action_item({"id": "action_1"}, i) for i in range(3)]
        ids = [item.id for item in ensure_unique_ids(items)]

        assert ids == ["action_1", "action_1_2", "action_1_3"]


class TestFallbackPlan:
    """Test the deterministic fallback action items."""

    def test_five_valid_items(self):
        items = fallback_action_items()

        assert [item.id for item in items] == [f"action_{i}" for i in range(1, 6)]
        assert items[0].priority == Priority.CRITICAL
        assert items[0].category == Category.LOCAL_SEO
        assert items[4].timeframe == Timeframe.THIS_MONTH
        for item in items:
            assert item.steps
            assert item.tools

    def test_fresh_copy_each_call(self):
        first = fallback_action_items()
        first[0].title = "changed"
        assert fallback_action_items()[0].title != "changed"

    @pytest.mark.asyncio
    async def test_generator_failure_uses_fallback(self, baseline_metrics, failing_generator):
        items = await planner(baseline_metrics, generator=failing_generator).generate_action_items([], [])

        assert len(items) == 5
        assert [item.id for item in items] == [item.id for item in fallback_action_items()]

    @pytest.mark.asyncio
    async def test_generic_error_uses_fallback(self, baseline_metrics, network_down_generator):
        items = await planner(baseline_metrics, generator=network_down_generator).generate_action_items([], [])

        assert [item.id for item in items] == [item.id for item in fallback_action_items()]
        assert network_down_generator.calls == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        "[]",
        "I could not produce a plan.",
        '{"items": "not an array"}',
        "[{'bad': json}]",
    ])
    async def test_unusable_output_uses_fallback(self, baseline_metrics, response):
        generator = ScriptedGenerator(responses={}, default=response)
        items = await planner(baseline_metrics, generator=generator).generate_action_items([], [])

        assert len(items) == 5


class TestScores:
    """Test overall score and potential improvement."""

    def test_round_half_up(self):
        assert round_half_up(60.5) == 61
        assert round_half_up(61.5) == 62
        assert round_half_up(77.49) == 77

    def test_no_results_uses_baseline(self, baseline_metrics):
        assert planner(baseline_metrics).calculate_overall_score() == 58

    def test_zero_baseline_uses_default(self):
        assert planner(BaselineMetrics()).calculate_overall_score() == 60

    def test_successive_averaging_depends_on_order(self):
        baseline = BaselineMetrics(seo_score=60)
        technical = make_result(AgentType.TECHNICAL_SEO, data={"technical_score": 80})
        content = make_result(AgentType.CONTENT_ANALYSIS, data={"content_score": 90})

        assert planner(baseline, [technical, content]).calculate_overall_score() == 80
        assert planner(baseline, [content, technical]).calculate_overall_score() == 78

    def test_half_rounds_up(self):
        baseline = BaselineMetrics(seo_score=60)
        technical = make_result(AgentType.TECHNICAL_SEO, data={"technical_score": 61})

        assert planner(baseline, [technical]).calculate_overall_score() == 61

    def test_failed_agents_and_zero_scores_ignored(self):
        baseline = BaselineMetrics(seo_score=60)
        results = [
            make_result(AgentType.TECHNICAL_SEO, AgentStatus.FAILED, data={"technical_score": 10}),
            make_result(AgentType.USER_EXPERIENCE, data={"ux_score": 0}),
        ]

        assert planner(baseline, results).calculate_overall_score() == 60

    def test_potential_with_no_agent_data(self):
        """Missing coverage and mobile data both count as gaps."""
        assert planner(BaselineMetrics(seo_score=60)).calculate_potential_improvement() == 95

    def test_potential_adds_gains(self):
        baseline = BaselineMetrics(seo_score=40)
        results = [
            make_result(AgentType.TECHNICAL_SEO, data={"critical_issues": 2}),
            make_result(AgentType.CONTENT_ANALYSIS, data={"keyword_coverage": 25}),
            make_result(AgentType.USER_EXPERIENCE, data={"mobile_optimization": 90}),
        ]

        assert planner(baseline, results).calculate_potential_improvement() == 50

    @pytest.mark.parametrize("seo_score", [1, 30, 55, 70, 90, 95, 98, 100])
    def test_potential_bounds(self, seo_score):
        plan = planner(BaselineMetrics(seo_score=seo_score))
        overall = plan.calculate_overall_score()
        potential = plan.calculate_potential_improvement()

        assert potential <= max(overall, 95)
        assert potential >= overall

    def test_potential_never_below_high_overall(self):
        plan = planner(BaselineMetrics(seo_score=98))

        assert plan.calculate_overall_score() == 98
        assert plan.calculate_potential_improvement() == 98


class TestSummaryAndGoals:
    """Test summary, timeline and goal extraction."""

    @pytest.mark.asyncio
    async def test_summary_from_generator(self, baseline_metrics):
        generator = ScriptedGenerator(responses={}, default="  Strong local opportunity.  ")
        summary = await planner(baseline_metrics, generator=generator).generate_summary([], 50, 80)

        assert summary == "Strong local opportunity."

    @pytest.mark.asyncio
    async def test_summary_template_on_failure(self, baseline_metrics, failing_generator):
        items = fallback_action_items()
        summary = await planner(baseline_metrics, generator=failing_generator).generate_summary(items, 52, 92)

        assert summary.startswith("Your website currently scores 52/100 for SEO performance.")
        assert "the 5 recommended actions" in summary
        assert "reach 92/100" in summary

    @pytest.mark.asyncio
    async def test_summary_template_on_empty_output(self, baseline_metrics):
        generator = ScriptedGenerator(responses={}, default="   ")
        summary = await planner(baseline_metrics, generator=generator).generate_summary([], 50, 80)

        assert summary.startswith("Your website currently scores 50/100")

    def test_timeline(self):
        items = [
            coerce_action_item({"timeframe": "immediate"}, 0),
            coerce_action_item({"timeframe": "this_week"}, 1),
            coerce_action_item({"timeframe": "this_week"}, 2),
            coerce_action_item({"timeframe": "next_quarter"}, 3),
        ]
        assert ActionPlanGenerator.generate_timeline(items) == (
            "1 immediate actions, 2 this week, 1 next quarter"
        )

    def test_timeline_without_items(self):
        assert ActionPlanGenerator.generate_timeline([]) == "4-6 weeks for full implementation"

    def test_quick_wins(self):
        items = [
            coerce_action_item({"title": f"Win {i}", "effort": "low", "impact": "high",
                                "timeframe": "immediate"}, i)
            for i in range(7)
        ]
        items.append(coerce_action_item({"title": "Hard", "effort": "high", "impact": "high",
                                         "timeframe": "immediate"}, 7))
        wins = ActionPlanGenerator.extract_quick_wins(items)

        assert wins == [f"Win {i}" for i in range(5)]

    def test_quick_wins_from_fallback_plan(self):
        wins = ActionPlanGenerator.extract_quick_wins(fallback_action_items())
        assert wins == ["Fix Critical Technical SEO Issues"]

    def test_long_term_goals(self):
        goals = ActionPlanGenerator.extract_long_term_goals(fallback_action_items())
        assert goals == [
            "Create SEO-Optimized Content for Target Keywords",
            "Build Local Citations and Business Listings",
        ]

    @pytest.mark.asyncio
    async def test_action_plan(self, baseline_metrics, scripted_generator):
        plan = await planner(baseline_metrics, generator=scripted_generator).generate_action_plan()

        assert len(plan.items) == 3
        assert plan.items[2].priority == Priority.MEDIUM
        assert plan.quick_wins == ["Fix duplicate title tags", "Compress images"]
        assert plan.long_term_goals == ["Publish drain cleaning guide"]
        assert plan.timeline == "1 immediate actions, 1 this week, 1 this month"


class TestCompetitiveIntelligence:
    """Test competitive intelligence synthesis."""

    def test_benchmarks_from_baseline(self, baseline_metrics):
        scores = planner(baseline_metrics).calculate_benchmark_scores()

        assert scores.content == 49
        assert scores.technical == 58
        assert scores.authority == 58
        assert scores.user_experience == 46

    def test_benchmarks_from_agent_data(self, baseline_metrics):
        results = [
            make_result(AgentType.CONTENT_ANALYSIS, data={"content_score": 84}),
            make_result(AgentType.USER_EXPERIENCE, data={"ux_score": 32}),
            make_result(AgentType.SERP_ANALYSIS, data={"serp_features": 2}),
        ]
        scores = planner(baseline_metrics, results).calculate_benchmark_scores()

        assert scores.content == 84
        assert scores.user_experience == 32
        assert scores.authority == 68

    def test_authority_capped(self):
        results = [make_result(AgentType.SERP_ANALYSIS, data={"serp_features": 6})]
        scores = planner(BaselineMetrics(seo_score=85), results).calculate_benchmark_scores()

        assert scores.authority == 90

    @pytest.mark.asyncio
    async def test_parsed_response(self, baseline_metrics, scripted_generator):
        intel = await planner(baseline_metrics, generator=scripted_generator).generate_competitive_intelligence()

        assert intel.market_position == "Third of twelve local plumbers"
        assert intel.competitive_gaps == ["Fewer reviews than the leader"]
        assert intel.benchmark_scores.technical == 58

    @pytest.mark.asyncio
    async def test_missing_market_position(self, baseline_metrics):
        generator = ScriptedGenerator(responses={}, default='{"competitiveGaps": ["Reviews"]}')
        intel = await planner(baseline_metrics, generator=generator).generate_competitive_intelligence()

        assert intel.market_position == "Middle tier competitor"
        assert intel.competitive_advantages == []

    @pytest.mark.asyncio
    async def test_fallback(self, baseline_metrics, failing_generator):
        intel = await planner(baseline_metrics, generator=failing_generator).generate_competitive_intelligence()

        assert intel.market_position == "Positioned as a plumber competitor in the home services space"
        assert len(intel.competitive_advantages) == 3
        assert len(intel.opportunity_areas) == 3
        assert intel.benchmark_scores.content == 49

    @pytest.mark.asyncio
    async def test_generic_error_uses_fallback(self, baseline_metrics, network_down_generator):
        intel = await planner(baseline_metrics, generator=network_down_generator).generate_competitive_intelligence()

        assert intel.competitive_gaps[0] == "SEO optimization needed"

    @pytest.mark.asyncio
    async def test_wrong_shape_uses_fallback(self, baseline_metrics):
        generator = ScriptedGenerator(responses={}, default='{"competitiveGaps": "not a list"}')
        intel = await planner(baseline_metrics, generator=generator).generate_competitive_intelligence()

        assert intel.competitive_advantages[0] == "Unique business positioning"


class TestContentStrategy:
    """Test content strategy synthesis."""

    @pytest.mark.asyncio
    async def test_parsed_response(self, baseline_metrics, scripted_generator):
        strategy = await planner(baseline_metrics, generator=scripted_generator).generate_content_strategy()

        assert strategy.content_gaps == ["No water heater guide"]
        assert strategy.topic_clusters[0].priority == TopicPriority.HIGH
        assert strategy.topic_clusters[1].priority == TopicPriority.MEDIUM
        assert strategy.content_calendar[0].content_type == "Blog Post"
        assert strategy.content_calendar[0].target_keyword == "clogged drain"

    @pytest.mark.asyncio
    async def test_fallback(self, baseline_metrics, failing_generator):
        strategy = await planner(baseline_metrics, generator=failing_generator).generate_content_strategy()

        assert len(strategy.content_gaps) == 5
        assert strategy.topic_clusters[0].topic == "home services Services"
        assert strategy.topic_clusters[0].keywords == ["drain cleaning"]
        assert strategy.topic_clusters[1].keywords[0] == "Austin, Texas plumber"
        assert [e.week for e in strategy.content_calendar] == ["Week 1", "Week 2", "Week 3", "Week 4"]
        assert strategy.content_calendar[0].target_keyword == "drain cleaning"

    @pytest.mark.asyncio
    async def test_generic_error_uses_fallback(self, baseline_metrics, network_down_generator):
        strategy = await planner(baseline_metrics, generator=network_down_generator).generate_content_strategy()

        assert strategy.content_gaps[0] == "Service pages need optimization"
        assert len(strategy.content_calendar) == 4

    @pytest.mark.asyncio
    async def test_invalid_calendar_entry_uses_fallback(self, baseline_metrics):
        payload = json.dumps({"contentCalendar": [{"week": "Week 1"}]})
        generator = ScriptedGenerator(responses={}, default=payload)
        strategy = await planner(baseline_metrics, generator=generator).generate_content_strategy()

        assert len(strategy.content_calendar) == 4


class TestProgressTracking:
    """Test milestones and KPIs."""

    def test_milestones(self):
        milestones = generate_milestones(fallback_action_items(), today=date(2024, 1, 1))

        assert [m.due_date for m in milestones] == ["2024-01-08", "2024-01-22", "2024-01-31", "2024-03-31"]
        assert milestones[0].action_item_ids == ["action_1", "action_2", "action_4"]
        assert milestones[1].action_item_ids == ["action_2", "action_4"]
        assert milestones[2].action_item_ids == ["action_3"]
        assert len(milestones[3].action_item_ids) == 5
        assert all(m.status.value == "not_started" for m in milestones)

    def test_kpis(self, baseline_metrics):
        kpis = {k.metric: k for k in generate_kpis(baseline_metrics)}

        assert kpis["Overall SEO Score"].target == 83
        assert kpis["Mobile Speed Score"].target == 67
        assert kpis["Keyword Rankings (Top 10)"].target == 6
        assert kpis["Organic Traffic Increase (%)"].target == 50
        assert kpis["Technical SEO Score"].current == 64

    def test_kpis_from_empty_baseline(self):
        kpis = generate_kpis(BaselineMetrics())

        assert [k.current for k in kpis] == [60, 70, 0, 0, 75]
        assert [k.target for k in kpis] == [85, 85, 10, 50, 95]

    @pytest.mark.asyncio
    async def test_generate_all_reports_steps(self, baseline_metrics, scripted_generator):
        steps = []
        report = await planner(baseline_metrics, generator=scripted_generator).generate_all(on_step=steps.append)

        assert steps == ["action_plan", "intelligence"]
        assert len(report.progress_tracking.milestones) == 4
        assert report.action_plan.summary
