"""
Action Plan Generator

Synthesizes agent results into four sub-reports:

    generate_all()
    ├── generate_action_plan()           items, scores, summary, timeline
    ├── generate_competitive_intelligence()  ┐ concurrently
    ├── generate_content_strategy()          ┘
    └── generate_progress_tracking(items)    milestones and KPIs

Generative output is treated as untrusted: action items are coerced field by
field, JSON objects are validated with pydantic, and every generative step
has a deterministic fallback. Nothing here raises to the caller.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Set, Type, TypeVar, TYPE_CHECKING

from ..exceptions import OutputParseError
from ..models import (
    ActionItem,
    ActionPlan,
    AgentResult,
    AgentStatus,
    AgentType,
    BaselineMetrics,
    BenchmarkScores,
    BusinessContext,
    CalendarEntry,
    Category,
    CompetitiveIntelligence,
    ContentStrategy,
    Effort,
    Impact,
    Priority,
    ProgressTracking,
    Timeframe,
    TopicCluster,
    TopicPriority,
)
from ..output import extract_json_array, extract_json_object
from .fallbacks import fallback_action_items
from .schemas import CompetitiveIntelligencePayload, ContentStrategyPayload
from .tracking import generate_progress_tracking

if TYPE_CHECKING:
    from ..analyzer.client import TextGenerator

logger = logging.getLogger(__name__)

E = TypeVar("E")


ACTION_ITEMS_MAX_TOKENS = 3000
SUMMARY_MAX_TOKENS = 200
COMPETITIVE_MAX_TOKENS = 800
CONTENT_MAX_TOKENS = 1200

DEFAULT_SEO_SCORE = 60
MAX_POTENTIAL_SCORE = 95
MAX_AUTHORITY_SCORE = 90
MAX_LISTED_GOALS = 5

# Checked in this order for every completed agent
SUB_SCORE_KEYS = ("technical_score", "content_score", "ux_score")

DEFAULT_STEPS = ["Review and implement this action"]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class SynthesisReport:
    """The four sub-reports produced by generate_all()."""
    action_plan: ActionPlan
    competitive_intelligence: CompetitiveIntelligence
    content_strategy: ContentStrategy
    progress_tracking: ProgressTracking


# =============================================================================
# ACTION ITEM COERCION
# =============================================================================


def _coerce_enum(enum_cls: Type[E], value: Any, default: E) -> E:
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return default


def _text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)


def _string_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    return [str(v) for v in value if v is not None]


def coerce_action_item(raw: Any, index: int) -> ActionItem:
    """
    Build a valid ActionItem from one element of the generated array.

    Out-of-range enum values fall back to defaults rather than rejecting
    the item. Non-object elements become fully defaulted items.
    """
    item: Dict[str, Any] = raw if isinstance(raw, dict) else {}

    steps = _string_list(item.get("steps"))
    return ActionItem(
        id=_text(item.get("id"), f"action_{index + 1}"),
        title=_text(item.get("title"), "Untitled Action"),
        description=_text(item.get("description"), "No description provided"),
        priority=_coerce_enum(Priority, item.get("priority"), Priority.MEDIUM),
        impact=_coerce_enum(Impact, item.get("impact"), Impact.MEDIUM),
        effort=_coerce_enum(Effort, item.get("effort"), Effort.MEDIUM),
        category=_coerce_enum(Category, item.get("category"), Category.TECHNICAL),
        timeframe=_coerce_enum(Timeframe, item.get("timeframe"), Timeframe.THIS_WEEK),
        steps=steps or list(DEFAULT_STEPS),
        tools=_string_list(item.get("tools")),
        expected_improvement=_text(
            item.get("expectedImprovement", item.get("expected_improvement")),
            "Improved SEO performance",
        ),
        dependencies=_string_list(item.get("dependencies")),
    )


def ensure_unique_ids(items: List[ActionItem]) -> List[ActionItem]:
    """Rename repeated ids with a numeric suffix so every id is unique."""
    seen: Set[str] = set()
    for item in items:
        if item.id in seen:
            suffix = 2
            while f"{item.id}_{suffix}" in seen:
                suffix += 1
            logger.debug(f"Renaming duplicate action id {item.id} -> {item.id}_{suffix}")
            item.id = f"{item.id}_{suffix}"
        seen.add(item.id)
    return items


# =============================================================================
# GENERATOR
# =============================================================================


class ActionPlanGenerator:
    """
    Turns agent results into the synthesized plan for one run.

    Usage:
        generator = ActionPlanGenerator(context, baseline, results, text_generator)
        report = await generator.generate_all()
        report.action_plan.overall_score
    """

    def __init__(
        self,
        context: BusinessContext,
        baseline: BaselineMetrics,
        agent_results: List[AgentResult],
        generator: "TextGenerator",
    ):
        self.context = context
        self.baseline = baseline
        self.agent_results = agent_results
        self.generator = generator

    @property
    def domain(self) -> str:
        return self.context.domain or "the website"

    def _agent(self, agent_type: AgentType) -> Optional[AgentResult]:
        for result in self.agent_results:
            if result.agent_type == agent_type:
                return result
        return None

    def _agent_data(self, agent_type: AgentType) -> Dict[str, Any]:
        result = self._agent(agent_type)
        return result.data if result else {}

    def _agent_findings(self, agent_type: AgentType) -> str:
        result = self._agent(agent_type)
        if result and result.findings:
            return "; ".join(result.findings)
        return "None available"

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    async def generate_all(self, on_step: Optional[Callable[[str], None]] = None) -> SynthesisReport:
        """
        Produce all four sub-reports.

        Args:
            on_step: Called with "action_plan", then "intelligence", as each
                step finishes
        """
        action_plan = await self.generate_action_plan()
        if on_step:
            on_step("action_plan")

        competitive, content = await asyncio.gather(
            self.generate_competitive_intelligence(),
            self.generate_content_strategy(),
        )
        if on_step:
            on_step("intelligence")

        tracking = self.generate_progress_tracking(action_plan.items)
        return SynthesisReport(
            action_plan=action_plan,
            competitive_intelligence=competitive,
            content_strategy=content,
            progress_tracking=tracking,
        )

    async def generate_action_plan(self) -> ActionPlan:
        logger.info(f"Generating action plan for {self.domain}")

        findings = [f for r in self.agent_results for f in r.findings]
        recommendations = [rec for r in self.agent_results for rec in r.recommendations]

        items = await self.generate_action_items(findings, recommendations)
        overall = self.calculate_overall_score()
        potential = self.calculate_potential_improvement()
        summary = await self.generate_summary(items, overall, potential)

        return ActionPlan(
            summary=summary,
            overall_score=overall,
            potential_improvement=potential,
            timeline=self.generate_timeline(items),
            items=items,
            quick_wins=self.extract_quick_wins(items),
            long_term_goals=self.extract_long_term_goals(items),
        )

    # =========================================================================
    # ACTION ITEMS
    # =========================================================================

    async def generate_action_items(self, findings: List[str], recommendations: List[str]) -> List[ActionItem]:
        """Generated action items, or the fallback items on any failure. Never empty."""
        prompt = self._action_items_prompt(findings, recommendations)

        try:
            text = await self.generator.generate_text(prompt, ACTION_ITEMS_MAX_TOKENS)
            raw_items = extract_json_array(text)
            items = [coerce_action_item(raw, i) for i, raw in enumerate(raw_items)]
            if not items:
                raise OutputParseError("Generated action item array is empty", raw_output=text)
        except Exception as e:
            logger.warning(f"Action item generation failed, using fallback plan: {e}")
            return fallback_action_items()

        logger.info(f"Generated {len(items)} action items")
        return ensure_unique_ids(items)

    def _action_items_prompt(self, findings: List[str], recommendations: List[str]) -> str:
        numbered_findings = "\n".join(f"{i}. {f}" for i, f in enumerate(findings, 1))
        numbered_recs = "\n".join(f"{i}. {r}" for i, r in enumerate(recommendations, 1))

        return f"""Create a comprehensive SEO action plan for: {self.domain}

Business Context:
- Type: {self.context.business_type}
- Industry: {self.context.industry}
- Location: {self.context.location}
- Current SEO Score: {self.baseline.seo_score:g}/100

Analysis Findings:
{numbered_findings or "None"}

Recommendations:
{numbered_recs or "None"}

Create 8-12 prioritized action items with detailed, step-by-step implementation
directions. Each step must name the exact tool, page or setting to change.

For each action item, provide:
- id ("action_1", "action_2", ...)
- title (clear, specific action)
- description (detailed explanation)
- priority (critical/high/medium/low)
- impact (high/medium/low)
- effort (high/medium/low)
- category (technical/content/keywords/competitors/user_experience/local_seo)
- timeframe (immediate/this_week/this_month/next_quarter)
- steps (8-15 concrete implementation steps)
- tools (specific tools needed)
- expectedImprovement (what improvement to expect)
- dependencies (ids of action items this one depends on, if any)

Format as a JSON array of objects with exactly those keys.
Return ONLY valid JSON with no additional text."""

    # =========================================================================
    # SCORES
    # =========================================================================

    def calculate_overall_score(self) -> int:
        """
        Successively average the baseline score with each completed agent's
        sub-scores. Agent order matters: each sub-score pulls the running
        value halfway toward itself.
        """
        score = self.baseline.seo_score or DEFAULT_SEO_SCORE

        for result in self.agent_results:
            if result.status != AgentStatus.COMPLETED:
                continue
            for key in SUB_SCORE_KEYS:
                value = result.data.get(key)
                if value:
                    score = (score + value) / 2

        return round_half_up(max(min(score, 100), 0))

    def calculate_potential_improvement(self) -> int:
        """Overall score plus estimated gains, capped at 95 but never below the overall score."""
        gain = 0

        critical = self._agent_data(AgentType.TECHNICAL_SEO).get("critical_issues") or 0
        gain += critical * 5

        # Absent metrics count as 0, so they qualify for the gain
        if (self._agent_data(AgentType.CONTENT_ANALYSIS).get("keyword_coverage") or 0) < 10:
            gain += 15
        if (self._agent_data(AgentType.USER_EXPERIENCE).get("mobile_optimization") or 0) < 70:
            gain += 20

        overall = self.calculate_overall_score()
        return max(overall, min(overall + gain, MAX_POTENTIAL_SCORE))

    # =========================================================================
    # SUMMARY, TIMELINE, GOALS
    # =========================================================================

    async def generate_summary(self, items: List[ActionItem], overall: int, potential: int) -> str:
        fallback = (
            f"Your website currently scores {overall}/100 for SEO performance. "
            f"By implementing the {len(items)} recommended actions, you could potentially "
            f"reach {potential}/100, significantly improving your search visibility and organic traffic."
        )

        critical = sum(1 for item in items if item.priority == Priority.CRITICAL)
        high = sum(1 for item in items if item.priority == Priority.HIGH)
        prompt = f"""Generate a concise executive summary for an SEO action plan:

Domain: {self.domain}
Business: {self.context.business_type} in {self.context.industry}
Current SEO Score: {overall}/100
Potential Score: {potential}/100

Action Items:
- {critical} critical priority items
- {high} high priority items
- {len(items)} total action items

Write a 2-3 sentence summary focusing on the biggest opportunities and expected outcomes."""

        try:
            text = await self.generator.generate_text(prompt, SUMMARY_MAX_TOKENS)
        except Exception as e:
            logger.warning(f"Summary generation failed, using template: {e}")
            return fallback

        return text.strip() or fallback

    @staticmethod
    def generate_timeline(items: List[ActionItem]) -> str:
        counts = {tf: sum(1 for item in items if item.timeframe == tf) for tf in Timeframe}
        labels = {
            Timeframe.IMMEDIATE: "immediate actions",
            Timeframe.THIS_WEEK: "this week",
            Timeframe.THIS_MONTH: "this month",
            Timeframe.NEXT_QUARTER: "next quarter",
        }
        parts = [f"{counts[tf]} {labels[tf]}" for tf in Timeframe if counts[tf]]
        return ", ".join(parts) or "4-6 weeks for full implementation"

    @staticmethod
    def extract_quick_wins(items: List[ActionItem]) -> List[str]:
        """Near-term, low-effort items with at least medium impact."""
        return [
            item.title for item in items
            if item.timeframe in (Timeframe.IMMEDIATE, Timeframe.THIS_WEEK)
            and item.effort == Effort.LOW
            and item.impact in (Impact.HIGH, Impact.MEDIUM)
        ][:MAX_LISTED_GOALS]

    @staticmethod
    def extract_long_term_goals(items: List[ActionItem]) -> List[str]:
        return [
            item.title for item in items
            if item.timeframe in (Timeframe.THIS_MONTH, Timeframe.NEXT_QUARTER)
            and item.impact == Impact.HIGH
        ][:MAX_LISTED_GOALS]

    # =========================================================================
    # COMPETITIVE INTELLIGENCE
    # =========================================================================

    def calculate_benchmark_scores(self) -> BenchmarkScores:
        base = self.baseline.seo_score or DEFAULT_SEO_SCORE
        content = self._agent_data(AgentType.CONTENT_ANALYSIS).get("content_score")
        ux = self._agent_data(AgentType.USER_EXPERIENCE).get("ux_score")
        serp_features = self._agent_data(AgentType.SERP_ANALYSIS).get("serp_features") or 0

        return BenchmarkScores(
            content=round_half_up(content or base * 0.85),
            technical=round_half_up((self.baseline.technical_seo.score or base) * 0.9),
            authority=round_half_up(min(base + serp_features * 5, MAX_AUTHORITY_SCORE)),
            user_experience=round_half_up(ux or base * 0.8),
        )

    async def generate_competitive_intelligence(self) -> CompetitiveIntelligence:
        benchmarks = self.calculate_benchmark_scores()
        position = self.baseline.market_position
        competitors = "\n".join(
            f"- {c.name} (Score: {c.score:g})" for c in self.baseline.competitors
        ) or "- None identified"

        prompt = f"""Analyze competitive positioning for: {self.domain}

Business: {self.context.business_type} in {self.context.industry}
Current SEO Score: {self.baseline.seo_score:g}/100
Market Position: Rank {position.rank} of {position.total_competitors}

Competitors:
{competitors}

Agent Findings: {self._agent_findings(AgentType.COMPETITOR_INTELLIGENCE)}

Provide competitive analysis in this format:
{{
  "marketPosition": "Brief description of current market position",
  "competitiveAdvantages": ["advantage 1", "advantage 2", "advantage 3"],
  "competitiveGaps": ["gap 1", "gap 2", "gap 3"],
  "opportunityAreas": ["opportunity 1", "opportunity 2", "opportunity 3"]
}}

Return only valid JSON."""

        try:
            text = await self.generator.generate_text(prompt, COMPETITIVE_MAX_TOKENS)
            payload = CompetitiveIntelligencePayload.model_validate(extract_json_object(text))
        except Exception as e:
            logger.warning(f"Competitive intelligence generation failed, using fallback: {e}")
            return self._fallback_competitive_intelligence(benchmarks)

        return CompetitiveIntelligence(
            market_position=payload.market_position or "Middle tier competitor",
            competitive_advantages=payload.competitive_advantages,
            competitive_gaps=payload.competitive_gaps,
            opportunity_areas=payload.opportunity_areas,
            benchmark_scores=benchmarks,
        )

    def _fallback_competitive_intelligence(self, benchmarks: BenchmarkScores) -> CompetitiveIntelligence:
        return CompetitiveIntelligence(
            market_position=(
                f"Positioned as a {self.context.business_type} competitor "
                f"in the {self.context.industry} space"
            ),
            competitive_advantages=["Unique business positioning", "Local market presence", "Specialized services"],
            competitive_gaps=["SEO optimization needed", "Digital presence improvement", "Content strategy enhancement"],
            opportunity_areas=["Local SEO optimization", "Content marketing expansion", "Technical SEO improvements"],
            benchmark_scores=benchmarks,
        )

    # =========================================================================
    # CONTENT STRATEGY
    # =========================================================================

    async def generate_content_strategy(self) -> ContentStrategy:
        keywords = ", ".join(k.keyword for k in self.baseline.keywords) or "none tracked"
        prompt = f"""Create a content strategy for: {self.domain}

Business: {self.context.business_type} in {self.context.industry}
Location: {self.context.location}
Services: {", ".join(self.context.services) or "not specified"}
Current Keywords: {keywords}

Content Agent Findings: {self._agent_findings(AgentType.CONTENT_ANALYSIS)}

Generate content strategy with:
1. 5 content gaps to address
2. 3 topic clusters with keywords
3. 4-week content calendar

Format as JSON:
{{
  "contentGaps": ["gap 1", "gap 2"],
  "topicClusters": [
    {{"topic": "cluster name", "keywords": ["kw1", "kw2"], "priority": "high"}}
  ],
  "contentCalendar": [
    {{"week": "Week 1", "contentType": "Blog Post", "topic": "topic", "targetKeyword": "keyword"}}
  ]
}}

Return only valid JSON."""

        try:
            text = await self.generator.generate_text(prompt, CONTENT_MAX_TOKENS)
            payload = ContentStrategyPayload.model_validate(extract_json_object(text))
        except Exception as e:
            logger.warning(f"Content strategy generation failed, using fallback: {e}")
            return self._fallback_content_strategy()

        return ContentStrategy(
            content_gaps=payload.content_gaps,
            topic_clusters=[
                TopicCluster(topic=c.topic, keywords=c.keywords, priority=c.priority)
                for c in payload.topic_clusters
            ],
            content_calendar=[
                CalendarEntry(
                    week=e.week,
                    content_type=e.content_type,
                    topic=e.topic,
                    target_keyword=e.target_keyword,
                )
                for e in payload.content_calendar
            ],
        )

    def _fallback_content_strategy(self) -> ContentStrategy:
        ctx = self.context
        return ContentStrategy(
            content_gaps=[
                "Service pages need optimization",
                "Blog content for target keywords",
                "Local content for geographic targeting",
                "FAQ section for common queries",
                "Case studies and testimonials",
            ],
            topic_clusters=[
                TopicCluster(
                    topic=f"{ctx.industry} Services",
                    keywords=list(ctx.services[:3]) or ["services", "solutions"],
                    priority=TopicPriority.HIGH,
                ),
                TopicCluster(
                    topic=f"Local {ctx.business_type}",
                    keywords=[f"{ctx.location} {ctx.business_type}", "local services"],
                    priority=TopicPriority.MEDIUM,
                ),
            ],
            content_calendar=[
                CalendarEntry("Week 1", "Service Page", "Core Services Overview",
                              ctx.services[0] if ctx.services else "services"),
                CalendarEntry("Week 2", "Blog Post", "Industry Insights", f"{ctx.industry} tips"),
                CalendarEntry("Week 3", "FAQ Page", "Common Questions", f"{ctx.business_type} questions"),
                CalendarEntry("Week 4", "Case Study", "Success Stories", f"{ctx.business_type} results"),
            ],
        )

    # =========================================================================
    # PROGRESS TRACKING
    # =========================================================================

    def generate_progress_tracking(self, items: List[ActionItem], today: Optional[date] = None) -> ProgressTracking:
        return generate_progress_tracking(items, self.baseline, today)
