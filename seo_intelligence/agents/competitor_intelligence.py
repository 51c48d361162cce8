"""
Competitor Intelligence Agent

Positions the site against the competitors found by the baseline:
landscape summary, competitive strength label, estimated market share
and the score gap to competitors ranking above it.
"""

from typing import Any, Dict, Optional, Tuple

from ..models import AgentType, BaselineMetrics, BusinessContext, CompetitorMetric
from ..output import SectionVocabulary
from .base import AgentPipeline, Stage, StageOutput, bullet_list


STRONG_MARGIN = 10
COMPETITIVE_MARGIN = 5
DEFAULT_RANK = 3


def calculate_competitive_strength(seo_score: float, competitors: Tuple[CompetitorMetric, ...]) -> str:
    if not competitors:
        return "Unknown"

    average = sum(c.score for c in competitors) / len(competitors)
    if seo_score > average + STRONG_MARGIN:
        return "Strong"
    if seo_score > average - COMPETITIVE_MARGIN:
        return "Competitive"
    return "Needs Improvement"


def estimate_market_share(rank: int, reported: Optional[float] = None) -> float:
    """Use the reported share when present, otherwise approximate from rank."""
    if reported is not None:
        return float(reported)
    rank = rank or DEFAULT_RANK
    return float(max(round(100 / (rank * 2.5)), 1))


# =============================================================================
# STAGES
# =============================================================================


def competitor_landscape(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    competitors = baseline.competitors
    if not competitors:
        return StageOutput(
            findings=["No direct competitors were identified in search results"],
            data={"competitor_count": 0, "avg_competitor_score": 0, "market_leader": None},
        )

    leader = max(competitors, key=lambda c: c.score)
    average = round(sum(c.score for c in competitors) / len(competitors), 1)
    return StageOutput(
        findings=[f"{leader.name} leads the local market with a score of {leader.score:g}"],
        data={
            "competitor_count": len(competitors),
            "avg_competitor_score": average,
            "market_leader": leader.name,
        },
    )


def competitive_strength(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    strength = calculate_competitive_strength(baseline.seo_score, baseline.competitors)
    output = StageOutput(data={"competitive_strength": strength})
    if strength == "Needs Improvement":
        output.findings.append(
            f"SEO score of {baseline.seo_score:g} trails the competitor average of "
            f"{data.get('avg_competitor_score', 0):g}"
        )
        output.recommendations.append("Close the gap on the highest-scoring competitor's ranking pages first")
    elif strength == "Strong":
        output.findings.append("The site outperforms the average competitor")
    return output


def market_share(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    position = baseline.market_position
    share = estimate_market_share(position.rank, position.market_share)
    output = StageOutput(data={
        "market_rank": position.rank,
        "estimated_market_share": share,
    })
    if position.rank and position.total_competitors:
        output.findings.append(f"Ranked {position.rank} of {position.total_competitors} in the local market")
    return output


def score_gaps(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    ahead = sorted(
        (c for c in baseline.competitors if c.score > baseline.seo_score),
        key=lambda c: c.score,
        reverse=True,
    )
    leader_gap = round(ahead[0].score - baseline.seo_score, 1) if ahead else 0

    output = StageOutput(data={
        "competitors_ahead": [c.name for c in ahead],
        "leader_gap": leader_gap,
    })
    if ahead:
        output.recommendations.append(
            f"Study {ahead[0].name}'s content and backlinks to recover the {leader_gap:g}-point gap"
        )
    return output


# =============================================================================
# FALLBACK
# =============================================================================


def fallback_insights(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    return StageOutput(
        findings=[f"Competitive strength is {data.get('competitive_strength', 'Unknown')}"],
        recommendations=[
            f"Differentiate on specialised {context.industry} expertise",
            f"Strengthen local presence in {context.location}",
            "Monitor competitor rankings monthly",
        ],
    )


# =============================================================================
# PROMPT
# =============================================================================


PROMPT_TEMPLATE = """Deep competitive analysis for: {domain}

Business Context:
- Type: {business_type}
- Industry: {industry}
- Location: {location}

Current Competitors:
{competitors}

Market Position: Rank {rank} of {total_competitors}
Competitive Strength: {competitive_strength}

Analyze and provide:
1. 5 competitive intelligence findings (under a "Findings" heading)
2. 5 strategic recommendations to outrank competitors (under a "Recommendations" heading)
3. Competitive advantages to leverage
4. Market gaps to exploit

Use one bullet per line."""


def prompt_data(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "competitors": bullet_list(
            f"{c.name} (Score: {c.score:g}, Rank: {c.ranking})" for c in baseline.competitors
        ),
        "rank": baseline.market_position.rank,
        "total_competitors": baseline.market_position.total_competitors,
        "competitive_strength": data.get("competitive_strength", "Unknown"),
    }


# =============================================================================
# PIPELINE
# =============================================================================


COMPETITOR_INTELLIGENCE_PIPELINE = AgentPipeline(
    agent_type=AgentType.COMPETITOR_INTELLIGENCE,
    display_name="Competitor Intelligence",
    stages=(
        Stage("competitor_landscape", 30, competitor_landscape),
        Stage("competitive_strength", 50, competitive_strength),
        Stage("market_share", 65, market_share),
        Stage("score_gaps", 75, score_gaps),
    ),
    prompt_template=PROMPT_TEMPLATE,
    prompt_data=prompt_data,
    vocabulary=SectionVocabulary(("finding", "intelligence"), ("recommendation", "strategic")),
    fallback=fallback_insights,
)
