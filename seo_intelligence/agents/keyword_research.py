"""
Keyword Research Agent

Profiles the tracked keywords (volume, difficulty, long-tail share) and
proposes service-plus-location keywords not yet tracked. Fails when the AI
insight call fails.
"""

from typing import Any, Dict, List

from ..models import AgentType, BaselineMetrics, BusinessContext
from ..output import SectionVocabulary
from .base import AgentPipeline, Stage, StageOutput, bullet_list


LONG_TAIL_WORDS = 3
MAX_OPPORTUNITIES = 5


# =============================================================================
# STAGES
# =============================================================================


def volume_profile(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    keywords = baseline.keywords
    total = sum(k.volume for k in keywords)
    avg_volume = total / len(keywords) if keywords else 0

    output = StageOutput(data={
        "keyword_count": len(keywords),
        "total_volume": total,
        "avg_volume": round(avg_volume, 1),
    })
    if keywords:
        top = max(keywords, key=lambda k: k.volume)
        output.data["top_keyword"] = top.keyword
        output.findings.append(f"'{top.keyword}' carries the most search volume ({top.volume}/month)")
    else:
        output.findings.append("No ranking keywords are currently tracked")
    return output


def difficulty_distribution(
    context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]
) -> StageOutput:
    distribution = {"high": 0, "medium": 0, "low": 0}
    for keyword in baseline.keywords:
        distribution[keyword.difficulty if keyword.difficulty in distribution else "medium"] += 1

    output = StageOutput(data={
        "difficulty_distribution": distribution,
        "high_difficulty_count": distribution["high"],
    })
    if baseline.keywords and distribution["high"] > len(baseline.keywords) / 2:
        output.findings.append("Most tracked keywords are highly competitive")
        output.recommendations.append("Balance the portfolio with lower-difficulty keywords")

    easy = [k.keyword for k in baseline.keywords if k.difficulty == "low"]
    if easy:
        output.recommendations.append(f"Prioritise low-difficulty keywords: {', '.join(easy[:3])}")
    return output


def long_tail_share(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    keywords = baseline.keywords
    long_tail = [k for k in keywords if len(k.keyword.split()) >= LONG_TAIL_WORDS]
    share = round(100 * len(long_tail) / len(keywords)) if keywords else 0

    output = StageOutput(data={"long_tail_count": len(long_tail), "long_tail_share": share})
    if keywords and share < 30:
        output.recommendations.append(
            f"Target more long-tail phrases ({LONG_TAIL_WORDS}+ words); only {share}% of keywords are long-tail"
        )
    return output


def keyword_opportunities(
    context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]
) -> StageOutput:
    tracked = {k.keyword.lower() for k in baseline.keywords}
    city = context.location.split(",")[0].strip()

    opportunities: List[str] = []
    for service in context.services:
        candidate = f"{service} {city}".lower().strip()
        if candidate not in tracked and candidate not in opportunities:
            opportunities.append(candidate)
        if len(opportunities) >= MAX_OPPORTUNITIES:
            break

    output = StageOutput(data={"keyword_opportunities": opportunities})
    if opportunities:
        output.recommendations.append(f"Create content targeting: {', '.join(opportunities[:3])}")
    return output


# =============================================================================
# PROMPT
# =============================================================================


PROMPT_TEMPLATE = """Advanced keyword strategy analysis for: {domain}

Business Context:
- Type: {business_type}
- Industry: {industry}
- Location: {location}
- Services: {services}

Current Keywords:
{keywords}

Untracked candidates: {opportunities}

Provide:
1. 5 keyword strategy findings (under a "Findings" heading)
2. 5 keyword optimization recommendations (under a "Recommendations" heading)
3. Untapped keyword opportunities
4. Long-tail keyword strategies

Use one bullet per line."""


def prompt_data(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "keywords": bullet_list(
            f"{k.keyword} (Volume: {k.volume}, Difficulty: {k.difficulty})" for k in baseline.keywords
        ),
        "opportunities": ", ".join(data.get("keyword_opportunities", [])) or "none",
    }


# =============================================================================
# PIPELINE
# =============================================================================


KEYWORD_RESEARCH_PIPELINE = AgentPipeline(
    agent_type=AgentType.KEYWORD_RESEARCH,
    display_name="Keyword Research",
    stages=(
        Stage("volume_profile", 30, volume_profile),
        Stage("difficulty_distribution", 50, difficulty_distribution),
        Stage("long_tail_share", 65, long_tail_share),
        Stage("keyword_opportunities", 75, keyword_opportunities),
    ),
    prompt_template=PROMPT_TEMPLATE,
    prompt_data=prompt_data,
    vocabulary=SectionVocabulary(("finding", "strategy"), ("recommendation", "optimization")),
)
