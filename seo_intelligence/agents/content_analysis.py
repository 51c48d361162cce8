"""
Content Analysis Agent

Scores how well the site's content covers what the business offers and the
keywords it targets, and flags content gaps. Falls back to deterministic
content guidance when the AI insight call fails.
"""

from typing import Any, Dict, List

from ..models import AgentType, BaselineMetrics, BusinessContext
from ..output import SectionVocabulary
from .base import AgentPipeline, Stage, StageOutput, bullet_list


KEYWORD_COVERAGE_THRESHOLD = 10
THIN_DESCRIPTION_CHARS = 50


def calculate_content_score(keyword_count: int, offering_count: int) -> int:
    """60 base, up to 20 for keywords and up to 15 for offerings, capped at 100."""
    score = 60
    score += min(keyword_count * 5, 20)
    score += min(offering_count * 3, 15)
    return min(score, 100)


# =============================================================================
# STAGES
# =============================================================================


def offering_inventory(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    output = StageOutput(data={
        "product_count": len(context.products),
        "service_count": len(context.services),
        "offering_count": context.offering_count,
    })
    if not context.offering_count:
        output.findings.append("No products or services are described on the site")
        output.recommendations.append("Create dedicated pages describing each product and service")
    return output


def keyword_coverage(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    tracked = {k.keyword.lower() for k in baseline.keywords}
    targeted = [k for k in context.keywords if k.lower() in tracked]

    output = StageOutput(data={
        "keyword_coverage": len(baseline.keywords),
        "targeted_keywords": len(targeted),
    })
    if len(baseline.keywords) < KEYWORD_COVERAGE_THRESHOLD:
        output.findings.append(
            f"Only {len(baseline.keywords)} ranking keywords tracked, below the "
            f"{KEYWORD_COVERAGE_THRESHOLD}-keyword coverage threshold"
        )
        output.recommendations.append(
            f"Expand content to target more {context.industry} search terms"
        )
    return output


def content_score(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    score = calculate_content_score(len(baseline.keywords), context.offering_count)
    return StageOutput(data={"content_score": score, "industry": context.industry})


def find_content_gaps(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    keywords = [k.keyword.lower() for k in baseline.keywords]
    gaps: List[str] = []

    for service in context.services:
        if not any(service.lower() in kw for kw in keywords):
            gaps.append(f"No keyword targets the {service} service")

    location = context.location.lower()
    if location and not any(location in kw for kw in keywords):
        gaps.append(f"No location-specific content for {context.location}")

    if len(context.description) < THIN_DESCRIPTION_CHARS:
        gaps.append("Business description is thin")

    return StageOutput(findings=gaps[:5], data={"content_gaps": gaps})


# =============================================================================
# FALLBACK
# =============================================================================


def fallback_insights(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    return StageOutput(
        findings=[f"Content score is {data.get('content_score', 0)}/100"],
        recommendations=[
            "Publish a dedicated page for each core service",
            f"Add location pages targeting {context.location}",
            f"Build a FAQ section answering common {context.business_type} questions",
        ],
    )


# =============================================================================
# PROMPT
# =============================================================================


PROMPT_TEMPLATE = """Analyze content strategy for: {domain}

Business Information:
- Type: {business_type}
- Industry: {industry}
- Location: {location}
- Products: {products}
- Services: {services}

Target Keywords: {keywords}
Content Score: {content_score}/100

Detected Content Gaps:
{gaps}

Analyze and provide:
1. 5 content gaps that should be addressed (under a "Content Gaps" heading)
2. 5 content optimization recommendations (under a "Recommendations" heading)
3. Content topics that would improve SEO rankings
4. Content types that would work best for this business

Use one bullet per line."""


def prompt_data(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "keywords": ", ".join(k.keyword for k in baseline.keywords) or "none tracked",
        "content_score": data.get("content_score", 0),
        "gaps": bullet_list(data.get("content_gaps", [])),
    }


# =============================================================================
# PIPELINE
# =============================================================================


CONTENT_ANALYSIS_PIPELINE = AgentPipeline(
    agent_type=AgentType.CONTENT_ANALYSIS,
    display_name="Content Analysis",
    stages=(
        Stage("offering_inventory", 30, offering_inventory),
        Stage("keyword_coverage", 50, keyword_coverage),
        Stage("content_score", 65, content_score),
        Stage("content_gaps", 75, find_content_gaps),
    ),
    prompt_template=PROMPT_TEMPLATE,
    prompt_data=prompt_data,
    vocabulary=SectionVocabulary(("gap", "finding"), ("recommendation", "optimization")),
    fallback=fallback_insights,
)
