"""
SERP Analysis Agent

Inventories which search result features the site appears in, its organic
and local presence, and which missing features are worth pursuing.
"""

from typing import Any, Dict

from ..models import AgentType, BaselineMetrics, BusinessContext, SERPPresence
from ..output import SectionVocabulary
from .base import AgentPipeline, Stage, StageOutput


FEATURE_LABELS = {
    "featured_snippets": "Featured Snippets",
    "knowledge_panel": "Knowledge Panel",
    "maps": "Maps Results",
    "news": "News Results",
    "video": "Video Results",
    "images": "Image Results",
}

FEATURE_RECOMMENDATIONS = {
    "featured_snippets": "Answer common questions in concise paragraphs to win featured snippets",
    "knowledge_panel": "Claim and complete the Google Business Profile to earn a knowledge panel",
    "maps": "Optimise the Google Business Profile and NAP citations for map pack visibility",
    "news": "Publish company news and press releases to appear in news results",
    "video": "Publish short videos explaining core services",
    "images": "Add descriptive file names and alt text so images rank in image search",
}


def count_serp_features(serp: SERPPresence) -> int:
    return sum(1 for found in serp.feature_flags().values() if found)


# =============================================================================
# STAGES
# =============================================================================


def feature_inventory(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    flags = baseline.serp_presence.feature_flags()
    present = [name for name, found in flags.items() if found]
    missing = [name for name, found in flags.items() if not found]

    output = StageOutput(data={
        "serp_features": count_serp_features(baseline.serp_presence),
        "present_features": present,
        "missing_features": missing,
    })
    if present:
        labels = ", ".join(FEATURE_LABELS[name] for name in present)
        output.findings.append(f"Appears in {len(present)} of {len(flags)} SERP features: {labels}")
    else:
        output.findings.append("No SERP feature presence detected")
    return output


def organic_presence(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    listings = len(baseline.serp_presence.organic_results)
    output = StageOutput(data={"organic_listings": listings})
    if listings == 0:
        output.findings.append("The site has no organic listings for its core search terms")
        output.recommendations.append("Build service pages around the primary search terms")
    return output


def local_presence(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    found = baseline.serp_presence.maps_found
    output = StageOutput(data={"local_presence": found})
    if not found:
        output.findings.append(f"Not appearing in local map results for {context.location}")
    return output


def feature_opportunities(
    context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]
) -> StageOutput:
    missing = data.get("missing_features", [])
    return StageOutput(
        recommendations=[FEATURE_RECOMMENDATIONS[name] for name in missing],
        data={"feature_opportunities": [FEATURE_LABELS[name] for name in missing]},
    )


# =============================================================================
# FALLBACK
# =============================================================================


def fallback_insights(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    return StageOutput(
        findings=[f"{data.get('serp_features', 0)} SERP features currently captured"],
        recommendations=[
            "Add FAQ schema to service pages",
            f"Target '{context.business_type} near me' searches in {context.location}",
        ],
    )


# =============================================================================
# PROMPT
# =============================================================================


PROMPT_TEMPLATE = """SERP positioning analysis for: {domain}

Current SERP Presence:
- Organic Results: {organic_listings} listings
- Maps Results: {maps}
- Featured Snippets: {featured_snippets}
- Knowledge Panel: {knowledge_panel}
- News Results: {news}
- Video Results: {video}
- Image Results: {images}

Business: {business_type} in {location}

Analyze and provide:
1. 5 SERP positioning findings (under a "Findings" heading)
2. 5 recommendations to improve SERP visibility (under a "Recommendations" heading)
3. SERP feature opportunities
4. Local SEO opportunities

Use one bullet per line."""


def prompt_data(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> Dict[str, Any]:
    values = {
        name: "Found" if found else "Not found"
        for name, found in baseline.serp_presence.feature_flags().items()
    }
    values["organic_listings"] = data.get("organic_listings", 0)
    return values


# =============================================================================
# PIPELINE
# =============================================================================


SERP_ANALYSIS_PIPELINE = AgentPipeline(
    agent_type=AgentType.SERP_ANALYSIS,
    display_name="SERP Analysis",
    stages=(
        Stage("feature_inventory", 30, feature_inventory),
        Stage("organic_presence", 50, organic_presence),
        Stage("local_presence", 65, local_presence),
        Stage("feature_opportunities", 75, feature_opportunities),
    ),
    prompt_template=PROMPT_TEMPLATE,
    prompt_data=prompt_data,
    vocabulary=SectionVocabulary(("finding", "positioning"), ("recommendation", "improve")),
    fallback=fallback_insights,
)
