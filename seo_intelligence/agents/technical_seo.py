"""
Technical SEO Agent

Audits crawlability and performance health from the baseline:
- Issue triage by impact
- Core Web Vitals sub-scores (LCP, CLS, FCP)
- Security and accessibility sub-scores inferred from audit issue text
- Schema markup coverage
- Weighted composite technical score

Fails when the AI insight call fails; there is no useful technical
narrative without it.
"""

from typing import Any, Dict

from ..models import AgentType, BaselineMetrics, BusinessContext
from ..output import SectionVocabulary
from .base import (
    AgentPipeline,
    CLS_GOOD,
    CLS_POOR,
    FCP_GOOD_SECONDS,
    FCP_POOR_SECONDS,
    LCP_GOOD_SECONDS,
    LCP_POOR_SECONDS,
    Stage,
    StageOutput,
    bullet_list,
    clamp,
    letter_grade,
    mentions,
    threshold_score,
)


SECURITY_TERMS = ("https", "ssl", "tls", "security", "mixed content", "certificate", "hsts")
ACCESSIBILITY_TERMS = ("alt", "contrast", "aria", "accessib", "label", "heading")
SCHEMA_TERMS = ("schema", "structured data", "json-ld", "rich result", "microdata")

# Composite weights, summing to 1.0
COMPOSITE_WEIGHTS = {
    "baseline": 0.40,
    "core_web_vitals": 0.25,
    "security": 0.10,
    "accessibility": 0.10,
    "schema": 0.15,
}


# =============================================================================
# STAGES
# =============================================================================


def triage_issues(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    issues = baseline.technical_seo.issues
    breakdown = {"high": 0, "medium": 0, "low": 0}
    for issue in issues:
        breakdown[issue.impact if issue.impact in breakdown else "medium"] += 1

    critical = baseline.technical_seo.critical_issues
    output = StageOutput(data={
        "critical_issues": len(critical),
        "total_issues": len(issues),
        "issue_breakdown": breakdown,
    })

    for issue in critical[:3]:
        output.findings.append(f"Critical issue: {issue.title}")
        fix = f": {issue.description}" if issue.description else ""
        output.recommendations.append(f"Resolve '{issue.title}'{fix}")

    if len(critical) > 3:
        output.findings.append(f"{len(critical) - 3} further high-impact issues need attention")

    return output


def score_core_web_vitals(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    speed = baseline.page_speed
    lcp_score = threshold_score(speed.largest_contentful_paint, LCP_GOOD_SECONDS, LCP_POOR_SECONDS)
    cls_score = threshold_score(speed.cumulative_layout_shift, CLS_GOOD, CLS_POOR)
    fcp_score = threshold_score(speed.first_contentful_paint, FCP_GOOD_SECONDS, FCP_POOR_SECONDS)

    output = StageOutput(data={
        "lcp_score": lcp_score,
        "cls_score": cls_score,
        "fcp_score": fcp_score,
        "core_web_vitals_score": round((lcp_score + cls_score + fcp_score) / 3),
        "page_speed_grade": letter_grade(speed.mobile),
    })

    if speed.largest_contentful_paint > LCP_GOOD_SECONDS:
        output.findings.append(
            f"Largest Contentful Paint of {speed.largest_contentful_paint}s exceeds the "
            f"{LCP_GOOD_SECONDS}s threshold"
        )
        output.recommendations.append(
            "Reduce Largest Contentful Paint by compressing hero images and preloading critical resources"
        )
    if speed.cumulative_layout_shift > CLS_GOOD:
        output.findings.append(
            f"Cumulative Layout Shift of {speed.cumulative_layout_shift} exceeds the {CLS_GOOD} threshold"
        )
        output.recommendations.append("Reserve space for images and embeds to stop layout shifts")
    if speed.first_contentful_paint > FCP_GOOD_SECONDS:
        output.findings.append(
            f"First Contentful Paint of {speed.first_contentful_paint}s exceeds the "
            f"{FCP_GOOD_SECONDS}s threshold"
        )
        output.recommendations.append("Inline critical CSS and defer render-blocking scripts")

    return output


def score_security_and_accessibility(
    context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]
) -> StageOutput:
    """Sub-scores inferred from which audit issues mention each concern."""
    issues = baseline.technical_seo.issues
    security_hits = sum(1 for i in issues if mentions(f"{i.title} {i.description}", SECURITY_TERMS))
    accessibility_hits = sum(
        1 for i in issues if mentions(f"{i.title} {i.description}", ACCESSIBILITY_TERMS)
    )

    security_score = int(clamp(100 - 25 * security_hits))
    accessibility_score = int(clamp(100 - 15 * accessibility_hits))

    output = StageOutput(data={
        "security_score": security_score,
        "accessibility_score": accessibility_score,
    })
    if security_score < 80:
        output.findings.append(f"Security configuration scores {security_score}/100")
        output.recommendations.append("Serve every page over HTTPS and fix mixed-content warnings")
    if accessibility_score < 80:
        output.findings.append(f"Accessibility scores {accessibility_score}/100")
        output.recommendations.append("Add descriptive alt text and improve colour contrast")
    return output


def score_schema_markup(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    serp = baseline.serp_presence
    schema_issue = any(
        mentions(f"{i.title} {i.description}", SCHEMA_TERMS) for i in baseline.technical_seo.issues
    )

    score = 70
    if schema_issue:
        score -= 30
    if serp.knowledge_panel_found:
        score += 20
    if serp.featured_snippets_found:
        score += 10
    score = int(clamp(score))

    output = StageOutput(data={"schema_markup_score": score})
    if score < 60:
        output.findings.append("Structured data coverage is limited")
        output.recommendations.append(
            f"Add LocalBusiness and Service schema markup describing the {context.business_type}"
        )
    return output


def composite_score(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    parts = {
        "baseline": baseline.technical_seo.score,
        "core_web_vitals": data.get("core_web_vitals_score", 0),
        "security": data.get("security_score", 0),
        "accessibility": data.get("accessibility_score", 0),
        "schema": data.get("schema_markup_score", 0),
    }
    technical_score = round(sum(COMPOSITE_WEIGHTS[name] * value for name, value in parts.items()))

    output = StageOutput(data={"technical_score": int(clamp(technical_score))})
    if technical_score < 60:
        output.findings.append(f"Composite technical health is {technical_score}/100")
    return output


# =============================================================================
# PROMPT
# =============================================================================


PROMPT_TEMPLATE = """Analyze the technical SEO for domain: {domain}

Current Technical Issues:
{issues}

Page Speed Data:
- Mobile Score: {mobile}/100
- Desktop Score: {desktop}/100
- Largest Contentful Paint: {lcp}s
- Cumulative Layout Shift: {cls}
- Page Speed Grade: {page_speed_grade}

Computed Scores:
- Composite Technical Score: {technical_score}/100
- Security: {security_score}/100
- Accessibility: {accessibility_score}/100
- Schema Markup: {schema_markup_score}/100

Business Context: {business_type} in {industry}

Provide:
1. 5 key technical SEO findings (under a "Findings" heading)
2. 5 specific recommendations to improve technical performance (under a "Recommendations" heading)
3. Priority order for implementations

Use one bullet per line."""


def prompt_data(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> Dict[str, Any]:
    speed = baseline.page_speed
    return {
        "issues": bullet_list(f"{i.title}: {i.description}" for i in baseline.technical_seo.issues),
        "mobile": speed.mobile,
        "desktop": speed.desktop,
        "lcp": speed.largest_contentful_paint,
        "cls": speed.cumulative_layout_shift,
        "page_speed_grade": data.get("page_speed_grade", "F"),
        "technical_score": data.get("technical_score", 0),
        "security_score": data.get("security_score", 0),
        "accessibility_score": data.get("accessibility_score", 0),
        "schema_markup_score": data.get("schema_markup_score", 0),
    }


# =============================================================================
# PIPELINE
# =============================================================================


TECHNICAL_SEO_PIPELINE = AgentPipeline(
    agent_type=AgentType.TECHNICAL_SEO,
    display_name="Technical SEO",
    stages=(
        Stage("issue_triage", 25, triage_issues),
        Stage("core_web_vitals", 40, score_core_web_vitals),
        Stage("security_accessibility", 55, score_security_and_accessibility),
        Stage("schema_markup", 65, score_schema_markup),
        Stage("composite_score", 75, composite_score),
    ),
    prompt_template=PROMPT_TEMPLATE,
    prompt_data=prompt_data,
    vocabulary=SectionVocabulary(("finding",), ("recommendation",)),
)
