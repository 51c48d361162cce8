"""
User Experience Agent

Rates page experience from the page speed baseline: a UX score, a Core Web
Vitals grade, and mobile readiness. Fails when the AI insight call fails.
"""

from typing import Any, Dict

from ..models import AgentType, BaselineMetrics, BusinessContext, PageSpeed
from ..output import SectionVocabulary
from .base import (
    AgentPipeline,
    CLS_GOOD,
    FCP_GOOD_SECONDS,
    LCP_GOOD_SECONDS,
    Stage,
    StageOutput,
)


MOBILE_READY_SCORE = 70
DEVICE_GAP_WARNING = 20


def calculate_ux_score(speed: PageSpeed) -> float:
    """Mobile score, minus 10 per failing LCP or CLS threshold, floored at 0."""
    score = speed.mobile
    if speed.largest_contentful_paint > LCP_GOOD_SECONDS:
        score -= 10
    if speed.cumulative_layout_shift > CLS_GOOD:
        score -= 10
    return max(score, 0)


def core_web_vitals_grade(speed: PageSpeed) -> str:
    good = sum([
        speed.largest_contentful_paint <= LCP_GOOD_SECONDS,
        speed.cumulative_layout_shift <= CLS_GOOD,
        speed.first_contentful_paint <= FCP_GOOD_SECONDS,
    ])
    return {3: "A", 2: "B", 1: "C"}.get(good, "D")


# =============================================================================
# STAGES
# =============================================================================


def performance_baseline(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    speed = baseline.page_speed
    gap = speed.desktop - speed.mobile
    output = StageOutput(data={
        "mobile_optimization": speed.mobile,
        "desktop_score": speed.desktop,
        "device_gap": gap,
    })
    if gap > DEVICE_GAP_WARNING:
        output.findings.append(
            f"Mobile performance trails desktop by {gap:g} points ({speed.mobile:g} vs {speed.desktop:g})"
        )
    return output


def grade_core_web_vitals(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    grade = core_web_vitals_grade(baseline.page_speed)
    output = StageOutput(data={"core_web_vitals_grade": grade})
    if grade in ("C", "D"):
        output.findings.append(f"Core Web Vitals grade is {grade}")
        output.recommendations.append("Prioritise fixing the failing Core Web Vitals metrics")
    return output


def ux_score(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    return StageOutput(data={"ux_score": calculate_ux_score(baseline.page_speed)})


def mobile_readiness(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> StageOutput:
    ready = baseline.page_speed.mobile >= MOBILE_READY_SCORE
    output = StageOutput(data={"mobile_ready": ready})
    if not ready:
        output.findings.append(f"Mobile score of {baseline.page_speed.mobile:g} is below {MOBILE_READY_SCORE}")
        output.recommendations.append("Optimise images and reduce JavaScript for mobile visitors")
    return output


# =============================================================================
# PROMPT
# =============================================================================


PROMPT_TEMPLATE = """User experience analysis for: {domain}

Performance Metrics:
- Mobile Score: {mobile}/100
- Desktop Score: {desktop}/100
- First Contentful Paint: {fcp}s
- Largest Contentful Paint: {lcp}s
- Cumulative Layout Shift: {cls}
- Core Web Vitals Grade: {grade}

Business Context: {business_type} serving {location}

Analyze and provide:
1. 5 user experience findings (under a "Findings" heading)
2. 5 UX improvement recommendations (under a "Recommendations" heading)
3. Mobile optimization opportunities
4. Performance enhancement strategies

Use one bullet per line."""


def prompt_data(context: BusinessContext, baseline: BaselineMetrics, data: Dict[str, Any]) -> Dict[str, Any]:
    speed = baseline.page_speed
    return {
        "mobile": speed.mobile,
        "desktop": speed.desktop,
        "fcp": speed.first_contentful_paint,
        "lcp": speed.largest_contentful_paint,
        "cls": speed.cumulative_layout_shift,
        "grade": data.get("core_web_vitals_grade", "D"),
    }


# =============================================================================
# PIPELINE
# =============================================================================


USER_EXPERIENCE_PIPELINE = AgentPipeline(
    agent_type=AgentType.USER_EXPERIENCE,
    display_name="User Experience",
    stages=(
        Stage("performance_baseline", 30, performance_baseline),
        Stage("core_web_vitals", 50, grade_core_web_vitals),
        Stage("ux_score", 65, ux_score),
        Stage("mobile_readiness", 75, mobile_readiness),
    ),
    prompt_template=PROMPT_TEMPLATE,
    prompt_data=prompt_data,
    vocabulary=SectionVocabulary(("finding", "experience"), ("recommendation", "improvement")),
)
