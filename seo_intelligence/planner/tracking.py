"""
Progress Tracking

Milestones scheduled relative to the plan date, and KPI targets derived
from the baseline. Fully deterministic; no generative calls.
"""

from datetime import date, timedelta
from typing import List, Optional

from ..models import (
    ActionItem,
    BaselineMetrics,
    Category,
    KPI,
    Milestone,
    ProgressTracking,
    Timeframe,
)


QUICK_WIN_MILESTONE_ITEMS = 3

DEFAULT_SEO_SCORE = 60
DEFAULT_MOBILE_SCORE = 70
DEFAULT_KEYWORD_COUNT = 5
DEFAULT_TECHNICAL_SCORE = 75


def _due(today: date, days: int) -> str:
    return (today + timedelta(days=days)).isoformat()


def generate_milestones(items: List[ActionItem], today: Optional[date] = None) -> List[Milestone]:
    today = today or date.today()
    near_term = [
        item.id for item in items
        if item.timeframe in (Timeframe.IMMEDIATE, Timeframe.THIS_WEEK)
    ]

    return [
        Milestone(
            title="Quick Wins Implementation",
            due_date=_due(today, 7),
            action_item_ids=near_term[:QUICK_WIN_MILESTONE_ITEMS],
        ),
        Milestone(
            title="Technical SEO Improvements",
            due_date=_due(today, 21),
            action_item_ids=[item.id for item in items if item.category == Category.TECHNICAL],
        ),
        Milestone(
            title="Content Strategy Launch",
            due_date=_due(today, 30),
            action_item_ids=[item.id for item in items if item.category == Category.CONTENT],
        ),
        Milestone(
            title="Comprehensive SEO Optimization",
            due_date=_due(today, 90),
            action_item_ids=[item.id for item in items],
        ),
    ]


def generate_kpis(baseline: BaselineMetrics) -> List[KPI]:
    seo_score = baseline.seo_score or DEFAULT_SEO_SCORE
    mobile = baseline.page_speed.mobile or DEFAULT_MOBILE_SCORE
    keyword_count = len(baseline.keywords) or DEFAULT_KEYWORD_COUNT

    return [
        KPI("Overall SEO Score", seo_score, min(seo_score + 25, 90), "3 months"),
        KPI("Mobile Speed Score", mobile, min(mobile + 15, 95), "1 month"),
        # Starting from zero top-10 rankings
        KPI("Keyword Rankings (Top 10)", 0, min(keyword_count * 2, 15), "3 months"),
        KPI("Organic Traffic Increase (%)", 0, 50, "6 months"),
        KPI("Technical SEO Score", baseline.technical_seo.score or DEFAULT_TECHNICAL_SCORE, 95, "2 months"),
    ]


def generate_progress_tracking(
    items: List[ActionItem],
    baseline: BaselineMetrics,
    today: Optional[date] = None,
) -> ProgressTracking:
    return ProgressTracking(
        milestones=generate_milestones(items, today),
        kpis=generate_kpis(baseline),
    )
