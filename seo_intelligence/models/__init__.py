"""
Data models shared across the engine.

Inputs (BusinessContext, BaselineMetrics) are frozen; AgentResult and the
plan records are built up during one run.
"""

from .context import (
    BusinessContext,
    BaselineMetrics,
    TechnicalSEO,
    TechnicalIssue,
    PageSpeed,
    KeywordMetric,
    CompetitorMetric,
    SERPPresence,
    MarketPosition,
)
from .results import AgentType, AgentStatus, AgentResult
from .plan import (
    Priority,
    Impact,
    Effort,
    Category,
    Timeframe,
    MilestoneStatus,
    TopicPriority,
    ActionItem,
    ActionPlan,
    BenchmarkScores,
    CompetitiveIntelligence,
    TopicCluster,
    CalendarEntry,
    ContentStrategy,
    Milestone,
    KPI,
    ProgressTracking,
    ComprehensiveAnalysis,
)

__all__ = [
    # Inputs
    "BusinessContext",
    "BaselineMetrics",
    "TechnicalSEO",
    "TechnicalIssue",
    "PageSpeed",
    "KeywordMetric",
    "CompetitorMetric",
    "SERPPresence",
    "MarketPosition",
    # Agent results
    "AgentType",
    "AgentStatus",
    "AgentResult",
    # Plan
    "Priority",
    "Impact",
    "Effort",
    "Category",
    "Timeframe",
    "MilestoneStatus",
    "TopicPriority",
    "ActionItem",
    "ActionPlan",
    "BenchmarkScores",
    "CompetitiveIntelligence",
    "TopicCluster",
    "CalendarEntry",
    "ContentStrategy",
    "Milestone",
    "KPI",
    "ProgressTracking",
    "ComprehensiveAnalysis",
]
