"""
Plan Models

Strictly-typed records produced by the plan generator, and the
ComprehensiveAnalysis root that external pollers read by run id.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .context import BaselineMetrics
from .results import AgentResult, AgentStatus


# =============================================================================
# ENUMS
# =============================================================================


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Effort(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Category(str, Enum):
    TECHNICAL = "technical"
    CONTENT = "content"
    KEYWORDS = "keywords"
    COMPETITORS = "competitors"
    USER_EXPERIENCE = "user_experience"
    LOCAL_SEO = "local_seo"


class Timeframe(str, Enum):
    """Ordered from nearest to furthest."""
    IMMEDIATE = "immediate"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    NEXT_QUARTER = "next_quarter"


class MilestoneStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TopicPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# ACTION PLAN
# =============================================================================


@dataclass
class ActionItem:
    """A structured, scheduled, prioritized unit of the action plan."""
    id: str
    title: str
    description: str
    priority: Priority
    impact: Impact
    effort: Effort
    category: Category
    timeframe: Timeframe
    steps: List[str]
    expected_improvement: str
    tools: Optional[List[str]] = None
    # Advisory only; not a scheduling graph, so cycles are not checked
    dependencies: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "impact": self.impact.value,
            "effort": self.effort.value,
            "category": self.category.value,
            "timeframe": self.timeframe.value,
            "steps": list(self.steps),
            "tools": list(self.tools) if self.tools is not None else None,
            "expected_improvement": self.expected_improvement,
            "dependencies": list(self.dependencies) if self.dependencies is not None else None,
        }


@dataclass
class ActionPlan:
    summary: str = ""
    overall_score: int = 0
    potential_improvement: int = 0
    timeline: str = ""
    items: List[ActionItem] = field(default_factory=list)
    quick_wins: List[str] = field(default_factory=list)
    long_term_goals: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary,
            "overall_score": self.overall_score,
            "potential_improvement": self.potential_improvement,
            "timeline": self.timeline,
            "items": [item.to_dict() for item in self.items],
            "quick_wins": list(self.quick_wins),
            "long_term_goals": list(self.long_term_goals),
        }


# =============================================================================
# COMPETITIVE INTELLIGENCE
# =============================================================================


@dataclass
class BenchmarkScores:
    content: int = 0
    technical: int = 0
    authority: int = 0
    user_experience: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "content": self.content,
            "technical": self.technical,
            "authority": self.authority,
            "user_experience": self.user_experience,
        }


@dataclass
class CompetitiveIntelligence:
    market_position: str = ""
    competitive_advantages: List[str] = field(default_factory=list)
    competitive_gaps: List[str] = field(default_factory=list)
    opportunity_areas: List[str] = field(default_factory=list)
    benchmark_scores: BenchmarkScores = field(default_factory=BenchmarkScores)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "market_position": self.market_position,
            "competitive_advantages": list(self.competitive_advantages),
            "competitive_gaps": list(self.competitive_gaps),
            "opportunity_areas": list(self.opportunity_areas),
            "benchmark_scores": self.benchmark_scores.to_dict(),
        }


# =============================================================================
# CONTENT STRATEGY
# =============================================================================


@dataclass
class TopicCluster:
    topic: str
    keywords: List[str]
    priority: TopicPriority = TopicPriority.MEDIUM


@dataclass
class CalendarEntry:
    week: str
    content_type: str
    topic: str
    target_keyword: str


@dataclass
class ContentStrategy:
    content_gaps: List[str] = field(default_factory=list)
    topic_clusters: List[TopicCluster] = field(default_factory=list)
    content_calendar: List[CalendarEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content_gaps": list(self.content_gaps),
            "topic_clusters": [
                {"topic": c.topic, "keywords": list(c.keywords), "priority": c.priority.value}
                for c in self.topic_clusters
            ],
            "content_calendar": [
                {
                    "week": e.week,
                    "content_type": e.content_type,
                    "topic": e.topic,
                    "target_keyword": e.target_keyword,
                }
                for e in self.content_calendar
            ],
        }


# =============================================================================
# PROGRESS TRACKING
# =============================================================================


@dataclass
class Milestone:
    title: str
    due_date: str  # ISO date, YYYY-MM-DD
    status: MilestoneStatus = MilestoneStatus.NOT_STARTED
    action_item_ids: List[str] = field(default_factory=list)


@dataclass
class KPI:
    metric: str
    current: float
    target: float
    timeframe: str


@dataclass
class ProgressTracking:
    milestones: List[Milestone] = field(default_factory=list)
    kpis: List[KPI] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "milestones": [
                {
                    "title": m.title,
                    "due_date": m.due_date,
                    "status": m.status.value,
                    "action_item_ids": list(m.action_item_ids),
                }
                for m in self.milestones
            ],
            "kpis": [
                {"metric": k.metric, "current": k.current, "target": k.target, "timeframe": k.timeframe}
                for k in self.kpis
            ],
        }


# =============================================================================
# ROOT AGGREGATE
# =============================================================================


@dataclass
class ComprehensiveAnalysis:
    """
    Root record of one analysis run.

    Mutated only by the coordinator (agent results, status, progress) and the
    plan generator (the four sub-reports). Read-only once terminal.
    """
    id: str
    domain: str = ""
    status: AgentStatus = AgentStatus.PENDING
    progress: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    error: Optional[str] = None
    agent_results: List[AgentResult] = field(default_factory=list)
    basic_analysis: Optional[BaselineMetrics] = None
    action_plan: ActionPlan = field(default_factory=ActionPlan)
    competitive_intelligence: CompetitiveIntelligence = field(default_factory=CompetitiveIntelligence)
    content_strategy: ContentStrategy = field(default_factory=ContentStrategy)
    progress_tracking: ProgressTracking = field(default_factory=ProgressTracking)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def agent_result(self, agent_type: str) -> Optional[AgentResult]:
        """Look up a result by its agent tag."""
        for result in self.agent_results:
            if result.agent_type.value == agent_type or result.agent_type == agent_type:
                return result
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "domain": self.domain,
            "status": self.status.value,
            "progress": self.progress,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "agent_results": [r.to_dict() for r in self.agent_results],
            "basic_analysis": self.basic_analysis.to_dict() if self.basic_analysis else None,
            "action_plan": self.action_plan.to_dict(),
            "competitive_intelligence": self.competitive_intelligence.to_dict(),
            "content_strategy": self.content_strategy.to_dict(),
            "progress_tracking": self.progress_tracking.to_dict(),
        }
        if self.error:
            data["error"] = self.error
        return data
