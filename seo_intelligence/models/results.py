"""
Agent Result Model

AgentResult is the unit the coordinator aggregates. Status moves one way:

    pending -> running -> completed
                       -> failed

Progress is non-decreasing while running and is reset to 0 on failure.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..exceptions import InvalidTransitionError


class AgentType(str, Enum):
    """The six analysis facets."""
    TECHNICAL_SEO = "technical_seo"
    CONTENT_ANALYSIS = "content_analysis"
    COMPETITOR_INTELLIGENCE = "competitor_intelligence"
    KEYWORD_RESEARCH = "keyword_research"
    SERP_ANALYSIS = "serp_analysis"
    USER_EXPERIENCE = "user_experience"


class AgentStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AgentStatus.COMPLETED, AgentStatus.FAILED)


_ALLOWED_TRANSITIONS = {
    AgentStatus.PENDING: {AgentStatus.RUNNING, AgentStatus.FAILED},
    AgentStatus.RUNNING: {AgentStatus.COMPLETED, AgentStatus.FAILED},
    AgentStatus.COMPLETED: set(),
    AgentStatus.FAILED: set(),
}


@dataclass
class AgentResult:
    """Output of one agent run, owned by its agent until terminal."""
    agent_type: AgentType
    status: AgentStatus = AgentStatus.PENDING
    progress: int = 0
    findings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def _transition(self, status: AgentStatus) -> None:
        if status not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"[{self.agent_type.value}] Cannot move from {self.status.value} to {status.value}"
            )
        self.status = status

    def start(self) -> None:
        self._transition(AgentStatus.RUNNING)
        self.start_time = datetime.now()

    def advance(self, progress: int) -> None:
        """Move progress forward; values below the current progress are ignored."""
        if self.status != AgentStatus.RUNNING:
            raise InvalidTransitionError(
                f"[{self.agent_type.value}] Cannot advance progress while {self.status.value}"
            )
        self.progress = max(self.progress, min(int(progress), 100))

    def complete(self) -> None:
        self._transition(AgentStatus.COMPLETED)
        self.progress = 100
        self.end_time = datetime.now()

    def fail(self, error: str) -> None:
        self._transition(AgentStatus.FAILED)
        self.error = error or "Unknown error"
        self.progress = 0
        self.end_time = datetime.now()

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "agent_type": self.agent_type.value,
            "status": self.status.value,
            "progress": self.progress,
            "findings": list(self.findings),
            "recommendations": list(self.recommendations),
            "data": dict(self.data),
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None,
        }
        if self.error is not None:
            result["error"] = self.error
        return result
