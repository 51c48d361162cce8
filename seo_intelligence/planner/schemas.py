"""
Payload schemas for generated JSON.

The model is asked for camelCase JSON; these pydantic models validate its
shape before anything is copied into the plan records. A ValidationError
sends the caller to its deterministic fallback.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import TopicPriority


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CompetitiveIntelligencePayload(_Payload):
    market_position: Optional[str] = Field(default=None, alias="marketPosition")
    competitive_advantages: List[str] = Field(default_factory=list, alias="competitiveAdvantages")
    competitive_gaps: List[str] = Field(default_factory=list, alias="competitiveGaps")
    opportunity_areas: List[str] = Field(default_factory=list, alias="opportunityAreas")


class TopicClusterPayload(_Payload):
    topic: str
    keywords: List[str] = Field(default_factory=list)
    priority: TopicPriority = TopicPriority.MEDIUM

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, value):
        """Unknown priorities become medium instead of failing the payload."""
        if isinstance(value, str) and value.lower() in {p.value for p in TopicPriority}:
            return value.lower()
        return TopicPriority.MEDIUM


class CalendarEntryPayload(_Payload):
    week: str
    content_type: str = Field(alias="contentType")
    topic: str
    target_keyword: str = Field(default="", alias="targetKeyword")


class ContentStrategyPayload(_Payload):
    content_gaps: List[str] = Field(default_factory=list, alias="contentGaps")
    topic_clusters: List[TopicClusterPayload] = Field(default_factory=list, alias="topicClusters")
    content_calendar: List[CalendarEntryPayload] = Field(default_factory=list, alias="contentCalendar")
