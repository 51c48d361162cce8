"""
Analysis Agents

Six agents, one per analysis facet, all run by the same AnalysisAgent
runner. Each facet is an AgentPipeline record registered in AGENT_PIPELINES.

Usage:
    from seo_intelligence.agents import create_agent
    from seo_intelligence.models import AgentType

    agent = create_agent(AgentType.TECHNICAL_SEO, context, baseline, generator)
    result = await agent.analyze()
"""

from typing import Dict, List, TYPE_CHECKING, Union

from ..exceptions import UnknownAgentTypeError
from ..models import AgentType, BaselineMetrics, BusinessContext
from .base import AgentPipeline, AnalysisAgent, Stage, StageOutput
from .technical_seo import TECHNICAL_SEO_PIPELINE
from .content_analysis import CONTENT_ANALYSIS_PIPELINE
from .competitor_intelligence import COMPETITOR_INTELLIGENCE_PIPELINE
from .keyword_research import KEYWORD_RESEARCH_PIPELINE
from .serp_analysis import SERP_ANALYSIS_PIPELINE
from .user_experience import USER_EXPERIENCE_PIPELINE

if TYPE_CHECKING:
    from ..analyzer.client import TextGenerator


# Agent registry, in run order
AGENT_PIPELINES: Dict[AgentType, AgentPipeline] = {
    AgentType.TECHNICAL_SEO: TECHNICAL_SEO_PIPELINE,
    AgentType.CONTENT_ANALYSIS: CONTENT_ANALYSIS_PIPELINE,
    AgentType.COMPETITOR_INTELLIGENCE: COMPETITOR_INTELLIGENCE_PIPELINE,
    AgentType.KEYWORD_RESEARCH: KEYWORD_RESEARCH_PIPELINE,
    AgentType.SERP_ANALYSIS: SERP_ANALYSIS_PIPELINE,
    AgentType.USER_EXPERIENCE: USER_EXPERIENCE_PIPELINE,
}


def get_pipeline(agent_type: Union[AgentType, str]) -> AgentPipeline:
    """Look up a pipeline by tag, accepting the enum or its string value."""
    try:
        return AGENT_PIPELINES[AgentType(agent_type)]
    except (ValueError, KeyError):
        raise UnknownAgentTypeError(f"Unknown agent type: {agent_type}") from None


def create_agent(
    agent_type: Union[AgentType, str],
    context: BusinessContext,
    baseline: BaselineMetrics,
    generator: "TextGenerator",
) -> AnalysisAgent:
    """Create an agent instance for the given tag."""
    return AnalysisAgent(get_pipeline(agent_type), context, baseline, generator)


def get_all_agent_types() -> List[AgentType]:
    return list(AGENT_PIPELINES.keys())


__all__ = [
    "AgentPipeline",
    "AnalysisAgent",
    "Stage",
    "StageOutput",
    "AGENT_PIPELINES",
    "get_pipeline",
    "create_agent",
    "get_all_agent_types",
]
