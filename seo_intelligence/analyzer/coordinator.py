"""
Multi-Agent Coordinator

Fans the six analysis agents out concurrently and joins them:

    run_all(context, baseline)
    ├── create one agent per AgentType
    ├── asyncio.gather over every agent (no short-circuit)
    └── return results in agent registry order

Agents never raise, so one failure never cancels its siblings. An optional
per-agent timeout turns a hung agent into a failed result.
"""

import asyncio
import logging
from typing import List, Optional

from ..agents import AnalysisAgent, create_agent, get_all_agent_types
from ..models import AgentResult, AgentStatus, BaselineMetrics, BusinessContext
from ..utils.config import get_settings
from .client import TextGenerator

logger = logging.getLogger(__name__)


AGENT_COUNT = len(get_all_agent_types())


class MultiAgentCoordinator:
    """
    Runs every agent against one context and baseline.

    Usage:
        coordinator = MultiAgentCoordinator(generator)
        results = await coordinator.run_all(context, baseline)
        coordinator.aggregate_status(results)    # AgentStatus.COMPLETED
        coordinator.aggregate_progress(results)  # 100

    While run_all is in flight, `results` exposes the live AgentResult of
    each agent so pollers can report progress.
    """

    def __init__(self, generator: TextGenerator, agent_timeout: Optional[float] = None):
        self.generator = generator
        if agent_timeout is None:
            agent_timeout = get_settings().AGENT_TIMEOUT
        # 0 or negative disables the timeout
        self.agent_timeout = agent_timeout if agent_timeout and agent_timeout > 0 else None
        self.agents: List[AnalysisAgent] = []

    @property
    def results(self) -> List[AgentResult]:
        return [agent.result for agent in self.agents]

    async def run_all(self, context: BusinessContext, baseline: BaselineMetrics) -> List[AgentResult]:
        """Run all agents concurrently; returns one result per agent, terminal."""
        self.agents = [
            create_agent(agent_type, context, baseline, self.generator)
            for agent_type in get_all_agent_types()
        ]
        logger.info(f"Running {len(self.agents)} agents for {context.domain or 'site'}")

        results = await asyncio.gather(*(self._run_agent_safe(agent) for agent in self.agents))

        failed = [r.agent_type.value for r in results if r.status == AgentStatus.FAILED]
        if failed:
            logger.warning(f"{len(failed)} agent(s) failed: {', '.join(failed)}")
        logger.info(f"All agents finished: {self.aggregate_status(results).value}")
        return list(results)

    async def _run_agent_safe(self, agent: AnalysisAgent) -> AgentResult:
        """Run an agent, converting a timeout into a failed result."""
        if self.agent_timeout is None:
            return await agent.analyze()

        try:
            return await asyncio.wait_for(agent.analyze(), timeout=self.agent_timeout)
        except asyncio.TimeoutError:
            logger.error(f"[{agent.name}] Timed out after {self.agent_timeout}s")
            result = agent.result
            if not result.status.is_terminal:
                result.fail(f"Agent timed out after {self.agent_timeout}s")
            return result

    # =========================================================================
    # AGGREGATION
    # =========================================================================

    @staticmethod
    def aggregate_progress(results: List[AgentResult]) -> int:
        """Mean progress over all six agents; absent agents count as 0."""
        if not results:
            return 0
        return round(sum(r.progress for r in results) / AGENT_COUNT)

    @staticmethod
    def aggregate_status(results: List[AgentResult]) -> AgentStatus:
        """Any failure wins, then any unfinished agent; otherwise completed."""
        if not results:
            return AgentStatus.PENDING

        statuses = {r.status for r in results}
        if AgentStatus.FAILED in statuses:
            return AgentStatus.FAILED
        if AgentStatus.RUNNING in statuses or AgentStatus.PENDING in statuses:
            return AgentStatus.RUNNING
        return AgentStatus.COMPLETED
