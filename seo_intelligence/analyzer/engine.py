"""
Analysis Engine

Runs one complete analysis and maintains its ComprehensiveAnalysis record:

    run(run_id, context, baseline)
    ├── 10%      record created, status running
    ├── 10-60%   six agents run concurrently (progress follows the agents)
    ├── 70%      action plan generated
    ├── 85%      competitive intelligence and content strategy generated
    └── 100%     progress tracking added, status terminal

The record is saved to the run store at every milestone so pollers can read
status and progress by run id while the run is in flight.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from ..models import AgentStatus, BaselineMetrics, BusinessContext, ComprehensiveAnalysis
from ..persistence import AnalysisRunStore
from ..planner import ActionPlanGenerator
from .client import TextGenerator
from .coordinator import MultiAgentCoordinator

logger = logging.getLogger(__name__)


START_PROGRESS = 10
AGENTS_DONE_PROGRESS = 60
STEP_PROGRESS = {
    "action_plan": 70,
    "intelligence": 85,
}


class AnalysisEngine:
    """
    Orchestrates agents and plan synthesis for one run at a time.

    Usage:
        engine = AnalysisEngine(ClaudeClient())
        analysis = await engine.run(run_id, context, baseline)
        analysis.status          # AgentStatus.COMPLETED
        analysis.action_plan     # ActionPlan
    """

    def __init__(
        self,
        generator: TextGenerator,
        store: Optional[AnalysisRunStore] = None,
        agent_timeout: Optional[float] = None,
        poll_interval: float = 0.5,
    ):
        """
        Args:
            generator: Text generator shared by agents and the plan generator
            store: Run registry; a private one is created when omitted
            agent_timeout: Per-agent timeout in seconds (defaults to settings)
            poll_interval: How often agent progress is copied into the record
        """
        self.generator = generator
        self.store = store if store is not None else AnalysisRunStore()
        self.agent_timeout = agent_timeout
        self.poll_interval = poll_interval

    async def run(
        self,
        run_id: str,
        context: BusinessContext,
        baseline: BaselineMetrics,
    ) -> ComprehensiveAnalysis:
        """
        Execute the full pipeline. Never raises; failures end up in the
        record's status and error. A run id whose record is already terminal
        is returned unchanged.
        """
        analysis = self.store.get(run_id)
        if analysis is None:
            analysis = self.store.create(run_id, context.domain)
        elif analysis.is_terminal:
            logger.warning(f"Run {run_id} already {analysis.status.value}, not re-running")
            return analysis

        analysis.domain = context.domain
        analysis.basic_analysis = baseline
        analysis.status = AgentStatus.RUNNING
        self._update(analysis, START_PROGRESS)

        logger.info("=" * 60)
        logger.info(f"Comprehensive analysis {run_id} for {context.domain or 'site'}")
        logger.info("=" * 60)

        try:
            coordinator = MultiAgentCoordinator(self.generator, agent_timeout=self.agent_timeout)
            results = await self._run_agents(coordinator, analysis, context, baseline)
            analysis.agent_results = results
            agent_status = coordinator.aggregate_status(results)
            self._update(analysis, AGENTS_DONE_PROGRESS)

            planner = ActionPlanGenerator(context, baseline, results, self.generator)
            report = await planner.generate_all(
                on_step=lambda step: self._update(analysis, STEP_PROGRESS[step])
            )

            analysis.action_plan = report.action_plan
            analysis.competitive_intelligence = report.competitive_intelligence
            analysis.content_strategy = report.content_strategy
            analysis.progress_tracking = report.progress_tracking

            if agent_status == AgentStatus.FAILED:
                failed = [r.agent_type.value for r in results if r.status == AgentStatus.FAILED]
                analysis.status = AgentStatus.FAILED
                analysis.error = f"Agents failed: {', '.join(failed)}"
                logger.warning(f"Run {run_id} finished with failed agents: {', '.join(failed)}")
            else:
                analysis.status = AgentStatus.COMPLETED
                logger.info(f"Run {run_id} completed (score {report.action_plan.overall_score}/100)")

            analysis.completed_at = datetime.now()
            self._update(analysis, 100)

        except Exception as e:
            logger.error(f"Run {run_id} failed: {e}", exc_info=True)
            analysis.status = AgentStatus.FAILED
            analysis.error = str(e) or type(e).__name__
            analysis.completed_at = datetime.now()
            analysis.progress = 0
            self.store.save(analysis)

        return analysis

    async def _run_agents(
        self,
        coordinator: MultiAgentCoordinator,
        analysis: ComprehensiveAnalysis,
        context: BusinessContext,
        baseline: BaselineMetrics,
    ):
        """Run the agents, copying their aggregate progress into the record."""
        task = asyncio.ensure_future(coordinator.run_all(context, baseline))

        while not task.done():
            await asyncio.wait({task}, timeout=self.poll_interval)
            live = coordinator.results
            analysis.agent_results = live
            span = AGENTS_DONE_PROGRESS - START_PROGRESS
            self._update(analysis, START_PROGRESS + span * coordinator.aggregate_progress(live) // 100)

        return task.result()

    def _update(self, analysis: ComprehensiveAnalysis, progress: int) -> None:
        # Agent progress can drop to 0 on failure; the run's progress never goes back
        analysis.progress = max(analysis.progress, progress)
        self.store.save(analysis)
