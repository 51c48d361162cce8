"""
Agent Runner for the SEO Intelligence Engine

Every agent kind is described by an AgentPipeline record rather than a
subclass. One AnalysisAgent runner executes any pipeline:

    AnalysisAgent(pipeline, context, baseline, generator)
    ├── deterministic stages (pure functions of context + baseline)
    │     each merges findings, recommendations and data, then
    │     advances progress to its checkpoint
    └── insight stage (one generate_text call)
          prompt built from context + accumulated stage data,
          parsed by the shared InsightExtractor

analyze() never raises. Any failure becomes a terminal `failed` AgentResult
with progress reset to 0 and the message in `error`.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from ..models import AgentResult, AgentType, BaselineMetrics, BusinessContext
from ..output import InsightExtractor, SectionVocabulary
from ..utils.config import get_settings

if TYPE_CHECKING:
    from ..analyzer.client import TextGenerator

logger = logging.getLogger(__name__)


# ============================================================================
# PIPELINE DEFINITION
# ============================================================================

@dataclass
class StageOutput:
    """What one deterministic stage contributes to the result."""
    findings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)


# (context, baseline, data accumulated so far) -> StageOutput
StageFn = Callable[[BusinessContext, BaselineMetrics, Dict[str, Any]], StageOutput]
PromptDataFn = Callable[[BusinessContext, BaselineMetrics, Dict[str, Any]], Dict[str, Any]]


@dataclass(frozen=True)
class Stage:
    name: str
    progress: int
    run: StageFn


@dataclass(frozen=True)
class AgentPipeline:
    """
    Complete description of one agent kind.

    Attributes:
        agent_type: Tag identifying the facet
        display_name: Human-readable name
        stages: Ordered deterministic stages with strictly increasing progress
        prompt_template: Template with {placeholders} for the insight stage
        prompt_data: Builds placeholder values from context and stage data
        vocabulary: Section words for the InsightExtractor
        max_tokens: Token budget for the generate_text call (None: settings)
        max_insights: Cap applied to findings and recommendations (None: settings)
        fallback: When set, replaces AI insights if the generate_text call
            fails; when None, the failure fails the agent
    """
    agent_type: AgentType
    display_name: str
    stages: Tuple[Stage, ...]
    prompt_template: str
    prompt_data: PromptDataFn
    vocabulary: SectionVocabulary
    max_tokens: Optional[int] = None
    max_insights: Optional[int] = None
    fallback: Optional[StageFn] = None

    @property
    def name(self) -> str:
        return self.agent_type.value

    @property
    def fallback_on_ai_error(self) -> bool:
        return self.fallback is not None


# Progress checkpoints shared by all pipelines
START_PROGRESS = 10
INSIGHT_PROGRESS = 90


# ============================================================================
# RUNNER
# ============================================================================

class AnalysisAgent:
    """
    Runs one AgentPipeline against a business context and baseline.

    The agent owns its AgentResult until analyze() returns; the coordinator
    may read `result` while the agent is running to report progress.
    """

    def __init__(
        self,
        pipeline: AgentPipeline,
        context: BusinessContext,
        baseline: BaselineMetrics,
        generator: "TextGenerator",
    ):
        self.pipeline = pipeline
        self.context = context
        self.baseline = baseline
        self.generator = generator
        self.extractor = InsightExtractor(pipeline.vocabulary)
        self.result = AgentResult(agent_type=pipeline.agent_type)

        settings = get_settings()
        self.max_tokens = pipeline.max_tokens or settings.AGENT_MAX_TOKENS
        self.max_insights = pipeline.max_insights or settings.MAX_INSIGHTS

    @property
    def name(self) -> str:
        return self.pipeline.name

    @property
    def agent_type(self) -> AgentType:
        return self.pipeline.agent_type

    async def analyze(self) -> AgentResult:
        """Run every stage and return the terminal AgentResult."""
        result = self.result
        logger.info(f"[{self.name}] Starting analysis...")

        try:
            result.start()
            result.advance(START_PROGRESS)

            findings: List[str] = []
            recommendations: List[str] = []
            data: Dict[str, Any] = {}

            for stage in self.pipeline.stages:
                output = stage.run(self.context, self.baseline, data)
                findings.extend(output.findings)
                recommendations.extend(output.recommendations)
                data.update(output.data)
                result.advance(stage.progress)
                logger.debug(f"[{self.name}] Stage {stage.name} done ({stage.progress}%)")

            insight = await self._run_insight_stage(data)
            findings.extend(insight.findings)
            recommendations.extend(insight.recommendations)
            data.update(insight.data)
            result.advance(INSIGHT_PROGRESS)

            # AI insights were appended last, so truncation drops them first
            cap = self.max_insights
            result.findings = findings[:cap]
            result.recommendations = recommendations[:cap]
            result.data = data
            result.complete()

            logger.info(
                f"[{self.name}] Complete. {len(result.findings)} findings, "
                f"{len(result.recommendations)} recommendations"
            )

        except Exception as e:
            logger.error(f"[{self.name}] Analysis failed: {e}")
            if not result.status.is_terminal:
                result.fail(str(e) or type(e).__name__)

        return result

    async def _run_insight_stage(self, data: Dict[str, Any]) -> StageOutput:
        """Call the text generator and extract insights from its output."""
        prompt = self.build_prompt(data)

        try:
            text = await self.generator.generate_text(prompt, self.max_tokens)
        except Exception as e:
            if not self.pipeline.fallback_on_ai_error:
                raise
            logger.warning(f"[{self.name}] AI insight call failed, using fallback insights: {e}")
            fallback = self.pipeline.fallback(self.context, self.baseline, data)
            fallback.data.setdefault("ai_insights", False)
            return fallback

        insights = self.extractor.extract(text)
        logger.debug(
            f"[{self.name}] Extracted {len(insights.findings)} findings, "
            f"{len(insights.recommendations)} recommendations from AI output"
        )
        return StageOutput(
            findings=insights.findings,
            recommendations=insights.recommendations,
            data={"ai_insights": True},
        )

    def build_prompt(self, data: Dict[str, Any]) -> str:
        """Interpolate context and stage data into the pipeline's template."""
        prompt_data = {
            "domain": self.context.domain or "the website",
            "business_type": self.context.business_type,
            "industry": self.context.industry,
            "location": self.context.location,
            "products": ", ".join(self.context.products) or "not specified",
            "services": ", ".join(self.context.services) or "not specified",
        }
        prompt_data.update(self.pipeline.prompt_data(self.context, self.baseline, data))
        return self.pipeline.prompt_template.format_map(SafeDict(prompt_data))


# ============================================================================
# SHARED SCORING HELPERS
# ============================================================================

# Core Web Vitals "good" thresholds
LCP_GOOD_SECONDS = 2.5
LCP_POOR_SECONDS = 4.0
CLS_GOOD = 0.1
CLS_POOR = 0.25
FCP_GOOD_SECONDS = 1.8
FCP_POOR_SECONDS = 3.0


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(value, high))


def letter_grade(score: float) -> str:
    """A-F grade on the usual 90/80/70/60 bands."""
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= 70:
        return "C"
    if score >= 60:
        return "D"
    return "F"


def threshold_score(value: float, good: float, poor: float) -> int:
    """100 at or under `good`, 0 at or over `poor`, linear in between."""
    if value <= good:
        return 100
    if value >= poor:
        return 0
    return round(100 * (poor - value) / (poor - good))


def mentions(text: str, terms: Tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(term in lowered for term in terms)


def bullet_list(items, empty: str = "- None") -> str:
    lines = [f"- {item}" for item in items]
    return "\n".join(lines) if lines else empty


# ============================================================================
# HELPER CLASSES
# ============================================================================

class SafeDict(dict):
    """Dict that returns placeholder for missing keys during format."""

    def __missing__(self, key):
        return f"{{{key}}}"
