"""
Output Parsing for Model Responses

Two contracts for turning free text into structure:
- InsightExtractor: section-aware bullet extraction into findings and
  recommendations (used by every agent)
- extract_json_array / extract_json_object: tolerant JSON extraction for the
  plan generator, which asks the model for JSON but cannot rely on getting it

Both are heuristics over non-deterministic text. Callers are expected to
degrade to deterministic fallbacks when nothing usable comes back.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import OutputParseError

logger = logging.getLogger(__name__)


# =============================================================================
# INSIGHT EXTRACTION
# =============================================================================

FINDINGS = "findings"
RECOMMENDATIONS = "recommendations"

BULLET_PATTERN = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")
_IS_BULLET = re.compile(r"^\s*(?:[-*•]\s|-|\d+[.)])")


@dataclass(frozen=True)
class SectionVocabulary:
    """
    Words that switch the active section.

    A line containing any finding word activates findings; otherwise a line
    containing any recommendation word activates recommendations. Matching
    is case-insensitive substring matching.
    """
    finding_words: Tuple[str, ...] = ("finding",)
    recommendation_words: Tuple[str, ...] = ("recommendation",)
    min_length: int = 0  # bullet text must be strictly longer than this


DEFAULT_VOCABULARY = SectionVocabulary()


@dataclass
class ExtractedInsights:
    findings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.findings) + len(self.recommendations)


class InsightExtractor:
    """
    Extracts ordered finding and recommendation lists from free text.

    Usage:
        extractor = InsightExtractor(SectionVocabulary(("gap", "finding"), ("recommendation",)))
        insights = extractor.extract(model_output)
        insights.findings        # ["Missing service pages", ...]
        insights.recommendations # ["Create a page per service", ...]

    Each call starts with no active section, so bullets that appear before
    the first recognised header are dropped.
    """

    def __init__(self, vocabulary: Optional[SectionVocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._finding_words = tuple(w.lower() for w in self.vocabulary.finding_words)
        self._recommendation_words = tuple(w.lower() for w in self.vocabulary.recommendation_words)

    def extract(self, text: str) -> ExtractedInsights:
        insights = ExtractedInsights()
        if not text:
            return insights

        active: Optional[str] = None
        dropped = 0

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line:
                continue

            section = self._section_for(line)
            if section:
                active = section
                continue

            if not _IS_BULLET.match(line):
                continue

            content = self.clean_bullet(line)
            if len(content) <= self.vocabulary.min_length:
                continue

            if active == FINDINGS:
                insights.findings.append(content)
            elif active == RECOMMENDATIONS:
                insights.recommendations.append(content)
            else:
                dropped += 1

        if dropped:
            logger.debug(f"Dropped {dropped} bullet lines before first section header")

        return insights

    def _section_for(self, line: str) -> Optional[str]:
        lowered = line.lower()
        if any(word in lowered for word in self._finding_words):
            return FINDINGS
        if any(word in lowered for word in self._recommendation_words):
            return RECOMMENDATIONS
        return None

    @staticmethod
    def clean_bullet(line: str) -> str:
        """Strip the leading bullet or number marker."""
        return BULLET_PATTERN.sub("", line, count=1).strip()


# =============================================================================
# JSON EXTRACTION
# =============================================================================

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*\n?|```\s*\n?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences the model wraps around JSON."""
    return _FENCE_PATTERN.sub("", text or "").strip()


def _extract_between(text: str, opening: str, closing: str) -> Any:
    cleaned = strip_code_fences(text)
    start = cleaned.find(opening)
    end = cleaned.rfind(closing)

    if start == -1 or end == -1 or end < start:
        raise OutputParseError(f"No JSON {opening}...{closing} block found", raw_output=text)

    candidate = cleaned[start:end + 1]
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise OutputParseError(f"Invalid JSON: {e}", raw_output=text) from e


def extract_json_array(text: str) -> List[Any]:
    """
    Parse the outermost JSON array in model output.

    Raises:
        OutputParseError: If no array can be found or decoded
    """
    parsed = _extract_between(text, "[", "]")
    if not isinstance(parsed, list):
        raise OutputParseError("Expected a JSON array", raw_output=text)
    return parsed


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the outermost JSON object in model output.

    Raises:
        OutputParseError: If no object can be found or decoded
    """
    parsed = _extract_between(text, "{", "}")
    if not isinstance(parsed, dict):
        raise OutputParseError("Expected a JSON object", raw_output=text)
    return parsed
