"""
Output parsing for model responses.

Usage:
    from seo_intelligence.output import InsightExtractor, SectionVocabulary

    extractor = InsightExtractor(SectionVocabulary(("finding",), ("recommendation",)))
    insights = extractor.extract(raw_text)
"""

from .parser import (
    InsightExtractor,
    SectionVocabulary,
    ExtractedInsights,
    DEFAULT_VOCABULARY,
    extract_json_array,
    extract_json_object,
    strip_code_fences,
)

__all__ = [
    "InsightExtractor",
    "SectionVocabulary",
    "ExtractedInsights",
    "DEFAULT_VOCABULARY",
    "extract_json_array",
    "extract_json_object",
    "strip_code_fences",
]
