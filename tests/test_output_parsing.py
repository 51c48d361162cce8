"""
Test Suite: Output Parsing

Tests section-aware insight extraction and tolerant JSON extraction.
"""

import pytest

from seo_intelligence.exceptions import OutputParseError
from seo_intelligence.output import (
    InsightExtractor,
    SectionVocabulary,
    extract_json_array,
    extract_json_object,
)
from seo_intelligence.output.parser import strip_code_fences


class TestInsightExtractor:
    """Test bullet extraction into findings and recommendations."""

    def test_findings_and_recommendations(self):
        """Bullets go to the section of the most recent header."""
        text = "Key Findings:\n- A\n- B\nRecommendations:\n1. C"
        insights = InsightExtractor().extract(text)

        assert insights.findings == ["A", "B"]
        assert insights.recommendations == ["C"]

    def test_bullets_before_first_header_are_dropped(self):
        text = "- orphan one\n* orphan two\nFindings:\n- kept"
        insights = InsightExtractor().extract(text)

        assert insights.findings == ["kept"]
        assert insights.recommendations == []

    def test_all_bullet_markers(self):
        text = "Findings:\n- dash\n* star\n• dot\n3. numbered\n4) paren"
        insights = InsightExtractor().extract(text)

        assert insights.findings == ["dash", "star", "dot", "numbered", "paren"]

    def test_prose_lines_are_ignored(self):
        text = "Findings:\nThe site is slow overall.\n- Slow hero image\nMore prose here."
        insights = InsightExtractor().extract(text)

        assert insights.findings == ["Slow hero image"]

    def test_header_matching_is_case_insensitive(self):
        text = "## KEY FINDINGS\n- one\n## RECOMMENDATIONS\n- two"
        insights = InsightExtractor().extract(text)

        assert insights.findings == ["one"]
        assert insights.recommendations == ["two"]

    def test_finding_words_checked_before_recommendation_words(self):
        """A line naming both section words activates findings."""
        text = "Findings and recommendations:\n- both"
        insights = InsightExtractor().extract(text)

        assert insights.findings == ["both"]

    def test_custom_vocabulary(self):
        extractor = InsightExtractor(SectionVocabulary(("gap",), ("optimization",)))
        text = "Content Gaps:\n- No blog\nOptimization ideas:\n- Start a blog"
        insights = extractor.extract(text)

        assert insights.findings == ["No blog"]
        assert insights.recommendations == ["Start a blog"]

    def test_min_length_filters_short_bullets(self):
        extractor = InsightExtractor(SectionVocabulary(min_length=3))
        insights = extractor.extract("Findings:\n- ok\n- long enough")

        assert insights.findings == ["long enough"]

    def test_each_call_starts_without_active_section(self):
        extractor = InsightExtractor()
        extractor.extract("Findings:\n- first")
        insights = extractor.extract("- carried over?")

        assert len(insights) == 0

    def test_empty_text(self):
        insights = InsightExtractor().extract("")
        assert insights.findings == []
        assert insights.recommendations == []

    def test_clean_bullet(self):
        assert InsightExtractor.clean_bullet("  12. Fix titles ") == "Fix titles"
        assert InsightExtractor.clean_bullet("- Fix titles") == "Fix titles"


class TestJsonExtraction:
    """Test JSON extraction from model output."""

    def test_fenced_array(self):
        text = 'Here you go:\n```json\n[{"id": "action_1"}]\n```'
        assert extract_json_array(text) == [{"id": "action_1"}]

    def test_array_with_surrounding_prose(self):
        text = 'Plan follows [1, 2, 3] as requested.'
        assert extract_json_array(text) == [1, 2, 3]

    def test_object(self):
        text = '```\n{"marketPosition": "Leader"}\n```'
        assert extract_json_object(text) == {"marketPosition": "Leader"}

    def test_no_array_raises(self):
        with pytest.raises(OutputParseError):
            extract_json_array("I cannot help with that.")

    def test_invalid_json_raises(self):
        with pytest.raises(OutputParseError) as exc_info:
            extract_json_array("[{'id': 'single quotes'}]")
        assert exc_info.value.raw_output == "[{'id': 'single quotes'}]"

    def test_object_where_array_expected_raises(self):
        with pytest.raises(OutputParseError):
            extract_json_object("[1, 2]")

    def test_strip_code_fences(self):
        assert strip_code_fences("```json\n{}\n```") == "{}"
