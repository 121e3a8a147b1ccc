"""Tests for building an Assessment from a raw completion."""

from __future__ import annotations

import pytest

from symptom_dialogue.exceptions import UnparseableSummary
from symptom_dialogue.models import SectionKind, Specialty, UrgencyLevel
from symptom_dialogue.summary.assessment import build_assessment, find_error_marker
from symptom_dialogue.core.config import DEFAULT_ERROR_MARKERS


class TestBuildAssessment:
    def test_specialty_section_consumed(self, assessment_text: str) -> None:
        assessment = build_assessment(assessment_text, "I have chest pain")
        assert len(assessment.sections) == 4
        assert assessment.section(SectionKind.SPECIALTY) is None
        assert assessment.specialties == [Specialty.CARDIOLOGY]
        assert assessment.urgency == UrgencyLevel.HIGH
        assert assessment.raw_text == assessment_text

    def test_minimal_sections(self) -> None:
        raw = (
            "**SUMMARY OF CASE:** X\n**URGENCY LEVEL:** Y\n"
            "**RECOMMENDED SPECIALTY:** cardiology\n**FIRST AID RECOMMENDATIONS:** Z"
        )
        assessment = build_assessment(raw)
        assert [s.type for s in assessment.sections] == [
            "SUMMARY OF CASE",
            "URGENCY LEVEL",
            "FIRST AID RECOMMENDATIONS",
        ]
        assert assessment.specialties == [Specialty.CARDIOLOGY]
        assert assessment.urgency == UrgencyLevel.UNKNOWN

    def test_missing_specialty_uses_complaint(self) -> None:
        assessment = build_assessment("Keep the area clean and avoid scratching.", "I have a skin rash")
        assert assessment.specialties == [Specialty.DERMATOLOGY]
        assert assessment.sections[0].type == "Medical Assessment"

    def test_only_specialty_section_passes_raw_text_through(self) -> None:
        raw = "**RECOMMENDED SPECIALTY:** Dermatology for the rash"
        assessment = build_assessment(raw)
        assert assessment.specialties == [Specialty.DERMATOLOGY]
        assert len(assessment.sections) == 1
        assert assessment.sections[0].content == raw

    def test_blank_raises(self) -> None:
        with pytest.raises(UnparseableSummary):
            build_assessment("   ")


class TestErrorMarkers:
    def test_marker_found(self) -> None:
        text = "I apologize, but I'm having trouble connecting to the service."
        assert find_error_marker(text, DEFAULT_ERROR_MARKERS) == "apologize"

    def test_case_sensitive(self) -> None:
        assert find_error_marker("Please check your api key", DEFAULT_ERROR_MARKERS) is None
        assert find_error_marker("Invalid API key provided", DEFAULT_ERROR_MARKERS) == "API key"

    def test_clean_text(self, assessment_text: str) -> None:
        assert find_error_marker(assessment_text, DEFAULT_ERROR_MARKERS) is None

    def test_substring_match_fires_on_advice(self) -> None:
        text = "Rest and limit physical activity until seen."
        assert find_error_marker(text, DEFAULT_ERROR_MARKERS) == "limit"
        assert find_error_marker("Keep walks limited to ten minutes.", DEFAULT_ERROR_MARKERS) == "limit"

    def test_whole_words(self) -> None:
        advice = "Keep walks limited to ten minutes."
        assert find_error_marker(advice, DEFAULT_ERROR_MARKERS, whole_words=True) is None
        assert find_error_marker("You hit the rate limit.", DEFAULT_ERROR_MARKERS, whole_words=True) == "limit"

    def test_tightened_marker_list_accepts_advice(self) -> None:
        markers = [m for m in DEFAULT_ERROR_MARKERS if m != "limit"] + ["rate limit"]
        assert find_error_marker("Rest and limit physical activity until seen.", markers) is None
        assert find_error_marker("Sorry, rate limit exceeded.", markers) == "rate limit"
