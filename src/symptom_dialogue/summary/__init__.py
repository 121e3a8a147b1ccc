"""Assessment side: section parsing, urgency and specialty extraction."""

from __future__ import annotations

from symptom_dialogue.summary.assessment import build_assessment, find_error_marker
from symptom_dialogue.summary.parser import SummaryParser, group_sections, parse_summary
from symptom_dialogue.summary.section_patterns import classify_heading, extract_urgency
from symptom_dialogue.summary.specialty import SpecialtyExtractor

__all__ = [
    "SpecialtyExtractor",
    "SummaryParser",
    "build_assessment",
    "classify_heading",
    "extract_urgency",
    "find_error_marker",
    "group_sections",
    "parse_summary",
]
