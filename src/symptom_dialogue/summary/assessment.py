"""Turn a raw assessment completion into an ``Assessment``."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Optional

from symptom_dialogue.exceptions import UnparseableSummary
from symptom_dialogue.models import Assessment, SectionKind, SummarySection, UrgencyLevel
from symptom_dialogue.summary.parser import SummaryParser
from symptom_dialogue.summary.section_patterns import extract_urgency
from symptom_dialogue.summary.specialty import SpecialtyExtractor

log = logging.getLogger(__name__)


def find_error_marker(text: str, markers: Iterable[str], *, whole_words: bool = False) -> Optional[str]:
    """First marker contained in ``text`` (case-sensitive), if any.

    The default markers include "limit", which as a substring also matches
    "limited" or "unlimited" in ordinary advice. ``whole_words`` requires word
    boundaries around each marker. Advice like "limit physical activity" still
    matches; deployments that see it replace the marker list
    (``SYMPTOM_SUMMARY_ERROR_MARKERS``), e.g. "rate limit" instead of "limit".
    """
    for marker in markers:
        if whole_words:
            if re.search(rf"(?<!\w){re.escape(marker)}(?!\w)", text):
                return marker
        elif marker in text:
            return marker
    return None


def build_assessment(
    raw_text: str,
    complaint: str = "",
    *,
    parser: SummaryParser | None = None,
    extractor: SpecialtyExtractor | None = None,
    fallback_section_type: str = "Medical Assessment",
) -> Assessment:
    """Parse sections, consume the specialty section and read the urgency level.

    Raises:
        UnparseableSummary: when ``raw_text`` is blank.
    """
    if not raw_text or not raw_text.strip():
        raise UnparseableSummary("Assessment completion was empty", raw_text)
    parser = parser or SummaryParser(fallback_section_type=fallback_section_type)
    extractor = extractor or SpecialtyExtractor()

    sections = parser.parse(raw_text)
    specialty_section = next((s for s in sections if s.kind == SectionKind.SPECIALTY), None)
    specialties = extractor.extract(specialty_section.content if specialty_section else "", complaint)

    emitted = [s for s in sections if s is not specialty_section]
    if not emitted:
        log.warning("Assessment had no displayable sections, passing raw text through")
        emitted = [SummarySection(type=fallback_section_type, content=raw_text.strip())]

    urgency_section = next((s for s in emitted if s.kind == SectionKind.URGENCY), None)
    urgency = extract_urgency(urgency_section.content) if urgency_section else UrgencyLevel.UNKNOWN

    return Assessment(sections=emitted, specialties=specialties, urgency=urgency, raw_text=raw_text)
