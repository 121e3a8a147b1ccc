"""Map free-text specialty recommendations onto the canonical taxonomy.

Two tiers: keywords in the recommendation text itself, then typical
symptoms in the patient's original complaint (the completion sometimes
omits or mislabels the specialty section). ``internal`` is the default.
"""

from __future__ import annotations

import logging

from symptom_dialogue.models import Specialty
from symptom_dialogue.summary.specialty_patterns import SPECIALTY_PATTERNS, SYMPTOM_PATTERNS

log = logging.getLogger(__name__)


class SpecialtyExtractor:
    """Keyword-based specialty lookup; always returns a non-empty list."""

    default: Specialty = Specialty.INTERNAL

    def match_keywords(self, text: str) -> list[Specialty]:
        """Specialties named in ``text``, ordered by first appearance."""
        positions: list[tuple[int, int, Specialty]] = []
        for rank, (specialty, patterns) in enumerate(SPECIALTY_PATTERNS.items()):
            starts = [m.start() for p in patterns if (m := p.search(text))]
            if starts:
                positions.append((min(starts), rank, specialty))
        return [specialty for _, _, specialty in sorted(positions)]

    def match_symptoms(self, text: str) -> list[Specialty]:
        """Specialty for the earliest typical symptom found in ``text``."""
        hits = [(m.start(), specialty) for pattern, specialty in SYMPTOM_PATTERNS if (m := pattern.search(text))]
        if not hits:
            return []
        return [min(hits, key=lambda hit: hit[0])[1]]

    def extract(self, specialty_text: str, complaint: str = "") -> list[Specialty]:
        found = self.match_keywords(specialty_text or "")
        if not found and complaint:
            found = self.match_symptoms(complaint)
            if found:
                log.info("Specialty inferred from complaint: %s", found[0].value)
        if not found:
            log.info("No specialty recognised, defaulting to %s", self.default.value)
            found = [self.default]
        return found
