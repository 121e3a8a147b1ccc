"""Regex patterns for assessment headings and urgency levels.

Headings are free text chosen by the completion service; these patterns
map the usual variants ("SUMMARY OF CASE", "Case Summary", ...) onto a
``SectionKind`` without any further LLM call.
"""

from __future__ import annotations

import re
from typing import Pattern

from symptom_dialogue.models import SectionKind, UrgencyLevel

# Checked in order; specialty goes first so "Recommended Specialty" never
# lands anywhere else.
SECTION_PATTERNS: dict[SectionKind, list[Pattern[str]]] = {
    SectionKind.SPECIALTY: [
        re.compile(r"specialt", re.IGNORECASE),
        re.compile(r"\bdepartment\b", re.IGNORECASE),
    ],
    SectionKind.URGENCY: [
        re.compile(r"\burgen", re.IGNORECASE),
        re.compile(r"\btriage\b", re.IGNORECASE),
        re.compile(r"\bseverity\b", re.IGNORECASE),
    ],
    SectionKind.FIRST_AID: [
        re.compile(r"\bfirst[\s-]*aid\b", re.IGNORECASE),
        re.compile(r"\bself[\s-]*care\b", re.IGNORECASE),
        re.compile(r"\bimmediate\s+(?:steps|actions|care)\b", re.IGNORECASE),
    ],
    SectionKind.INVESTIGATIONS: [
        re.compile(r"\binvestigation", re.IGNORECASE),
        re.compile(r"\b(?:tests?|diagnostics?)\b", re.IGNORECASE),
        re.compile(r"\bwork[\s-]*up\b", re.IGNORECASE),
    ],
    SectionKind.CASE_SUMMARY: [
        re.compile(r"\bsummary\b", re.IGNORECASE),
        re.compile(r"\bcase\b", re.IGNORECASE),
        re.compile(r"\bmedical\s+assessment\b", re.IGNORECASE),
        re.compile(r"\boverview\b", re.IGNORECASE),
    ],
}

URGENCY_PATTERNS: list[tuple[UrgencyLevel, Pattern[str]]] = [
    (UrgencyLevel.HIGH, re.compile(r"\bhigh\b", re.IGNORECASE)),
    (UrgencyLevel.MEDIUM, re.compile(r"\b(?:medium|moderate)\b", re.IGNORECASE)),
    (UrgencyLevel.LOW, re.compile(r"\blow\b", re.IGNORECASE)),
]


def classify_heading(heading: str) -> SectionKind:
    """Map a free-text heading onto a ``SectionKind``."""
    for kind, patterns in SECTION_PATTERNS.items():
        for pattern in patterns:
            if pattern.search(heading):
                return kind
    return SectionKind.OTHER


def extract_urgency(text: str) -> UrgencyLevel:
    """Urgency level named first in an urgency section body.

    The body usually opens with the level ("Medium. Watch for high fever"),
    so the earliest keyword wins rather than the most severe one.
    """
    best: tuple[int, UrgencyLevel] | None = None
    for level, pattern in URGENCY_PATTERNS:
        match = pattern.search(text)
        if match and (best is None or match.start() < best[0]):
            best = (match.start(), level)
    return best[1] if best else UrgencyLevel.UNKNOWN
