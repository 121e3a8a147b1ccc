"""Split a free-text assessment into labelled ``SummarySection`` blocks.

The summary prompt asks for ``**HEADING:**`` blocks, but completions drift:
headings lose their colon, turn into markdown ``##`` headers or plain
``Heading:`` lines. Heading styles are tried strictly in that order and the
first style that finds a section with a non-trivial body wins. When none
does, the text is scanned line by line.
"""

from __future__ import annotations

import logging
import re
from typing import Pattern

from symptom_dialogue.models import SummarySection

log = logging.getLogger(__name__)

HEADING_PATTERNS: list[tuple[str, Pattern[str]]] = [
    ("bold_colon", re.compile(r"\*\*([\w \-]+?)[ \t]*:[ \t]*\*\*")),
    ("bold", re.compile(r"\*\*([\w \-]+?)[ \t]*\*\*:?")),
    ("markdown", re.compile(r"^[ \t]*#{2,6}[ \t]*([\w \-]+?)[ \t]*:?[ \t]*$", re.MULTILINE)),
    ("plain", re.compile(r"^[ \t]*([A-Z][\w \-]*?)[ \t]*:", re.MULTILINE)),
]

# Line-scan variants; the bold form keeps whatever follows the heading on
# the same line as the start of the body.
_LINE_HEADING_PATTERNS: list[Pattern[str]] = [
    re.compile(r"^\*\*([\w \-]+?)[ \t]*:?[ \t]*\*\*[ \t]*:?[ \t]*(.*)$"),
    re.compile(r"^#{1,6}[ \t]*([\w \-]+?)[ \t]*:?[ \t]*()$"),
    re.compile(r"^([A-Z][\w \-]*?)[ \t]*:[ \t]*()$"),
]


def _clean_heading(heading: str) -> str:
    return " ".join(heading.split())


def group_sections(sections: list[SummarySection]) -> list[SummarySection]:
    """Merge sections that share a heading, keeping first-seen order."""
    grouped: dict[str, list[str]] = {}
    for section in sections:
        grouped.setdefault(section.type.strip(), []).append(section.content)
    return [SummarySection(type=heading, content="\n\n".join(parts)) for heading, parts in grouped.items()]


class SummaryParser:
    """Heuristic parser for assessment completions."""

    def __init__(
        self,
        min_section_chars: int = 10,
        fallback_section_type: str = "Medical Assessment",
    ) -> None:
        self._min_chars = min_section_chars
        self._fallback_type = fallback_section_type

    def parse(self, raw_text: str) -> list[SummarySection]:
        """Parse ``raw_text``; returns ``[]`` only for empty/blank input."""
        if not raw_text or not raw_text.strip():
            log.warning("Empty summary text received")
            return []

        for name, pattern in HEADING_PATTERNS:
            sections = self._split_on(raw_text, pattern)
            if any(len(s.content) > self._min_chars for s in sections):
                log.debug("Summary parsed with %s headings: %d sections", name, len(sections))
                return group_sections(sections)

        log.info("No heading style matched cleanly, falling back to line scan")
        sections = self._scan_lines(raw_text)
        if not sections:
            sections = [SummarySection(type=self._fallback_type, content=raw_text.strip())]
        return group_sections(sections)

    @staticmethod
    def _split_on(text: str, pattern: Pattern[str]) -> list[SummarySection]:
        matches = list(pattern.finditer(text))
        sections: list[SummarySection] = []
        for i, match in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
            heading = _clean_heading(match.group(1))
            body = text[match.end():end].strip()
            if heading and body:
                sections.append(SummarySection(type=heading, content=body))
        return sections

    def _scan_lines(self, text: str) -> list[SummarySection]:
        sections: list[SummarySection] = []
        preamble: list[str] = []
        heading: str | None = None
        body: list[str] = []

        def flush() -> None:
            content = "\n".join(body).strip()
            if heading and content:
                sections.append(SummarySection(type=heading, content=content))

        for raw_line in text.splitlines():
            line = raw_line.strip()
            match = None
            for pattern in _LINE_HEADING_PATTERNS:
                match = pattern.match(line)
                if match:
                    break
            if match:
                flush()
                heading = _clean_heading(match.group(1))
                rest = match.group(2).strip()
                body = [rest] if rest else []
            elif line:
                (body if heading else preamble).append(line)
        flush()

        lead = "\n".join(preamble).strip()
        if heading is None:
            return [SummarySection(type=self._fallback_type, content=lead)] if lead else []
        if len(lead) > self._min_chars:
            sections.insert(0, SummarySection(type=self._fallback_type, content=lead))
        return sections


_default_parser = SummaryParser()


def parse_summary(raw_text: str) -> list[SummarySection]:
    """Parse with default thresholds."""
    return _default_parser.parse(raw_text)
