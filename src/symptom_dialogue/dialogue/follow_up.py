"""Turn a free-text follow-up completion into a ``Question``.

The completion service is asked for ``Question: ...`` followed by numbered
options, but it does not always comply. Extraction is layered: the requested
format first, then bullets, then any line that looks like an option. When
nothing usable is left a generic question/options pair is substituted.
"""

from __future__ import annotations

import logging
import re

from symptom_dialogue.models import Question

log = logging.getLogger(__name__)

GENERIC_QUESTION = "Can you provide more details about your symptoms?"
GENERIC_OPTIONS: tuple[str, ...] = ("Yes", "No", "Not sure", "Need to clarify")

_QUESTION_PREFIX_RE = re.compile(r"^(?:question|q|ask)\s*:\s*", re.IGNORECASE)
_NUMBERED_RE = re.compile(r"^\d+[.)]\s*")
_BULLET_RE = re.compile(r"^[-•*]\s*")
_LETTER_PAREN_RE = re.compile(r"^[a-z]\)\s*", re.IGNORECASE)
_CAPITALIZED_RE = re.compile(r"^[A-Z][a-z]+")
_EMPHASIS_RE = re.compile(r"\*\*|__")

_MAX_OPTION_CHARS = 100


def is_enough_info(text: str, sentinel: str = "ENOUGH_INFO") -> bool:
    """Case-insensitive check for the no-more-questions sentinel."""
    return sentinel.upper() in text.strip().upper()


def truncate_question(text: str, max_chars: int = 110, min_break: int = 0) -> str:
    """Cut ``text`` to ``max_chars`` at the nearest preceding space and add an ellipsis.

    A space at or before ``min_break`` is not used; the text is hard cut
    at ``max_chars`` instead.
    """
    if len(text) <= max_chars:
        return text
    head = text[:max_chars]
    cut = head.rfind(" ")
    if cut > min_break:
        head = head[:cut]
    return head.rstrip() + "..."


def _clean_lines(text: str) -> list[str]:
    return [_EMPHASIS_RE.sub("", line).strip() for line in text.splitlines() if line.strip()]


def _numbered_options(lines: list[str]) -> list[str]:
    return [
        opt
        for opt in (_NUMBERED_RE.sub("", line, count=1).strip() for line in lines if _NUMBERED_RE.match(line))
        if opt
    ]


def _bulleted_options(lines: list[str]) -> list[str]:
    return [
        opt
        for opt in (_BULLET_RE.sub("", line, count=1).strip() for line in lines if _BULLET_RE.match(line))
        if opt
    ]


def _loose_options(lines: list[str], question_line: str | None) -> list[str]:
    options: list[str] = []
    for line in lines:
        if line == question_line:
            continue
        if not (_LETTER_PAREN_RE.match(line) or _BULLET_RE.match(line) or _CAPITALIZED_RE.match(line)):
            continue
        opt = _BULLET_RE.sub("", _LETTER_PAREN_RE.sub("", line, count=1), count=1).strip()
        if opt and len(opt) < _MAX_OPTION_CHARS:
            options.append(opt)
    return options


def parse_follow_up(
    text: str,
    *,
    max_chars: int = 110,
    min_break: int = 0,
    min_options: int = 2,
    max_options: int = 4,
) -> Question:
    """Extract one question and its options from a completion.

    Never fails: missing pieces are replaced by ``GENERIC_QUESTION`` /
    ``GENERIC_OPTIONS``. The sentinel check is the caller's job.
    """
    lines = _clean_lines(text)

    question_line = next((line for line in lines if line.lower().startswith("question:")), None)
    if question_line is None:
        question_line = next(
            (line for line in lines if not _NUMBERED_RE.match(line) and len(line) > 10),
            None,
        )
    question = _QUESTION_PREFIX_RE.sub("", question_line).strip() if question_line else ""

    options = _numbered_options(lines)
    if len(options) < min_options:
        options = _bulleted_options(lines)

    if not question or len(options) < min_options:
        log.debug(
            "Follow-up response off-format (question=%s, options=%d): %.200s",
            bool(question), len(options), text,
        )
        if not question and lines:
            question_line = lines[0]
            question = _QUESTION_PREFIX_RE.sub("", question_line).strip()
        if len(options) < min_options:
            options = _loose_options(lines, question_line)

    if not question:
        question = GENERIC_QUESTION

    built = Question.from_labels(
        truncate_question(question, max_chars=max_chars, min_break=min_break),
        options[:max_options],
    )
    if len(built.options) < min_options:
        log.warning("Follow-up response had fewer than %d options, using generic options", min_options)
        built = Question.from_labels(built.text, list(GENERIC_OPTIONS))
    return built


def smart_fallback_question(complaint: str, answer_count: int) -> Question:
    """Context-aware canned question for when the completion call itself fails."""
    lower = complaint.lower()
    if "pain" in lower:
        return Question.from_labels(
            "Where exactly is the pain located?",
            ["Head", "Chest", "Abdomen", "Back", "Limbs"],
        )
    if "fever" in lower:
        return Question.from_labels(
            "What is your current body temperature?",
            ["Below 100°F", "100-102°F", "Above 102°F", "Not measured"],
        )
    if "cough" in lower:
        return Question.from_labels(
            "Is the cough dry or productive?",
            ["Dry cough", "With phlegm", "Blood in cough", "Not sure"],
        )
    if answer_count >= 4:
        return Question.from_labels(
            "Are there any other symptoms you haven't mentioned?",
            ["Yes, there are more", "No, that's all", "Not sure", "Need to think"],
        )
    return Question.from_labels(GENERIC_QUESTION, list(GENERIC_OPTIONS))
