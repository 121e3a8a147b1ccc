"""Question side of the dialogue: intake bank, duplicate detection, follow-up parsing."""

from __future__ import annotations

from symptom_dialogue.dialogue.follow_up import (
    GENERIC_OPTIONS,
    GENERIC_QUESTION,
    is_enough_info,
    parse_follow_up,
    smart_fallback_question,
    truncate_question,
)
from symptom_dialogue.dialogue.question_bank import INTAKE_QUESTIONS, QuestionBank
from symptom_dialogue.dialogue.similarity import (
    QuestionSimilarity,
    are_similar,
    is_already_asked,
    normalize,
)

__all__ = [
    "GENERIC_OPTIONS",
    "GENERIC_QUESTION",
    "INTAKE_QUESTIONS",
    "QuestionBank",
    "QuestionSimilarity",
    "are_similar",
    "is_already_asked",
    "is_enough_info",
    "normalize",
    "parse_follow_up",
    "smart_fallback_question",
    "truncate_question",
]
