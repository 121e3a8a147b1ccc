"""Render the completion prompts from dialogue state."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from symptom_dialogue.prompts.registry import get_prompt


def format_answers(answers: Mapping[str, str]) -> str:
    """``"Question: Answer"`` lines in answer order."""
    return "\n".join(f"{question}: {answer}" for question, answer in answers.items())


def build_follow_up_prompt(
    complaint: str,
    answers: Mapping[str, str],
    asked_questions: Sequence[str],
    *,
    asked_count: int,
    max_questions: int = 10,
    sentinel: str = "ENOUGH_INFO",
) -> str:
    return get_prompt("dialogue", "FOLLOW_UP_PROMPT").format(
        complaint=complaint,
        answers=format_answers(answers) or "(none yet)",
        previous_questions="; ".join(asked_questions) or "(none yet)",
        asked_count=asked_count,
        max_questions=max_questions,
        remaining=max(max_questions - asked_count, 0),
        sentinel=sentinel,
    )


def build_summary_prompt(complaint: str, answers: Mapping[str, str]) -> str:
    """Deterministic for a given complaint and answer set, so summarization can be retried."""
    responses = "\n\n".join(f"Q: {question}\nA: {answer}" for question, answer in answers.items())
    details = get_prompt("assessment", "PATIENT_DETAILS").format(complaint=complaint, responses=responses)
    return get_prompt("assessment", "SUMMARY_PROMPT").format(patient_details=details)


def build_flash_prompt(complaint: str) -> str:
    return get_prompt("assessment", "FLASH_PROMPT").format(complaint=complaint)
