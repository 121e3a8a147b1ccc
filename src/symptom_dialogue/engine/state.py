"""Mutable per-session conversation state and its rebuild from a session log."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from symptom_dialogue.dialogue.question_bank import QuestionBank
from symptom_dialogue.dialogue.similarity import normalize
from symptom_dialogue.exceptions import PersistenceError
from symptom_dialogue.models import (
    AnsweredQuestion,
    Assessment,
    EventKind,
    Phase,
    Question,
    SessionEvent,
)

log = logging.getLogger(__name__)


@dataclass
class ConversationState:
    """Everything the controller knows about one conversation.

    ``asked_questions`` holds normalized texts for membership checks,
    ``asked_texts`` the raw texts in presentation order (similarity needs
    raw tokens). Both only grow.
    """

    complaint: str = ""
    phase: Phase = Phase.FIXED
    fixed_index: int = 0
    asked_questions: set[str] = field(default_factory=set)
    asked_texts: list[str] = field(default_factory=list)
    answers: dict[str, str] = field(default_factory=dict)
    answered: list[AnsweredQuestion] = field(default_factory=list)
    turn_count: int = 0
    pending_question: Optional[Question] = None
    assessment: Optional[Assessment] = None

    def has_asked(self, text: str) -> bool:
        return normalize(text) in self.asked_questions

    def mark_asked(self, question: Question) -> None:
        self.asked_questions.add(normalize(question.text))
        self.asked_texts.append(question.text)
        self.turn_count += 1
        self.pending_question = question

    def record_answer(self, answered: AnsweredQuestion) -> None:
        self.answers[answered.question.text] = answered.answer_text
        self.answered.append(answered)
        self.pending_question = None

    def next_fixed(self, bank: QuestionBank) -> Optional[Question]:
        """First bank question at or after ``fixed_index`` not asked yet."""
        for index in range(self.fixed_index, len(bank)):
            question = bank.next_fixed(index)
            if question is None:
                break
            if self.has_asked(question.text):
                log.debug("Skipping already asked fixed question %d", index)
                continue
            return question
        return None


def fixed_progress(bank: QuestionBank, answered: Iterable[AnsweredQuestion]) -> int:
    """Number of distinct fixed-bank questions that have been answered."""
    answered_texts = {normalize(a.question.text) for a in answered}
    return sum(1 for question in bank if normalize(question.text) in answered_texts)


def rehydrate(events: Iterable[SessionEvent], bank: QuestionBank | None = None) -> ConversationState:
    """Rebuild a ``ConversationState`` by replaying a session log.

    Raises:
        PersistenceError: if an answer does not belong to the question it follows.
    """
    bank = bank if bank is not None else QuestionBank()
    state = ConversationState()
    summarizing = False

    for event in events:
        if event.kind == EventKind.COMPLAINT:
            state.complaint = event.text
        elif event.kind == EventKind.QUESTION:
            if event.question is None:
                raise PersistenceError("Question event without a question")
            state.mark_asked(event.question)
        elif event.kind == EventKind.ANSWER:
            pending = state.pending_question
            if pending is None or pending.text != event.text:
                raise PersistenceError(f"Answer to a question that is not pending: {event.text!r}")
            state.record_answer(
                AnsweredQuestion(
                    question=pending,
                    selected_value=event.selected_value,
                    free_text_answer=event.free_text_answer,
                )
            )
        elif event.kind == EventKind.SUMMARIZING:
            summarizing = True
        elif event.kind == EventKind.COMPLETED:
            state.assessment = event.assessment

    state.fixed_index = fixed_progress(bank, state.answered)

    if state.assessment is not None:
        state.phase = Phase.DONE
    elif summarizing:
        state.phase = Phase.SUMMARIZING
    elif state.pending_question is not None:
        state.phase = Phase.FIXED if bank.contains(state.pending_question.text) else Phase.DYNAMIC
    elif state.next_fixed(bank) is not None:
        state.phase = Phase.FIXED
    else:
        state.phase = Phase.DYNAMIC

    log.debug(
        "Rehydrated session: phase=%s fixed_index=%d turns=%d answers=%d",
        state.phase.value, state.fixed_index, state.turn_count, len(state.answers),
    )
    return state
