"""Typed events emitted by ``AssessmentController`` to its listeners."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from symptom_dialogue.models import Assessment, Phase, Question


@dataclass(frozen=True)
class QuestionPresented:
    session_id: str
    question: Question
    turn_count: int
    phase: Phase


@dataclass(frozen=True)
class SummaryReady:
    session_id: str
    assessment: Assessment
    turn_count: int
    phase: Phase = Phase.DONE


@dataclass(frozen=True)
class ErrorOccurred:
    """A failure the caller should show; ``retryable`` means ``summarize()`` may be called again."""

    session_id: str
    kind: str
    message: str
    retryable: bool
    turn_count: int
    phase: Phase


ControllerEvent = Union[QuestionPresented, SummaryReady, ErrorOccurred]
EventListener = Callable[[ControllerEvent], None]
