"""Dialogue engine: conversation state, replay and the assessment controller."""

from __future__ import annotations

from symptom_dialogue.engine.controller import AssessmentController
from symptom_dialogue.engine.events import (
    ControllerEvent,
    ErrorOccurred,
    EventListener,
    QuestionPresented,
    SummaryReady,
)
from symptom_dialogue.engine.state import ConversationState, fixed_progress, rehydrate

__all__ = [
    "AssessmentController",
    "ControllerEvent",
    "ConversationState",
    "ErrorOccurred",
    "EventListener",
    "QuestionPresented",
    "SummaryReady",
    "fixed_progress",
    "rehydrate",
]
