"""symptom-dialogue: guided symptom assessment over a text-completion service.

Typical use::

    from symptom_dialogue import (
        AppSettings, AssessmentController, AuditHook,
        create_completion_provider, setup_logging,
    )

    settings = AppSettings()
    setup_logging(settings.observability)
    controller = AssessmentController(
        create_completion_provider(settings),
        settings=settings,
        listeners=[AuditHook()],
    )
"""

from __future__ import annotations

from symptom_dialogue.completion import (
    FallbackCompletionProvider,
    ICompletionProvider,
    LiteLLMCompletionProvider,
    create_completion_provider,
)
from symptom_dialogue.core.config import AppSettings
from symptom_dialogue.dialogue import QuestionBank, QuestionSimilarity
from symptom_dialogue.engine import (
    AssessmentController,
    ConversationState,
    ErrorOccurred,
    QuestionPresented,
    SummaryReady,
    rehydrate,
)
from symptom_dialogue.hooks import AuditHook, CircuitBreakerHook, setup_logging
from symptom_dialogue.models import (
    AnsweredQuestion,
    Assessment,
    Option,
    Phase,
    Question,
    SessionEvent,
    Specialty,
    SummarySection,
    UrgencyLevel,
)
from symptom_dialogue.persistence import DebouncedSessionWriter, SessionStore, create_session_store
from symptom_dialogue.services.flash_service import FlashAssessmentService
from symptom_dialogue.summary import SpecialtyExtractor, SummaryParser

__all__ = [
    "AnsweredQuestion",
    "AppSettings",
    "Assessment",
    "AssessmentController",
    "AuditHook",
    "CircuitBreakerHook",
    "ConversationState",
    "DebouncedSessionWriter",
    "ErrorOccurred",
    "FallbackCompletionProvider",
    "FlashAssessmentService",
    "ICompletionProvider",
    "LiteLLMCompletionProvider",
    "Option",
    "Phase",
    "Question",
    "QuestionBank",
    "QuestionPresented",
    "QuestionSimilarity",
    "SessionEvent",
    "SessionStore",
    "SpecialtyExtractor",
    "Specialty",
    "SummaryParser",
    "SummaryReady",
    "SummarySection",
    "UrgencyLevel",
    "create_completion_provider",
    "create_session_store",
    "rehydrate",
    "setup_logging",
]
