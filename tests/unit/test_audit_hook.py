"""Tests for the audit listener."""

from __future__ import annotations

import logging

import pytest

from symptom_dialogue.engine.events import ErrorOccurred, QuestionPresented, SummaryReady
from symptom_dialogue.hooks.audit_hook import AuditHook
from symptom_dialogue.models import Assessment, Phase, Question, Specialty, SummarySection, UrgencyLevel

_LOGGER = "symptom_dialogue.hooks.audit_hook"


class TestAuditHook:
    def test_question_presented(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger=_LOGGER)
        question = Question.from_labels("Any fever?", ["Yes", "No"])
        hook = AuditHook(channel="web")

        hook(QuestionPresented("s1", question, 2, Phase.FIXED))

        assert hook.events_seen == 1
        assert "question_presented | session=s1 phase=fixed turn=2 options=2 channel=web" in caplog.text

    def test_summary_ready(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger=_LOGGER)
        assessment = Assessment(
            sections=[SummarySection(type="SUMMARY OF CASE", content="Rash on both arms.")],
            specialties=[Specialty.DERMATOLOGY, Specialty.INTERNAL],
            urgency=UrgencyLevel.LOW,
        )

        AuditHook()(SummaryReady("s1", assessment, 6))

        assert "specialties=dermatology,internal urgency=low" in caplog.text

    def test_error_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger=_LOGGER)

        AuditHook()(ErrorOccurred("s1", "NetworkError", "offline", True, 5, Phase.SUMMARIZING))

        [record] = caplog.records
        assert record.levelno == logging.WARNING
        assert "kind=NetworkError retryable=True" in record.getMessage()
