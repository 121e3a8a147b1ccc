"""Shared fixtures for symptom-dialogue tests."""

from __future__ import annotations

import pytest

from symptom_dialogue.core.config import AppSettings, DialogueConfig, LLMConfig
from symptom_dialogue.dialogue.question_bank import INTAKE_QUESTIONS, QuestionBank
from symptom_dialogue.prompts.registry import reset_overrides
from tests.fakes.fake_completion import FakeCompletionProvider

WELL_FORMED_ASSESSMENT = (
    "**SUMMARY OF CASE:**\n"
    "Patient reports chest pain for 1-3 days, moderate in severity, with a history of hypertension.\n"
    "**URGENCY LEVEL:**\n"
    "High. Chest pain with hypertension needs prompt evaluation. Watch for pain spreading to the arm.\n"
    "**RECOMMENDED SPECIALTY:**\n"
    "Cardiology\n"
    "**FIRST AID RECOMMENDATIONS:**\n"
    "1. Stop all physical activity and rest.\n"
    "2. Call emergency services if the pain spreads or worsens.\n"
    "**ADDITIONAL INVESTIGATIONS NEEDED:**\n"
    "- ECG to check heart rhythm.\n"
    "- Troponin blood test to rule out heart muscle damage.\n"
)


@pytest.fixture
def settings() -> AppSettings:
    """Settings with fast retries and no API keys."""
    return AppSettings(
        llm=LLMConfig(model="test/model", max_retries=1, retry_max_delay=0.0),
        dialogue=DialogueConfig(),
    )


@pytest.fixture
def bank() -> QuestionBank:
    return QuestionBank()


@pytest.fixture
def fixed_answers() -> list[str]:
    """First option value of each intake question."""
    return [q.options[0].value for q in INTAKE_QUESTIONS]


@pytest.fixture
def fake_completion() -> FakeCompletionProvider:
    return FakeCompletionProvider()


@pytest.fixture
def assessment_text() -> str:
    return WELL_FORMED_ASSESSMENT


@pytest.fixture(autouse=True)
def _clean_prompt_overrides():
    yield
    reset_overrides()
