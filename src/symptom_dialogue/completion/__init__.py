"""Completion collaborator: protocol, LiteLLM provider and fallback chain."""

from __future__ import annotations

from symptom_dialogue.completion.factory import create_completion_provider
from symptom_dialogue.completion.fallback import FallbackCompletionProvider
from symptom_dialogue.completion.litellm_provider import LiteLLMCompletionProvider, classify_error
from symptom_dialogue.completion.protocols import ICompletionProvider

__all__ = [
    "FallbackCompletionProvider",
    "ICompletionProvider",
    "LiteLLMCompletionProvider",
    "classify_error",
    "create_completion_provider",
]
