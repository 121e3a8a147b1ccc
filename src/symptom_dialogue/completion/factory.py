"""Build the completion collaborator from ``AppSettings``."""

from __future__ import annotations

import logging

from symptom_dialogue.completion.fallback import FallbackCompletionProvider
from symptom_dialogue.completion.litellm_provider import LiteLLMCompletionProvider
from symptom_dialogue.completion.protocols import ICompletionProvider
from symptom_dialogue.core.config import AppSettings
from symptom_dialogue.hooks.circuit_breaker_hook import CircuitBreakerHook
from symptom_dialogue.hooks.circuit_breaker_store import IBreakerStore, MemoryBreakerStore

log = logging.getLogger(__name__)


def create_completion_provider(
    settings: AppSettings,
    breaker_store: IBreakerStore | None = None,
) -> ICompletionProvider:
    """``model`` followed by ``fallback_models``, each optionally behind a breaker.

    Configured API keys belong to the primary model; fallback models resolve
    their keys from LiteLLM's usual environment variables.
    """
    llm = settings.llm
    resilience = settings.resilience

    providers: list[ICompletionProvider] = [LiteLLMCompletionProvider(llm)]
    providers.extend(LiteLLMCompletionProvider(llm, model=m, api_keys=[]) for m in llm.fallback_models)

    if not resilience.circuit_breaker_enabled:
        if len(providers) == 1:
            return providers[0]
        return FallbackCompletionProvider(providers)

    store = breaker_store if breaker_store is not None else MemoryBreakerStore()
    breakers: list[CircuitBreakerHook | None] = [
        CircuitBreakerHook(
            failure_threshold=resilience.failure_threshold,
            recovery_timeout_seconds=resilience.recovery_timeout,
            store=store,
            breaker_key=model,
        )
        for model in [llm.model, *llm.fallback_models]
    ]
    log.debug("Completion chain: %s", " -> ".join([llm.model, *llm.fallback_models]))
    return FallbackCompletionProvider(providers, breakers)
