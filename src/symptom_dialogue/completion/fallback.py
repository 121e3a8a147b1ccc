"""Ordered provider chain: try each completion provider until one answers."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from symptom_dialogue.completion.protocols import ICompletionProvider
from symptom_dialogue.exceptions import CompletionError, CompletionUnavailable, NetworkError
from symptom_dialogue.hooks.circuit_breaker_hook import CircuitBreakerHook

log = logging.getLogger(__name__)


def provider_name(provider: ICompletionProvider) -> str:
    return getattr(provider, "name", type(provider).__name__)


class FallbackCompletionProvider:
    """Decorates a list of providers as a single ``ICompletionProvider``.

    Any ``CompletionError`` moves on to the next provider; the last error is
    re-raised when every provider failed. A provider whose breaker is open is
    skipped without a call.
    """

    def __init__(
        self,
        providers: Sequence[ICompletionProvider],
        breakers: Sequence[CircuitBreakerHook | None] | None = None,
    ) -> None:
        if not providers:
            raise ValueError("FallbackCompletionProvider needs at least one provider")
        self._providers = list(providers)
        self._breakers: list[CircuitBreakerHook | None] = (
            list(breakers) if breakers is not None else [None] * len(self._providers)
        )
        if len(self._breakers) != len(self._providers):
            raise ValueError("One breaker slot per provider is required")

    @property
    def name(self) -> str:
        return " -> ".join(provider_name(p) for p in self._providers)

    async def complete(self, prompt: str) -> str:
        last_error: CompletionError | None = None
        for provider, breaker in zip(self._providers, self._breakers):
            name = provider_name(provider)
            if breaker is not None:
                try:
                    breaker.before_call()
                except CompletionUnavailable as e:
                    log.info("Skipping %s: %s", name, e)
                    continue
            try:
                text = await provider.complete(prompt)
            except CompletionError as e:
                if breaker is not None:
                    breaker.after_call(e)
                log.warning("Provider %s failed (%s), trying next", name, type(e).__name__)
                last_error = e
                continue
            if breaker is not None:
                breaker.after_call(None)
            return text

        if last_error is not None:
            raise last_error
        raise NetworkError("All completion providers are short-circuited", provider=self.name)
