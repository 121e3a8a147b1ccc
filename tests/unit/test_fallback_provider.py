"""Tests for the provider fallback chain and its factory."""

from __future__ import annotations

import pytest

from symptom_dialogue.completion.factory import create_completion_provider
from symptom_dialogue.completion.fallback import FallbackCompletionProvider
from symptom_dialogue.completion.litellm_provider import LiteLLMCompletionProvider
from symptom_dialogue.completion.protocols import ICompletionProvider
from symptom_dialogue.core.config import AppSettings, LLMConfig, ResilienceConfig
from symptom_dialogue.exceptions import AuthFailed, NetworkError
from symptom_dialogue.hooks.circuit_breaker_hook import CircuitBreakerHook, CircuitState
from tests.fakes.fake_completion import FakeCompletionProvider


class TestFallbackChain:
    @pytest.mark.asyncio
    async def test_first_success_wins(self) -> None:
        primary = FakeCompletionProvider("primary answer", name="primary")
        backup = FakeCompletionProvider("backup answer", name="backup")
        chain = FallbackCompletionProvider([primary, backup])

        assert await chain.complete("p") == "primary answer"
        assert backup.call_count == 0

    @pytest.mark.asyncio
    async def test_moves_on_after_failure(self) -> None:
        primary = FakeCompletionProvider(NetworkError("down"), name="primary")
        backup = FakeCompletionProvider("backup answer", name="backup")
        chain = FallbackCompletionProvider([primary, backup])

        assert await chain.complete("p") == "backup answer"
        assert primary.prompts == ["p"]
        assert backup.prompts == ["p"]

    @pytest.mark.asyncio
    async def test_last_error_raised_when_all_fail(self) -> None:
        chain = FallbackCompletionProvider(
            [
                FakeCompletionProvider(NetworkError("down")),
                FakeCompletionProvider(AuthFailed("bad key")),
            ]
        )
        with pytest.raises(AuthFailed):
            await chain.complete("p")

    @pytest.mark.asyncio
    async def test_open_breaker_skips_provider(self) -> None:
        primary = FakeCompletionProvider(NetworkError("down"), default="late answer", name="primary")
        backup = FakeCompletionProvider(default="backup answer", name="backup")
        breaker = CircuitBreakerHook(failure_threshold=1, recovery_timeout_seconds=60.0, breaker_key="primary")
        chain = FallbackCompletionProvider([primary, backup], [breaker, None])

        assert await chain.complete("first") == "backup answer"
        assert breaker.state == CircuitState.OPEN

        assert await chain.complete("second") == "backup answer"
        assert primary.call_count == 1

    @pytest.mark.asyncio
    async def test_all_short_circuited(self) -> None:
        breaker = CircuitBreakerHook(failure_threshold=1, recovery_timeout_seconds=60.0)
        breaker.after_call(RuntimeError("boom"))
        chain = FallbackCompletionProvider([FakeCompletionProvider(default="unused")], [breaker])

        with pytest.raises(NetworkError):
            await chain.complete("p")

    def test_requires_providers(self) -> None:
        with pytest.raises(ValueError):
            FallbackCompletionProvider([])

    def test_breaker_slots_must_match(self) -> None:
        with pytest.raises(ValueError):
            FallbackCompletionProvider([FakeCompletionProvider()], [None, None])

    def test_satisfies_protocol(self) -> None:
        assert isinstance(FallbackCompletionProvider([FakeCompletionProvider()]), ICompletionProvider)


class TestFactory:
    def test_chain_from_settings(self) -> None:
        settings = AppSettings(
            llm=LLMConfig(model="openrouter/mistral-7b", fallback_models=["gemini/gemini-2.0-flash"]),
        )
        provider = create_completion_provider(settings)
        assert isinstance(provider, FallbackCompletionProvider)
        assert provider.name == "openrouter/mistral-7b -> gemini/gemini-2.0-flash"

    def test_single_model_without_breaker(self) -> None:
        settings = AppSettings(
            llm=LLMConfig(model="gemini/gemini-2.0-flash"),
            resilience=ResilienceConfig(circuit_breaker_enabled=False),
        )
        provider = create_completion_provider(settings)
        assert isinstance(provider, LiteLLMCompletionProvider)
