"""Tests for LiteLLMCompletionProvider with mocked litellm.acompletion."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from litellm.exceptions import APIConnectionError, AuthenticationError, RateLimitError

from symptom_dialogue.completion.litellm_provider import LiteLLMCompletionProvider, classify_error
from symptom_dialogue.core.config import LLMConfig
from symptom_dialogue.exceptions import AuthFailed, InvalidResponse, NetworkError, RateLimited


def _make_config(**overrides: Any) -> LLMConfig:
    defaults: dict[str, Any] = {
        "model": "gemini/gemini-2.0-flash",
        "max_retries": 1,
        "retry_max_delay": 0.0,
    }
    defaults.update(overrides)
    return LLMConfig(**defaults)


def _mock_response(content: str | None = "test response") -> MagicMock:
    message = MagicMock()
    message.content = content

    choice = MagicMock()
    choice.message = message
    choice.finish_reason = "stop"

    response = MagicMock()
    response.choices = [choice]
    return response


def _rate_limit() -> RateLimitError:
    return RateLimitError(message="quota exceeded", llm_provider="gemini", model="gemini-2.0-flash")


def _auth_error() -> AuthenticationError:
    return AuthenticationError(message="bad key", llm_provider="gemini", model="gemini-2.0-flash")


def _connection_error() -> APIConnectionError:
    return APIConnectionError(message="connection reset", llm_provider="gemini", model="gemini-2.0-flash")


class TestRequest:
    @pytest.mark.asyncio
    async def test_system_and_user_messages(self) -> None:
        provider = LiteLLMCompletionProvider(_make_config())

        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acomp:
            mock_acomp.return_value = _mock_response("hello")
            result = await provider.complete("describe symptoms")

        assert result == "hello"
        kwargs = mock_acomp.call_args.kwargs
        assert kwargs["model"] == "gemini/gemini-2.0-flash"
        assert kwargs["messages"][0]["role"] == "system"
        assert "first aid" in kwargs["messages"][0]["content"]
        assert kwargs["messages"][1] == {"role": "user", "content": "describe symptoms"}
        assert kwargs["temperature"] == 0.7
        assert "api_key" not in kwargs

    @pytest.mark.asyncio
    async def test_api_key_and_base_forwarded(self) -> None:
        provider = LiteLLMCompletionProvider(
            _make_config(api_keys=["k1", "k2"], api_base="http://localhost:4000")
        )

        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acomp:
            mock_acomp.return_value = _mock_response()
            await provider.complete("x")

        kwargs = mock_acomp.call_args.kwargs
        assert kwargs["api_key"] == "k1"
        assert kwargs["api_base"] == "http://localhost:4000"

    def test_name_is_model(self) -> None:
        assert LiteLLMCompletionProvider(_make_config(), model="openai/gpt-4o-mini").name == "openai/gpt-4o-mini"


class TestKeyRotation:
    @pytest.mark.asyncio
    async def test_rate_limit_rotates_key(self) -> None:
        provider = LiteLLMCompletionProvider(_make_config(api_keys=["k1", "k2"]))

        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acomp:
            mock_acomp.side_effect = [_rate_limit(), _mock_response("ok")]
            result = await provider.complete("x")

        assert result == "ok"
        assert [c.kwargs["api_key"] for c in mock_acomp.call_args_list] == ["k1", "k2"]
        assert provider.active_key_index == 1

    @pytest.mark.asyncio
    async def test_all_keys_rate_limited(self) -> None:
        provider = LiteLLMCompletionProvider(_make_config(api_keys=["k1", "k2"]))

        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acomp:
            mock_acomp.side_effect = [_rate_limit(), _rate_limit()]
            with pytest.raises(RateLimited):
                await provider.complete("x")

        assert mock_acomp.call_count == 2

    @pytest.mark.asyncio
    async def test_auth_failure_single_key(self) -> None:
        provider = LiteLLMCompletionProvider(_make_config(max_retries=3))

        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acomp:
            mock_acomp.side_effect = _auth_error()
            with pytest.raises(AuthFailed) as exc_info:
                await provider.complete("x")

        assert mock_acomp.call_count == 1
        assert exc_info.value.provider == "gemini/gemini-2.0-flash"


class TestRetries:
    @pytest.mark.asyncio
    async def test_transient_error_retried(self) -> None:
        provider = LiteLLMCompletionProvider(_make_config(max_retries=2))

        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acomp:
            mock_acomp.side_effect = [_connection_error(), _mock_response("recovered")]
            result = await provider.complete("x")

        assert result == "recovered"
        assert mock_acomp.call_count == 2

    @pytest.mark.asyncio
    async def test_retries_exhausted(self) -> None:
        provider = LiteLLMCompletionProvider(_make_config(max_retries=2))

        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acomp:
            mock_acomp.side_effect = [_connection_error(), _connection_error()]
            with pytest.raises(NetworkError):
                await provider.complete("x")

        assert mock_acomp.call_count == 2

    @pytest.mark.asyncio
    async def test_empty_content_not_retried(self) -> None:
        provider = LiteLLMCompletionProvider(_make_config(max_retries=3))

        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acomp:
            mock_acomp.return_value = _mock_response("   ")
            with pytest.raises(InvalidResponse):
                await provider.complete("x")

        assert mock_acomp.call_count == 1


class TestClassifyError:
    def test_mapping(self) -> None:
        assert isinstance(classify_error(_rate_limit(), "m"), RateLimited)
        assert isinstance(classify_error(_auth_error(), "m"), AuthFailed)
        assert isinstance(classify_error(_connection_error(), "m"), NetworkError)

    def test_unknown_error_is_network(self) -> None:
        err = classify_error(RuntimeError("boom"), "m")
        assert isinstance(err, NetworkError)
        assert err.provider == "m"
