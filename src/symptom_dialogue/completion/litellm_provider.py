"""Completion provider routed through LiteLLM.

Model prefixes (``gemini/``, ``openrouter/``, ``openai/``, ``anthropic/``)
select the upstream service. Transient failures are retried with exponential
backoff plus jitter; rate-limit and auth failures rotate to the next
configured API key before giving up.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

import litellm
from litellm.exceptions import (
    APIConnectionError,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServiceUnavailableError,
    Timeout,
)

from symptom_dialogue.core.config import LLMConfig
from symptom_dialogue.exceptions import (
    AuthFailed,
    CompletionError,
    InvalidResponse,
    NetworkError,
    RateLimited,
)

log = logging.getLogger(__name__)


def classify_error(exc: Exception, provider: str) -> CompletionError:
    """Map a LiteLLM exception onto the completion error hierarchy."""
    if isinstance(exc, RateLimitError):
        return RateLimited(f"Rate limited: {exc}", provider=provider)
    if isinstance(exc, (AuthenticationError, PermissionDeniedError)):
        return AuthFailed(f"Authentication failed: {exc}", provider=provider)
    if isinstance(exc, (BadRequestError, NotFoundError)):
        return InvalidResponse(f"Request rejected: {exc}", provider=provider)
    if isinstance(exc, (APIConnectionError, Timeout, ServiceUnavailableError, InternalServerError)):
        return NetworkError(f"Service unreachable: {exc}", provider=provider)
    return NetworkError(f"Completion failed: {exc}", provider=provider)


class LiteLLMCompletionProvider:
    """``ICompletionProvider`` over ``litellm.acompletion``."""

    def __init__(
        self,
        config: LLMConfig,
        *,
        model: str | None = None,
        api_keys: list[str] | None = None,
    ) -> None:
        self._config = config
        self._model = model or config.model
        self._api_keys = list(config.api_keys if api_keys is None else api_keys)
        self._key_index = 0

    @property
    def name(self) -> str:
        return self._model

    @property
    def active_key_index(self) -> int:
        return self._key_index

    def _rotate_key(self) -> None:
        self._key_index = (self._key_index + 1) % len(self._api_keys)
        log.warning("Rotating %s to API key #%d", self._model, self._key_index + 1)

    def _messages(self, prompt: str) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []
        if self._config.system_prompt:
            messages.append({"role": "system", "content": self._config.system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def complete(self, prompt: str) -> str:
        messages = self._messages(prompt)
        keys_left = max(len(self._api_keys), 1)
        while True:
            try:
                return await self._complete_with_retries(messages)
            except (RateLimited, AuthFailed):
                keys_left -= 1
                if keys_left <= 0:
                    raise
                self._rotate_key()

    async def _complete_with_retries(self, messages: list[dict[str, Any]]) -> str:
        max_retries = max(self._config.max_retries, 1)
        can_rotate = len(self._api_keys) > 1

        last_error: CompletionError | None = None
        for attempt in range(max_retries):
            try:
                return await self._call(messages)
            except CompletionError as e:
                last_error = e
                if isinstance(e, (AuthFailed, InvalidResponse)):
                    raise
                if isinstance(e, RateLimited) and can_rotate:
                    raise

                base_wait = min(2 ** attempt, self._config.retry_max_delay)
                wait = base_wait + random.uniform(0, base_wait * self._config.retry_jitter_factor)
                log.warning(
                    "Completion retry %d/%d on %s: %s (wait=%.1fs)",
                    attempt + 1, max_retries, self._model, e, wait,
                )
                if attempt < max_retries - 1:
                    await asyncio.sleep(wait)

        assert last_error is not None
        raise last_error

    async def _call(self, messages: list[dict[str, Any]]) -> str:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "timeout": self._config.timeout,
        }
        if self._api_keys:
            kwargs["api_key"] = self._api_keys[self._key_index]
        if self._config.api_base:
            kwargs["api_base"] = self._config.api_base

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as e:
            raise classify_error(e, self._model) from e

        try:
            content = response.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            raise InvalidResponse(f"Malformed completion response: {e}", provider=self._model) from e
        if not content.strip():
            raise InvalidResponse("Empty completion", provider=self._model)
        return content
