"""Completion collaborator protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ICompletionProvider(Protocol):
    """Turns a prompt into free text.

    Implementations raise a ``CompletionError`` subclass (``RateLimited``,
    ``AuthFailed``, ``NetworkError``, ``InvalidResponse``) on failure and
    never return an empty string.
    """

    async def complete(self, prompt: str) -> str: ...
