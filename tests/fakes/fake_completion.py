"""Scripted completion provider for testing."""

from __future__ import annotations

from collections import deque
from typing import Union

Scripted = Union[str, Exception]


class FakeCompletionProvider:
    """Plays back queued responses (or raises queued exceptions) in order.

    Once the queue is empty ``default`` is returned, or ``AssertionError``
    raised when no default is set. Every prompt is recorded in ``prompts``.
    """

    def __init__(self, *responses: Scripted, default: str | None = None, name: str = "fake") -> None:
        self._queue: deque[Scripted] = deque(responses)
        self._default = default
        self.name = name
        self.prompts: list[str] = []

    def queue(self, *responses: Scripted) -> None:
        self._queue.extend(responses)

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._queue:
            item = self._queue.popleft()
        elif self._default is not None:
            item = self._default
        else:
            raise AssertionError(f"Unexpected completion call #{len(self.prompts)}")
        if isinstance(item, Exception):
            raise item
        return item
