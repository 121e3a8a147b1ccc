"""Where circuit breakers keep their failure bookkeeping.

One breaker exists per completion model; the store is shared so a chain of
providers can be inspected (or reset) from one place.
"""

from __future__ import annotations

import time
from typing import NamedTuple, Protocol, runtime_checkable


@runtime_checkable
class IBreakerStore(Protocol):
    """Consecutive failure counts and timestamps, keyed per completion model."""

    def record_failure(self, key: str) -> int:
        """Record a failure and return the new consecutive failure count."""
        ...

    def get_failure_count(self, key: str) -> int: ...

    def get_last_failure_time(self, key: str) -> float:
        """Monotonic timestamp of the most recent failure, 0.0 if none."""
        ...

    def reset(self, key: str) -> None: ...


class _Failures(NamedTuple):
    count: int
    last_at: float


class MemoryBreakerStore:
    """In-process store; timestamps come from ``time.monotonic()``."""

    def __init__(self) -> None:
        self._failures: dict[str, _Failures] = {}

    def record_failure(self, key: str) -> int:
        previous = self._failures.get(key)
        entry = _Failures(count=(previous.count if previous else 0) + 1, last_at=time.monotonic())
        self._failures[key] = entry
        return entry.count

    def get_failure_count(self, key: str) -> int:
        entry = self._failures.get(key)
        return entry.count if entry else 0

    def get_last_failure_time(self, key: str) -> float:
        entry = self._failures.get(key)
        return entry.last_at if entry else 0.0

    def reset(self, key: str) -> None:
        self._failures.pop(key, None)
