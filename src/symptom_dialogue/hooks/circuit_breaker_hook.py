"""Circuit breaker around a single completion model.

``FallbackCompletionProvider`` calls ``before_call`` ahead of each request and
``after_call`` once it settles; an open breaker makes the chain skip straight
to the next model instead of waiting out another timeout.
"""

from __future__ import annotations

import logging
import time
from enum import Enum

from symptom_dialogue.exceptions import CompletionUnavailable
from symptom_dialogue.hooks.circuit_breaker_store import IBreakerStore, MemoryBreakerStore

log = logging.getLogger(__name__)


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerHook:
    """CLOSED -> OPEN after ``failure_threshold`` consecutive failures,
    OPEN -> HALF_OPEN once ``recovery_timeout_seconds`` have elapsed, and
    back to CLOSED on the first success.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout_seconds: float = 60.0,
        store: IBreakerStore | None = None,
        breaker_key: str = "default",
    ) -> None:
        self._failure_threshold = failure_threshold
        self._recovery_timeout = recovery_timeout_seconds
        self._store: IBreakerStore = store if store is not None else MemoryBreakerStore()
        self._breaker_key = breaker_key
        self._state = CircuitState.CLOSED

    @property
    def breaker_key(self) -> str:
        return self._breaker_key

    @property
    def state(self) -> CircuitState:
        if self._state == CircuitState.OPEN:
            elapsed = time.monotonic() - self._store.get_last_failure_time(self._breaker_key)
            if elapsed >= self._recovery_timeout:
                self._state = CircuitState.HALF_OPEN
                log.info("Circuit breaker %s -> HALF_OPEN", self._breaker_key)
        return self._state

    def before_call(self) -> None:
        """Raise ``CompletionUnavailable`` while the breaker is open."""
        if self.state == CircuitState.OPEN:
            failures = self._store.get_failure_count(self._breaker_key)
            raise CompletionUnavailable(
                f"Circuit breaker open for {self._breaker_key}: {failures} consecutive failures, "
                f"retry after {self._recovery_timeout}s"
            )

    def after_call(self, error: BaseException | None = None) -> None:
        if error is not None:
            count = self._store.record_failure(self._breaker_key)
            if count >= self._failure_threshold or self._state == CircuitState.HALF_OPEN:
                self._state = CircuitState.OPEN
                log.warning("Circuit breaker %s -> OPEN after %d failures", self._breaker_key, count)
            return
        if self._state == CircuitState.HALF_OPEN:
            log.info("Circuit breaker %s -> CLOSED", self._breaker_key)
        self._store.reset(self._breaker_key)
        self._state = CircuitState.CLOSED

    def reset(self) -> None:
        """Manually reset the circuit breaker to CLOSED."""
        self._store.reset(self._breaker_key)
        self._state = CircuitState.CLOSED
