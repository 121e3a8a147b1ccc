"""Controller and completion hooks: audit, circuit breaker, logging."""

from __future__ import annotations

from symptom_dialogue.hooks.audit_hook import AuditHook
from symptom_dialogue.hooks.circuit_breaker_hook import CircuitBreakerHook, CircuitState
from symptom_dialogue.hooks.circuit_breaker_store import IBreakerStore, MemoryBreakerStore
from symptom_dialogue.hooks.logging_config import setup_logging

__all__ = [
    "AuditHook",
    "CircuitBreakerHook",
    "CircuitState",
    "IBreakerStore",
    "MemoryBreakerStore",
    "setup_logging",
]
