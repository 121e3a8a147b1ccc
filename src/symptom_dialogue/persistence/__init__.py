"""Pluggable persistence backends and the session log store."""

from __future__ import annotations

from symptom_dialogue.persistence.file_backend import FilePersistenceBackend
from symptom_dialogue.persistence.memory_backend import MemoryPersistenceBackend
from symptom_dialogue.persistence.protocols import IPersistenceBackend
from symptom_dialogue.persistence.session_store import DebouncedSessionWriter, SessionStore

__all__ = [
    "DebouncedSessionWriter",
    "FilePersistenceBackend",
    "IPersistenceBackend",
    "MemoryPersistenceBackend",
    "SessionStore",
    "create_session_store",
]


def create_session_store(config: object) -> SessionStore:
    """Build a ``SessionStore`` from a ``PersistenceConfig``."""
    backend: IPersistenceBackend
    if config.backend == "memory":  # type: ignore[attr-defined]
        backend = MemoryPersistenceBackend()
    else:
        backend = FilePersistenceBackend(config.store_path)  # type: ignore[attr-defined]
    return SessionStore(backend, key_prefix=config.key_prefix)  # type: ignore[attr-defined]
