"""Key/value persistence backend protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IPersistenceBackend(Protocol):
    """String payloads stored under ``/``-separated keys."""

    def save(self, key: str, data: str) -> None: ...

    def load(self, key: str) -> str:
        """Raises KeyError if ``key`` is not stored."""
        ...

    def exists(self, key: str) -> bool: ...

    def delete(self, key: str) -> None:
        """No-op if not found."""
        ...

    def list_keys(self, prefix: str = "") -> list[str]: ...
