"""Process-local persistence backend for ``backend = "memory"`` deployments."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class MemoryPersistenceBackend:
    """Session payloads kept in a dict; lost when the process exits."""

    def __init__(self) -> None:
        self._payloads: dict[str, str] = {}

    def save(self, key: str, data: str) -> None:
        self._payloads[key] = data
        log.debug("Stored %s in memory (%d chars)", key, len(data))

    def load(self, key: str) -> str:
        try:
            return self._payloads[key]
        except KeyError:
            raise KeyError(f"No payload stored under {key!r}") from None

    def exists(self, key: str) -> bool:
        return key in self._payloads

    def delete(self, key: str) -> None:
        if self._payloads.pop(key, None) is not None:
            log.debug("Removed %s from memory", key)

    def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(filter(lambda k: k.startswith(prefix), self._payloads))
