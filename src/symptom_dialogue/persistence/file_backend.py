"""File-based persistence backend: one JSON file per key.

Key segments map to sub-directories, so ``sessions/abc`` is stored at
``<base>/sessions/abc.json`` and ``list_keys("sessions/")`` finds it again.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from symptom_dialogue.exceptions import PersistenceError

log = logging.getLogger(__name__)

_SUFFIX = ".json"


class FilePersistenceBackend:
    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    def _key_path(self, key: str) -> Path:
        parts = [p for p in key.replace("\\", "/").split("/") if p]
        if not parts or any(p in (".", "..") for p in parts):
            raise PersistenceError(f"Invalid persistence key: {key!r}")
        return self._base.joinpath(*parts[:-1], parts[-1] + _SUFFIX)

    def save(self, key: str, data: str) -> None:
        path = self._key_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_text(data, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise PersistenceError(f"Failed to save {key}: {e}") from e
        log.debug("Saved %s to %s", key, path)

    def load(self, key: str) -> str:
        path = self._key_path(key)
        if not path.is_file():
            raise KeyError(f"Not found: {key} (path: {path})")
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to read {key}: {e}") from e

    def exists(self, key: str) -> bool:
        return self._key_path(key).is_file()

    def delete(self, key: str) -> None:
        path = self._key_path(key)
        if path.is_file():
            path.unlink()

    def list_keys(self, prefix: str = "") -> list[str]:
        keys = []
        for path in self._base.rglob(f"*{_SUFFIX}"):
            key = path.relative_to(self._base).as_posix()[: -len(_SUFFIX)]
            if key.startswith(prefix):
                keys.append(key)
        return sorted(keys)
