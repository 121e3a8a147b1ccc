"""Session log storage on top of a key/value backend.

``SessionStore`` serializes the ordered ``SessionEvent`` log as JSON.
``DebouncedSessionWriter`` coalesces the controller's save requests so a
burst of answers produces one write, off the question-presentation path.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from symptom_dialogue.exceptions import PersistenceError
from symptom_dialogue.models import SessionEvent
from symptom_dialogue.persistence.protocols import IPersistenceBackend

log = logging.getLogger(__name__)

_EVENTS = TypeAdapter(list[SessionEvent])


class SessionStore:
    """``load_session`` / ``save_session`` over an ``IPersistenceBackend``."""

    def __init__(self, backend: IPersistenceBackend, key_prefix: str = "sessions/") -> None:
        self._backend = backend
        self._prefix = key_prefix

    def _key(self, session_id: str) -> str:
        if not session_id:
            raise PersistenceError("Session id must not be empty")
        return f"{self._prefix}{session_id}"

    def load_session(self, session_id: str) -> Optional[list[SessionEvent]]:
        """Return the stored log, or ``None`` for an unknown session."""
        key = self._key(session_id)
        try:
            payload = self._backend.load(key)
        except KeyError:
            return None
        try:
            return _EVENTS.validate_json(payload)
        except ValidationError as e:
            raise PersistenceError(f"Corrupt session log {session_id}: {e.error_count()} errors") from e

    def save_session(self, session_id: str, events: list[SessionEvent]) -> None:
        self._backend.save(self._key(session_id), _EVENTS.dump_json(events).decode("utf-8"))
        log.debug("Saved session %s (%d events)", session_id, len(events))

    def delete_session(self, session_id: str) -> None:
        self._backend.delete(self._key(session_id))

    def list_sessions(self) -> list[str]:
        return [key[len(self._prefix):] for key in self._backend.list_keys(self._prefix)]


class DebouncedSessionWriter:
    """Coalesce saves of one session log into at most one write per ``delay`` seconds.

    ``schedule`` must be called from a running event loop. Only the latest
    snapshot is written; failures are logged, never raised into the dialogue.
    """

    def __init__(self, store: SessionStore, session_id: str, delay: float = 1.0) -> None:
        self._store = store
        self._session_id = session_id
        self._delay = delay
        self._pending: Optional[list[SessionEvent]] = None
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, events: list[SessionEvent]) -> None:
        self._pending = list(events)
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._write_later())

    async def _write_later(self) -> None:
        await asyncio.sleep(self._delay)
        self._write()

    def _write(self) -> None:
        events, self._pending = self._pending, None
        if events is None:
            return
        try:
            self._store.save_session(self._session_id, events)
        except (PersistenceError, OSError) as e:
            log.error("Failed to persist session %s: %s", self._session_id, e)

    async def flush(self) -> None:
        """Write the pending snapshot now and cancel the delayed write."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._write()
