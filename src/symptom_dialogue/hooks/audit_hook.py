"""Audit hook: logs every controller event for traceability."""

from __future__ import annotations

import logging

from symptom_dialogue.engine.events import ControllerEvent, ErrorOccurred, QuestionPresented, SummaryReady

log = logging.getLogger(__name__)


class AuditHook:
    """Controller listener writing one audit line per event.

    Parameters
    ----------
    channel:
        Where the conversation came from (e.g. ``"web"``, ``"flash"``), for
        log filtering across deployments.
    """

    def __init__(self, channel: str = "") -> None:
        self._channel = channel
        self.events_seen = 0

    def __call__(self, event: ControllerEvent) -> None:
        self.events_seen += 1
        if isinstance(event, QuestionPresented):
            log.info(
                "question_presented | session=%s phase=%s turn=%d options=%d channel=%s",
                event.session_id, event.phase.value, event.turn_count,
                len(event.question.options), self._channel,
            )
        elif isinstance(event, SummaryReady):
            log.info(
                "summary_ready | session=%s turn=%d sections=%d specialties=%s urgency=%s channel=%s",
                event.session_id, event.turn_count, len(event.assessment.sections),
                ",".join(s.value for s in event.assessment.specialties),
                event.assessment.urgency.value, self._channel,
            )
        elif isinstance(event, ErrorOccurred):
            log.warning(
                "error_occurred | session=%s phase=%s turn=%d kind=%s retryable=%s channel=%s",
                event.session_id, event.phase.value, event.turn_count,
                event.kind, event.retryable, self._channel,
            )
