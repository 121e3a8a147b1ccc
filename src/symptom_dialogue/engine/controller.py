"""Assessment dialogue state machine: Fixed -> Dynamic -> Summarizing -> Done.

One controller drives one conversation. Each public coroutine is a turn;
turns never overlap (a second call while one is awaiting the completion
service raises ``TurnInProgressError``). Results of a completion call are
applied only if the conversation has not moved on in the meantime.

Usage::

    controller = AssessmentController(provider, listeners=[AuditHook()])
    event = await controller.start("I have chest pain")
    while isinstance(event, QuestionPresented):
        event = await controller.submit_answer(selected_value=...)
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator, Awaitable, Iterable
from contextlib import asynccontextmanager
from typing import Any, Optional

from symptom_dialogue.completion.protocols import ICompletionProvider
from symptom_dialogue.core.config import AppSettings
from symptom_dialogue.dialogue.follow_up import (
    is_enough_info,
    parse_follow_up,
    smart_fallback_question,
)
from symptom_dialogue.dialogue.question_bank import QuestionBank
from symptom_dialogue.dialogue.similarity import QuestionSimilarity
from symptom_dialogue.engine.events import (
    ControllerEvent,
    ErrorOccurred,
    EventListener,
    QuestionPresented,
    SummaryReady,
)
from symptom_dialogue.engine.state import ConversationState, fixed_progress, rehydrate
from symptom_dialogue.exceptions import (
    DuplicateQuestionExhausted,
    InvalidAnswerError,
    MaxQuestionsReached,
    SessionClosedError,
    SymptomDialogueError,
    TurnInProgressError,
    UnparseableSummary,
)
from symptom_dialogue.models import (
    AnsweredQuestion,
    EventKind,
    Phase,
    Question,
    SessionEvent,
)
from symptom_dialogue.persistence.session_store import DebouncedSessionWriter, SessionStore
from symptom_dialogue.prompts.builders import build_follow_up_prompt, build_summary_prompt
from symptom_dialogue.summary.assessment import build_assessment, find_error_marker
from symptom_dialogue.summary.parser import SummaryParser
from symptom_dialogue.summary.specialty import SpecialtyExtractor

log = logging.getLogger(__name__)


class _StaleResult(Exception):
    """The conversation moved on while a completion call was in flight."""


class AssessmentController:
    def __init__(
        self,
        completion: ICompletionProvider,
        *,
        session_id: str | None = None,
        settings: AppSettings | None = None,
        bank: QuestionBank | None = None,
        parser: SummaryParser | None = None,
        extractor: SpecialtyExtractor | None = None,
        writer: DebouncedSessionWriter | None = None,
        listeners: Iterable[EventListener] = (),
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self._settings = settings or AppSettings()
        self._dialogue = self._settings.dialogue
        self._summary = self._settings.summary
        self._completion = completion
        self._bank = bank or QuestionBank()
        self._similarity = QuestionSimilarity(
            threshold=self._dialogue.similarity_threshold,
            containment_min_length=self._dialogue.containment_min_length,
            min_token_length=self._dialogue.min_token_length,
        )
        self._parser = parser or SummaryParser(
            min_section_chars=self._summary.min_section_chars,
            fallback_section_type=self._summary.fallback_section_type,
        )
        self._extractor = extractor or SpecialtyExtractor()
        self._writer = writer
        self._listeners: list[EventListener] = list(listeners)

        self._state = ConversationState()
        self._log: list[SessionEvent] = []
        self._lock = asyncio.Lock()
        self._generation = 0
        self._closed = False

    # ── Construction from a stored log ───────────────────────────────

    @classmethod
    def resume(
        cls,
        session_id: str,
        events: list[SessionEvent],
        completion: ICompletionProvider,
        **kwargs: Any,
    ) -> AssessmentController:
        """Controller positioned where the replayed ``events`` left off.

        Call ``resume_turn()`` to re-present the pending question or carry on.
        """
        controller = cls(completion, session_id=session_id, **kwargs)
        controller._state = rehydrate(events, controller._bank)
        controller._log = list(events)
        log.info(
            "Session %s resumed in %s after %d turns",
            session_id, controller._state.phase.value, controller._state.turn_count,
        )
        return controller

    @classmethod
    def from_store(
        cls,
        store: SessionStore,
        session_id: str,
        completion: ICompletionProvider,
        **kwargs: Any,
    ) -> Optional[AssessmentController]:
        events = store.load_session(session_id)
        if events is None:
            return None
        return cls.resume(session_id, events, completion, **kwargs)

    # ── Read-only views ──────────────────────────────────────────────

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def events(self) -> list[SessionEvent]:
        return list(self._log)

    @property
    def pending_question(self) -> Optional[Question]:
        return self._state.pending_question

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    # ── Turns ────────────────────────────────────────────────────────

    async def start(self, complaint: str) -> Optional[ControllerEvent]:
        """Record the opening complaint and present the first question."""
        complaint = complaint.strip()
        if not complaint:
            raise InvalidAnswerError("Complaint must not be empty")
        async with self._turn():
            if self._log:
                raise SymptomDialogueError(f"Session {self.session_id} already started")
            self._state.complaint = complaint
            self._append(SessionEvent(kind=EventKind.COMPLAINT, text=complaint))
            log.info("Session %s started", self.session_id)
            return await self._run(self._next_turn())

    async def submit_answer(
        self,
        selected_value: str | None = None,
        free_text: str | None = None,
    ) -> Optional[ControllerEvent]:
        """Answer the pending question with an option value or free text.

        Returns the next event, or ``None`` if the conversation was closed
        while the completion call was in flight.
        """
        async with self._turn():
            pending = self._state.pending_question
            if pending is None:
                raise InvalidAnswerError("No question is awaiting an answer")
            answered = self._validate_answer(pending, selected_value, free_text)
            self._state.record_answer(answered)
            self._append(
                SessionEvent(
                    kind=EventKind.ANSWER,
                    text=pending.text,
                    selected_value=answered.selected_value,
                    free_text_answer=answered.free_text_answer,
                )
            )
            if self._state.phase == Phase.FIXED:
                self._state.fixed_index = fixed_progress(self._bank, self._state.answered)
            return await self._run(self._next_turn())

    async def summarize(self) -> Optional[ControllerEvent]:
        """Produce the assessment now.

        This is the retry path after an ``ErrorOccurred``; called earlier it
        ends the question phase with whatever answers were collected.
        """
        async with self._turn():
            if self._state.phase != Phase.SUMMARIZING:
                return await self._run(self._enter_summarizing("requested by caller"))
            return await self._run(self._run_summary())

    async def resume_turn(self) -> Optional[ControllerEvent]:
        """Continue a resumed conversation from wherever its log stopped."""
        async with self._turn():
            pending = self._state.pending_question
            if pending is not None:
                return self._emit(
                    QuestionPresented(self.session_id, pending, self._state.turn_count, self._state.phase)
                )
            return await self._run(self._next_turn())

    async def close(self) -> None:
        """Stop accepting input, discard in-flight results and flush the log."""
        self._closed = True
        self._generation += 1
        if self._writer is not None:
            await self._writer.flush()
        log.info("Session %s closed in %s", self.session_id, self._state.phase.value)

    # ── Internals ────────────────────────────────────────────────────

    @asynccontextmanager
    async def _turn(self) -> AsyncIterator[None]:
        if self._closed or self._state.phase == Phase.DONE:
            raise SessionClosedError(f"Session {self.session_id} is finished")
        if self._lock.locked():
            raise TurnInProgressError(f"Session {self.session_id} is awaiting a completion")
        async with self._lock:
            yield

    async def _run(self, step: Awaitable[ControllerEvent]) -> Optional[ControllerEvent]:
        try:
            return await step
        except _StaleResult:
            log.info("Discarding stale completion result for session %s", self.session_id)
            return None

    def _token(self) -> tuple[int, Phase, int]:
        return (self._generation, self._state.phase, self._state.turn_count)

    def _check_fresh(self, token: tuple[int, Phase, int]) -> None:
        if self._closed or token != self._token():
            raise _StaleResult

    def _validate_answer(
        self,
        question: Question,
        selected_value: str | None,
        free_text: str | None,
    ) -> AnsweredQuestion:
        if (selected_value is None) == (free_text is None):
            raise InvalidAnswerError("Provide exactly one of selected_value or free_text")
        if selected_value is not None:
            if question.option_for(selected_value) is None:
                raise InvalidAnswerError(f"{selected_value!r} is not an option of {question.text!r}")
            return AnsweredQuestion(question=question, selected_value=selected_value)
        text = (free_text or "").strip()
        if not text:
            raise InvalidAnswerError("Free-text answer must not be empty")
        if not question.allows_custom_answer:
            raise InvalidAnswerError(f"{question.text!r} does not accept a typed answer")
        return AnsweredQuestion(question=question, free_text_answer=text)

    def _append(self, event: SessionEvent) -> None:
        self._log.append(event)
        if self._writer is not None:
            self._writer.schedule(self._log)

    def _emit(self, event: ControllerEvent) -> ControllerEvent:
        for listener in self._listeners:
            listener(event)
        return event

    def _set_phase(self, phase: Phase) -> None:
        if self._state.phase != phase:
            log.info("Session %s: %s -> %s", self.session_id, self._state.phase.value, phase.value)
            self._state.phase = phase

    def _present(self, question: Question) -> ControllerEvent:
        self._state.mark_asked(question)
        self._append(SessionEvent(kind=EventKind.QUESTION, question=question))
        return self._emit(
            QuestionPresented(self.session_id, question, self._state.turn_count, self._state.phase)
        )

    async def _next_turn(self) -> ControllerEvent:
        if self._state.turn_count >= self._dialogue.max_total_questions:
            reason = MaxQuestionsReached(f"{self._state.turn_count} questions asked")
            return await self._enter_summarizing(str(reason))

        if self._state.phase == Phase.FIXED:
            question = self._state.next_fixed(self._bank)
            if question is not None:
                return self._present(question)
            self._set_phase(Phase.DYNAMIC)

        if self._state.phase == Phase.DYNAMIC:
            question = await self._generate_follow_up()
            if question is None:
                return await self._enter_summarizing("no further questions")
            return self._present(question)

        return await self._run_summary()

    async def _generate_follow_up(self) -> Optional[Question]:
        """New follow-up question, or ``None`` when the dialogue should end."""
        state = self._state
        attempts = self._dialogue.duplicate_attempts
        for attempt in range(1, attempts + 1):
            prompt = build_follow_up_prompt(
                state.complaint,
                state.answers,
                state.asked_texts,
                asked_count=state.turn_count,
                max_questions=self._dialogue.max_total_questions,
                sentinel=self._dialogue.enough_info_sentinel,
            )
            token = self._token()
            # any failure of the call itself degrades to the fallback question
            try:
                text = await self._completion.complete(prompt)
            except Exception as e:
                self._check_fresh(token)
                log.warning("Follow-up generation failed (%s: %s), using fallback question", type(e).__name__, e)
                question = smart_fallback_question(state.complaint, len(state.answers))
            else:
                self._check_fresh(token)
                if is_enough_info(text, self._dialogue.enough_info_sentinel):
                    log.info("Session %s: completion reports enough information", self.session_id)
                    return None
                question = parse_follow_up(
                    text,
                    max_chars=self._dialogue.question_max_chars,
                    min_break=self._dialogue.truncation_min_break,
                    min_options=self._dialogue.min_options,
                    max_options=self._dialogue.max_options,
                )

            if not self._similarity.is_already_asked(question.text, state.asked_texts):
                return question
            log.warning("Duplicate follow-up on attempt %d/%d: %r", attempt, attempts, question.text)

        log.info("Session %s: %s, moving to summary", self.session_id, DuplicateQuestionExhausted(attempts))
        return None

    async def _enter_summarizing(self, reason: str) -> ControllerEvent:
        log.info("Session %s summarizing (%s)", self.session_id, reason)
        self._set_phase(Phase.SUMMARIZING)
        self._state.pending_question = None
        self._append(SessionEvent(kind=EventKind.SUMMARIZING, text=reason))
        return await self._run_summary()

    def _error(self, kind: str, message: str) -> ControllerEvent:
        return self._emit(
            ErrorOccurred(
                session_id=self.session_id,
                kind=kind,
                message=message,
                retryable=True,
                turn_count=self._state.turn_count,
                phase=self._state.phase,
            )
        )

    async def _run_summary(self) -> ControllerEvent:
        state = self._state
        prompt = build_summary_prompt(state.complaint, state.answers)
        token = self._token()
        try:
            text = await self._completion.complete(prompt)
        except Exception as e:
            self._check_fresh(token)
            log.error("Session %s: assessment failed (%s: %s)", self.session_id, type(e).__name__, e)
            return self._error(type(e).__name__, str(e))
        self._check_fresh(token)

        marker = find_error_marker(
            text, self._summary.error_markers, whole_words=self._summary.error_marker_whole_words
        )
        if marker is not None:
            log.error("Session %s: assessment response looks like an error (%r)", self.session_id, marker)
            return self._error("CompletionUnavailable", f"Assessment service returned an error: {text[:200]}")

        try:
            assessment = build_assessment(
                text,
                state.complaint,
                parser=self._parser,
                extractor=self._extractor,
                fallback_section_type=self._summary.fallback_section_type,
            )
        except UnparseableSummary as e:
            log.error("Session %s: %s", self.session_id, e)
            return self._error(type(e).__name__, str(e))

        state.assessment = assessment
        self._set_phase(Phase.DONE)
        self._append(SessionEvent(kind=EventKind.COMPLETED, assessment=assessment))
        log.info(
            "Session %s done: %d sections, specialties=%s, urgency=%s",
            self.session_id,
            len(assessment.sections),
            [s.value for s in assessment.specialties],
            assessment.urgency.value,
        )
        return self._emit(SummaryReady(self.session_id, assessment, state.turn_count))
