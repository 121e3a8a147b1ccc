"""Pydantic data models for symptom-dialogue.

Questions and answers flow through the dialogue engine; summary sections
and the final ``Assessment`` are what the engine emits once done.
``SessionEvent`` is the unit of the persisted, replayable session log.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ── Enums ────────────────────────────────────────────────────────────


class Phase(str, Enum):
    FIXED = "fixed"
    DYNAMIC = "dynamic"
    SUMMARIZING = "summarizing"
    DONE = "done"


class Specialty(str, Enum):
    """Canonical department tags used for downstream hospital routing."""

    CARDIOLOGY = "cardiology"
    NEUROLOGY = "neurology"
    ORTHOPEDICS = "orthopedics"
    GASTROENTEROLOGY = "gastroenterology"
    DERMATOLOGY = "dermatology"
    OPHTHALMOLOGY = "ophthalmology"
    ENT = "ent"
    PULMONOLOGY = "pulmonology"
    ENDOCRINOLOGY = "endocrinology"
    UROLOGY = "urology"
    GYNECOLOGY = "gynecology"
    PEDIATRICS = "pediatrics"
    EMERGENCY = "emergency"
    INTERNAL = "internal"


class SectionKind(str, Enum):
    CASE_SUMMARY = "case_summary"
    URGENCY = "urgency"
    SPECIALTY = "specialty"
    FIRST_AID = "first_aid"
    INVESTIGATIONS = "investigations"
    OTHER = "other"


class UrgencyLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class EventKind(str, Enum):
    COMPLAINT = "complaint"
    QUESTION = "question"
    ANSWER = "answer"
    SUMMARIZING = "summarizing"
    COMPLETED = "completed"


# ── Questions / answers ──────────────────────────────────────────────

_WHITESPACE_RE = re.compile(r"\s+")


def option_value(label: str) -> str:
    """Derive an option value from its display label."""
    return _WHITESPACE_RE.sub("_", label.strip().lower())


class Option(BaseModel):
    """A single selectable answer."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class Question(BaseModel):
    """A question with its options in display order.

    Every question also accepts a typed free-text answer; that capability is
    advertised by ``allows_custom_answer`` rather than modelled as an option.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    options: list[Option] = Field(default_factory=list)
    allows_custom_answer: bool = True

    @field_validator("options")
    @classmethod
    def _unique_values(cls, options: list[Option]) -> list[Option]:
        seen: set[str] = set()
        for opt in options:
            if opt.value in seen:
                raise ValueError(f"Duplicate option value: {opt.value!r}")
            seen.add(opt.value)
        return options

    @classmethod
    def from_labels(cls, text: str, labels: list[str]) -> Question:
        """Build a question from plain labels, dropping labels whose value repeats."""
        options: list[Option] = []
        seen: set[str] = set()
        for label in labels:
            value = option_value(label)
            if not value or value in seen:
                continue
            seen.add(value)
            options.append(Option(label=label.strip(), value=value))
        return cls(text=text, options=options)

    def option_for(self, value: str) -> Optional[Option]:
        for opt in self.options:
            if opt.value == value:
                return opt
        return None


class AnsweredQuestion(BaseModel):
    """A question together with exactly one of: selected value, free text."""

    question: Question
    selected_value: Optional[str] = None
    free_text_answer: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_answer(self) -> AnsweredQuestion:
        if (self.selected_value is None) == (self.free_text_answer is None):
            raise ValueError("Exactly one of selected_value / free_text_answer must be set")
        return self

    @property
    def answer_text(self) -> str:
        """What the patient saw or typed: option label or free text."""
        if self.selected_value is not None:
            opt = self.question.option_for(self.selected_value)
            return opt.label if opt else self.selected_value
        return self.free_text_answer or ""


# ── Summary ──────────────────────────────────────────────────────────

_LIST_MARKER_RE = re.compile(r"^(?:[-•*→➤▶]\s*|\d+[.)]\s*|[a-zA-Z]\)\s*)")


class SummarySection(BaseModel):
    """One labelled block of the assessment text."""

    type: str
    content: str

    @property
    def kind(self) -> SectionKind:
        from symptom_dialogue.summary.section_patterns import classify_heading

        return classify_heading(self.type)

    def items(self) -> list[str]:
        """Split content into list items, stripping bullet/number markers."""
        items: list[str] = []
        for line in self.content.splitlines():
            stripped = line.strip()
            if not stripped:
                continue
            cleaned = _LIST_MARKER_RE.sub("", stripped, count=1).strip()
            if cleaned:
                items.append(cleaned)
        return items


class Assessment(BaseModel):
    """Final structured output of a finished conversation."""

    sections: list[SummarySection]
    specialties: list[Specialty] = Field(min_length=1)
    urgency: UrgencyLevel = UrgencyLevel.UNKNOWN
    raw_text: str = ""

    def section(self, kind: SectionKind) -> Optional[SummarySection]:
        for sec in self.sections:
            if sec.kind == kind:
                return sec
        return None


# ── Session log ──────────────────────────────────────────────────────


class SessionEvent(BaseModel):
    """One entry of the append-only session log used for persistence/replay.

    - ``complaint``: ``text`` is the patient's opening complaint
    - ``question``: ``question`` was presented to the patient
    - ``answer``: ``text`` is the question text answered, plus exactly one of
      ``selected_value`` / ``free_text_answer``
    - ``summarizing``: the question phase ended
    - ``completed``: ``assessment`` holds the final output
    """

    kind: EventKind
    text: str = ""
    question: Optional[Question] = None
    selected_value: Optional[str] = None
    free_text_answer: Optional[str] = None
    assessment: Optional[Assessment] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
