"""Fixed intake questions asked before any generated follow-up."""

from __future__ import annotations

from typing import Optional, Sequence

from symptom_dialogue.dialogue.similarity import normalize
from symptom_dialogue.models import Option, Question

INTAKE_QUESTIONS: tuple[Question, ...] = (
    Question(
        text="How long have you had these symptoms?",
        options=[
            Option(label="Less than 24 hours", value="less_than_24h"),
            Option(label="1-3 days", value="1_3_days"),
            Option(label="4-7 days", value="4_7_days"),
            Option(label="More than a week", value="more_than_week"),
        ],
    ),
    Question(
        text="How severe are your symptoms?",
        options=[
            Option(label="Mild", value="mild"),
            Option(label="Moderate", value="moderate"),
            Option(label="Severe", value="severe"),
        ],
    ),
    Question(
        text="What event or situation might have caused these symptoms?",
        options=[
            Option(label="Recent illness or infection", value="recent_illness"),
            Option(label="Missed regular medication", value="missed_medication"),
            Option(label="Smoking or alcohol habit", value="smoking_alcohol_habit"),
            Option(label="Food or diet changes", value="food_diet_changes"),
        ],
    ),
    Question(
        text="Do you have any previous medical history?",
        options=[
            Option(label="Hypertension", value="hypertension"),
            Option(label="Diabetes", value="diabetes"),
            Option(label="Thyroid disease", value="thyroid_disease"),
            Option(label="Lung diseases", value="lung_diseases"),
            Option(label="Asthma", value="asthma"),
            Option(label="No significant history", value="none"),
        ],
    ),
)


class QuestionBank:
    """Static ordered list of intake questions."""

    def __init__(self, questions: Sequence[Question] = INTAKE_QUESTIONS) -> None:
        self._questions = tuple(questions)
        self._normalized = frozenset(normalize(q.text) for q in self._questions)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self):
        return iter(self._questions)

    def next_fixed(self, index: int) -> Optional[Question]:
        """Question at ``index``, or ``None`` once the bank is exhausted."""
        if 0 <= index < len(self._questions):
            return self._questions[index]
        return None

    def contains(self, text: str) -> bool:
        """Whether ``text`` is (after normalization) one of the bank questions."""
        return normalize(text) in self._normalized
