"""Tests for the fixed intake question bank."""

from __future__ import annotations

from symptom_dialogue.dialogue.question_bank import INTAKE_QUESTIONS, QuestionBank


class TestQuestionBank:
    def test_four_questions_in_order(self, bank: QuestionBank) -> None:
        assert len(bank) == 4
        assert bank.next_fixed(0).text == "How long have you had these symptoms?"
        assert bank.next_fixed(1).text == "How severe are your symptoms?"
        assert bank.next_fixed(3).text == "Do you have any previous medical history?"

    def test_exhausted_and_negative_index(self, bank: QuestionBank) -> None:
        assert bank.next_fixed(4) is None
        assert bank.next_fixed(-1) is None

    def test_option_counts_and_custom_answers(self) -> None:
        for question in INTAKE_QUESTIONS:
            assert 3 <= len(question.options) <= 6
            assert question.allows_custom_answer

    def test_contains_uses_normalized_text(self, bank: QuestionBank) -> None:
        assert bank.contains("how severe are your symptoms")
        assert not bank.contains("Does it hurt when you breathe?")

    def test_custom_bank(self) -> None:
        bank = QuestionBank(INTAKE_QUESTIONS[:2])
        assert len(bank) == 2
        assert [q.text for q in bank] == [q.text for q in INTAKE_QUESTIONS[:2]]
