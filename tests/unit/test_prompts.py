"""Tests for the prompt registry and prompt builders."""

from __future__ import annotations

import pytest

from symptom_dialogue.prompts import (
    build_flash_prompt,
    build_follow_up_prompt,
    build_summary_prompt,
    format_answers,
    get_prompt,
    override_prompt,
)


class TestRegistry:
    def test_lookup(self) -> None:
        assert "{sentinel}" in get_prompt("dialogue", "FOLLOW_UP_PROMPT")
        assert "**SUMMARY OF CASE:**" in get_prompt("assessment", "SUMMARY_PROMPT")

    def test_module_attribute_access(self) -> None:
        from symptom_dialogue.prompts.templates import assessment

        assert assessment.FLASH_PROMPT == get_prompt("assessment", "FLASH_PROMPT")

    @pytest.mark.parametrize("category,name", [("dialogue", "NOPE"), ("missing", "FOLLOW_UP_PROMPT")])
    def test_unknown_raises_key_error(self, category: str, name: str) -> None:
        with pytest.raises(KeyError):
            get_prompt(category, name)

    def test_override(self) -> None:
        override_prompt("assessment", "FLASH_PROMPT", "Short: {complaint}")
        assert build_flash_prompt("nosebleed") == "Short: nosebleed"

    def test_override_unknown_rejected(self) -> None:
        with pytest.raises(KeyError):
            override_prompt("assessment", "NOT_A_PROMPT", "x")


class TestBuilders:
    def test_format_answers(self) -> None:
        assert format_answers({"How severe?": "Mild", "Any fever?": "No"}) == "How severe?: Mild\nAny fever?: No"

    def test_follow_up_prompt(self) -> None:
        prompt = build_follow_up_prompt(
            "I have chest pain",
            {"How severe are your symptoms?": "Moderate"},
            ["How long have you had these symptoms?", "How severe are your symptoms?"],
            asked_count=2,
        )
        assert "Main complaint: I have chest pain" in prompt
        assert "How severe are your symptoms?: Moderate" in prompt
        assert "How long have you had these symptoms?; How severe are your symptoms?" in prompt
        assert "Questions asked so far: 2/10" in prompt
        assert "Remaining questions available: 8" in prompt
        assert 'respond with exactly: "ENOUGH_INFO"' in prompt

    def test_summary_prompt_is_deterministic(self) -> None:
        answers = {"How severe are your symptoms?": "Moderate"}
        first = build_summary_prompt("chest pain", answers)
        assert first == build_summary_prompt("chest pain", dict(answers))
        assert "Main Complaint: chest pain" in first
        assert "Q: How severe are your symptoms?\nA: Moderate" in first
        assert "**RECOMMENDED SPECIALTY:**" in first

    def test_flash_prompt(self) -> None:
        prompt = build_flash_prompt("Deep cut on my hand {bleeding}")
        assert prompt.endswith("User's Emergency Input: Deep cut on my hand {bleeding}")
