"""Prompt templates and the registry that resolves them."""

from __future__ import annotations

from symptom_dialogue.prompts.builders import (
    build_flash_prompt,
    build_follow_up_prompt,
    build_summary_prompt,
    format_answers,
)
from symptom_dialogue.prompts.registry import get_prompt, override_prompt, reset_overrides

__all__ = [
    "build_flash_prompt",
    "build_follow_up_prompt",
    "build_summary_prompt",
    "format_answers",
    "get_prompt",
    "override_prompt",
    "reset_overrides",
]
