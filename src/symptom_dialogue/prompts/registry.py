"""Prompt registry backed by ``_PROMPT_DATA`` template modules.

Usage::

    prompt = get_prompt("dialogue", "FOLLOW_UP_PROMPT")

Each module ``symptom_dialogue.prompts.templates.{category}`` exposes a
``_PROMPT_DATA: dict[str, str]``. ``override_prompt`` lets a deployment
replace individual templates at startup without editing those modules.
"""

from __future__ import annotations

import importlib
import logging
from types import ModuleType

logger = logging.getLogger(__name__)

_TEMPLATE_PACKAGE = "symptom_dialogue.prompts.templates"


class FilePromptBackend:
    """Loads prompts from template modules via importlib, caching the modules."""

    def __init__(self, package: str = _TEMPLATE_PACKAGE) -> None:
        self._package = package
        self._modules: dict[str, ModuleType] = {}

    def get(self, category: str, name: str) -> str:
        if category not in self._modules:
            module_path = f"{self._package}.{category}"
            try:
                self._modules[category] = importlib.import_module(module_path)
            except ModuleNotFoundError as exc:
                raise KeyError(f"Prompt module not found: {module_path}") from exc

        data: dict[str, str] | None = getattr(self._modules[category], "_PROMPT_DATA", None)
        if data is not None and name in data:
            return data[name]
        raise KeyError(f"Prompt {name!r} not found in {category}")


_backend = FilePromptBackend()
_overrides: dict[tuple[str, str], str] = {}


def get_prompt(category: str, name: str) -> str:
    """Look up a template by category and constant name.

    Raises:
        KeyError: if neither an override nor a template module defines it.
    """
    override = _overrides.get((category, name))
    if override is not None:
        return override
    return _backend.get(category, name)


def override_prompt(category: str, name: str, template: str) -> None:
    """Replace one template for the rest of the process."""
    _backend.get(category, name)
    _overrides[(category, name)] = template
    logger.info("Prompt %s/%s overridden", category, name)


def reset_overrides() -> None:
    _overrides.clear()
