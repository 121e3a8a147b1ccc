"""Nested pydantic-settings configuration for the dialogue engine.

Each sub-config reads its own ``SYMPTOM_<GROUP>_*`` env vars::

    export SYMPTOM_LLM_MODEL=openai/gpt-4o-mini
    export SYMPTOM_DIALOGUE_MAX_TOTAL_QUESTIONS=8
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_ERROR_MARKERS: tuple[str, ...] = (
    "apologize",
    "trouble connecting",
    "API key",
    "authentication failed",
    "quota",
    "limit",
)


class LLMConfig(BaseSettings):
    """Completion backend configuration.

    Env vars use ``SYMPTOM_LLM_`` prefix. List values are JSON encoded::

        export SYMPTOM_LLM_FALLBACK_MODELS='["openai/gpt-4o-mini"]'
        export SYMPTOM_LLM_API_KEYS='["key-1", "key-2"]'
    """

    model_config = {"env_prefix": "SYMPTOM_LLM_"}

    model: str = "gemini/gemini-2.0-flash"
    fallback_models: list[str] = Field(default_factory=list)
    api_keys: list[str] = Field(default_factory=list)
    api_base: str | None = None
    temperature: float = 0.7
    max_tokens: int = 2048
    timeout: float = 60.0
    max_retries: int = 2
    retry_max_delay: float = 30.0
    retry_jitter_factor: float = 0.5
    system_prompt: str = (
        "You are an experienced medical professional certified in "
        "emergency medicine and first aid."
    )


class DialogueConfig(BaseSettings):
    """Question flow tuning.

    Env vars use ``SYMPTOM_DIALOGUE_`` prefix.
    """

    model_config = {"env_prefix": "SYMPTOM_DIALOGUE_"}

    max_total_questions: int = Field(default=10, ge=1)
    similarity_threshold: float = Field(default=0.8, gt=0.0, le=1.0)
    containment_min_length: int = 10
    min_token_length: int = 3
    question_max_chars: int = Field(default=110, ge=20)
    truncation_min_break: int = 0
    duplicate_attempts: int = Field(default=5, ge=1)
    enough_info_sentinel: str = "ENOUGH_INFO"
    min_options: int = 2
    max_options: int = 4


class SummaryConfig(BaseSettings):
    """Summary parsing configuration.

    Env vars use ``SYMPTOM_SUMMARY_`` prefix.
    """

    model_config = {"env_prefix": "SYMPTOM_SUMMARY_"}

    min_section_chars: int = 10
    fallback_section_type: str = "Medical Assessment"
    error_markers: list[str] = Field(default_factory=lambda: list(DEFAULT_ERROR_MARKERS))
    error_marker_whole_words: bool = False


class PersistenceConfig(BaseSettings):
    """Session log persistence.

    Env vars use ``SYMPTOM_PERSISTENCE_`` prefix.
    """

    model_config = {"env_prefix": "SYMPTOM_PERSISTENCE_"}

    backend: Literal["file", "memory"] = "file"
    store_path: Path = Path("./sessions")
    key_prefix: str = "sessions/"
    debounce_seconds: float = Field(default=1.0, ge=0.0)


class ResilienceConfig(BaseSettings):
    """Circuit breaker settings for completion providers.

    Env vars use ``SYMPTOM_RESILIENCE_`` prefix.
    """

    model_config = {"env_prefix": "SYMPTOM_RESILIENCE_"}

    circuit_breaker_enabled: bool = True
    failure_threshold: int = 5
    recovery_timeout: float = 60.0


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``SYMPTOM_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "SYMPTOM_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: bool = False


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    dialogue: DialogueConfig = Field(default_factory=DialogueConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    resilience: ResilienceConfig = Field(default_factory=ResilienceConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
