"""Near-duplicate detection for question texts.

Generated follow-ups often rephrase an earlier question, so plain string
equality is not enough. Three tiers are checked in order: exact match on the
normalized form, containment of one normalized form in the other, then
overlap of the meaningful word tokens.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]+")
_TOKEN_SPLIT_RE = re.compile(r"[^a-zA-Z0-9]+")

DEFAULT_THRESHOLD = 0.8
DEFAULT_CONTAINMENT_MIN_LENGTH = 10
DEFAULT_MIN_TOKEN_LENGTH = 3


def normalize(text: str) -> str:
    """Strip every non-alphanumeric character and lower-case."""
    return _NON_ALNUM_RE.sub("", text).lower()


def tokens(text: str, *, min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> set[str]:
    """Lower-cased word tokens, ignoring those shorter than ``min_length``."""
    return {t for t in _TOKEN_SPLIT_RE.split(text.lower()) if len(t) >= min_length}


def token_overlap(a: str, b: str, *, min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> float:
    """Shared tokens divided by the larger token-set size (0.0 if both empty)."""
    words_a = tokens(a, min_length=min_token_length)
    words_b = tokens(b, min_length=min_token_length)
    denominator = max(len(words_a), len(words_b))
    if denominator == 0:
        return 0.0
    return len(words_a & words_b) / denominator


def are_similar(
    a: str,
    b: str,
    *,
    threshold: float = DEFAULT_THRESHOLD,
    containment_min_length: int = DEFAULT_CONTAINMENT_MIN_LENGTH,
    min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
) -> bool:
    norm_a = normalize(a)
    norm_b = normalize(b)
    if norm_a == norm_b:
        return True
    if (
        len(norm_a) > containment_min_length
        and len(norm_b) > containment_min_length
        and (norm_a in norm_b or norm_b in norm_a)
    ):
        return True
    return token_overlap(a, b, min_token_length=min_token_length) > threshold


def is_already_asked(candidate: str, asked: Iterable[str], **kwargs: Any) -> bool:
    """True when ``candidate`` is similar to any member of ``asked``."""
    return any(are_similar(candidate, prev, **kwargs) for prev in asked)


class QuestionSimilarity:
    """``are_similar`` / ``is_already_asked`` bound to configured thresholds."""

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        containment_min_length: int = DEFAULT_CONTAINMENT_MIN_LENGTH,
        min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
    ) -> None:
        self._threshold = threshold
        self._containment_min_length = containment_min_length
        self._min_token_length = min_token_length

    normalize = staticmethod(normalize)

    def are_similar(self, a: str, b: str) -> bool:
        return are_similar(
            a,
            b,
            threshold=self._threshold,
            containment_min_length=self._containment_min_length,
            min_token_length=self._min_token_length,
        )

    def is_already_asked(self, candidate: str, asked: Iterable[str]) -> bool:
        return any(self.are_similar(candidate, prev) for prev in asked)
