"""Exception hierarchy for symptom-dialogue."""

from __future__ import annotations


class SymptomDialogueError(Exception):
    """Base exception for all symptom-dialogue errors."""


class CompletionError(SymptomDialogueError):
    """Raised when a text-completion call fails."""

    def __init__(self, message: str, *, provider: str = "") -> None:
        super().__init__(message)
        self.provider = provider


class RateLimited(CompletionError):
    """Quota or rate limit hit (HTTP 429 and friends)."""


class AuthFailed(CompletionError):
    """Missing, invalid or revoked API key."""


class NetworkError(CompletionError):
    """Connection failures, timeouts, 5xx."""


class InvalidResponse(CompletionError):
    """The service answered, but with nothing usable."""


class CompletionUnavailable(SymptomDialogueError):
    """Completion failed in a place where the caller must retry."""

    def __init__(self, message: str, *, retryable: bool = True) -> None:
        super().__init__(message)
        self.retryable = retryable


class DuplicateQuestionExhausted(SymptomDialogueError):
    """Every follow-up attempt repeated an already asked question."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"No new follow-up question after {attempts} attempts")
        self.attempts = attempts


class MaxQuestionsReached(SymptomDialogueError):
    """The question budget of the session is spent."""


class UnparseableSummary(SymptomDialogueError):
    """Summary completion contained no usable text."""

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


class InvalidAnswerError(SymptomDialogueError):
    """Answer does not fit the pending question."""


class SessionClosedError(SymptomDialogueError):
    """Input was submitted to a finished conversation."""


class TurnInProgressError(SymptomDialogueError):
    """A turn was started while another is still awaiting completion."""


class PersistenceError(SymptomDialogueError):
    """Raised when a persistence backend operation fails."""
