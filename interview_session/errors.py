"""Error taxonomy surfaced by the interview engine."""
from __future__ import annotations

from typing import Iterable, List, Optional


class InterviewError(Exception):  # Base engine error
    pass


class ValidationError(InterviewError):  # Bad or missing request fields, all listed
    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid request")


class NotFoundError(InterviewError, KeyError):  # Unknown session id
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidStateError(InterviewError):  # Action not legal in the current status
    def __init__(self, message: str, *, expected: Optional[str] = None) -> None:
        self.expected = expected
        super().__init__(message)


class QuestionGenerationError(InterviewError):  # Neither the service nor the bank produced a question
    pass


__all__ = [
    "InterviewError",
    "ValidationError",
    "NotFoundError",
    "InvalidStateError",
    "QuestionGenerationError",
]
