from __future__ import annotations  # Interview session models and errors

from .errors import (
    InterviewError,
    InvalidStateError,
    NotFoundError,
    QuestionGenerationError,
    ValidationError,
)
from .models import Answer, Evaluation, Question, Session, SessionParams, Subscores

__all__ = [
    "InterviewError",
    "InvalidStateError",
    "NotFoundError",
    "QuestionGenerationError",
    "ValidationError",
    "Answer",
    "Evaluation",
    "Question",
    "Session",
    "SessionParams",
    "Subscores",
]
