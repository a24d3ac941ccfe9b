"""Pydantic schemas for the interview action API."""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict

ActionId = Literal[
    "start",
    "next-question",
    "submit-answer",
    "get-results",
    "pause",
    "resume",
    "parse-job-posting",
]


class ActionReq(BaseModel):
    """One action request; start parameters travel as extra fields."""

    model_config = ConfigDict(extra="allow")

    action: Optional[str] = None
    sessionId: Optional[str] = None
    answer: Any = None
    timeSpent: Any = None
    jobPosting: Any = None


class ErrorResp(BaseModel):
    success: Literal[False] = False
    error: str


class HealthResp(BaseModel):
    message: str
