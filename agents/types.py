"""Payload shapes expected back from the generative text service."""
import json
from typing import Any, List, Optional

from pydantic import Field, field_validator

from interview_session.models import CamelModel


def as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item).strip()]
    return [str(value)]


class GeneratedQuestion(CamelModel):  # Service reply for question generation
    question: str = Field(min_length=1)
    category: Optional[str] = None
    difficulty: Optional[str] = None
    expected_keywords: List[str] = Field(default_factory=list)
    sample_answers: List[str] = Field(default_factory=list)
    time_limit: Optional[int] = None
    max_score: Optional[float] = None
    topic: Optional[str] = None
    depth: Optional[str] = None
    context: Optional[str] = None
    follow_up_strategy: Optional[str] = None

    @field_validator("expected_keywords", "sample_answers", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> List[str]:
        return as_str_list(value)

    @field_validator("question")
    @classmethod
    def _strip_question(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("question text is blank")
        return stripped


class AiAnalysis(CamelModel):  # Dimensional scores as returned by the service
    technical_accuracy: Optional[float] = None
    communication_skills: Optional[float] = None
    problem_solving: Optional[float] = None
    confidence: Optional[float] = None
    relevance: Optional[float] = None


class RawEvaluation(CamelModel):  # Service reply for answer evaluation
    score: float
    feedback: str = ""
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    ai_analysis: Optional[AiAnalysis] = None
    job_fit_score: Optional[float] = None
    role_competency_score: Optional[float] = None
    topic_analysis: Optional[str] = None
    improvement_suggestions: List[str] = Field(default_factory=list)
    next_steps: Optional[str] = None

    @field_validator("strengths", "weaknesses", "suggestions", "improvement_suggestions", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> List[str]:
        return as_str_list(value)

    @field_validator("feedback", mode="before")
    @classmethod
    def _coerce_feedback(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("topic_analysis", "next_steps", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            return "; ".join(str(item) for item in value)
        return json.dumps(value, ensure_ascii=False)
