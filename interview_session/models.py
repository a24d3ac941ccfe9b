from __future__ import annotations  # Interview session domain models

from datetime import datetime, timezone
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

InterviewType = Literal["technical", "behavioral", "mixed", "role-based", "job-specific"]
Difficulty = Literal["easy", "medium", "hard"]
ExperienceLevel = Literal["entry", "mid", "senior"]
SessionStatus = Literal["active", "paused", "completed"]
Depth = Literal["introductory", "advanced"]

INTERVIEW_TYPES = ("technical", "behavioral", "mixed", "role-based", "job-specific")
DIFFICULTIES = ("easy", "medium", "hard")
EXPERIENCE_LEVELS = ("entry", "mid", "senior")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def mint_id(prefix: str) -> str:  # Opaque unique identifier with a readable prefix
    return f"{prefix}_{uuid4().hex[:16]}"


def code_token(value: str) -> str:  # Upper-case, hyphenated fragment for question codes
    return "-".join(value.strip().upper().split()) or "GENERAL"


class CamelModel(BaseModel):  # Snake-case fields, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Question(CamelModel):  # One interview question as served to the candidate
    id: str
    question_code: Optional[str] = None
    category: str
    difficulty: Difficulty
    text: str = Field(min_length=1)
    expected_keywords: List[str] = Field(default_factory=list)
    sample_answers: List[str] = Field(default_factory=list)
    time_limit: int = Field(default=240, gt=0)
    max_score: float = Field(default=10, gt=0)
    role_specific: bool = False
    topic: Optional[str] = None
    depth: Optional[Depth] = None
    context: Optional[str] = None
    follow_up_strategy: Optional[str] = None


class Answer(CamelModel):  # Candidate answer with the score it was awarded
    question_id: str
    question_code: Optional[str] = None
    text: str
    time_spent_seconds: float = Field(default=0, ge=0)
    submitted_at: datetime = Field(default_factory=utcnow)
    score: float = Field(default=0, ge=0)


class Subscores(CamelModel):  # 0-10 dimensional scores
    technical_accuracy: float = Field(default=0, ge=0, le=10)
    communication_skills: float = Field(default=0, ge=0, le=10)
    problem_solving: float = Field(default=0, ge=0, le=10)
    confidence: float = Field(default=0, ge=0, le=10)
    relevance: float = Field(default=0, ge=0, le=10)


class Evaluation(CamelModel):
    """Structured judgment of one answer.

    Evaluations are recomputed from the question and answer on demand and are
    never stored on the session. ``degraded`` marks the neutral fallback.
    """

    score: float = Field(ge=0)
    max_score: float = Field(gt=0)
    feedback: str = ""
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    subscores: Subscores = Field(default_factory=Subscores)
    job_fit_score: Optional[float] = None
    role_competency_score: Optional[float] = None
    topic_analysis: Optional[str] = None
    improvement_suggestions: List[str] = Field(default_factory=list)
    next_steps: Optional[str] = None
    degraded: bool = False


class SessionParams(CamelModel):  # Validated start request
    type: InterviewType
    industry: str
    position: str
    difficulty: Difficulty
    total_questions: int = Field(ge=1)
    experience_level: Optional[ExperienceLevel] = None
    job_requirements: List[str] = Field(default_factory=list)
    role_competencies: List[str] = Field(default_factory=list)
    candidate_name: Optional[str] = None


class Session(CamelModel):  # One end-to-end interview instance
    id: str
    type: InterviewType
    industry: str
    position: str
    difficulty: Difficulty
    experience_level: Optional[ExperienceLevel] = None
    candidate_name: Optional[str] = None
    job_requirements: List[str] = Field(default_factory=list)
    role_competencies: List[str] = Field(default_factory=list)
    total_questions: int = Field(ge=1)
    current_question_index: int = Field(default=0, ge=0)
    status: SessionStatus = "active"
    questions: List[Question] = Field(default_factory=list)
    answers: List[Answer] = Field(default_factory=list)
    total_score: float = 0
    max_possible_score: float = 0
    start_time: datetime = Field(default_factory=utcnow)
    end_time: Optional[datetime] = None

    def current_question(self) -> Optional[Question]:
        if self.current_question_index < len(self.questions):
            return self.questions[self.current_question_index]
        return None

    def used_texts(self) -> List[str]:
        return [question.text for question in self.questions]

    def append_question(self, question: Question) -> None:
        self.questions.append(question)
        self.max_possible_score += question.max_score


__all__ = [
    "InterviewType",
    "Difficulty",
    "ExperienceLevel",
    "SessionStatus",
    "Depth",
    "INTERVIEW_TYPES",
    "DIFFICULTIES",
    "EXPERIENCE_LEVELS",
    "utcnow",
    "mint_id",
    "code_token",
    "CamelModel",
    "Question",
    "Answer",
    "Subscores",
    "Evaluation",
    "SessionParams",
    "Session",
]
