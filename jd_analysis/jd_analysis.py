from __future__ import annotations  # Job posting extraction module

from textwrap import dedent
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from agents.prompts import clamp_text
from agents.service_call import ask_structured
from agents.types import as_str_list
from config.registry import JOB_POSTING_KEY
from config.settings import settings
from interview_session.errors import ValidationError
from interview_session.models import CamelModel
from llm_gateway import ParsedFail
from observability import log_event

MAX_POSTING_CHARS = 8000


class JobData(CamelModel):  # Structured job posting fields
    title: str = Field(min_length=1)
    requirements: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    experience_level: Literal["entry", "mid", "senior"] = "mid"
    salary_range: Optional[str] = None
    industry: str = "Technology"

    @field_validator("requirements", "skills", "responsibilities", mode="before")
    @classmethod
    def _coerce_lists(cls, value):
        return as_str_list(value)

    @field_validator("experience_level", mode="before")
    @classmethod
    def _coerce_level(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("entry", "mid", "senior"):
            return value.strip().lower()
        return "mid"

    @field_validator("industry", mode="before")
    @classmethod
    def _coerce_industry(cls, value):
        if isinstance(value, str) and value.strip():
            return value.strip()
        return "Technology"

    @field_validator("salary_range", mode="before")
    @classmethod
    def _coerce_salary(cls, value):
        if value is None or isinstance(value, str):
            return value or None
        return str(value)


def fallback_job_data() -> JobData:  # Templated data when extraction fails
    return JobData(
        title="Software Engineer",
        requirements=["Programming skills", "Problem solving", "Team collaboration"],
        skills=["JavaScript", "React", "Node.js", "Git"],
        responsibilities=["Develop web applications", "Collaborate with team", "Code review"],
        experience_level="mid",
        industry="Technology",
    )


def parse_job_posting(text: str) -> JobData:
    """Extract structured fields from a job posting; never fails on service errors.

    Raises:
        ValidationError: if ``text`` is blank.
    """

    if not isinstance(text, str) or not text.strip():
        raise ValidationError(["Job posting text is required"])
    parsed = ask_structured(
        JOB_POSTING_KEY,
        _build_task(text),
        timeout_s=settings.JOB_PARSE_TIMEOUT_S,
        session_id="-",
        name="parse_job_posting",
    )
    if isinstance(parsed, ParsedFail):
        log_event("job_posting_fallback", "-", reason=parsed.reason)
        return fallback_job_data()
    try:
        return JobData.model_validate(parsed.value)
    except PydanticValidationError as exc:
        log_event("job_posting_fallback", "-", reason=f"invalid job data: {exc.error_count()} errors")
        return fallback_job_data()


def _build_task(text: str) -> str:  # Build extraction prompt
    posting = clamp_text(text, MAX_POSTING_CHARS)
    return dedent(
        """
        Extract structured information from the job posting below.

        Respond with a JSON object following this contract:
        - title: the job title.
        - requirements: list of stated requirements, short phrases.
        - skills: list of technical and soft skills mentioned.
        - responsibilities: list of main responsibilities.
        - experienceLevel: one of entry, mid, senior.
        - salaryRange: salary range as written, or null when absent.
        - industry: the employer's industry.
        Return only JSON without markdown fences, text, or commentary.

        Job posting:
        """
    ).strip() + "\n" + posting
