"""Validation of interview start requests."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from config.settings import settings
from question_bank.competencies import competencies_for

from .errors import ValidationError
from .models import DIFFICULTIES, EXPERIENCE_LEVELS, INTERVIEW_TYPES, SessionParams

INDUSTRIES = (
    "Technology",
    "Finance",
    "Healthcare",
    "Education",
    "Marketing",
    "Sales",
    "Manufacturing",
    "Retail",
    "Consulting",
    "Government",
    "Non-profit",
    "Media",
    "Real Estate",
    "Transportation",
    "Energy",
)


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _choice(
    payload: Mapping[str, Any], field: str, allowed: Sequence[str], errors: List[str], *, required: bool = True
) -> Optional[str]:
    value = payload.get(field)
    if _blank(value):
        if required:
            errors.append(f"{field} is required")
        return None
    if not isinstance(value, str) or value.strip() not in allowed:
        errors.append(f"{field} must be one of: {', '.join(allowed)}")
        return None
    return value.strip()


def _text_list(value: Any, field: str, errors: List[str]) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        errors.append(f"{field} must be a list of strings")
        return []
    return [item.strip() for item in value if item.strip()]


def _total_questions(value: Any, errors: List[str]) -> Optional[int]:
    upper = settings.MAX_TOTAL_QUESTIONS
    if value is None:
        errors.append("totalQuestions is required")
        return None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        number = None
    if number is None:
        errors.append("totalQuestions must be an integer")
        return None
    if not 1 <= number <= upper:
        errors.append(f"totalQuestions must be between 1 and {upper}")
        return None
    return number


def validate_start(payload: Mapping[str, Any]) -> SessionParams:
    """Check every field of a start request and report all violations together.

    Raises:
        ValidationError: listing each missing or invalid field.
    """

    errors: List[str] = []

    interview_type = _choice(payload, "type", INTERVIEW_TYPES, errors)
    industry = _choice(payload, "industry", INDUSTRIES, errors)

    position = _text(payload.get("position"))
    if position is None:
        if _blank(payload.get("position")):
            errors.append("position is required")
        else:
            errors.append("position must be a string")

    difficulty = _choice(payload, "difficulty", DIFFICULTIES, errors)
    total_questions = _total_questions(payload.get("totalQuestions"), errors)

    experience_level = _choice(payload, "experienceLevel", EXPERIENCE_LEVELS, errors, required=False)

    job_requirements = _text_list(payload.get("jobRequirements"), "jobRequirements", errors)
    role_competencies = _text_list(payload.get("roleCompetencies"), "roleCompetencies", errors)

    candidate_name = payload.get("candidateName")
    if candidate_name is not None and not isinstance(candidate_name, str):
        errors.append("candidateName must be a string")
        candidate_name = None

    if interview_type == "job-specific" and not job_requirements:
        errors.append("jobRequirements are required for job-specific interviews")

    if interview_type == "role-based":
        if experience_level is None and _blank(payload.get("experienceLevel")):
            errors.append("experienceLevel is required for role-based interviews")
        elif experience_level is not None and not role_competencies and position is not None:
            role_competencies = competencies_for(position, experience_level)
            if not role_competencies:
                errors.append(
                    f"roleCompetencies are required for role-based interviews when '{position}' has no catalog entry"
                )

    if errors:
        raise ValidationError(errors)

    return SessionParams(
        type=interview_type,  # type: ignore[arg-type]
        industry=industry,  # type: ignore[arg-type]
        position=position,  # type: ignore[arg-type]
        difficulty=difficulty,  # type: ignore[arg-type]
        total_questions=total_questions,  # type: ignore[arg-type]
        experience_level=experience_level,  # type: ignore[arg-type]
        job_requirements=job_requirements,
        role_competencies=role_competencies,
        candidate_name=_text(candidate_name),
    )


__all__ = ["INDUSTRIES", "validate_start"]
