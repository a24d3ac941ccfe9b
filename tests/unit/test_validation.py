import pytest

from interview_session.errors import ValidationError
from interview_session.validation import validate_start


def _payload(**overrides):
    base = {
        "type": "technical",
        "industry": "Finance",
        "position": "Backend Engineer",
        "difficulty": "medium",
        "totalQuestions": 3,
    }
    base.update(overrides)
    return base


def test_valid_payload():
    params = validate_start(_payload(candidateName=" Ada "))
    assert params.total_questions == 3
    assert params.candidate_name == "Ada"
    assert params.experience_level is None


def test_every_violation_is_listed():
    with pytest.raises(ValidationError) as info:
        validate_start({"type": "quiz", "difficulty": "extreme", "totalQuestions": 0})
    errors = info.value.errors
    assert any(e.startswith("type must be one of") for e in errors)
    assert "industry is required" in errors
    assert "position is required" in errors
    assert any(e.startswith("difficulty must be one of") for e in errors)
    assert "totalQuestions must be between 1 and 20" in errors
    assert len(errors) == 5


@pytest.mark.parametrize("value", [True, "three", 2.5, None])
def test_total_questions_must_be_integer(value):
    with pytest.raises(ValidationError):
        validate_start(_payload(totalQuestions=value))


def test_total_questions_accepts_integral_forms():
    assert validate_start(_payload(totalQuestions="4")).total_questions == 4
    assert validate_start(_payload(totalQuestions=5.0)).total_questions == 5


def test_job_specific_requires_requirements():
    with pytest.raises(ValidationError) as info:
        validate_start(_payload(type="job-specific"))
    assert info.value.errors == ["jobRequirements are required for job-specific interviews"]
    params = validate_start(_payload(type="job-specific", jobRequirements=["Go", " "]))
    assert params.job_requirements == ["Go"]


def test_role_based_requires_experience_level():
    with pytest.raises(ValidationError) as info:
        validate_start(_payload(type="role-based"))
    assert "experienceLevel is required for role-based interviews" in info.value.errors


def test_role_based_fills_competencies_from_catalog():
    params = validate_start(_payload(type="role-based", experienceLevel="senior", position="Software Engineer"))
    assert "Architecture design" in params.role_competencies


def test_role_based_unknown_position_needs_explicit_competencies():
    with pytest.raises(ValidationError):
        validate_start(_payload(type="role-based", experienceLevel="mid", position="Astronaut"))
    params = validate_start(
        _payload(type="role-based", experienceLevel="mid", position="Astronaut", roleCompetencies=["EVA"])
    )
    assert params.role_competencies == ["EVA"]


def test_list_fields_must_hold_strings():
    with pytest.raises(ValidationError) as info:
        validate_start(_payload(jobRequirements="Python", roleCompetencies=[1, 2], candidateName=7))
    assert set(info.value.errors) == {
        "jobRequirements must be a list of strings",
        "roleCompetencies must be a list of strings",
        "candidateName must be a string",
    }


def test_present_but_wrong_typed_fields_are_invalid_not_missing():
    with pytest.raises(ValidationError) as info:
        validate_start(_payload(type=5, industry=["Finance"], position=42, difficulty="  ", experienceLevel=3))
    errors = info.value.errors
    assert "type must be one of: technical, behavioral, mixed, role-based, job-specific" in errors
    assert any(e.startswith("industry must be one of: Technology") for e in errors)
    assert "position must be a string" in errors
    assert "difficulty is required" in errors
    assert "experienceLevel must be one of: entry, mid, senior" in errors
    assert "type is required" not in errors
    assert "industry is required" not in errors
    assert len(errors) == 5
