import json

import pytest

from config.registry import JOB_POSTING_KEY, bind_service
from interview_session.errors import ValidationError
from jd_analysis import fallback_job_data, parse_job_posting

from tests.fakes import failing_service


POSTING = """
Senior Backend Engineer - Acme Bank
We need someone with 6+ years of Python and PostgreSQL to own our ledger services.
Salary: $150k-$180k
"""


def test_parses_structured_reply():
    reply = {
        "title": "Senior Backend Engineer",
        "requirements": ["6+ years of Python", "PostgreSQL"],
        "skills": "Python",
        "responsibilities": ["Own ledger services"],
        "experienceLevel": "Senior",
        "salaryRange": "$150k-$180k",
        "industry": "Finance",
    }
    prompts = []

    def service(prompt):
        prompts.append(prompt)
        return "```json\n" + json.dumps(reply) + "\n```"

    bind_service(JOB_POSTING_KEY, service)
    data = parse_job_posting(POSTING)
    assert data.title == "Senior Backend Engineer"
    assert data.skills == ["Python"]
    assert data.experience_level == "senior"
    assert data.salary_range == "$150k-$180k"
    assert "ledger services" in prompts[0]


def test_unknown_level_and_blank_industry_are_coerced():
    bind_service(JOB_POSTING_KEY, lambda prompt: json.dumps({"title": "Analyst", "experienceLevel": "guru", "industry": ""}))
    data = parse_job_posting(POSTING)
    assert data.experience_level == "mid"
    assert data.industry == "Technology"


@pytest.mark.parametrize("service", [failing_service, lambda prompt: "no idea", lambda prompt: json.dumps({"title": ""})])
def test_failures_return_template(service):
    bind_service(JOB_POSTING_KEY, service)
    assert parse_job_posting(POSTING) == fallback_job_data()


def test_unbound_service_returns_template():
    assert parse_job_posting(POSTING).title == "Software Engineer"


@pytest.mark.parametrize("text", ["", "   ", None])
def test_blank_posting_is_rejected(text):
    with pytest.raises(ValidationError):
        parse_job_posting(text)
