"""Salary-negotiation closing question."""
from __future__ import annotations

from interview_session.models import Question, Session

from .common import make_question

SALARY_CATEGORY = "salary"
CLOSER_TOPIC = "compensation"


def salary_closer(session: Session) -> Question:
    text = (
        f"What are your salary expectations for this {session.position} position in the "
        f"{session.industry} industry?"
    )
    return make_question(
        text,
        session,
        id_prefix="salary",
        code_prefix="SALARY",
        category=SALARY_CATEGORY,
        topic=CLOSER_TOPIC,
        expected_keywords=["salary", "expectations", "compensation", "negotiation"],
        sample_answers=[
            "Based on my research for this role and my experience, I am looking for a range in line with the "
            "market, and I am open to discussing the full compensation package.",
            "I would like to understand the responsibilities and benefits better, but a competitive range "
            "for this level in this industry is what I have in mind.",
        ],
    )
