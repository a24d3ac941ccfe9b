"""Personalized opening question."""
from __future__ import annotations

from interview_session.models import Question, Session

from .common import make_question

OPENER_TOPIC = "introduction"


def personalized_opener(session: Session) -> Question:
    name = (session.candidate_name or "").strip() or "candidate"
    text = (
        f"Hi {name}, can you tell me about yourself and why you're interested in the "
        f"{session.position} role in the {session.industry} industry?"
    )
    return make_question(
        text,
        session,
        id_prefix="personalized",
        code_prefix="PERS",
        category="personalized",
        topic=OPENER_TOPIC,
        expected_keywords=["background", "motivation", "interest", "experience"],
        sample_answers=[
            f"I have worked on problems close to what a {session.position} does, and the "
            f"{session.industry} industry appeals to me because of the impact of the work.",
        ],
    )
