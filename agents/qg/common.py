"""Shared utilities for templated question builders."""
from __future__ import annotations

from typing import List

from interview_session.models import Question, Session, code_token, mint_id

TEMPLATE_TIME_LIMIT = 180
TEMPLATE_MAX_SCORE = 10


def session_code(prefix: str, session: Session) -> str:
    """Build a ``PREFIX_POSITION_INDUSTRY`` question code."""

    return f"{prefix}_{code_token(session.position)}_{code_token(session.industry)}"


def make_question(
    text: str,
    session: Session,
    *,
    id_prefix: str,
    code_prefix: str,
    category: str,
    topic: str,
    expected_keywords: List[str],
    sample_answers: List[str],
) -> Question:
    """Create a deterministic templated Question for ``session``."""

    return Question(
        id=mint_id(id_prefix),
        question_code=session_code(code_prefix, session),
        category=category,
        difficulty=session.difficulty,
        text=text.strip(),
        expected_keywords=expected_keywords,
        sample_answers=sample_answers,
        time_limit=TEMPLATE_TIME_LIMIT,
        max_score=TEMPLATE_MAX_SCORE,
        role_specific=False,
        topic=topic,
        depth="introductory",
    )
