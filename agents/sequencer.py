"""Decide what question N of a session is."""
from __future__ import annotations

import random
from typing import Optional

from interview_session.models import Question, Session
from observability import log_event

from . import topic_adaptation
from .qg.warmup import personalized_opener
from .qg.wrapup import salary_closer
from .question_provider import GenerativeQuestionProvider


class QuestionSequencer:
    """Opener at index 0, salary closer at the last index, adaptive questions between.

    ``next_question`` mutates ``session`` by appending any newly produced
    question; it never touches ``current_question_index``.
    """

    def __init__(
        self,
        provider: Optional[GenerativeQuestionProvider] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.provider = provider or GenerativeQuestionProvider(rng=rng)
        self._rng = rng

    def seed(self, session: Session) -> None:
        """Append the opener, and the closer too for single-question sessions."""

        session.append_question(personalized_opener(session))
        if session.total_questions == 1:
            session.append_question(salary_closer(session))

    def next_question(self, session: Session) -> Question:
        index = session.current_question_index
        if index < len(session.questions):
            return session.questions[index]
        if index == session.total_questions - 1:
            question = salary_closer(session)
            log_event("question_served", session.id, source="template", index=index, topic=question.topic)
        else:
            topic, deepen = topic_adaptation.decide(session, rng=self._rng)
            question = self.provider.generate(session, topic, deepen)
        session.append_question(question)
        return question


__all__ = ["QuestionSequencer"]
