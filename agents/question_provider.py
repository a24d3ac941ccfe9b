"""Adaptive question generation with fallback to the static bank."""
from __future__ import annotations

import logging
import random
from typing import Optional

from pydantic import ValidationError

from config.registry import QUESTION_KEY
from config.settings import settings
from interview_session.errors import QuestionGenerationError
from interview_session.models import DIFFICULTIES, Question, Session, code_token, mint_id
from llm_gateway import ParsedFail
from observability import log_event
from question_bank import FallbackQuestionBank, default_bank

from .prompts import build_question_prompt
from .service_call import ask_structured
from .types import GeneratedQuestion


logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "technical"


class GenerativeQuestionProvider:
    """Produce one interior question for a session.

    The generative service is asked once; any failure falls back to the bank.
    Identifiers are always minted locally.
    """

    def __init__(
        self,
        *,
        bank: Optional[FallbackQuestionBank] = None,
        service_key: str = QUESTION_KEY,
        timeout_s: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._bank = bank
        self._service_key = service_key
        self._timeout_s = timeout_s
        self._rng = rng

    @property
    def bank(self) -> FallbackQuestionBank:
        if self._bank is None:
            self._bank = default_bank()
        return self._bank

    def generate(self, session: Session, topic: str, deepen: bool) -> Question:
        prompt = build_question_prompt(session, topic, deepen)
        timeout_s = self._timeout_s or settings.GENERATION_TIMEOUT_S
        parsed = ask_structured(
            self._service_key,
            prompt,
            timeout_s=timeout_s,
            session_id=session.id,
            name="generate_question",
        )
        if isinstance(parsed, ParsedFail):
            return self._fallback(session, topic, parsed.reason)
        try:
            payload = GeneratedQuestion.model_validate(parsed.value)
            question = _normalize(payload, session, topic, deepen)
        except ValidationError as exc:
            return self._fallback(session, topic, f"invalid question payload: {exc.error_count()} errors")
        log_event("question_served", session.id, source="generated", topic=topic, deepen=deepen)
        return question

    def _fallback(self, session: Session, topic: str, reason: str) -> Question:
        question = self.bank.pick(
            session.position,
            FALLBACK_CATEGORY,
            session.difficulty,
            session.used_texts(),
            rng=self._rng,
        )
        if question is None:
            logger.error("No fallback questions for position=%s difficulty=%s", session.position, session.difficulty)
            raise QuestionGenerationError(
                f"Unable to generate a question for position '{session.position}'"
            )
        log_event("question_fallback", session.id, source="bank", topic=question.topic or topic, reason=reason)
        return question


def _normalize(payload: GeneratedQuestion, session: Session, topic: str, deepen: bool) -> Question:
    difficulty = payload.difficulty if payload.difficulty in DIFFICULTIES else session.difficulty
    depth = payload.depth if payload.depth in ("introductory", "advanced") else None
    time_limit = payload.time_limit if payload.time_limit and payload.time_limit > 0 else settings.DEFAULT_TIME_LIMIT_S
    max_score = payload.max_score if payload.max_score and payload.max_score > 0 else settings.DEFAULT_MAX_SCORE
    suffix = mint_id("x")[-6:].upper()
    return Question(
        id=mint_id("adaptive"),
        question_code=f"ADAPT_{code_token(topic)}_{code_token(difficulty)}_{suffix}",
        category=(payload.category or FALLBACK_CATEGORY).strip() or FALLBACK_CATEGORY,
        difficulty=difficulty,  # type: ignore[arg-type]
        text=payload.question,
        expected_keywords=payload.expected_keywords,
        sample_answers=payload.sample_answers,
        time_limit=time_limit,
        max_score=max_score,
        role_specific=session.type in ("role-based", "job-specific"),
        topic=topic,
        depth=depth or ("advanced" if deepen else "introductory"),
        context=payload.context,
        follow_up_strategy=payload.follow_up_strategy,
    )


__all__ = ["GenerativeQuestionProvider", "FALLBACK_CATEGORY"]
