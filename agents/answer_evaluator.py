"""LLM-backed answer evaluator with a neutral fallback."""
from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from config.registry import EVALUATION_KEY
from config.settings import settings
from interview_session.models import Evaluation, Question, Session, Subscores
from llm_gateway import ParsedFail
from observability import log_event

from .prompts import build_evaluation_prompt
from .service_call import ask_structured
from .types import AiAnalysis, RawEvaluation

BASIC_SCORE = 5.0
SUBSCORE_MIDPOINT = 5.0
SUBSCORE_MAX = 10.0


def _round_1dp(value: float) -> float:
    return float(f"{value:.1f}")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, float(value)))


def _optional_0_10(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return _round_1dp(_clamp(value, 0.0, SUBSCORE_MAX))


def _subscores(analysis: Optional[AiAnalysis]) -> Subscores:
    if analysis is None:
        return Subscores()
    values = {
        name: _clamp(getattr(analysis, name) or 0.0, 0.0, SUBSCORE_MAX)
        for name in Subscores.model_fields
    }
    return Subscores(**values)


def basic_evaluation(question: Question) -> Evaluation:
    """Neutral evaluation used whenever the service result is unusable."""

    return Evaluation(
        score=min(BASIC_SCORE, question.max_score),
        max_score=question.max_score,
        feedback=(
            "Evaluation system temporarily unavailable. Please review your answer for clarity and relevance."
        ),
        strengths=["Good attempt at answering the question"],
        weaknesses=["Evaluation system temporarily unavailable"],
        suggestions=["Try to be more specific in your answers", "Include relevant examples"],
        subscores=Subscores(
            technical_accuracy=SUBSCORE_MIDPOINT,
            communication_skills=SUBSCORE_MIDPOINT,
            problem_solving=SUBSCORE_MIDPOINT,
            confidence=SUBSCORE_MIDPOINT,
            relevance=SUBSCORE_MIDPOINT,
        ),
        topic_analysis="Basic evaluation completed",
        improvement_suggestions=["Practice more", "Study the topic"],
        next_steps="Continue learning and practicing",
        degraded=True,
    )


class AnswerEvaluator:
    """Score one answer; failures are absorbed into ``basic_evaluation``."""

    def __init__(self, *, service_key: str = EVALUATION_KEY, timeout_s: Optional[float] = None) -> None:
        self._service_key = service_key
        self._timeout_s = timeout_s

    def evaluate(self, question: Question, answer_text: str, time_spent: float, session: Session) -> Evaluation:
        prompt = build_evaluation_prompt(question, answer_text, time_spent, session)
        parsed = ask_structured(
            self._service_key,
            prompt,
            timeout_s=self._timeout_s or settings.EVALUATION_TIMEOUT_S,
            session_id=session.id,
            name="evaluate_answer",
        )
        if isinstance(parsed, ParsedFail):
            log_event("evaluation_fallback", session.id, reason=parsed.reason)
            return basic_evaluation(question)
        try:
            raw = RawEvaluation.model_validate(parsed.value)
        except ValidationError as exc:
            log_event("evaluation_fallback", session.id, reason=f"invalid evaluation payload: {exc.error_count()} errors")
            return basic_evaluation(question)

        evaluation = Evaluation(
            score=min(_round_1dp(_clamp(raw.score, 0.0, question.max_score)), question.max_score),
            max_score=question.max_score,
            feedback=raw.feedback,
            strengths=raw.strengths,
            weaknesses=raw.weaknesses,
            suggestions=raw.suggestions,
            subscores=_subscores(raw.ai_analysis),
            job_fit_score=_optional_0_10(raw.job_fit_score),
            role_competency_score=_optional_0_10(raw.role_competency_score),
            topic_analysis=raw.topic_analysis,
            improvement_suggestions=raw.improvement_suggestions,
            next_steps=raw.next_steps,
        )
        log_event("answer_evaluated", session.id, score=evaluation.score)
        return evaluation


__all__ = ["AnswerEvaluator", "basic_evaluation"]
