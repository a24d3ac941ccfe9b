"""Action orchestration for adaptive interview sessions."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Mapping, Optional, Tuple

from agents.answer_evaluator import AnswerEvaluator
from agents.sequencer import QuestionSequencer
from observability import log_event
from services import scoring

from .errors import InvalidStateError, ValidationError
from .models import Answer, CamelModel, Evaluation, Question, Session, mint_id
from .store import SessionStore, advance_session
from .validation import validate_start


logger = logging.getLogger(__name__)

RESULT_EVAL_WORKERS = 4


class SubmitOutcome(CamelModel):  # Result of submit-answer
    evaluation: Evaluation
    session: Session
    is_complete: bool


class InterviewResults(CamelModel):  # Result of get-results
    session: Session
    overall_score: scoring.OverallScore
    summary: scoring.Report
    evaluations: List[Evaluation]


def _require_active(session: Session) -> None:
    if session.status != "active":
        raise InvalidStateError(f"Interview is {session.status}; it must be active", expected="active")


def _answer_inputs(answer: Any, time_spent: Any) -> Tuple[str, float]:
    errors: List[str] = []
    text = answer.strip() if isinstance(answer, str) else ""
    if not text:
        errors.append("answer is required")
    spent = 0.0
    if time_spent is not None:
        if isinstance(time_spent, bool) or not isinstance(time_spent, (int, float)) or time_spent < 0:
            errors.append("timeSpent must be a non-negative number of seconds")
        else:
            spent = float(time_spent)
    if errors:
        raise ValidationError(errors)
    return text, spent


class InterviewEngine:
    """Runs the start / next-question / submit-answer / pause / resume / get-results actions.

    Generative calls run against a snapshot outside the session lock. Results
    are committed under the lock only if the session has not moved on in the
    meantime; otherwise the action fails with ``InvalidStateError``.
    """

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        sequencer: Optional[QuestionSequencer] = None,
        evaluator: Optional[AnswerEvaluator] = None,
    ) -> None:
        self.store = store or SessionStore()
        self.sequencer = sequencer or QuestionSequencer()
        self.evaluator = evaluator or AnswerEvaluator()

    def start(self, payload: Mapping[str, Any]) -> Tuple[Session, Question]:
        params = validate_start(payload)
        session = Session(id=mint_id("session"), **params.model_dump())
        self.sequencer.seed(session)
        stored = self.store.create(session)
        log_event(
            "session_started",
            stored.id,
            action="start",
            status=stored.status,
            position=stored.position,
            total=stored.total_questions,
        )
        return stored, stored.questions[0]

    def next_question(self, session_id: str) -> Question:
        snapshot = self.store.get(session_id)
        _require_active(snapshot)
        existing = snapshot.current_question()
        if existing is not None:
            return existing
        index = snapshot.current_question_index
        question = self.sequencer.next_question(snapshot)
        with self.store.transaction(session_id) as session:
            _require_active(session)
            if session.current_question_index != index:
                raise InvalidStateError("Interview advanced while the question was being prepared", expected="active")
            current = session.current_question()
            if current is not None:
                return current
            session.append_question(question)
        log_event("question_served", session_id, action="next-question", index=index, topic=question.topic)
        return question

    def submit_answer(self, session_id: str, answer: Any, time_spent: Any = 0) -> SubmitOutcome:
        text, spent = _answer_inputs(answer, time_spent)
        snapshot = self.store.get(session_id)
        _require_active(snapshot)
        question = snapshot.current_question()
        if question is None:
            raise InvalidStateError("No current question; request next-question first", expected="a served question")
        evaluation = self.evaluator.evaluate(question, text, spent, snapshot)
        with self.store.transaction(session_id) as session:
            _require_active(session)
            current = session.current_question()
            if session.current_question_index != snapshot.current_question_index or current is None or current.id != question.id:
                raise InvalidStateError("An answer was already recorded for this question", expected="active")
            session.answers.append(
                Answer(
                    question_id=question.id,
                    question_code=question.question_code,
                    text=text,
                    time_spent_seconds=spent,
                    score=evaluation.score,
                )
            )
            session.total_score += evaluation.score
            advance_session(session)
            result = session.model_copy(deep=True)
        is_complete = result.status == "completed"
        log_event(
            "session_completed" if is_complete else "answer_recorded",
            session_id,
            action="submit-answer",
            index=snapshot.current_question_index,
            score=evaluation.score,
            status=result.status,
        )
        return SubmitOutcome(evaluation=evaluation, session=result, is_complete=is_complete)

    def pause(self, session_id: str) -> str:
        self.store.pause(session_id)
        return "Interview paused"

    def resume(self, session_id: str) -> str:
        self.store.resume(session_id)
        return "Interview resumed"

    def get_results(self, session_id: str) -> InterviewResults:
        session = self.store.get(session_id)
        if session.status != "completed":
            raise InvalidStateError(f"Interview is {session.status}; results need a completed interview", expected="completed")
        pairs = list(zip(session.questions, session.answers))
        with ThreadPoolExecutor(max_workers=RESULT_EVAL_WORKERS) as pool:
            evaluations = list(
                pool.map(
                    lambda pair: self.evaluator.evaluate(pair[0], pair[1].text, pair[1].time_spent_seconds, session),
                    pairs,
                )
            )
        overall = scoring.overall_score(evaluations)
        report = scoring.summary(session, evaluations)
        log_event("results_built", session_id, action="get-results", score=overall.percentage, status=session.status)
        return InterviewResults(session=session, overall_score=overall, summary=report, evaluations=evaluations)


__all__ = ["InterviewEngine", "SubmitOutcome", "InterviewResults"]
