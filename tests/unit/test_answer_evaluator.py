import json

import pytest

from agents.answer_evaluator import AnswerEvaluator, basic_evaluation
from config.registry import EVALUATION_KEY, bind_service
from interview_session.models import Question, Session

from tests.fakes import EVALUATION_REPLY, failing_service, reply_with


def _session():
    return Session(
        id="s1",
        type="job-specific",
        industry="Technology",
        position="Backend Engineer",
        difficulty="hard",
        total_questions=3,
        job_requirements=["Python", "PostgreSQL"],
    )


def _question(max_score=10):
    return Question(
        id="q1",
        category="technical",
        difficulty="hard",
        text="Explain MVCC.",
        expected_keywords=["snapshot", "versions"],
        topic="databases",
        max_score=max_score,
    )


def test_successful_evaluation_maps_fields():
    bind_service(EVALUATION_KEY, reply_with(EVALUATION_REPLY))
    evaluation = AnswerEvaluator().evaluate(_question(), "Readers see a snapshot.", 42, _session())
    assert evaluation.score == 8
    assert evaluation.max_score == 10
    assert evaluation.subscores.communication_skills == 9
    assert evaluation.job_fit_score == 8
    assert evaluation.strengths == ["Clear structure"]
    assert evaluation.degraded is False


@pytest.mark.parametrize("raw, expected", [(-3, 0), (99, 10), (7.26, 7.3)])
def test_score_is_clamped_to_question_range(raw, expected):
    bind_service(EVALUATION_KEY, reply_with({"score": raw}))
    evaluation = AnswerEvaluator().evaluate(_question(), "answer", 10, _session())
    assert evaluation.score == expected
    assert 0 <= evaluation.score <= evaluation.max_score


def test_score_respects_small_ceiling():
    bind_service(EVALUATION_KEY, reply_with({"score": 8}))
    evaluation = AnswerEvaluator().evaluate(_question(max_score=4), "answer", 10, _session())
    assert evaluation.score == 4


def test_missing_subfields_default_to_empty():
    bind_service(EVALUATION_KEY, reply_with({"score": 6, "aiAnalysis": {"confidence": 42}}))
    evaluation = AnswerEvaluator().evaluate(_question(), "answer", 10, _session())
    assert evaluation.feedback == ""
    assert evaluation.strengths == []
    assert evaluation.subscores.confidence == 10
    assert evaluation.subscores.relevance == 0
    assert evaluation.job_fit_score is None


@pytest.mark.parametrize(
    "service",
    [
        failing_service,
        lambda prompt: "I think this answer deserves a seven.",
        lambda prompt: json.dumps({"feedback": "no score"}),
        lambda prompt: json.dumps({"score": "high"}),
    ],
)
def test_failures_return_basic_evaluation(service):
    bind_service(EVALUATION_KEY, service)
    evaluation = AnswerEvaluator().evaluate(_question(), "answer", 10, _session())
    assert evaluation == basic_evaluation(_question())
    assert evaluation.score == 5
    assert evaluation.subscores.problem_solving == 5
    assert evaluation.degraded is True


def test_basic_evaluation_respects_small_ceiling():
    assert basic_evaluation(_question(max_score=3)).score == 3
