import random

from agents.question_provider import GenerativeQuestionProvider
from agents.sequencer import QuestionSequencer
from interview_session.models import Answer, Session


class _RecordingProvider(GenerativeQuestionProvider):
    def __init__(self):
        super().__init__(rng=random.Random(5))
        self.calls = []

    def generate(self, session, topic, deepen):
        self.calls.append((topic, deepen))
        return super().generate(session, topic, deepen)


def _session(total=3, **overrides):
    base = dict(
        id="s1",
        type="technical",
        industry="Finance",
        position="Backend Engineer",
        difficulty="medium",
        total_questions=total,
        candidate_name="Ada",
    )
    base.update(overrides)
    return Session(**base)


def _answer(session, score=5):
    question = session.questions[session.current_question_index]
    session.answers.append(Answer(question_id=question.id, text="answer", score=score))
    session.current_question_index += 1


def test_seed_appends_personalized_opener():
    session = _session()
    QuestionSequencer().seed(session)
    assert len(session.questions) == 1
    opener = session.questions[0]
    assert opener.category == "personalized"
    assert opener.text.startswith("Hi Ada,")
    assert "Backend Engineer" in opener.text and "Finance" in opener.text
    assert opener.question_code == "PERS_BACKEND-ENGINEER_FINANCE"
    assert session.max_possible_score == opener.max_score


def test_seed_single_question_session_adds_closer():
    session = _session(total=1, candidate_name=None)
    QuestionSequencer().seed(session)
    assert [q.category for q in session.questions] == ["personalized", "salary"]
    assert session.questions[0].text.startswith("Hi candidate,")
    assert session.max_possible_score == 20


def test_index_zero_returns_opener_without_generation():
    provider = _RecordingProvider()
    sequencer = QuestionSequencer(provider)
    session = _session()
    sequencer.seed(session)
    assert sequencer.next_question(session) is session.questions[0]
    assert provider.calls == []


def test_interior_question_uses_topic_decision():
    provider = _RecordingProvider()
    sequencer = QuestionSequencer(provider)
    session = _session(total=4)
    sequencer.seed(session)
    _answer(session)
    question = sequencer.next_question(session)
    assert provider.calls == [("system-design", False)]
    assert len(session.questions) == 2
    assert session.max_possible_score == session.questions[0].max_score + question.max_score


def test_last_index_yields_salary_closer():
    provider = _RecordingProvider()
    sequencer = QuestionSequencer(provider)
    session = _session(total=3)
    sequencer.seed(session)
    _answer(session)
    sequencer.next_question(session)
    _answer(session)
    closer = sequencer.next_question(session)
    assert closer.category == "salary"
    assert closer.question_code == "SALARY_BACKEND-ENGINEER_FINANCE"
    assert len(provider.calls) == 1


def test_repeated_call_returns_same_question():
    sequencer = QuestionSequencer(_RecordingProvider())
    session = _session(total=4)
    sequencer.seed(session)
    _answer(session)
    first = sequencer.next_question(session)
    second = sequencer.next_question(session)
    assert first.id == second.id
    assert len(session.questions) == 2
