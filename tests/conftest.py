import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from agents.answer_evaluator import AnswerEvaluator
from agents.question_provider import GenerativeQuestionProvider
from agents.sequencer import QuestionSequencer
from config.registry import EVALUATION_KEY, QUESTION_KEY, bind_service, clear_services
from interview_session.engine import InterviewEngine
from interview_session.store import InMemorySessionRepository, SessionStore
from tests.fakes import EVALUATION_REPLY, QUESTION_REPLY, failing_service, reply_with


@pytest.fixture(autouse=True)
def _isolated_services():
    clear_services()
    yield
    clear_services()


@pytest.fixture
def bind_fakes():
    bind_service(QUESTION_KEY, reply_with(QUESTION_REPLY))
    bind_service(EVALUATION_KEY, reply_with(EVALUATION_REPLY))
    return True


@pytest.fixture
def bind_failing():
    bind_service(QUESTION_KEY, failing_service)
    bind_service(EVALUATION_KEY, failing_service)
    return True


@pytest.fixture
def rng():
    return random.Random(7)


@pytest.fixture
def engine(rng):
    store = SessionStore(InMemorySessionRepository())
    sequencer = QuestionSequencer(GenerativeQuestionProvider(rng=rng, timeout_s=2.0), rng=rng)
    return InterviewEngine(store=store, sequencer=sequencer, evaluator=AnswerEvaluator(timeout_s=2.0))


@pytest.fixture
def client(engine):
    from fastapi.testclient import TestClient

    from api.routes import set_engine
    from api_server import create_app

    set_engine(engine)
    try:
        yield TestClient(create_app(bind=False))
    finally:
        set_engine(None)
