import random

from question_bank import FallbackQuestionBank, competencies_for, default_bank
from question_bank.bank import BankFile


def _bank():
    return FallbackQuestionBank(
        BankFile.model_validate(
            {
                "version": "test",
                "positions": {
                    "Tester": {
                        "technical": {
                            "easy": [
                                {"id": "t-1", "topic": "testing", "text": "What is a flaky test?"},
                                {"id": "t-2", "topic": "testing", "text": "What is a test double?"},
                            ]
                        }
                    }
                },
            }
        )
    )


def test_default_bank_covers_seeded_positions():
    bank = default_bank()
    assert "Backend Engineer" in bank.positions()
    assert len(bank.entries("Backend Engineer", "technical", "medium")) == 3


def test_pick_missing_keys_return_none():
    bank = _bank()
    assert bank.pick("Nope", "technical", "easy") is None
    assert bank.pick("Tester", "behavioral", "easy") is None
    assert bank.pick("Tester", "technical", "hard") is None


def test_pick_avoids_used_texts():
    bank = _bank()
    rng = random.Random(1)
    for _ in range(20):
        question = bank.pick("Tester", "technical", "easy", ["What is a flaky test?"], rng=rng)
        assert question.text == "What is a test double?"


def test_pick_repeats_when_every_candidate_used():
    bank = _bank()
    used = ["What is a flaky test?", "What is a test double?"]
    question = bank.pick("Tester", "technical", "easy", used, rng=random.Random(3))
    assert question is not None
    assert question.text in used


def test_pick_mints_fresh_identifiers():
    bank = _bank()
    first = bank.pick("Tester", "technical", "easy", rng=random.Random(0))
    second = bank.pick("Tester", "technical", "easy", rng=random.Random(0))
    assert first.text == second.text
    assert first.id != second.id
    assert first.question_code != second.question_code
    assert first.question_code.startswith("FB_T-1_") or first.question_code.startswith("FB_T-2_")
    assert first.topic == "testing"
    assert first.category == "technical"
    assert first.max_score == 10


def test_competency_catalog_lookup():
    assert competencies_for("Software Engineer", "senior")
    assert competencies_for("Astronaut", "mid") == []
