from agents.prompts import build_evaluation_prompt, build_question_prompt, clamp_text, recent_history
from interview_session.models import Answer, Question, Session


def _session():
    session = Session(
        id="s1",
        type="role-based",
        industry="Healthcare",
        position="Data Scientist",
        difficulty="hard",
        experience_level="senior",
        role_competencies=["Causal inference"],
        total_questions=6,
    )
    for idx in range(4):
        question = Question(id=f"q{idx}", category="technical", difficulty="hard", text=f"Question {idx}?", topic="ai-ml")
        session.append_question(question)
        session.answers.append(Answer(question_id=question.id, text=f"Answer {idx}", score=6))
    session.current_question_index = 4
    return session


def test_clamp_text_collapses_and_truncates():
    assert clamp_text("  a \n  b  ") == "a b"
    assert clamp_text("x" * 20, 10) == "xxxxxxx..."


def test_recent_history_keeps_last_window():
    history = recent_history(_session())
    assert [q for q, _ in history] == ["Question 1?", "Question 2?", "Question 3?"]
    assert recent_history(_session(), 0) == []


def test_question_prompt_mentions_profile_and_strategy():
    prompt = build_question_prompt(_session(), "ai-ml", True)
    assert "Data Scientist" in prompt and "Healthcare" in prompt
    assert "Experience level: senior" in prompt
    assert "deeper, more advanced question" in prompt
    assert "Causal inference" in prompt
    assert "Question 0?" not in prompt
    assert prompt.rstrip().endswith("Return only JSON without markdown fences, text, or commentary.")


def test_question_prompt_for_new_topic():
    prompt = build_question_prompt(_session(), "databases", False)
    assert "Move to a new topic: databases" in prompt
    assert 'depth: "introductory"' in prompt


def test_evaluation_prompt_embeds_answer_and_keywords():
    question = Question(
        id="q9",
        category="technical",
        difficulty="hard",
        text="How do you detect data drift?",
        expected_keywords=["PSI", "KS test"],
        topic="ai-ml",
        depth="advanced",
    )
    prompt = build_evaluation_prompt(question, "Compare feature distributions weekly.", 75, _session())
    assert "Expected keywords: PSI, KS test" in prompt
    assert "Depth: advanced" in prompt
    assert "Time spent: 75 seconds" in prompt
    assert "Compare feature distributions weekly." in prompt
