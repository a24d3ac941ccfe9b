from __future__ import annotations  # Prompt builders for question generation and answer evaluation

from textwrap import dedent
from typing import List, Sequence, Tuple

from config.settings import settings
from interview_session.models import Question, Session


def clamp_text(text: str, limit: int = 600) -> str:  # Trim long free text for prompt embedding
    text = " ".join((text or "").split())
    if len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


def recent_history(session: Session, window: int | None = None) -> List[Tuple[str, str]]:  # Last answered (question, answer) pairs
    size = settings.HISTORY_WINDOW if window is None else window
    if size <= 0:
        return []
    pairs = [(question.text, answer.text) for question, answer in zip(session.questions, session.answers)]
    return pairs[-size:]


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def build_question_prompt(session: Session, topic: str, deepen: bool) -> str:
    """Build the adaptive question-generation prompt for ``session``."""

    level = session.experience_level or "mid"
    if deepen:
        strategy = (
            f"The candidate has shown strong knowledge in {topic}. Ask a deeper, more advanced question "
            "that explores edge cases, trade-offs or real-world applications in this area."
        )
        depth = "advanced"
    else:
        strategy = (
            f"Move to a new topic: {topic}. Ask an introductory question that assesses the candidate's "
            "knowledge in this area."
        )
        depth = "introductory"

    sections = [
        dedent(
            f"""
            You are an expert interviewer running an adaptive {session.type} interview for a
            {session.position} role in the {session.industry} industry.

            {strategy}

            Position: {session.position}
            Industry: {session.industry}
            Experience level: {level}
            Difficulty: {session.difficulty}
            """
        ).strip()
    ]
    if session.job_requirements:
        sections.append("Job requirements:\n" + _bullets(session.job_requirements))
    if session.role_competencies:
        sections.append("Role competencies to probe:\n" + _bullets(session.role_competencies))
    history = recent_history(session)
    if history:
        lines = [f"Q: {clamp_text(q, 300)}\nA: {clamp_text(a)}" for q, a in history]
        sections.append("Recent conversation:\n" + "\n\n".join(lines))
    sections.append(
        dedent(
            f"""
            Respond with a JSON object following this contract:
            - question: the question text, specific and grounded in practical scenarios.
            - category: one of technical, behavioral, problem-solving.
            - difficulty: one of easy, medium, hard.
            - expectedKeywords: three to six keywords a strong answer mentions.
            - sampleAnswers: one or two short model answers.
            - timeLimit: seconds allowed, typically {settings.DEFAULT_TIME_LIMIT_S}.
            - maxScore: {settings.DEFAULT_MAX_SCORE}.
            - topic: "{topic}".
            - depth: "{depth}".
            - context: one sentence on why this question is asked now.
            - followUpStrategy: one of explore, deepen, move_on, challenge.
            Return only JSON without markdown fences, text, or commentary.
            """
        ).strip()
    )
    return "\n\n".join(sections)


def build_evaluation_prompt(question: Question, answer_text: str, time_spent: float, session: Session) -> str:
    """Build the structured evaluation prompt for one answer."""

    keywords = ", ".join(question.expected_keywords) or "none provided"
    sections = [
        dedent(
            f"""
            You are evaluating a candidate's answer in an interview for a {session.position} role in the
            {session.industry} industry (difficulty: {session.difficulty}, experience level:
            {session.experience_level or "mid"}).

            Question: {question.text}
            Topic: {question.topic or "general"}
            Depth: {question.depth or "introductory"}
            Expected keywords: {keywords}
            Maximum score: {question.max_score:g}
            Time spent: {time_spent:.0f} seconds (limit {question.time_limit} seconds)
            """
        ).strip()
    ]
    if session.job_requirements:
        sections.append("Job requirements:\n" + _bullets(session.job_requirements))
    if session.role_competencies:
        sections.append("Role competencies:\n" + _bullets(session.role_competencies))
    sections.append("Candidate answer:\n" + clamp_text(answer_text, 4000))
    sections.append(
        dedent(
            f"""
            Respond with a JSON object following this contract:
            - score: number from 0 to {question.max_score:g}.
            - feedback: two or three sentences of constructive feedback.
            - strengths: short phrases naming what the answer did well.
            - weaknesses: short phrases naming gaps.
            - suggestions: concrete ways to improve the answer.
            - aiAnalysis: object with technicalAccuracy, communicationSkills, problemSolving, confidence,
              relevance, each from 0 to 10.
            - jobFitScore: number from 0 to 10 for fit with the role.
            - roleCompetencyScore: number from 0 to 10 for the role competencies shown.
            - topicAnalysis: one sentence on the candidate's grasp of the topic.
            - improvementSuggestions: study or practice items.
            - nextSteps: one sentence on what to work on next.
            Return only JSON without markdown fences, text, or commentary.
            """
        ).strip()
    )
    return "\n\n".join(sections)


__all__ = ["clamp_text", "recent_history", "build_question_prompt", "build_evaluation_prompt"]
