"""Decide whether to deepen the current topic or advance to a new one."""
from __future__ import annotations

import random
from typing import List, NamedTuple, Optional

from config.settings import settings
from interview_session.models import Session

CANONICAL_TOPICS = (
    "introduction",
    "system-design",
    "algorithms",
    "databases",
    "networking",
    "security",
    "cloud-computing",
    "microservices",
    "performance",
    "scalability",
    "architecture",
    "testing",
    "devops",
    "frontend",
    "backend",
    "mobile",
    "ai-ml",
)

DEEP_POTENTIAL_TOPICS = frozenset(
    {
        "system-design",
        "algorithms",
        "databases",
        "networking",
        "security",
        "cloud-computing",
        "microservices",
        "performance",
        "scalability",
        "architecture",
        "testing",
        "devops",
    }
)

NO_HISTORY_TOPIC = "introduction"
UNTAGGED_TOPIC = "general_technical"


class TopicDecision(NamedTuple):
    topic: str
    should_deepen: bool


def current_topic(session: Session) -> str:
    if not session.questions:
        return NO_HISTORY_TOPIC
    for question in reversed(session.questions):
        if question.topic:
            return question.topic
    return UNTAGGED_TOPIC


def _answered_scores_on(session: Session, topic: str) -> List[float]:
    scores: List[float] = []
    for question, answer in zip(session.questions, session.answers):
        if question.topic == topic:
            scores.append(answer.score)
    return scores


def should_deepen(session: Session, topic: str) -> bool:
    """True when recent scores on ``topic`` are strong and the topic still has room.

    Scores are compared raw, on each question's own scale.
    """

    if topic not in DEEP_POTENTIAL_TOPICS:
        return False
    asked = sum(1 for question in session.questions if question.topic == topic)
    if asked >= settings.MAX_QUESTIONS_PER_TOPIC:
        return False
    recent = _answered_scores_on(session, topic)[-2:]
    if not recent:
        return False
    return sum(recent) / len(recent) >= settings.DEEPEN_SCORE_THRESHOLD


def next_topic(session: Session, *, rng: Optional[random.Random] = None) -> str:
    seen = {question.topic for question in session.questions if question.topic}
    for topic in CANONICAL_TOPICS:
        if topic not in seen:
            return topic
    return (rng or random).choice(CANONICAL_TOPICS)


def decide(session: Session, *, rng: Optional[random.Random] = None) -> TopicDecision:
    topic = current_topic(session)
    if should_deepen(session, topic):
        return TopicDecision(topic, True)
    return TopicDecision(next_topic(session, rng=rng), False)


__all__ = [
    "CANONICAL_TOPICS",
    "DEEP_POTENTIAL_TOPICS",
    "TopicDecision",
    "current_topic",
    "should_deepen",
    "next_topic",
    "decide",
]
