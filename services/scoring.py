"""Score aggregation and report composition over a session's evaluations."""
from __future__ import annotations

import re
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import Field

from interview_session.models import CamelModel, Evaluation, Session, utcnow

# Percentage thresholds shared by grade bands and topic labels
EXCELLENT_AT = 85.0
GOOD_AT = 70.0
FAIR_AT = 55.0

LETTER_GRADES: Tuple[Tuple[float, str], ...] = (
    (90.0, "A+"),
    (85.0, "A"),
    (80.0, "A-"),
    (75.0, "B+"),
    (70.0, "B"),
    (65.0, "B-"),
    (60.0, "C+"),
    (55.0, "C"),
    (50.0, "C-"),
)

WEAK_TOPIC_BELOW = 70.0
STRONG_TOPIC_AT = 85.0
LOW_COMMUNICATION_BELOW = 6.0
MAX_RECOMMENDATIONS = 8
TOP_N = 5
DEFAULT_TOPIC = "general"

BASIC_SUMMARY = "Interview completed successfully. Detailed analysis temporarily unavailable."

LOW_OVERALL_RECOMMENDATIONS = (
    "Practice more mock interviews to improve your confidence and communication skills",
    "Review technical concepts related to your target role",
    "Prepare specific examples and stories for behavioral questions",
)
COMMUNICATION_RECOMMENDATION = (
    "Work on improving your communication skills - practice explaining technical concepts clearly"
)
GENERAL_RECOMMENDATIONS = (
    "Record yourself answering questions to improve delivery",
    "Practice with a friend or mentor for additional feedback",
    "Stay updated with industry trends and technologies",
    "Build a portfolio of projects to demonstrate practical skills",
)
CLOSING_LEARNING_ITEM = (
    "Continuous Improvement: Stay updated with industry best practices and emerging technologies"
)

# Ordered: first role whose keyword appears as a whole word wins
ROLE_LEARNING_ITEMS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("full stack", "fullstack", "full-stack"), "Advanced Learning: Develop expertise in both frontend and backend technologies"),
    (("frontend", "front-end", "front end"), "Advanced Learning: Master modern frontend frameworks and state management"),
    (("backend", "back-end", "back end"), "Advanced Learning: Focus on system design, scalability, and performance optimization"),
    (("data",), "Advanced Learning: Deepen statistical modeling and production machine learning skills"),
    (("devops", "site reliability", "sre"), "Advanced Learning: Master infrastructure as code, observability, and incident response"),
)



def _mentions(position: str, keywords: Sequence[str]) -> bool:
    lowered = position.lower()
    return any(re.search(rf"\b{re.escape(keyword)}\b", lowered) for keyword in keywords)

class OverallScore(CamelModel):
    total_score: float
    max_possible_score: float
    percentage: float
    grade: str
    band: str
    job_fit_score: Optional[float] = None
    role_competency_score: Optional[float] = None


class TopicStats(CamelModel):
    question_count: int
    average_score_percent: float
    performance_label: str


class OverallStats(CamelModel):
    total_score: float
    max_possible_score: float
    percentage: float
    grade: str
    band: str
    completion_minutes: int
    questions_answered: int
    topics_explored: int


class Report(CamelModel):
    summary: str
    recommendations: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)
    topic_analysis: Dict[str, TopicStats] = Field(default_factory=dict)
    overall_stats: OverallStats
    job_fit_analysis: str
    market_positioning: str
    learning_path: List[str] = Field(default_factory=list)


def _round1(value: float) -> float:
    """Round a float to one decimal place with stable formatting."""
    return float(f"{value:.1f}")


def _percent(score: float, maximum: float) -> float:
    if maximum <= 0:
        return 0.0
    return max(0.0, min(100.0, score / maximum * 100.0))


def band_for(percentage: float) -> str:
    """Excellent >= 85, Good >= 70, Fair >= 55, otherwise Needs Improvement."""

    if percentage >= EXCELLENT_AT:
        return "Excellent"
    if percentage >= GOOD_AT:
        return "Good"
    if percentage >= FAIR_AT:
        return "Fair"
    return "Needs Improvement"


def letter_grade(percentage: float) -> str:
    for threshold, grade in LETTER_GRADES:
        if percentage >= threshold:
            return grade
    return "F"


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def overall_score(evaluations: Sequence[Evaluation]) -> OverallScore:
    total = sum(evaluation.score for evaluation in evaluations)
    maximum = sum(evaluation.max_score for evaluation in evaluations)
    percentage = _round1(_percent(total, maximum))
    job_fit = _mean([e.job_fit_score for e in evaluations if e.job_fit_score is not None])
    competency = _mean([e.role_competency_score for e in evaluations if e.role_competency_score is not None])
    return OverallScore(
        total_score=_round1(total),
        max_possible_score=_round1(maximum),
        percentage=percentage,
        grade=letter_grade(percentage) if evaluations and maximum > 0 else "N/A",
        band=band_for(percentage),
        job_fit_score=None if job_fit is None else _round1(job_fit),
        role_competency_score=None if competency is None else _round1(competency),
    )


def topic_analysis(session: Session, evaluations: Sequence[Evaluation]) -> Dict[str, TopicStats]:
    """Group answered questions by topic and average their score percentages."""

    buckets: Dict[str, List[float]] = {}
    for question, evaluation in zip(session.questions, evaluations):
        topic = question.topic or DEFAULT_TOPIC
        buckets.setdefault(topic, []).append(_percent(evaluation.score, evaluation.max_score))
    analysis: Dict[str, TopicStats] = {}
    for topic, percents in buckets.items():
        average = _round1(sum(percents) / len(percents))
        analysis[topic] = TopicStats(
            question_count=len(percents),
            average_score_percent=average,
            performance_label=band_for(average),
        )
    return analysis


def _top(items: List[str], limit: int) -> List[str]:
    counts = Counter(items)  # insertion order is first-seen order
    ranked = sorted(counts.items(), key=lambda pair: -pair[1])
    return [text for text, _ in ranked[:limit]]


def ranked_strengths_weaknesses(evaluations: Sequence[Evaluation]) -> Tuple[List[str], List[str]]:
    strengths = [item for evaluation in evaluations for item in evaluation.strengths]
    weaknesses = [item for evaluation in evaluations for item in evaluation.weaknesses]
    return _top(strengths, TOP_N), _top(weaknesses, TOP_N)


def _topic_name(topic: str) -> str:
    return topic.replace("_", " ").replace("-", " ")


def _performance_text(score: OverallScore) -> str:
    prefix = f"You scored {score.percentage}% with a grade of {score.grade}."
    if score.band == "Excellent":
        return (
            f"Excellent performance! {prefix} Your responses demonstrated strong knowledge and clear "
            "communication across multiple topic areas."
        )
    if score.band == "Good":
        return f"Good performance! {prefix} You showed solid understanding with room for improvement in certain areas."
    if score.band == "Fair":
        return f"Fair performance. {prefix} Focus on the areas for improvement to enhance your interview skills."
    return (
        f"{prefix} This indicates areas that need significant improvement. Review the feedback carefully "
        "and practice more."
    )


def _recommendations(
    score: OverallScore, topics: Dict[str, TopicStats], evaluations: Sequence[Evaluation]
) -> List[str]:
    items: List[str] = []
    for topic, stats in topics.items():
        if stats.average_score_percent < WEAK_TOPIC_BELOW:
            items.append(
                f"Focus on improving your knowledge in {_topic_name(topic)} - current performance: "
                f"{stats.performance_label}"
            )
        elif stats.average_score_percent >= STRONG_TOPIC_AT:
            items.append(f"Excellent performance in {_topic_name(topic)} - consider specializing in this area")
    if score.percentage < GOOD_AT:
        items.extend(LOW_OVERALL_RECOMMENDATIONS)
    communication = _mean([e.subscores.communication_skills for e in evaluations])
    if communication is not None and communication < LOW_COMMUNICATION_BELOW:
        items.append(COMMUNICATION_RECOMMENDATION)
    items.extend(GENERAL_RECOMMENDATIONS)
    unique = list(dict.fromkeys(items))
    return unique[:MAX_RECOMMENDATIONS]


def _job_fit_text(score: OverallScore) -> str:
    if score.job_fit_score is None:
        return "Job fit analysis not available"
    fit = score.job_fit_score
    if fit >= 7:
        label = "Excellent match"
    elif fit >= 5:
        label = "Good match"
    else:
        label = "Needs alignment"
    return f"Job Fit Score: {round(fit)}/10 - {label}"


def _market_positioning(score: OverallScore, position: str) -> str:
    if score.percentage >= EXCELLENT_AT:
        tier = "top-tier"
    elif score.percentage >= GOOD_AT:
        tier = "competitive"
    elif score.percentage >= FAIR_AT:
        tier = "developing"
    else:
        tier = "entry-level"
    return f"Based on your performance, you are positioned as a {tier} candidate for {position} roles."


def learning_path(topics: Dict[str, TopicStats], position: str) -> List[str]:
    path: List[str] = []
    weak = [topic for topic, stats in topics.items() if stats.average_score_percent < WEAK_TOPIC_BELOW]
    strong = [topic for topic, stats in topics.items() if stats.average_score_percent >= STRONG_TOPIC_AT]
    if weak:
        names = " and ".join(_topic_name(topic) for topic in weak[:2])
        path.append(f"Immediate Focus: Strengthen fundamentals in {names}")
    if strong:
        path.append(f"Specialization Opportunity: Consider deepening expertise in {_topic_name(strong[0])}")
    for keywords, item in ROLE_LEARNING_ITEMS:
        if _mentions(position, keywords):
            path.append(item)
            break
    path.append(CLOSING_LEARNING_ITEM)
    return path


def _completion_minutes(session: Session) -> int:
    finished = session.end_time or utcnow()
    return max(0, round((finished - session.start_time).total_seconds() / 60))


def summary(session: Session, evaluations: Sequence[Evaluation]) -> Report:
    """Compose the final report; degrades to a minimal report with nothing to score."""

    score = overall_score(evaluations)
    topics = topic_analysis(session, evaluations)
    stats = OverallStats(
        total_score=score.total_score,
        max_possible_score=score.max_possible_score,
        percentage=score.percentage,
        grade=score.grade,
        band=score.band,
        completion_minutes=_completion_minutes(session),
        questions_answered=len(evaluations),
        topics_explored=len(topics),
    )
    if not evaluations or score.max_possible_score <= 0:
        return Report(
            summary=BASIC_SUMMARY,
            recommendations=list(GENERAL_RECOMMENDATIONS),
            overall_stats=stats,
            job_fit_analysis="Job fit analysis not available",
            market_positioning="Positioning analysis not available",
            learning_path=["Continue learning and practicing"],
        )

    strengths, weaknesses = ranked_strengths_weaknesses(evaluations)
    return Report(
        summary=_performance_text(score),
        recommendations=_recommendations(score, topics, evaluations),
        strengths=strengths,
        areas_for_improvement=weaknesses,
        topic_analysis=topics,
        overall_stats=stats,
        job_fit_analysis=_job_fit_text(score),
        market_positioning=_market_positioning(score, session.position),
        learning_path=learning_path(topics, session.position),
    )


__all__ = [
    "EXCELLENT_AT",
    "GOOD_AT",
    "FAIR_AT",
    "OverallScore",
    "TopicStats",
    "OverallStats",
    "Report",
    "band_for",
    "letter_grade",
    "overall_score",
    "topic_analysis",
    "ranked_strengths_weaknesses",
    "learning_path",
    "summary",
]
