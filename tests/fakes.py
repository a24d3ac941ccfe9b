"""Canned text services standing in for the generative backend."""
import json
import time

QUESTION_REPLY = {
    "question": "How would you shard a write-heavy orders table?",
    "category": "technical",
    "difficulty": "medium",
    "expectedKeywords": ["shard key", "hot spots", "rebalancing"],
    "sampleAnswers": ["Pick a high-cardinality key such as customer id..."],
    "timeLimit": 300,
    "maxScore": 10,
    "topic": "ignored-by-engine",
    "depth": "introductory",
    "id": "service-chosen-id",
    "questionCode": "SERVICE_CODE",
}

EVALUATION_REPLY = {
    "score": 8,
    "feedback": "Clear and well structured.",
    "strengths": ["Clear structure"],
    "weaknesses": ["Few metrics"],
    "suggestions": ["Quantify impact"],
    "aiAnalysis": {
        "technicalAccuracy": 8,
        "communicationSkills": 9,
        "problemSolving": 7,
        "confidence": 8,
        "relevance": 9,
    },
    "jobFitScore": 8,
    "roleCompetencyScore": 7,
    "topicAnalysis": "Solid grasp of the topic",
    "improvementSuggestions": ["Read about partitioning"],
    "nextSteps": "Practice system design",
}

START_PAYLOAD = {
    "type": "technical",
    "industry": "Finance",
    "position": "Backend Engineer",
    "difficulty": "medium",
    "totalQuestions": 3,
}


def reply_with(payload):
    text = json.dumps(payload)
    return lambda prompt: text


def failing_service(prompt):
    raise RuntimeError("service unavailable")


def slow_service(prompt):
    time.sleep(0.5)
    return json.dumps(QUESTION_REPLY)
