"""Role competency catalog keyed by position and experience level."""
from __future__ import annotations

from typing import Dict, List

ROLE_COMPETENCIES: Dict[str, Dict[str, List[str]]] = {
    "Software Engineer": {
        "entry": [
            "Basic programming concepts",
            "Data structures and algorithms",
            "Version control (Git)",
            "Basic debugging skills",
            "Understanding of software development lifecycle",
        ],
        "mid": [
            "Advanced programming concepts",
            "System design principles",
            "Database design and optimization",
            "API design and development",
            "Testing methodologies",
            "Performance optimization",
            "Code review and mentoring",
        ],
        "senior": [
            "Architecture design",
            "Technical leadership",
            "System scalability",
            "Security best practices",
            "Team management",
            "Project planning",
            "Cross-functional collaboration",
        ],
    },
    "Backend Engineer": {
        "entry": [
            "HTTP and REST fundamentals",
            "SQL basics",
            "Version control (Git)",
            "Writing unit tests",
        ],
        "mid": [
            "API design and versioning",
            "Database modeling and indexing",
            "Caching strategies",
            "Asynchronous processing and queues",
            "Observability and debugging in production",
        ],
        "senior": [
            "Distributed systems design",
            "Data consistency across services",
            "Capacity planning",
            "Security best practices",
            "Technical leadership",
        ],
    },
    "Data Scientist": {
        "entry": [
            "Statistical analysis",
            "Data manipulation",
            "Basic machine learning",
            "Data visualization",
            "Python/R programming",
        ],
        "mid": [
            "Advanced machine learning",
            "Deep learning",
            "Big data technologies",
            "Model deployment",
            "A/B testing",
            "Feature engineering",
            "Data pipeline design",
        ],
        "senior": [
            "MLOps and model lifecycle",
            "Advanced statistical modeling",
            "Business strategy alignment",
            "Team leadership",
            "Research and innovation",
            "Stakeholder communication",
        ],
    },
    "Product Manager": {
        "entry": [
            "Product strategy basics",
            "User research",
            "Requirements gathering",
            "Agile methodologies",
            "Basic analytics",
        ],
        "mid": [
            "Product roadmap planning",
            "Cross-functional leadership",
            "Market analysis",
            "User experience design",
            "Data-driven decision making",
            "Stakeholder management",
        ],
        "senior": [
            "Product vision and strategy",
            "Team leadership",
            "Business model development",
            "Strategic partnerships",
            "Executive communication",
            "Product portfolio management",
        ],
    },
    "UX Designer": {
        "entry": [
            "Design principles",
            "User research basics",
            "Wireframing and prototyping",
            "Design tools (Figma, Sketch)",
            "Usability testing",
        ],
        "mid": [
            "Advanced user research",
            "Information architecture",
            "Interaction design",
            "Design systems",
            "User testing methodologies",
            "Cross-platform design",
        ],
        "senior": [
            "Design strategy",
            "Team leadership",
            "Design operations",
            "Stakeholder collaboration",
            "Design thinking facilitation",
            "Innovation and trends",
        ],
    },
    "Marketing Manager": {
        "entry": [
            "Marketing fundamentals",
            "Digital marketing channels",
            "Content creation",
            "Basic analytics",
            "Campaign management",
        ],
        "mid": [
            "Marketing strategy",
            "Brand management",
            "Customer segmentation",
            "Marketing automation",
            "Performance marketing",
            "Team coordination",
        ],
        "senior": [
            "Marketing leadership",
            "Strategic planning",
            "Budget management",
            "Stakeholder relations",
            "Market expansion",
            "Team development",
        ],
    },
}


def competencies_for(position: str, experience_level: str) -> List[str]:
    """Return a copy of the catalog entry, or an empty list when unknown."""

    return list(ROLE_COMPETENCIES.get(position, {}).get(experience_level, []))


__all__ = ["ROLE_COMPETENCIES", "competencies_for"]
