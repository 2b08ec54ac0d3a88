"""
Career advice prompt templates.

Advice is a single roadmap-style instruction parameterised only by the
topic title. The response is free-form markdown, so no schema is attached.
"""

from typing import Dict, List

ADVICE_TOPICS: List[Dict[str, str]] = [
    {
        "id": "tech-career",
        "title": "Technical Career Paths",
        "icon": "💻",
        "description": "Roadmaps for Software, AI, Data Science, and DevOps.",
    },
    {
        "id": "study-abroad",
        "title": "Study Abroad Guide",
        "icon": "✈️",
        "description": "Process, scholarships, and best universities globally.",
    },
    {
        "id": "learning-strategies",
        "title": "Smart Learning",
        "icon": "🧠",
        "description": "How to learn complex technical subjects efficiently.",
    },
    {
        "id": "interview-prep",
        "title": "Interview Mastery",
        "icon": "👔",
        "description": "Cracking technical interviews at top tech firms.",
    },
    {
        "id": "freelancing",
        "title": "Freelancing in Tech",
        "icon": "🚀",
        "description": "How to start, find clients, and scale your freelance technical business.",
    },
    {
        "id": "portfolio",
        "title": "Building a Portfolio",
        "icon": "📁",
        "description": "Crafting projects that stand out to recruiters and demonstrate real skills.",
    },
]


def build_advice_prompt(topic: str) -> str:
    """Build the roadmap instruction for an advice topic title."""
    return (
        f"Provide expert advice and a step-by-step roadmap for: {topic}. "
        "Focus on technical fields, learning resources, and study abroad process "
        "where applicable. Format in Markdown with clear headings and bullet points."
    )
