"""
Recommendation prompts and structured output schema.

The service layer is in:
- escapezone/services/recommendation_service.py

Prompt templates are in:
- escapezone/agents/recommendation/prompts.py
"""

from escapezone.agents.recommendation.prompts import (
    CATEGORIES,
    GENRES,
    NO_CONSTRAINT,
    RECOMMENDATION_RESPONSE_SCHEMA,
    YEARS,
    RecommendationSchema,
    build_recommendation_prompt,
)

__all__ = [
    "CATEGORIES",
    "GENRES",
    "NO_CONSTRAINT",
    "RECOMMENDATION_RESPONSE_SCHEMA",
    "YEARS",
    "RecommendationSchema",
    "build_recommendation_prompt",
]
