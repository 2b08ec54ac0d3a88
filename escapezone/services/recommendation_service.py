"""
Recommendation Service - Gemini structured output

Turns the UI filter state into a Gemini call and a list of
RecommendationItem.

Architecture:
- Pattern: Single-shot LLM with response_schema (JSON array of objects)
- Resilience: rate-limit retry with exponential backoff (services/retry.py)
- Memoization: ResponseCache keyed by (category, query, genre, year)

Error handling:
- Unparseable JSON and JSON that fails validation both yield [] and are
  not cached; callers cannot tell them apart from an empty answer
- Transport failures (after retries) propagate to the caller, which maps
  them to QUOTA_EXCEEDED / FAILED
"""

import json
import logging
from typing import Any, List, Optional

from google.genai import types
from pydantic import TypeAdapter, ValidationError

from escapezone.agents.recommendation.prompts import (
    RECOMMENDATION_RESPONSE_SCHEMA,
    build_recommendation_prompt,
)
from escapezone.config import settings
from escapezone.schemas.recommendations import RecommendationItem
from escapezone.services.cache import RecommendationCacheKey, ResponseCache
from escapezone.services.gemini_client import ensure_client
from escapezone.services.retry import RetryPolicy

logger = logging.getLogger(__name__)

_items_adapter = TypeAdapter(List[RecommendationItem])


def _parse_recommendations(text: Optional[str]) -> Optional[List[RecommendationItem]]:
    """
    Parse Gemini's JSON text into recommendation items.

    Returns None when the payload is not valid JSON or does not match the
    item schema. Missing text is treated as an empty array.
    """
    try:
        data = json.loads(text or "[]")
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse recommendations: {e}")
        logger.debug(f"Raw content: {(text or '')[:500]}")
        return None

    try:
        return _items_adapter.validate_python(data)
    except ValidationError as e:
        logger.error(f"Recommendations did not match schema: {e.error_count()} errors")
        return None


def parse_recommendations(text: Optional[str]) -> List[RecommendationItem]:
    """Parse Gemini's JSON text, returning [] for any malformed payload."""
    items = _parse_recommendations(text)
    return items if items is not None else []


async def get_recommendations(
    client: Any,
    cache: ResponseCache,
    category: str,
    query: Optional[str] = None,
    genre: Optional[str] = None,
    year: Optional[str] = None,
    *,
    policy: Optional[RetryPolicy] = None,
    model: Optional[str] = None,
    count: Optional[int] = None,
) -> List[RecommendationItem]:
    """
    Get recommendations for a filter combination.

    This function:
    1. Derives the cache key and returns the cached list on a hit
    2. Builds the prompt and structured output config
    3. Calls Gemini through the retry policy
    4. Parses and validates the JSON array
    5. Caches and returns the items (provider order preserved)

    Args:
        client: google-genai Client (or a test double exposing client.aio)
        cache: Response cache shared across requests
        category: Content category (e.g. "Movies")
        query: Optional free-text search
        genre: Optional genre, "All" for none
        year: Optional year/decade, "All" for none
        policy: Retry policy (defaults to settings)
        model: Gemini model name (defaults to settings)
        count: Number of items to request (defaults to settings)

    Returns:
        List of RecommendationItem, possibly empty

    Raises:
        GeminiNotConfiguredError: No client available
        Exception: The provider error, once retries are exhausted or for
            non rate-limit failures
    """
    key = RecommendationCacheKey.from_filters(category, query, genre, year)
    cached = cache.get(key)
    if cached is not None:
        logger.info(f"Returning cached recommendations for category='{category}'")
        return cached

    client = ensure_client(client)
    policy = policy or RetryPolicy.from_settings()

    prompt = build_recommendation_prompt(
        category,
        query=query,
        genre=genre,
        year=year,
        count=count or settings.RECOMMENDATION_COUNT,
    )
    config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=RECOMMENDATION_RESPONSE_SCHEMA,
    )

    async def _call():
        return await client.aio.models.generate_content(
            model=model or settings.GEMINI_MODEL,
            contents=prompt,
            config=config,
        )

    logger.info(
        f"Requesting recommendations: category='{category}', genre='{genre}', year='{year}'"
    )
    response = await policy.run(_call)

    items = _parse_recommendations(response.text)
    if items is None:
        return []

    cache.set(key, items)
    logger.info(f"Returning {len(items)} recommendations")
    return items
