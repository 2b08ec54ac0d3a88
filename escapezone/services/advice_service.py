"""
Advice Service - career roadmaps as markdown.

Always returns renderable text: provider failures become fixed fallback
messages instead of exceptions. Only real advice is cached.
"""

import logging
from typing import Any, Optional

from google.genai import types

from escapezone.agents.advice.prompts import build_advice_prompt
from escapezone.config import settings
from escapezone.services.cache import AdviceCacheKey, ResponseCache
from escapezone.services.gemini_client import ensure_client
from escapezone.services.retry import ErrorKind, RetryPolicy, classify_error

logger = logging.getLogger(__name__)

EMPTY_ADVICE_FALLBACK = "Sorry, I couldn't generate advice at this time."
ADVICE_QUOTA_MESSAGE = (
    "AI Quota Exceeded. The service is currently at its limit. "
    "Please try again in a few minutes."
)
ADVICE_FAILURE_MESSAGE = "Failed to load advice. Please check your connection and try again."


def advice_error_message(error: BaseException) -> str:
    if classify_error(error) is ErrorKind.QUOTA_EXCEEDED:
        return ADVICE_QUOTA_MESSAGE
    return ADVICE_FAILURE_MESSAGE


async def get_advice(
    client: Any,
    cache: ResponseCache,
    topic: str,
    *,
    policy: Optional[RetryPolicy] = None,
    model: Optional[str] = None,
    thinking_budget: Optional[int] = None,
) -> str:
    """
    Get a markdown roadmap for a topic title.

    Args:
        client: google-genai Client (or a test double exposing client.aio)
        cache: Response cache shared across requests
        topic: Topic title, used verbatim as the cache key
        policy: Retry policy (defaults to settings)
        model: Gemini model name (defaults to settings)
        thinking_budget: Thinking token budget (defaults to settings)

    Returns:
        Markdown advice, or a fallback message on empty output or failure
    """
    key = AdviceCacheKey(topic)
    cached = cache.get(key)
    if cached is not None:
        logger.info("Returning cached advice")
        return cached

    policy = policy or RetryPolicy.from_settings()
    budget = settings.ADVICE_THINKING_BUDGET if thinking_budget is None else thinking_budget

    config = types.GenerateContentConfig(
        thinking_config=types.ThinkingConfig(thinking_budget=budget),
    )
    prompt = build_advice_prompt(topic)

    try:
        gemini = ensure_client(client)

        async def _call():
            return await gemini.aio.models.generate_content(
                model=model or settings.GEMINI_MODEL,
                contents=prompt,
                config=config,
            )

        logger.info(f"Requesting advice for topic='{topic}'")
        response = await policy.run(_call)
    except Exception as e:
        logger.error(f"Error getting advice: {e}")
        return advice_error_message(e)

    if not response.text:
        logger.warning("Gemini returned empty advice")
        return EMPTY_ADVICE_FALLBACK

    cache.set(key, response.text)
    return response.text
