"""
FastAPI routes for career advice.

Endpoints:
- GET  /advice/topics: Topic catalogue
- POST /advice: Markdown roadmap for a topic
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends

from escapezone.agents.advice.prompts import ADVICE_TOPICS
from escapezone.schemas.advice import (
    AdviceRequest,
    AdviceResponse,
    AdviceTopic,
    AdviceTopicsResponse,
)
from escapezone.services.advice_service import get_advice
from escapezone.services.cache import ResponseCache, get_response_cache
from escapezone.services.gemini_client import get_gemini_client
from escapezone.services.retry import RetryPolicy, get_retry_policy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/advice", tags=["advice"])


@router.get("/topics", response_model=AdviceTopicsResponse, summary="List advice topics")
async def list_topics() -> AdviceTopicsResponse:
    return AdviceTopicsResponse(topics=[AdviceTopic(**topic) for topic in ADVICE_TOPICS])


@router.post(
    "",
    response_model=AdviceResponse,
    status_code=200,
    summary="Get a career roadmap",
    description="""
    Returns expert advice for a topic as Markdown.

    Never fails: when Gemini is unavailable, content holds a fallback
    message (quota exceeded or connection failure) ready to render.
    """
)
async def get_advice_endpoint(
    request: AdviceRequest,
    client: Optional[Any] = Depends(get_gemini_client),
    cache: ResponseCache = Depends(get_response_cache),
    policy: RetryPolicy = Depends(get_retry_policy),
) -> AdviceResponse:
    logger.info(f"POST /advice called: topic='{request.topic}'")

    content = await get_advice(client, cache, request.topic, policy=policy)
    return AdviceResponse(topic=request.topic, content=content)
