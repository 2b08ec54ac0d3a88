"""
FastAPI routes for entertainment recommendations.

Endpoints:
- GET  /recommendations/filters: Filter choices for the UI
- POST /recommendations/query: Recommendations for a filter combination
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends

from escapezone.agents.recommendation.prompts import CATEGORIES, GENRES, YEARS
from escapezone.schemas.recommendations import (
    RecommendationFiltersResponse,
    RecommendationQueryRequest,
    RecommendationQueryResponse,
    RecommendationQueryResponseError,
    RecommendationQueryResponseOK,
)
from escapezone.services.cache import ResponseCache, get_response_cache
from escapezone.services.gemini_client import get_gemini_client
from escapezone.services.recommendation_service import get_recommendations
from escapezone.services.retry import ErrorKind, RetryPolicy, classify_error, get_retry_policy

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"]
)

QUOTA_EXCEEDED_MESSAGE = "AI Quota Exceeded. Please try again in a few minutes."
FAILURE_MESSAGE = "Failed to fetch recommendations. Please check your connection."


@router.get(
    "/filters",
    response_model=RecommendationFiltersResponse,
    summary="List recommendation filters",
)
async def list_filters() -> RecommendationFiltersResponse:
    """Categories, genres and years offered by the filter bar ("All" = no constraint)."""
    return RecommendationFiltersResponse(categories=CATEGORIES, genres=GENRES, years=YEARS)


@router.post(
    "/query",
    response_model=RecommendationQueryResponse,
    status_code=200,
    summary="Query entertainment recommendations",
    description="""
    Recommends titles for the selected category and filters.

    **Frontend Flow:**
    1. User picks category, genre, year or types a search
    2. POST /recommendations/query with the filter state
    3. Receive one of two responses:
       - OK: render results in order (an empty list means "no results")
       - QUOTA_EXCEEDED / FAILED: show reason and offer a retry

    Identical filter combinations are served from the in-memory cache.
    """
)
async def query_recommendations_endpoint(
    request: RecommendationQueryRequest,
    client: Optional[Any] = Depends(get_gemini_client),
    cache: ResponseCache = Depends(get_response_cache),
    policy: RetryPolicy = Depends(get_retry_policy),
) -> RecommendationQueryResponse:
    logger.info(
        f"POST /recommendations/query called: category='{request.category}', "
        f"genre='{request.genre}', year='{request.year}'"
    )

    try:
        items = await get_recommendations(
            client,
            cache,
            request.category,
            query=request.query,
            genre=request.genre,
            year=request.year,
            policy=policy,
        )
    except Exception as e:
        logger.error(f"Error fetching recommendations: {e}")
        if classify_error(e) is ErrorKind.QUOTA_EXCEEDED:
            return RecommendationQueryResponseError(
                status="QUOTA_EXCEEDED",
                reason=QUOTA_EXCEEDED_MESSAGE
            )
        return RecommendationQueryResponseError(status="FAILED", reason=FAILURE_MESSAGE)

    logger.info(f"Returning {len(items)} recommendations")
    return RecommendationQueryResponseOK(status="OK", results=items)
