"""
Service layer for the Escape Zone backend.

Contains the orchestration between routes and Gemini:
- Builds prompts and structured output configs
- Runs provider calls through the rate-limit retry policy
- Memoizes recommendations and advice in the in-memory cache
- Keeps chat transcripts and replays them as history

Services act as the glue between routes (HTTP layer) and the Gemini client.
"""

from .advice_service import get_advice
from .cache import AdviceCacheKey, RecommendationCacheKey, ResponseCache
from .chat_service import ChatSession, ChatSessionStore, ChatTurn, send_chat_message
from .notification_service import send_login_notification
from .recommendation_service import get_recommendations, parse_recommendations
from .retry import ErrorKind, RetryPolicy, classify_error, is_rate_limit_error, with_retry

__all__ = [
    "get_advice",
    "AdviceCacheKey",
    "RecommendationCacheKey",
    "ResponseCache",
    "ChatSession",
    "ChatSessionStore",
    "ChatTurn",
    "send_chat_message",
    "send_login_notification",
    "get_recommendations",
    "parse_recommendations",
    "ErrorKind",
    "RetryPolicy",
    "classify_error",
    "is_rate_limit_error",
    "with_retry",
]
