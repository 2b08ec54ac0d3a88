"""
Gemini client construction.

One google-genai Client is built lazily and shared. Orchestration functions
never reach for it themselves: it is passed in explicitly (through FastAPI
dependencies in the HTTP layer) so tests can hand in a mock.
"""

import logging
from typing import Optional

from google import genai

from escapezone.config import settings

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client: Optional[genai.Client] = None


class GeminiNotConfiguredError(RuntimeError):
    """Raised when a Gemini call is attempted without an API key."""


def get_gemini_client() -> Optional[genai.Client]:
    """
    Lazy initialization of the Gemini client.

    Returns None (with a warning) when GOOGLE_API_KEY is not configured,
    so the app can still start and answer with fallbacks.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.GOOGLE_API_KEY:
        logger.warning(
            "GOOGLE_API_KEY not configured. Gemini-backed endpoints will not work. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        return None

    _gemini_client = genai.Client(api_key=settings.GOOGLE_API_KEY)
    logger.info("Gemini client initialized successfully")
    return _gemini_client


def ensure_client(client: Optional[genai.Client]) -> genai.Client:
    """Return the client, or raise GeminiNotConfiguredError if it is missing."""
    if client is None:
        raise GeminiNotConfiguredError(
            "GOOGLE_API_KEY is not configured. "
            "Please set it in your .env file to use Escape Zone."
        )
    return client
