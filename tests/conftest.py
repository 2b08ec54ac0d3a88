"""
Pytest configuration for Escape Zone backend tests.

Sets up test environment and global fixtures. No test talks to Gemini or
an SMTP server: the Gemini client is a MagicMock exposing the async
surface (client.aio.models / client.aio.chats) and retries use a
recording zero-delay sleep.
"""
import os
import pytest
from unittest.mock import AsyncMock, MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from escapezone.services.retry import RetryPolicy  # noqa: E402


class RateLimitError(Exception):
    """Provider error shaped like google-genai's APIError for HTTP 429."""

    def __init__(self, message: str = "429 RESOURCE_EXHAUSTED. Quota exceeded."):
        super().__init__(message)
        self.code = 429
        self.status = "RESOURCE_EXHAUSTED"


class RecordingSleep:
    """Zero-delay sleep that remembers every requested delay (seconds)."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_response(text):
    """Fake GenerateContentResponse with only .text set."""
    response = MagicMock()
    response.text = text
    return response


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def fast_policy(recording_sleep):
    """Default retry budget (3 retries, 1000ms) without real waiting."""
    return RetryPolicy(retries=3, backoff_ms=1000, sleep=recording_sleep)


@pytest.fixture
def gemini_client():
    """
    Mock google-genai Client.

    - client.aio.models.generate_content: AsyncMock
    - client.aio.chats.create(...) returns a chat whose send_message is an AsyncMock
    """
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    chat = MagicMock()
    chat.send_message = AsyncMock()
    client.aio.chats.create.return_value = chat
    return client


@pytest.fixture
def rate_limit_error():
    """Factory for 429 provider errors."""
    return RateLimitError


@pytest.fixture
def gemini_response():
    """Factory for fake Gemini responses: gemini_response(text)."""
    return make_response
