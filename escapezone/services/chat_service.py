"""
Chat Service - assistant conversations with replayed history.

Each turn creates a fresh Gemini chat with the system prompt attached and
the prior transcript replayed as history, then sends the new message. The
transcript is the only conversational memory: nothing is kept provider-side
between turns.

ChatSession owns an append-only transcript seeded with the greeting. The
user turn is appended before the provider call so the UI can render it
immediately; the reply (or a fallback message) is appended afterwards.
Role alternation is not enforced.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Protocol, Sequence, Tuple
from uuid import uuid4

from google.genai import types

from escapezone.agents.chat.prompts import CHAT_GREETING, CHAT_SYSTEM_PROMPT
from escapezone.config import settings
from escapezone.services.gemini_client import ensure_client
from escapezone.services.retry import ErrorKind, RetryPolicy, classify_error

logger = logging.getLogger(__name__)

Role = Literal["user", "model"]

EMPTY_REPLY_FALLBACK = "I'm having trouble connecting right now."
CHAT_QUOTA_MESSAGE = (
    "AI Quota Exceeded. I'm currently at my limit. Please try again in a few minutes."
)
CHAT_FAILURE_MESSAGE = "I'm having trouble connecting right now."


class TurnLike(Protocol):
    role: str
    text: str


@dataclass(frozen=True)
class ChatTurn:
    role: Role
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def chat_error_message(error: BaseException) -> str:
    if classify_error(error) is ErrorKind.QUOTA_EXCEEDED:
        return CHAT_QUOTA_MESSAGE
    return CHAT_FAILURE_MESSAGE


def build_chat_history(history: Sequence[TurnLike]) -> List[types.Content]:
    """Convert transcript turns to Gemini contents, keeping their order."""
    return [
        types.Content(role=turn.role, parts=[types.Part(text=turn.text)])
        for turn in history
    ]


async def send_chat_message(
    client: Any,
    message: str,
    history: Sequence[TurnLike],
    *,
    policy: Optional[RetryPolicy] = None,
    model: Optional[str] = None,
) -> str:
    """
    Send one message with the given history as context.

    Args:
        client: google-genai Client (or a test double exposing client.aio)
        message: New user message, sent unmodified
        history: Prior turns, replayed in order
        policy: Retry policy (defaults to settings)
        model: Gemini model name (defaults to settings)

    Returns:
        Reply text, or a fallback if Gemini returned no text

    Raises:
        GeminiNotConfiguredError: No client available
        Exception: The provider error, once retries are exhausted or for
            non rate-limit failures
    """
    client = ensure_client(client)
    policy = policy or RetryPolicy.from_settings()
    contents = build_chat_history(history)
    config = types.GenerateContentConfig(system_instruction=CHAT_SYSTEM_PROMPT)

    async def _call():
        # A fresh chat per attempt, so a failed send leaves no partial history
        chat = client.aio.chats.create(
            model=model or settings.GEMINI_MODEL,
            config=config,
            history=list(contents),
        )
        return await chat.send_message(message)

    logger.info(f"Sending chat message with {len(contents)} history turns")
    response = await policy.run(_call)
    return response.text or EMPTY_REPLY_FALLBACK


class ChatSession:
    """Transcript for one UI session (e.g. one page load)."""

    def __init__(self, session_id: Optional[str] = None, greeting: str = CHAT_GREETING) -> None:
        self.session_id = session_id or uuid4().hex
        self._turns: List[ChatTurn] = [ChatTurn(role="model", text=greeting)]

    @property
    def transcript(self) -> Tuple[ChatTurn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    async def send(
        self,
        client: Any,
        message: str,
        *,
        policy: Optional[RetryPolicy] = None,
        model: Optional[str] = None,
    ) -> Optional[ChatTurn]:
        """
        Append a user turn, ask Gemini, append the model turn.

        Blank messages are ignored and return None. Failures never raise:
        the appended model turn carries a quota or connectivity message.
        """
        if not message.strip():
            return None

        history = list(self._turns)
        self._turns.append(ChatTurn(role="user", text=message))

        try:
            reply = await send_chat_message(client, message, history, policy=policy, model=model)
        except Exception as e:
            logger.error(f"Chat turn failed for session {self.session_id}: {e}")
            reply = chat_error_message(e)

        turn = ChatTurn(role="model", text=reply)
        self._turns.append(turn)
        return turn


class ChatSessionStore:
    """In-memory session registry. Sessions live until the process exits."""

    def __init__(self) -> None:
        self._sessions: Dict[str, ChatSession] = {}

    def create(self) -> ChatSession:
        session = ChatSession()
        self._sessions[session.session_id] = session
        logger.info(f"Chat session created: {session.session_id}")
        return session

    def get(self, session_id: str) -> Optional[ChatSession]:
        return self._sessions.get(session_id)

    def __len__(self) -> int:
        return len(self._sessions)


_session_store = ChatSessionStore()


def get_chat_session_store() -> ChatSessionStore:
    """FastAPI dependency returning the process-wide session store."""
    return _session_store
