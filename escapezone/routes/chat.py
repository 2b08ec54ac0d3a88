"""
FastAPI routes for the assistant chat.

Endpoints:
- POST /chat/sessions: Start a session (transcript seeded with the greeting)
- GET  /chat/sessions/{session_id}: Current transcript
- POST /chat/sessions/{session_id}/messages: Send a message in a session
- POST /chat: Stateless turn with caller-supplied history
"""

import logging
from typing import Any, Iterable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from escapezone.schemas.chat import (
    ChatMessageRequest,
    ChatReplyResponse,
    ChatRequest,
    ChatSessionReplyResponse,
    ChatSessionResponse,
    ChatTurnSchema,
)
from escapezone.services.chat_service import (
    ChatSession,
    ChatSessionStore,
    ChatTurn,
    chat_error_message,
    get_chat_session_store,
    send_chat_message,
)
from escapezone.services.gemini_client import get_gemini_client
from escapezone.services.retry import RetryPolicy, get_retry_policy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _to_schema(turns: Iterable[ChatTurn]) -> List[ChatTurnSchema]:
    return [
        ChatTurnSchema(role=turn.role, text=turn.text, timestamp=turn.timestamp)
        for turn in turns
    ]


def _get_session_or_404(store: ChatSessionStore, session_id: str) -> ChatSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "session_not_found", "details": f"No chat session {session_id}"}
        )
    return session


@router.post(
    "/sessions",
    response_model=ChatSessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a chat session",
)
async def create_session(
    store: ChatSessionStore = Depends(get_chat_session_store),
) -> ChatSessionResponse:
    session = store.create()
    return ChatSessionResponse(session_id=session.session_id, messages=_to_schema(session.transcript))


@router.get(
    "/sessions/{session_id}",
    response_model=ChatSessionResponse,
    summary="Get a chat transcript",
)
async def get_session(
    session_id: str,
    store: ChatSessionStore = Depends(get_chat_session_store),
) -> ChatSessionResponse:
    session = _get_session_or_404(store, session_id)
    return ChatSessionResponse(session_id=session.session_id, messages=_to_schema(session.transcript))


@router.post(
    "/sessions/{session_id}/messages",
    response_model=ChatSessionReplyResponse,
    summary="Send a message in a chat session",
    description="""
    Appends the user message, asks Gemini with the prior transcript as
    context, and appends the reply.

    Failures are not errors: the appended model turn carries a quota or
    connection message. Blank messages are ignored (reply is null).
    """
)
async def send_session_message(
    session_id: str,
    request: ChatMessageRequest,
    store: ChatSessionStore = Depends(get_chat_session_store),
    client: Optional[Any] = Depends(get_gemini_client),
    policy: RetryPolicy = Depends(get_retry_policy),
) -> ChatSessionReplyResponse:
    session = _get_session_or_404(store, session_id)
    logger.info(f"POST /chat/sessions/{session_id}/messages called ({len(session)} turns so far)")

    reply = await session.send(client, request.message, policy=policy)

    return ChatSessionReplyResponse(
        session_id=session.session_id,
        reply=_to_schema([reply])[0] if reply else None,
        messages=_to_schema(session.transcript),
    )


@router.post(
    "",
    response_model=ChatReplyResponse,
    summary="Stateless chat turn",
)
async def chat_endpoint(
    request: ChatRequest,
    client: Optional[Any] = Depends(get_gemini_client),
    policy: RetryPolicy = Depends(get_retry_policy),
) -> ChatReplyResponse:
    """Reply to message using the supplied history; failures return a fallback reply."""
    logger.info(f"POST /chat called with {len(request.history)} history turns")

    try:
        reply = await send_chat_message(client, request.message, request.history, policy=policy)
    except Exception as e:
        logger.error(f"Chat request failed: {e}")
        reply = chat_error_message(e)

    return ChatReplyResponse(reply=reply)
