"""
Pydantic schemas for chat endpoints.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ChatTurnSchema(BaseModel):
    """One transcript entry."""
    role: Literal["user", "model"]
    text: str
    timestamp: Optional[datetime] = None


class ChatMessageRequest(BaseModel):
    """A new user message for an existing session."""
    message: str = Field(..., max_length=4000, examples=["What should I learn for MLOps?"])


class ChatRequest(BaseModel):
    """
    Stateless chat turn.

    history is replayed to Gemini in the given order; alternation of roles
    is not checked.
    """
    message: str = Field(..., min_length=1, max_length=4000)
    history: List[ChatTurnSchema] = Field(default_factory=list)


class ChatReplyResponse(BaseModel):
    """Reply for a stateless chat turn (text or fallback message)."""
    reply: str


class ChatSessionResponse(BaseModel):
    """A chat session and its full transcript."""
    session_id: str
    messages: List[ChatTurnSchema]


class ChatSessionReplyResponse(BaseModel):
    """Reply appended to a session, with the transcript after the turn."""
    session_id: str
    reply: Optional[ChatTurnSchema] = Field(
        None,
        description="Model turn appended for this message; null for blank input"
    )
    messages: List[ChatTurnSchema]
