"""
Pydantic schemas for career advice endpoints.
"""

from typing import List

from pydantic import BaseModel, Field


class AdviceTopic(BaseModel):
    """An entry of the advice topic catalogue."""
    id: str = Field(..., examples=["study-abroad"])
    title: str = Field(..., examples=["Study Abroad Guide"])
    icon: str
    description: str


class AdviceTopicsResponse(BaseModel):
    topics: List[AdviceTopic]


class AdviceRequest(BaseModel):
    """Request a roadmap for one topic title."""
    topic: str = Field(
        ...,
        description="Topic title (also the cache key, used verbatim)",
        min_length=1,
        max_length=200,
        examples=["Technical Career Paths"]
    )


class AdviceResponse(BaseModel):
    """
    Advice for a topic.

    content is always renderable markdown: on failure it holds a fixed
    fallback message instead of an error.
    """
    topic: str
    content: str = Field(..., description="Markdown roadmap or fallback message")
