"""
Pydantic schemas for recommendation endpoints.

These models define the request/response contracts for the recommendation
flow and the RecommendationItem data model parsed from Gemini's structured
output.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

FALLBACK_IMAGE_URL = (
    "https://images.unsplash.com/photo-1485846234645-a62644f84728"
    "?q=80&w=1200&auto=format&fit=crop"
)

ContentType = Literal["movie", "web-series", "anime"]


# ============================================================================
# DATA MODEL
# ============================================================================

class RecommendationSchema(BaseModel):
    """
    Structured output contract for a single recommendation.

    Sent to Gemini as response_schema (list[RecommendationSchema]); every
    field is required there, and type is an enum so the provider cannot
    answer with values the parser rejects.
    """
    id: str
    title: str
    type: ContentType = Field(..., description="movie, web-series, or anime")
    ratingIMDb: str = Field(..., description="IMDb rating as provided")
    ratingRottenTomatoes: str = Field(..., description="Rotten Tomatoes score as provided")
    description: str = Field(..., description="Short synopsis")
    imageUrl: str = Field(..., description="A high-resolution Unsplash image URL.")
    trailerUrl: str = Field(
        ...,
        description=(
            "A valid YouTube embed URL (e.g., https://www.youtube.com/embed/...) "
            "for the official trailer."
        )
    )
    genres: List[str] = Field(..., description="Ordered genre tags")
    releaseYear: str


class RecommendationItem(RecommendationSchema):
    """
    A single recommended title, as returned by Gemini.

    Field names follow the provider's JSON keys so the structured output can
    be validated directly. Ratings are free-form strings and are not checked
    to be numeric. Instances are immutable; a new list is created for every
    successful provider call.
    """
    model_config = ConfigDict(frozen=True)

    imageUrl: str = Field("", description="Image URL (may be missing or invalid)")

    @computed_field  # type: ignore[misc]
    @property
    def display_image_url(self) -> str:
        """Image URL safe to render: cropped when usable, fallback otherwise."""
        if not self.imageUrl or not self.imageUrl.startswith("http"):
            return FALLBACK_IMAGE_URL
        separator = "&" if "?" in self.imageUrl else "?"
        return f"{self.imageUrl}{separator}auto=format&fit=crop&w=1200&q=80"


# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendationQueryRequest(BaseModel):
    """
    Request for recommendations matching the UI filter state.

    "All" for genre or year means no constraint. Values are used verbatim
    (no trimming or case folding), both in the prompt and the cache key.
    """
    category: str = Field(
        ...,
        description="Content category",
        min_length=1,
        max_length=100,
        examples=["Movies", "Web-Series", "Anime"]
    )
    query: Optional[str] = Field(
        None,
        description="Free-text search",
        max_length=500,
        examples=["mind-bending time travel"]
    )
    genre: Optional[str] = Field(
        None,
        description="Genre filter, 'All' for none",
        max_length=100,
        examples=["All", "Horror"]
    )
    year: Optional[str] = Field(
        None,
        description="Release year or decade, 'All' for none",
        max_length=50,
        examples=["All", "2024", "2010s"]
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RecommendationQueryResponseOK(BaseModel):
    """
    Successful recommendation call.

    results may be empty: an unparseable provider response is reported as
    "no results", not as an error.
    """
    status: Literal["OK"] = Field("OK", description="Indicates a completed call")
    results: List[RecommendationItem] = Field(
        default_factory=list,
        description="Recommendations in provider order"
    )


class RecommendationQueryResponseError(BaseModel):
    """
    Failed recommendation call.

    Frontend should display reason and offer a retry.
    """
    status: Literal["QUOTA_EXCEEDED", "FAILED"] = Field(
        ...,
        description="QUOTA_EXCEEDED after rate-limit retries ran out, FAILED otherwise"
    )
    reason: str = Field(
        ...,
        description="User-facing message",
        examples=[
            "AI Quota Exceeded. Please try again in a few minutes.",
            "Failed to fetch recommendations. Please check your connection."
        ]
    )


class RecommendationFiltersResponse(BaseModel):
    """Filter choices offered by the UI."""
    categories: List[str]
    genres: List[str]
    years: List[str]


RecommendationQueryResponse = Union[
    RecommendationQueryResponseOK,
    RecommendationQueryResponseError
]
