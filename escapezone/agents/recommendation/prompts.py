"""
Recommendation Prompt Templates

Contains the prompt builder and structured output schema for the
entertainment recommendation flow.

Architecture:
- Pattern: Single-shot LLM (one generate_content call per filter combination)
- Model: configured by GEMINI_MODEL
- Output: Structured JSON (response_schema built from a Pydantic model)

The prompt is deterministic for a given filter combination, which is what
makes the in-memory response cache sound.
"""

from typing import List, Optional

from escapezone.schemas.recommendations import RecommendationSchema

# Sentinel sent by the UI filters when the user does not constrain a field
NO_CONSTRAINT = "All"

CATEGORIES: List[str] = ["Movies", "Web-Series", "Anime"]

GENRES: List[str] = [
    NO_CONSTRAINT, "Action", "Comedy", "Drama", "Sci-Fi",
    "Horror", "Romance", "Thriller", "Animation",
]

YEARS: List[str] = [
    NO_CONSTRAINT, "2025", "2024", "2023", "2022", "2021", "2020", "2010s", "2000s",
]

DEFAULT_QUALIFIER = "that are trending or classic high-rated hits"

OUTPUT_INSTRUCTIONS = (
    "For each recommendation, provide a high-resolution Unsplash image URL and "
    "a valid YouTube embed URL for its official trailer. Include IMDb, Rotten "
    "Tomatoes ratings, and the release year."
)


# =============================================================================
# STRUCTURED OUTPUT SCHEMA
# =============================================================================

# Gemini accepts a list[Model] annotation as an array-of-objects schema.
# RecommendationSchema has no defaults, so every field is marked required
# and type is sent as an enum.
RECOMMENDATION_RESPONSE_SCHEMA = list[RecommendationSchema]


# =============================================================================
# PROMPT BUILDER
# =============================================================================

def _is_constrained(value: Optional[str]) -> bool:
    return bool(value) and value != NO_CONSTRAINT


def build_recommendation_constraints(
    query: Optional[str] = None,
    genre: Optional[str] = None,
    year: Optional[str] = None,
) -> List[str]:
    """
    Return the constraint clauses for a filter combination, in prompt order.

    "All" and empty values add no clause.
    """
    constraints: List[str] = []
    if _is_constrained(genre):
        constraints.append(f"in the {genre} genre")
    if _is_constrained(year):
        constraints.append(f"released in {year}")
    if query:
        constraints.append(f'matching the search: "{query}"')
    return constraints


def build_recommendation_prompt(
    category: str,
    query: Optional[str] = None,
    genre: Optional[str] = None,
    year: Optional[str] = None,
    count: int = 6,
) -> str:
    """
    Build the recommendation instruction for one filter combination.

    Args:
        category: Content category as shown in the UI (e.g. "Movies")
        query: Optional free-text search
        genre: Optional genre, "All" means unconstrained
        year: Optional release year or decade, "All" means unconstrained
        count: Number of items to ask for

    Returns:
        The prompt string. Constraint clauses are joined with ", ";
        without any constraint the trending/classic qualifier is used.

    Example:
        >>> build_recommendation_prompt("Movies", genre="Horror", year="2020s")
        'Recommend 6 top-rated Movies in the Horror genre, released in 2020s. For each ...'
    """
    prompt = f"Recommend {count} top-rated {category}"

    constraints = build_recommendation_constraints(query=query, genre=genre, year=year)
    if constraints:
        prompt += " " + ", ".join(constraints)
    else:
        prompt += " " + DEFAULT_QUALIFIER

    return f"{prompt}. {OUTPUT_INSTRUCTIONS}"
