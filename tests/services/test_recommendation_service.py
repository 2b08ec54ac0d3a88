"""
Tests for the Recommendation Service and its prompt builder.

These tests verify:
- Prompt construction for every filter combination
- Parsing of Gemini's structured output (malformed payloads collapse to [])
- Cache behaviour (one provider call per filter combination)
- Retry and error propagation through the service

Note: These tests use a mocked Gemini client to avoid actual API calls
and ensure deterministic test behavior.
"""

import asyncio
import json

import pytest

from escapezone.agents.recommendation.prompts import (
    DEFAULT_QUALIFIER,
    RECOMMENDATION_RESPONSE_SCHEMA,
    RecommendationSchema,
    build_recommendation_constraints,
    build_recommendation_prompt,
)
from escapezone.schemas.recommendations import FALLBACK_IMAGE_URL, RecommendationItem
from escapezone.services.cache import RecommendationCacheKey, ResponseCache
from escapezone.services.gemini_client import GeminiNotConfiguredError
from escapezone.services.recommendation_service import (
    get_recommendations,
    parse_recommendations,
)


# =============================================================================
# FIXTURES
# =============================================================================

def _item(title: str, item_type: str = "movie", **overrides) -> dict:
    item = {
        "id": title.lower().replace(" ", "-"),
        "title": title,
        "type": item_type,
        "ratingIMDb": "7.8",
        "ratingRottenTomatoes": "91%",
        "description": f"{title} description.",
        "imageUrl": "https://images.unsplash.com/photo-123",
        "trailerUrl": "https://www.youtube.com/embed/abc123",
        "genres": ["Horror", "Thriller"],
        "releaseYear": "2022",
    }
    item.update(overrides)
    return item


@pytest.fixture
def horror_payload():
    """Valid structured output for two horror movies."""
    return json.dumps([_item("Barbarian"), _item("Talk to Me", releaseYear="2023")])


# =============================================================================
# UNIT TESTS: Prompt Building
# =============================================================================

class TestPromptBuilding:
    """Tests for build_recommendation_prompt."""

    def test_no_constraints_uses_trending_qualifier(self):
        prompt = build_recommendation_prompt("Movies", query="", genre="All", year="All")
        assert prompt.startswith("Recommend 6 top-rated Movies that are trending or classic high-rated hits. ")

    @pytest.mark.parametrize("genre", [None, "", "All"])
    @pytest.mark.parametrize("year", [None, "", "All"])
    @pytest.mark.parametrize("query", [None, ""])
    def test_unconstrained_combinations(self, genre, year, query):
        """Every "no constraint" combination gets the qualifier and no clauses."""
        prompt = build_recommendation_prompt("Anime", query=query, genre=genre, year=year)
        assert DEFAULT_QUALIFIER in prompt
        assert "genre" not in prompt
        assert "released in" not in prompt
        assert "matching the search" not in prompt

    def test_genre_and_year_joined_with_comma(self):
        prompt = build_recommendation_prompt("Movies", query="", genre="Horror", year="2020s")
        assert "Recommend 6 top-rated Movies in the Horror genre, released in 2020s." in prompt
        assert DEFAULT_QUALIFIER not in prompt

    def test_all_constraints_in_order(self):
        prompt = build_recommendation_prompt(
            "Web-Series", query="heist", genre="Thriller", year="2024"
        )
        assert (
            'Recommend 6 top-rated Web-Series in the Thriller genre, released in 2024, '
            'matching the search: "heist".'
        ) in prompt

    def test_query_only(self):
        prompt = build_recommendation_prompt("Movies", query="space opera", genre="All", year="All")
        assert 'Movies matching the search: "space opera".' in prompt
        assert DEFAULT_QUALIFIER not in prompt

    def test_output_instructions_always_present(self):
        prompt = build_recommendation_prompt("Movies", genre="Drama")
        assert "Unsplash image URL" in prompt
        assert "YouTube embed URL" in prompt
        assert prompt.endswith("Include IMDb, Rotten Tomatoes ratings, and the release year.")

    def test_custom_count(self):
        assert build_recommendation_prompt("Anime", count=3).startswith("Recommend 3 top-rated Anime")

    def test_prompt_is_deterministic(self):
        a = build_recommendation_prompt("Movies", "x", "Comedy", "2010s")
        b = build_recommendation_prompt("Movies", "x", "Comedy", "2010s")
        assert a == b

    def test_constraint_clauses(self):
        assert build_recommendation_constraints(genre="All", year="All") == []
        assert build_recommendation_constraints(genre="Sci-Fi") == ["in the Sci-Fi genre"]


class TestResponseSchema:

    def test_schema_requires_all_fields(self):
        assert RECOMMENDATION_RESPONSE_SCHEMA == list[RecommendationSchema]
        required = RecommendationSchema.model_json_schema()["required"]
        assert set(required) == {
            "id", "title", "type", "ratingIMDb", "ratingRottenTomatoes",
            "description", "imageUrl", "trailerUrl", "genres", "releaseYear",
        }

    def test_type_is_sent_as_enum(self):
        type_schema = RecommendationSchema.model_json_schema()["properties"]["type"]
        assert type_schema["enum"] == ["movie", "web-series", "anime"]

    def test_item_and_schema_share_fields(self):
        assert set(RecommendationItem.model_fields) == set(RecommendationSchema.model_fields)
        assert RecommendationItem.model_fields["type"].annotation == RecommendationSchema.model_fields["type"].annotation
        assert not RecommendationItem.model_fields["imageUrl"].is_required()

    def test_every_schema_type_is_accepted_by_parser(self):
        payload = [_item(f"Title {t}", item_type=t) for t in ("movie", "web-series", "anime")]
        items = parse_recommendations(json.dumps(payload))
        assert [item.type for item in items] == ["movie", "web-series", "anime"]


# =============================================================================
# UNIT TESTS: Parsing
# =============================================================================

class TestParseRecommendations:
    """Tests for parse_recommendations."""

    def test_valid_payload(self, horror_payload):
        items = parse_recommendations(horror_payload)
        assert [item.title for item in items] == ["Barbarian", "Talk to Me"]
        assert all(isinstance(item, RecommendationItem) for item in items)

    def test_invalid_json_returns_empty(self):
        assert parse_recommendations("Sure! Here are some movies: ...") == []

    def test_missing_required_field_returns_empty(self):
        broken = _item("Nope")
        del broken["trailerUrl"]
        assert parse_recommendations(json.dumps([broken])) == []

    def test_unknown_type_returns_empty(self):
        assert parse_recommendations(json.dumps([_item("Doc", item_type="documentary")])) == []

    def test_object_instead_of_array_returns_empty(self):
        assert parse_recommendations(json.dumps(_item("Solo"))) == []

    def test_none_text_is_empty_array(self):
        assert parse_recommendations(None) == []

    def test_missing_image_falls_back(self):
        item = _item("No Poster")
        del item["imageUrl"]
        items = parse_recommendations(json.dumps([item]))
        assert items[0].display_image_url == FALLBACK_IMAGE_URL

    def test_invalid_image_falls_back(self):
        items = parse_recommendations(json.dumps([_item("Bad", imageUrl="not-a-url")]))
        assert items[0].display_image_url == FALLBACK_IMAGE_URL

    def test_image_gets_crop_parameters(self):
        items = parse_recommendations(json.dumps([
            _item("A", imageUrl="https://img.example/a.jpg"),
            _item("B", imageUrl="https://img.example/b.jpg?ixid=1"),
        ]))
        assert items[0].display_image_url == "https://img.example/a.jpg?auto=format&fit=crop&w=1200&q=80"
        assert items[1].display_image_url == "https://img.example/b.jpg?ixid=1&auto=format&fit=crop&w=1200&q=80"


# =============================================================================
# INTEGRATION TESTS: Service with mocked Gemini
# =============================================================================

class TestGetRecommendations:
    """Tests for get_recommendations."""

    @pytest.mark.asyncio
    async def test_returns_items_in_provider_order(
        self, gemini_client, gemini_response, fast_policy, horror_payload
    ):
        gemini_client.aio.models.generate_content.return_value = gemini_response(horror_payload)

        items = await get_recommendations(
            gemini_client, ResponseCache(), "Movies", "", "Horror", "2020s", policy=fast_policy
        )

        assert [item.title for item in items] == ["Barbarian", "Talk to Me"]
        call = gemini_client.aio.models.generate_content.call_args
        assert "in the Horror genre, released in 2020s" in call.kwargs["contents"]
        assert call.kwargs["config"].response_mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_identical_requests_call_gemini_once(
        self, gemini_client, gemini_response, fast_policy, horror_payload
    ):
        gemini_client.aio.models.generate_content.return_value = gemini_response(horror_payload)
        cache = ResponseCache()

        first = await get_recommendations(gemini_client, cache, "Movies", "", "All", "All", policy=fast_policy)
        second = await get_recommendations(gemini_client, cache, "Movies", "", "All", "All", policy=fast_policy)

        assert gemini_client.aio.models.generate_content.await_count == 1
        assert second is first

    @pytest.mark.asyncio
    async def test_different_filters_are_separate_calls(
        self, gemini_client, gemini_response, fast_policy, horror_payload
    ):
        gemini_client.aio.models.generate_content.return_value = gemini_response(horror_payload)
        cache = ResponseCache()

        await get_recommendations(gemini_client, cache, "Movies", genre="Horror", policy=fast_policy)
        await get_recommendations(gemini_client, cache, "Movies", genre="horror", policy=fast_policy)

        assert gemini_client.aio.models.generate_content.await_count == 2
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_concurrent_misses_both_call_gemini_last_writer_wins(
        self, gemini_client, gemini_response, fast_policy
    ):
        responses = iter([
            gemini_response(json.dumps([_item("First")])),
            gemini_response(json.dumps([_item("Second")])),
        ])

        async def _generate(**kwargs):
            response = next(responses)
            await asyncio.sleep(0)
            return response

        gemini_client.aio.models.generate_content.side_effect = _generate
        cache = ResponseCache()

        first, second = await asyncio.gather(
            get_recommendations(gemini_client, cache, "Movies", "", "All", "All", policy=fast_policy),
            get_recommendations(gemini_client, cache, "Movies", "", "All", "All", policy=fast_policy),
        )

        assert gemini_client.aio.models.generate_content.await_count == 2
        assert [item.title for item in first] == ["First"]
        assert [item.title for item in second] == ["Second"]
        assert len(cache) == 1
        assert cache.get(RecommendationCacheKey.from_filters("Movies", "", "All", "All")) is second

    @pytest.mark.asyncio
    async def test_malformed_payload_returns_empty_and_is_not_cached(
        self, gemini_client, gemini_response, fast_policy
    ):
        gemini_client.aio.models.generate_content.return_value = gemini_response("{not json")
        cache = ResponseCache()

        items = await get_recommendations(gemini_client, cache, "Anime", policy=fast_policy)

        assert items == []
        assert RecommendationCacheKey.from_filters("Anime") not in cache

    @pytest.mark.asyncio
    async def test_rate_limit_retried_then_success(
        self, gemini_client, gemini_response, fast_policy, recording_sleep, rate_limit_error, horror_payload
    ):
        gemini_client.aio.models.generate_content.side_effect = [
            rate_limit_error(),
            rate_limit_error(),
            gemini_response(horror_payload),
        ]

        items = await get_recommendations(gemini_client, ResponseCache(), "Movies", policy=fast_policy)

        assert len(items) == 2
        assert recording_sleep.calls == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_failure_propagates_and_caches_nothing(self, gemini_client, fast_policy):
        error = ConnectionError("network down")
        gemini_client.aio.models.generate_content.side_effect = error
        cache = ResponseCache()

        with pytest.raises(ConnectionError) as exc_info:
            await get_recommendations(gemini_client, cache, "Movies", policy=fast_policy)

        assert exc_info.value is error
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_missing_client_raises(self, fast_policy):
        with pytest.raises(GeminiNotConfiguredError):
            await get_recommendations(None, ResponseCache(), "Movies", policy=fast_policy)

    @pytest.mark.asyncio
    async def test_cache_hit_needs_no_client(self, fast_policy):
        cache = ResponseCache()
        cached = parse_recommendations(json.dumps([_item("Cached")]))
        cache.set(RecommendationCacheKey.from_filters("Movies", "", "All", "All"), cached)

        items = await get_recommendations(None, cache, "Movies", "", "All", "All", policy=fast_policy)

        assert items is cached
