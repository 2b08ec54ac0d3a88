"""
Tests for /recommendations endpoints and /health.

The Gemini client, cache and retry policy are replaced through
app.dependency_overrides.
"""

import json
import logging

import pytest
from fastapi.testclient import TestClient

from escapezone.main import app
from escapezone.services.cache import ResponseCache, get_response_cache
from escapezone.services.gemini_client import get_gemini_client
from escapezone.services.retry import get_retry_policy

client = TestClient(app)

MOVIE = {
    "id": "m1",
    "title": "Nope",
    "type": "movie",
    "ratingIMDb": "6.8",
    "ratingRottenTomatoes": "83%",
    "description": "Siblings spot something in the sky.",
    "imageUrl": "",
    "trailerUrl": "https://www.youtube.com/embed/In8fuzj3gck",
    "genres": ["Horror", "Sci-Fi"],
    "releaseYear": "2022",
}


@pytest.fixture
def cache():
    return ResponseCache()


@pytest.fixture
def overrides(gemini_client, cache, fast_policy):
    """Override Gemini client, cache and retry policy."""
    app.dependency_overrides[get_gemini_client] = lambda: gemini_client
    app.dependency_overrides[get_response_cache] = lambda: cache
    app.dependency_overrides[get_retry_policy] = lambda: fast_policy
    yield
    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health_logger_uses_root_handlers(self):
        assert logging.getLogger("escapezone.routes.health").handlers == []


class TestFilters:

    def test_filters(self):
        response = client.get("/recommendations/filters")
        assert response.status_code == 200
        data = response.json()
        assert data["categories"] == ["Movies", "Web-Series", "Anime"]
        assert data["genres"][0] == "All"
        assert "2010s" in data["years"]


class TestQueryRecommendations:
    """Tests for POST /recommendations/query"""

    def test_openapi_documents_both_outcomes(self):
        responses = app.openapi()["paths"]["/recommendations/query"]["post"]["responses"]
        schema = json.dumps(responses["200"]["content"]["application/json"]["schema"])
        assert "RecommendationQueryResponseOK" in schema
        assert "RecommendationQueryResponseError" in schema

    def test_ok_response(self, overrides, gemini_client, gemini_response):
        gemini_client.aio.models.generate_content.return_value = gemini_response(json.dumps([MOVIE]))

        response = client.post(
            "/recommendations/query",
            json={"category": "Movies", "query": "", "genre": "Horror", "year": "2020s"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert data["results"][0]["title"] == "Nope"
        assert data["results"][0]["display_image_url"].startswith("https://images.unsplash.com/")

    def test_repeated_query_is_cached(self, overrides, gemini_client, gemini_response, cache):
        gemini_client.aio.models.generate_content.return_value = gemini_response(json.dumps([MOVIE]))
        body = {"category": "Movies", "genre": "All", "year": "All"}

        first = client.post("/recommendations/query", json=body)
        second = client.post("/recommendations/query", json=body)

        assert first.json() == second.json()
        assert gemini_client.aio.models.generate_content.await_count == 1
        assert len(cache) == 1

    def test_malformed_payload_is_empty_ok(self, overrides, gemini_client, gemini_response):
        gemini_client.aio.models.generate_content.return_value = gemini_response("<html>oops</html>")

        response = client.post("/recommendations/query", json={"category": "Anime"})

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "results": []}

    def test_quota_exceeded(self, overrides, gemini_client, rate_limit_error, recording_sleep):
        gemini_client.aio.models.generate_content.side_effect = rate_limit_error()

        response = client.post("/recommendations/query", json={"category": "Movies"})

        assert response.status_code == 200
        assert response.json() == {
            "status": "QUOTA_EXCEEDED",
            "reason": "AI Quota Exceeded. Please try again in a few minutes.",
        }
        assert recording_sleep.calls == [1.0, 2.0, 4.0]

    def test_generic_failure(self, overrides, gemini_client):
        gemini_client.aio.models.generate_content.side_effect = ConnectionError("down")

        response = client.post("/recommendations/query", json={"category": "Movies"})

        assert response.json() == {
            "status": "FAILED",
            "reason": "Failed to fetch recommendations. Please check your connection.",
        }

    def test_gemini_not_configured(self, cache, fast_policy):
        app.dependency_overrides[get_gemini_client] = lambda: None
        app.dependency_overrides[get_response_cache] = lambda: cache
        app.dependency_overrides[get_retry_policy] = lambda: fast_policy
        try:
            response = client.post("/recommendations/query", json={"category": "Movies"})
        finally:
            app.dependency_overrides.clear()

        assert response.json()["status"] == "FAILED"

    def test_missing_category_is_422(self, overrides):
        response = client.post("/recommendations/query", json={"genre": "Horror"})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
