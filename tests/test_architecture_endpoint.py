"""Tests for the /api/architecture endpoint."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import app

client = TestClient(app)

VALID_RESULT = {
    "summary": "A small service split into api and lib packages.",
    "patterns": ["Layered architecture", "Package by layer"],
    "strengths": ["Clear entry point separation"],
    "risk": "Shared lib package may accumulate unrelated helpers.",
    "improvement": "Split lib by domain once it grows past a handful of modules.",
}


@pytest.fixture
def mock_settings():
    """Settings with a provider credential configured."""
    return Settings(
        openai_api_key="sk-test",
        openai_base_url="http://test-openai:8080",
        upstream_timeout_s=30.0,
    )


@pytest.fixture
def mock_settings_no_key():
    """Settings with no provider credential."""
    return Settings(openai_api_key=None)


def _mock_upstream_response(result: dict) -> httpx.Response:
    """Build a mock upstream envelope carrying the given result."""
    return httpx.Response(
        200,
        json={"output": [{"type": "message", "content": [{"type": "output_text", "text": json.dumps(result)}]}]},
    )


# --- Scenario A: tree input, valid upstream payload ---


@patch("app.main.get_settings")
@patch("arch_snapshot.core.operations.post_response", new_callable=AsyncMock)
def test_architecture_success(mock_post, mock_get_settings, mock_settings):
    """A valid tree request returns the normalized result."""
    mock_get_settings.return_value = mock_settings
    mock_post.return_value = _mock_upstream_response(VALID_RESULT)

    response = client.post("/api/architecture", json={"type": "tree", "content": "src/\n  api/\n  lib/\n"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    data = response.json()
    assert data == VALID_RESULT
    assert 1 <= len(data["strengths"]) <= 3
    assert len(data["patterns"]) <= 10

    config = mock_post.call_args[0][1]
    assert config.api_key == "sk-test"
    assert config.base_url == "http://test-openai:8080"
    assert config.timeout_s == 30.0


# --- Scenario B: missing credential ---


@patch("app.main.get_settings")
@patch("arch_snapshot.core.operations.post_response", new_callable=AsyncMock)
def test_architecture_missing_key(mock_post, mock_get_settings, mock_settings_no_key):
    """Without a credential the endpoint answers 500 and never calls upstream."""
    mock_get_settings.return_value = mock_settings_no_key

    response = client.post("/api/architecture", json={"type": "tree", "content": "src/\n  api/"})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing OPENAI_API_KEY env var"}
    mock_post.assert_not_called()


@patch("app.main.get_settings")
def test_architecture_broken_config(mock_get_settings):
    """Settings that fail to load become a 500."""
    mock_get_settings.side_effect = ValueError("Failed to load configuration")

    response = client.post("/api/architecture", json={"content": "src/"})

    assert response.status_code == 500
    assert response.json() == {"error": "Server configuration is invalid"}


# --- Scenario C: malformed body ---


@patch("app.main.get_settings")
def test_architecture_invalid_json(mock_get_settings, mock_settings):
    """A non-JSON body is a 400."""
    mock_get_settings.return_value = mock_settings

    response = client.post(
        "/api/architecture",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}


@patch("app.main.get_settings")
def test_architecture_content_required(mock_get_settings, mock_settings):
    """Missing content is a 400."""
    mock_get_settings.return_value = mock_settings

    response = client.post("/api/architecture", json={"type": "tree"})

    assert response.status_code == 400
    assert response.json() == {"error": "content is required"}


# --- Scenario D: oversized content ---


@patch("app.main.get_settings")
@patch("arch_snapshot.core.operations.post_response", new_callable=AsyncMock)
def test_architecture_content_too_large(mock_post, mock_get_settings, mock_settings):
    """9001 characters of content is a 413."""
    mock_get_settings.return_value = mock_settings

    response = client.post("/api/architecture", json={"type": "description", "content": "x" * 9001})

    assert response.status_code == 413
    assert response.json() == {"error": "content too large"}
    mock_post.assert_not_called()


@patch("app.main.get_settings")
@patch("arch_snapshot.core.operations.post_response", new_callable=AsyncMock)
def test_architecture_accepts_max_length_escaped_content(mock_post, mock_get_settings, mock_settings):
    """9000 non-ASCII characters are accepted even when \\u-escaped into a large body."""
    mock_get_settings.return_value = mock_settings
    mock_post.return_value = _mock_upstream_response(VALID_RESULT)
    body = json.dumps({"type": "description", "content": "\U0001F4C1" * 9000})

    response = client.post(
        "/api/architecture",
        content=body.encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )

    assert len(body) > 100_000
    assert response.status_code == 200
    mock_post.assert_called_once()


@patch("app.main.get_settings")
@patch("arch_snapshot.core.operations.post_response", new_callable=AsyncMock)
def test_architecture_accepts_whitespace_padded_content(mock_post, mock_get_settings, mock_settings):
    """The length limit applies after trimming, whatever the body size."""
    mock_get_settings.return_value = mock_settings
    mock_post.return_value = _mock_upstream_response(VALID_RESULT)

    response = client.post("/api/architecture", json={"content": "src/" + " " * 70_000})

    assert response.status_code == 200
    user_message = mock_post.call_args[0][0]["input"][1]["content"]
    assert "Input type: tree" in user_message
    assert "src/\n=== INPUT END ===" in user_message


# --- Method handling ---


@pytest.mark.parametrize("method", ["GET", "OPTIONS", "PUT", "PATCH", "DELETE"])
def test_architecture_method_not_allowed(method):
    """Verbs other than POST get 405 with an Allow header."""
    response = client.request(method, "/api/architecture")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    assert response.headers["allow"] == "POST"


def test_architecture_head_not_allowed():
    """HEAD is answered by the proxy too, not by the framework's fallback."""
    response = client.head("/api/architecture")

    assert response.status_code == 405
    assert response.headers["allow"] == "POST"


# --- Upstream failures ---


@patch("app.main.get_settings")
@patch("arch_snapshot.core.operations.post_response", new_callable=AsyncMock)
def test_architecture_upstream_failure(mock_post, mock_get_settings, mock_settings):
    """Provider errors are forwarded as 502."""
    mock_get_settings.return_value = mock_settings
    mock_post.return_value = httpx.Response(400, json={"error": {"message": "Invalid schema for response_format"}})

    response = client.post("/api/architecture", json={"content": "a description"})

    assert response.status_code == 502
    assert response.json() == {"error": "Invalid schema for response_format"}


@patch("app.main.get_settings")
@patch("arch_snapshot.core.operations.post_response", new_callable=AsyncMock)
def test_architecture_request_id_header(mock_post, mock_get_settings, mock_settings):
    """Every response carries a request ID."""
    mock_get_settings.return_value = mock_settings
    mock_post.return_value = _mock_upstream_response(VALID_RESULT)

    response = client.post("/api/architecture", json={"content": "a description"})

    assert len(response.headers["X-Request-ID"]) == 12
