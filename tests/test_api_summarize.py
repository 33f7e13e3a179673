"""
Integration tests for the summarize API endpoints.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.api.dependencies import get_summary_llm_provider, get_transcript_provider
from app.core.exceptions import ConfigurationError, RateLimitError, TranscriptionTimeoutError


client = TestClient(app)

VIDEO_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_summarize_video(override_dependencies, mock_transcript_provider):
    """Test POST /api/summarize success envelope."""
    response = client.post("/api/summarize", json={"url": VIDEO_URL})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {
            "videoTitle": "Async Python",
            "channelName": "Code Channel",
            "thumbnailUrl": "https://example.com/thumb.jpg",
            "sections": [
                {
                    "title": "Основные тезисы",
                    "points": [
                        "Цикл событий управляет задачами",
                        "Корутины приостанавливаются на await",
                    ],
                }
            ],
        },
    }
    args, _ = mock_transcript_provider.acquire_transcript.call_args
    assert args[0] == "dQw4w9WgXcQ"
    assert "X-Request-ID" in response.headers


def test_summarize_missing_url(override_dependencies):
    response = client.post("/api/summarize", json={})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "URL is required" in body["error"]


def test_summarize_invalid_url(override_dependencies, mock_transcript_provider):
    response = client.post("/api/summarize", json={"url": "https://example.com/video"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    mock_transcript_provider.acquire_transcript.assert_not_called()


def test_summarize_transcription_timeout(override_dependencies, mock_transcript_provider):
    mock_transcript_provider.acquire_transcript.side_effect = TranscriptionTimeoutError(60)

    response = client.post("/api/summarize", json={"url": VIDEO_URL})

    assert response.status_code == 504
    assert response.json() == {
        "success": False,
        "error": TranscriptionTimeoutError(60).detail,
    }


def test_summarize_rate_limited(override_dependencies, mock_transcript_provider):
    mock_transcript_provider.acquire_transcript.side_effect = RateLimitError()

    response = client.post("/api/summarize", json={"url": VIDEO_URL})

    assert response.status_code == 500
    assert response.json()["error"] == RateLimitError().detail


def test_summarize_upstream_timeout(override_dependencies, mock_transcript_provider):
    mock_transcript_provider.acquire_transcript.side_effect = httpx.ReadTimeout("read timed out")

    response = client.post("/api/summarize", json={"url": VIDEO_URL})

    assert response.status_code == 504
    assert response.json()["success"] is False


def test_summarize_unexpected_error(override_dependencies, mock_transcript_provider):
    mock_transcript_provider.acquire_transcript.side_effect = RuntimeError("db password=secret")

    response = client.post("/api/summarize", json={"url": VIDEO_URL})

    assert response.status_code == 500
    assert "secret" not in response.json()["error"]


def test_summarize_upstream_http_error_keeps_status(override_dependencies, mock_transcript_provider):
    request = httpx.Request("GET", "https://api.supadata.ai/v1/youtube/transcripts/task-123?key=secret")
    mock_transcript_provider.acquire_transcript.side_effect = httpx.HTTPStatusError(
        "Server error '502 Bad Gateway'", request=request, response=httpx.Response(502, request=request)
    )

    response = client.post("/api/summarize", json={"url": VIDEO_URL})

    assert response.status_code == 500
    error = response.json()["error"]
    assert "HTTP 502" in error
    assert "secret" not in error
    assert "supadata" not in error

def test_summarize_missing_credentials(override_dependencies):
    def missing_key():
        raise ConfigurationError("GEMINI_API_KEY")

    app.dependency_overrides[get_summary_llm_provider] = missing_key

    response = client.post("/api/summarize", json={"url": VIDEO_URL})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": ConfigurationError("GEMINI_API_KEY").detail}


@pytest.mark.parametrize("body", [{"url": "https://example.com/video"}, {"url": ""}, {}])
def test_invalid_url_rejected_before_credentials_check(override_dependencies, body):
    def missing_key():
        raise ConfigurationError("SUPADATA_API_KEY")

    app.dependency_overrides[get_transcript_provider] = missing_key
    app.dependency_overrides[get_summary_llm_provider] = missing_key

    response = client.post("/api/summarize", json=body)

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_summarize_info():
    response = client.get("/api/summarize")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "YouTube Summarizer API is available"


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
