"""
Shared pytest fixtures and configuration.
"""
from typing import Callable
from unittest.mock import AsyncMock

import httpx
import pytest

from app.main import app
from app.api.dependencies import get_summary_llm_provider, get_transcript_provider
from app.core.providers.llm_provider import LLMProvider
from app.core.providers.supadata_client import SupadataClient
from app.core.providers.transcript_provider import TranscriptProvider
from app.models import TranscriptBundle, VideoMetadata

VIDEO_ID = "dQw4w9WgXcQ"
BASE_URL = "https://api.supadata.test/v1"

SAMPLE_TRANSCRIPT = (
    "Today we talk about async programming in Python. "
    "We cover event loops, coroutines and how tasks are scheduled."
)

SAMPLE_LLM_OUTPUT = """TL;DR: Видео объясняет основы асинхронного программирования.
- Цикл событий управляет задачами
- Корутины приостанавливаются на await"""


class MockLLMResponse:
    def __init__(self, content):
        self.content = content


def make_supadata_client(handler: Callable[[httpx.Request], httpx.Response]) -> SupadataClient:
    """Build a client whose requests are answered by `handler`."""
    return SupadataClient(
        api_key="test-key",
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def sample_metadata():
    return VideoMetadata(
        title="Async Python",
        channel_name="Code Channel",
        thumbnail_url="https://example.com/thumb.jpg",
        video_id=VIDEO_ID,
    )


@pytest.fixture
def mock_llm_provider():
    provider = AsyncMock(spec=LLMProvider)
    provider.model_name = "test-model"
    provider.generate_text.return_value = MockLLMResponse(SAMPLE_LLM_OUTPUT)
    return provider


@pytest.fixture
def mock_transcript_provider(sample_metadata):
    provider = AsyncMock(spec=TranscriptProvider)
    provider.acquire_transcript.return_value = TranscriptBundle(
        transcript=SAMPLE_TRANSCRIPT,
        metadata=sample_metadata,
    )
    return provider


@pytest.fixture
def override_dependencies(mock_transcript_provider, mock_llm_provider):
    """Override FastAPI provider dependencies for testing."""
    app.dependency_overrides[get_transcript_provider] = lambda: mock_transcript_provider
    app.dependency_overrides[get_summary_llm_provider] = lambda: mock_llm_provider

    yield

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture
def make_client():
    """Factory for Supadata clients backed by an in-memory transport."""
    return make_supadata_client
