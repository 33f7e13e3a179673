"""
Dependency injection factories for FastAPI.

This module provides factory functions for creating service instances
with proper dependency injection. Providers are selected based on config.

Factories are cached only once they succeed: a provider built without its
credential raises `ConfigurationError`, which then surfaces on every
request as a 500 until the setting is supplied.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from app.core.config import settings
from app.core.providers.gemini_provider import GeminiProvider
from app.core.providers.groq_provider import GroqProvider
from app.core.providers.llm_provider import LLMProvider
from app.core.providers.supadata_client import SupadataClient
from app.core.providers.supadata_direct import DirectTranscriptProvider
from app.core.providers.supadata_tasks import TaskPollingTranscriptProvider
from app.core.providers.transcript_provider import TranscriptProvider
from app.models.api import SummarizeRequest
from app.models.enums import LLMProviderType, TranscriptProviderType
from app.services.digest import DigestService, resolve_video_id
from app.services.summarization import SummarizationService


# =============================================================================
# REQUEST VALIDATION
# =============================================================================

def get_video_id(payload: Optional[SummarizeRequest] = None) -> str:
    """
    Validate the submitted link and return its video id.

    Declared ahead of the service dependencies so that a bad link is
    rejected with 400 before any provider is built.
    """
    return resolve_video_id(payload.url if payload else None)


# =============================================================================
# PROVIDER FACTORIES
# =============================================================================

@lru_cache
def get_supadata_client() -> SupadataClient:
    """Get the authenticated Supadata client."""
    return SupadataClient(
        api_key=settings.SUPADATA_API_KEY,
        base_url=settings.SUPADATA_BASE_URL,
        timeout_seconds=settings.SUPADATA_REQUEST_TIMEOUT_SECONDS,
    )


@lru_cache
def get_transcript_provider() -> TranscriptProvider:
    """
    Get the transcript provider.

    Default: task polling (configured in settings.TRANSCRIPT_PROVIDER)
    """
    provider_type = settings.TRANSCRIPT_PROVIDER
    client = get_supadata_client()

    if provider_type == TranscriptProviderType.TASK_POLLING:
        return TaskPollingTranscriptProvider(
            client=client,
            interval_seconds=settings.TRANSCRIPT_POLL_INTERVAL_SECONDS,
            max_attempts=settings.TRANSCRIPT_MAX_POLL_ATTEMPTS,
        )
    elif provider_type == TranscriptProviderType.DIRECT:
        return DirectTranscriptProvider(client=client)
    else:
        raise ValueError(f"Unknown transcript provider: {provider_type}")


@lru_cache
def get_summary_llm_provider() -> LLMProvider:
    """
    Get LLM provider for summarization operations.

    Default: Gemini (configured in settings.SUMMARY_LLM_PROVIDER)
    """
    provider_type = settings.SUMMARY_LLM_PROVIDER

    if provider_type == LLMProviderType.GEMINI:
        return GeminiProvider(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL_NAME,
        )
    elif provider_type == LLMProviderType.GROQ:
        return GroqProvider(
            api_key=settings.GROQ_API_KEY,
            model_name=settings.GROQ_MODEL_NAME,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {provider_type}")


# =============================================================================
# SERVICE FACTORIES
# =============================================================================

def get_summarization_service(
    llm_provider: LLMProvider = Depends(get_summary_llm_provider),
) -> SummarizationService:
    """Get summarization service backed by the configured LLM provider."""
    return SummarizationService(llm_provider=llm_provider)


def get_digest_service(
    transcript_provider: TranscriptProvider = Depends(get_transcript_provider),
    summarization_service: SummarizationService = Depends(get_summarization_service),
) -> DigestService:
    """Get the digest service for the summarize endpoint."""
    return DigestService(
        transcript_provider=transcript_provider,
        summarization_service=summarization_service,
        deadline_seconds=settings.REQUEST_DEADLINE_SECONDS,
    )
