"""
Provider abstraction layer for the external transcription and LLM services.
"""
from app.core.providers.llm_provider import (
    LLMProvider,
    LLMMessage,
    LLMResponse,
)
from app.core.providers.transcript_provider import (
    TranscriptProvider,
    ProgressCallback,
)
from app.core.providers.supadata_client import SupadataClient
from app.core.providers.supadata_direct import DirectTranscriptProvider
from app.core.providers.supadata_tasks import TaskPoller, TaskPollingTranscriptProvider

__all__ = [
    # LLM
    "LLMProvider",
    "LLMMessage",
    "LLMResponse",
    # Transcripts
    "TranscriptProvider",
    "ProgressCallback",
    "SupadataClient",
    "DirectTranscriptProvider",
    "TaskPoller",
    "TaskPollingTranscriptProvider",
]
