"""
Abstract base class for transcript providers.

A transcript provider turns a video id into a transcript plus best-effort
metadata. Concrete implementations differ only in how the remote service
delivers the transcript (one direct request, or a task that is polled).
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional

from app.models.youtube import TranscriptBundle

# Receives percentage estimates in [0, 100]
ProgressCallback = Callable[[float], None]


class TranscriptProvider(ABC):
    """
    Abstract interface for transcript acquisition.

    Example:
        provider = TaskPollingTranscriptProvider(client=SupadataClient(api_key="..."))
        bundle = await provider.acquire_transcript("dQw4w9WgXcQ")
        print(bundle.metadata.title, len(bundle.transcript))
    """

    @abstractmethod
    async def acquire_transcript(
        self,
        video_id: str,
        on_progress: Optional[ProgressCallback] = None,
        deadline: Optional[float] = None,
    ) -> TranscriptBundle:
        """
        Obtain the full transcript and metadata of a video.

        Args:
            video_id: 11-character YouTube video id.
            on_progress: Optional callback receiving non-decreasing percentages.
            deadline: Optional monotonic-clock instant after which no further
                waiting is started.

        Returns:
            TranscriptBundle with transcript text and metadata.
        """
        ...
