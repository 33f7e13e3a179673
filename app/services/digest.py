"""
Digest service orchestrating one video summarization request.

Flow:
1. Validate the link and extract the video id
2. Acquire the transcript and metadata
3. Summarize the transcript
4. Assemble the client-facing payload
"""
import asyncio
import time
from typing import Optional

from loguru import logger

from app.core.exceptions import RequestTimeoutError, ValidationError
from app.core.providers.transcript_provider import ProgressCallback, TranscriptProvider
from app.models import DigestPayload
from app.services.summarization import SummarizationService, format_for_response
from app.services.url_resolver import extract_video_id, is_valid_video_url


def resolve_video_id(url: Optional[str]) -> str:
    """
    Validate a submitted link and return its video id.

    Raises:
        ValidationError: The link is missing, unsupported or has no id.
    """
    if not url or not isinstance(url, str) or not url.strip():
        raise ValidationError("Необходимо указать ссылку на видео (URL is required).")
    if not is_valid_video_url(url):
        raise ValidationError("Некорректная ссылка на YouTube видео.")
    video_id = extract_video_id(url)
    if not video_id:
        raise ValidationError("Не удалось извлечь идентификатор видео из ссылки.")
    return video_id


class DigestService:
    """
    Runs the link -> transcript -> summary pipeline for one request.

    Holds no per-request state, so one instance may serve concurrent requests.
    """

    def __init__(
        self,
        transcript_provider: TranscriptProvider,
        summarization_service: SummarizationService,
        deadline_seconds: Optional[float] = None,
    ):
        """
        Initialize the DigestService.

        Args:
            transcript_provider: Provider used to acquire transcripts.
            summarization_service: Service producing the sectioned summary.
            deadline_seconds: Upper bound for one request, or None for no bound.
        """
        self.transcript_provider = transcript_provider
        self.summarization_service = summarization_service
        self.deadline_seconds = deadline_seconds

    async def create_digest(
        self, url: Optional[str], on_progress: Optional[ProgressCallback] = None
    ) -> DigestPayload:
        """
        Produce the digest of the video behind `url`.

        Raises:
            ValidationError: The link is not a supported video link.
            RequestTimeoutError: The request deadline elapsed.
            AppException: Any acquisition or summarization failure.
        """
        return await self.digest_video(resolve_video_id(url), on_progress)

    async def digest_video(
        self, video_id: str, on_progress: Optional[ProgressCallback] = None
    ) -> DigestPayload:
        """
        Produce the digest of an already validated video id.

        Raises:
            RequestTimeoutError: The request deadline elapsed.
            AppException: Any acquisition or summarization failure.
        """
        logger.info(f"Creating digest for video {video_id}")

        if self.deadline_seconds is None:
            return await self._run(video_id, on_progress, deadline=None)

        deadline = time.monotonic() + self.deadline_seconds
        try:
            return await asyncio.wait_for(
                self._run(video_id, on_progress, deadline=deadline),
                timeout=self.deadline_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Digest for video {video_id} exceeded {self.deadline_seconds}s")
            raise RequestTimeoutError(self.deadline_seconds) from e

    async def _run(
        self,
        video_id: str,
        on_progress: Optional[ProgressCallback],
        deadline: Optional[float],
    ) -> DigestPayload:
        start_time = time.perf_counter()
        bundle = await self.transcript_provider.acquire_transcript(
            video_id, on_progress=on_progress, deadline=deadline
        )
        acquired_in = time.perf_counter() - start_time
        logger.info(f"Transcript for {video_id} acquired in {acquired_in:.2f}s")

        summary = await self.summarization_service.summarize(bundle.transcript)
        logger.info(
            f"Digest for {video_id} ready in {time.perf_counter() - start_time:.2f}s"
        )
        return format_for_response(summary, bundle.metadata)
