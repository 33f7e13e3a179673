"""
Task-polling transcript provider.

The transcript is produced by an asynchronous job on the provider side:
a task is created, then its status is polled on a fixed interval until it
completes, fails or the attempt ceiling is reached. Metadata is fetched
concurrently with task creation and degrades to placeholder values on any
error.
"""
import asyncio
import time
from typing import Awaitable, Callable, Optional

from loguru import logger

from app.core.constants import PollingConfig, SupadataConfig, YouTubeConfig
from app.core.exceptions import (
    EmptyTranscriptError,
    TranscriptionFailedError,
    TranscriptionTimeoutError,
)
from app.core.providers.supadata_client import SupadataClient
from app.core.providers.transcript_provider import ProgressCallback, TranscriptProvider
from app.models.enums import PollPhase, TaskStatus
from app.models.youtube import TranscriptBundle, TranscriptTask, VideoMetadata
from app.services.url_resolver import canonical_watch_url

SleepFunc = Callable[[float], Awaitable[None]]
ClockFunc = Callable[[], float]


class TaskPoller:
    """
    Polls one transcription task to a terminal state.

    State machine: PENDING -> POLLING(attempt) -> COMPLETED | FAILED | TIMED_OUT.
    `sleep` and `clock` are injectable so the loop runs without real delays
    in tests. A poller instance serves exactly one task.
    """

    def __init__(
        self,
        fetch_status: Callable[[str], Awaitable[TranscriptTask]],
        interval_seconds: float = PollingConfig.INTERVAL_SECONDS,
        max_attempts: int = PollingConfig.MAX_ATTEMPTS,
        sleep: SleepFunc = asyncio.sleep,
        clock: ClockFunc = time.monotonic,
    ):
        self._fetch_status = fetch_status
        self.interval_seconds = interval_seconds
        self.max_attempts = max_attempts
        self._sleep = sleep
        self._clock = clock
        self.phase = PollPhase.PENDING
        self.attempt = 0
        self._progress = 0.0

    def _report(self, on_progress: Optional[ProgressCallback], value: float) -> None:
        # Estimates must never go backwards
        self._progress = max(self._progress, value)
        if on_progress:
            on_progress(self._progress)

    async def run(
        self,
        task_id: str,
        on_progress: Optional[ProgressCallback] = None,
        deadline: Optional[float] = None,
    ) -> str:
        """
        Poll until the task completes and return its transcript.

        Raises:
            TranscriptionFailedError: The task reached the failed state.
            EmptyTranscriptError: The task completed with a blank transcript.
            TranscriptionTimeoutError: Attempts or the deadline ran out.
        """
        if self.phase != PollPhase.PENDING:
            raise RuntimeError(f"TaskPoller already used (phase={self.phase.value})")
        self.phase = PollPhase.POLLING

        while self.attempt < self.max_attempts:
            task = await self._fetch_status(task_id)
            self._report(
                on_progress,
                min(self.attempt / self.max_attempts * 100, PollingConfig.PROGRESS_CAP),
            )
            self.attempt += 1

            if task.status == TaskStatus.COMPLETED:
                if not (task.transcript or "").strip():
                    self.phase = PollPhase.FAILED
                    raise EmptyTranscriptError()
                self.phase = PollPhase.COMPLETED
                self._report(on_progress, PollingConfig.PROGRESS_DONE)
                logger.info(f"Task {task_id} completed after {self.attempt} poll(s)")
                return task.transcript

            if task.status == TaskStatus.FAILED:
                self.phase = PollPhase.FAILED
                logger.warning(f"Task {task_id} failed: {task.error}")
                raise TranscriptionFailedError(task.error or "неизвестная ошибка")

            logger.debug(f"Task {task_id} is {task.status.value} (attempt {self.attempt}/{self.max_attempts})")

            # No wait after the final attempt
            if self.attempt < self.max_attempts:
                if deadline is not None and self._clock() + self.interval_seconds > deadline:
                    logger.warning(f"Deadline reached while polling task {task_id}")
                    break
                await self._sleep(self.interval_seconds)

        self.phase = PollPhase.TIMED_OUT
        logger.warning(f"Task {task_id} timed out after {self.attempt} poll(s)")
        raise TranscriptionTimeoutError(self.attempt)


class TaskPollingTranscriptProvider(TranscriptProvider):
    """Creates a transcription task and polls it to completion."""

    def __init__(
        self,
        client: SupadataClient,
        interval_seconds: float = PollingConfig.INTERVAL_SECONDS,
        max_attempts: int = PollingConfig.MAX_ATTEMPTS,
        sleep: SleepFunc = asyncio.sleep,
        clock: ClockFunc = time.monotonic,
    ):
        self.client = client
        self.interval_seconds = interval_seconds
        self.max_attempts = max_attempts
        self._sleep = sleep
        self._clock = clock

    async def create_task(self, video_id: str) -> str:
        """Create a transcription task and return its id."""
        data = await self.client.post(
            SupadataConfig.TRANSCRIPT_TASKS_ENDPOINT,
            json={
                "url": canonical_watch_url(video_id),
                "language": "auto",
                "format": "text",
            },
        )
        task_id = (data or {}).get("id") or (data or {}).get("taskId")
        if not task_id:
            raise TranscriptionFailedError("провайдер не вернул идентификатор задачи")
        logger.info(f"Created transcription task {task_id} for video {video_id}")
        return str(task_id)

    async def get_task_status(self, task_id: str) -> TranscriptTask:
        data = await self.client.get(f"{SupadataConfig.TRANSCRIPT_TASKS_ENDPOINT}/{task_id}")
        return TranscriptTask.from_api(data or {}, task_id)

    async def fetch_metadata(self, video_id: str) -> VideoMetadata:
        """
        Fetch video metadata; never raises.

        Missing fields fall back individually; any error yields the
        placeholder metadata.
        """
        try:
            data = await self.client.get(
                SupadataConfig.METADATA_ENDPOINT.format(video_id=video_id)
            )
            data = data or {}
            return VideoMetadata(
                title=data.get("title") or YouTubeConfig.UNKNOWN_TITLE,
                channel_name=data.get("channelName") or YouTubeConfig.UNKNOWN_CHANNEL,
                thumbnail_url=data.get("thumbnailUrl")
                or YouTubeConfig.THUMBNAIL_URL_TEMPLATE.format(video_id=video_id),
                video_id=video_id,
            )
        except Exception as e:
            logger.warning(f"Metadata unavailable for video {video_id}, using placeholder: {e}")
            return VideoMetadata.placeholder(video_id)

    async def acquire_transcript(
        self,
        video_id: str,
        on_progress: Optional[ProgressCallback] = None,
        deadline: Optional[float] = None,
    ) -> TranscriptBundle:
        logger.info(f"Fetching transcript for video {video_id} (task polling)")

        # Metadata runs alongside task creation and is dropped if creation fails
        metadata_future = asyncio.ensure_future(self.fetch_metadata(video_id))
        try:
            task_id = await self.create_task(video_id)
        except BaseException:
            metadata_future.cancel()
            raise
        metadata = await metadata_future

        poller = TaskPoller(
            self.get_task_status,
            interval_seconds=self.interval_seconds,
            max_attempts=self.max_attempts,
            sleep=self._sleep,
            clock=self._clock,
        )
        transcript = await poller.run(task_id, on_progress=on_progress, deadline=deadline)

        return TranscriptBundle(transcript=transcript, metadata=metadata)
