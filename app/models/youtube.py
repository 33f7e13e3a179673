from datetime import datetime
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from app.core.constants import YouTubeConfig
from app.models.enums import TaskStatus

# --- Internal Parsing Models (Supadata) ---

# Remote status vocabulary -> normalized status
_REMOTE_STATUS_MAP = {
    "pending": TaskStatus.PENDING,
    "queued": TaskStatus.PENDING,
    "processing": TaskStatus.PROCESSING,
    "active": TaskStatus.PROCESSING,
    "running": TaskStatus.PROCESSING,
    "in_progress": TaskStatus.PROCESSING,
    "completed": TaskStatus.COMPLETED,
    "complete": TaskStatus.COMPLETED,
    "done": TaskStatus.COMPLETED,
    "succeeded": TaskStatus.COMPLETED,
    "failed": TaskStatus.FAILED,
    "error": TaskStatus.FAILED,
}


def map_task_status(raw: Optional[str]) -> TaskStatus:
    """Map a provider status string to `TaskStatus`; unknown values count as processing."""
    status = _REMOTE_STATUS_MAP.get((raw or "").strip().lower())
    if status is None:
        logger.warning(f"Unknown transcription task status {raw!r}, treating as processing")
        return TaskStatus.PROCESSING
    return status


class CaptionEntry(BaseModel):
    """One caption entry of a direct-fetch transcript payload."""
    text: str = ""

    model_config = ConfigDict(extra="ignore")


class TranscriptTask(BaseModel):
    """Snapshot of an asynchronous transcription task."""
    id: str
    status: TaskStatus
    video_id: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    transcript: Optional[str] = None
    error: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> TaskStatus:
        if isinstance(v, TaskStatus):
            return v
        return map_task_status(v)

    @classmethod
    def from_api(cls, data: dict[str, Any], task_id: str) -> "TranscriptTask":
        """Build a task from a status payload, tolerating both key conventions."""
        return cls(
            id=data.get("id") or data.get("taskId") or task_id,
            status=data.get("status"),
            video_id=data.get("videoId"),
            created_at=data.get("createdAt"),
            completed_at=data.get("completedAt"),
            transcript=data.get("transcript") or data.get("text"),
            error=data.get("error"),
        )


# --- Core Data Models ---

class VideoMetadata(BaseModel):
    title: str
    channel_name: str
    thumbnail_url: str
    video_id: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def placeholder(cls, video_id: str) -> "VideoMetadata":
        """Metadata synthesized from the video id alone."""
        return cls(
            title=YouTubeConfig.PLACEHOLDER_TITLE,
            channel_name=YouTubeConfig.PLACEHOLDER_CHANNEL,
            thumbnail_url=YouTubeConfig.THUMBNAIL_URL_TEMPLATE.format(video_id=video_id),
            video_id=video_id,
        )


class TranscriptBundle(BaseModel):
    """Transcript text plus best-effort metadata for one video."""
    transcript: str
    metadata: VideoMetadata

    model_config = ConfigDict(frozen=True)
