"""
Application-wide constants and configuration limits.

Grouped into static classes for namespace management and discoverability.
"""


class SupadataConfig:
    """Configuration for the Supadata transcription API."""
    BASE_URL = "https://api.supadata.ai/v1"
    REQUEST_TIMEOUT_SECONDS = 30.0
    API_KEY_HEADER = "x-api-key"
    TRANSCRIPT_ENDPOINT = "/youtube/transcript"  # direct fetch
    TRANSCRIPT_TASKS_ENDPOINT = "/youtube/transcripts"  # task creation + status
    METADATA_ENDPOINT = "/videos/{video_id}/metadata"


class PollingConfig:
    """Configuration for transcription task polling."""
    INTERVAL_SECONDS = 2.0
    MAX_ATTEMPTS = 60  # ~2 minutes at the default interval
    PROGRESS_CAP = 95.0  # Reported while still polling
    PROGRESS_DONE = 100.0


class YouTubeConfig:
    """Configuration for YouTube links and placeholder metadata."""
    VIDEO_ID_LENGTH = 11
    WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"
    THUMBNAIL_URL_TEMPLATE = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
    PLACEHOLDER_TITLE = "YouTube видео"
    PLACEHOLDER_CHANNEL = "YouTube канал"
    UNKNOWN_TITLE = "Неизвестное видео"
    UNKNOWN_CHANNEL = "Неизвестный канал"


class SummarizationConfig:
    """Configuration for transcript summarization."""
    MIN_TRANSCRIPT_CHARS = 50
    TEMPERATURE = 0.3
    DEFAULT_SECTION_TITLE = "Основные тезисы"


class APIConfig:
    """Configuration for the HTTP surface."""
    DISCONNECT_CHECK_INTERVAL_SECONDS = 1.0
