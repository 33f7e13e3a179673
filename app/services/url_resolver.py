"""
YouTube link validation and video id extraction.

Pure functions, no I/O.
"""
import re
from typing import Optional

from app.core.constants import YouTubeConfig

# Supported link shapes with an optional scheme and "www."
VIDEO_URL_PATTERN = re.compile(
    r"^(https?://)?(www\.)?(youtube\.com/(watch\?v=|shorts/|embed/)|youtu\.be/).+"
)

VIDEO_ID_PATTERNS = [
    re.compile(
        r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/)"
        r"([a-zA-Z0-9_-]{11})"
    ),
    re.compile(r"^([a-zA-Z0-9_-]{11})$"),  # bare video id
]


def is_valid_video_url(raw: str) -> bool:
    """Check whether `raw` looks like a supported YouTube video link."""
    return bool(VIDEO_URL_PATTERN.match(raw.strip()))


def extract_video_id(raw: str) -> Optional[str]:
    """
    Extract the 11-character video id from a link or a bare id.

    Returns:
        The video id, or None when nothing matches.
    """
    value = raw.strip()
    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None


def canonical_watch_url(video_id: str) -> str:
    return YouTubeConfig.WATCH_URL_TEMPLATE.format(video_id=video_id)
