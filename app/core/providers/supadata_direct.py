"""
Direct-fetch transcript provider.

One GET to the transcript endpoint returns the whole transcript. This
integration has no metadata endpoint, so metadata is always the
placeholder derived from the video id.
"""
import re
from typing import Any, Optional

from loguru import logger

from app.core.constants import PollingConfig, SupadataConfig
from app.core.exceptions import EmptyTranscriptError
from app.core.providers.supadata_client import SupadataClient
from app.core.providers.transcript_provider import ProgressCallback, TranscriptProvider
from app.models.youtube import CaptionEntry, TranscriptBundle, VideoMetadata
from app.services.url_resolver import canonical_watch_url

# Non-speech markers such as "[Music]" or "[Applause]"
NON_SPEECH_MARKER = re.compile(r"\[[^\]]*\]")


def normalize_transcript_payload(payload: Any) -> str:
    """
    Reduce a transcript payload to plain text.

    Shapes are tried in order and the first that matches wins:
    1. A list of caption entries (top level or under "content"); bracketed
       markers are removed and the remaining texts are joined with spaces.
    2. A "transcript" string.
    3. A "text" string.

    Returns:
        The transcript, possibly empty.
    """
    entries: Optional[list] = None
    if isinstance(payload, list):
        entries = payload
    elif isinstance(payload, dict) and isinstance(payload.get("content"), list):
        entries = payload["content"]

    if entries is not None:
        spoken = []
        for raw in entries:
            if not isinstance(raw, dict):
                continue
            entry = CaptionEntry.model_validate(raw)
            text = " ".join(NON_SPEECH_MARKER.sub(" ", entry.text).split())
            if text:
                spoken.append(text)
        return " ".join(spoken)

    if isinstance(payload, dict):
        for key in ("transcript", "text"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()

    return ""


class DirectTranscriptProvider(TranscriptProvider):
    """Fetches the transcript with a single request."""

    def __init__(self, client: SupadataClient):
        self.client = client

    async def acquire_transcript(
        self,
        video_id: str,
        on_progress: Optional[ProgressCallback] = None,
        deadline: Optional[float] = None,
    ) -> TranscriptBundle:
        logger.info(f"Fetching transcript for video {video_id} (direct)")
        payload = await self.client.get(
            SupadataConfig.TRANSCRIPT_ENDPOINT,
            params={"url": canonical_watch_url(video_id)},
        )

        transcript = normalize_transcript_payload(payload)
        if not transcript:
            logger.warning(f"Transcript for video {video_id} is empty after normalization")
            raise EmptyTranscriptError()

        if on_progress:
            on_progress(PollingConfig.PROGRESS_DONE)

        logger.info(f"Fetched transcript for video {video_id} ({len(transcript)} chars)")
        return TranscriptBundle(
            transcript=transcript,
            metadata=VideoMetadata.placeholder(video_id),
        )
