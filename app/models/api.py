"""
Pydantic models for API request/response schemas.

Response payloads are serialized with camelCase aliases.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.summary import SummarySection


class SummarizeRequest(BaseModel):
    """Request model for video summarization."""

    url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class DigestPayload(BaseModel):
    """Client-facing digest of one video."""

    video_title: str
    channel_name: str
    thumbnail_url: str
    sections: List[SummarySection]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SummarizeResponse(BaseModel):
    """Success envelope for the summarize endpoint."""

    success: Literal[True] = True
    data: DigestPayload


class ServiceInfoResponse(BaseModel):
    """Availability information for the summarize endpoint."""

    success: Literal[True] = True
    message: str
    version: str
