"""
API endpoints for video summarization.
"""
import asyncio
import time
from typing import Awaitable, Optional, TypeVar

from fastapi import APIRouter, Depends, Request, Response
from loguru import logger

from app.api.dependencies import get_digest_service, get_video_id
from app.core.config import settings
from app.core.constants import APIConfig
from app.core.exceptions import AppException, classify_unexpected_error
from app.models.api import ServiceInfoResponse, SummarizeResponse
from app.services.digest import DigestService

T = TypeVar("T")

router = APIRouter()


def _log_progress(progress: float) -> None:
    logger.debug(f"Transcript progress: {progress:.0f}%")


async def run_until_disconnected(request: Request, work: Awaitable[T]) -> Optional[T]:
    """
    Await `work`, cancelling it if the client goes away.

    Returns:
        The result of `work`, or None if the client disconnected first.
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait(
                {task}, timeout=APIConfig.DISCONNECT_CHECK_INTERVAL_SECONDS
            )
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.warning("Client disconnected, cancelling summarization")
                return None
    finally:
        if not task.done():
            task.cancel()


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize_video(
    request: Request,
    video_id: str = Depends(get_video_id),
    digest_service: DigestService = Depends(get_digest_service),
):
    """
    Summarizes a YouTube video into titled sections of key points.

    Flow:
    1. Validate the URL
    2. Fetch the transcript (with task polling when configured)
    3. Generate the summary
    4. Return the result

    Args:
        request: FastAPI request object (used to detect client disconnects).
        video_id: Video id extracted from the request body URL.
        digest_service: The service handling the business logic.

    Returns:
        SummarizeResponse: `{success: true, data: {...}}`.
    """
    logger.info(f"Incoming summarize request for video {video_id}")

    start_time = time.perf_counter()
    try:
        digest = await run_until_disconnected(
            request, digest_service.digest_video(video_id, on_progress=_log_progress)
        )
    except AppException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error while summarizing {video_id}: {e}")
        raise classify_unexpected_error(e) from e

    if digest is None:
        return Response(status_code=499)

    duration = time.perf_counter() - start_time
    logger.info(f"Summarization completed in {duration:.2f}s")
    return SummarizeResponse(data=digest)


@router.get("/summarize", response_model=ServiceInfoResponse)
async def summarize_info():
    """Reports that the summarize endpoint is available."""
    return ServiceInfoResponse(
        message="YouTube Summarizer API is available",
        version=settings.VERSION,
    )
