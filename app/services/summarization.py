"""
Summary extraction for a single video transcript.

The transcript is sent to the configured LLM provider with a fixed prompt
and the free-form answer is parsed into titled sections.
"""
from loguru import logger

from app.core.constants import SummarizationConfig
from app.core.exceptions import (
    AppException,
    EmptyResponseError,
    GenerationError,
    InputTooShortError,
)
from app.core.prompts import SummarizationPrompts
from app.core.providers.llm_provider import LLMMessage, LLMProvider
from app.models import LLMRole, DigestPayload, SummaryResult, VideoMetadata
from app.services.summary_parser import parse_generated_text


class SummarizationService:
    """
    Turns transcript text into a `SummaryResult`.

    One provider call per transcript, no retries. The provider is built
    with its credential, so a missing key surfaces as `ConfigurationError`
    before this service exists.
    """

    def __init__(self, llm_provider: LLMProvider):
        """
        Initialize the summarization service.

        Args:
            llm_provider: LLM provider for text generation.
        """
        self.llm_provider = llm_provider

    async def summarize(self, transcript: str) -> SummaryResult:
        """
        Generate a sectioned summary of a transcript.

        Args:
            transcript: Plain transcript text.

        Returns:
            Parsed SummaryResult.

        Raises:
            InputTooShortError: Transcript shorter than the minimum length.
            EmptyResponseError: The provider returned blank text.
            GenerationError: The provider call failed.
        """
        if not transcript or len(transcript.strip()) < SummarizationConfig.MIN_TRANSCRIPT_CHARS:
            raise InputTooShortError(SummarizationConfig.MIN_TRANSCRIPT_CHARS)

        messages = [
            LLMMessage(
                role=LLMRole.USER,
                content=SummarizationPrompts.build_prompt(transcript),
            ),
        ]

        logger.info(
            f"Summarizing transcript ({len(transcript)} chars) with {self.llm_provider.model_name}"
        )
        try:
            response = await self.llm_provider.generate_text(
                messages=messages,
                temperature=SummarizationConfig.TEMPERATURE,
            )
        except AppException:
            raise
        except Exception as e:
            logger.error(f"LLM provider call failed: {e}")
            raise GenerationError(str(e)) from e

        text = response.content
        if not text or not text.strip():
            raise EmptyResponseError()

        result = parse_generated_text(text)
        logger.info(
            f"Parsed summary: {len(result.sections)} section(s), "
            f"{sum(len(s.points) for s in result.sections)} point(s)"
        )
        return result


def format_for_response(summary: SummaryResult, metadata: VideoMetadata) -> DigestPayload:
    """Pair summary sections with video metadata; the TL;DR is not sent to clients."""
    return DigestPayload(
        video_title=metadata.title,
        channel_name=metadata.channel_name,
        thumbnail_url=metadata.thumbnail_url,
        sections=summary.sections,
    )
