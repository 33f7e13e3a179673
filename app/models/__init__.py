from .enums import LLMRole, LLMProviderType, TranscriptProviderType, TaskStatus, PollPhase
from .youtube import CaptionEntry, TranscriptTask, VideoMetadata, TranscriptBundle
from .summary import SummarySection, SummaryResult
from .api import SummarizeRequest, DigestPayload, SummarizeResponse, ServiceInfoResponse
