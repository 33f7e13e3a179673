"""
Enums for type-safe values across the application.
"""
from enum import Enum


class LLMRole(str, Enum):
    """Role for LLM provider messages (Gemini/Groq compatible)."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class LLMProviderType(str, Enum):
    """Supported LLM provider types for configuration."""
    GEMINI = "gemini"
    GROQ = "groq"


class TranscriptProviderType(str, Enum):
    """Supported transcription provider integrations."""
    DIRECT = "direct"
    TASK_POLLING = "task_polling"


class TaskStatus(str, Enum):
    """Normalized status of a transcription task."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.COMPLETED, TaskStatus.FAILED)


class PollPhase(str, Enum):
    """States of the task polling state machine."""
    PENDING = "pending"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
