"""
Application configuration using pydantic-settings.
"""
from typing import List, Optional, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.constants import PollingConfig, SupadataConfig
from app.models.enums import LLMProviderType, TranscriptProviderType


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = "YouTube Video Digest"
    VERSION: str = "1.0.0"
    BACKEND_CORS_ORIGINS: Union[List[str], str] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "logs/app.log"

    # Supadata (transcription provider)
    SUPADATA_API_KEY: Optional[str] = None
    SUPADATA_BASE_URL: str = SupadataConfig.BASE_URL
    SUPADATA_REQUEST_TIMEOUT_SECONDS: float = SupadataConfig.REQUEST_TIMEOUT_SECONDS
    TRANSCRIPT_PROVIDER: TranscriptProviderType = TranscriptProviderType.TASK_POLLING
    TRANSCRIPT_POLL_INTERVAL_SECONDS: float = PollingConfig.INTERVAL_SECONDS
    TRANSCRIPT_MAX_POLL_ATTEMPTS: int = PollingConfig.MAX_ATTEMPTS

    # Summarization
    SUMMARY_LLM_PROVIDER: LLMProviderType = LLMProviderType.GEMINI

    # Gemini API
    GEMINI_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )
    GEMINI_MODEL_NAME: str = "gemini-flash-lite-latest"

    # Groq API
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL_NAME: str = "llama-3.3-70b-versatile"

    # Upper bound for a whole summarize request (acquisition + generation)
    REQUEST_DEADLINE_SECONDS: float = 180.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def missing_credentials(self) -> List[str]:
        """Names of credentials the selected providers need but are not set."""
        missing = []
        if not self.SUPADATA_API_KEY:
            missing.append("SUPADATA_API_KEY")
        if self.SUMMARY_LLM_PROVIDER == LLMProviderType.GEMINI and not self.GEMINI_API_KEY:
            missing.append("GEMINI_API_KEY")
        if self.SUMMARY_LLM_PROVIDER == LLMProviderType.GROQ and not self.GROQ_API_KEY:
            missing.append("GROQ_API_KEY")
        return missing


settings = Settings()
