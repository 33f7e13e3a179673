"""
Custom exception classes and the `{success: false, error}` error envelope.

Every failure the pipeline raises on purpose is an `AppException` carrying the
HTTP status it maps to and a user-facing message (in the summary language).
Anything else is converted once, at the request boundary, by
`classify_unexpected_error`.
"""
from typing import Literal

import httpx
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Error envelope returned by the API."""
    success: Literal[False] = False
    error: str

    model_config = ConfigDict(frozen=True)


class AppException(Exception):
    """Base application exception."""

    def __init__(self, status_code: int, title: str, detail: str):
        self.status_code = status_code
        self.title = title
        self.detail = detail
        super().__init__(detail)


class ValidationError(AppException):
    """The submitted link is missing or is not a supported video link."""

    def __init__(self, detail: str):
        super().__init__(status_code=400, title="Validation Error", detail=detail)


class ConfigurationError(AppException):
    """A provider credential is missing."""

    def __init__(self, setting_name: str):
        self.setting_name = setting_name
        super().__init__(
            status_code=500,
            title="Configuration Error",
            detail="Сервис не настроен: отсутствует ключ API провайдера.",
        )


class RateLimitError(AppException):
    """The transcription provider answered HTTP 429."""

    def __init__(
        self,
        detail: str = (
            "Превышен лимит запросов к API. "
            "Пожалуйста, подождите несколько минут и попробуйте снова."
        ),
    ):
        super().__init__(status_code=500, title="Rate Limit Exceeded", detail=detail)


class NotFoundError(AppException):
    """The transcription provider has no transcript for the video (HTTP 404)."""

    def __init__(
        self,
        detail: str = "Для этого видео нет доступных субтитров или транскрипта.",
    ):
        super().__init__(status_code=500, title="Transcript Not Found", detail=detail)


class TranscriptionFailedError(AppException):
    """The transcription task ended in the failed state."""

    def __init__(self, reason: str = "неизвестная ошибка"):
        self.reason = reason
        super().__init__(
            status_code=500,
            title="Transcription Failed",
            detail=f"Не удалось получить транскрипт: {reason}",
        )


class TranscriptionTimeoutError(AppException):
    """Polling ended without the task reaching a terminal state."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            status_code=504,
            title="Transcription Timeout",
            detail="Превышено время ожидания транскрипта. Попробуйте позже.",
        )


class EmptyTranscriptError(AppException):
    """The normalized transcript is blank."""

    def __init__(self, detail: str = "Транскрипт видео недоступен или пуст."):
        super().__init__(status_code=500, title="Empty Transcript", detail=detail)


class InputTooShortError(AppException):
    """The transcript is too short to produce a meaningful digest."""

    def __init__(self, min_chars: int):
        self.min_chars = min_chars
        super().__init__(
            status_code=500,
            title="Input Too Short",
            detail="Транскрипт слишком короткий или пустой для составления выжимки.",
        )


class EmptyResponseError(AppException):
    """The generative provider returned blank output."""

    def __init__(self, detail: str = "Модель вернула пустой ответ."):
        super().__init__(status_code=500, title="Empty Response", detail=detail)


class GenerationError(AppException):
    """The generative provider call failed."""

    def __init__(self, message: str):
        super().__init__(
            status_code=500,
            title="Generation Error",
            detail=f"Ошибка генерации выжимки: {message}",
        )


class RequestTimeoutError(AppException):
    """The whole request exceeded its deadline."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            status_code=504,
            title="Request Timeout",
            detail="Превышено время обработки запроса. Попробуйте позже.",
        )


class InternalServerError(AppException):
    """Internal server error exception."""

    def __init__(self, detail: str = "Произошла непредвиденная ошибка."):
        super().__init__(status_code=500, title="Internal Server Error", detail=detail)


class UpstreamTimeoutError(AppException):
    """An external call timed out outside of task polling."""

    def __init__(self, detail: str = "Внешний сервис не ответил вовремя. Попробуйте позже."):
        super().__init__(status_code=504, title="Upstream Timeout", detail=detail)


def classify_unexpected_error(exc: Exception) -> AppException:
    """
    Map an exception outside the taxonomy to 504 (timeouts) or 500.

    Upstream HTTP failures keep their status code in the message; other
    messages are replaced since they may carry internal details.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)) or "timeout" in str(exc).lower():
        return UpstreamTimeoutError()
    if isinstance(exc, httpx.HTTPStatusError):
        return InternalServerError(
            f"Внешний сервис вернул ошибку (HTTP {exc.response.status_code})."
        )
    return InternalServerError()


def create_error_response(status_code: int, detail: str) -> JSONResponse:
    """Create the JSON error envelope."""
    error = ErrorResponse(error=detail)
    return JSONResponse(status_code=status_code, content=error.model_dump())


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle AppException and return the error envelope."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} failed ({exc.status_code} {exc.title}): {exc.detail}")
    return create_error_response(exc.status_code, exc.detail)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as validation errors (400)."""
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.errors()}")
    fields = {str(loc) for error in exc.errors() for loc in error.get("loc", ())}
    if "url" in fields:
        detail = "Необходимо указать ссылку на видео (URL is required)."
    else:
        detail = "Некорректный запрос."
    return create_error_response(400, detail)
