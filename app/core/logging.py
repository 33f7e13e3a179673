"""
Logging configuration using Loguru.
"""
import logging
import sys
from typing import Any, Optional

from loguru import logger


class InterceptHandler(logging.Handler):
    """Handler that intercepts standard logging and redirects to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record by redirecting to Loguru.

        Args:
            record: The log record from standard logging.
        """
        # Get corresponding Loguru level if it exists
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO", log_file: Optional[str] = "logs/app.log") -> None:
    """
    Configure logging with Loguru.

    This function:
    1. Removes existing handlers
    2. Intercepts standard library logging (uvicorn, httpx)
    3. Configures Loguru with a console sink and, if `log_file` is set,
       a rotating file sink

    Args:
        level: Minimum level for both sinks.
        log_file: Path of the file sink, or None to log to the console only.
    """
    # Remove all existing handlers
    logging.root.handlers = []

    # Intercept everything that goes to standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0)

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", "httpx"):
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    logger.remove()  # Remove default handler

    # Patcher to ensure request_id exists in extra context
    def add_request_id(record: dict[str, Any]) -> None:
        record["extra"].setdefault("request_id", "N/A")

    logger.configure(patcher=add_request_id)

    # Console Sink
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<magenta>{extra[request_id]}</magenta> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level,
    )

    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            enqueue=True,
            level=level,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
                "{extra[request_id]} | {name}:{function}:{line} - {message}"
            ),
        )
