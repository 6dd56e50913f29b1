"""
Logging setup and the structured error logger used by the coordinator.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from . import config
from .exceptions import ErrorCategory

if TYPE_CHECKING:
    from .error_handling.error_context import ErrorSeverity

PACKAGE_LOGGER = "error_coordinator"

_SEVERITY_LEVELS = {
    "low": logging.INFO,
    "medium": logging.WARNING,
    "high": logging.ERROR,
    "critical": logging.ERROR,
}


def setup_logging(
    level: Optional[str] = None, log_dir: Optional[str] = None
) -> logging.Logger:
    """Configure the package logger with console and optional rotating file output."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel((level or config.LOG_LEVEL).upper())

    # Re-running setup must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    log_dir = log_dir or config.LOG_DIR
    if log_dir:
        try:
            path = Path(log_dir)
            path.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                path / "error_coordinator.log",
                maxBytes=config.LOG_FILE_MAX_BYTES,
                backupCount=config.LOG_FILE_BACKUP_COUNT,
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not create file logger: {e}")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


class ErrorEventLogger:
    """Records handled errors on a standard logger, leveled by severity."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(f"{PACKAGE_LOGGER}.events")

    def record(
        self,
        category: ErrorCategory,
        severity: "ErrorSeverity",
        message: str,
        technical_details: Optional[str] = None,
        suggested_action: Optional[str] = None,
    ) -> None:
        text = f"[{category.value}] {message}"
        if technical_details:
            text += f" | Technical: {technical_details}"
        if suggested_action:
            text += f" | Suggestion: {suggested_action}"
        if severity.value == "critical":
            text = f"CRITICAL {text}"

        self.logger.log(
            _SEVERITY_LEVELS[severity.value],
            text,
            extra={
                "error_category": category.value,
                "error_severity": severity.value,
                "technical_details": technical_details,
                "suggested_action": suggested_action,
            },
        )
