"""
Configuration constants and settings for the error coordinator.
"""

import os

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()

# History; the env override may shrink the history, never grow it
HISTORY_CAPACITY_LIMIT = 50
MAX_ERROR_HISTORY = int(os.getenv("ERROR_HISTORY_SIZE", "50"))
SUMMARY_RECENT_LIMIT = 5

# Haptics
CRITICAL_PULSE_DELAY_MS = int(os.getenv("CRITICAL_PULSE_DELAY_MS", "200"))
HAPTICS_PREFERENCE_KEY = "haptics_enabled"
HAPTICS_ENABLED_DEFAULT = os.getenv("HAPTICS_ENABLED", "true").lower() == "true"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DIR = os.getenv("ERROR_COORDINATOR_LOG_DIR")
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_FILE_BACKUP_COUNT = 5


def validate_config() -> None:
    """Validate configuration settings."""
    if MAX_ERROR_HISTORY < 1:
        raise ConfigurationError("MAX_ERROR_HISTORY", "must be positive")

    if MAX_ERROR_HISTORY > HISTORY_CAPACITY_LIMIT:
        raise ConfigurationError(
            "MAX_ERROR_HISTORY", f"must not exceed {HISTORY_CAPACITY_LIMIT}"
        )

    if CRITICAL_PULSE_DELAY_MS < 0:
        raise ConfigurationError("CRITICAL_PULSE_DELAY_MS", "must not be negative")

    if LOG_LEVEL.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL", f"unknown level '{LOG_LEVEL}'")
