"""
Maps a raw failure and its category to user-facing text, severity and a
suggested action.

The tables below are the whole taxonomy: every category resolves to a
literal triple, and shapes a category does not recognize fall back to that
category's generic entry, so classify() never raises.
"""

import json
import logging
import socket
from typing import Callable, Dict, NamedTuple, Optional

from pydantic import ValidationError

from ..exceptions import (
    APIFailure,
    APIFailureKind,
    DownloadFailure,
    DownloadFailureKind,
    ErrorCategory,
    NetworkFailure,
    NetworkFailureKind,
)
from .error_context import ErrorSeverity

logger = logging.getLogger(__name__)


class Classification(NamedTuple):
    """Result of classifying one raw failure."""

    message: str
    severity: ErrorSeverity
    suggested_action: Optional[str]


NETWORK_RULES: Dict[NetworkFailureKind, Classification] = {
    NetworkFailureKind.NOT_CONNECTED: Classification(
        "No internet connection available",
        ErrorSeverity.HIGH,
        "Check your internet connection and try again",
    ),
    NetworkFailureKind.TIMED_OUT: Classification(
        "Request timed out", ErrorSeverity.MEDIUM, "Please try again"
    ),
    NetworkFailureKind.CANNOT_FIND_HOST: Classification(
        "Cannot connect to server",
        ErrorSeverity.HIGH,
        "Check your internet connection",
    ),
    NetworkFailureKind.OTHER: Classification(
        "Network error occurred", ErrorSeverity.MEDIUM, "Please try again"
    ),
}

API_RULES: Dict[APIFailureKind, Classification] = {
    APIFailureKind.INVALID_URL: Classification(
        "Invalid request", ErrorSeverity.MEDIUM, "Please try again"
    ),
    APIFailureKind.INVALID_RESPONSE: Classification(
        "Server response error", ErrorSeverity.MEDIUM, "Please try again"
    ),
    APIFailureKind.DECODING_ERROR: Classification(
        "Data format error", ErrorSeverity.MEDIUM, "Please try again"
    ),
    APIFailureKind.NOT_FOUND: Classification(
        "Resource not found", ErrorSeverity.MEDIUM, "Please try again"
    ),
    APIFailureKind.SERVER_ERROR: Classification(
        "Server error", ErrorSeverity.HIGH, "Please try again later"
    ),
    APIFailureKind.RATE_LIMITED: Classification(
        "Too many requests", ErrorSeverity.LOW, "Please wait a moment and try again"
    ),
    APIFailureKind.UNAUTHORIZED: Classification(
        "Access denied", ErrorSeverity.MEDIUM, "Please check your permissions"
    ),
}

DOWNLOAD_RULES: Dict[DownloadFailureKind, Classification] = {
    DownloadFailureKind.NO_DOWNLOADABLE_CONTENT: Classification(
        "No downloadable content available", ErrorSeverity.LOW, None
    ),
    DownloadFailureKind.INVALID_DOWNLOAD_URL: Classification(
        "Download link is invalid", ErrorSeverity.MEDIUM, "Try again later"
    ),
    DownloadFailureKind.NETWORK_ERROR: Classification(
        "Download failed", ErrorSeverity.MEDIUM, "Check your connection and try again"
    ),
    DownloadFailureKind.DOWNLOAD_TASK_NOT_FOUND: Classification(
        "Download task not found", ErrorSeverity.MEDIUM, "Try again later"
    ),
    DownloadFailureKind.FILE_SYSTEM_ERROR: Classification(
        "Storage error", ErrorSeverity.HIGH, "Check available storage space"
    ),
    DownloadFailureKind.FILE_VALIDATION_FAILED: Classification(
        "File validation failed", ErrorSeverity.MEDIUM, "Try downloading again"
    ),
    DownloadFailureKind.FILE_SIZE_MISMATCH: Classification(
        "File size mismatch", ErrorSeverity.MEDIUM, "Try downloading again"
    ),
    DownloadFailureKind.UNSUPPORTED_URL: Classification(
        "Unsupported download URL",
        ErrorSeverity.LOW,
        "This content cannot be downloaded",
    ),
    DownloadFailureKind.FILE_NOT_FOUND: Classification(
        "Download file not found", ErrorSeverity.MEDIUM, "Try downloading again"
    ),
    DownloadFailureKind.FILE_MOVE_FAILED: Classification(
        "Failed to save download", ErrorSeverity.HIGH, "Check available storage space"
    ),
}

# Categories whose raw failures carry no discriminator
FLAT_RULES: Dict[ErrorCategory, Classification] = {
    ErrorCategory.STORAGE: Classification(
        "Storage error occurred", ErrorSeverity.HIGH, "Please restart the app"
    ),
    ErrorCategory.MEDIA: Classification(
        "Media playback error",
        ErrorSeverity.MEDIUM,
        "Try playing a different resource",
    ),
    ErrorCategory.TRANSCRIPTION: Classification(
        "Transcription service error",
        ErrorSeverity.LOW,
        "Transcription will be available later",
    ),
    ErrorCategory.AUTHENTICATION: Classification(
        "Authentication error", ErrorSeverity.HIGH, "Please check your credentials"
    ),
    ErrorCategory.UI: Classification(
        "Interface error", ErrorSeverity.LOW, "Please try again"
    ),
    ErrorCategory.SYSTEM: Classification(
        "System error occurred", ErrorSeverity.CRITICAL, "Please restart the app"
    ),
}

NETWORK_FALLBACK = Classification(
    "Network connection failed",
    ErrorSeverity.MEDIUM,
    "Check your connection and try again",
)
API_FALLBACK = Classification(
    "API request failed", ErrorSeverity.MEDIUM, "Please try again"
)
DOWNLOAD_FALLBACK = Classification(
    "Download error", ErrorSeverity.MEDIUM, "Please try again"
)


def _network_kind(error: BaseException) -> Optional[NetworkFailureKind]:
    """Recognize network failure shapes, including the built-in ones."""
    if isinstance(error, NetworkFailure):
        return error.kind
    if isinstance(error, TimeoutError):
        return NetworkFailureKind.TIMED_OUT
    if isinstance(error, socket.gaierror):
        return NetworkFailureKind.CANNOT_FIND_HOST
    return None


class ErrorClassifier:
    """Classifies raw failures per category. Stateless."""

    def __init__(self):
        self._parsers: Dict[ErrorCategory, Callable[[BaseException], Classification]] = {
            ErrorCategory.NETWORK: self._classify_network,
            ErrorCategory.API: self._classify_api,
            ErrorCategory.DOWNLOAD: self._classify_download,
        }

    def classify(
        self, error: BaseException, category: ErrorCategory
    ) -> Classification:
        """
        Classify a raw failure.

        Args:
            error: The raw failure raised by a collaborator
            category: Subsystem the failure came from

        Returns:
            (message, severity, suggested_action) for the failure
        """
        category = ErrorCategory(category)
        parser = self._parsers.get(category)
        if parser is not None:
            classification = parser(error)
        else:
            classification = FLAT_RULES[category]

        logger.debug(
            f"Classified {type(error).__name__} ({category.value}) as "
            f"{classification.severity.value}: {classification.message}"
        )
        return classification

    def _classify_network(self, error: BaseException) -> Classification:
        kind = _network_kind(error)
        if kind is None:
            return NETWORK_FALLBACK
        return NETWORK_RULES[kind]

    def _classify_api(self, error: BaseException) -> Classification:
        if isinstance(error, APIFailure):
            if error.kind == APIFailureKind.HTTP_ERROR:
                return self._classify_status(error.status_code)
            if error.kind == APIFailureKind.NETWORK_ERROR:
                if error.underlying is None:
                    return NETWORK_RULES[NetworkFailureKind.OTHER]
                return self._classify_network(error.underlying)
            return API_RULES[error.kind]

        if isinstance(error, (json.JSONDecodeError, ValidationError)):
            return API_RULES[APIFailureKind.DECODING_ERROR]

        # A network failure surfaced through the API layer
        if _network_kind(error) is not None:
            return self._classify_network(error)
        cause = error.__cause__
        if cause is not None and _network_kind(cause) is not None:
            return self._classify_network(cause)

        return API_FALLBACK

    @staticmethod
    def _classify_status(status_code: int) -> Classification:
        if status_code == 404:
            return Classification("Resource not found", ErrorSeverity.MEDIUM, None)
        if status_code == 429:
            return API_RULES[APIFailureKind.RATE_LIMITED]
        if 500 <= status_code <= 599:
            return API_RULES[APIFailureKind.SERVER_ERROR]
        return Classification(
            f"Server error ({status_code})", ErrorSeverity.MEDIUM, "Please try again"
        )

    def _classify_download(self, error: BaseException) -> Classification:
        if isinstance(error, DownloadFailure):
            return DOWNLOAD_RULES[error.kind]
        return DOWNLOAD_FALLBACK
