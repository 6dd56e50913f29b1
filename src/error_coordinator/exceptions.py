"""
Error categories and raw failure shapes consumed by the error coordinator.

Subsystems raise these (or plain built-in exceptions) and hand them to the
coordinator together with an ErrorCategory.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCategory(str, Enum):
    """Subsystem a failure originated from."""

    NETWORK = "network"
    API = "api"
    STORAGE = "storage"
    MEDIA = "media"
    AUTHENTICATION = "authentication"
    DOWNLOAD = "download"
    TRANSCRIPTION = "transcription"
    UI = "ui"
    SYSTEM = "system"


class NetworkFailureKind(str, Enum):
    """Discriminator for network failures."""

    NOT_CONNECTED = "not_connected"
    TIMED_OUT = "timed_out"
    CANNOT_FIND_HOST = "cannot_find_host"
    OTHER = "other"


class APIFailureKind(str, Enum):
    """Discriminator for API failures."""

    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    HTTP_ERROR = "http_error"
    DECODING_ERROR = "decoding_error"
    NETWORK_ERROR = "network_error"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"


class DownloadFailureKind(str, Enum):
    """Discriminator for download failures."""

    NO_DOWNLOADABLE_CONTENT = "no_downloadable_content"
    INVALID_DOWNLOAD_URL = "invalid_download_url"
    NETWORK_ERROR = "network_error"
    DOWNLOAD_TASK_NOT_FOUND = "download_task_not_found"
    FILE_SYSTEM_ERROR = "file_system_error"
    FILE_VALIDATION_FAILED = "file_validation_failed"
    FILE_SIZE_MISMATCH = "file_size_mismatch"
    UNSUPPORTED_URL = "unsupported_url"
    FILE_NOT_FOUND = "file_not_found"
    FILE_MOVE_FAILED = "file_move_failed"


class ErrorCoordinatorError(Exception):
    """Base exception for errors raised by the coordinator package itself."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(ErrorCoordinatorError):
    """Raised when configuration is invalid."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        super().__init__(
            f"Invalid configuration for '{setting}': {reason}",
            {"setting": setting},
        )


class RawFailure(Exception):
    """Opaque failure raised by a collaborator subsystem."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


_NETWORK_DESCRIPTIONS = {
    NetworkFailureKind.NOT_CONNECTED: "The Internet connection appears to be offline",
    NetworkFailureKind.TIMED_OUT: "The request timed out",
    NetworkFailureKind.CANNOT_FIND_HOST: "A server with the specified hostname could not be found",
    NetworkFailureKind.OTHER: "Network request failed",
}


class NetworkFailure(RawFailure):
    """Raised when a network request fails at the transport level."""

    def __init__(self, kind: NetworkFailureKind, reason: Optional[str] = None):
        self.kind = kind
        super().__init__(reason or _NETWORK_DESCRIPTIONS[kind], {"kind": kind.value})


_API_DESCRIPTIONS = {
    APIFailureKind.INVALID_URL: "Invalid URL",
    APIFailureKind.INVALID_RESPONSE: "Invalid response from server",
    APIFailureKind.DECODING_ERROR: "Failed to decode response",
    APIFailureKind.NETWORK_ERROR: "Network error",
    APIFailureKind.NOT_FOUND: "Resource not found",
    APIFailureKind.SERVER_ERROR: "Server error",
    APIFailureKind.RATE_LIMITED: "Rate limited",
    APIFailureKind.UNAUTHORIZED: "Unauthorized",
}


class APIFailure(RawFailure):
    """Raised when an API request fails."""

    def __init__(
        self,
        kind: APIFailureKind,
        status_code: Optional[int] = None,
        body: Optional[bytes] = None,
        underlying: Optional[BaseException] = None,
    ):
        if kind == APIFailureKind.HTTP_ERROR and status_code is None:
            raise ValueError("HTTP_ERROR failures require a status_code")
        self.kind = kind
        self.status_code = status_code
        self.body = body
        self.underlying = underlying

        if kind == APIFailureKind.HTTP_ERROR:
            message = f"HTTP error {status_code}"
        else:
            message = _API_DESCRIPTIONS[kind]
        if underlying is not None:
            message = f"{message}: {underlying}"
        super().__init__(message, {"kind": kind.value, "status_code": status_code})

    @classmethod
    def http(cls, status_code: int, body: Optional[bytes] = None) -> "APIFailure":
        return cls(APIFailureKind.HTTP_ERROR, status_code=status_code, body=body)

    @classmethod
    def network(cls, underlying: BaseException) -> "APIFailure":
        return cls(APIFailureKind.NETWORK_ERROR, underlying=underlying)

    @classmethod
    def decoding(cls, underlying: BaseException) -> "APIFailure":
        return cls(APIFailureKind.DECODING_ERROR, underlying=underlying)


_DOWNLOAD_DESCRIPTIONS = {
    DownloadFailureKind.INVALID_DOWNLOAD_URL: "Invalid download URL",
    DownloadFailureKind.DOWNLOAD_TASK_NOT_FOUND: "Download task not found",
    DownloadFailureKind.FILE_SYSTEM_ERROR: "File system error",
    DownloadFailureKind.NETWORK_ERROR: "Network error",
    DownloadFailureKind.FILE_VALIDATION_FAILED: "Downloaded file validation failed",
    DownloadFailureKind.FILE_SIZE_MISMATCH: "Downloaded file size does not match expected size",
    DownloadFailureKind.UNSUPPORTED_URL: "URL type not supported for download",
    DownloadFailureKind.NO_DOWNLOADABLE_CONTENT: "No downloadable audio or video content found",
    DownloadFailureKind.FILE_NOT_FOUND: "Downloaded file not found",
    DownloadFailureKind.FILE_MOVE_FAILED: "Failed to move downloaded file",
}


class DownloadFailure(RawFailure):
    """Raised by the download pipeline."""

    def __init__(self, kind: DownloadFailureKind, reason: Optional[str] = None):
        self.kind = kind
        message = _DOWNLOAD_DESCRIPTIONS[kind]
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, {"kind": kind.value})
