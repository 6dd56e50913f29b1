"""
Centralized error classification and recovery coordination.
"""

from .error_handling import (
    ChangeEvent,
    ChangeKind,
    ErrorContext,
    ErrorCoordinator,
    ErrorSeverity,
    HapticDispatcher,
    HapticPulse,
    PresentationTier,
)
from .exceptions import (
    APIFailure,
    APIFailureKind,
    DownloadFailure,
    DownloadFailureKind,
    ErrorCategory,
    NetworkFailure,
    NetworkFailureKind,
    RawFailure,
)
from .logging_config import ErrorEventLogger, setup_logging
from .preferences import InMemoryPreferenceStore

__version__ = "0.1.0"

__all__ = [
    "APIFailure",
    "APIFailureKind",
    "ChangeEvent",
    "ChangeKind",
    "DownloadFailure",
    "DownloadFailureKind",
    "ErrorCategory",
    "ErrorContext",
    "ErrorCoordinator",
    "ErrorEventLogger",
    "ErrorSeverity",
    "HapticDispatcher",
    "HapticPulse",
    "InMemoryPreferenceStore",
    "NetworkFailure",
    "NetworkFailureKind",
    "PresentationTier",
    "RawFailure",
    "setup_logging",
]
