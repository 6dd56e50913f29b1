"""
Error handling module for centralized error coordination.
Provides classification, bounded history, presentation and haptic escalation.
"""

from .classifier import Classification, ErrorClassifier
from .context_factory import ErrorContextFactory
from .coordinator import ChangeEvent, ChangeKind, ErrorCoordinator
from .error_context import CallbackHandle, ErrorContext, ErrorSeverity
from .haptics import (
    HapticDispatcher,
    HapticEscalationPolicy,
    HapticPulse,
    HapticStep,
    NullHapticDevice,
)
from .history import ActiveErrorSlot, HistoryStore
from .presentation import BannerStyle, PresentationPolicy, PresentationTier

__all__ = [
    "ActiveErrorSlot",
    "BannerStyle",
    "CallbackHandle",
    "ChangeEvent",
    "ChangeKind",
    "Classification",
    "ErrorClassifier",
    "ErrorContext",
    "ErrorContextFactory",
    "ErrorCoordinator",
    "ErrorSeverity",
    "HapticDispatcher",
    "HapticEscalationPolicy",
    "HapticPulse",
    "HapticStep",
    "HistoryStore",
    "NullHapticDevice",
    "PresentationPolicy",
    "PresentationTier",
]
