"""
Protocol definitions for the collaborators the coordinator depends on.
Concrete implementations are injected at construction time.
"""

from typing import TYPE_CHECKING, Optional, Protocol
from abc import abstractmethod

if TYPE_CHECKING:
    from ..error_handling.error_context import ErrorSeverity
    from ..error_handling.haptics import HapticPulse
    from ..exceptions import ErrorCategory


class ErrorLoggerProtocol(Protocol):
    """Structured sink for handled errors. Must never raise."""

    @abstractmethod
    def record(
        self,
        category: "ErrorCategory",
        severity: "ErrorSeverity",
        message: str,
        technical_details: Optional[str] = None,
        suggested_action: Optional[str] = None,
    ) -> None:
        """Record one handled error."""
        ...


class HapticDeviceProtocol(Protocol):
    """Low-level pulse generator."""

    @abstractmethod
    def trigger(self, pulse: "HapticPulse") -> None:
        """Fire a single pulse. May raise when the device is unavailable."""
        ...


class PreferenceStoreProtocol(Protocol):
    """Key-value store for user preferences."""

    def get_bool(self, key: str, default: bool) -> bool:
        """Read a boolean preference, falling back to default when unset."""
        ...

    def set_bool(self, key: str, value: bool) -> None:
        """Persist a boolean preference."""
        ...
