"""
Severity ordering, at-most-once callback handles and the frozen ErrorContext
record every handled failure becomes.
"""

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from functools import total_ordering
from typing import Any, Callable, Dict, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import ErrorCategory

logger = logging.getLogger(__name__)


@total_ordering
class ErrorSeverity(Enum):
    """Error severity levels for prioritization."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank < other.rank


_SEVERITY_RANK = {
    ErrorSeverity.LOW: 0,
    ErrorSeverity.MEDIUM: 1,
    ErrorSeverity.HIGH: 2,
    ErrorSeverity.CRITICAL: 3,
}


class CallbackHandle:
    """
    Zero-argument callback that fires at most once.

    Whatever the callback returns is handed back from the first invoke(),
    so async callbacks come back as awaitables for the caller to schedule.
    """

    def __init__(self, callback: Callable[[], Any], name: str = "callback"):
        if not callable(callback):
            raise TypeError(f"{name} must be callable")
        self.name = name
        self._callback = callback
        self._invoked = False
        self._lock = threading.Lock()

    @property
    def invoked(self) -> bool:
        return self._invoked

    def invoke(self) -> Any:
        """Run the callback unless it already ran; returns its result or None."""
        with self._lock:
            if self._invoked:
                logger.debug(f"Skipping {self.name}: already invoked")
                return None
            self._invoked = True
        return self._callback()

    def __repr__(self) -> str:
        return f"CallbackHandle(name={self.name!r}, invoked={self._invoked})"


class ErrorContext(BaseModel):
    """Classified, user-presentable record for one raw failure."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    category: ErrorCategory
    severity: ErrorSeverity
    user_message: str = Field(..., min_length=1, description="Text shown to the user")
    technical_details: Optional[str] = Field(
        None, description="Diagnostic text, logged but never shown as primary text"
    )
    suggested_action: Optional[str] = None
    retry_action: Optional[CallbackHandle] = None
    dismiss_action: Optional[CallbackHandle] = None

    @field_validator("user_message")
    @classmethod
    def validate_user_message(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("user_message must not be blank")
        return v

    @field_validator("retry_action", "dismiss_action", mode="before")
    @classmethod
    def wrap_callbacks(cls, v: Any, info) -> Any:
        """Accept plain callables and wrap them in a CallbackHandle."""
        if v is None or isinstance(v, CallbackHandle):
            return v
        if callable(v):
            return CallbackHandle(v, name=info.field_name)
        raise TypeError(f"{info.field_name} must be callable")

    @property
    def has_retry(self) -> bool:
        return self.retry_action is not None

    @property
    def is_blocking(self) -> bool:
        return self.severity >= ErrorSeverity.HIGH

    def to_log_dict(self) -> Dict[str, Any]:
        """JSON-safe representation without the callbacks."""
        data = self.model_dump(
            mode="json", exclude={"retry_action", "dismiss_action"}
        )
        data["has_retry"] = self.has_retry
        return data
