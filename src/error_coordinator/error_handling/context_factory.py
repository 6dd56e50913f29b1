"""
Builds ErrorContext records from raw failures.
"""

import logging
from typing import Any, Callable, Optional
from uuid import UUID, uuid4

from ..exceptions import ErrorCategory
from .classifier import ErrorClassifier
from .error_context import CallbackHandle, ErrorContext

logger = logging.getLogger(__name__)


def describe_failure(error: BaseException) -> str:
    """Diagnostic description of a raw failure, used as technical detail."""
    description = str(error).strip()
    return description or type(error).__name__


class ErrorContextFactory:
    """Wraps classifier output with identity, timestamp and callbacks."""

    def __init__(
        self,
        classifier: ErrorClassifier,
        release: Callable[[UUID], Any],
    ):
        """
        Args:
            classifier: Classifier supplying message, severity and action
            release: Clears the active slot for a context id; becomes the
                body of every synthesized dismiss action
        """
        self.classifier = classifier
        self._release = release

    def build(
        self,
        error: BaseException,
        category: ErrorCategory,
        retry_action: Optional[Callable[[], Any]] = None,
    ) -> ErrorContext:
        """Build a context whose dismiss action only clears that same context, never a newer one."""
        message, severity, suggested_action = self.classifier.classify(error, category)
        context_id = uuid4()

        return ErrorContext(
            id=context_id,
            category=category,
            severity=severity,
            user_message=message,
            technical_details=describe_failure(error),
            suggested_action=suggested_action,
            retry_action=retry_action,
            dismiss_action=CallbackHandle(
                lambda: self._release(context_id), name="dismiss_action"
            ),
        )
