"""
Central coordinator turning raw failures from any subsystem into presented,
logged and recorded error contexts.

Every mutation runs under one asyncio.Lock, so concurrent callers are served
one at a time in arrival order. Nothing awaits while the lock is held, which
keeps every observable state a complete mutation boundary. Logging and haptics
run on a single worker thread after the state change, in handling order.
"""

import asyncio
import inspect
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Tuple
from uuid import UUID

from .. import config
from ..exceptions import APIFailure, DownloadFailure, ErrorCategory
from ..logging_config import ErrorEventLogger
from ..models.protocols import ErrorLoggerProtocol
from .classifier import ErrorClassifier
from .context_factory import ErrorContextFactory
from .error_context import CallbackHandle, ErrorContext
from .haptics import HapticDispatcher
from .history import ActiveErrorSlot, HistoryStore
from .presentation import PresentationPolicy, PresentationTier

logger = logging.getLogger(__name__)

RetryAction = Callable[[], Any]


class ChangeKind(str, Enum):
    HANDLED = "handled"
    DISMISSED = "dismissed"
    HISTORY_CLEARED = "history_cleared"


@dataclass(frozen=True)
class ChangeEvent:
    """Snapshot emitted to subscribers after each mutation."""

    kind: ChangeKind
    context: Optional[ErrorContext]
    current_error: Optional[ErrorContext]
    history: Tuple[ErrorContext, ...]


Listener = Callable[[ChangeEvent], None]


class ErrorCoordinator:
    """Single authority for classifying, recording and presenting errors."""

    def __init__(
        self,
        classifier: Optional[ErrorClassifier] = None,
        error_logger: Optional[ErrorLoggerProtocol] = None,
        haptics: Optional[HapticDispatcher] = None,
        presentation: Optional[PresentationPolicy] = None,
        history_size: int = config.MAX_ERROR_HISTORY,
    ):
        """
        Args:
            classifier: Maps raw failures to message, severity and action
            error_logger: Structured sink recording each handled error
            haptics: Dispatcher playing severity patterns on a haptic device
            presentation: Severity to presentation tier policy
            history_size: Number of contexts kept in history
        """
        config.validate_config()

        self.classifier = classifier or ErrorClassifier()
        self.error_logger = error_logger or ErrorEventLogger()
        self.haptics = haptics or HapticDispatcher()
        self.presentation = presentation or PresentationPolicy()

        self._history = HistoryStore(history_size)
        self._slot = ActiveErrorSlot()
        self._factory = ErrorContextFactory(self.classifier, self._release)
        self._lock = asyncio.Lock()
        self._listeners: List[Listener] = []
        self._background: Set[asyncio.Future] = set()
        self._side_effects = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="error-coordinator"
        )

    # Observation

    @property
    def current_error(self) -> Optional[ErrorContext]:
        return self._slot.context

    @property
    def error_history(self) -> Tuple[ErrorContext, ...]:
        """Handled contexts, newest first."""
        return self._history.snapshot()

    @property
    def has_current_error(self) -> bool:
        return not self._slot.is_idle

    @property
    def current_tier(self) -> Optional[PresentationTier]:
        context = self._slot.context
        if context is None:
            return None
        return self.presentation.tier_for(context.severity)

    @property
    def should_show_alert(self) -> bool:
        return self.current_tier is PresentationTier.ALERT

    @property
    def should_show_banner(self) -> bool:
        return self.current_tier is PresentationTier.BANNER

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # Mutations

    async def handle(
        self,
        error: BaseException,
        category: ErrorCategory,
        retry_action: Optional[RetryAction] = None,
    ) -> ErrorContext:
        """
        Classify a raw failure and present it.

        Args:
            error: The raw failure caught by a collaborator
            category: Subsystem the failure came from
            retry_action: Optional zero-argument callable offered to the user

        Returns:
            The ErrorContext now at the head of history
        """
        async with self._lock:
            context = self._factory.build(error, category, retry_action)
            self._apply(context)
        return context

    async def handle_context(self, context: ErrorContext) -> ErrorContext:
        """Present an already built context."""
        async with self._lock:
            self._apply(context)
        return context

    async def dismiss(self) -> bool:
        """Dismiss the current error. Returns False when nothing was shown."""
        async with self._lock:
            return self._dismiss_current()

    async def retry(self) -> bool:
        """Run the current error's retry action, then dismiss it."""
        async with self._lock:
            context = self._slot.context
            if context is None or context.retry_action is None:
                return False
            fired = not context.retry_action.invoked
            self._invoke(context.retry_action)
            self._dismiss_current()
        return fired

    async def clear_history(self) -> None:
        """Empty the history; the current error stays presented."""
        async with self._lock:
            self._history.clear()
            logger.info("Error history cleared")
            self._notify(ChangeKind.HISTORY_CLEARED, None)

    # Convenience entry points

    async def handle_network_error(
        self, error: BaseException, retry_action: Optional[RetryAction] = None
    ) -> ErrorContext:
        return await self.handle(error, ErrorCategory.NETWORK, retry_action)

    async def handle_api_error(
        self, error: APIFailure, retry_action: Optional[RetryAction] = None
    ) -> ErrorContext:
        return await self.handle(error, ErrorCategory.API, retry_action)

    async def handle_download_error(
        self, error: DownloadFailure, retry_action: Optional[RetryAction] = None
    ) -> ErrorContext:
        return await self.handle(error, ErrorCategory.DOWNLOAD, retry_action)

    async def handle_media_error(
        self, error: BaseException, retry_action: Optional[RetryAction] = None
    ) -> ErrorContext:
        return await self.handle(error, ErrorCategory.MEDIA, retry_action)

    async def handle_storage_error(
        self, error: BaseException, retry_action: Optional[RetryAction] = None
    ) -> ErrorContext:
        return await self.handle(error, ErrorCategory.STORAGE, retry_action)

    # Diagnostics

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of error history."""
        history = self._history.snapshot()
        if not history:
            return {"total_errors": 0}

        summary: Dict[str, Any] = {
            "total_errors": len(history),
            "by_category": {},
            "by_severity": {},
            "recent_errors": [],
        }

        for error in history:
            category = error.category.value
            summary["by_category"][category] = (
                summary["by_category"].get(category, 0) + 1
            )

            severity = error.severity.value
            summary["by_severity"][severity] = (
                summary["by_severity"].get(severity, 0) + 1
            )

        summary["recent_errors"] = [
            {
                "category": err.category.value,
                "severity": err.severity.value,
                "message": err.user_message,
                "timestamp": err.timestamp.isoformat(),
            }
            for err in history[: config.SUMMARY_RECENT_LIMIT]
        ]

        return summary

    async def wait_for_background_tasks(self) -> None:
        """Wait for pending log writes, haptic dispatches and async actions."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    # Internals; callers hold the lock or run synchronously on the loop

    def _apply(self, context: ErrorContext) -> None:
        self._history.prepend(context)
        superseded = self._slot.present(context)
        if superseded is not None:
            logger.debug(f"Error {superseded.id} superseded by {context.id}")

        self._offload(self._record, context)
        self._offload(self._dispatch_haptics, context)

        logger.debug(
            f"Error handled: {context.user_message} - Category: "
            f"{context.category.value}, Severity: {context.severity.value}"
        )
        self._notify(ChangeKind.HANDLED, context)

    def _record(self, context: ErrorContext) -> None:
        try:
            self.error_logger.record(
                context.category,
                context.severity,
                context.user_message,
                context.technical_details,
                context.suggested_action,
            )
        except Exception as e:
            logger.warning(f"Error logger failed to record {context.id}: {e}")

    def _dispatch_haptics(self, context: ErrorContext) -> None:
        try:
            self.haptics.dispatch(context.severity)
        except Exception as e:
            logger.debug(f"Haptics skipped for {context.id}: {e}")

    def _offload(self, func: Callable[[ErrorContext], None], context: ErrorContext) -> None:
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._side_effects, func, context)
        self._background.add(future)
        future.add_done_callback(self._on_background_done)

    def _dismiss_current(self) -> bool:
        context = self._slot.context
        if context is None:
            return False

        if context.dismiss_action is not None:
            self._invoke(context.dismiss_action)

        # The synthesized dismiss action releases the slot itself
        if self._slot.context is context:
            self._slot.clear()
            self._notify(ChangeKind.DISMISSED, context)
        return True

    def _release(self, context_id: UUID) -> None:
        context = self._slot.context
        if self._slot.clear_if(context_id):
            self._notify(ChangeKind.DISMISSED, context)

    def _invoke(self, handle: CallbackHandle) -> None:
        try:
            result = handle.invoke()
        except Exception:
            logger.exception(f"{handle.name} raised")
            return
        if inspect.isawaitable(result):
            self._spawn(result)

    def _spawn(self, awaitable: Awaitable[Any]) -> None:
        task = asyncio.ensure_future(awaitable)
        self._background.add(task)
        task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: asyncio.Future) -> None:
        self._background.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Background action failed: {task.exception()}")

    def _notify(self, kind: ChangeKind, context: Optional[ErrorContext]) -> None:
        event = ChangeEvent(
            kind=kind,
            context=context,
            current_error=self._slot.context,
            history=self._history.snapshot(),
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Error listener failed")
