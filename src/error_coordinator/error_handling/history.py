"""
Bounded error history and the slot holding the currently presented error.
Neither class locks; the coordinator serializes all mutations.
"""

import logging
from collections import deque
from typing import Deque, Iterator, Optional, Tuple
from uuid import UUID

from .. import config
from .error_context import ErrorContext

logger = logging.getLogger(__name__)


class HistoryStore:
    """Newest-first log of error contexts with FIFO eviction from the tail."""

    def __init__(self, capacity: int = config.MAX_ERROR_HISTORY):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        if capacity > config.HISTORY_CAPACITY_LIMIT:
            raise ValueError(
                f"capacity must not exceed {config.HISTORY_CAPACITY_LIMIT}"
            )
        self.capacity = capacity
        self._entries: Deque[ErrorContext] = deque(maxlen=capacity)

    def prepend(self, context: ErrorContext) -> Optional[ErrorContext]:
        """Insert at the head; returns the evicted entry, if any."""
        evicted = None
        if len(self._entries) == self.capacity:
            evicted = self._entries[-1]
        # appendleft on a full bounded deque drops the rightmost (oldest) entry
        self._entries.appendleft(context)
        if evicted is not None:
            logger.debug(f"Evicted error {evicted.id} from history")
        return evicted

    def clear(self) -> None:
        self._entries.clear()

    @property
    def head(self) -> Optional[ErrorContext]:
        return self._entries[0] if self._entries else None

    def snapshot(self) -> Tuple[ErrorContext, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ErrorContext]:
        return iter(tuple(self._entries))

    def __contains__(self, context: object) -> bool:
        return any(entry is context for entry in self._entries)


class ActiveErrorSlot:
    """Holds at most one presented error context."""

    def __init__(self):
        self._context: Optional[ErrorContext] = None

    @property
    def context(self) -> Optional[ErrorContext]:
        return self._context

    @property
    def is_idle(self) -> bool:
        return self._context is None

    def present(self, context: ErrorContext) -> Optional[ErrorContext]:
        """Overwrite the slot; returns the superseded context."""
        previous = self._context
        self._context = context
        return previous

    def clear(self) -> Optional[ErrorContext]:
        previous = self._context
        self._context = None
        return previous

    def clear_if(self, context_id: UUID) -> bool:
        """Clear only while the slot still holds the given context."""
        if self._context is not None and self._context.id == context_id:
            self._context = None
            return True
        return False
