"""
Tests for HistoryStore and ActiveErrorSlot.
"""

import pytest

from error_coordinator.error_handling import (
    ActiveErrorSlot,
    ErrorContext,
    ErrorSeverity,
    HistoryStore,
)
from error_coordinator.exceptions import ErrorCategory


def make_context(message: str = "Interface error") -> ErrorContext:
    return ErrorContext(
        category=ErrorCategory.UI, severity=ErrorSeverity.LOW, user_message=message
    )


class TestHistoryStore:
    """Bounded newest-first history."""

    def test_default_capacity(self):
        assert HistoryStore().capacity == 50

    def test_newest_first(self):
        store = HistoryStore(capacity=5)
        contexts = [make_context(f"error {i}") for i in range(3)]
        for context in contexts:
            store.prepend(context)

        assert store.snapshot() == tuple(reversed(contexts))
        assert store.head is contexts[-1]
        assert len(store) == 3

    def test_eviction_drops_oldest(self):
        store = HistoryStore(capacity=3)
        contexts = [make_context(f"error {i}") for i in range(4)]

        evicted = [store.prepend(context) for context in contexts]

        assert evicted == [None, None, None, contexts[0]]
        assert len(store) == 3
        assert contexts[0] not in store
        assert store.snapshot() == (contexts[3], contexts[2], contexts[1])

    def test_clear(self):
        store = HistoryStore(capacity=3)
        store.prepend(make_context())
        store.clear()

        assert len(store) == 0
        assert store.head is None
        assert store.snapshot() == ()

    def test_snapshot_is_detached(self):
        store = HistoryStore(capacity=3)
        store.prepend(make_context())
        snapshot = store.snapshot()
        store.prepend(make_context())

        assert len(snapshot) == 1
        assert len(store) == 2

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            HistoryStore(capacity=0)

    def test_rejects_capacity_above_limit(self):
        with pytest.raises(ValueError):
            HistoryStore(capacity=51)


class TestActiveErrorSlot:
    """Single presented error slot."""

    def test_initially_idle(self):
        slot = ActiveErrorSlot()
        assert slot.is_idle
        assert slot.context is None
        assert slot.clear() is None

    def test_present_overwrites(self):
        slot = ActiveErrorSlot()
        first, second = make_context("first"), make_context("second")

        assert slot.present(first) is None
        assert slot.present(second) is first
        assert slot.context is second

    def test_clear_if_matches_identity(self):
        slot = ActiveErrorSlot()
        first, second = make_context("first"), make_context("second")
        slot.present(first)
        slot.present(second)

        assert slot.clear_if(first.id) is False
        assert slot.context is second
        assert slot.clear_if(second.id) is True
        assert slot.is_idle
