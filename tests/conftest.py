"""
Pytest configuration and fixtures for error coordinator tests.
"""

import time
from typing import List, Tuple
from unittest.mock import Mock

import pytest

from error_coordinator.error_handling import (
    ErrorCoordinator,
    HapticDispatcher,
    HapticEscalationPolicy,
    HapticPulse,
)
from error_coordinator.preferences import InMemoryPreferenceStore


class RecordingHapticDevice:
    """Haptic device double that remembers every pulse and when it fired."""

    def __init__(self):
        self.pulses: List[Tuple[HapticPulse, float]] = []

    def trigger(self, pulse: HapticPulse) -> None:
        self.pulses.append((pulse, time.monotonic()))

    @property
    def kinds(self) -> List[HapticPulse]:
        return [pulse for pulse, _ in self.pulses]


class UnavailableHapticDevice:
    """Haptic device double that always fails."""

    def __init__(self):
        self.attempts = 0

    def trigger(self, pulse: HapticPulse) -> None:
        self.attempts += 1
        raise RuntimeError("haptic engine unavailable")


@pytest.fixture
def haptic_device():
    return RecordingHapticDevice()


@pytest.fixture
def preferences():
    return InMemoryPreferenceStore()


@pytest.fixture
def dispatcher(haptic_device, preferences):
    return HapticDispatcher(
        device=haptic_device,
        preferences=preferences,
        policy=HapticEscalationPolicy(critical_delay_ms=200),
    )


@pytest.fixture
def error_logger():
    """Mock Logger collaborator."""
    return Mock()


@pytest.fixture
def coordinator(dispatcher, error_logger):
    """Provide a fresh ErrorCoordinator wired to test doubles."""
    return ErrorCoordinator(error_logger=error_logger, haptics=dispatcher)
