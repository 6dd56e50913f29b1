"""
Tests that the bundled collaborators satisfy the protocol shapes the
coordinator depends on.
"""

import inspect

import pytest

from error_coordinator.error_handling import NullHapticDevice
from error_coordinator.logging_config import ErrorEventLogger
from error_coordinator.models.protocols import (
    ErrorLoggerProtocol,
    HapticDeviceProtocol,
    PreferenceStoreProtocol,
)
from error_coordinator.preferences import InMemoryPreferenceStore


def _public_methods(cls):
    return {
        name
        for name, member in inspect.getmembers(cls, inspect.isfunction)
        if not name.startswith("_")
    }


@pytest.mark.parametrize(
    "protocol, implementation",
    [
        (ErrorLoggerProtocol, ErrorEventLogger),
        (HapticDeviceProtocol, NullHapticDevice),
        (PreferenceStoreProtocol, InMemoryPreferenceStore),
    ],
)
def test_implementation_matches_protocol(protocol, implementation):
    required = _public_methods(protocol)
    assert required
    assert required <= _public_methods(implementation)

    for name in required:
        expected = list(inspect.signature(getattr(protocol, name)).parameters)
        actual = list(inspect.signature(getattr(implementation, name)).parameters)
        assert actual == expected, name
