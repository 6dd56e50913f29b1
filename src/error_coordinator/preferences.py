"""
In-memory preference store used when the host application does not supply one.
"""

import logging
import threading
from typing import Dict, Optional

from . import config
from .models.protocols import PreferenceStoreProtocol

logger = logging.getLogger(__name__)


class InMemoryPreferenceStore:
    """Process-local key-value store for boolean preferences."""

    def __init__(self, initial: Optional[Dict[str, bool]] = None):
        self._values: Dict[str, bool] = dict(initial or {})
        self._lock = threading.Lock()

    def get_bool(self, key: str, default: bool) -> bool:
        with self._lock:
            return self._values.get(key, default)

    def set_bool(self, key: str, value: bool) -> None:
        with self._lock:
            self._values[key] = bool(value)
        logger.debug(f"Preference '{key}' set to {value}")


def haptics_enabled(store: PreferenceStoreProtocol) -> bool:
    """Whether haptic feedback is on; unset means the configured default."""
    return store.get_bool(config.HAPTICS_PREFERENCE_KEY, config.HAPTICS_ENABLED_DEFAULT)


def set_haptics_enabled(store: PreferenceStoreProtocol, enabled: bool) -> None:
    store.set_bool(config.HAPTICS_PREFERENCE_KEY, enabled)
