"""
Haptic escalation by severity.

HapticEscalationPolicy decides which pulses a severity gets; HapticDispatcher
plays them on an injected device. Delayed pulses are scheduled on the running
event loop, or on a timer thread outside one, and are never cancelled once
scheduled. Preference and device failures are logged and dropped.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .. import config
from ..models.protocols import HapticDeviceProtocol, PreferenceStoreProtocol
from ..preferences import InMemoryPreferenceStore, haptics_enabled
from .error_context import ErrorSeverity

logger = logging.getLogger(__name__)


class HapticPulse(str, Enum):
    """Pulse kinds supported by the haptic device."""

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    SELECTION = "selection"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class HapticStep:
    """One pulse, fired `delay` seconds after the pattern starts."""

    pulse: HapticPulse
    delay: float = 0.0


HapticPattern = Tuple[HapticStep, ...]


class HapticEscalationPolicy:
    """Maps severities to haptic patterns."""

    def __init__(self, critical_delay_ms: int = config.CRITICAL_PULSE_DELAY_MS):
        if critical_delay_ms < 0:
            raise ValueError("critical_delay_ms must not be negative")
        self.critical_delay = critical_delay_ms / 1000.0
        self._patterns: Dict[ErrorSeverity, HapticPattern] = {
            ErrorSeverity.LOW: (HapticStep(HapticPulse.LIGHT),),
            ErrorSeverity.MEDIUM: (HapticStep(HapticPulse.WARNING),),
            ErrorSeverity.HIGH: (HapticStep(HapticPulse.ERROR),),
            # Double error pulse for critical issues
            ErrorSeverity.CRITICAL: (
                HapticStep(HapticPulse.ERROR),
                HapticStep(HapticPulse.ERROR, self.critical_delay),
            ),
        }

    def pattern_for(self, severity: ErrorSeverity) -> HapticPattern:
        return self._patterns[severity]


class NullHapticDevice:
    """Device stand-in for hosts without haptic hardware."""

    def trigger(self, pulse: HapticPulse) -> None:
        logger.debug(f"Haptic pulse '{pulse.value}' (no device)")


class HapticDispatcher:
    """Plays haptic patterns on a device, honoring the haptics preference."""

    def __init__(
        self,
        device: Optional[HapticDeviceProtocol] = None,
        preferences: Optional[PreferenceStoreProtocol] = None,
        policy: Optional[HapticEscalationPolicy] = None,
    ):
        self.device = device or NullHapticDevice()
        self.preferences = preferences or InMemoryPreferenceStore()
        self.policy = policy or HapticEscalationPolicy()

    def dispatch(self, severity: ErrorSeverity) -> None:
        """Fire-and-forget the pattern for a severity."""
        self.play(self.policy.pattern_for(severity))

    def play(self, pattern: HapticPattern) -> None:
        if not self._enabled():
            logger.debug("Haptics disabled, skipping pattern")
            return

        for step in pattern:
            if step.delay <= 0:
                self._trigger(step.pulse)
            else:
                self._schedule(step)

    def _schedule(self, step: HapticStep) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            timer = threading.Timer(step.delay, self._fire, args=(step.pulse,))
            timer.daemon = True
            timer.start()
            return
        loop.call_later(step.delay, self._fire, step.pulse)

    def _enabled(self) -> bool:
        try:
            return haptics_enabled(self.preferences)
        except Exception as e:
            logger.debug(f"Haptics preference unreadable, skipping: {e}")
            return False

    def _fire(self, pulse: HapticPulse) -> None:
        # Delayed pulses honor the preference at fire time
        if self._enabled():
            self._trigger(pulse)

    def _trigger(self, pulse: HapticPulse) -> None:
        try:
            self.device.trigger(pulse)
        except Exception as e:
            logger.debug(f"Haptic pulse '{pulse.value}' not delivered: {e}")
