"""
Severity to presentation tier mapping.
"""

from enum import Enum
from typing import NamedTuple

from .error_context import ErrorSeverity


class PresentationTier(str, Enum):
    """How the presentation layer shows an error."""

    ALERT = "alert"  # blocks interaction until acknowledged or retried
    BANNER = "banner"  # non-blocking, auto-dismissible


class BannerStyle(NamedTuple):
    icon: str
    tone: str


_TIERS = {
    ErrorSeverity.LOW: PresentationTier.BANNER,
    ErrorSeverity.MEDIUM: PresentationTier.BANNER,
    ErrorSeverity.HIGH: PresentationTier.ALERT,
    ErrorSeverity.CRITICAL: PresentationTier.ALERT,
}

_STYLES = {
    ErrorSeverity.LOW: BannerStyle("info.circle.fill", "info"),
    ErrorSeverity.MEDIUM: BannerStyle("exclamationmark.triangle.fill", "warning"),
    ErrorSeverity.HIGH: BannerStyle("xmark.octagon.fill", "danger"),
    ErrorSeverity.CRITICAL: BannerStyle("xmark.octagon.fill", "danger"),
}


class PresentationPolicy:
    """Deterministic presentation decisions per severity."""

    def tier_for(self, severity: ErrorSeverity) -> PresentationTier:
        return _TIERS[severity]

    def style_for(self, severity: ErrorSeverity) -> BannerStyle:
        """Icon and tone hints for rendering an error of this severity."""
        return _STYLES[severity]

    def is_blocking(self, severity: ErrorSeverity) -> bool:
        return self.tier_for(severity) is PresentationTier.ALERT
