"""Value objects for the activity domain.

The inactivity policy is pure arithmetic over one number: milliseconds
elapsed since the last recorded user activity.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum


class TimeoutState(StrEnum):
    """States of the session timeout state machine."""

    ACTIVE = "active"
    WARNING = "warning"
    LOGGING_OUT = "logging_out"


class InteractionSignal(StrEnum):
    """Document-level interaction events that count as user activity."""

    POINTER_DOWN = "pointerdown"
    KEY_DOWN = "keydown"
    SCROLL = "scroll"
    TOUCH_START = "touchstart"


@dataclass(frozen=True)
class TimeoutPolicy:
    """Inactivity thresholds, all in milliseconds.

    Attributes:
        inactivity_timeout_ms: Idle time after which the session is logged out.
        warning_lead_ms: How long before logout the warning is shown.
        presence_active_window_ms: Presence pings only fire while the user
            was active within this window.
        presence_ping_interval_ms: Minimum gap between presence pings.
    """

    inactivity_timeout_ms: int = 5 * 60 * 1000
    warning_lead_ms: int = 20 * 1000
    presence_active_window_ms: int = 60 * 1000
    presence_ping_interval_ms: int = 60 * 1000

    def __post_init__(self) -> None:
        if self.inactivity_timeout_ms <= 0:
            raise ValueError("inactivity_timeout_ms must be positive")
        if not 0 <= self.warning_lead_ms < self.inactivity_timeout_ms:
            raise ValueError(
                f"warning_lead_ms ({self.warning_lead_ms}) must be >= 0 and < "
                f"inactivity_timeout_ms ({self.inactivity_timeout_ms})"
            )

    @property
    def warning_threshold_ms(self) -> int:
        return self.inactivity_timeout_ms - self.warning_lead_ms

    def is_expired(self, elapsed_ms: int) -> bool:
        return elapsed_ms >= self.inactivity_timeout_ms

    def state_for(self, elapsed_ms: int) -> TimeoutState:
        """Map elapsed idle time to the state it implies."""
        if self.is_expired(elapsed_ms):
            return TimeoutState.LOGGING_OUT
        if elapsed_ms >= self.warning_threshold_ms:
            return TimeoutState.WARNING
        return TimeoutState.ACTIVE

    def remaining_seconds(self, elapsed_ms: int) -> int:
        """Whole seconds left before logout, rounded up, never negative."""
        return max(0, math.ceil((self.inactivity_timeout_ms - elapsed_ms) / 1000))
