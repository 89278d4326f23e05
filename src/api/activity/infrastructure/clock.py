"""Wall-clock implementation of the Clock port."""

from __future__ import annotations

import time


class SystemClock:
    """Clock backed by time.time_ns()."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000
