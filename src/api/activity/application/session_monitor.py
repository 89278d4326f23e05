"""Session monitor: mounts the activity tracker and the timeout machine together."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from activity.application.activity_tracker import ActivityTracker
from activity.application.session_timeout import SessionTimeoutMachine
from activity.domain.value_objects import TimeoutState
from activity.ports import InteractionSource


class SessionMonitor:
    """Lifecycle wrapper for a protected page's session handling.

    The tracker is mounted first so a freshly loaded protected page has
    written its baseline timestamp before the state machine seeds from it.
    """

    def __init__(
        self,
        tracker: ActivityTracker,
        machine: SessionTimeoutMachine,
        source: InteractionSource,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ):
        self._tracker = tracker
        self._machine = machine
        self._source = source
        self._on_close = on_close

    @property
    def state(self) -> TimeoutState:
        return self._machine.state

    @property
    def remaining_seconds(self) -> int | None:
        return self._machine.remaining_seconds

    def mount(self) -> None:
        self._tracker.mount(self._source)
        self._machine.mount()

    def unmount(self) -> None:
        self._tracker.unmount()
        self._machine.unmount()

    def tick(self) -> TimeoutState:
        return self._machine.tick()

    def stay_logged_in(self) -> None:
        self._machine.stay_logged_in()

    def log_out_now(self) -> None:
        self._machine.log_out_now()

    async def drain(self) -> None:
        await self._machine.drain()

    async def aclose(self) -> None:
        """Stop the monitor and release what it owns.

        Unmounts, waits for in-flight logout and presence calls, and only
        then runs the close callback (the HTTP gateway built by
        create_session_monitor).
        """
        self.unmount()
        await self.drain()
        if self._on_close is not None:
            on_close, self._on_close = self._on_close, None
            await on_close()
