"""Session timeout state machine.

Reconciles the session against the shared last-activity timestamp once
per tick::

    elapsed >= T          -> LOGGING_OUT (terminal; logout + redirect)
    T - W <= elapsed < T  -> WARNING (countdown shown)
    elapsed < T - W       -> ACTIVE (presence pings while recently active)

Network calls (logout, presence) run as detached asyncio tasks. The tick
never awaits them, so a slow server cannot stretch the tick cadence, and
their failures are logged through the probe and otherwise ignored.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

from activity.application.observability import (
    DefaultSessionTimeoutProbe,
    SessionTimeoutProbe,
)
from activity.domain.value_objects import TimeoutPolicy, TimeoutState
from activity.ports import ActivityStore, Clock, Navigator, SessionGateway
from shared_kernel.middleware.tenant_context import DEFAULT_TENANT_ID


class SessionTimeoutMachine:
    """Drives warning and forced logout from the shared activity timestamp."""

    def __init__(
        self,
        store: ActivityStore,
        clock: Clock,
        gateway: SessionGateway,
        navigator: Navigator,
        agency_id: str,
        policy: TimeoutPolicy | None = None,
        tick_interval_seconds: float = 1.0,
        login_path: str = "/login",
        probe: SessionTimeoutProbe | None = None,
    ):
        """Initialize the state machine.

        Args:
            store: Shared last-activity store, read on every tick.
            clock: Time source.
            gateway: Logout and presence calls.
            navigator: Performs the forced redirect to the login page.
            agency_id: Tenant id of the session; presence pings are skipped
                for the default tenant.
            policy: Timeout, warning and presence thresholds.
            tick_interval_seconds: Delay between ticks.
            login_path: Login entry point used for the forced redirect.
            probe: Observability probe.
        """
        self._store = store
        self._clock = clock
        self._gateway = gateway
        self._navigator = navigator
        self._agency_id = agency_id
        self._policy = policy or TimeoutPolicy()
        self._tick_interval = tick_interval_seconds
        self._login_path = login_path
        self._probe = probe or DefaultSessionTimeoutProbe()

        self._state = TimeoutState.ACTIVE
        self._remaining_seconds: int | None = None
        self._last_ping_ms: int | None = None
        self._tick_task: asyncio.Task[None] | None = None
        self._background_tasks: set[asyncio.Task[Any]] = set()

    @property
    def state(self) -> TimeoutState:
        return self._state

    @property
    def remaining_seconds(self) -> int | None:
        """Countdown shown in the warning dialog; None outside WARNING."""
        return self._remaining_seconds

    @property
    def is_running(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    def mount(self) -> None:
        """Seed the store if empty and start ticking.

        Must be called from within a running event loop.
        """
        if self.is_running:
            return

        if self._store.get() is None:
            self._store.set(self._clock.now_ms())

        self._state = TimeoutState.ACTIVE
        self._remaining_seconds = None
        self._tick_task = asyncio.get_running_loop().create_task(self._run())
        self._probe.monitor_started(agency_id=self._agency_id)

    def unmount(self) -> None:
        """Stop ticking.

        An in-flight logout is left to finish: it is not cancelled.
        """
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None
        self._probe.monitor_stopped()

    async def drain(self) -> None:
        """Wait for detached logout and presence tasks to finish."""
        while self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    async def _run(self) -> None:
        while self._state is not TimeoutState.LOGGING_OUT:
            await asyncio.sleep(self._tick_interval)
            try:
                self.tick()
            except Exception as e:
                self._probe.tick_failed(error=e)

    def tick(self) -> TimeoutState:
        """Reconcile state against the store once.

        Returns:
            The state after this tick.
        """
        if self._state is TimeoutState.LOGGING_OUT:
            return self._state

        now = self._clock.now_ms()
        last_activity = self._store.get()
        elapsed = 0 if last_activity is None else now - last_activity

        next_state = self._policy.state_for(elapsed)

        if next_state is TimeoutState.LOGGING_OUT:
            self._begin_logout(reason="timeout")
        elif next_state is TimeoutState.WARNING:
            self._remaining_seconds = self._policy.remaining_seconds(elapsed)
            if self._state is not TimeoutState.WARNING:
                self._state = TimeoutState.WARNING
                self._probe.warning_started(remaining_seconds=self._remaining_seconds)
        else:
            if self._state is TimeoutState.WARNING:
                self._probe.warning_cleared()
            self._state = TimeoutState.ACTIVE
            self._remaining_seconds = None
            self._maybe_ping_presence(now=now, elapsed=elapsed)

        return self._state

    def stay_logged_in(self) -> None:
        """Explicitly extend the session.

        Writes a fresh activity timestamp and returns to ACTIVE even if the
        timeout has already elapsed but not yet been acted on. Has no
        effect once logout has started.
        """
        if self._state is TimeoutState.LOGGING_OUT:
            return

        self._store.set(self._clock.now_ms())
        self._state = TimeoutState.ACTIVE
        self._remaining_seconds = None
        self._probe.session_extended()

    def log_out_now(self) -> None:
        """Explicitly end the session immediately."""
        self._begin_logout(reason="manual")

    def _begin_logout(self, reason: str) -> None:
        if self._state is TimeoutState.LOGGING_OUT:
            return

        self._state = TimeoutState.LOGGING_OUT
        self._remaining_seconds = None
        self._probe.logout_started(reason=reason)

        url = self._login_path
        if reason == "timeout":
            url = f"{self._login_path}?reason=timeout"
        self._spawn(self._logout_and_redirect(url))

    async def _logout_and_redirect(self, url: str) -> None:
        try:
            if not await self._gateway.logout():
                self._probe.logout_call_unsuccessful()
        except Exception as e:
            self._probe.logout_call_failed(error=e)
        finally:
            # Redirect even when the logout call failed
            self._navigator.navigate(url)

    def _maybe_ping_presence(self, now: int, elapsed: int) -> None:
        if self._agency_id == DEFAULT_TENANT_ID:
            return
        if elapsed >= self._policy.presence_active_window_ms:
            return
        if (
            self._last_ping_ms is not None
            and now - self._last_ping_ms < self._policy.presence_ping_interval_ms
        ):
            return

        self._last_ping_ms = now
        self._spawn(self._ping_presence())

    async def _ping_presence(self) -> None:
        try:
            await self._gateway.ping_presence(self._agency_id)
        except Exception as e:
            self._probe.presence_ping_failed(agency_id=self._agency_id, error=e)
        else:
            self._probe.presence_ping_sent(agency_id=self._agency_id)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
