"""Client activity tracker.

Keeps the shared last-activity timestamp current while the user is on a
protected page. The timestamp lives in an ActivityStore shared across
tabs, so activity in any tab keeps every tab's session alive.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from activity.application.observability import (
    ActivityTrackerProbe,
    DefaultActivityTrackerProbe,
)
from activity.domain.value_objects import InteractionSignal, TimeoutPolicy
from activity.ports import ActivityStore, Clock, InteractionSource

_TRACKED_EVENTS = frozenset(signal.value for signal in InteractionSignal)


class ActivityTracker:
    """Records user activity into the shared store, throttled.

    A signal is ignored when the current path is not protected, or when
    the stored activity is already older than the inactivity timeout: a
    dead session is only revived by the explicit "stay logged in" action,
    never by a stray event.
    """

    def __init__(
        self,
        store: ActivityStore,
        clock: Clock,
        current_path: Callable[[], str],
        policy: TimeoutPolicy | None = None,
        protected_prefixes: Sequence[str] = ("/dashboard",),
        throttle_ms: int = 1000,
        probe: ActivityTrackerProbe | None = None,
    ):
        """Initialize the tracker.

        Args:
            store: Shared last-activity store.
            clock: Time source.
            current_path: Returns the path of the page currently shown.
            policy: Inactivity policy; only the timeout is used here.
            protected_prefixes: Paths under these prefixes are tracked.
            throttle_ms: Minimum gap between two writes.
            probe: Observability probe.
        """
        self._store = store
        self._clock = clock
        self._current_path = current_path
        self._policy = policy or TimeoutPolicy()
        self._protected_prefixes = tuple(p.rstrip("/") for p in protected_prefixes)
        self._throttle_ms = throttle_ms
        self._probe = probe or DefaultActivityTrackerProbe()
        self._unsubscribers: list[Callable[[], None]] = []
        self._last_write_ms: int | None = None

    @property
    def is_mounted(self) -> bool:
        return bool(self._unsubscribers)

    def mount(self, source: InteractionSource) -> None:
        """Start listening and write a baseline timestamp on protected pages."""
        if self.is_mounted:
            return

        for signal in InteractionSignal:
            self._unsubscribers.append(source.subscribe(signal.value, self.handle_signal))

        path = self._current_path()
        self._probe.tracker_mounted(path=path)
        if self._is_protected(path):
            self._record(self._clock.now_ms())

    def unmount(self) -> None:
        """Remove every listener registered by mount."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self._probe.tracker_unmounted()

    def handle_signal(self, event: str) -> bool:
        """Handle one interaction event.

        Returns:
            True if the event produced a write to the store.
        """
        if event not in _TRACKED_EVENTS:
            return False

        if not self._is_protected(self._current_path()):
            return False

        now = self._clock.now_ms()
        last_activity = self._store.get()
        if last_activity is not None:
            elapsed = now - last_activity
            if self._policy.is_expired(elapsed):
                self._probe.activity_ignored_session_expired(elapsed_ms=elapsed)
                return False

        if (
            self._last_write_ms is not None
            and now - self._last_write_ms < self._throttle_ms
        ):
            return False

        self._record(now)
        return True

    def _is_protected(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix + "/")
            for prefix in self._protected_prefixes
        )

    def _record(self, now: int) -> None:
        self._store.set(now)
        self._last_write_ms = now
        self._probe.activity_recorded(timestamp_ms=now)
