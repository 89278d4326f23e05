"""Unit tests for ActivityTracker.

The tracker writes the shared last-activity timestamp on user
interaction, throttled, and only on protected pages of a live session.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from activity.application import ActivityTracker
from activity.application.observability import ActivityTrackerProbe
from activity.domain.value_objects import InteractionSignal
from activity.infrastructure import InMemoryActivityStore, InteractionBus


class CountingStore(InMemoryActivityStore):
    """In-memory store that counts writes."""

    def __init__(self, initial: int | None = None) -> None:
        super().__init__(initial)
        self.writes: list[int] = []

    def set(self, timestamp_ms: int) -> None:
        self.writes.append(timestamp_ms)
        super().set(timestamp_ms)


class CurrentPath:
    def __init__(self, path: str) -> None:
        self.path = path

    def __call__(self) -> str:
        return self.path


@pytest.fixture
def mock_probe() -> MagicMock:
    """Create a mock activity tracker probe."""
    return MagicMock(spec=ActivityTrackerProbe)


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def current_path() -> CurrentPath:
    return CurrentPath("/dashboard/referrals")


@pytest.fixture
def tracker(
    store: CountingStore, clock, current_path: CurrentPath, mock_probe: MagicMock
) -> ActivityTracker:
    return ActivityTracker(
        store=store,
        clock=clock,
        current_path=current_path,
        probe=mock_probe,
    )


class TestMount:
    """Tests for mounting and unmounting listeners."""

    def test_subscribes_every_interaction_signal(
        self, tracker: ActivityTracker, interaction_bus: InteractionBus
    ) -> None:
        tracker.mount(interaction_bus)

        assert tracker.is_mounted is True
        for signal in InteractionSignal:
            assert interaction_bus.listener_count(signal.value) == 1

    def test_writes_baseline_on_protected_page(
        self,
        tracker: ActivityTracker,
        interaction_bus: InteractionBus,
        store: CountingStore,
        clock,
    ) -> None:
        tracker.mount(interaction_bus)

        assert store.writes == [clock.now_ms()]

    def test_no_baseline_on_public_page(
        self,
        tracker: ActivityTracker,
        interaction_bus: InteractionBus,
        store: CountingStore,
        current_path: CurrentPath,
    ) -> None:
        current_path.path = "/refer"

        tracker.mount(interaction_bus)

        assert store.writes == []

    def test_mount_twice_does_not_double_subscribe(
        self, tracker: ActivityTracker, interaction_bus: InteractionBus
    ) -> None:
        tracker.mount(interaction_bus)
        tracker.mount(interaction_bus)

        assert interaction_bus.listener_count() == len(InteractionSignal)

    def test_unmount_removes_all_listeners(
        self,
        tracker: ActivityTracker,
        interaction_bus: InteractionBus,
        store: CountingStore,
        clock,
    ) -> None:
        tracker.mount(interaction_bus)
        tracker.unmount()
        clock.advance(seconds=5)

        interaction_bus.dispatch("keydown")

        assert interaction_bus.listener_count() == 0
        assert tracker.is_mounted is False
        assert len(store.writes) == 1


class TestThrottle:
    """At most one write per throttle window."""

    def test_burst_of_events_writes_once(
        self,
        tracker: ActivityTracker,
        interaction_bus: InteractionBus,
        store: CountingStore,
        clock,
    ) -> None:
        tracker.mount(interaction_bus)
        clock.advance(seconds=2)
        burst_start = clock.now_ms()

        for i in range(100):
            interaction_bus.dispatch(("pointerdown", "keydown", "scroll", "touchstart")[i % 4])
            clock.advance(ms=5)

        assert store.writes[1:] == [burst_start]

    def test_writes_again_after_window(
        self, tracker: ActivityTracker, store: CountingStore, clock
    ) -> None:
        assert tracker.handle_signal("keydown") is True
        clock.advance(ms=999)
        assert tracker.handle_signal("keydown") is False
        clock.advance(ms=1)
        assert tracker.handle_signal("keydown") is True

        assert len(store.writes) == 2

    def test_custom_throttle(self, store: CountingStore, clock, current_path: CurrentPath) -> None:
        tracker = ActivityTracker(
            store=store, clock=clock, current_path=current_path, throttle_ms=0
        )

        assert tracker.handle_signal("scroll") is True
        assert tracker.handle_signal("scroll") is True


class TestIgnoredSignals:
    """Signals that never produce a write."""

    @pytest.mark.parametrize("path", ["/", "/login", "/refer", "/dashboardx", "/super-admin"])
    def test_unprotected_paths(
        self,
        path: str,
        tracker: ActivityTracker,
        store: CountingStore,
        current_path: CurrentPath,
    ) -> None:
        current_path.path = path

        assert tracker.handle_signal("keydown") is False
        assert store.writes == []

    def test_protected_prefix_exact_match(
        self, tracker: ActivityTracker, current_path: CurrentPath
    ) -> None:
        current_path.path = "/dashboard"

        assert tracker.handle_signal("keydown") is True

    def test_untracked_event(self, tracker: ActivityTracker, store: CountingStore) -> None:
        assert tracker.handle_signal("mousemove") is False
        assert store.writes == []

    def test_expired_session_is_not_revived(
        self, tracker: ActivityTracker, store: CountingStore, clock, mock_probe: MagicMock
    ) -> None:
        store.set(clock.now_ms())
        store.writes.clear()
        clock.advance(seconds=301)

        assert tracker.handle_signal("pointerdown") is False
        assert store.writes == []
        mock_probe.activity_ignored_session_expired.assert_called_once_with(elapsed_ms=301_000)

    def test_exactly_at_timeout_is_expired(
        self, tracker: ActivityTracker, store: CountingStore, clock
    ) -> None:
        store.set(clock.now_ms())
        clock.advance(seconds=300)

        assert tracker.handle_signal("pointerdown") is False

    def test_recent_activity_from_other_tab_keeps_session_live(
        self, tracker: ActivityTracker, store: CountingStore, clock
    ) -> None:
        store.set(clock.now_ms())
        clock.advance(seconds=299)

        assert tracker.handle_signal("pointerdown") is True
        assert store.get() == clock.now_ms()
