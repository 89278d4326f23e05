"""Composition helpers for the activity bounded context.

Builds a SessionMonitor for one protected page from settings, wiring the
tracker and the timeout state machine to the same activity store.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from activity.application import ActivityTracker, SessionMonitor, SessionTimeoutMachine
from activity.domain.value_objects import TimeoutPolicy
from activity.infrastructure import (
    FileActivityStore,
    HttpSessionGateway,
    InteractionBus,
    SystemClock,
)
from activity.ports import ActivityStore, Clock, InteractionSource, Navigator, SessionGateway
from infrastructure.settings import (
    SessionTimeoutSettings,
    get_session_timeout_settings,
    get_settings,
)


def timeout_policy_from_settings(settings: SessionTimeoutSettings) -> TimeoutPolicy:
    """Convert second-based settings to a millisecond policy."""
    return TimeoutPolicy(
        inactivity_timeout_ms=settings.inactivity_timeout_seconds * 1000,
        warning_lead_ms=settings.warning_lead_seconds * 1000,
        presence_ping_interval_ms=settings.presence_ping_interval_seconds * 1000,
    )


def create_activity_store(settings: SessionTimeoutSettings) -> FileActivityStore:
    """Shared file-backed store for every process of the same user."""
    return FileActivityStore(
        directory=Path(settings.activity_store_dir),
        key=settings.activity_store_key,
    )


def create_session_monitor(
    agency_id: str,
    current_path: Callable[[], str],
    navigator: Navigator,
    settings: SessionTimeoutSettings | None = None,
    store: ActivityStore | None = None,
    clock: Clock | None = None,
    gateway: SessionGateway | None = None,
    source: InteractionSource | None = None,
    session_token: str | None = None,
) -> SessionMonitor:
    """Build a SessionMonitor for a protected page.

    Args:
        agency_id: Tenant id of the authenticated session.
        current_path: Returns the path currently displayed.
        navigator: Performs the forced redirect.
        settings: Timeout settings (defaults to environment settings).
        store: Activity store (defaults to the file-backed store).
        clock: Time source (defaults to the system clock).
        gateway: Logout/presence gateway (defaults to HTTP).
        source: Interaction source (defaults to a new InteractionBus).
        session_token: Session cookie value sent by the default HTTP
            gateway. Ignored when a gateway is passed in.

    Returns:
        An unmounted SessionMonitor. When the HTTP gateway is built here,
        SessionMonitor.aclose closes it.
    """
    settings = settings or get_session_timeout_settings()
    policy = timeout_policy_from_settings(settings)
    store = store or create_activity_store(settings)
    clock = clock or SystemClock()
    on_close = None
    if gateway is None:
        cookies = None
        if session_token:
            cookies = {get_settings().auth.session_cookie_name: session_token}
        http_gateway = HttpSessionGateway(
            base_url=settings.api_base_url,
            logout_endpoint=settings.logout_endpoint,
            presence_endpoint=settings.presence_endpoint,
            cookies=cookies,
        )
        gateway = http_gateway
        on_close = http_gateway.aclose

    tracker = ActivityTracker(
        store=store,
        clock=clock,
        current_path=current_path,
        policy=policy,
        protected_prefixes=settings.protected_path_prefixes,
        throttle_ms=int(settings.activity_throttle_seconds * 1000),
    )
    machine = SessionTimeoutMachine(
        store=store,
        clock=clock,
        gateway=gateway,
        navigator=navigator,
        agency_id=agency_id,
        policy=policy,
        tick_interval_seconds=settings.tick_interval_seconds,
        login_path=settings.login_path,
    )
    return SessionMonitor(
        tracker=tracker,
        machine=machine,
        source=source or InteractionBus(),
        on_close=on_close,
    )
