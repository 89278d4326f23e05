"""Ports for the activity bounded context.

The tracker and the timeout state machine never touch wall-clock time,
persisted storage, the network or page navigation directly; each is an
injectable capability so tests can drive them deterministically.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time."""

    def now_ms(self) -> int:
        """Milliseconds since the Unix epoch."""
        ...


@runtime_checkable
class ActivityStore(Protocol):
    """Single shared last-activity timestamp.

    Shared by every tab (process) of one browser profile (user); writes
    are last-writer-wins.
    """

    def get(self) -> int | None:
        """Return the stored timestamp in ms, or None if never written."""
        ...

    def set(self, timestamp_ms: int) -> None:
        """Overwrite the stored timestamp."""
        ...


class SessionGateway(Protocol):
    """Outbound calls made on behalf of the session."""

    async def logout(self) -> bool:
        """Ask the server to clear the session. Returns its success flag."""
        ...

    async def ping_presence(self, agency_id: str) -> None:
        """Mark the current identity online for an agency."""
        ...


class Navigator(Protocol):
    """Forces the client to another location."""

    def navigate(self, url: str) -> None:
        ...


class InteractionSource(Protocol):
    """Document-level event source the tracker listens on."""

    def subscribe(self, event: str, handler: Callable[[str], None]) -> Callable[[], None]:
        """Register handler for event; returns a callable that unregisters it."""
        ...
