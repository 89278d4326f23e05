"""Infrastructure adapters for the activity bounded context."""

from activity.infrastructure.activity_store import (
    FileActivityStore,
    InMemoryActivityStore,
)
from activity.infrastructure.clock import SystemClock
from activity.infrastructure.http_gateway import HttpSessionGateway
from activity.infrastructure.interaction_bus import InteractionBus

__all__ = [
    "FileActivityStore",
    "HttpSessionGateway",
    "InMemoryActivityStore",
    "InteractionBus",
    "SystemClock",
]
