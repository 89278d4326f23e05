"""Ports (interfaces) for the activity bounded context."""

from activity.ports.protocols import (
    ActivityStore,
    Clock,
    InteractionSource,
    Navigator,
    SessionGateway,
)

__all__ = [
    "ActivityStore",
    "Clock",
    "InteractionSource",
    "Navigator",
    "SessionGateway",
]
