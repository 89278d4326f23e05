"""Domain layer for the activity bounded context."""

from activity.domain.value_objects import InteractionSignal, TimeoutPolicy, TimeoutState

__all__ = [
    "InteractionSignal",
    "TimeoutPolicy",
    "TimeoutState",
]
