"""Application layer for the activity bounded context."""

from activity.application.activity_tracker import ActivityTracker
from activity.application.session_monitor import SessionMonitor
from activity.application.session_timeout import SessionTimeoutMachine

__all__ = [
    "ActivityTracker",
    "SessionMonitor",
    "SessionTimeoutMachine",
]
