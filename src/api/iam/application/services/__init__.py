"""Application services for IAM bounded context.

Application services orchestrate domain value objects and ports to
fulfill use cases. They are the "front door" to the IAM context.
"""

from iam.application.services.access_control_service import AccessControlService
from iam.application.services.presence_service import PresenceService

__all__ = [
    "AccessControlService",
    "PresenceService",
]
