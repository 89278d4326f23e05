"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.access_control_probe import (
    AccessControlProbe,
    DefaultAccessControlProbe,
)
from iam.application.observability.presence_service_probe import (
    DefaultPresenceServiceProbe,
    PresenceServiceProbe,
)

__all__ = [
    "AccessControlProbe",
    "DefaultAccessControlProbe",
    "PresenceServiceProbe",
    "DefaultPresenceServiceProbe",
]
