"""Observation context carried into domain probes.

Probes bind an ObservationContext so that every event they emit carries
the same request-scoped metadata without each call site repeating it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Request-scoped metadata attached to probe events.

    Attributes:
        request_id: Correlation id for the inbound request, if any.
        user_id: Authenticated identity (email), if known.
        tenant_id: Resolved tenant id, if known.
        extra: Additional key/value pairs to include verbatim.
    """

    request_id: str | None = None
    user_id: str | None = None
    tenant_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Return non-empty fields as logging kwargs."""
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.tenant_id is not None:
            result["tenant_id"] = self.tenant_id
        result.update(self.extra)
        return result
