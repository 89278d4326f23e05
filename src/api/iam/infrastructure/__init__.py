"""Infrastructure adapters for IAM bounded context."""

from iam.infrastructure.presence_registry import InMemoryPresenceRegistry
from iam.infrastructure.user_directory import InMemoryUserDirectory

__all__ = [
    "InMemoryPresenceRegistry",
    "InMemoryUserDirectory",
]
