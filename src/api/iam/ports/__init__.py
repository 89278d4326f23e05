"""Ports (interfaces) for IAM bounded context."""

from iam.ports.exceptions import UserDirectoryError
from iam.ports.repositories import IPresenceRegistry, IUserDirectory

__all__ = [
    "IPresenceRegistry",
    "IUserDirectory",
    "UserDirectoryError",
]
