"""Authentication shared kernel module."""

from shared_kernel.auth.observability import (
    DefaultSessionTokenProbe,
    SessionTokenProbe,
)
from shared_kernel.auth.session_token import SessionRecord, SessionTokenService

__all__ = [
    "DefaultSessionTokenProbe",
    "SessionRecord",
    "SessionTokenProbe",
    "SessionTokenService",
]
