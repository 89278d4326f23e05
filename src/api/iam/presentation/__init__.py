"""Presentation layer for IAM bounded context."""

from iam.presentation.routes import auth_router, router

__all__ = ["auth_router", "router"]
