"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from iam.presentation import auth_router, router as iam_router
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from shared_kernel.middleware import TenantResolverMiddleware


@asynccontextmanager
async def referralflow_lifespan(app: FastAPI):
    """Application lifespan context.

    Logs startup with the tenancy environment the gatekeeper runs in.
    """
    logger = structlog.get_logger()
    tenancy = get_settings().tenancy
    logger.info(
        "application_started",
        version=__version__,
        environment=tenancy.environment,
    )

    yield

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Build the FastAPI application.

    The tenant gatekeeper wraps every route, so handlers always see a
    resolved ``x-agency-id`` header and ``request.state.tenant``.
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)

    application = FastAPI(
        title=settings.app_name,
        description="Multi-tenant referral management for healthcare agencies",
        version=__version__,
        lifespan=referralflow_lifespan,
    )

    application.add_middleware(
        TenantResolverMiddleware,
        settings=settings.tenancy,
    )

    application.include_router(auth_router)
    application.include_router(iam_router)

    @application.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    return application


app = create_app()
