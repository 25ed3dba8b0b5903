"""FastAPI application entrypoint for DevFlow."""

import logging

from fastapi import FastAPI

from devflow.api.accounts import router as accounts_router
from devflow.api.auth import router as auth_router
from devflow.api.users import router as users_router
from devflow.core.config import get_settings
from devflow.core.handlers import register_error_handlers
from devflow.core.logging import configure_logging
from devflow.db import models as _models  # noqa: F401

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the API with logging, error envelopes and all routers attached."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting DevFlow API with settings=%s", settings.safe_for_logging())

    application = FastAPI(title="DevFlow")
    register_error_handlers(application)
    application.include_router(auth_router)
    application.include_router(users_router)
    application.include_router(accounts_router)

    @application.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint for service readiness."""
        return {"status": "ok"}

    return application


app = create_app()
