from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from label_import.config import get_label_import_settings, get_project_directory_settings, load_env_files

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Log the effective import settings on boot; drop the cached project directory on exit."""
    from label_import.connectors.project_directory import get_project_directory_cache

    settings = get_label_import_settings()
    directory = get_project_directory_settings()
    logger.info(
        "Label import starting max_submission_rows=%s max_diagnostics=%s preserve_unknown_chain=%s "
        "projects_enabled=%s projects_ttl_seconds=%s",
        settings.max_submission_rows,
        settings.max_diagnostics,
        settings.preserve_unknown_chain,
        directory.enabled,
        directory.ttl_seconds,
    )
    try:
        yield
    finally:
        get_project_directory_cache().invalidate()
        logger.info("Project directory cache released")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    _configure_logging()

    application = FastAPI(
        title="Label Import API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from label_import.api.routers import labels_router, projects_router

    application.include_router(labels_router)
    application.include_router(projects_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
