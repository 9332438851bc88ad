"""
sitio_tracker/main.py

FastAPI application entry point.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db() -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text

    from db.session import SessionLocal

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Confirm DB connectivity and create missing tables on boot."""
    from db.session import init_db

    _check_db()
    init_db()
    logging.getLogger(__name__).info("Database connectivity confirmed")
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    from db.config import load_env_files

    load_env_files()
    _configure_logging()

    application = FastAPI(
        title="Sitio Tracker API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from sitio_tracker.api.routers import planning_router, sitio_import_router

    application.include_router(sitio_import_router)
    application.include_router(planning_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
