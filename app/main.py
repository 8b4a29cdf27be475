from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from pydantic import BaseModel

logger = logging.getLogger(__name__)

_POSITIVE_INT_VARIABLES = ("BULK_IMPORT_PROGRESS_INTERVAL", "UPLOAD_MAX_BYTES")


class HealthResponse(BaseModel):
    status: str


def _validate_env() -> None:
    """
    Check configuration before anything connects.

    Collects every problem and raises one RuntimeError so the operator can
    fix them all in a single restart.
    """

    from db.config import get_database_settings, load_env_files

    load_env_files()
    errors: list[str] = []

    try:
        get_database_settings()
    except RuntimeError as exc:
        errors.append(str(exc))

    for name in _POSITIVE_INT_VARIABLES:
        raw = os.getenv(name, "").strip()
        if raw and (not raw.isdigit() or int(raw) < 1):
            errors.append(f"{name}='{raw}' is not valid. It must be a positive integer.")

    if errors:
        raise RuntimeError(
            "Startup validation failed. Missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    from app.config import get_log_level

    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db() -> None:
    """Run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text

    from db.session import get_engine

    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def _check_schema() -> None:
    """
    Abort startup when a mapped table is missing. Never migrates.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401
    from db.base import Base
    from db.session import get_engine

    missing = sorted(set(Base.metadata.tables) - set(sa_inspect(get_engine()).get_table_names()))
    if missing:
        logger.critical(
            "Schema mismatch: table(s) %s absent from the database. "
            "Run 'alembic upgrade head' and restart.",
            ", ".join(missing),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(missing)}). Run migrations and restart."
        )


def _prepare_upload_dir() -> None:
    from app.config import get_bulk_import_settings

    upload_dir = Path(get_bulk_import_settings().upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Bulk import uploads stored in %s", upload_dir.resolve())


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    _check_db()
    logger.info("Database connectivity confirmed")
    _check_schema()
    logger.info("Database schema validated")
    _prepare_upload_dir()
    yield


def create_app() -> FastAPI:
    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="NGO Reporting API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import bulk_import_router, dashboard_router, reports_router

    for router in (reports_router, bulk_import_router, dashboard_router):
        application.include_router(router, prefix="/api")

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok")

    return application


app = create_app()
