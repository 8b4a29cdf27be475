"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import get_int_env, load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Integer setting, read after `.env` files are loaded.
    """

    _load_env_once()
    return get_int_env(name, default)


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class BulkImportSettings:
    """
    Runtime settings for bulk CSV report imports.

    progress_interval: persist a progress snapshot every N processed rows
    (the last row is always persisted).
    """

    progress_interval: int = 10
    upload_dir: str = "data/uploads"
    max_upload_bytes: int = 50 * 1024 * 1024
    max_errors_logged: int = 20


@lru_cache(maxsize=1)
def get_bulk_import_settings() -> BulkImportSettings:
    """
    Return cached bulk import settings from environment variables.
    """

    return BulkImportSettings(
        progress_interval=max(1, _get_int_env("BULK_IMPORT_PROGRESS_INTERVAL", 10)),
        upload_dir=_get_str_env("UPLOAD_STORAGE_DIR", "data/uploads"),
        max_upload_bytes=max(1, _get_int_env("UPLOAD_MAX_BYTES", 50 * 1024 * 1024)),
        max_errors_logged=max(0, _get_int_env("BULK_IMPORT_MAX_ERRORS_LOGGED", 20)),
    )


def get_log_level() -> str:
    return _get_str_env("LOG_LEVEL", "INFO").upper()
