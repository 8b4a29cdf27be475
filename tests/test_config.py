from __future__ import annotations

import pytest

from app.config import _get_int_env
from db.config import get_bool_env, get_int_env, normalize_postgres_url


def test_int_env_reads_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DB_POOL_SIZE", "12")

    assert get_int_env("DB_POOL_SIZE", 5) == 12


def test_int_env_falls_back_on_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BULK_IMPORT_PROGRESS_INTERVAL", "ten")

    assert get_int_env("BULK_IMPORT_PROGRESS_INTERVAL", 10) == 10
    assert _get_int_env("BULK_IMPORT_PROGRESS_INTERVAL", 10) == 10


def test_app_int_setting_uses_shared_reader(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPLOAD_MAX_BYTES", "2048")

    assert _get_int_env("UPLOAD_MAX_BYTES", 1) == 2048


@pytest.mark.parametrize(("raw", "expected"), [("true", True), (" ON ", True), ("0", False), ("", False)])
def test_bool_env(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("SQL_ECHO", raw)

    assert get_bool_env("SQL_ECHO") is expected


def test_postgres_urls_use_psycopg_driver() -> None:
    assert normalize_postgres_url("postgres://u:p@h/db") == "postgresql+psycopg://u:p@h/db"
    assert normalize_postgres_url("postgresql://u:p@h/db") == "postgresql+psycopg://u:p@h/db"
    assert normalize_postgres_url("postgresql+psycopg://u@h/db") == "postgresql+psycopg://u@h/db"
