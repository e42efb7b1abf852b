import os
import uuid
from collections.abc import Generator
from importlib import resources
from typing import Any

import psycopg
import pytest

from prospect_intel.config.settings import Settings
from prospect_intel.database.connection import close_pool, get_connection, init_pool

_SCAN_TABLES = (
    "scan_jobs",
    "scan_status",
    "scan_recognition_results",
    "scan_entities",
    "scan_prospects",
)


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "prospect_intel_test")
    return Settings(storage_backend="postgres")


def _apply_schema() -> None:
    schema = resources.files("prospect_intel.database").joinpath("schema.sql").read_text()
    with get_connection() as conn:
        conn.execute(schema)
        conn.commit()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at it")
    try:
        _apply_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def scan_id(integration_pool: None) -> Generator[str, None, None]:
    """A fresh scan id whose rows are removed from every scan table afterwards."""
    value = f"it-{uuid.uuid4()}"
    yield value
    with get_connection() as conn:
        for table in _SCAN_TABLES:
            conn.execute(f"DELETE FROM {table} WHERE scan_id = %s", (value,))  # noqa: S608
        conn.commit()
