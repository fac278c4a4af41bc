"""Minimal integration test fixtures - wiring only.

Connection settings come from the environment, with defaults matching a
local PostGIS container.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Generator

import pytest

from featuredb.models import DatabaseConfig

if TYPE_CHECKING:
    from psycopg2.extensions import connection as Psycopg2Connection


INTEGRATION_SCHEMA = "featuredb_it"


@pytest.fixture
def postgis_host() -> str:
    return os.getenv("POSTGIS_HOST", "localhost")


@pytest.fixture
def postgis_port() -> int:
    return int(os.getenv("POSTGIS_PORT", "5432"))


@pytest.fixture
def postgis_user() -> str:
    return os.getenv("POSTGIS_USER", "postgres")


@pytest.fixture
def postgis_password() -> str:
    return os.getenv("POSTGIS_PASSWORD", "postgres")


@pytest.fixture
def postgis_database() -> str:
    return os.getenv("POSTGIS_DATABASE", "osm")


@pytest.fixture
def postgis_connection_string(
    postgis_host: str,
    postgis_port: int,
    postgis_user: str,
    postgis_password: str,
    postgis_database: str,
) -> str:
    return (
        f"postgresql://{postgis_user}:{postgis_password}@"
        f"{postgis_host}:{postgis_port}/{postgis_database}"
    )


@pytest.fixture
def integration_schema() -> str:
    """Schema the integration tests import into; dropped on teardown."""
    return INTEGRATION_SCHEMA


@pytest.fixture
def postgis_connection(
    postgis_connection_string: str,
    integration_schema: str,
) -> Generator["Psycopg2Connection", None, None]:
    import psycopg2

    conn = psycopg2.connect(
        postgis_connection_string,
        connect_timeout=5,
    )
    conn.autocommit = True
    yield conn
    with conn.cursor() as cur:
        cur.execute(f'DROP SCHEMA IF EXISTS "{integration_schema}" CASCADE')
    conn.close()


@pytest.fixture
def integration_config(postgis_connection_string: str, integration_schema: str) -> DatabaseConfig:
    return DatabaseConfig(
        connection_params=postgis_connection_string,
        srid=3857,
        schema=integration_schema,
    )
