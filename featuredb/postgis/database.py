# =============================================================================
# PostGIS Database Handle
# =============================================================================
# Composition root: owns the SQLAlchemy engine, the configuration and the
# table registry. Exposes init() and insert_batch() to the import pipeline.
# =============================================================================

import logging
from types import MappingProxyType
from typing import Any, Optional, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from featuredb.errors import FeatureDBError
from featuredb.models import DatabaseConfig, Mapping, TableSpec, validate_config

from .base import FeatureDatabase
from .batch import insert_batch
from .schema import SchemaInitializer

__all__ = ["PostGISDatabase", "open_database"]

logger = logging.getLogger(__name__)

_LIVENESS_SQL = "SELECT 1"
_DRIVER_URL = "postgresql+psycopg2://"


def _create_engine(connection_params: str) -> Engine:
    """
    Create a SQLAlchemy engine from an opaque connection string.

    URLs ("postgresql://...") are passed through; anything else is treated as
    a libpq keyword DSN ("host=... dbname=...") and handed to psycopg2.
    """
    if "://" in connection_params:
        return create_engine(connection_params, pool_pre_ping=True, echo=False)
    return create_engine(
        _DRIVER_URL,
        connect_args={"dsn": connection_params},
        pool_pre_ping=True,
        echo=False,
    )


class PostGISDatabase(FeatureDatabase):
    """
    Feature database backed by PostgreSQL/PostGIS.

    Construction validates the backend identifier before anything else, then
    connects and runs a liveness query so that bad credentials or an
    unreachable host surface immediately rather than at the first write.

    The registry is replaced wholesale by ``init()`` and never mutated by
    ``insert_batch()``. ``init()`` must not run concurrently with other calls.

    Example:
        >>> config = DatabaseConfig(connection_params="postgresql://u:p@localhost/osm",
        ...                         srid=3857, schema="osm")
        >>> with PostGISDatabase(config) as db:
        ...     db.init(mapping)
        ...     db.insert_batch("roads", [[b"...wkb...", "Main St"]])

    Raises:
        FeatureDBError: CONFIGURATION error for an unsupported backend (no
            connection attempted); CONNECTION error if the liveness query fails
    """

    def __init__(self, config: DatabaseConfig, engine: Optional[Engine] = None):
        self.config = validate_config(config)
        self._tables: MappingProxyType = MappingProxyType({})
        if engine is None:
            try:
                engine = _create_engine(config.connection_params)
            except SQLAlchemyError as e:
                raise FeatureDBError.configuration(f"invalid connection parameters: {e}") from e
        self.engine = engine
        try:
            self.ping()
        except FeatureDBError:
            self.engine.dispose()
            raise

    @property
    def tables(self) -> MappingProxyType:
        """Read-only registry of table name → TableSpec."""
        return self._tables

    def ping(self) -> None:
        """
        Run a trivial query to check the connection.

        Raises:
            FeatureDBError: CONNECTION error if the query fails
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text(_LIVENESS_SQL)).scalar()
        except SQLAlchemyError as e:
            raise FeatureDBError.connection(e, _LIVENESS_SQL) from e

    def init(self, mapping: Mapping) -> None:
        """
        Rebuild the schema and all tables for ``mapping``.

        Destructive: existing tables with the same names are dropped. The
        previous registry is cleared first; the new one is published only
        after every table was rebuilt.

        Raises:
            FeatureDBError: SCHEMA or TABLE_CREATION error
        """
        self._tables = MappingProxyType({})
        self._tables = SchemaInitializer(self.engine, self.config).initialize(mapping)

    def insert_batch(self, table: str, rows: Sequence[Sequence[Any]]) -> int:
        """
        Insert ``rows`` into ``table`` in one transaction.

        Raises:
            FeatureDBError: UNKNOWN_TABLE before any connection is used when
                ``table`` is not registered; INSERT/TRANSACTION errors otherwise
        """
        spec: Optional[TableSpec] = self._tables.get(table)
        if spec is None:
            raise FeatureDBError.unknown_table(table)
        return insert_batch(self.engine, spec, rows)

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()

    def __enter__(self) -> "PostGISDatabase":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_database(config: DatabaseConfig) -> PostGISDatabase:
    """
    Open a feature database for ``config``.

    Args:
        config: Handle configuration

    Returns:
        Connected PostGISDatabase

    Raises:
        FeatureDBError: CONFIGURATION or CONNECTION error
    """
    db = PostGISDatabase(config)
    logger.info(
        f"Opened {config.type} feature database (schema '{config.schema_name}', SRID {config.srid})"
    )
    return db
