# =============================================================================
# Schema Initializer
# =============================================================================
# Ensures the target schema exists and rebuilds every mapped table:
# DROP → CREATE → AddGeometryColumn. This is a destructive full-reimport
# step, not an incremental migration.
# =============================================================================

import logging
from types import MappingProxyType
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from featuredb.errors import FeatureDBError
from featuredb.models import DEFAULT_SCHEMA, DatabaseConfig, Mapping, TableSpec, build_table_spec
from featuredb.sql import (
    add_geometry_column_params,
    add_geometry_column_sql,
    create_schema_sql,
    create_table_sql,
    drop_table_sql,
    schema_exists_sql,
)

__all__ = ["SchemaInitializer", "build_registry"]

logger = logging.getLogger(__name__)


def build_registry(config: DatabaseConfig, mapping: Mapping) -> dict[str, TableSpec]:
    """Build one TableSpec per mapped table, keyed by the mapping's table key."""
    return {
        name: build_table_spec(config, table)
        for name, table in mapping.tables.items()
    }


class SchemaInitializer:
    """
    Creates the schema and (re)creates all mapped tables.

    Every statement is committed as soon as it succeeds. A failure aborts
    immediately; tables rebuilt before the failure are left in place.

    Example:
        >>> initializer = SchemaInitializer(engine, config)
        >>> registry = initializer.initialize(mapping)
        >>> registry["roads"].columns
    """

    def __init__(self, engine: Engine, config: DatabaseConfig):
        self.engine = engine
        self.config = config

    def initialize(self, mapping: Mapping) -> MappingProxyType:
        """
        Ensure the schema, build the registry and rebuild every table.

        Args:
            mapping: Abstract mapping to materialize

        Returns:
            Read-only registry of table name → TableSpec

        Raises:
            FeatureDBError: SCHEMA or TABLE_CREATION error on the first failure
        """
        self.ensure_schema()

        registry = build_registry(self.config, mapping)
        for spec in registry.values():
            self.create_table(spec)

        logger.info(
            f"Initialized {len(registry)} table(s) in schema '{self.config.schema_name}'"
        )
        return MappingProxyType(registry)

    def ensure_schema(self) -> None:
        """
        Create the configured schema if it does not exist.

        The default schema ("public") is always present and is not checked.

        Raises:
            FeatureDBError: SCHEMA error if the check or creation fails
        """
        schema = self.config.schema_name
        if schema == DEFAULT_SCHEMA:
            return

        with self.engine.connect() as conn:
            sql = schema_exists_sql()
            try:
                exists = conn.execute(text(sql), {"schema": schema}).scalar()
            except SQLAlchemyError as e:
                raise FeatureDBError.schema(schema, sql, e) from e

            if exists:
                logger.debug(f"Schema '{schema}' already exists")
                return

            sql = create_schema_sql(schema)
            try:
                conn.execute(text(sql))
                conn.commit()
            except SQLAlchemyError as e:
                raise FeatureDBError.schema(schema, sql, e) from e

        logger.info(f"Created schema: {schema}")

    def create_table(self, spec: TableSpec) -> None:
        """
        Drop and recreate one table, then register its geometry column.

        Args:
            spec: Table to rebuild

        Raises:
            FeatureDBError: TABLE_CREATION error carrying the failing SQL
        """
        with self.engine.connect() as conn:
            self._execute(conn, spec, drop_table_sql(spec))
            self._execute(conn, spec, create_table_sql(spec))
            self._execute(
                conn,
                spec,
                add_geometry_column_sql(),
                add_geometry_column_params(spec),
            )

        logger.info(
            f"Created table {spec.schema_name}.{spec.name} "
            f"({spec.geometry_type.value.upper()}, SRID {spec.srid})"
        )

    @staticmethod
    def _execute(
        conn: Connection,
        spec: TableSpec,
        sql: str,
        params: Optional[dict[str, Any]] = None,
    ) -> None:
        logger.debug(f"Executing: {sql}")
        try:
            conn.execute(text(sql), params or {})
            conn.commit()
        except SQLAlchemyError as e:
            raise FeatureDBError.table_creation(spec.name, sql, e) from e
