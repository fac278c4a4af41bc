# =============================================================================
# SQL Generator
# =============================================================================
# Pure functions turning a TableSpec into PostgreSQL/PostGIS statement text.
# Identical input always yields identical text.
# =============================================================================

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from featuredb.models.table_spec import TableSpec

__all__ = [
    "GEOMETRY_COLUMN",
    "GEOMETRY_DIMENSION",
    "quote_ident",
    "qualified_name",
    "create_table_sql",
    "insert_sql",
    "drop_table_sql",
    "schema_exists_sql",
    "create_schema_sql",
    "add_geometry_column_sql",
    "add_geometry_column_params",
]

GEOMETRY_COLUMN = "geometry"
GEOMETRY_DIMENSION = 2


def quote_ident(name: str) -> str:
    """
    Quote a PostgreSQL identifier.

    Embedded double quotes are doubled, so the result is always a single
    identifier regardless of its content.
    """
    return '"' + name.replace('"', '""') + '"'


def qualified_name(schema: str, table: str) -> str:
    """Return ``"<schema>"."<table>"``."""
    return f"{quote_ident(schema)}.{quote_ident(table)}"


def create_table_sql(spec: "TableSpec") -> str:
    """
    Build the CREATE TABLE statement for a spec.

    Emits a serial primary key followed by every non-geometry column.
    Geometry columns are added afterwards with AddGeometryColumn.

    Example:
        CREATE TABLE IF NOT EXISTS "osm"."roads" (id SERIAL PRIMARY KEY,"name" VARCHAR);
    """
    cols = ["id SERIAL PRIMARY KEY"]
    cols.extend(col.as_sql() for col in spec.ddl_columns)
    return (
        f"CREATE TABLE IF NOT EXISTS {qualified_name(spec.schema_name, spec.name)} "
        f"({','.join(cols)});"
    )


def insert_sql(spec: "TableSpec") -> str:
    """
    Build the positional INSERT statement for a spec.

    One placeholder per column, in column order. Columns whose type carries a
    value template get the rendered template (e.g. ``ST_GeomFromWKB($3, 3857)``)
    instead of a bare ``$n``.

    Example:
        INSERT INTO "osm"."roads" ("name","class") VALUES ($1,$2)
    """
    table = qualified_name(spec.schema_name, spec.name)
    if not spec.columns:
        return f"INSERT INTO {table} DEFAULT VALUES"

    cols = []
    placeholders = []
    for index, col in enumerate(spec.columns, start=1):
        cols.append(quote_ident(col.name))
        placeholders.append(col.type.render_placeholder(index, spec.srid))

    return f"INSERT INTO {table} ({','.join(cols)}) VALUES ({','.join(placeholders)})"


def drop_table_sql(spec: "TableSpec") -> str:
    return f"DROP TABLE IF EXISTS {qualified_name(spec.schema_name, spec.name)}"


def schema_exists_sql() -> str:
    """Catalog query for schema existence; binds ``:schema``."""
    return (
        "SELECT EXISTS(SELECT schema_name FROM information_schema.schemata "
        "WHERE schema_name = :schema)"
    )


def create_schema_sql(schema: str) -> str:
    return f"CREATE SCHEMA {quote_ident(schema)}"


def add_geometry_column_sql() -> str:
    """PostGIS geometry registration call; binds its arguments by name."""
    return (
        "SELECT AddGeometryColumn(:schema, :table, :column, :srid, "
        ":geometry_type, :dimension)"
    )


def add_geometry_column_params(spec: "TableSpec") -> dict[str, Any]:
    """
    Arguments for AddGeometryColumn.

    Returns:
        Dict with schema, table, column ("geometry"), srid, upper-cased
        geometry kind and dimension (2)
    """
    return {
        "schema": spec.schema_name,
        "table": spec.name,
        "column": GEOMETRY_COLUMN,
        "srid": spec.srid,
        "geometry_type": spec.geometry_type.value.upper(),
        "dimension": GEOMETRY_DIMENSION,
    }
