# =============================================================================
# SQL Library
# =============================================================================
# Type mapping and statement generation for the PostGIS target.
# =============================================================================

"""
SQL utilities for the feature database.

This library provides:
- TypeDescriptor / resolve_type: abstract field type → column type lookup
- Statement builders: CREATE TABLE, INSERT, DROP, schema and geometry
  registration statements
"""

from .type_registry import (
    DEFAULT_TYPE,
    GEOMETRY_TYPE_NAME,
    PG_TYPES,
    TypeDescriptor,
    resolve_type,
)
from .generator import (
    GEOMETRY_COLUMN,
    GEOMETRY_DIMENSION,
    add_geometry_column_params,
    add_geometry_column_sql,
    create_schema_sql,
    create_table_sql,
    drop_table_sql,
    insert_sql,
    qualified_name,
    quote_ident,
    schema_exists_sql,
)

__all__ = [
    "DEFAULT_TYPE",
    "GEOMETRY_TYPE_NAME",
    "PG_TYPES",
    "TypeDescriptor",
    "resolve_type",
    "GEOMETRY_COLUMN",
    "GEOMETRY_DIMENSION",
    "add_geometry_column_params",
    "add_geometry_column_sql",
    "create_schema_sql",
    "create_table_sql",
    "drop_table_sql",
    "insert_sql",
    "qualified_name",
    "quote_ident",
    "schema_exists_sql",
]
