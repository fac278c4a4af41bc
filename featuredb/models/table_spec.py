# =============================================================================
# Table Spec Builder
# =============================================================================
# Derives immutable, database-ready table specifications from the handle
# configuration and an abstract table definition. No I/O.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

from featuredb.sql.generator import quote_ident
from featuredb.sql.type_registry import TypeDescriptor, resolve_type

from .config import DatabaseConfig
from .mapping import GeometryKind, TableDefinition

__all__ = ["ColumnSpec", "TableSpec", "build_table_spec"]


class ColumnSpec(BaseModel):
    """A named column with its resolved target type."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeDescriptor

    def as_sql(self) -> str:
        """Column definition for CREATE TABLE, e.g. ``"name" VARCHAR``."""
        return f"{quote_ident(self.name)} {self.type.name}"


class TableSpec(BaseModel):
    """
    Database-ready specification of one feature table.

    Attributes:
        name: Table name
        schema_name: Schema the table lives in (always the config's schema)
        columns: Columns in mapping field order; this is the INSERT bind order
        geometry_type: Geometry kind registered for the "geometry" column
        srid: SRID of the geometry column
    """

    model_config = ConfigDict(frozen=True)

    name: str
    schema_name: str
    columns: tuple[ColumnSpec, ...] = Field(default_factory=tuple)
    geometry_type: GeometryKind
    srid: int

    @property
    def ddl_columns(self) -> tuple[ColumnSpec, ...]:
        """Columns emitted in CREATE TABLE (geometry columns are registered separately)."""
        return tuple(col for col in self.columns if not col.type.is_geometry)

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]


def build_table_spec(config: DatabaseConfig, table: TableDefinition) -> TableSpec:
    """
    Build the TableSpec for an abstract table definition.

    Every field becomes a column, in field order, with its type resolved via
    the type registry (unknown types fall back to VARCHAR).

    Args:
        config: Handle configuration supplying schema and SRID
        table: Abstract table definition

    Returns:
        Immutable TableSpec
    """
    columns = tuple(
        ColumnSpec(name=field.name, type=resolve_type(field.type))
        for field in table.fields
    )
    return TableSpec(
        name=table.name,
        schema_name=config.schema_name,
        columns=columns,
        geometry_type=table.type,
        srid=config.srid,
    )
