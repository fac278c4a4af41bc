# =============================================================================
# Abstract Mapping Models
# =============================================================================
# Driver-independent description of feature tables:
# - GeometryKind: geometry type of a table's geometry column
# - FieldDefinition: a named, abstractly typed attribute column
# - TableDefinition: a table with its geometry kind and ordered fields
# - Mapping: all tables of an import, keyed by table name
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

__all__ = ["GeometryKind", "FieldDefinition", "TableDefinition", "Mapping"]

GEOMETRY_FIELD_TYPE = "geometry"
GEOMETRY_FIELD_NAME = "geometry"


class GeometryKind(str, Enum):
    """OGC geometry kinds accepted for a table's geometry column."""
    POINT = "point"
    LINESTRING = "linestring"
    POLYGON = "polygon"
    MULTIPOINT = "multipoint"
    MULTILINESTRING = "multilinestring"
    MULTIPOLYGON = "multipolygon"
    GEOMETRYCOLLECTION = "geometrycollection"
    GEOMETRY = "geometry"


class FieldDefinition(BaseModel):
    """
    A single attribute of a feature table.

    Attributes:
        name: Column name
        type: Abstract type name (see featuredb.sql.type_registry.PG_TYPES)
    """

    name: str = Field(..., min_length=1, description="Column name")
    type: str = Field(..., min_length=1, description="Abstract field type")


class TableDefinition(BaseModel):
    """
    Abstract definition of one feature table.

    Attributes:
        name: Table name
        type: Geometry kind of the table's geometry column
        fields: Ordered fields; order determines column and bind order
    """

    name: str = Field(..., min_length=1, description="Table name")
    type: GeometryKind = Field(..., description="Geometry kind")
    fields: list[FieldDefinition] = Field(default_factory=list, description="Ordered fields")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_geometry_kind(cls, v: Any) -> Any:
        """Accept geometry kinds case-insensitively ("LineString" → "linestring")."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def validate_fields(self) -> "TableDefinition":
        """
        Validate field names.

        - Field names must be unique within the table
        - A geometry field must be named "geometry", the column registered
          by AddGeometryColumn
        """
        seen = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"Duplicate field '{field.name}' in table '{self.name}'")
            seen.add(field.name)
            if field.type == GEOMETRY_FIELD_TYPE and field.name != GEOMETRY_FIELD_NAME:
                raise ValueError(
                    f"Geometry field in table '{self.name}' must be named "
                    f"'{GEOMETRY_FIELD_NAME}', got '{field.name}'"
                )
        return self


class Mapping(BaseModel):
    """
    All tables of an import, keyed by table name.

    Example:
        >>> mapping = Mapping.from_dict({
        ...     "roads": {
        ...         "name": "roads",
        ...         "type": "linestring",
        ...         "fields": [{"name": "name", "type": "string"}],
        ...     }
        ... })
        >>> mapping.tables["roads"].type
        <GeometryKind.LINESTRING: 'linestring'>
    """

    tables: dict[str, TableDefinition] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, tables: dict[str, Any]) -> "Mapping":
        """Build a Mapping from an already-decoded ``{name: table}`` dict."""
        return cls(tables=tables)
