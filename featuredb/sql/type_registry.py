# =============================================================================
# Type Mapping Registry
# =============================================================================
# Static lookup from abstract field type names to PostgreSQL/PostGIS column
# types. Unknown types fall back to VARCHAR so imports are never blocked by
# an unexpected field type.
# =============================================================================

import logging
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "DEFAULT_TYPE",
    "GEOMETRY_TYPE_NAME",
    "PG_TYPES",
    "TypeDescriptor",
    "resolve_type",
]

logger = logging.getLogger(__name__)

GEOMETRY_TYPE_NAME = "GEOMETRY"

# A value template is a single function call over the positional marker,
# optionally followed by the SRID marker and/or integer literals:
#   ST_GeomFromWKB(${index}, {srid})
_TEMPLATE_PATTERN = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_]*\(\$\{index\}(?:,\s*(?:\{srid\}|\d+))*\)$"
)


class TypeDescriptor(BaseModel):
    """
    Target column type for an abstract field type.

    Attributes:
        name: SQL type name emitted in CREATE TABLE
        value_template: Optional placeholder expression used in INSERT instead
            of a bare ``$n`` marker (e.g. a geometry-from-WKB conversion)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="SQL type name")
    value_template: Optional[str] = Field(None, description="Placeholder expression template")

    @field_validator("value_template")
    @classmethod
    def validate_value_template(cls, v: Optional[str]) -> Optional[str]:
        """
        Restrict templates to ``func(${index}[, {srid} | <int>]...)``.

        Raises:
            ValueError: If the template is not an allow-listed expression
        """
        if v is None:
            return v
        if not _TEMPLATE_PATTERN.match(v):
            raise ValueError(
                f"Invalid value template: {v!r}. "
                "Must look like: func(${index}) or func(${index}, {srid})"
            )
        return v

    @property
    def is_geometry(self) -> bool:
        return self.name.upper() == GEOMETRY_TYPE_NAME

    def render_placeholder(self, index: int, srid: int) -> str:
        """
        Render the INSERT placeholder for a column at a 1-based position.

        Args:
            index: 1-based position of the column in the INSERT
            srid: SRID of the owning table

        Returns:
            "$<index>" or the rendered value template
        """
        if self.value_template is None:
            return f"${index}"
        return self.value_template.format(index=index, srid=srid)


DEFAULT_TYPE = TypeDescriptor(name="VARCHAR")

PG_TYPES: dict[str, TypeDescriptor] = {
    "string": TypeDescriptor(name="VARCHAR"),
    "bool": TypeDescriptor(name="BOOL"),
    "int8": TypeDescriptor(name="SMALLINT"),
    "int32": TypeDescriptor(name="INT"),
    "int64": TypeDescriptor(name="BIGINT"),
    "id": TypeDescriptor(name="BIGINT"),
    "float32": TypeDescriptor(name="REAL"),
    "float64": TypeDescriptor(name="DOUBLE PRECISION"),
    "date": TypeDescriptor(name="DATE"),
    "timestamp": TypeDescriptor(name="TIMESTAMP"),
    "json": TypeDescriptor(name="JSONB"),
    "geometry": TypeDescriptor(
        name=GEOMETRY_TYPE_NAME,
        value_template="ST_GeomFromWKB(${index}, {srid})",
    ),
}


def resolve_type(abstract_type: str) -> TypeDescriptor:
    """
    Resolve an abstract field type to its column type.

    Unknown types resolve to VARCHAR and are reported with a warning rather
    than an error.

    Args:
        abstract_type: Abstract type name from the mapping (e.g. "int32")

    Returns:
        TypeDescriptor for the column
    """
    descriptor = PG_TYPES.get(abstract_type)
    if descriptor is None:
        logger.warning(f"Unhandled field type '{abstract_type}', falling back to {DEFAULT_TYPE.name}")
        return DEFAULT_TYPE
    return descriptor
