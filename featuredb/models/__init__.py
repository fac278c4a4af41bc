# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models for configuration, abstract mappings and table specs.
# =============================================================================

"""
Data models for the feature database.

This library provides:
- Configuration models: DatabaseConfig, FeatureDBSettings
- Abstract mapping: Mapping, TableDefinition, FieldDefinition, GeometryKind
- Table specs: TableSpec, ColumnSpec, build_table_spec
"""

# Configuration models
from .config import (
    DEFAULT_SCHEMA,
    SUPPORTED_BACKEND,
    DatabaseConfig,
    FeatureDBSettings,
    validate_config,
)

# Abstract mapping models
from .mapping import (
    FieldDefinition,
    GeometryKind,
    Mapping,
    TableDefinition,
)

# Table specs
from .table_spec import (
    ColumnSpec,
    TableSpec,
    build_table_spec,
)

__all__ = [
    "DEFAULT_SCHEMA",
    "SUPPORTED_BACKEND",
    "DatabaseConfig",
    "FeatureDBSettings",
    "validate_config",
    "FieldDefinition",
    "GeometryKind",
    "Mapping",
    "TableDefinition",
    "ColumnSpec",
    "TableSpec",
    "build_table_spec",
]
