# =============================================================================
# PostGIS Backend
# =============================================================================
# Schema initialization, transactional batch inserts and the database handle.
# =============================================================================

from .base import BatchInsertable, FeatureDatabase, Initializable
from .batch import insert_batch
from .database import PostGISDatabase, open_database
from .schema import SchemaInitializer, build_registry

__all__ = [
    "BatchInsertable",
    "FeatureDatabase",
    "Initializable",
    "insert_batch",
    "PostGISDatabase",
    "open_database",
    "SchemaInitializer",
    "build_registry",
]
