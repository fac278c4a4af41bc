"""Dagster Resources - External Service Connections."""

from .feature_db_resource import FeatureDatabaseResource

__all__ = [
    "FeatureDatabaseResource",
]
