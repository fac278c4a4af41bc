"""Dagster Definitions - Repository Configuration.

Defines the resources the feature import pipeline runs against.
"""

from dagster import Definitions, EnvVar

from .resources import FeatureDatabaseResource


# =============================================================================
# Definitions
# =============================================================================

defs = Definitions(
    resources={
        "feature_db": FeatureDatabaseResource(
            host=EnvVar("POSTGRES_HOST"),
            user=EnvVar("POSTGRES_USER"),
            password=EnvVar("POSTGRES_PASSWORD"),
            database=EnvVar("POSTGRES_DB"),
            port=5432,
            schema_name=EnvVar("IMPORT_SCHEMA"),
            srid=3857,
        ),
    },
)
