# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides the configuration models for the feature database:
# - DatabaseConfig: immutable handle configuration (backend, DSN, SRID, schema)
# - FeatureDBSettings: environment-driven settings producing a DatabaseConfig
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from featuredb.errors import FeatureDBError

__all__ = [
    "SUPPORTED_BACKEND",
    "DEFAULT_SCHEMA",
    "DatabaseConfig",
    "FeatureDBSettings",
    "validate_config",
]

SUPPORTED_BACKEND = "postgres"
DEFAULT_SCHEMA = "public"


# =============================================================================
# Database Config (Handle Configuration)
# =============================================================================

class DatabaseConfig(BaseModel):
    """
    Configuration for a feature database handle.

    Immutable after construction. The backend identifier is deliberately not
    checked here so that callers can build a config and validate it ahead of
    time with ``validate_backend()`` (see ``validate_config``).

    Attributes:
        type: Backend identifier (only "postgres" is supported)
        connection_params: Opaque connection string, either a SQLAlchemy URL
            ("postgresql://user:pw@host/db") or a libpq keyword DSN
            ("host=localhost dbname=osm")
        srid: Spatial reference id applied to every geometry column
        schema_name: Target schema (accepts the alias "schema")
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(SUPPORTED_BACKEND, description="Backend identifier")
    connection_params: str = Field(..., description="Opaque connection string")
    srid: int = Field(3857, gt=0, description="Spatial reference id for geometry columns")
    schema_name: str = Field(DEFAULT_SCHEMA, alias="schema", description="Target schema name")

    @field_validator("schema_name")
    @classmethod
    def validate_schema_name(cls, v: str) -> str:
        """Reject empty or whitespace-only schema names."""
        if not v or not v.strip():
            raise ValueError("schema cannot be empty")
        return v

    def validate_backend(self) -> None:
        """
        Check that the backend identifier is supported.

        Raises:
            FeatureDBError: CONFIGURATION error for any backend but "postgres"
        """
        if self.type != SUPPORTED_BACKEND:
            raise FeatureDBError.configuration(f"unsupported database type: {self.type}")


def validate_config(config: DatabaseConfig) -> DatabaseConfig:
    """
    Validate a DatabaseConfig before any resource is acquired.

    Args:
        config: Configuration to check

    Returns:
        The same config, for chaining

    Raises:
        FeatureDBError: CONFIGURATION error if the backend is unsupported
    """
    config.validate_backend()
    return config


# =============================================================================
# Feature DB Settings (Environment)
# =============================================================================

class FeatureDBSettings(BaseSettings):
    """
    Environment configuration for the PostGIS import target.

    Maps environment variables:
    - POSTGRES_HOST → host
    - POSTGRES_PORT → port
    - POSTGRES_USER → user
    - POSTGRES_PASSWORD → password
    - POSTGRES_DB → database
    - IMPORT_BACKEND → backend
    - IMPORT_SRID → srid
    - IMPORT_SCHEMA → schema_name

    Attributes:
        host: PostGIS host (default: "postgis")
        port: PostGIS port (default: 5432)
        user: PostgreSQL user
        password: PostgreSQL password
        database: Database name (default: "osm")
        backend: Backend identifier (default: "postgres")
        srid: Target SRID (default: 3857)
        schema_name: Target schema (default: "public")
    """

    host: str = Field("postgis", validation_alias="POSTGRES_HOST", description="PostGIS host")
    port: int = Field(5432, validation_alias="POSTGRES_PORT", description="PostGIS port")
    user: str = Field(..., validation_alias="POSTGRES_USER", description="PostgreSQL user")
    password: str = Field(..., validation_alias="POSTGRES_PASSWORD", description="PostgreSQL password")
    database: str = Field("osm", validation_alias="POSTGRES_DB", description="Database name")
    backend: str = Field(SUPPORTED_BACKEND, validation_alias="IMPORT_BACKEND", description="Backend identifier")
    srid: int = Field(3857, validation_alias="IMPORT_SRID", description="Target SRID")
    schema_name: str = Field(DEFAULT_SCHEMA, validation_alias="IMPORT_SCHEMA", description="Target schema")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )

    @property
    def connection_string(self) -> str:
        """
        Build PostgreSQL connection URI.

        Format: postgresql://[user]:[password]@[host]:[port]/[database]

        Returns:
            PostgreSQL connection URI string
        """
        return (
            f"postgresql://{self.user}:{self.password}@"
            f"{self.host}:{self.port}/{self.database}"
        )

    def to_database_config(self) -> DatabaseConfig:
        """Build the immutable handle configuration from these settings."""
        return DatabaseConfig(
            type=self.backend,
            connection_params=self.connection_string,
            srid=self.srid,
            schema_name=self.schema_name,
        )
