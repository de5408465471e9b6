"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables at one point
(get_settings) and handed to the storage layer as an explicit
StorageConfig. Nothing else in the package reads the environment, so
tests can build a StorageConfig directly without touching os.environ.

Missing credentials are not an error here. They are passed through to
the provider as empty strings and surface as authentication failures
on first use.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..infrastructure.storage.client import ConfigError, StorageConfig


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    The short names (ACCESS_KEY_ID, SECRET_ACCESS_KEY, REGION) take
    precedence; the AWS_-prefixed names are accepted as fallbacks.
    """

    # Credentials
    access_key_id: str = Field(
        default="",
        validation_alias=AliasChoices("ACCESS_KEY_ID", "AWS_ACCESS_KEY_ID"),
        description="Static access key ID. Never logged.",
    )
    secret_access_key: str = Field(
        default="",
        validation_alias=AliasChoices("SECRET_ACCESS_KEY", "AWS_SECRET_ACCESS_KEY"),
        description="Static secret access key. Never logged.",
    )
    region: str = Field(
        default="",
        validation_alias=AliasChoices("REGION", "AWS_REGION"),
        description="Region name, e.g. us-east-1. Empty lets the provider pick its default.",
    )
    use_static_credentials: bool = Field(
        default=True,
        description="Set to false to use the provider's default credential chain (e.g. a Lambda role).",
    )

    # Endpoint and transport
    endpoint_url: Optional[str] = Field(
        default=None,
        description="Override for S3-compatible endpoints (MinIO, R2, LocalStack).",
    )
    connect_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for a connection before the call fails.",
    )
    read_timeout: float = Field(
        default=60.0,
        description="Seconds to wait on a socket read before the call fails.",
    )

    # Development
    mock_mode: bool = Field(
        default=False,
        description="Use the in-memory client instead of real object storage.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        populate_by_name=True,
    )

    def storage_config(self) -> StorageConfig:
        """
        Build the injected storage configuration from these settings.

        Raises:
            ConfigError: If a value is out of range (e.g. a zero timeout)
        """
        try:
            return StorageConfig(
                access_key_id=self.access_key_id,
                secret_access_key=self.secret_access_key,
                region=self.region,
                endpoint_url=self.endpoint_url or None,
                use_static_credentials=self.use_static_credentials,
                connect_timeout=self.connect_timeout,
                read_timeout=self.read_timeout,
            )
        except ValueError as e:
            raise ConfigError("invalid storage configuration", cause=e) from e


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once per process. For tests, call
    get_settings.cache_clear() after changing the environment.

    Raises:
        ConfigError: If an environment value cannot be parsed
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError("failed to load settings from environment", cause=e) from e
