"""
Object storage integration (AWS S3 and S3-compatible endpoints).

Includes mock mode for local development without credentials.
"""

from .client import (
    ConfigError,
    MockStorageClient,
    ObjectLocator,
    ObjectReadError,
    RetrievalError,
    S3StorageClient,
    StorageClient,
    StorageConfig,
    StorageError,
    UploadError,
    create_storage_client,
)

__all__ = [
    "ConfigError",
    "MockStorageClient",
    "ObjectLocator",
    "ObjectReadError",
    "RetrievalError",
    "S3StorageClient",
    "StorageClient",
    "StorageConfig",
    "StorageError",
    "UploadError",
    "create_storage_client",
]
