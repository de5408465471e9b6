"""
Wiring between settings and the storage layer.

get_storage_client is the one place where environment-derived settings
turn into a client handle. Library code that already has a
StorageConfig should call create_storage_client directly.
"""

import logging
from typing import Optional

from .config.settings import Settings, get_settings
from .infrastructure.storage.client import (
    MockStorageClient,
    StorageClient,
    create_storage_client,
)

logger = logging.getLogger(__name__)

# Shared mock instance so objects persist between calls in mock mode
_mock_storage_client: Optional[MockStorageClient] = None


def get_storage_client(settings: Optional[Settings] = None) -> StorageClient:
    """
    Build a storage client from environment settings.

    Credentials are read once, here. In mock mode the same in-memory
    client is returned on every call.

    Raises:
        ConfigError: If the environment holds invalid values or the
            provider rejects the configuration
    """
    global _mock_storage_client

    settings = settings or get_settings()

    if settings.mock_mode:
        if _mock_storage_client is None:
            _mock_storage_client = create_storage_client(mock_mode=True)
            logger.info("Created shared mock storage client")
        return _mock_storage_client

    # use_static_credentials=False switches to the default credential chain
    return create_storage_client(config=settings.storage_config())


def reset_mock_storage_client() -> None:
    """Drop the shared mock client. Used by tests."""
    global _mock_storage_client
    _mock_storage_client = None
