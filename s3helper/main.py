"""
Demonstration entry point: list the buckets visible to the configured
credentials.

Meant for checking an IAM user's access key from a shell, not as a
pattern for library use. Any failure is fatal and exits with status 1;
library callers should handle StorageError themselves.

Usage:
    ACCESS_KEY_ID=... SECRET_ACCESS_KEY=... REGION=us-east-1 s3helper-demo
    python -m s3helper.main
"""

import logging
import sys

from .config.settings import get_settings
from .dependencies import get_storage_client
from .infrastructure.storage.client import StorageError

logger = logging.getLogger(__name__)


def main() -> int:
    """List buckets and log each name. Returns the process exit status."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
        stream=sys.stdout,
    )

    try:
        settings = get_settings()
        logging.getLogger().setLevel(settings.log_level.upper())
        client = get_storage_client(settings)
    except StorageError as e:
        logger.error("Failed to create S3 client", extra={"error": str(e)})
        return 1

    try:
        buckets = client.list_buckets()
    except StorageError as e:
        logger.error("Failed to list buckets", extra={"error": str(e)})
        return 1

    for name in buckets:
        logger.info("Bucket: %s", name)

    return 0


if __name__ == "__main__":
    sys.exit(main())
