"""
Object storage client for AWS S3 and S3-compatible endpoints.

Three operations are exposed: read an object's bytes, write an object's
bytes, and list buckets. Each one is a single boto3 call; this module
only marshals parameters and wraps provider errors into a small closed
set of exception types so callers can tell failures apart without
parsing messages.

Mock mode keeps objects in memory, enabling tests and local runs without
provisioning a bucket.
"""

import logging
import threading
from contextlib import closing
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ObjectLocator:
    """Identifies one object: a bucket name and a key inside it."""
    bucket: str
    key: str

    def __str__(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


class StorageError(Exception):
    """
    Base class for storage failures.

    The provider's exception is kept on `cause` (and chained as
    __cause__), so callers can inspect it instead of parsing the message.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        locator: Optional[ObjectLocator] = None,
    ) -> None:
        super().__init__(f"{message}: {cause}" if cause is not None else message)
        self.message = message
        self.cause = cause
        self.locator = locator

    @property
    def error_code(self) -> Optional[str]:
        """Provider error code (e.g. NoSuchKey, AccessDenied), if any."""
        if isinstance(self.cause, ClientError):
            return self.cause.response.get("Error", {}).get("Code")
        return None


class ConfigError(StorageError):
    """Raised when a client configuration cannot be assembled."""
    pass


class RetrievalError(StorageError):
    """Raised when an object or bucket listing cannot be fetched."""
    pass


class ObjectReadError(RetrievalError):
    """Raised when the object body stream cannot be fully read."""
    pass


class UploadError(StorageError):
    """Raised when an object cannot be written."""
    pass


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class StorageConfig:
    """
    Configuration for an S3 client.

    Credentials are not checked here. Empty strings are passed through
    to the provider and rejected there on first use.
    """
    access_key_id: str = ""
    secret_access_key: str = ""
    region: str = ""
    endpoint_url: Optional[str] = None
    use_static_credentials: bool = True
    connect_timeout: float = 10.0
    read_timeout: float = 60.0

    def __post_init__(self) -> None:
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")
        if self.read_timeout <= 0:
            raise ValueError("read_timeout must be positive")

    def __repr__(self) -> str:
        # keep secrets out of tracebacks and log lines
        return (
            f"StorageConfig(region={self.region!r}, endpoint_url={self.endpoint_url!r}, "
            f"use_static_credentials={self.use_static_credentials})"
        )


class StorageClient(Protocol):
    """
    Protocol for object storage operations.

    Implemented by S3StorageClient and MockStorageClient. A handle can be
    reused for any number of calls and shared between threads.
    """

    def get_object(self, bucket: str, key: str) -> bytes:
        """Return the full content of an object."""
        ...

    def put_object(self, bucket: str, key: str, content: bytes) -> None:
        """Write content as the object's full body, replacing any prior content."""
        ...

    def list_buckets(self) -> list[str]:
        """Return the names of all buckets visible to the caller."""
        ...


# ---------------------------------------------------------------------------
# S3 Client
# ---------------------------------------------------------------------------

class S3StorageClient:
    """
    S3 client backed by boto3.

    Each instance builds its own boto3 Session, since sessions are not
    thread safe but the clients they create are. Retries are disabled:
    every call makes exactly one attempt and errors surface immediately.

    With config=None the provider's default credential and region
    resolution is used (environment, shared config, instance role).
    """

    def __init__(self, config: Optional[StorageConfig] = None) -> None:
        self._config = config or StorageConfig(use_static_credentials=False)

        boto_config = Config(
            connect_timeout=self._config.connect_timeout,
            read_timeout=self._config.read_timeout,
            retries={"total_max_attempts": 1, "mode": "standard"},
        )

        client_kwargs = {
            # empty region means "let the provider decide"
            "region_name": self._config.region or None,
            "endpoint_url": self._config.endpoint_url,
            "config": boto_config,
        }
        if self._config.use_static_credentials:
            client_kwargs["aws_access_key_id"] = self._config.access_key_id
            client_kwargs["aws_secret_access_key"] = self._config.secret_access_key

        try:
            session = boto3.session.Session()
            self._s3_client = session.client("s3", **client_kwargs)
        except (BotoCoreError, ValueError) as e:
            logger.error(
                "Failed to create S3 client",
                extra={
                    "region": self._config.region,
                    "endpoint": self._config.endpoint_url,
                    "error": str(e),
                }
            )
            raise ConfigError("failed to load S3 configuration", cause=e) from e

        logger.info(
            "Initialized S3 storage client",
            extra={
                "region": self._s3_client.meta.region_name,
                "endpoint": self._config.endpoint_url,
                "static_credentials": self._config.use_static_credentials,
            }
        )

    @property
    def raw_client(self):
        """The underlying boto3 S3 client."""
        return self._s3_client

    def get_object(self, bucket: str, key: str) -> bytes:
        """
        Download an object and return its full content.

        The whole body is read into memory. The response stream is closed
        whether the read succeeds or not.
        """
        locator = ObjectLocator(bucket, key)

        try:
            response = self._s3_client.get_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to get object",
                extra={"bucket": bucket, "key": key, "error": str(e)}
            )
            raise RetrievalError("failed to get object", cause=e, locator=locator) from e

        with closing(response["Body"]) as body:
            try:
                content = body.read()
            except (BotoCoreError, OSError) as e:
                logger.error(
                    "Failed to read object body",
                    extra={"bucket": bucket, "key": key, "error": str(e)}
                )
                raise ObjectReadError(
                    "failed to read object body", cause=e, locator=locator
                ) from e

        logger.debug(
            "Downloaded object",
            extra={"bucket": bucket, "key": key, "size_bytes": len(content)}
        )

        return content

    def put_object(self, bucket: str, key: str, content: bytes) -> None:
        """Upload content in a single request, overwriting any existing object."""
        try:
            self._s3_client.put_object(Bucket=bucket, Key=key, Body=content)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to put object",
                extra={"bucket": bucket, "key": key, "error": str(e)}
            )
            raise UploadError(
                "failed to put object", cause=e, locator=ObjectLocator(bucket, key)
            ) from e

        logger.debug(
            "Uploaded object",
            extra={"bucket": bucket, "key": key, "size_bytes": len(content)}
        )

    def list_buckets(self) -> list[str]:
        """
        List bucket names from a single ListBuckets response.

        Continuation tokens are not followed, so only the first page is
        returned when the provider paginates.
        """
        try:
            response = self._s3_client.list_buckets()
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to list buckets", extra={"error": str(e)})
            raise RetrievalError("failed to list buckets", cause=e) from e

        return [bucket["Name"] for bucket in response.get("Buckets", [])]


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

def _client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class MockStorageClient:
    """
    In-memory storage for local development and tests.

    Raises the same error types as S3StorageClient, with ClientError
    causes carrying the codes S3 would return (NoSuchBucket, NoSuchKey).
    Buckets must exist before objects can be written to them.
    """

    def __init__(self, buckets: Iterable[str] = ()) -> None:
        # {bucket: {key: content}}
        self._buckets: dict[str, dict[str, bytes]] = {name: {} for name in buckets}
        self._lock = threading.Lock()
        logger.info("Initialized mock storage client (in-memory)")

    def create_bucket(self, bucket: str) -> None:
        """Create an empty bucket. Existing buckets are left untouched."""
        with self._lock:
            self._buckets.setdefault(bucket, {})

    def get_object(self, bucket: str, key: str) -> bytes:
        """Return a copy of the stored content."""
        locator = ObjectLocator(bucket, key)

        with self._lock:
            objects = self._buckets.get(bucket)
            if objects is None:
                cause = _client_error("NoSuchBucket", "The specified bucket does not exist", "GetObject")
            elif key not in objects:
                cause = _client_error("NoSuchKey", "The specified key does not exist.", "GetObject")
            else:
                return bytes(objects[key])

        raise RetrievalError("failed to get object", cause=cause, locator=locator) from cause

    def put_object(self, bucket: str, key: str, content: bytes) -> None:
        """Store a copy of content under bucket/key."""
        with self._lock:
            objects = self._buckets.get(bucket)
            if objects is not None:
                objects[key] = bytes(content)
                return

        cause = _client_error("NoSuchBucket", "The specified bucket does not exist", "PutObject")
        raise UploadError(
            "failed to put object", cause=cause, locator=ObjectLocator(bucket, key)
        ) from cause

    def list_buckets(self) -> list[str]:
        """Return bucket names in sorted order."""
        with self._lock:
            return sorted(self._buckets)


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_storage_client(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> StorageClient:
    """
    Create storage client based on configuration.

    Args:
        config: Storage configuration. None means the provider's default
            credential chain.
        mock_mode: If True, return an in-memory client

    Returns:
        StorageClient implementation (S3 or Mock)

    Raises:
        ConfigError: If the provider rejects the configuration
    """
    if mock_mode:
        return MockStorageClient()

    return S3StorageClient(config)
