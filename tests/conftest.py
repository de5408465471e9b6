"""
Shared fixtures.

Every test starts with a clean environment: no credential variables,
no cached settings and no shared mock client left over from another
test.
"""

import pytest

from s3helper.config.settings import get_settings
from s3helper.dependencies import reset_mock_storage_client

ENV_VARS = (
    "ACCESS_KEY_ID",
    "SECRET_ACCESS_KEY",
    "REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_PROFILE",
    "ENDPOINT_URL",
    "USE_STATIC_CREDENTIALS",
    "CONNECT_TIMEOUT",
    "READ_TIMEOUT",
    "MOCK_MODE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep botocore away from the developer's ~/.aws files
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))

    get_settings.cache_clear()
    reset_mock_storage_client()
    yield
    get_settings.cache_clear()
    reset_mock_storage_client()
