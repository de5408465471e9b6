"""
Unit tests for environment-driven configuration and client wiring.
"""

import pytest
from botocore.stub import Stubber
from pydantic import ValidationError

from s3helper.config.settings import Settings, get_settings
from s3helper.dependencies import get_storage_client
from s3helper.infrastructure.storage.client import (
    ConfigError,
    MockStorageClient,
    RetrievalError,
    S3StorageClient,
    UploadError,
)


class TestSettings:
    """Tests for loading settings from the environment."""

    def test_reads_short_variable_names(self, monkeypatch):
        monkeypatch.setenv("ACCESS_KEY_ID", "AKIAEXAMPLE")
        monkeypatch.setenv("SECRET_ACCESS_KEY", "secret")
        monkeypatch.setenv("REGION", "eu-west-1")

        settings = Settings()

        assert settings.access_key_id == "AKIAEXAMPLE"
        assert settings.secret_access_key == "secret"
        assert settings.region == "eu-west-1"

    def test_falls_back_to_aws_prefixed_names(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAFALLBACK")
        monkeypatch.setenv("AWS_REGION", "us-west-2")

        settings = Settings()

        assert settings.access_key_id == "AKIAFALLBACK"
        assert settings.region == "us-west-2"

    def test_short_names_take_precedence(self, monkeypatch):
        monkeypatch.setenv("REGION", "eu-central-1")
        monkeypatch.setenv("AWS_REGION", "us-west-2")

        assert Settings().region == "eu-central-1"

    def test_unset_variables_become_empty_strings(self):
        settings = Settings()

        assert settings.access_key_id == ""
        assert settings.secret_access_key == ""
        assert settings.region == ""
        assert settings.mock_mode is False

    def test_storage_config_carries_values(self, monkeypatch):
        monkeypatch.setenv("REGION", "eu-west-1")
        monkeypatch.setenv("ENDPOINT_URL", "http://localhost:9000")
        monkeypatch.setenv("READ_TIMEOUT", "5")

        config = Settings().storage_config()

        assert config.region == "eu-west-1"
        assert config.endpoint_url == "http://localhost:9000"
        assert config.read_timeout == 5.0
        assert config.use_static_credentials is True

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestGetStorageClient:
    """Tests for turning settings into a client handle."""

    def test_builds_s3_client_from_environment(self, monkeypatch):
        monkeypatch.setenv("ACCESS_KEY_ID", "testing")
        monkeypatch.setenv("SECRET_ACCESS_KEY", "testing")
        monkeypatch.setenv("REGION", "eu-west-1")

        client = get_storage_client()

        assert isinstance(client, S3StorageClient)
        assert client.raw_client.meta.region_name == "eu-west-1"

    def test_unset_environment_still_builds_a_client(self):
        assert isinstance(get_storage_client(), S3StorageClient)

    def test_unset_credentials_fail_on_first_use(self):
        """No local validation: the provider rejects the empty keys per call."""
        client = get_storage_client()

        with Stubber(client.raw_client) as stub:
            stub.add_client_error(
                "get_object",
                service_error_code="InvalidAccessKeyId",
                service_message="The AWS Access Key Id you provided does not exist in our records.",
                http_status_code=403,
                expected_params={"Bucket": "test-bucket", "Key": "hello.txt"},
            )
            stub.add_client_error(
                "put_object",
                service_error_code="InvalidAccessKeyId",
                http_status_code=403,
                expected_params={"Bucket": "test-bucket", "Key": "hello.txt", "Body": b"Hello, world!"},
            )

            with pytest.raises(RetrievalError) as read_error:
                client.get_object("test-bucket", "hello.txt")
            with pytest.raises(UploadError) as write_error:
                client.put_object("test-bucket", "hello.txt", b"Hello, world!")

            stub.assert_no_pending_responses()

        assert read_error.value.error_code == "InvalidAccessKeyId"
        assert write_error.value.error_code == "InvalidAccessKeyId"

    def test_non_positive_timeout_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("CONNECT_TIMEOUT", "0")

        with pytest.raises(ConfigError) as exc_info:
            get_storage_client()

        assert isinstance(exc_info.value.cause, ValueError)

    def test_unparseable_timeout_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("READ_TIMEOUT", "abc")

        with pytest.raises(ConfigError) as exc_info:
            get_storage_client()

        assert isinstance(exc_info.value.cause, ValidationError)

    def test_malformed_region_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("REGION", "not a region!")

        with pytest.raises(ConfigError):
            get_storage_client()

    def test_default_credential_chain(self, monkeypatch):
        monkeypatch.setenv("USE_STATIC_CREDENTIALS", "false")
        monkeypatch.setenv("REGION", "us-east-1")

        assert isinstance(get_storage_client(), S3StorageClient)

    def test_mock_mode_shares_one_client(self, monkeypatch):
        monkeypatch.setenv("MOCK_MODE", "true")

        first = get_storage_client()
        second = get_storage_client()

        assert isinstance(first, MockStorageClient)
        assert first is second

    def test_explicit_settings_override_environment(self, monkeypatch):
        monkeypatch.setenv("MOCK_MODE", "false")

        client = get_storage_client(Settings(mock_mode=True))

        assert isinstance(client, MockStorageClient)
