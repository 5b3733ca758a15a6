"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from stocktrades_writer.config.aws_config import AWSClientManager, validate_region
from stocktrades_writer.config.settings import (
    AWSConfig, GeneratorConfig, LoggingConfig, WriterSettings,
    load_settings, substitute_env_vars
)
from stocktrades_writer.exceptions import InvalidRegionError


class TestWriterSettings:
    """Test settings defaults and validation."""

    def test_default_settings(self, monkeypatch):
        monkeypatch.delenv("STOCKTRADES_AWS__REGION", raising=False)
        settings = WriterSettings()

        assert settings.service_name == "stocktrades-writer"
        assert settings.aws.region == "us-east-1"
        assert settings.aws.endpoint_url is None
        assert settings.producer.put_interval_seconds == 0.1
        assert settings.generator.max_quantity == 2000
        assert settings.metrics.enable_prometheus is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("STOCKTRADES_AWS__REGION", "eu-west-1")
        monkeypatch.setenv("STOCKTRADES_PRODUCER__PUT_INTERVAL_SECONDS", "0.5")

        settings = WriterSettings()

        assert settings.aws.region == "eu-west-1"
        assert settings.producer.put_interval_seconds == 0.5

    def test_invalid_deviation(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(max_price_deviation=1.5)

    def test_invalid_quantity(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(max_quantity=0)

    def test_log_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")


class TestLoadSettings:
    """Test YAML loading with environment substitution."""

    def test_load_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_ENDPOINT", "http://localstack:4566")
        config_file = tmp_path / "writer.yaml"
        config_file.write_text(
            "service_name: yaml-writer\n"
            "aws:\n"
            "  region: ${TEST_REGION:-ap-southeast-2}\n"
            "  endpoint_url: ${TEST_ENDPOINT}\n"
            "generator:\n"
            "  seed: 42\n"
        )

        settings = load_settings(str(config_file))

        assert settings.service_name == "yaml-writer"
        assert settings.aws.region == "ap-southeast-2"
        assert settings.aws.endpoint_url == "http://localstack:4566"
        assert settings.generator.seed == 42

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(str(tmp_path / "missing.yaml"))

    def test_missing_required_env_var(self, monkeypatch):
        monkeypatch.delenv("DEFINITELY_NOT_SET", raising=False)
        with pytest.raises(ValueError, match="DEFINITELY_NOT_SET"):
            substitute_env_vars({"aws": {"region": "${DEFINITELY_NOT_SET}"}})

    def test_substitution_in_lists(self, monkeypatch):
        monkeypatch.setenv("SYMBOL", "AMZN")
        assert substitute_env_vars(["${SYMBOL}", 3]) == ["AMZN", 3]


class TestAWSConfig:

    def test_valid_region(self):
        assert validate_region("us-east-1") == "us-east-1"

    @pytest.mark.parametrize("region", ["mars-north-1", "", "US-EAST-1"])
    def test_invalid_region(self, region):
        with pytest.raises(InvalidRegionError) as exc_info:
            validate_region(region)
        assert "is not a valid AWS region" in str(exc_info.value)

    def test_localstack_client(self):
        manager = AWSClientManager(AWSConfig(endpoint_url="http://localhost:4566"))

        client = manager.kinesis_client

        assert client.meta.endpoint_url == "http://localhost:4566"
        assert client.meta.region_name == "us-east-1"
        assert manager.kinesis_client is client
