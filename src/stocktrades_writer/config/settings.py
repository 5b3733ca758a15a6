"""Configuration settings using Pydantic for validation."""

from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import os
import re


class AWSConfig(BaseModel):
    """AWS client configuration."""
    region: str = Field(default="us-east-1", description="AWS region")

    # AWS credentials (optional - use the default credential chain in production)
    access_key_id: Optional[str] = Field(default=None, description="AWS access key ID")
    secret_access_key: Optional[str] = Field(default=None, description="AWS secret access key")

    # Client behaviour; publish timeouts are left entirely to botocore
    max_attempts: int = Field(default=3, ge=1, description="botocore attempts per API call")
    connect_timeout: int = Field(default=10, ge=1, description="Connect timeout in seconds")
    read_timeout: int = Field(default=30, ge=1, description="Read timeout in seconds")

    # LocalStack override for local development
    endpoint_url: Optional[str] = Field(default=None, description="LocalStack endpoint URL")


class ProducerConfig(BaseModel):
    """Publish loop configuration."""
    put_interval_seconds: float = Field(default=0.1, ge=0, description="Delay between put_record cycles")


class GeneratorConfig(BaseModel):
    """Random trade generator configuration."""
    seed: Optional[int] = Field(default=None, description="Seed for reproducible trades")
    max_price_deviation: float = Field(default=0.05, description="Max relative deviation from base price")
    max_quantity: int = Field(default=2000, ge=1, description="Largest quantity per trade")

    @field_validator('max_price_deviation')
    @classmethod
    def validate_deviation(cls, v):
        if not 0 <= v < 1:
            raise ValueError("max_price_deviation must be in [0, 1)")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")
    output: str = Field(default="stdout", description="Log output destination")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        if v.upper() not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()

    @field_validator('format')
    @classmethod
    def validate_format(cls, v):
        if v.lower() not in ['json', 'text']:
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class MetricsConfig(BaseModel):
    """Metrics configuration."""
    enable_prometheus: bool = Field(default=False, description="Enable Prometheus metrics")
    prometheus_port: int = Field(default=8081, description="Prometheus metrics port")


class WriterSettings(BaseSettings):
    """Main writer settings."""

    service_name: str = Field(default="stocktrades-writer", description="Service name")

    aws: AWSConfig = Field(default_factory=AWSConfig)
    producer: ProducerConfig = Field(default_factory=ProducerConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    model_config = SettingsConfigDict(
        env_prefix="STOCKTRADES_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


def substitute_env_vars(obj: Any) -> Any:
    """
    Recursively substitute environment variables in configuration objects.

    Supports syntax:
    - ${VAR_NAME} - Required variable (raises error if not found)
    - ${VAR_NAME:-default} - Optional variable with default value

    Raises:
        ValueError: If required environment variable is not found
    """
    if isinstance(obj, dict):
        return {key: substitute_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [substitute_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        def replace_env_var(match):
            var_expr = match.group(1)

            if ':-' in var_expr:
                var_name, default_value = var_expr.split(':-', 1)
                return os.getenv(var_name.strip(), default_value)

            var_name = var_expr.strip()
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable '{var_name}' is not set")
            return value

        return re.sub(r'\$\{([^}]+)\}', replace_env_var, obj)
    else:
        return obj


def load_settings(config_file: Optional[str] = None) -> WriterSettings:
    """
    Load settings from an optional YAML file and environment variables.

    Values in the YAML file may reference environment variables with
    ${VAR_NAME} syntax. Without a file, settings come from STOCKTRADES_*
    environment variables and defaults only.

    Raises:
        ValueError: If required environment variables are missing
        FileNotFoundError: If config file doesn't exist
    """
    if config_file:
        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        import yaml

        with open(config_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        config_data = substitute_env_vars(raw_config)
        return WriterSettings(**config_data)

    return WriterSettings()
