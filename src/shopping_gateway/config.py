"""
Configuration management for the shopping gateway.

Loads configuration from YAML with ZERO defaults in code.
Every value must be explicitly specified in the YAML file or startup fails.
A fixed set of deployment values can then be overridden from the environment.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

# Resource names are part of the deployment contract, not configuration.
BUCKET_NAME = "shopping-images"
TABLE_NAME = "ShoppingTasks"


class ServiceConfig(BaseModel):
    """Service identity configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    version: str


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    host: str
    port: int
    log_level: str
    cors_origins: tuple[str, ...]


class AwsConfig(BaseModel):
    """Connection settings shared by every backing service client."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    endpoint_url: str
    public_url: str
    region: str
    access_key_id: str
    secret_access_key: str
    max_attempts: int
    connect_timeout_seconds: float
    read_timeout_seconds: float


class MessagingConfig(BaseModel):
    """Queue and topic destinations for task events."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    queue_url: str
    topic_arn: str
    notification_subject: str


class Settings(BaseModel):
    """
    Root configuration container.

    All fields are REQUIRED. No defaults exist.
    Missing fields cause immediate startup failure.

    Usage:
        from shopping_gateway.config import get_settings
        settings = get_settings()
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    service: ServiceConfig
    server: ServerConfig
    aws: AwsConfig
    messaging: MessagingConfig

    @property
    def bucket_name(self) -> str:
        return BUCKET_NAME

    @property
    def table_name(self) -> str:
        return TABLE_NAME


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


# Environment variable -> (section, key) in the YAML document
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "PORT": ("server", "port"),
    "LOG_LEVEL": ("server", "log_level"),
    "AWS_ENDPOINT": ("aws", "endpoint_url"),
    "AWS_REGION": ("aws", "region"),
    "AWS_ACCESS_KEY_ID": ("aws", "access_key_id"),
    "AWS_SECRET_ACCESS_KEY": ("aws", "secret_access_key"),
    "PUBLIC_LOCALSTACK_URL": ("aws", "public_url"),
    "SQS_QUEUE_URL": ("messaging", "queue_url"),
    "SNS_TOPIC_ARN": ("messaging", "topic_arn"),
}


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Load and parse YAML configuration file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Parsed configuration dictionary

    Raises:
        ConfigurationError: If file is missing, empty, or invalid
    """
    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}\n"
            f"Expected location: {config_path.absolute()}\n"
            f"Create the file or set CONFIG_PATH environment variable."
        )

    try:
        with config_path.open() as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config is None:
        raise ConfigurationError(
            f"Configuration file is empty: {config_path}\n"
            f"All configuration values must be explicitly specified."
        )

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration must be a YAML mapping, got {type(config).__name__}"
        )

    return config


def apply_env_overrides(
    config: dict[str, Any],
    environ: Mapping[str, str],
) -> dict[str, Any]:
    """
    Overlay deployment values from environment variables.

    Only variables listed in ENV_OVERRIDES are consulted. Empty values are
    ignored so that an exported-but-blank variable does not wipe a setting.

    Args:
        config: Parsed YAML configuration
        environ: Environment mapping to read from

    Returns:
        New configuration dictionary with overrides applied
    """
    result = {key: dict(value) if isinstance(value, dict) else value for key, value in config.items()}

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if not value:
            continue
        section_values = result.get(section)
        if not isinstance(section_values, dict):
            section_values = {}
            result[section] = section_values
        section_values[key] = value

    return result


def get_config_path() -> Path:
    """
    Determine configuration file path.

    Uses CONFIG_PATH environment variable if set, otherwise defaults
    to ./config.yaml relative to working directory.

    Returns:
        Path to configuration file
    """
    config_path_str = os.environ.get("CONFIG_PATH")
    if config_path_str is None:
        config_path_str = "config.yaml"
    return Path(config_path_str)


@lru_cache
def get_settings() -> Settings:
    """
    Load and validate configuration.

    Cached to ensure single instance across application.
    Called once at startup - fails fast on invalid config.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: Config file missing or invalid
    """
    config_path = get_config_path()
    yaml_config = apply_env_overrides(load_yaml_config(config_path), os.environ)

    try:
        return Settings(**yaml_config)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}\n"
            f"All configuration values must be explicitly specified.\n"
            f"No default values are allowed."
        ) from e


def clear_settings_cache() -> None:
    """Clear the settings cache. Used in testing."""
    get_settings.cache_clear()


# Keywords that indicate sensitive data (case-insensitive)
SENSITIVE_KEYWORDS: frozenset[str] = frozenset(
    {
        "key",
        "secret",
        "pass",
        "password",
        "token",
        "credential",
        "auth",
        "private",
        "bearer",
    }
)

_SENSITIVE_PATTERN = re.compile(
    r"(" + "|".join(re.escape(kw) for kw in SENSITIVE_KEYWORDS) + r")",
    re.IGNORECASE,
)


def is_sensitive_key(key: str) -> bool:
    """
    Check if a configuration key contains sensitive keywords.

    Args:
        key: Configuration key name

    Returns:
        True if the key likely contains sensitive data
    """
    return bool(_SENSITIVE_PATTERN.search(key))


REDACTION_MARKER: str = "[REDACTED]"


def redact_sensitive_values(
    data: dict[str, Any],
    redaction_marker: str,
) -> dict[str, Any]:
    """
    Recursively redact sensitive values from configuration.

    Used by the /info endpoint and the startup log.

    Args:
        data: Configuration dictionary
        redaction_marker: String to replace sensitive values

    Returns:
        New dictionary with sensitive values redacted
    """
    result: dict[str, Any] = {}

    for key, value in data.items():
        if is_sensitive_key(key):
            result[key] = redaction_marker
        elif isinstance(value, dict):
            result[key] = redact_sensitive_values(value, redaction_marker)
        elif isinstance(value, (list, tuple)):
            result[key] = [
                redact_sensitive_values(item, redaction_marker) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def get_safe_config() -> dict[str, Any]:
    """
    Get configuration with sensitive values redacted.

    Returns:
        Configuration dictionary safe for logging/API exposure
    """
    settings = get_settings()
    raw_config = settings.model_dump()
    return redact_sensitive_values(raw_config, REDACTION_MARKER)
