"""
Gateway Configuration.

Settings for the upstream quote API and for logging, loaded from an
optional YAML or JSON file plus environment variables.

Usage:
    from quotegateway.core import load_config

    config = load_config("config/quotegateway.yaml")
    api_key = config.source.resolve_api_key()
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"
DEFAULT_API_KEY = "demo"

API_KEY_ENV_VARS = ("ALPHA_VANTAGE_API_KEY", "NEXT_PUBLIC_ALPHA_VANTAGE_API_KEY")


@dataclass
class SourceSettings:
    """
    Settings for the upstream API.

    Attributes:
        base_url: Query endpoint
        api_key: API key, or a ``${VAR}`` / ``$VAR`` environment reference
        timeout: Request timeout in seconds
        retry_count: Number of retries on 429/5xx and connection errors
        retry_delay: Base delay between retries
        requests_per_minute: Client-side throttle, None disables it
        history_limit: Maximum number of points returned by get_history
    """
    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    timeout: float = 30.0
    retry_count: int = 2
    retry_delay: float = 1.0
    requests_per_minute: int | None = None
    history_limit: int = 100

    def resolve_api_key(self) -> str:
        """Resolve the API key, falling back to the public "demo" key."""
        key = self.api_key

        if key and key.startswith("${") and key.endswith("}"):
            key = os.environ.get(key[2:-1])
        elif key and key.startswith("$"):
            key = os.environ.get(key[1:])

        if not key:
            for env_var in API_KEY_ENV_VARS:
                key = os.environ.get(env_var)
                if key:
                    break

        return key or DEFAULT_API_KEY


@dataclass
class LoggingSettings:
    """
    Logging settings.

    Attributes:
        level: Log level
        structured: Emit JSON lines instead of human-readable output
    """
    level: str = "INFO"
    structured: bool = False


@dataclass
class GatewayConfig:
    """Complete gateway configuration."""
    source: SourceSettings = field(default_factory=SourceSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["source"].pop("api_key", None)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GatewayConfig":
        source_data = data.get("source") or {}
        logging_data = data.get("logging") or {}

        source = SourceSettings(**source_data) if source_data else SourceSettings()
        source.timeout = float(source.timeout)
        source.retry_count = int(source.retry_count)
        source.history_limit = int(source.history_limit)
        if source.requests_per_minute is not None:
            source.requests_per_minute = int(source.requests_per_minute)

        log_settings = LoggingSettings(**logging_data) if logging_data else LoggingSettings()

        return cls(source=source, logging=log_settings)


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "QUOTEGATEWAY_",
) -> GatewayConfig:
    """
    Load configuration from file and environment.

    Args:
        config_path: Path to config file (YAML or JSON)
        env_prefix: Environment variable prefix

    Returns:
        Loaded configuration
    """
    config_data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix in (".yaml", ".yml"):
                    config_data = yaml.safe_load(f) or {}
                elif path.suffix == ".json":
                    config_data = json.load(f)
                else:
                    logger.warning(f"Unknown config format: {path.suffix}")
        else:
            logger.debug(f"Config file {path} not found, using defaults")

    _apply_env_overrides(config_data, env_prefix)

    return GatewayConfig.from_dict(config_data)


def _apply_env_overrides(config: dict[str, Any], prefix: str) -> None:
    """Apply environment variable overrides to config."""
    env_mappings = {
        f"{prefix}BASE_URL": ("source", "base_url"),
        f"{prefix}TIMEOUT": ("source", "timeout"),
        f"{prefix}RETRY_COUNT": ("source", "retry_count"),
        f"{prefix}LOG_LEVEL": ("logging", "level"),
    }

    for env_var, config_path in env_mappings.items():
        value = os.environ.get(env_var)
        if value:
            section, key = config_path
            config.setdefault(section, {})[key] = value
