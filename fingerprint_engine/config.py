"""
Configuration management for Fingerprint Engine.
"""

import yaml
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field

from .weights import DEFAULT_WEIGHTS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Signal configuration
    signals_config_path: str = Field(
        "config/signals.yaml",
        description="Path to signals configuration file"
    )

    # Processing settings
    concurrent_sampling: bool = Field(
        False,
        description="Sample providers concurrently (combination order is unaffected)"
    )
    adjust_on_start: bool = Field(
        False,
        description="Re-derive weights from signal entropy before generating"
    )
    log_level: str = Field("INFO", description="Root log level")

    # Redis configuration (for publishing the weight table)
    redis_host: str = Field("localhost", description="Redis host")
    redis_port: int = Field(6379, description="Redis port")
    redis_password: str = Field("", description="Redis password")
    redis_db: int = Field(1, description="Redis database number")

    # Weights cache settings
    weights_cache_enabled: bool = Field(
        False,
        description="Publish the weight table to Redis for cross-service access"
    )
    weights_cache_key: str = Field(
        "fingerprint:weights",
        description="Redis key holding the published weight table"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def load_signals_config(self) -> dict:
        """Load signals configuration from YAML file."""
        config_path = Path(self.signals_config_path)

        if not config_path.exists():
            # Return default config if file doesn't exist
            return self._default_signals_config()

        with open(config_path, "r") as f:
            return yaml.safe_load(f) or self._default_signals_config()

    def _default_signals_config(self) -> dict:
        """Default signals configuration."""
        return {
            "signals": {
                name: {"enabled": True, "weight": weight}
                for name, weight in DEFAULT_WEIGHTS.items()
            },
            "engine": {
                "concurrent_sampling": False,
            },
        }
