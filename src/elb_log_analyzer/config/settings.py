"""
Application settings and configuration management.

Supports loading from:
1. YAML config files (elb-log-analyzer.yaml)
2. Environment variables (fallback)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml

from .constants import DEFAULT_TOP_CLIENT_IPS

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Application settings for log parsing and analysis."""

    # File input
    encoding: str = "utf-8"

    # Raise on the first unparseable line instead of skipping it
    strict_validation: bool = False

    # Statistics
    top_client_ips: int = DEFAULT_TOP_CLIENT_IPS

    # Logging
    log_level: str = "INFO"

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        if not self.encoding:
            errors.append("encoding must not be empty")

        if self.top_client_ips < 1:
            errors.append(f"top_client_ips must be >= 1, got {self.top_client_ips}")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, "
                f"got {self.log_level}"
            )

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "encoding": self.encoding,
            "strict_validation": self.strict_validation,
            "top_client_ips": self.top_client_ips,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "Settings":
        """Create Settings from configuration dictionary (e.g., from YAML)."""
        parsing = config.get("parsing", {}) or {}
        analysis = config.get("analysis", {}) or {}
        logging_cfg = config.get("logging", {}) or {}

        return cls(
            encoding=parsing.get("encoding", "utf-8"),
            strict_validation=bool(parsing.get("strict_validation", False)),
            top_client_ips=int(
                analysis.get("top_client_ips", DEFAULT_TOP_CLIENT_IPS)
            ),
            log_level=str(logging_cfg.get("level", "INFO")).upper(),
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""

        def safe_int(key: str, default: int) -> int:
            """Safely parse int from env var, using default on error."""
            try:
                return int(os.environ.get(key, str(default)))
            except ValueError:
                return default

        def safe_bool(key: str, default: bool) -> bool:
            """Safely parse bool from env var."""
            return os.environ.get(key, str(default).lower()).lower() == "true"

        return cls(
            encoding=os.environ.get("ELB_LOG_ENCODING", "utf-8"),
            strict_validation=safe_bool("ELB_LOG_STRICT", False),
            top_client_ips=safe_int("ELB_LOG_TOP_N", DEFAULT_TOP_CLIENT_IPS),
            log_level=os.environ.get("ELB_LOG_LEVEL", "INFO").upper(),
        )


def load_config(config_path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Configuration as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the document is not a mapping
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(
            f"Config file {config_path} must contain a mapping, "
            f"got {type(config).__name__}"
        )
    return config


# Default config file path
DEFAULT_CONFIG_PATH = Path("elb-log-analyzer.yaml")


@lru_cache
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.

    Loads from the YAML config file if available, otherwise from env vars.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Settings instance
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        try:
            return Settings.from_dict(load_config(path))
        except (ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Falling back to environment variables")

    return Settings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
