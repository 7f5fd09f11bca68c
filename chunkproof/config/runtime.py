"""
Runtime Configuration

Central configuration for chunk hashing and logging.

Precedence (highest first):
1. Environment variables (CHUNKPROOF_* prefix, .env supported)
2. JSON configuration file
3. Defaults
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from chunkproof.chunking.chunk_hasher import DEFAULT_CHUNK_SIZE, validate_chunk_size
from chunkproof.schemas.errors import InvalidArgumentException
from chunkproof.sources import DEFAULT_READ_SIZE

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "CHUNKPROOF_"

# Searched in order when no config path is given
DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("chunkproof.json"),
    Path(".chunkproof.json"),
    Path.home() / ".config" / "chunkproof" / "config.json",
)


def _parse_int(name: str, raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise InvalidArgumentException(
        f"{name} must be an integer, got {raw!r}",
        argument=name,
    )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON file
    - Programmatic construction
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE
    read_size: int = DEFAULT_READ_SIZE
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        validate_chunk_size(self.chunk_size)
        if isinstance(self.read_size, bool) or not isinstance(self.read_size, int) or self.read_size <= 0:
            raise InvalidArgumentException(
                f"Read size must be a positive integer, got {self.read_size!r}",
                argument="read_size",
            )
        if not isinstance(self.log_level, str) or not self.log_level.strip():
            raise InvalidArgumentException(
                f"Log level must be a non-empty string, got {self.log_level!r}",
                argument="log_level",
            )
        self.log_level = self.log_level.upper()

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CHUNKPROOF_CHUNK_SIZE: Chunk size in bytes
        - CHUNKPROOF_READ_SIZE: Block size for whole-file hashing
        - CHUNKPROOF_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
        - CHUNKPROOF_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}CHUNK_SIZE"):
            overrides["chunk_size"] = _parse_int(
                f"{ENV_PREFIX}CHUNK_SIZE", os.getenv(f"{ENV_PREFIX}CHUNK_SIZE")
            )
        if os.getenv(f"{ENV_PREFIX}READ_SIZE"):
            overrides["read_size"] = _parse_int(
                f"{ENV_PREFIX}READ_SIZE", os.getenv(f"{ENV_PREFIX}READ_SIZE")
            )
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise InvalidArgumentException(
                f"Config file {path} must contain a JSON object",
                argument="config",
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        kwargs: dict[str, Any] = {}
        if "chunk_size" in data:
            kwargs["chunk_size"] = _parse_int("chunk_size", data["chunk_size"])
        if "read_size" in data:
            kwargs["read_size"] = _parse_int("read_size", data["read_size"])
        if data.get("log_level"):
            kwargs["log_level"] = str(data["log_level"])
        if "log_file" in data:
            kwargs["log_file"] = data["log_file"]
        return cls(**kwargs)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        new_config.__post_init__()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return asdict(self)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. When no path is given,
    the first existing file in DEFAULT_CONFIG_PATHS is used.

    Args:
        config_path: Optional path to a JSON config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set the default runtime configuration (None resets to env-derived defaults)."""
    global _default_config
    _default_config = config
