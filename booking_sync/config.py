"""
Centralized configuration with environment variable overrides.

Backend selection, storage locations, and remote API settings are
configurable here. Nothing is hardcoded in registry or adapter logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

VALID_BACKENDS = ("local", "memory", "remote")


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag from an env var (1/0, true/false, yes/no)."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class StorageConfig:
    """Which backend to use and where the local variant keeps its files."""

    backend: str = os.getenv("STORAGE_BACKEND", "local")
    directory: str = os.getenv("STORAGE_DIR", ".booking_sync")
    seed_sample_data: bool = _safe_bool("SEED_SAMPLE_DATA", "true")


@dataclass(frozen=True)
class RemoteConfig:
    """Settings for the remote HTTP API backend."""

    base_url: str = os.getenv("API_BASE_URL", "https://your-backend-api.com/api")
    timeout_sec: float = _safe_float("API_TIMEOUT_SEC", "10.0")
    token: str = os.getenv("API_TOKEN", "")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.storage.backend not in VALID_BACKENDS:
        raise ValueError(
            f"STORAGE_BACKEND must be one of {VALID_BACKENDS}, got {config.storage.backend!r}"
        )
    if config.storage.backend == "local" and not config.storage.directory.strip():
        raise ValueError("STORAGE_DIR must not be empty for the local backend")
    if config.remote.timeout_sec <= 0:
        raise ValueError(
            f"API_TIMEOUT_SEC must be > 0, got {config.remote.timeout_sec}"
        )
    if not config.remote.base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"API_BASE_URL must be an http(s) URL, got {config.remote.base_url!r}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s' backend", config.storage.backend)
    return config


# Singleton instance
settings = load_config()
