"""
config.py
---------
Centralised configuration for the datatype resolution engine.

Loads settings from environment variables (with .env file support via
python-dotenv). Provides typed settings as a frozen dataclass so
configuration is immutable at runtime.

Design Decision:
    Using a dataclass with class-level defaults means the engine works
    "out of the box" without any .env file, while still allowing
    environment-based overrides for production deployments.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings."""
    log_level: str = field(
        default_factory=lambda: os.getenv("DATATYPE_LOG_LEVEL", "INFO").upper()
    )
    log_file: str | None = field(
        default_factory=lambda: os.getenv("DATATYPE_LOG_FILE")  # None → log to stderr only
    )


@dataclass(frozen=True)
class ResolverConfig:
    """Settings for the process-wide default factory."""
    default_dialect: str = field(
        default_factory=lambda: os.getenv("DATATYPE_DEFAULT_DIALECT", "generic").lower()
    )
    validate_parameters: bool = field(
        default_factory=lambda: _env_flag("DATATYPE_VALIDATE_PARAMETERS")
    )


@dataclass(frozen=True)
class AppConfig:
    """Root application configuration."""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    app_name: str = "Datatype Resolver"
    app_version: str = "1.0.0"


def load_config() -> AppConfig:
    """
    Build and return the application configuration.

    Returns:
        AppConfig: Fully populated (and frozen) configuration object.

    Example::

        cfg = load_config()
        print(cfg.resolver.default_dialect)      # "generic"
        print(cfg.resolver.validate_parameters)  # False
    """
    return AppConfig()


# Module-level singleton used throughout the application
CONFIG: AppConfig = load_config()


def get_log_level() -> int:
    """Convert string log level from config to logging module constant."""
    level = getattr(logging, CONFIG.logging.log_level, None)
    if not isinstance(level, int):
        return logging.INFO
    return level
