# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - PackConfig (dataclass)
#     default_path: str | None   (default None)
#     compression: str           (default "deflated", or "stored")
#     json_indent: int | None    (default None = compact)
#
# - LoggingConfig (dataclass)
#     level: str                 (default "INFO")
#     renderer: str              (default "console", or "json")
#
# - AppConfig (dataclass)
#     pack: PackConfig
#     logging: LoggingConfig
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests change the environment).
#
# USAGE:
# ------
#   from sophena.config import get_config
#   config = get_config()
#   print(config.pack.compression)
#
# ==============================================

import logging
import os
import zipfile
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

from sophena.errors import ConfigError


COMPRESSION_METHODS = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}

LOG_RENDERERS = ("console", "json")

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass
class PackConfig:
    """Data pack (archive) configuration."""
    default_path: Optional[str] = None
    compression: str = "deflated"
    json_indent: Optional[int] = None

    @property
    def zip_compression(self) -> int:
        return COMPRESSION_METHODS[self.compression]


@dataclass
class LoggingConfig:
    """Diagnostic output configuration."""
    level: str = "INFO"
    renderer: str = "console"


@dataclass
class AppConfig:
    """Main application configuration."""
    pack: PackConfig = field(default_factory=PackConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _parse_indent(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    try:
        indent = int(raw)
    except ValueError:
        raise ConfigError(f"SOPHENA_JSON_INDENT must be an integer, got {raw!r}")
    if indent < 0:
        raise ConfigError(f"SOPHENA_JSON_INDENT must not be negative, got {indent}")
    return indent


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ConfigError: If a variable holds a value that cannot be used
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    compression = os.getenv("SOPHENA_COMPRESSION", "deflated").strip().lower()
    if compression not in COMPRESSION_METHODS:
        raise ConfigError(
            f"SOPHENA_COMPRESSION must be one of {sorted(COMPRESSION_METHODS)}, "
            f"got {compression!r}"
        )

    level = os.getenv("SOPHENA_LOG_LEVEL", "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"SOPHENA_LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {level!r}")

    renderer = os.getenv("SOPHENA_LOG_FORMAT", "console").strip().lower()
    if renderer not in LOG_RENDERERS:
        raise ConfigError(
            f"SOPHENA_LOG_FORMAT must be one of {list(LOG_RENDERERS)}, got {renderer!r}"
        )

    pack_config = PackConfig(
        default_path=os.getenv("SOPHENA_PACK_PATH") or None,
        compression=compression,
        json_indent=_parse_indent(os.getenv("SOPHENA_JSON_INDENT")),
    )

    logging_config = LoggingConfig(
        level=level,
        renderer=renderer,
    )

    _config_instance = AppConfig(pack=pack_config, logging=logging_config)
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
