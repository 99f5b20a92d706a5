# ==============================================
# Logging Setup
# ==============================================
#
# PURPOSE:
#   Configure structlog once from an entry point (the CLI does).
#   Library code never configures logging on import.
#
# CONVENTION:
#   Every module logs through structlog.get_logger(__name__) with a
#   snake_case event name and key/value context:
#
#     log.warning("duplicate_write", category="FUEL", id="f1")
#
# OUTPUT:
#   stderr, so command output on stdout stays clean.
#   "console" renders key=value lines, "json" one object per line.
#
# ==============================================

import sys
from typing import List, Optional

import structlog
from structlog.typing import Processor

from sophena.config import LOG_LEVELS, LoggingConfig, get_config
from sophena.errors import ConfigError


def _level_number(level_name: str) -> int:
    level = LOG_LEVELS.get(level_name.upper())
    if level is None:
        raise ConfigError(f"log level must be one of {list(LOG_LEVELS)}, got {level_name!r}")
    return level


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure structlog for console or JSON output.

    Args:
        config: Logging settings. Defaults to the ``logging`` section of
            :func:`sophena.config.get_config`.

    Raises:
        ConfigError: If the level is not a known log level
    """
    if config is None:
        config = get_config().logging

    shared_processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if config.renderer == "json":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(config.level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
