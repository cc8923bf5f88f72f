"""Logging configuration for bootstrapped applications."""

import logging
import logging.config
import os
from collections.abc import Mapping
from typing import Optional

from lightwire.errors import ConfigurationError

__all__ = ["configure_logging", "level_for_environment", "LOG_LEVEL_ENV"]

LOG_LEVEL_ENV = "LIGHTWIRE_LOG_LEVEL"

_ENVIRONMENT_LEVELS = {
    "dev": logging.DEBUG,
    "development": logging.DEBUG,
    "test": logging.DEBUG,
    "prod": logging.WARNING,
    "production": logging.WARNING,
}


def level_for_environment(environment: str) -> int:
    return _ENVIRONMENT_LEVELS.get(environment.lower(), logging.INFO)


def configure_logging(
    environment: str,
    *,
    env: Optional[Mapping[str, str]] = None,
    force: bool = False,
):
    """Configure the root logger for the given deployment environment.

    The level follows the environment (``dev`` logs debug output, ``prod``
    only warnings) unless ``LIGHTWIRE_LOG_LEVEL`` names a level explicitly.
    When the host application has already installed handlers only the level
    is adjusted, unless ``force`` is set.

    Raises:
        ConfigurationError: If ``LIGHTWIRE_LOG_LEVEL`` does not name a level.
    """
    env = env if env is not None else os.environ
    level = _coerce_level(env.get(LOG_LEVEL_ENV)) or level_for_environment(environment)

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        root_logger.setLevel(level)
        return

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "text",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {"level": level, "handlers": ["stderr"]},
        }
    )


def _coerce_level(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level {value!r} in {LOG_LEVEL_ENV}")
    return level
