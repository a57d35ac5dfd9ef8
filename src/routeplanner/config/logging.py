"""Root logger setup for the CLI and worker thread."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

LOG_LEVEL_ENV = "ROUTEPLANNER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] [%(name)s] %(message)s"

# Library loggers that drown out import progress at INFO.
_NOISY_LOGGERS = ("sqlalchemy.engine", "alembic.runtime.migration")


def resolve_log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``ROUTEPLANNER_LOG_LEVEL`` or ``default``."""

    value = optional_env_var(LOG_LEVEL_ENV)
    if value is None:
        return default
    level = logging.getLevelNamesMapping().get(value.upper())
    if level is None:
        raise ConfigurationError(f"{LOG_LEVEL_ENV} must be a logging level name, got {value!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    ``level`` defaults to ``ROUTEPLANNER_LOG_LEVEL`` (INFO when unset). Thread names
    are part of the format so worker lines can be told apart from the CLI poller.
    SQLAlchemy and Alembic chatter is held at WARNING unless DEBUG is requested.
    """

    effective = resolve_log_level() if level is None else level
    logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    if effective > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
