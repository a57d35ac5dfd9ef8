"""Environment variable loaders for configuration."""

from __future__ import annotations

import math
import os
from pathlib import Path

from .errors import ConfigurationError


def optional_env_var(name: str) -> str | None:
    """Return the stripped value of ``name`` or ``None`` when absent/blank."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def optional_env_path(name: str) -> Path | None:
    value = optional_env_var(name)
    if value is None:
        return None
    return Path(value).expanduser()


def positive_float_env_var(name: str, *, default: float) -> float:
    """Parse a strictly positive float from the environment."""

    value = optional_env_var(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(parsed) or parsed <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")
    return parsed
