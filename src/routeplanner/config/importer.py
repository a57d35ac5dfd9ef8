"""Import configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .env import optional_env_path, positive_float_env_var
from .storage import StorageConfig, get_storage_config

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_DEPOT_RADIUS_KM: Final[float] = 25.0
DEFAULT_IMPORT_DIRNAME: Final[str] = "import"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """Holds settings for the full import run."""

    import_dir: Path | None
    depot_radius_km: float = DEFAULT_DEPOT_RADIUS_KM
    fallback_import_dir: Path | None = None

    def detect_import_dir(self) -> Path | None:
        """Return the configured import directory, or the data-dir fallback if present."""

        if self.import_dir is not None:
            return self.import_dir
        if self.fallback_import_dir is not None and self.fallback_import_dir.is_dir():
            return self.fallback_import_dir
        return None


def get_import_config(*, storage: StorageConfig | None = None) -> ImportConfig:
    storage_config = storage or get_storage_config()
    return ImportConfig(
        import_dir=optional_env_path("ROUTEPLANNER_IMPORT_DIR"),
        depot_radius_km=positive_float_env_var(
            "ROUTEPLANNER_DEPOT_RADIUS_KM",
            default=DEFAULT_DEPOT_RADIUS_KM,
        ),
        fallback_import_dir=storage_config.resolve_data_dir() / DEFAULT_IMPORT_DIRNAME,
    )
