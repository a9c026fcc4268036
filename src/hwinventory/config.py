"""Settings for the command line, read from YAML and the environment.

Supports:
- HWINVENTORY_CONFIG=hwinventory.yaml (settings file, optional)
- HWINVENTORY_DATA_DIR=~/.hwinventory (directory holding the inventory record)
- HWINVENTORY_STORAGE_KEY=hardware-inventory (name of the inventory record)
- HWINVENTORY_THRESHOLD_DAYS=30 (near-expiry threshold)
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from hwinventory.engine.status import DEFAULT_NEAR_EXPIRY_DAYS
from hwinventory.models.asset import AssetCategory
from hwinventory.store.persistence import DEFAULT_STORAGE_KEY

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "hwinventory.yaml"
DEFAULT_DATA_DIR = "~/.hwinventory"


class Settings(BaseModel):
    """Runtime settings."""

    data_dir: Path = Field(
        default=Path(DEFAULT_DATA_DIR),
        description="Directory holding the persisted inventory",
    )
    storage_key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        min_length=1,
        description="Name of the persisted inventory record",
    )
    threshold_days: int = Field(
        default=DEFAULT_NEAR_EXPIRY_DAYS,
        ge=0,
        description="Days before an expiry at which status becomes 'warning'",
    )
    categories: list[str] = Field(
        default_factory=lambda: [c.value for c in AssetCategory],
        min_length=1,
        description="Allowed hardware categories",
    )
    require_unit_cost: bool = Field(
        default=False,
        description="Whether new assets must carry a unit cost",
    )

    model_config = {"extra": "forbid"}

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        with path.open() as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    def to_yaml(self, path: Path | str) -> None:
        """Save settings to a YAML file."""
        path = Path(path)
        data = self.model_dump(mode="json")
        with path.open("w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def get_config_path() -> Path:
    """Get the settings file path from environment or default."""
    return Path(os.environ.get("HWINVENTORY_CONFIG", DEFAULT_CONFIG_FILE))


def load_settings(path: Path | None = None) -> Settings:
    """Build settings from the YAML file (if present) and environment overrides."""
    if path is None:
        path = get_config_path()

    if path.exists():
        logger.debug("Reading settings from %s", path)
        settings = Settings.from_yaml(path)
    else:
        settings = Settings()

    overrides: dict[str, object] = {}
    if data_dir := os.environ.get("HWINVENTORY_DATA_DIR"):
        overrides["data_dir"] = data_dir
    if storage_key := os.environ.get("HWINVENTORY_STORAGE_KEY"):
        overrides["storage_key"] = storage_key
    if threshold := os.environ.get("HWINVENTORY_THRESHOLD_DAYS"):
        overrides["threshold_days"] = threshold

    if overrides:
        settings = Settings.model_validate({**settings.model_dump(), **overrides})
    return settings
