"""hwinventory - hardware asset inventory with lifecycle-derived health status."""

__version__ = "0.1.0"

from hwinventory.engine.status import compute_status, days_until
from hwinventory.errors import (
    AssetNotFoundError,
    InvalidDateError,
    InventoryError,
    MalformedPersistedStateError,
    PersistenceError,
)
from hwinventory.models.asset import (
    Asset,
    AssetCategory,
    AssetInput,
    AssetStatus,
    AssetUpdate,
    MaintenanceContract,
    ProfessionalSupport,
)
from hwinventory.models.stats import InventoryStats
from hwinventory.store.inventory import InventoryStore
from hwinventory.store.persistence import JsonFilePersistence, MemoryPersistence

__all__ = [
    "Asset",
    "AssetCategory",
    "AssetInput",
    "AssetNotFoundError",
    "AssetStatus",
    "AssetUpdate",
    "InvalidDateError",
    "InventoryError",
    "InventoryStats",
    "InventoryStore",
    "JsonFilePersistence",
    "MaintenanceContract",
    "MalformedPersistedStateError",
    "MemoryPersistence",
    "PersistenceError",
    "ProfessionalSupport",
    "compute_status",
    "days_until",
]
