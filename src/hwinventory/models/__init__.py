"""Domain models for hwinventory."""

from hwinventory.models.asset import (
    Asset,
    AssetCategory,
    AssetInput,
    AssetStatus,
    AssetUpdate,
    DocumentKind,
    MaintenanceContract,
    ProfessionalSupport,
)
from hwinventory.models.stats import InventoryStats

__all__ = [
    "Asset",
    "AssetCategory",
    "AssetInput",
    "AssetStatus",
    "AssetUpdate",
    "DocumentKind",
    "InventoryStats",
    "MaintenanceContract",
    "ProfessionalSupport",
]
