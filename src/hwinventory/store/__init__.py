"""Inventory store and persistence adapters."""

from hwinventory.store.inventory import InventoryStore, decode_assets, encode_assets
from hwinventory.store.persistence import (
    DEFAULT_STORAGE_KEY,
    JsonFilePersistence,
    MemoryPersistence,
    PersistencePort,
)
from hwinventory.store.seed import seed_assets

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "InventoryStore",
    "JsonFilePersistence",
    "MemoryPersistence",
    "PersistencePort",
    "decode_assets",
    "encode_assets",
    "seed_assets",
]
