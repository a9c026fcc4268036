"""Pytest configuration and fixtures."""

import itertools
from datetime import date, timedelta

import pytest

from hwinventory.errors import PersistenceError
from hwinventory.models.asset import AssetInput, MaintenanceContract
from hwinventory.store.inventory import InventoryStore
from hwinventory.store.persistence import MemoryPersistence

# Fixed "today" for every store-level test
TODAY = date(2025, 1, 15)


def make_input(**overrides) -> AssetInput:
    """Build a healthy AssetInput relative to TODAY."""
    fields = {
        "name": "Edge Router",
        "vendor": "Juniper",
        "model": "MX204",
        "serial_number": "NET-0001",
        "category": "network",
        "purchase_date": TODAY - timedelta(days=365),
        "end_of_life": TODAY + timedelta(days=5 * 365),
        "warranty_expiry": TODAY + timedelta(days=2 * 365),
    }
    fields.update(overrides)
    return AssetInput(**fields)


def warning_input(**overrides) -> AssetInput:
    """An input whose warranty expires within the default threshold."""
    return make_input(warranty_expiry=TODAY + timedelta(days=10), **overrides)


def critical_input(**overrides) -> AssetInput:
    """An input whose warranty has already expired."""
    return make_input(warranty_expiry=TODAY - timedelta(days=1), **overrides)


class FlakyPersistence(MemoryPersistence):
    """Memory persistence whose writes can be made to fail."""

    def __init__(self, data: bytes | None = None):
        super().__init__(data)
        self.fail_writes = False

    def write(self, data: bytes) -> None:
        if self.fail_writes:
            raise PersistenceError("quota exceeded")
        super().write(data)


@pytest.fixture
def persistence() -> FlakyPersistence:
    """Empty in-memory persistence."""
    return FlakyPersistence()


@pytest.fixture
def empty_seed():
    """Seed factory producing no assets."""
    return lambda: []


@pytest.fixture
def store(persistence, empty_seed) -> InventoryStore:
    """A loaded store with an empty collection, a fixed clock and predictable ids."""
    counter = itertools.count(1)
    inventory = InventoryStore(
        persistence,
        seed=empty_seed,
        clock=lambda: TODAY,
        id_factory=lambda: f"asset-{next(counter)}",
    )
    inventory.load()
    return inventory


@pytest.fixture
def populated_store(store) -> InventoryStore:
    """A store holding one healthy, one warning and one critical asset."""
    store.create(make_input(name="Core Switch", vendor="Cisco Systems", serial_number="NET-1"))
    store.create(
        warning_input(
            name="File Server",
            vendor="Dell Technologies",
            model="PowerEdge R750",
            serial_number="SRV-1",
            category="server",
            maintenance_contract=MaintenanceContract(
                has_contract=True,
                provider="Dell ProSupport",
                expiry_date=TODAY + timedelta(days=400),
            ),
        )
    )
    store.create(
        critical_input(
            name="Old NAS",
            vendor="Synology",
            model="DS918+",
            serial_number="STO-1",
            category="storage",
            professional_support={"has_support": True, "provider": "Synology"},
        )
    )
    return store
