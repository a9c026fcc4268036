"""Sample inventory adopted on first run, when nothing has been persisted."""

from pydantic import TypeAdapter

from hwinventory.models.asset import Asset

SEED_RECORDS: list[dict] = [
    {
        "id": "1",
        "name": "Dell PowerEdge R750",
        "vendor": "Dell Technologies",
        "model": "PowerEdge R750",
        "serialNumber": "SRV-2024-001",
        "category": "server",
        "unitCost": 8450.0,
        "purchaseDate": "2023-06-15",
        "endOfLife": "2028-06-15",
        "warrantyExpiry": "2026-06-15",
        "maintenanceContract": {
            "hasContract": True,
            "expiryDate": "2025-06-15",
            "provider": "Dell ProSupport",
        },
        "professionalSupport": {
            "hasSupport": True,
            "provider": "Dell Technologies",
            "contactInfo": "support@dell.com",
        },
        "documents": {},
        "status": "healthy",
        "notes": "Primary production server",
        "createdAt": "2023-06-15",
        "updatedAt": "2024-01-15",
    },
    {
        "id": "2",
        "name": "HP ProLiant DL380",
        "vendor": "Hewlett Packard Enterprise",
        "model": "ProLiant DL380 Gen10",
        "serialNumber": "SRV-2022-045",
        "category": "server",
        "unitCost": 7200.0,
        "purchaseDate": "2022-03-10",
        "endOfLife": "2027-03-10",
        "warrantyExpiry": "2025-03-10",
        "maintenanceContract": {
            "hasContract": True,
            "expiryDate": "2025-02-01",
            "provider": "HPE Care Pack",
        },
        "professionalSupport": {
            "hasSupport": True,
            "provider": "HPE",
            "contactInfo": "hpe-support@hpe.com",
        },
        "documents": {},
        "status": "warning",
        "notes": "Database server - maintenance expiring soon",
        "createdAt": "2022-03-10",
        "updatedAt": "2024-01-10",
    },
    {
        "id": "3",
        "name": "Cisco Catalyst 9300",
        "vendor": "Cisco Systems",
        "model": "Catalyst 9300-48P",
        "serialNumber": "NET-2021-012",
        "category": "network",
        "purchaseDate": "2021-01-20",
        "endOfLife": "2026-01-20",
        "warrantyExpiry": "2024-01-20",
        "maintenanceContract": {"hasContract": False},
        "professionalSupport": {"hasSupport": False},
        "documents": {},
        "status": "critical",
        "notes": "Core network switch - warranty expired!",
        "createdAt": "2021-01-20",
        "updatedAt": "2024-01-01",
    },
]

_assets_adapter = TypeAdapter(list[Asset])


def seed_assets() -> list[Asset]:
    """Return a fresh copy of the sample inventory."""
    return _assets_adapter.validate_python(SEED_RECORDS)
