"""Health status engine for hardware assets.

Status is derived purely from an asset's lifecycle dates and the date passed
in as ``today``. Nothing here reads the clock or touches storage.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

from hwinventory.errors import InvalidDateError
from hwinventory.models.asset import Asset, AssetStatus, MaintenanceContract

# Days before an expiry at which an asset first needs attention.
# Applied uniformly to warranty, end of life and maintenance.
DEFAULT_NEAR_EXPIRY_DAYS = 30

STATUS_LABELS = {
    AssetStatus.HEALTHY: "Healthy",
    AssetStatus.WARNING: "Attention Needed",
    AssetStatus.CRITICAL: "Critical",
}

DateLike = date | datetime | str


class LifecycleDates(Protocol):
    """The fields of an asset the engine reads."""

    end_of_life: DateLike
    warranty_expiry: DateLike
    maintenance_contract: MaintenanceContract


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO-8601 string to a calendar date.

    Time of day is dropped.

    Raises:
        InvalidDateError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            raise InvalidDateError(value) from None
    raise InvalidDateError(value)


def days_until(target: DateLike, today: DateLike) -> int:
    """Whole days from ``today`` to ``target``; negative once the date has passed."""
    return (to_date(target) - to_date(today)).days


def compute_status(
    asset: LifecycleDates,
    today: DateLike,
    threshold_days: int = DEFAULT_NEAR_EXPIRY_DAYS,
) -> AssetStatus:
    """Classify an asset as healthy, warning or critical.

    Rules are checked in order and the first match wins:

    1. End of life has passed -> critical
    2. Warranty has expired -> critical
    3. Maintenance contract has expired -> warning
    4. Warranty expires within the threshold -> warning
    5. End of life is within the threshold -> warning
    6. Maintenance contract expires within the threshold -> warning
    7. Otherwise -> healthy

    A maintenance expiry date is honoured whenever it is present.

    Args:
        asset: Anything exposing the lifecycle fields of an asset
        today: The current date
        threshold_days: Near-expiry horizon in days

    Returns:
        The derived AssetStatus
    """
    today = to_date(today)
    end_of_life = to_date(asset.end_of_life)
    warranty_expiry = to_date(asset.warranty_expiry)

    contract = asset.maintenance_contract
    maintenance_expiry = (
        to_date(contract.expiry_date) if contract and contract.expiry_date else None
    )

    if today > end_of_life:
        return AssetStatus.CRITICAL
    if today > warranty_expiry:
        return AssetStatus.CRITICAL
    if maintenance_expiry and today > maintenance_expiry:
        return AssetStatus.WARNING

    if days_until(warranty_expiry, today) <= threshold_days:
        return AssetStatus.WARNING
    if days_until(end_of_life, today) <= threshold_days:
        return AssetStatus.WARNING
    if maintenance_expiry and days_until(maintenance_expiry, today) <= threshold_days:
        return AssetStatus.WARNING

    return AssetStatus.HEALTHY


def with_recomputed_status(
    asset: Asset,
    today: DateLike,
    threshold_days: int = DEFAULT_NEAR_EXPIRY_DAYS,
) -> Asset:
    """Return a copy of ``asset`` whose status matches its dates."""
    status = compute_status(asset, today, threshold_days)
    if status == asset.status:
        return asset
    return asset.model_copy(update={"status": status})


def status_label(status: AssetStatus | str) -> str:
    """Human-readable label for a status."""
    return STATUS_LABELS[AssetStatus(status)]


def describe_days_remaining(
    target: DateLike,
    today: DateLike,
    threshold_days: int = DEFAULT_NEAR_EXPIRY_DAYS,
) -> str:
    """Short remaining-time text for tables: 'Expired', '12d left' or '400d'."""
    days = days_until(target, today)
    if days < 0:
        return "Expired"
    if days <= threshold_days:
        return f"{days}d left"
    return f"{days}d"
