"""Status derivation engine."""

from hwinventory.engine.status import (
    DEFAULT_NEAR_EXPIRY_DAYS,
    STATUS_LABELS,
    compute_status,
    days_until,
    describe_days_remaining,
    status_label,
    to_date,
    with_recomputed_status,
)

__all__ = [
    "DEFAULT_NEAR_EXPIRY_DAYS",
    "STATUS_LABELS",
    "compute_status",
    "days_until",
    "describe_days_remaining",
    "status_label",
    "to_date",
    "with_recomputed_status",
]
