"""Exception types raised by the inventory core."""


class InventoryError(Exception):
    """Base error for the inventory core."""

    def __init__(self, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.recoverable = recoverable


class AssetNotFoundError(InventoryError):
    """No asset with the given id exists in the collection."""

    def __init__(self, asset_id: str) -> None:
        super().__init__(f"Asset not found: {asset_id}", recoverable=True)
        self.asset_id = asset_id


class MalformedPersistedStateError(InventoryError):
    """The persisted record could not be decoded as a list of assets."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Persisted inventory is unreadable: {reason}", recoverable=True)
        self.reason = reason


class InvalidDateError(InventoryError, ValueError):
    """A date field could not be parsed as a calendar date."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid date: {value!r}")
        self.value = value


class PersistenceError(InventoryError):
    """Reading or writing the durable record failed."""
