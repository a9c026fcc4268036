"""Inventory store: the authoritative collection of assets for a session."""

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import date

from pydantic import TypeAdapter, ValidationError

from hwinventory.engine.status import (
    DEFAULT_NEAR_EXPIRY_DAYS,
    DateLike,
    to_date,
    with_recomputed_status,
)
from hwinventory.errors import (
    AssetNotFoundError,
    MalformedPersistedStateError,
    PersistenceError,
)
from hwinventory.models.asset import Asset, AssetInput, AssetStatus, AssetUpdate
from hwinventory.models.stats import InventoryStats
from hwinventory.store.persistence import PersistencePort
from hwinventory.store.seed import seed_assets

logger = logging.getLogger(__name__)

Listener = Callable[[list[Asset]], None]

_assets_adapter = TypeAdapter(list[Asset])


def decode_assets(raw: bytes) -> list[Asset]:
    """Decode a persisted record.

    Raises:
        MalformedPersistedStateError: If the bytes are not a JSON array of
            assets with unique ids
    """
    try:
        assets = _assets_adapter.validate_json(raw)
    except ValidationError as e:
        raise MalformedPersistedStateError(f"{e.error_count()} validation error(s)") from e
    except ValueError as e:
        raise MalformedPersistedStateError(str(e)) from e

    seen: set[str] = set()
    for asset in assets:
        if asset.id in seen:
            raise MalformedPersistedStateError(f"duplicate asset id {asset.id!r}")
        seen.add(asset.id)
    return assets


def encode_assets(assets: Iterable[Asset]) -> bytes:
    """Encode assets as a JSON array with camelCase keys."""
    return _assets_adapter.dump_json(list(assets), by_alias=True, indent=2)


class InventoryStore:
    """Owns the asset collection, keeps status derived and persists every change.

    The collection is read from ``persistence`` on first access. Each
    successful create, update or delete writes the full collection before
    returning; if the write fails the in-memory collection is left as it was
    and PersistenceError propagates.
    """

    def __init__(
        self,
        persistence: PersistencePort,
        *,
        threshold_days: int = DEFAULT_NEAR_EXPIRY_DAYS,
        seed: Callable[[], list[Asset]] = seed_assets,
        clock: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._persistence = persistence
        self.threshold_days = threshold_days
        self._seed = seed
        self._clock = clock
        self._id_factory = id_factory
        self._assets: list[Asset] = []
        self._ready = False
        self._listeners: list[Listener] = []
        self.recovered_from_corruption = False

    @property
    def ready(self) -> bool:
        """Whether the collection has been loaded."""
        return self._ready

    @property
    def assets(self) -> list[Asset]:
        """Snapshot of the current collection, in insertion order."""
        self._ensure_loaded()
        return list(self._assets)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every load and mutation.

        Listener errors are logged and do not reach the caller of the mutation.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Loading ---------------------------------------------------------

    def load(self, today: DateLike | None = None) -> tuple[list[Asset], bool]:
        """(Re)load the collection from persistence, seeding it on first run.

        An unreadable or corrupt record is treated as absent: a warning is
        logged, ``recovered_from_corruption`` is set and the seed is adopted.

        Returns:
            The collection with freshly derived status, and the ready flag
        """
        today = self._today(today)
        self.recovered_from_corruption = False

        loaded: list[Asset] | None = None
        try:
            raw = self._persistence.read()
            if raw is not None:
                loaded = decode_assets(raw)
        except (MalformedPersistedStateError, PersistenceError) as e:
            logger.warning("Discarding persisted inventory, falling back to sample data: %s", e)
            self.recovered_from_corruption = True

        if loaded is None:
            assets = self._recompute(self._seed(), today)
            try:
                self._persistence.write(encode_assets(assets))
            except PersistenceError as e:
                logger.warning("Could not persist sample inventory: %s", e)
            logger.info("Initialized inventory with %d sample assets", len(assets))
        else:
            assets = self._recompute(loaded, today)
            logger.info("Loaded %d assets", len(assets))

        self._assets = assets
        self._ready = True
        self._notify()
        return list(self._assets), self._ready

    # --- Mutations -------------------------------------------------------

    def create(self, data: AssetInput | dict, today: DateLike | None = None) -> Asset:
        """Add a new asset and return it with id, timestamps and status set."""
        if not isinstance(data, AssetInput):
            data = AssetInput.model_validate(data)
        self._ensure_loaded()
        today = self._today(today)

        fields = data.model_dump()
        fields.update(id=self._new_id(), created_at=today, updated_at=today)
        asset = self._recompute([Asset.model_validate(fields)], today)[0]

        self._commit([*self._assets, asset])
        logger.info("Created asset %s (%s)", asset.id, asset.name)
        return asset

    def update(
        self,
        asset_id: str,
        changes: AssetUpdate | dict,
        today: DateLike | None = None,
    ) -> Asset:
        """Merge ``changes`` into an existing asset and return the result.

        Raises:
            AssetNotFoundError: If no asset has this id
        """
        self._ensure_loaded()
        index = self._index_of(asset_id)
        if not isinstance(changes, AssetUpdate):
            changes = AssetUpdate.model_validate(changes)
        today = self._today(today)

        fields = self._assets[index].model_dump()
        fields.update(changes.changes())
        fields["updated_at"] = today
        updated = self._recompute([Asset.model_validate(fields)], today)[0]

        assets = list(self._assets)
        assets[index] = updated
        self._commit(assets)
        logger.info("Updated asset %s (%s)", asset_id, ", ".join(sorted(changes.changes())))
        return updated

    def delete(self, asset_id: str) -> None:
        """Remove an asset. Unknown ids are ignored."""
        self._ensure_loaded()
        remaining = [a for a in self._assets if a.id != asset_id]
        removed = len(remaining) != len(self._assets)
        self._commit(remaining)
        if removed:
            logger.info("Deleted asset %s", asset_id)
        else:
            logger.debug("Delete of unknown asset %s ignored", asset_id)

    # --- Views -----------------------------------------------------------

    def get(self, asset_id: str) -> Asset:
        """Return a single asset.

        Raises:
            AssetNotFoundError: If no asset has this id
        """
        self._ensure_loaded()
        return self._assets[self._index_of(asset_id)]

    def query(
        self,
        *,
        status: AssetStatus | str | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> list[Asset]:
        """Filter the collection; all given filters must match.

        ``search`` is a case-insensitive substring match against name,
        vendor, model and serial number. Order is preserved.
        """
        self._ensure_loaded()
        needle = search.lower() if search else None

        results = []
        for asset in self._assets:
            if status is not None and asset.status != status:
                continue
            if category is not None and asset.category != category:
                continue
            if needle is not None and not _matches(asset, needle):
                continue
            results.append(asset)
        return results

    def aggregate(self) -> InventoryStats:
        """Counts over the full collection."""
        self._ensure_loaded()
        return InventoryStats(
            total=len(self._assets),
            healthy=sum(1 for a in self._assets if a.status == AssetStatus.HEALTHY),
            warning=sum(1 for a in self._assets if a.status == AssetStatus.WARNING),
            critical=sum(1 for a in self._assets if a.status == AssetStatus.CRITICAL),
            with_maintenance=sum(1 for a in self._assets if a.maintenance_contract.has_contract),
            with_support=sum(1 for a in self._assets if a.professional_support.has_support),
        )

    # --- Internals -------------------------------------------------------

    def _ensure_loaded(self) -> None:
        if not self._ready:
            self.load()

    def _today(self, today: DateLike | None) -> date:
        return to_date(today) if today is not None else self._clock()

    def _recompute(self, assets: Iterable[Asset], today: date) -> list[Asset]:
        return [with_recomputed_status(a, today, self.threshold_days) for a in assets]

    def _index_of(self, asset_id: str) -> int:
        for i, asset in enumerate(self._assets):
            if asset.id == asset_id:
                return i
        raise AssetNotFoundError(asset_id)

    def _new_id(self) -> str:
        existing = {a.id for a in self._assets}
        asset_id = self._id_factory()
        while asset_id in existing:
            asset_id = self._id_factory()
        return asset_id

    def _commit(self, assets: list[Asset]) -> None:
        # Memory is only replaced once the write has succeeded
        self._persistence.write(encode_assets(assets))
        self._assets = assets
        self._notify()

    def _notify(self) -> None:
        snapshot = list(self._assets)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                # The change is already committed; a failing listener must not undo it
                logger.exception("Inventory listener %r failed", listener)


def _matches(asset: Asset, needle: str) -> bool:
    return any(
        needle in field.lower()
        for field in (asset.name, asset.vendor, asset.model, asset.serial_number)
    )
