"""Tests for the status engine."""

from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from hwinventory.engine.status import (
    DEFAULT_NEAR_EXPIRY_DAYS,
    compute_status,
    days_until,
    describe_days_remaining,
    status_label,
    to_date,
    with_recomputed_status,
)
from hwinventory.errors import InvalidDateError
from hwinventory.models.asset import Asset, AssetStatus, MaintenanceContract

from conftest import TODAY, make_input


def _days(n: int) -> date:
    return TODAY + timedelta(days=n)


def _maintenance(offset: int, has_contract: bool = True) -> MaintenanceContract:
    return MaintenanceContract(has_contract=has_contract, expiry_date=_days(offset))


class TestDaysUntil:
    """Tests for days_until and date coercion."""

    def test_future_date_is_positive(self):
        """Test days until a future date."""
        assert days_until(date(2025, 1, 20), date(2025, 1, 15)) == 5

    def test_past_date_is_negative(self):
        """Test that a passed date gives a negative count."""
        assert days_until(date(2025, 1, 10), date(2025, 1, 15)) == -5

    def test_same_day_is_zero(self):
        assert days_until(TODAY, TODAY) == 0

    def test_time_of_day_is_ignored(self):
        """Test that datetimes are truncated to whole days."""
        assert days_until(datetime(2025, 1, 16, 0, 1), datetime(2025, 1, 15, 23, 59)) == 1

    def test_iso_strings(self):
        """Test ISO date and datetime strings are accepted."""
        assert days_until("2025-02-14", "2025-01-15") == 30
        assert days_until("2025-01-20T08:30:00Z", "2025-01-15") == 5

    @pytest.mark.parametrize("value", ["not-a-date", "2025-13-01", "", 20250115, None])
    def test_invalid_dates_raise(self, value):
        """Test unparseable values raise InvalidDateError."""
        with pytest.raises(InvalidDateError) as exc_info:
            to_date(value)
        assert exc_info.value.value == value

    def test_invalid_date_is_value_error(self):
        """Test InvalidDateError can be caught as ValueError."""
        with pytest.raises(ValueError):
            days_until("yesterday", TODAY)


class TestComputeStatus:
    """Tests for status classification rules."""

    def test_healthy_when_everything_far_away(self):
        """Test no contract and distant dates is healthy."""
        assert compute_status(make_input(), TODAY) == AssetStatus.HEALTHY

    def test_warranty_near_expiry_is_warning(self):
        """Warranty in 10 days, EOL in two years, no contract -> warning."""
        asset = make_input(warranty_expiry=_days(10), end_of_life=_days(730))
        assert compute_status(asset, TODAY, threshold_days=30) == AssetStatus.WARNING

    def test_end_of_life_passed_is_critical(self):
        """EOL yesterday -> critical."""
        asset = make_input(end_of_life=_days(-1))
        assert compute_status(asset, TODAY) == AssetStatus.CRITICAL

    def test_expired_maintenance_is_warning(self):
        """Maintenance expired five days ago, warranty and EOL far away -> warning."""
        asset = make_input(maintenance_contract=_maintenance(-5))
        assert compute_status(asset, TODAY) == AssetStatus.WARNING

    def test_expired_warranty_is_critical(self):
        """Warranty passed while EOL is still ahead -> critical."""
        asset = make_input(warranty_expiry=_days(-1), end_of_life=_days(100))
        assert compute_status(asset, TODAY) == AssetStatus.CRITICAL

    def test_end_of_life_passed_wins_over_everything(self):
        """Test EOL passed is critical regardless of other fields."""
        asset = make_input(
            end_of_life=_days(-30),
            warranty_expiry=_days(500),
            maintenance_contract=_maintenance(500),
        )
        assert compute_status(asset, TODAY) == AssetStatus.CRITICAL

    def test_expired_warranty_beats_expired_maintenance(self):
        asset = make_input(warranty_expiry=_days(-2), maintenance_contract=_maintenance(-10))
        assert compute_status(asset, TODAY) == AssetStatus.CRITICAL

    def test_expiry_day_itself_is_not_expired(self):
        """Test that expiring today is a warning, not critical."""
        asset = make_input(warranty_expiry=TODAY, end_of_life=TODAY)
        assert compute_status(asset, TODAY) == AssetStatus.WARNING

    def test_warranty_threshold_boundary(self):
        """Test the threshold is inclusive."""
        assert compute_status(make_input(warranty_expiry=_days(30)), TODAY) == AssetStatus.WARNING
        assert compute_status(make_input(warranty_expiry=_days(31)), TODAY) == AssetStatus.HEALTHY

    def test_end_of_life_near_expiry_is_warning(self):
        """Test EOL within threshold is a warning even with distant warranty."""
        asset = make_input(end_of_life=_days(20), warranty_expiry=_days(200))
        assert compute_status(asset, TODAY) == AssetStatus.WARNING

    def test_maintenance_near_expiry_is_warning(self):
        asset = make_input(maintenance_contract=_maintenance(15))
        assert compute_status(asset, TODAY) == AssetStatus.WARNING

    def test_maintenance_far_away_is_healthy(self):
        asset = make_input(maintenance_contract=_maintenance(31))
        assert compute_status(asset, TODAY) == AssetStatus.HEALTHY

    def test_maintenance_expiry_used_without_contract_flag(self):
        """Test a present expiry date counts even if has_contract is False."""
        asset = make_input(maintenance_contract=_maintenance(-5, has_contract=False))
        assert compute_status(asset, TODAY) == AssetStatus.WARNING

    def test_contract_without_expiry_is_ignored(self):
        asset = make_input(maintenance_contract=MaintenanceContract(has_contract=True))
        assert compute_status(asset, TODAY) == AssetStatus.HEALTHY

    def test_threshold_is_configurable(self):
        """Test a wider threshold turns a distant warranty into a warning."""
        asset = make_input(warranty_expiry=_days(45))
        assert compute_status(asset, TODAY) == AssetStatus.HEALTHY
        assert compute_status(asset, TODAY, threshold_days=60) == AssetStatus.WARNING

    def test_zero_threshold(self):
        assert compute_status(make_input(warranty_expiry=_days(1)), TODAY, 0) == AssetStatus.HEALTHY
        assert compute_status(make_input(warranty_expiry=TODAY), TODAY, 0) == AssetStatus.WARNING

    def test_default_threshold(self):
        assert DEFAULT_NEAR_EXPIRY_DAYS == 30

    def test_time_of_day_in_today_is_ignored(self):
        asset = make_input(warranty_expiry=TODAY)
        late = datetime(TODAY.year, TODAY.month, TODAY.day, 23, 59, 59)
        assert compute_status(asset, late) == AssetStatus.WARNING

    def test_accepts_plain_objects_with_string_dates(self):
        """Test duck-typed inputs with ISO strings."""
        asset = SimpleNamespace(
            end_of_life="2030-01-01",
            warranty_expiry="2025-01-20",
            maintenance_contract=MaintenanceContract(),
        )
        assert compute_status(asset, "2025-01-15") == AssetStatus.WARNING

    def test_invalid_date_propagates(self):
        asset = SimpleNamespace(
            end_of_life="garbage",
            warranty_expiry="2025-01-20",
            maintenance_contract=MaintenanceContract(),
        )
        with pytest.raises(InvalidDateError):
            compute_status(asset, TODAY)

    def test_deterministic(self):
        """Test identical inputs give identical output."""
        asset = make_input(warranty_expiry=_days(12), maintenance_contract=_maintenance(-3))
        assert compute_status(asset, TODAY) == compute_status(asset, TODAY)


class TestWithRecomputedStatus:
    """Tests for with_recomputed_status."""

    def _asset(self, **overrides) -> Asset:
        fields = make_input(**overrides).model_dump()
        fields.update(id="a1", status="healthy", created_at=TODAY, updated_at=TODAY)
        return Asset.model_validate(fields)

    def test_fixes_stale_status(self):
        asset = self._asset(warranty_expiry=_days(-1))
        fixed = with_recomputed_status(asset, TODAY)
        assert fixed.status == AssetStatus.CRITICAL
        assert asset.status == AssetStatus.HEALTHY
        assert fixed.model_dump(exclude={"status"}) == asset.model_dump(exclude={"status"})

    def test_returns_same_asset_when_current(self):
        asset = self._asset()
        assert with_recomputed_status(asset, TODAY) is asset


class TestPresentationHelpers:
    """Tests for labels and remaining-time text."""

    def test_status_labels(self):
        assert status_label(AssetStatus.HEALTHY) == "Healthy"
        assert status_label("warning") == "Attention Needed"
        assert status_label(AssetStatus.CRITICAL) == "Critical"

    def test_unknown_status_label(self):
        with pytest.raises(ValueError):
            status_label("retired")

    @pytest.mark.parametrize(
        "offset,expected",
        [(-1, "Expired"), (0, "0d left"), (30, "30d left"), (31, "31d"), (400, "400d")],
    )
    def test_describe_days_remaining(self, offset, expected):
        assert describe_days_remaining(_days(offset), TODAY) == expected

    def test_describe_days_remaining_uses_threshold(self):
        assert describe_days_remaining(_days(45), TODAY, threshold_days=60) == "45d left"
