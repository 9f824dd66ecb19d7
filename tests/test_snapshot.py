import pytest
from pydantic import ValidationError

from juicewatch.constants import SOURCE_UNKNOWN
from juicewatch.system.errors import DataUnavailableError
from juicewatch.system.status import REQUIRED_FIELDS, BatterySnapshot, SnapshotBuilder
from juicewatch.types.power_supply import RawReadings


def test_build_complete_readings(discharging_readings: RawReadings) -> None:
    """Complete readings build a snapshot."""
    snapshot = SnapshotBuilder().build(discharging_readings)

    assert snapshot is not None
    assert snapshot.percentage == 73
    assert snapshot.time_remaining == "3:40"
    assert snapshot.current_source == "Battery Power"
    assert snapshot.current_charge_mah is None
    assert snapshot.max_capacity_mah is None


@pytest.mark.parametrize("missing", REQUIRED_FIELDS)
def test_missing_required_field_yields_none(
    discharging_readings: RawReadings, missing: str
) -> None:
    """Any missing required reading yields no snapshot."""
    raw = dict(discharging_readings)
    del raw[missing]

    assert SnapshotBuilder().build(raw) is None  # type: ignore[arg-type]


def test_try_build_reports_missing_fields(discharging_readings: RawReadings) -> None:
    """try_build names the missing fields."""
    raw = dict(discharging_readings)
    del raw["time_remaining"]
    del raw["percentage"]

    with pytest.raises(DataUnavailableError) as excinfo:
        SnapshotBuilder().try_build(raw)  # type: ignore[arg-type]
    assert excinfo.value.missing == ("percentage", "time_remaining")


def test_capacity_fields_are_independently_optional(discharging_readings: RawReadings) -> None:
    """Capacity values are optional on their own."""
    raw: RawReadings = {**discharging_readings, "current_charge_mah": 3120}

    snapshot = SnapshotBuilder().build(raw)

    assert snapshot is not None
    assert snapshot.current_charge_mah == 3120
    assert snapshot.max_capacity_mah is None


def test_missing_source_defaults_to_unknown(discharging_readings: RawReadings) -> None:
    """A missing source label defaults to Unknown."""
    raw = dict(discharging_readings)
    del raw["current_source"]

    snapshot = SnapshotBuilder().build(raw)  # type: ignore[arg-type]

    assert snapshot is not None
    assert snapshot.current_source == SOURCE_UNKNOWN


@pytest.mark.parametrize(
    "field, value",
    [("percentage", 120), ("percentage", -1), ("max_capacity_mah", -5)],
)
def test_out_of_range_values_are_treated_as_missing(
    discharging_readings: RawReadings, field: str, value: int
) -> None:
    """Out-of-range readings are treated as unavailable."""
    raw = {**discharging_readings, field: value}

    with pytest.raises(DataUnavailableError) as excinfo:
        SnapshotBuilder().try_build(raw)  # type: ignore[arg-type]
    assert field in excinfo.value.missing


def test_snapshot_is_immutable(discharging_readings: RawReadings) -> None:
    """Snapshots cannot be modified."""
    snapshot = SnapshotBuilder().try_build(discharging_readings)

    with pytest.raises(ValidationError):
        snapshot.percentage = 10  # type: ignore[misc]


def test_charged_and_plugged() -> None:
    """charged_and_plugged needs both flags."""
    snapshot = BatterySnapshot(
        is_plugged=True,
        is_charging=False,
        is_charged=True,
        percentage=100,
        time_remaining="Charged",
    )
    assert snapshot.charged_and_plugged is True
