from pathlib import Path

import pytest

from juicewatch.system.errors import ConnectionAlreadyOpenError, ServiceNotFoundError
from juicewatch.system.status import SnapshotBuilder
from juicewatch.system.sysfs import SysfsBatterySource, find_battery_paths


def _supply(root: Path, name: str, **attrs: str) -> Path:
    path = root / name
    path.mkdir()
    for key, value in attrs.items():
        (path / key).write_text(f"{value}\n")
    return path


def test_find_battery_paths(tmp_path: Path) -> None:
    """Only Battery supplies are returned."""
    bat0 = _supply(tmp_path, "BAT0", type="Battery")
    ac = _supply(tmp_path, "AC", type="Mains", online="0")

    paths = list(find_battery_paths(tmp_path))
    assert bat0 in paths
    assert ac not in paths


def test_read_discharging(tmp_path: Path) -> None:
    """A discharging battery is read with time and capacity."""
    _supply(tmp_path, "AC", type="Mains", online="0")
    _supply(
        tmp_path,
        "BAT0",
        type="Battery",
        status="Discharging",
        capacity="73",
        charge_now="3120000",  # uAh
        charge_full="4400000",
        current_now="1000000",  # uA
    )

    readings = SysfsBatterySource(tmp_path).read()

    assert readings == {
        "is_plugged": False,
        "current_source": "Battery Power",
        "is_charging": False,
        "is_charged": False,
        "percentage": 73,
        "current_charge_mah": 3120,
        "max_capacity_mah": 4400,
        "time_remaining": "3:07",
    }


def test_read_charging(tmp_path: Path) -> None:
    """A charging battery on AC is read as plugged."""
    _supply(tmp_path, "AC", type="Mains", online="1")
    _supply(
        tmp_path,
        "BAT0",
        type="Battery",
        status="Charging",
        capacity="50",
        charge_now="2200000",
        charge_full="4400000",
        current_now="2200000",
    )

    readings = SysfsBatterySource(tmp_path).read()

    assert readings["is_plugged"] is True
    assert readings["is_charging"] is True
    assert readings["current_source"] == "AC Power"
    assert readings["time_remaining"] == "1:00"


def test_read_full_on_ac(tmp_path: Path) -> None:
    """A full battery on AC reads as charged."""
    _supply(tmp_path, "ADP1", type="Mains", online="1")
    _supply(tmp_path, "BAT0", type="Battery", status="Full", capacity="100")

    snapshot = SnapshotBuilder().build(SysfsBatterySource(tmp_path).read())

    assert snapshot is not None
    assert snapshot.charged_and_plugged is True
    assert snapshot.time_remaining == "Charged"


def test_capacity_above_hundred_is_clamped(tmp_path: Path) -> None:
    """A reported capacity of 101 still yields a snapshot at 100 %."""
    _supply(tmp_path, "ADP1", type="Mains", online="1")
    _supply(tmp_path, "BAT0", type="Battery", status="Full", capacity="101")

    readings = SysfsBatterySource(tmp_path).read()
    snapshot = SnapshotBuilder().build(readings)

    assert readings["percentage"] == 100
    assert snapshot is not None
    assert snapshot.percentage == 100


def test_read_energy_based_battery(tmp_path: Path) -> None:
    """energy_* batteries are converted to mAh."""
    _supply(
        tmp_path,
        "BAT1",
        type="Battery",
        status="Discharging",
        energy_now="40000000",  # uWh
        energy_full="80000000",
        power_now="20000000",  # uW
        voltage_min_design="11000000",  # uV
    )

    readings = SysfsBatterySource(tmp_path).read()

    assert readings["percentage"] == 50
    assert readings["current_charge_mah"] == 3636
    assert readings["max_capacity_mah"] == 7273
    assert readings["time_remaining"] == "2:00"
    # No mains supply: the battery status decides
    assert readings["is_plugged"] is False


def test_unknown_rate_is_calculating(tmp_path: Path) -> None:
    """Without a current rate the time is Calculating."""
    _supply(tmp_path, "BAT0", type="Battery", status="Discharging", capacity="80")

    readings = SysfsBatterySource(tmp_path).read()

    assert readings["time_remaining"] == "Calculating"


def test_unknown_status_yields_no_snapshot(tmp_path: Path) -> None:
    """An Unknown status leaves the flags unset."""
    _supply(tmp_path, "BAT0", type="Battery", status="Unknown", capacity="80")

    readings = SysfsBatterySource(tmp_path).read()

    assert "is_charging" not in readings
    assert "time_remaining" not in readings
    assert SnapshotBuilder().build(readings) is None


def test_no_battery_raises_service_not_found(tmp_path: Path) -> None:
    """No battery supply raises ServiceNotFoundError."""
    _supply(tmp_path, "AC", type="Mains", online="1")

    with pytest.raises(ServiceNotFoundError):
        SysfsBatterySource(tmp_path).open()


def test_missing_root_raises_service_not_found(tmp_path: Path) -> None:
    """A missing sysfs root raises ServiceNotFoundError."""
    with pytest.raises(ServiceNotFoundError) as excinfo:
        SysfsBatterySource(tmp_path / "nope").read()
    assert isinstance(excinfo.value.original_error, OSError)


def test_open_twice_raises(tmp_path: Path) -> None:
    """Opening twice raises ConnectionAlreadyOpenError."""
    _supply(tmp_path, "BAT0", type="Battery", status="Full", capacity="100")
    source = SysfsBatterySource(tmp_path)
    source.open()

    with pytest.raises(ConnectionAlreadyOpenError):
        source.open()

    source.close()
    source.open()
    assert source.is_open


def test_context_manager_closes(tmp_path: Path) -> None:
    """The context manager closes the source."""
    _supply(tmp_path, "BAT0", type="Battery", status="Full", capacity="100")

    with SysfsBatterySource(tmp_path) as source:
        assert source.is_open
    assert not source.is_open


def test_battery_removed_after_open(tmp_path: Path) -> None:
    """A battery removed after open raises ServiceNotFoundError."""
    bat = _supply(tmp_path, "BAT0", type="Battery", status="Full", capacity="100")
    source = SysfsBatterySource(tmp_path)
    source.open()

    for child in bat.iterdir():
        child.unlink()
    bat.rmdir()

    with pytest.raises(ServiceNotFoundError):
        source.read()
    assert not source.is_open
