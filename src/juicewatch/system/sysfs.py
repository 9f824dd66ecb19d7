"""Battery data source backed by the Linux power-supply class in sysfs."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import Final, Iterator, Optional

from juicewatch.constants import DEFAULT_POWER_SUPPLY_PATH, SOURCE_AC, SOURCE_BATTERY
from juicewatch.system.errors import ConnectionAlreadyOpenError, ServiceNotFoundError
from juicewatch.types.power_supply import RawReadings, SysfsSupplyDict
from juicewatch.utils.formatting import format_time_remaining

logger: Final = logging.getLogger(__name__)

# Supply types that mean "external power" when online
EXTERNAL_SUPPLY_TYPES: Final = frozenset({"Mains", "USB", "Wireless"})

# Battery status values that imply an attached charger
PLUGGED_STATUSES: Final = frozenset({"Charging", "Full", "Not charging"})

_ATTRIBUTES: Final = tuple(SysfsSupplyDict.__annotations__)


def read_supply(path: Path) -> SysfsSupplyDict:
    """Read the attributes of one power-supply directory.

    Missing or unreadable attribute files are left out of the result.

    Args:
        path: Directory such as /sys/class/power_supply/BAT0

    Returns:
        Attribute values keyed by file name, stripped of whitespace
    """
    data: SysfsSupplyDict = {}
    for name in _ATTRIBUTES:
        try:
            raw = (path / name).read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if raw:
            data[name] = raw  # type: ignore[literal-required]
    return data


def find_battery_paths(root: Path = DEFAULT_POWER_SUPPLY_PATH) -> Iterator[Path]:
    """Yield power-supply directories that describe a battery."""
    for candidate in sorted(root.iterdir()):
        try:
            if (candidate / "type").read_text(encoding="utf-8").strip() == "Battery":
                yield candidate
        except OSError:
            continue


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug("Non-numeric power-supply value: %s", value)
        return None


def _ratio_percent(now: Optional[int], full: Optional[int]) -> Optional[int]:
    if now is None or not full:
        return None
    return min(100, round(now * 100 / full))


class SysfsBatterySource:
    """Reads battery state from /sys/class/power_supply.

    The "connection" is the battery directory chosen by ``open()``; it is
    held until ``close()``. ``read()`` opens lazily and never raises for
    unreadable attributes: whatever cannot be read is simply absent from
    the returned readings.
    """

    def __init__(self, root: Path = DEFAULT_POWER_SUPPLY_PATH) -> None:
        """Initialize with the power-supply class directory.

        Args:
            root: Directory containing one entry per power supply
        """
        self.root = root
        self._battery: Path | None = None

    @property
    def is_open(self) -> bool:
        """Whether a battery directory is currently held."""
        return self._battery is not None

    def open(self) -> None:
        """Locate the battery and hold on to it.

        Raises:
            ConnectionAlreadyOpenError: If the source is already open
            ServiceNotFoundError: If no battery exists under the root
        """
        if self._battery is not None:
            raise ConnectionAlreadyOpenError(f"Battery {self._battery.name} is already open")
        try:
            battery = next(find_battery_paths(self.root), None)
        except OSError as exc:
            raise ServiceNotFoundError(f"Cannot list {self.root}", exc) from exc
        if battery is None:
            raise ServiceNotFoundError(f"No battery found under {self.root}")

        self._battery = battery
        logger.info("Using battery %s", battery)

    def close(self) -> None:
        """Release the battery directory."""
        self._battery = None

    def __enter__(self) -> SysfsBatterySource:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def read(self) -> RawReadings:
        """Take one reading of the battery and external supplies.

        Returns:
            The readings that could be obtained at this instant

        Raises:
            ServiceNotFoundError: If the battery has disappeared
        """
        if self._battery is None:
            self.open()
        assert self._battery is not None

        if not self._battery.is_dir():
            name = self._battery.name
            self.close()
            raise ServiceNotFoundError(f"Battery {name} disappeared")

        battery = read_supply(self._battery)
        status = battery.get("status")
        if status == "Unknown":
            status = None

        readings: RawReadings = {}

        plugged = self._is_plugged(status)
        if plugged is not None:
            readings["is_plugged"] = plugged
            readings["current_source"] = SOURCE_AC if plugged else SOURCE_BATTERY
        if status is not None:
            readings["is_charging"] = status == "Charging"
            readings["is_charged"] = status == "Full"

        percentage = self._percentage(battery)
        if percentage is not None:
            readings["percentage"] = percentage

        charge, capacity = self._charge_mah(battery)
        if charge is not None:
            readings["current_charge_mah"] = charge
        if capacity is not None:
            readings["max_capacity_mah"] = capacity

        if status is not None and plugged is not None:
            readings["time_remaining"] = format_time_remaining(
                self._minutes_remaining(battery, status),
                charged=plugged and status == "Full",
            )

        return readings

    def _is_plugged(self, status: Optional[str]) -> Optional[bool]:
        """Decide whether external power is attached.

        Any online mains/USB supply counts. Without such supplies the
        battery status is the only hint.
        """
        external: list[SysfsSupplyDict] = []
        try:
            for candidate in sorted(self.root.iterdir()):
                supply = read_supply(candidate)
                if supply.get("type") in EXTERNAL_SUPPLY_TYPES:
                    external.append(supply)
        except OSError as exc:
            logger.debug("Cannot list external supplies: %s", exc)

        online = [s["online"] == "1" for s in external if "online" in s]
        if online:
            return any(online)
        if status is None:
            return None
        return status in PLUGGED_STATUSES

    @staticmethod
    def _percentage(battery: SysfsSupplyDict) -> Optional[int]:
        capacity = _to_int(battery.get("capacity"))
        if capacity is not None:
            # some drivers report 101 when full
            return min(100, capacity)
        from_charge = _ratio_percent(
            _to_int(battery.get("charge_now")), _to_int(battery.get("charge_full"))
        )
        if from_charge is not None:
            return from_charge
        return _ratio_percent(
            _to_int(battery.get("energy_now")), _to_int(battery.get("energy_full"))
        )

    @staticmethod
    def _charge_mah(battery: SysfsSupplyDict) -> tuple[Optional[int], Optional[int]]:
        """Return (current charge, full capacity) in mAh.

        charge_* files are in uAh; energy_* files are in uWh and need the
        design voltage (uV) to convert.
        """
        charge_now = _to_int(battery.get("charge_now"))
        charge_full = _to_int(battery.get("charge_full"))
        if charge_now is not None or charge_full is not None:
            return (
                charge_now // 1000 if charge_now is not None else None,
                charge_full // 1000 if charge_full is not None else None,
            )

        voltage = _to_int(battery.get("voltage_min_design"))
        if not voltage:
            return None, None
        energy_now = _to_int(battery.get("energy_now"))
        energy_full = _to_int(battery.get("energy_full"))
        return (
            round(energy_now * 1000 / voltage) if energy_now is not None else None,
            round(energy_full * 1000 / voltage) if energy_full is not None else None,
        )

    @staticmethod
    def _minutes_remaining(battery: SysfsSupplyDict, status: str) -> Optional[int]:
        """Estimate minutes until empty (discharging) or full (charging)."""
        if status not in ("Charging", "Discharging"):
            return None

        for now_key, full_key, rate_key in (
            ("charge_now", "charge_full", "current_now"),
            ("energy_now", "energy_full", "power_now"),
        ):
            now = _to_int(battery.get(now_key))
            rate = _to_int(battery.get(rate_key))
            if now is None or not rate:
                continue
            if status == "Discharging":
                return int(now * 60 / abs(rate))
            full = _to_int(battery.get(full_key))
            if full is None:
                return None
            return int(max(full - now, 0) * 60 / abs(rate))
        return None
