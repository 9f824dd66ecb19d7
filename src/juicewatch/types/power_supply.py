"""Type definitions for raw power-supply readings."""

from typing import TypedDict


class RawReadings(TypedDict, total=False):
    """One point-in-time reading from a battery data source.

    Every key is optional: a source leaves out whatever it could not read
    at this instant. Snapshot construction decides which gaps are fatal.
    """

    is_plugged: bool
    is_charging: bool
    is_charged: bool
    percentage: int
    current_charge_mah: int
    max_capacity_mah: int
    time_remaining: str
    current_source: str


class SysfsSupplyDict(TypedDict, total=False):
    """Attributes of a single /sys/class/power_supply entry, keyed by file name."""

    type: str
    status: str
    online: str
    capacity: str
    charge_now: str
    charge_full: str
    current_now: str
    energy_now: str
    energy_full: str
    power_now: str
    voltage_min_design: str
