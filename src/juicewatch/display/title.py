"""Status title and menu detail text."""

from __future__ import annotations

from dataclasses import dataclass

from juicewatch.system.status import BatterySnapshot
from juicewatch.utils.formatting import format_capacity, format_percentage


@dataclass(frozen=True)
class MenuDetail:
    """Detailed text shown when the menu is opened."""

    charge: str
    source: str

    @property
    def title(self) -> str:
        """Both lines joined for sinks that take a single string."""
        return f"{self.charge}\n{self.source}"


def derive_title(snapshot: BatterySnapshot, prefer_show_time: bool) -> str:
    """Return the status title: time remaining or percentage, never both.

    Args:
        snapshot: Current battery snapshot
        prefer_show_time: Whether the user prefers the time remaining

    Returns:
        e.g. "2:15" or "73 %"
    """
    if prefer_show_time:
        return snapshot.time_remaining
    return format_percentage(snapshot.percentage)


def derive_menu_detail(snapshot: BatterySnapshot, prefer_show_time: bool) -> MenuDetail:
    """Build the menu detail text.

    The charge line shows whichever value the status title does not, and
    gets the "(charge / capacity mAh)" suffix only when both values are
    known.

    Args:
        snapshot: Current battery snapshot
        prefer_show_time: Whether the status title shows the time remaining

    Returns:
        MenuDetail with the charge and source lines
    """
    charge = derive_title(snapshot, not prefer_show_time)
    if snapshot.current_charge_mah is not None and snapshot.max_capacity_mah is not None:
        charge = f"{charge} {format_capacity(snapshot.current_charge_mah, snapshot.max_capacity_mah)}"
    return MenuDetail(charge=charge, source=f"Source: {snapshot.current_source}")
