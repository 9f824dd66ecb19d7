"""Status icon selection.

Maps a battery snapshot (or a source error) to an icon state and to a
freedesktop icon-theme name that a tray or status bar can load.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from juicewatch.common.enums import IconKind, SourceErrorKind
from juicewatch.system.status import BatterySnapshot

# Upper bound (inclusive) of each discharge band and its icon
DISCHARGE_ICON_BANDS: Final[tuple[tuple[int, str], ...]] = (
    (10, "battery-caution"),
    (30, "battery-low"),
    (60, "battery-good"),
    (100, "battery-full"),
)

CHARGING_ICON: Final = "battery-good-charging"
CHARGED_AND_PLUGGED_ICON: Final = "battery-full-charged"

ERROR_ICONS: Final[dict[SourceErrorKind, str]] = {
    SourceErrorKind.CONNECTION_ALREADY_OPEN: "dialog-warning",
    SourceErrorKind.SERVICE_NOT_FOUND: "battery-missing",
}


def discharge_icon_name(percentage: int) -> str:
    """Return the discharge icon whose band covers the percentage."""
    for upper, name in DISCHARGE_ICON_BANDS:
        if percentage <= upper:
            return name
    return DISCHARGE_ICON_BANDS[-1][1]


@dataclass(frozen=True)
class IconState:
    """What the status icon should show.

    ``percentage`` is set only for discharging icons and ``error`` only
    for error icons.
    """

    kind: IconKind
    percentage: int | None = None
    error: SourceErrorKind | None = None

    @classmethod
    def charged_and_plugged(cls) -> IconState:
        return cls(IconKind.CHARGED_AND_PLUGGED)

    @classmethod
    def charging(cls) -> IconState:
        return cls(IconKind.CHARGING)

    @classmethod
    def discharging(cls, percentage: int) -> IconState:
        return cls(IconKind.DISCHARGING, percentage=percentage)

    @classmethod
    def for_error(cls, kind: SourceErrorKind) -> IconState:
        return cls(IconKind.ERROR, error=kind)

    @property
    def icon_name(self) -> str:
        """Icon-theme name for this state."""
        if self.kind is IconKind.CHARGED_AND_PLUGGED:
            return CHARGED_AND_PLUGGED_ICON
        if self.kind is IconKind.CHARGING:
            return CHARGING_ICON
        if self.kind is IconKind.ERROR:
            assert self.error is not None
            return ERROR_ICONS[self.error]
        assert self.percentage is not None
        return discharge_icon_name(self.percentage)


def derive_icon(snapshot: BatterySnapshot) -> IconState:
    """Pick the icon for a snapshot.

    Charged-and-plugged wins over charging, which wins over the plain
    discharge display.
    """
    if snapshot.charged_and_plugged:
        return IconState.charged_and_plugged()
    if snapshot.is_charging:
        return IconState.charging()
    return IconState.discharging(snapshot.percentage)
