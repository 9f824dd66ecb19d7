"""Battery snapshot model and construction from raw readings."""

from __future__ import annotations

import logging
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from juicewatch.constants import SOURCE_UNKNOWN
from juicewatch.system.errors import DataUnavailableError
from juicewatch.types.power_supply import RawReadings

logger: Final = logging.getLogger(__name__)

# Readings without which no snapshot is built
REQUIRED_FIELDS: Final = (
    "is_plugged",
    "is_charging",
    "is_charged",
    "percentage",
    "time_remaining",
)


class BatterySnapshot(BaseModel):
    """One immutable, fully populated reading of the battery state.

    A new snapshot is built on every trigger; nothing mutates an existing
    one. The charge and capacity values are independently optional and
    only affect the menu detail text.
    """

    model_config = ConfigDict(frozen=True)

    is_plugged: bool
    is_charging: bool
    is_charged: bool
    percentage: int = Field(..., ge=0, le=100, description="State of charge (0-100)")
    current_charge_mah: int | None = Field(None, ge=0, description="Current charge in mAh")
    max_capacity_mah: int | None = Field(None, ge=0, description="Full capacity in mAh")
    time_remaining: str = Field(..., description="Formatted time remaining, or a sentinel")
    current_source: str = SOURCE_UNKNOWN

    @property
    def charged_and_plugged(self) -> bool:
        """Return True if the battery is full and on external power."""
        return self.is_charged and self.is_plugged


class SnapshotBuilder:
    """Turns optional raw readings into a validated BatterySnapshot.

    Construction is all-or-nothing: when any required reading is missing
    or out of range no snapshot is produced, so a charging flag is never
    shown without its percentage.
    """

    def try_build(self, raw: RawReadings) -> BatterySnapshot:
        """Build a snapshot or explain why one cannot be built.

        Args:
            raw: Readings supplied by the battery data source

        Returns:
            The validated snapshot

        Raises:
            DataUnavailableError: If required readings are missing or invalid
        """
        missing = [name for name in REQUIRED_FIELDS if raw.get(name) is None]
        if missing:
            raise DataUnavailableError(missing)

        data: dict[str, Any] = {key: value for key, value in raw.items() if value is not None}
        try:
            return BatterySnapshot.model_validate(data)
        except ValidationError as err:
            invalid = [str(e["loc"][0]) for e in err.errors() if e["loc"]]
            logger.warning("Discarding invalid battery readings: %s", ", ".join(invalid))
            raise DataUnavailableError(invalid) from err

    def build(self, raw: RawReadings) -> BatterySnapshot | None:
        """Build a snapshot, returning None when the readings are insufficient."""
        try:
            return self.try_build(raw)
        except DataUnavailableError as exc:
            logger.debug("No snapshot this cycle: %s", exc)
            return None
