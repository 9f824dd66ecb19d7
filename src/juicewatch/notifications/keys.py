"""Notification threshold keys."""

from __future__ import annotations

from enum import IntEnum


class NotificationKey(IntEnum):
    """Percentage thresholds a user can be notified about.

    Values are the multiples of ten in [10, 100]; HUNDRED doubles as the
    "fully charged" condition.
    """

    TEN = 10
    TWENTY = 20
    THIRTY = 30
    FORTY = 40
    FIFTY = 50
    SIXTY = 60
    SEVENTY = 70
    EIGHTY = 80
    NINETY = 90
    HUNDRED = 100

    @classmethod
    def from_percentage(cls, percentage: int) -> NotificationKey | None:
        """Map a state of charge to the nearest lower threshold.

        Args:
            percentage: State of charge (0-100)

        Returns:
            The threshold key (e.g. 73 -> SEVENTY), or None below 10 %
        """
        if percentage < 10:
            return None
        return cls(min(percentage, 100) // 10 * 10)

    @property
    def percentage(self) -> int:
        """The threshold as a plain percentage."""
        return int(self.value)
