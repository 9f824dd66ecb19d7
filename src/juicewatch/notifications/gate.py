"""Duplicate-suppressing notification gate."""

from __future__ import annotations

import logging
from collections.abc import Set
from dataclasses import dataclass
from typing import Final

from juicewatch.notifications.keys import NotificationKey
from juicewatch.system.status import BatterySnapshot

logger: Final = logging.getLogger(__name__)


@dataclass
class NotificationState:
    """Dedup memory: the last threshold the gate computed.

    Lives for the whole process and is only ever written by
    NotificationGate.
    """

    last_notified: NotificationKey | None = None


class NotificationGate:
    """Decides whether a snapshot warrants a user notification.

    Each threshold fires at most once per crossing. The last computed key
    is remembered even when the user has that key disabled, so enabling
    it later never fires for a threshold that has already passed.

    Not thread-safe: callers must serialize ``evaluate`` calls.
    """

    def __init__(self, state: NotificationState | None = None) -> None:
        """Initialize the gate.

        Args:
            state: Existing dedup memory (a fresh one if None)
        """
        self.state = state or NotificationState()

    @staticmethod
    def candidate_key(snapshot: BatterySnapshot) -> NotificationKey | None:
        """Compute the threshold key for a snapshot.

        Full and plugged in always maps to HUNDRED. On battery the
        percentage picks the threshold. Plugged in but not yet full never
        notifies.
        """
        if snapshot.is_plugged and snapshot.is_charged:
            return NotificationKey.HUNDRED
        if not snapshot.is_plugged:
            return NotificationKey.from_percentage(snapshot.percentage)
        return None

    def evaluate(
        self, snapshot: BatterySnapshot, enabled_keys: Set[NotificationKey]
    ) -> NotificationKey | None:
        """Return the key to deliver for this snapshot, if any.

        Args:
            snapshot: Current battery snapshot
            enabled_keys: Thresholds the user subscribed to

        Returns:
            The key to notify about, or None when nothing should fire
        """
        key = self.candidate_key(snapshot)
        if key is None:
            return None

        previous = self.state.last_notified
        self.state.last_notified = key

        if key == previous:
            return None
        if key not in enabled_keys:
            logger.debug("Threshold %d%% reached; notification disabled", key.percentage)
            return None

        logger.info("Threshold %d%% reached; notifying", key.percentage)
        return key
