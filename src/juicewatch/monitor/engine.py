"""Monitor engine: turns triggers into display updates and notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from juicewatch.common.enums import SourceErrorKind, TriggerReason
from juicewatch.display.icons import IconState, derive_icon
from juicewatch.display.protocols import PresentationSink
from juicewatch.display.title import MenuDetail, derive_menu_detail, derive_title
from juicewatch.notifications.delivery import NotificationSink
from juicewatch.notifications.gate import NotificationGate
from juicewatch.settings.store import PreferenceSource
from juicewatch.system.errors import BatterySourceError
from juicewatch.system.protocols import BatteryDataSource
from juicewatch.system.status import BatterySnapshot, SnapshotBuilder

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayState:
    """Everything a presentation sink shows for one snapshot."""

    icon: IconState
    title: str
    menu_detail: MenuDetail

    @classmethod
    def derive(cls, snapshot: BatterySnapshot, prefer_show_time: bool) -> DisplayState:
        return cls(
            icon=derive_icon(snapshot),
            title=derive_title(snapshot, prefer_show_time),
            menu_detail=derive_menu_detail(snapshot, prefer_show_time),
        )


@dataclass(frozen=True)
class ErrorState:
    """Degraded state after a hard battery source failure."""

    kind: SourceErrorKind
    message: str = ""

    @property
    def icon(self) -> IconState:
        return IconState.for_error(self.kind)


class MonitorEngine:
    """Orchestrates snapshot building, display derivation and the gate.

    The engine reacts to triggers only; it never polls or retries on its
    own. ``on_trigger`` must not be called concurrently - feed it from a
    single consumer such as TriggerQueue.

    - POWER_SOURCE_CHANGED: read, present, then run the notification gate
    - PREFERENCE_CHANGED: re-present the last snapshot with new preferences
    - MANUAL_REFRESH: read and present, notification state untouched

    A BatterySourceError switches to an ErrorState showing a fixed icon;
    the next reading trigger that yields a snapshot leaves it again.
    Incomplete readings leave the current display as it is.
    """

    def __init__(
        self,
        source: BatteryDataSource,
        preferences: PreferenceSource,
        presentation: PresentationSink,
        notifications: NotificationSink,
        gate: NotificationGate | None = None,
        builder: SnapshotBuilder | None = None,
    ) -> None:
        """Initialize the engine with its collaborators.

        Args:
            source: Battery data source
            preferences: User preference source
            presentation: Sink receiving display updates
            notifications: Sink receiving approved notification keys
            gate: Notification gate (fresh dedup memory if None)
            builder: Snapshot builder (default builder if None)
        """
        self.source = source
        self.preferences = preferences
        self.presentation = presentation
        self.notifications = notifications
        self.gate = gate or NotificationGate()
        self.builder = builder or SnapshotBuilder()

        self.snapshot: BatterySnapshot | None = None
        self.display_state: DisplayState | None = None
        self.error_state: ErrorState | None = None

    @property
    def state(self) -> DisplayState | ErrorState | None:
        """The state currently presented, if any."""
        return self.error_state or self.display_state

    def start(self, initial: TriggerReason | None = TriggerReason.MANUAL_REFRESH) -> None:
        """Open the battery source and run an initial evaluation.

        Args:
            initial: Trigger to evaluate once connected (None skips it)
        """
        try:
            self.source.open()
        except BatterySourceError as err:
            self._enter_error(err)
            return
        if initial is not None:
            self.on_trigger(initial)

    def stop(self) -> None:
        """Close the battery source."""
        self.source.close()

    def on_trigger(self, reason: TriggerReason) -> None:
        """Re-evaluate state for one trigger."""
        logger.debug("Trigger: %s", reason.value)

        if reason is TriggerReason.PREFERENCE_CHANGED:
            if self.error_state is None and self.snapshot is not None:
                self._present(self.snapshot)
            return

        snapshot = self._read_snapshot()
        if snapshot is None:
            return
        self.snapshot = snapshot
        self._present(snapshot)

        if reason is TriggerReason.POWER_SOURCE_CHANGED:
            key = self.gate.evaluate(snapshot, self.preferences.enabled_keys())
            if key is not None:
                self.notifications.notify(key)

    def _read_snapshot(self) -> BatterySnapshot | None:
        try:
            raw = self.source.read()
        except BatterySourceError as err:
            self._enter_error(err)
            return None
        return self.builder.build(raw)

    def _present(self, snapshot: BatterySnapshot) -> None:
        if self.error_state is not None:
            logger.info("Battery source available again")
            self.error_state = None

        state = DisplayState.derive(snapshot, self.preferences.prefer_show_time())
        self.display_state = state
        self.presentation.update(state.icon, state.title, state.menu_detail.title)

    def _enter_error(self, err: BatterySourceError) -> None:
        logger.error("Battery source error: %s", err)
        self.error_state = ErrorState(err.kind, err.message)
        self.presentation.update(self.error_state.icon, "", "")
