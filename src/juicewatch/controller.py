# filepath: src/juicewatch/controller.py
"""Core controller for the battery monitor."""

from __future__ import annotations

import logging
import signal
import subprocess
import threading
from pathlib import Path
from typing import Any, Final

from juicewatch.common.enums import TriggerReason
from juicewatch.display.protocols import ConsolePresentation, MockPresentation, PresentationSink
from juicewatch.monitor.engine import DisplayState, ErrorState, MonitorEngine
from juicewatch.monitor.triggers import TriggerQueue, TriggerWatcher
from juicewatch.notifications.delivery import (
    LoggingNotificationSink,
    MockNotificationSink,
    NotificationRenderer,
    NotificationSink,
    NotifySendSink,
)
from juicewatch.settings.store import SettingsStore
from juicewatch.settings.user import UserSettings
from juicewatch.system.protocols import BatteryDataSource, StaticBatterySource
from juicewatch.system.sysfs import SysfsBatterySource
from juicewatch.types.power_supply import RawReadings

logger: Final = logging.getLogger(__name__)

# Seconds to wait for the watcher thread after the loop ends
WATCHER_JOIN_TIMEOUT: Final = 5.0


class BatteryMonitor:
    """Main controller class for the battery monitor application.

    This class wires the application together:
    - Loading configuration and watching it for changes
    - Creating the battery source, presentation and notification sinks
    - Running the monitor engine from a single trigger queue
    - Opening the desktop's power settings on request

    All application dependencies are initialized here, making this
    the central coordination point for the application.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        source: BatteryDataSource | None = None,
        presentation: PresentationSink | None = None,
        notifications: NotificationSink | None = None,
        settings: SettingsStore | None = None,
        debug: bool = False,
        desktop_notifications: bool = True,
    ):
        """Initialize the battery monitor controller.

        Args:
            config_path: Path to config.yaml (searches default locations if None)
            source: Optional custom battery data source
            presentation: Optional custom presentation sink
            notifications: Optional custom notification sink
            settings: Optional preloaded settings store
            debug: Enable debug logging
            desktop_notifications: Send notifications through notify-send;
                when False they are only written to the log
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        # Load configuration
        self.settings = settings or SettingsStore.discover(config_path)

        # Allow dependency injection or create defaults
        self.source = source or SysfsBatterySource(self.config.power_supply_path)
        self.presentation = presentation or ConsolePresentation()
        renderer = NotificationRenderer(
            title=self.config.notification_title,
            template=self.config.notification_template,
            charged_template=self.config.charged_template,
        )
        self.notifications = notifications or (
            NotifySendSink(renderer) if desktop_notifications else LoggingNotificationSink(renderer)
        )

        self.triggers = TriggerQueue()
        self.engine = MonitorEngine(
            source=self.source,
            preferences=self.settings,
            presentation=self.presentation,
            notifications=self.notifications,
        )

    @property
    def config(self) -> UserSettings:
        """Settings currently in effect."""
        return self.settings.settings

    def refresh(self) -> DisplayState | ErrorState | None:
        """Read the battery once and present it, without notifying.

        Returns:
            The presented state, or None if the readings were incomplete
        """
        self.engine.start(TriggerReason.MANUAL_REFRESH)
        try:
            return self.engine.state
        finally:
            self.engine.stop()

    def run(self, once: bool = False) -> None:
        """Monitor the battery until interrupted.

        Args:
            once: Evaluate a single power-source cycle (display and
                notifications) and return
        """
        if once:
            self.engine.start(TriggerReason.POWER_SOURCE_CHANGED)
            self.engine.stop()
            return

        stop = threading.Event()
        watcher = TriggerWatcher(self._watch_source(), self.settings, self.triggers)
        thread = threading.Thread(
            target=watcher.run, args=(stop,), name="juicewatch-watcher", daemon=True
        )
        previous_handlers = self._install_signal_handlers()

        self.engine.start(TriggerReason.MANUAL_REFRESH)
        thread.start()
        logger.info("Monitoring battery every %.1fs", self.config.poll_seconds)
        try:
            self.triggers.run(self.engine.on_trigger)
        finally:
            stop.set()
            thread.join(timeout=WATCHER_JOIN_TIMEOUT)
            if thread.is_alive():
                logger.warning("Watcher thread did not stop within %.1fs", WATCHER_JOIN_TIMEOUT)
            self.engine.stop()
            for signum, handler in previous_handlers.items():
                if handler is not None:
                    signal.signal(signum, handler)

    def stop(self) -> None:
        """Ask a running monitor loop to finish."""
        self.triggers.close()

    def open_power_settings(self) -> bool:
        """Launch the desktop's power settings panel.

        Returns:
            True if the command ran successfully
        """
        command = self.config.power_settings_command
        try:
            subprocess.run(command, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as exc:
            logger.warning("Power settings command failed: %s", exc)
            return False
        except FileNotFoundError:
            logger.warning("Power settings command not found: %s", command[0])
            return False
        return True

    def _watch_source(self) -> BatteryDataSource:
        """Separate source instance for the watcher thread.

        Sources hold connection state, so the watcher never shares the
        engine's instance.
        """
        if isinstance(self.source, SysfsBatterySource):
            return SysfsBatterySource(self.source.root)
        return self.source

    def _install_signal_handlers(self) -> dict[signal.Signals, Any]:
        """Route SIGUSR1 to a manual refresh and SIGTERM to a clean stop.

        Returns:
            The handlers that were replaced, keyed by signal
        """
        if threading.current_thread() is not threading.main_thread():
            return {}
        return {
            signal.SIGUSR1: signal.signal(
                signal.SIGUSR1, lambda *_: self.triggers.push(TriggerReason.MANUAL_REFRESH)
            ),
            signal.SIGTERM: signal.signal(signal.SIGTERM, lambda *_: self.stop()),
        }

    @classmethod
    def create_for_testing(
        cls,
        readings: RawReadings | None = None,
        settings: UserSettings | None = None,
    ) -> BatteryMonitor:
        """Create a BatteryMonitor wired to in-memory collaborators.

        Args:
            readings: Readings returned by the static battery source
            settings: Settings to use (defaults if None)

        Returns:
            BatteryMonitor with a StaticBatterySource, MockPresentation
            and MockNotificationSink
        """
        return cls(
            source=StaticBatterySource(readings),
            presentation=MockPresentation(),
            notifications=MockNotificationSink(),
            settings=SettingsStore(settings=settings or UserSettings()),
            debug=True,
        )
