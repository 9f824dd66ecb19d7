"""Trigger delivery: a single-consumer queue and a polling watcher."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from typing import Final

from juicewatch.common.enums import SourceErrorKind, TriggerReason
from juicewatch.settings.store import SettingsStore
from juicewatch.system.errors import BatterySourceError
from juicewatch.system.protocols import BatteryDataSource
from juicewatch.types.power_supply import RawReadings

logger: Final = logging.getLogger(__name__)

_STOP: Final = object()
_UNSET: Final = object()


class TriggerQueue:
    """Serializes triggers from any thread onto one consumer.

    Producers call ``push`` (thread-safe, and safe from signal handlers);
    exactly one consumer runs ``run`` or ``drain`` so evaluations never
    overlap.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[object] = queue.SimpleQueue()

    def push(self, reason: TriggerReason) -> None:
        """Enqueue a trigger."""
        self._queue.put(reason)

    def close(self) -> None:
        """Ask the consumer to stop after the triggers already queued."""
        self._queue.put(_STOP)

    def run(self, handler: Callable[[TriggerReason], None]) -> None:
        """Consume triggers until ``close`` is called.

        Args:
            handler: Called once per trigger, in order
        """
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            assert isinstance(item, TriggerReason)
            handler(item)

    def drain(self, handler: Callable[[TriggerReason], None]) -> int:
        """Handle every trigger queued right now without blocking.

        Returns:
            Number of triggers handled
        """
        handled = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return handled
            if item is _STOP:
                return handled
            assert isinstance(item, TriggerReason)
            handler(item)
            handled += 1


class TriggerWatcher:
    """Polls the battery and the settings file and pushes triggers.

    A change in the raw readings (or in the source's error state) pushes
    POWER_SOURCE_CHANGED; a successful settings reload pushes
    PREFERENCE_CHANGED. The first poll only records a baseline.
    """

    def __init__(
        self,
        source: BatteryDataSource,
        settings: SettingsStore,
        triggers: TriggerQueue,
    ) -> None:
        """Initialize the watcher.

        Args:
            source: Battery source to poll (use a separate instance from the engine's)
            settings: Settings store to check for file changes
            triggers: Queue receiving the triggers
        """
        self.source = source
        self.settings = settings
        self.triggers = triggers
        self._last: object = _UNSET

    def _observe(self) -> RawReadings | SourceErrorKind:
        try:
            return self.source.read()
        except BatterySourceError as err:
            return err.kind

    def poll_once(self) -> list[TriggerReason]:
        """Check for changes once and push the resulting triggers.

        Returns:
            Triggers pushed by this poll
        """
        pushed: list[TriggerReason] = []

        observed = self._observe()
        if self._last is not _UNSET and observed != self._last:
            pushed.append(TriggerReason.POWER_SOURCE_CHANGED)
        self._last = observed

        if self.settings.reload_if_changed():
            pushed.append(TriggerReason.PREFERENCE_CHANGED)

        for reason in pushed:
            logger.debug("Pushing trigger %s", reason.value)
            self.triggers.push(reason)
        return pushed

    def run(self, stop: threading.Event) -> None:
        """Poll every ``poll_seconds`` until ``stop`` is set."""
        self.poll_once()
        while not stop.wait(self.settings.settings.poll_seconds):
            self.poll_once()
