"""Preference sources backed by the settings file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from juicewatch.notifications.keys import NotificationKey
from juicewatch.settings.user import UserSettings

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class PreferenceSource(Protocol):
    """Protocol for the user preferences the monitor consults."""

    def prefer_show_time(self) -> bool:
        """Whether the status title shows the time remaining."""
        ...

    def enabled_keys(self) -> frozenset[NotificationKey]:
        """Thresholds the user wants to be notified about."""
        ...


@dataclass
class StaticPreferences:
    """Fixed preferences, for tests and one-shot commands."""

    show_time: bool = False
    keys: frozenset[NotificationKey] = field(default_factory=lambda: frozenset(NotificationKey))

    def prefer_show_time(self) -> bool:
        return self.show_time

    def enabled_keys(self) -> frozenset[NotificationKey]:
        return self.keys


class SettingsStore:
    """Holds the current UserSettings and reloads them when the file changes.

    Implements PreferenceSource. Reloads that fail validation are logged
    and the previous settings stay in effect.
    """

    def __init__(self, path: Path | None = None, settings: UserSettings | None = None) -> None:
        """Initialize the store.

        Args:
            path: Settings file (None means no file: defaults, never reloaded)
            settings: Already loaded settings (loaded from ``path`` if None)
        """
        self.path = path
        self.settings = settings or (UserSettings.load(path) if path else UserSettings())
        self._mtime = self._stat()

    @classmethod
    def discover(cls, path: Path | None = None) -> SettingsStore:
        """Create a store for ``path`` or for the first default config found."""
        if path is None:
            try:
                path = UserSettings.find_config()
            except FileNotFoundError as exc:
                logger.info("%s Using defaults.", exc)
                return cls()
        return cls(path)

    def prefer_show_time(self) -> bool:
        return self.settings.show_time

    def enabled_keys(self) -> frozenset[NotificationKey]:
        return self.settings.notifications

    def _stat(self) -> float | None:
        if self.path is None:
            return None
        try:
            return self.path.stat().st_mtime
        except OSError:
            return None

    def reload_if_changed(self) -> bool:
        """Reload the settings file if it was modified.

        Returns:
            True if new, different settings are now in effect
        """
        mtime = self._stat()
        if mtime is None or mtime == self._mtime:
            return False
        self._mtime = mtime

        try:
            updated = UserSettings.load(self.path)
        except (FileNotFoundError, RuntimeError) as exc:
            logger.warning("Keeping previous settings: %s", exc)
            return False

        if updated == self.settings:
            return False
        logger.info("Settings reloaded from %s", self.path)
        self.settings = updated
        return True
