"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
- SettingsStore: The live preference source, reloaded when the file changes
"""

from juicewatch.settings.store import PreferenceSource, SettingsStore, StaticPreferences
from juicewatch.settings.user import UserSettings

__all__ = ["PreferenceSource", "SettingsStore", "StaticPreferences", "UserSettings"]
