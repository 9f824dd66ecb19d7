from enum import Enum


class TriggerReason(Enum):
    """External events that make the monitor re-evaluate its state.

    Power-source changes refresh the display and run the notification gate,
    preference changes only re-derive the display, and manual refreshes
    (e.g. opening the menu) re-read the battery without touching
    notification state.
    """

    POWER_SOURCE_CHANGED = "power_source_changed"
    PREFERENCE_CHANGED = "preference_changed"
    MANUAL_REFRESH = "manual_refresh"


class SourceErrorKind(Enum):
    """Hard failures reported by a battery data source."""

    CONNECTION_ALREADY_OPEN = "connection_already_open"
    SERVICE_NOT_FOUND = "service_not_found"


class IconKind(Enum):
    """Icon families the status item can show."""

    CHARGED_AND_PLUGGED = "charged_and_plugged"
    CHARGING = "charging"
    DISCHARGING = "discharging"
    ERROR = "error"
