"""Threshold notifications: keys, dedup gate and delivery sinks."""

from juicewatch.notifications.delivery import (
    LoggingNotificationSink,
    MockNotificationSink,
    NotificationMessage,
    NotificationRenderer,
    NotificationSink,
    NotifySendSink,
)
from juicewatch.notifications.gate import NotificationGate, NotificationState
from juicewatch.notifications.keys import NotificationKey

__all__ = [
    "LoggingNotificationSink",
    "MockNotificationSink",
    "NotificationGate",
    "NotificationKey",
    "NotificationMessage",
    "NotificationRenderer",
    "NotificationSink",
    "NotificationState",
    "NotifySendSink",
]
