"""User notification rendering and delivery."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Final, Protocol, runtime_checkable

from jinja2 import Template

from juicewatch.constants import APP_NAME
from juicewatch.display.icons import CHARGED_AND_PLUGGED_ICON, discharge_icon_name
from juicewatch.notifications.keys import NotificationKey

logger: Final = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_TITLE: Final = "Battery"
DEFAULT_NOTIFICATION_TEMPLATE: Final = "{{ percentage }} % battery remaining"
DEFAULT_CHARGED_TEMPLATE: Final = "Your battery is fully charged"

# Seconds before an unanswered notify-send call is abandoned
NOTIFY_TIMEOUT: Final = 10.0


@dataclass(frozen=True)
class NotificationMessage:
    """A rendered notification ready for delivery."""

    title: str
    body: str
    icon: str


class NotificationRenderer:
    """Renders notification messages from Jinja2 templates.

    The discharge template is used for thresholds 10-90 and the charged
    template for HUNDRED. Both templates see ``percentage`` and ``key``.
    """

    def __init__(
        self,
        title: str = DEFAULT_NOTIFICATION_TITLE,
        template: str = DEFAULT_NOTIFICATION_TEMPLATE,
        charged_template: str = DEFAULT_CHARGED_TEMPLATE,
    ) -> None:
        self.title = title
        self.template = Template(template)
        self.charged_template = Template(charged_template)

    def render(self, key: NotificationKey) -> NotificationMessage:
        """Render the message for a threshold key."""
        if key is NotificationKey.HUNDRED:
            template, icon = self.charged_template, CHARGED_AND_PLUGGED_ICON
        else:
            template, icon = self.template, discharge_icon_name(key.percentage)
        body = template.render(percentage=key.percentage, key=key)
        return NotificationMessage(title=self.title, body=body, icon=icon)


@runtime_checkable
class NotificationSink(Protocol):
    """Protocol for user notification delivery."""

    def notify(self, key: NotificationKey) -> None:
        """Deliver a notification for an approved threshold key.

        Args:
            key: Threshold approved by the notification gate
        """
        ...


class LoggingNotificationSink:
    """Sink that writes notifications to the log instead of the desktop."""

    def __init__(self, renderer: NotificationRenderer | None = None) -> None:
        self.renderer = renderer or NotificationRenderer()

    def notify(self, key: NotificationKey) -> None:
        message = self.renderer.render(key)
        logger.info("%s: %s", message.title, message.body)


class NotifySendSink:
    """Desktop notification via the freedesktop ``notify-send`` tool.

    Delivery is best effort: failures are logged, never raised.
    """

    def __init__(
        self,
        renderer: NotificationRenderer | None = None,
        command: str = "notify-send",
        timeout: float = NOTIFY_TIMEOUT,
    ) -> None:
        """Initialize the sink.

        Args:
            renderer: Message renderer (defaults if None)
            command: notify-send executable name or path
            timeout: Seconds to wait for notify-send
        """
        self.renderer = renderer or NotificationRenderer()
        self.command = command
        self.timeout = timeout

    def notify(self, key: NotificationKey) -> None:
        """Render and send the notification for ``key``."""
        message = self.renderer.render(key)
        try:
            subprocess.run(
                [
                    self.command,
                    f"--app-name={APP_NAME}",
                    f"--icon={message.icon}",
                    message.title,
                    message.body,
                ],
                check=True,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as exc:
            logger.warning("Notification command failed: %s", exc)
        except subprocess.TimeoutExpired:
            logger.warning(
                "%s timed out after %.1fs; notification dropped", self.command, self.timeout
            )
        except FileNotFoundError:
            logger.warning("%s not found; notification dropped: %s", self.command, message.body)


class MockNotificationSink:
    """Mock implementation of NotificationSink for testing."""

    def __init__(self) -> None:
        self.notified: list[NotificationKey] = []

    def notify(self, key: NotificationKey) -> None:
        """Record the delivered key."""
        self.notified.append(key)

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.notified = []
