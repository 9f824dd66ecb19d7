"""Tests for notification rendering and delivery sinks."""

from __future__ import annotations

import logging
import subprocess
from typing import Any

import pytest

from juicewatch.notifications import delivery
from juicewatch.notifications.delivery import (
    LoggingNotificationSink,
    NotificationRenderer,
    NotifySendSink,
)
from juicewatch.notifications.keys import NotificationKey


class _FakeRun:
    """Capture arguments to subprocess.run."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc
        self.called: dict[str, Any] = {}

    def __call__(self, cmd: list[str], **kwargs: Any) -> None:
        self.called["cmd"] = cmd
        self.called["kwargs"] = kwargs
        if self.exc is not None:
            raise self.exc


def test_render_threshold_message() -> None:
    """Threshold messages use the discharge template and icon."""
    message = NotificationRenderer().render(NotificationKey.TWENTY)

    assert message.title == "Battery"
    assert message.body == "20 % battery remaining"
    assert message.icon == "battery-low"


def test_render_charged_message() -> None:
    """HUNDRED uses the charged template and icon."""
    message = NotificationRenderer().render(NotificationKey.HUNDRED)

    assert message.body == "Your battery is fully charged"
    assert message.icon == "battery-full-charged"


def test_custom_templates() -> None:
    """Custom title and templates are rendered with the key context."""
    renderer = NotificationRenderer(
        title="Laptop",
        template="Down to {{ percentage }}%",
        charged_template="Full ({{ key.percentage }})",
    )

    assert renderer.render(NotificationKey.TEN).body == "Down to 10%"
    assert renderer.render(NotificationKey.HUNDRED).body == "Full (100)"


def test_notify_send_command(monkeypatch: pytest.MonkeyPatch) -> None:
    """notify-send receives app name, icon, title and body."""
    fake = _FakeRun()
    monkeypatch.setattr(delivery.subprocess, "run", fake)

    NotifySendSink().notify(NotificationKey.TEN)

    assert fake.called["cmd"] == [
        "notify-send",
        "--app-name=juicewatch",
        "--icon=battery-caution",
        "Battery",
        "10 % battery remaining",
    ]
    assert fake.called["kwargs"]["check"] is True
    assert fake.called["kwargs"]["timeout"] == delivery.NOTIFY_TIMEOUT


@pytest.mark.parametrize(
    "exc",
    [
        FileNotFoundError("notify-send"),
        subprocess.CalledProcessError(1, ["notify-send"]),
        subprocess.TimeoutExpired(["notify-send"], 10.0),
    ],
)
def test_notify_send_failures_are_logged(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, exc: Exception
) -> None:
    """Delivery failures are logged, not raised."""
    monkeypatch.setattr(delivery.subprocess, "run", _FakeRun(exc))

    with caplog.at_level(logging.WARNING):
        NotifySendSink().notify(NotificationKey.FIFTY)

    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_logging_sink(caplog: pytest.LogCaptureFixture) -> None:
    """The logging sink writes the rendered message to the log."""
    with caplog.at_level(logging.INFO, logger="juicewatch.notifications.delivery"):
        LoggingNotificationSink().notify(NotificationKey.HUNDRED)

    assert "Your battery is fully charged" in caplog.text
