# src/juicewatch/display/protocols.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

import typer

from juicewatch.display.icons import IconState


@runtime_checkable
class PresentationSink(Protocol):
    """Protocol defining the interface for status displays.

    This protocol abstracts the widget toolkit (tray icon, status bar,
    terminal) so the monitor can drive any compatible front end. Sinks
    receive the full display state every time it is recomputed.
    """

    def update(self, icon: IconState, status_title: str, menu_detail_title: str) -> None:
        """Show a new display state.

        Args:
            icon: Icon to show
            status_title: Short title next to the icon (empty on errors)
            menu_detail_title: Detail text for the menu (empty on errors)
        """
        ...


class ConsolePresentation:
    """Presentation sink that prints the display state to the terminal."""

    def __init__(self, show_detail: bool = True) -> None:
        self.show_detail = show_detail

    def update(self, icon: IconState, status_title: str, menu_detail_title: str) -> None:
        """Echo the icon name, title and (optionally) the menu detail."""
        line = f"[{icon.icon_name}] {status_title}".rstrip()
        if icon.error is not None:
            typer.secho(line, fg=typer.colors.RED, err=True)
            return
        typer.echo(line)
        if self.show_detail and menu_detail_title:
            for detail in menu_detail_title.splitlines():
                typer.echo(f"  {detail}")


class MockPresentation:
    """Mock implementation of PresentationSink for testing."""

    def __init__(self) -> None:
        self.update_calls: list[dict[str, object]] = []

    def update(self, icon: IconState, status_title: str, menu_detail_title: str) -> None:
        """Record the update call."""
        self.update_calls.append(
            {"icon": icon, "status_title": status_title, "menu_detail_title": menu_detail_title}
        )

    @property
    def last(self) -> dict[str, object] | None:
        """The most recent update, if any."""
        return self.update_calls[-1] if self.update_calls else None

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.update_calls = []


def assert_presented(
    mock: MockPresentation,
    expected_icon: IconState,
    expected_title: str | None = None,
) -> bool:
    """Assert that the last update showed the expected icon (and title).

    Args:
        mock: The mock presentation instance
        expected_icon: The expected icon state
        expected_title: Expected status title (None skips the check)

    Returns:
        True if the assertion passes, raises AssertionError otherwise
    """
    assert mock.last is not None, "Presentation was not updated"
    assert mock.last["icon"] == expected_icon, (
        f"Expected icon {expected_icon}, got {mock.last['icon']}"
    )
    if expected_title is not None:
        assert mock.last["status_title"] == expected_title, (
            f"Expected title {expected_title!r}, got {mock.last['status_title']!r}"
        )
    return True
