"""Text and number formatting utilities.

All numbers are formatted with plain ``%d``-style conversion so the output
never depends on the locale (no thousands separators).
"""

from __future__ import annotations

from juicewatch.constants import TIME_CALCULATING, TIME_CHARGED


def format_percentage(value: int) -> str:
    """Format a state of charge for display.

    Args:
        value: Percentage (0-100)

    Returns:
        Formatted percentage string, e.g. "73 %"
    """
    return f"{int(value):d} %"


def format_time_remaining(minutes: int | None, charged: bool = False) -> str:
    """Format an estimated time remaining as h:mm.

    Args:
        minutes: Estimated minutes until empty/full, or None if unknown
        charged: Whether the battery is full and on external power

    Returns:
        "Charged", "Calculating" or the formatted time (e.g. "2:05")
    """
    if charged:
        return TIME_CHARGED
    if minutes is None or minutes < 0:
        return TIME_CALCULATING
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:d}:{mins:02d}"


def format_capacity(current_charge: int, max_capacity: int) -> str:
    """Format current charge against full capacity.

    Args:
        current_charge: Current charge in mAh
        max_capacity: Full capacity in mAh

    Returns:
        Formatted string, e.g. "(3120 / 4400 mAh)"
    """
    return f"({int(current_charge):d} / {int(max_capacity):d} mAh)"
