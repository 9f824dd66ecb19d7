"""Common utility functions and helpers for the juicewatch package."""

from juicewatch.utils.formatting import format_capacity, format_percentage, format_time_remaining

__all__ = [
    "format_capacity",
    "format_percentage",
    "format_time_remaining",
]
