"""Type definitions for juicewatch."""

from .power_supply import RawReadings, SysfsSupplyDict

__all__ = [
    "RawReadings",
    "SysfsSupplyDict",
]
