"""System module for battery data access and snapshots."""

# Re-export commonly used classes for cleaner imports
from juicewatch.system.errors import (
    BatterySourceError,
    ConnectionAlreadyOpenError,
    DataUnavailableError,
    ServiceNotFoundError,
)
from juicewatch.system.protocols import BatteryDataSource, FailingBatterySource, StaticBatterySource
from juicewatch.system.status import BatterySnapshot, SnapshotBuilder
from juicewatch.system.sysfs import SysfsBatterySource

# Define the public API
__all__ = [
    "BatteryDataSource",
    "BatterySnapshot",
    "BatterySourceError",
    "ConnectionAlreadyOpenError",
    "DataUnavailableError",
    "FailingBatterySource",
    "ServiceNotFoundError",
    "SnapshotBuilder",
    "StaticBatterySource",
    "SysfsBatterySource",
]
