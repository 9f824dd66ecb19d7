from __future__ import annotations

from typing import Protocol, runtime_checkable

from juicewatch.common.enums import SourceErrorKind
from juicewatch.system.errors import BatterySourceError, ConnectionAlreadyOpenError
from juicewatch.types.power_supply import RawReadings


@runtime_checkable
class BatteryDataSource(Protocol):
    """Protocol for anything that can report the battery state.

    Implementations hold a connection to the underlying service between
    ``open()`` and ``close()``. ``read()`` returns whatever readings are
    available at this instant and raises a BatterySourceError only for
    hard failures (service missing, connection conflict).
    """

    def open(self) -> None:
        """Connect to the battery service."""
        ...

    def close(self) -> None:
        """Release the connection."""
        ...

    def read(self) -> RawReadings:
        """Return the current readings.

        Returns:
            Readings; any key may be missing
        """
        ...


class StaticBatterySource:
    """In-memory battery source for tests and demos.

    Returns the configured readings; assign ``readings`` to simulate a
    change in the power source.
    """

    def __init__(self, readings: RawReadings | None = None) -> None:
        self.readings: RawReadings = readings or {}
        self.is_open = False
        self.read_calls = 0

    def open(self) -> None:
        if self.is_open:
            raise ConnectionAlreadyOpenError("Static source is already open")
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def read(self) -> RawReadings:
        """Return a copy of the configured readings."""
        self.read_calls += 1
        return RawReadings(**self.readings)


class FailingBatterySource(StaticBatterySource):
    """Battery source that simulates hard service failures."""

    def __init__(
        self,
        kind: SourceErrorKind = SourceErrorKind.SERVICE_NOT_FOUND,
        fail_on_methods: list[str] | None = None,
        readings: RawReadings | None = None,
    ) -> None:
        """Initialize with the error kind and the methods that should fail.

        Args:
            kind: Which BatterySourceError to raise
            fail_on_methods: Method names that raise (default: open and read)
            readings: Readings returned once failures are switched off
        """
        super().__init__(readings)
        self.kind = kind
        self.fail_on_methods = fail_on_methods if fail_on_methods is not None else ["open", "read"]

    def _maybe_fail(self, method: str) -> None:
        if method in self.fail_on_methods:
            raise BatterySourceError.for_kind(self.kind, f"Simulated failure in {method}")

    def open(self) -> None:
        self._maybe_fail("open")
        super().open()

    def read(self) -> RawReadings:
        self._maybe_fail("read")
        return super().read()
