"""Exception classes for battery data access.

This module defines the errors raised while talking to a battery data
source and while turning its readings into a snapshot.
"""

from __future__ import annotations

from typing import Optional, Sequence

from juicewatch.common.enums import SourceErrorKind


class BatterySourceError(Exception):
    """Hard failure of the battery data source.

    Raised when the connection to the power-source service cannot be
    established. These errors are fatal to the current monitoring
    session: the monitor shows a fixed error icon until a later trigger
    reads the source successfully.
    """

    def __init__(
        self,
        kind: SourceErrorKind,
        message: str,
        original_error: Optional[Exception] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            kind: Which failure occurred
            message: Human-readable error message
            original_error: The underlying exception, when there is one
        """
        super().__init__(f"[{kind.value}] {message}")
        self.kind: SourceErrorKind = kind
        self.message: str = message
        self.original_error: Optional[Exception] = original_error

    @classmethod
    def for_kind(
        cls, kind: SourceErrorKind, message: str, original_error: Optional[Exception] = None
    ) -> BatterySourceError:
        """Create the matching subclass for an error kind.

        Args:
            kind: Which failure occurred
            message: Human-readable error message
            original_error: The underlying exception, when there is one

        Returns:
            Appropriate BatterySourceError subclass
        """
        if kind is SourceErrorKind.CONNECTION_ALREADY_OPEN:
            return ConnectionAlreadyOpenError(message, original_error)
        if kind is SourceErrorKind.SERVICE_NOT_FOUND:
            return ServiceNotFoundError(message, original_error)
        return cls(kind, message, original_error)


class ConnectionAlreadyOpenError(BatterySourceError):
    """Raised when the source is opened while a connection is already held."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(SourceErrorKind.CONNECTION_ALREADY_OPEN, message, original_error)


class ServiceNotFoundError(BatterySourceError):
    """Raised when no battery service (or device) can be found."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(SourceErrorKind.SERVICE_NOT_FOUND, message, original_error)


class DataUnavailableError(Exception):
    """Raised when readings are too incomplete to build a snapshot.

    Not an error condition for the user: the monitor skips the update
    and keeps showing the last good state.
    """

    def __init__(self, missing: Sequence[str], message: str | None = None) -> None:
        """Initialize with the names of the unusable fields.

        Args:
            missing: Field names that were absent or invalid
            message: Optional override for the default message
        """
        self.missing: tuple[str, ...] = tuple(missing)
        super().__init__(message or f"Battery data unavailable: {', '.join(self.missing)}")
