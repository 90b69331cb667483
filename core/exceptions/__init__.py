"""
Facility Booking – centralised custom exceptions.

Import these from `core.exceptions` across the project instead of redefining
ad-hoc `Exception` subclasses in each app.
"""

from __future__ import annotations


class FacilityBookingBaseException(Exception):
    """Base class for all custom exceptions in the facility booking backend.

    Catch this (or a concrete subclass) in services when you want to convert
    internal errors into validation errors without leaking implementation
    details.
    """


class InvalidBookingIntervalError(FacilityBookingBaseException, ValueError):
    """Raised when a booking's start is not strictly before its end.

    The availability engine only works on half-open ``[start, end)`` intervals,
    so a zero or negative length booking can never be derived into blocked
    slots or occurrences.
    """


class UnsupportedRecurrenceError(FacilityBookingBaseException, ValueError):
    """Raised when a recurrence cadence other than weekly/biweekly/monthly is requested."""


class BookingDurationError(FacilityBookingBaseException, ValueError):
    """Raised when a booking is shorter or longer than its resource allows."""


class WholeBookingNotAllowedError(FacilityBookingBaseException):
    """Raised when the whole of a resource is booked but the resource only allows part bookings."""


class BookingConflictError(FacilityBookingBaseException):
    """Raised when requested bookings clash with bookings that already exist.

    ``conflicts`` holds one entry per clashing occurrence, as produced by
    ``ConflictService.check_booking_conflicts``.
    """

    def __init__(self, message: str, conflicts: list | None = None):
        super().__init__(message)
        self.conflicts = conflicts or []


__all__ = [
    "FacilityBookingBaseException",
    "InvalidBookingIntervalError",
    "UnsupportedRecurrenceError",
    "BookingDurationError",
    "WholeBookingNotAllowedError",
    "BookingConflictError",
]
