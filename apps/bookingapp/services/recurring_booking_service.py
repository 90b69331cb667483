# apps/bookingapp/services/recurring_booking_service.py
import logging
import uuid
from datetime import date, datetime
from typing import Iterable, List, Optional

from django.conf import settings

from algorithms.availability.part_hierarchy import Booking, BookingStatus, Resource
from algorithms.availability.recurrence_expander import occurrence_intervals
from core.exceptions import BookingDurationError, WholeBookingNotAllowedError

logger = logging.getLogger(__name__)


class RecurringBookingService:
    """
    Service for planning recurring booking series.

    A series is stored as independent bookings: the first occurrence is the
    series root and every later occurrence points at it through
    ``parent_booking_id``, which is what "apply to all" operations follow.
    """

    DEFAULT_MAX_OCCURRENCES = 52

    @classmethod
    def get_max_occurrences(cls) -> int:
        engine_settings = getattr(settings, "FACILITY_BOOKING", {})
        return engine_settings.get("MAX_RECURRING_OCCURRENCES", cls.DEFAULT_MAX_OCCURRENCES)

    @staticmethod
    def validate_booking_request(
        resource: Resource, start: datetime, end: datetime, part_id: Optional[str] = None
    ):
        """
        Validate a booking request against the resource's rules

        Args:
            resource: Resource being booked
            start: Requested start
            end: Requested end
            part_id: Requested part (None for the whole resource)

        Raises:
            WholeBookingNotAllowedError: If the whole resource is requested
                but only parts may be booked
            BookingDurationError: If the length is outside the resource's limits
        """
        if part_id is None and not resource.policy.allow_whole_booking:
            raise WholeBookingNotAllowedError(
                f"Resource {resource.name} can only be booked by part"
            )

        duration_minutes = (end - start).total_seconds() / 60

        if resource.min_booking_minutes is not None and duration_minutes < resource.min_booking_minutes:
            raise BookingDurationError(
                f"Minimum booking length is {resource.min_booking_minutes} minutes"
            )

        if resource.max_booking_minutes is not None and duration_minutes > resource.max_booking_minutes:
            raise BookingDurationError(
                f"Maximum booking length is {resource.max_booking_minutes} minutes"
            )

    @classmethod
    def plan_series(
        cls,
        resource: Resource,
        start: datetime,
        end: datetime,
        title: str = "",
        part_id: Optional[str] = None,
        recurring_type: Optional[str] = None,
        recurring_end_date: Optional[date] = None,
    ) -> List[Booking]:
        """
        Build the bookings for a single or recurring request.

        Nothing is stored; the caller checks conflicts and persists the
        returned bookings in one transaction.

        Args:
            resource: Resource being booked
            start: Start of the first occurrence
            end: End of the first occurrence
            title: Booking title
            part_id: Part to book (None for the whole resource)
            recurring_type: weekly, biweekly or monthly; None for a single booking
            recurring_end_date: Inclusive last date of the series

        Returns:
            The planned bookings, first occurrence first

        Raises:
            UnsupportedRecurrenceError: If recurring_type is not supported
        """
        cls.validate_booking_request(resource, start, end, part_id)

        status = (
            BookingStatus.PENDING.value
            if resource.requires_approval
            else BookingStatus.APPROVED.value
        )

        intervals = [(start, end)]
        if recurring_type and recurring_end_date:
            intervals = list(
                occurrence_intervals(
                    start,
                    end,
                    recurring_type,
                    recurring_end_date,
                    limit=cls.get_max_occurrences(),
                )
            )
            if not intervals:
                # End date before the start: still book the requested slot once
                intervals = [(start, end)]

        is_recurring = len(intervals) > 1
        root_id = str(uuid.uuid4())

        bookings = []
        for index, (occurrence_start, occurrence_end) in enumerate(intervals):
            bookings.append(
                Booking(
                    id=root_id if index == 0 else str(uuid.uuid4()),
                    resource_id=resource.id,
                    part_id=part_id,
                    title=title,
                    start=occurrence_start,
                    end=occurrence_end,
                    status=status,
                    is_recurring=is_recurring,
                    parent_booking_id=root_id if index > 0 else None,
                )
            )

        logger.info(
            f"Planned {len(bookings)} booking(s) for resource {resource.id}"
            + (f" recurring {recurring_type}" if is_recurring else "")
        )
        return bookings

    @classmethod
    def plan_from_request(cls, resource: Resource, validated_data: dict) -> List[Booking]:
        """Plan bookings from RecurrenceRequestSerializer.validated_data"""
        is_recurring = validated_data.get("is_recurring", False)
        return cls.plan_series(
            resource,
            start=validated_data["start"],
            end=validated_data["end"],
            title=validated_data.get("title", ""),
            part_id=validated_data.get("part_id"),
            recurring_type=validated_data.get("recurring_type") if is_recurring else None,
            recurring_end_date=(
                validated_data.get("recurring_end_date") if is_recurring else None
            ),
        )

    @staticmethod
    def related_bookings(
        booking: Booking,
        bookings: Iterable[Booking],
        statuses: Optional[Iterable[str]] = None,
    ) -> List[Booking]:
        """
        Find all bookings in the same series as a booking.

        Args:
            booking: Any occurrence of the series
            bookings: Candidate bookings
            statuses: Optional statuses to keep

        Returns:
            Series members (including the root) sorted by start
        """
        root_id = booking.parent_booking_id or booking.id
        allowed = set(statuses) if statuses is not None else None

        related = [
            candidate
            for candidate in bookings
            if (candidate.id == root_id or candidate.parent_booking_id == root_id)
            and (allowed is None or getattr(candidate.status, "value", candidate.status) in allowed)
        ]
        related.sort(key=lambda candidate: candidate.start)
        return related

    @classmethod
    def bookings_to_update(
        cls, booking: Booking, bookings: Iterable[Booking], apply_to_all: bool = False
    ) -> List[Booking]:
        """
        Resolve the bookings an approve/reject action applies to.

        With apply_to_all on a recurring booking, every pending booking of the
        series is included along with the booking itself.
        """
        if not (apply_to_all and booking.is_recurring):
            return [booking]

        related = cls.related_bookings(
            booking, bookings, statuses=[BookingStatus.PENDING.value]
        )
        if all(candidate.id != booking.id for candidate in related):
            related.insert(0, booking)
        return related
