# apps/bookingapp/services/availability_service.py
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from django.conf import settings
from django.utils import timezone

from algorithms.availability.conflict_detector import (
    WHOLE_RESOURCE,
    BlockedSlot,
    ConflictDetector,
    TimeRange,
)
from algorithms.availability.part_hierarchy import Booking, Resource
from algorithms.availability.timeline_layout import (
    LayoutConfig,
    PositionedItem,
    TimelineLayoutEngine,
)
from apps.bookingapp.utils.date_utils import get_week_dates

logger = logging.getLogger(__name__)

# Type definitions for grouped results
BlockedSlotsByPart = Dict[Optional[str], List[BlockedSlot]]


class AvailabilityService:
    """
    Service for composing the availability engine into calendar views.

    Everything here works on bookings supplied by the caller; it never
    queries storage and its results are advisory only.
    """

    @staticmethod
    def get_layout_config() -> LayoutConfig:
        """Layout tunables from the FACILITY_BOOKING setting"""
        return LayoutConfig.from_dict(getattr(settings, "FACILITY_BOOKING", {}))

    @staticmethod
    def resolve_timezone(tzinfo=None):
        """Timezone of the day bounds: the given one, else the active Django zone"""
        if tzinfo is not None:
            return tzinfo
        return timezone.get_current_timezone() if settings.USE_TZ else None

    @staticmethod
    def _resource_bookings(resource: Resource, bookings: Iterable[Booking]) -> List[Booking]:
        return [
            booking
            for booking in bookings
            if booking.resource_id == resource.id and booking.is_active
        ]

    @classmethod
    def get_blocked_slots(
        cls, resource: Resource, bookings: Iterable[Booking], day: date, tzinfo=None
    ) -> BlockedSlotsByPart:
        """
        Get blocked slots per part for one day.

        Args:
            resource: Resource with parts and blocking policy
            bookings: Bookings for the resource
            day: Day to report on
            tzinfo: Timezone of the day bounds (defaults to the current zone)

        Returns:
            Dictionary keyed by part ID (None for the whole resource) of the
            blocked slots touching the day
        """
        window = TimeRange.for_day(day, cls.resolve_timezone(tzinfo))
        grouped = ConflictDetector(resource).blocked_slots_by_part(bookings)

        return {
            part_id: [slot for slot in slots if slot.time_range.overlaps(window)]
            for part_id, slots in grouped.items()
        }

    @classmethod
    def get_day_overview(
        cls, resource: Resource, bookings: Iterable[Booking], day: date, tzinfo=None
    ) -> List[Dict]:
        """
        Build the horizontal timeline rows for one resource and day.

        The whole-resource row comes first, and only when the resource
        allows whole bookings. Then one row per part, in part order.

        Args:
            resource: Resource with parts and blocking policy
            bookings: Bookings for the resource
            day: Day to lay out
            tzinfo: Timezone of the day bounds (defaults to the current zone)

        Returns:
            List of row dicts with part_id, label, bookings and blocked_slots
        """
        tzinfo = cls.resolve_timezone(tzinfo)
        active = cls._resource_bookings(resource, bookings)
        blocked = cls.get_blocked_slots(resource, active, day, tzinfo)
        engine = TimelineLayoutEngine(cls.get_layout_config())

        rows = []
        targets = [(WHOLE_RESOURCE, f"Whole {resource.name}")]
        targets.extend((part.id, part.name) for part in resource.hierarchy.parts)

        for part_id, label in targets:
            if part_id is WHOLE_RESOURCE and not resource.policy.allow_whole_booking:
                continue

            row_bookings = [booking for booking in active if booking.part_id == part_id]
            rows.append(
                {
                    "part_id": part_id,
                    "label": label,
                    "is_whole_resource": part_id is WHOLE_RESOURCE,
                    "bookings": engine.layout_day(row_bookings, day, tzinfo=tzinfo),
                    "blocked_slots": engine.layout_day(
                        blocked.get(part_id, []), day, tzinfo=tzinfo
                    ),
                }
            )

        logger.debug(
            f"Built {len(rows)} timeline rows for resource {resource.id} on {day.isoformat()}"
        )
        return rows

    @classmethod
    def get_calendar_day(
        cls, resource: Resource, bookings: Iterable[Booking], day: date, tzinfo=None
    ) -> List[PositionedItem]:
        """
        Lay out a resource's bookings in a vertical day column.

        Whole-resource bookings are hidden when the resource does not allow
        whole bookings.

        Args:
            resource: Resource with parts and blocking policy
            bookings: Bookings for the resource
            day: Day to lay out
            tzinfo: Timezone of the day bounds (defaults to the current zone)

        Returns:
            Positioned bookings
        """
        visible = [
            booking
            for booking in cls._resource_bookings(resource, bookings)
            if resource.policy.allow_whole_booking or not booking.is_whole_resource
        ]
        engine = TimelineLayoutEngine(cls.get_layout_config())
        return engine.layout_day(
            visible, day, tzinfo=cls.resolve_timezone(tzinfo), vertical=True
        )

    @classmethod
    def get_calendar_week(
        cls, resource: Resource, bookings: Iterable[Booking], reference_date: date, tzinfo=None
    ) -> Dict[date, List[PositionedItem]]:
        """Day columns for the Monday-to-Sunday week containing reference_date"""
        bookings = list(bookings)
        return {
            day: cls.get_calendar_day(resource, bookings, day, tzinfo=tzinfo)
            for day in get_week_dates(reference_date)
        }
