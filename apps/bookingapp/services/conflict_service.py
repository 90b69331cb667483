# apps/bookingapp/services/conflict_service.py
import logging
from typing import Dict, Iterable, List

from algorithms.availability.conflict_detector import ConflictDetector
from algorithms.availability.part_hierarchy import Booking, Resource
from apps.bookingapp.utils.date_utils import format_date_display, format_time_display
from core.exceptions import BookingConflictError

logger = logging.getLogger(__name__)


class ConflictService:
    """Service for detecting conflicts between proposed and stored bookings"""

    @staticmethod
    def find_conflicts(
        resource: Resource, proposed: Booking, existing_bookings: Iterable[Booking]
    ) -> List[Booking]:
        """
        Find stored bookings that clash with a proposed booking

        Args:
            resource: Resource the booking is for
            proposed: The booking being requested
            existing_bookings: Bookings already stored for the resource

        Returns:
            Conflicting bookings sorted by start time
        """
        return ConflictDetector(resource).find_conflicts(proposed, existing_bookings)

    @staticmethod
    def describe_conflict(resource: Resource, proposed: Booking, conflict: Booking) -> str:
        """Human readable message for a conflict"""
        part = resource.hierarchy.get(conflict.part_id)
        if conflict.is_whole_resource:
            target = "the whole facility"
        elif part is not None:
            target = f'"{part.name}"'
        else:
            target = f'"{conflict.part_id}"'

        return (
            f"Conflict on {format_date_display(proposed.start)}: {target} is already "
            f"booked {format_time_display(conflict.start)}-{format_time_display(conflict.end)}"
        )

    @classmethod
    def check_booking_conflicts(
        cls,
        resource: Resource,
        proposed_bookings: Iterable[Booking],
        existing_bookings: Iterable[Booking],
    ) -> List[Dict]:
        """
        Check every proposed occurrence against stored bookings

        Args:
            resource: Resource the bookings are for
            proposed_bookings: Proposed booking(s), e.g. all occurrences of a series
            existing_bookings: Bookings already stored for the resource

        Returns:
            One entry per conflicting proposed booking with the first
            conflicting stored booking and a message; empty when all are free
        """
        existing = list(existing_bookings)
        detector = ConflictDetector(resource)
        results = []

        for proposed in proposed_bookings:
            conflicts = detector.find_conflicts(proposed, existing)
            if not conflicts:
                continue

            # Report the earliest clash per occurrence
            conflict = conflicts[0]
            results.append(
                {
                    "booking": proposed,
                    "conflict": conflict,
                    "message": cls.describe_conflict(resource, proposed, conflict),
                }
            )

        if results:
            logger.info(
                f"{len(results)} proposed booking(s) on resource {resource.id} have conflicts"
            )
        return results

    @classmethod
    def has_conflicts(
        cls,
        resource: Resource,
        proposed_bookings: Iterable[Booking],
        existing_bookings: Iterable[Booking],
    ) -> bool:
        return bool(cls.check_booking_conflicts(resource, proposed_bookings, existing_bookings))

    @classmethod
    def ensure_no_conflicts(
        cls,
        resource: Resource,
        proposed_bookings: Iterable[Booking],
        existing_bookings: Iterable[Booking],
    ):
        """
        Refuse a booking request when any occurrence clashes

        Raises:
            BookingConflictError: With the message of the first clash
        """
        results = cls.check_booking_conflicts(resource, proposed_bookings, existing_bookings)
        if results:
            raise BookingConflictError(results[0]["message"], conflicts=results)
