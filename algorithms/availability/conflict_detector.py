"""
Hierarchical booking conflict detection.

This module derives, for every part of a resource (and for the "whole resource"
pseudo-part), which time intervals are blocked by existing bookings and by
what. It also answers the booking-time question "does this proposed booking
clash with what is already there?" using the same blocking rules, so that
what the calendar shows as blocked is exactly what cannot be booked.

The output is advisory: it drives calendar rendering and early feedback. The
authoritative check must run again inside the persistence layer's transaction.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from .part_hierarchy import Booking, Resource

logger = logging.getLogger(__name__)

# Key used for the whole-resource pseudo-part
WHOLE_RESOURCE = None


@dataclass(frozen=True)
class TimeRange:
    """Half-open interval ``[start, end)`` between two datetimes."""

    start: datetime
    end: datetime

    def overlaps(self, other: "TimeRange") -> bool:
        """Ranges that only touch (one ends when the other starts) do not overlap."""
        return self.start < other.end and other.start < self.end

    @classmethod
    def from_booking(cls, booking: Booking) -> "TimeRange":
        return cls(booking.start, booking.end)

    @classmethod
    def for_day(cls, day: date, tzinfo=None) -> "TimeRange":
        """
        Create a TimeRange covering one calendar day.

        Args:
            day: The date to cover
            tzinfo: Timezone of the bounds; None gives naive datetimes

        Returns:
            TimeRange from midnight to the following midnight
        """
        return cls(
            datetime.combine(day, time.min, tzinfo=tzinfo),
            datetime.combine(day + timedelta(days=1), time.min, tzinfo=tzinfo),
        )


@dataclass(frozen=True)
class BlockedSlot:
    """An interval during which a part (None = whole resource) cannot be booked."""

    start: datetime
    end: datetime
    part_id: Optional[str]
    blocked_by: str
    booking_id: str

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.start, self.end)


def _slot_sort_key(slot: BlockedSlot):
    part_key = "" if slot.part_id is None else str(slot.part_id)
    return (slot.start, slot.end, part_key, str(slot.booking_id), slot.blocked_by)


class ConflictDetector:
    """
    Derives blocked slots for one resource from its bookings.

    Rules, applied to each active booking independently:
    - a whole-resource booking blocks every part
      (when ``block_parts_when_whole_booked``)
    - a part booking blocks the whole resource
      (when ``block_whole_when_part_booked``)
    - a part booking blocks the part's children and its parent, always
    - siblings and unrelated parts are never blocked
    """

    def __init__(self, resource: Resource):
        """
        Initialize the conflict detector.

        Args:
            resource: The resource whose parts and blocking policy apply
        """
        self.resource = resource
        self.policy = resource.policy
        self.hierarchy = resource.hierarchy

    @property
    def whole_resource_label(self) -> str:
        return f"Whole {self.resource.name}"

    def _belongs_to_resource(self, booking: Booking) -> bool:
        if booking.resource_id != self.resource.id:
            logger.debug(
                f"Ignoring booking {booking.id} for resource {booking.resource_id} "
                f"while deriving blocks for {self.resource.id}"
            )
            return False
        return True

    def blocked_targets(self, booking: Booking) -> List[Tuple[Optional[str], str]]:
        """
        List what a single booking blocks, regardless of its status.

        Args:
            booking: The booking to inspect

        Returns:
            List of (part_id, blocked_by label) pairs; part_id None means the
            whole resource
        """
        if booking.is_whole_resource:
            if not self.policy.block_parts_when_whole_booked:
                return []
            label = self.whole_resource_label
            return [(part.id, label) for part in self.hierarchy.parts]

        targets: List[Tuple[Optional[str], str]] = []
        part = self.hierarchy.get(booking.part_id)
        label = part.name if part else str(booking.part_id)

        if self.policy.block_whole_when_part_booked:
            targets.append((WHOLE_RESOURCE, label))

        if part is None:
            # Unknown part: no hierarchy to propagate through
            logger.debug(
                f"Booking {booking.id} references unknown part {booking.part_id} "
                f"of resource {self.resource.id}"
            )
            return targets

        # Booking a parent blocks its children
        for child in self.hierarchy.children(part.id):
            targets.append((child.id, label))

        # Booking a child blocks its parent
        parent = self.hierarchy.parent(part.id)
        if parent is not None:
            targets.append((parent.id, label))

        return targets

    def derive_blocked_slots(self, bookings: Iterable[Booking]) -> List[BlockedSlot]:
        """
        Derive every blocked slot produced by a set of bookings.

        Overlapping slots for the same part are kept separate so that every
        "blocked by" label survives.

        Args:
            bookings: Bookings for this resource (inactive ones are ignored)

        Returns:
            Blocked slots sorted by start, end, part and booking
        """
        slots: List[BlockedSlot] = []

        for booking in bookings:
            if not booking.is_active or not self._belongs_to_resource(booking):
                continue

            for part_id, label in self.blocked_targets(booking):
                slots.append(
                    BlockedSlot(
                        start=booking.start,
                        end=booking.end,
                        part_id=part_id,
                        blocked_by=label,
                        booking_id=booking.id,
                    )
                )

        slots.sort(key=_slot_sort_key)
        logger.debug(f"Derived {len(slots)} blocked slots for resource {self.resource.id}")
        return slots

    def blocked_slots_by_part(
        self, bookings: Iterable[Booking]
    ) -> Dict[Optional[str], List[BlockedSlot]]:
        """
        Group derived blocked slots by the part they block.

        Args:
            bookings: Bookings for this resource

        Returns:
            Dictionary keyed by part ID (None for the whole resource); every
            part of the resource has an entry, possibly empty
        """
        grouped: Dict[Optional[str], List[BlockedSlot]] = {WHOLE_RESOURCE: []}
        for part in self.hierarchy.parts:
            grouped[part.id] = []

        for slot in self.derive_blocked_slots(bookings):
            grouped.setdefault(slot.part_id, []).append(slot)

        return grouped

    def blocked_slots_for_part(
        self, part_id: Optional[str], bookings: Iterable[Booking]
    ) -> List[BlockedSlot]:
        """Blocked slots affecting one part (None for the whole resource)."""
        return [
            slot for slot in self.derive_blocked_slots(bookings) if slot.part_id == part_id
        ]

    def blocked_slots_in_range(
        self, bookings: Iterable[Booking], window: TimeRange
    ) -> List[BlockedSlot]:
        """Blocked slots overlapping a time window, e.g. one day."""
        return [
            slot
            for slot in self.derive_blocked_slots(bookings)
            if slot.time_range.overlaps(window)
        ]

    def find_conflicts(
        self, proposed: Booking, existing_bookings: Iterable[Booking]
    ) -> List[Booking]:
        """
        Find existing bookings that a proposed booking would clash with.

        An active existing booking conflicts when the intervals overlap and
        either both target the same part (or both the whole resource), or one
        booking's target is among the targets the other booking blocks.

        Args:
            proposed: The booking being requested
            existing_bookings: Bookings already stored for the resource

        Returns:
            Conflicting bookings sorted by start time
        """
        proposed_range = TimeRange.from_booking(proposed)
        proposed_targets = {part_id for part_id, _ in self.blocked_targets(proposed)}
        conflicts: List[Booking] = []

        for booking in existing_bookings:
            # Skip if it's the same booking (for updates)
            if booking.id == proposed.id:
                continue
            if not booking.is_active or not self._belongs_to_resource(booking):
                continue
            if not proposed_range.overlaps(TimeRange.from_booking(booking)):
                continue

            if booking.part_id == proposed.part_id:
                conflicts.append(booking)
                continue

            # Blocking works both ways: what the stored booking blocks, and
            # what the proposed booking would block once stored
            blocked_by_existing = {part_id for part_id, _ in self.blocked_targets(booking)}
            if proposed.part_id in blocked_by_existing or booking.part_id in proposed_targets:
                conflicts.append(booking)

        conflicts.sort(key=lambda b: (b.start, b.end, str(b.id)))
        if conflicts:
            logger.info(
                f"Proposed booking {proposed.id} on resource {self.resource.id} "
                f"conflicts with {len(conflicts)} existing booking(s)"
            )
        return conflicts

    def has_conflict(self, proposed: Booking, existing_bookings: Iterable[Booking]) -> bool:
        return bool(self.find_conflicts(proposed, existing_bookings))


def derive_blocked_slots(resource: Resource, bookings: Iterable[Booking]) -> List[BlockedSlot]:
    """Shortcut for ``ConflictDetector(resource).derive_blocked_slots(bookings)``."""
    return ConflictDetector(resource).derive_blocked_slots(bookings)
