"""
Availability calculation algorithms.

This package contains the facility availability engine: the resource/part
hierarchy, derivation of blocked slots from bookings, recurring booking
expansion and the day timeline layout used for calendar rendering.

Key components:
- PartHierarchy: Parent/children view over the parts of a resource
- ConflictDetector: Derives blocked slots and detects booking conflicts
- OccurrenceSequence: Lazily expands weekly, biweekly and monthly recurrences
- TimelineLayoutEngine: Places overlapping items side by side within a day
"""

from .conflict_detector import BlockedSlot, ConflictDetector, TimeRange
from .part_hierarchy import (
    BlockingPolicy,
    Booking,
    BookingStatus,
    Part,
    PartHierarchy,
    Resource,
)
from .recurrence_expander import OccurrenceSequence, RecurrenceCadence
from .timeline_layout import LayoutConfig, PositionedItem, TimelineLayoutEngine

__all__ = [
    "BlockedSlot",
    "BlockingPolicy",
    "Booking",
    "BookingStatus",
    "ConflictDetector",
    "LayoutConfig",
    "OccurrenceSequence",
    "Part",
    "PartHierarchy",
    "PositionedItem",
    "RecurrenceCadence",
    "Resource",
    "TimeRange",
    "TimelineLayoutEngine",
]
