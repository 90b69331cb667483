"""
Resource and part hierarchy model.

A bookable resource (a gym, a hall) may be subdivided into parts ("Court 1"),
and a part may itself contain child parts ("Half A", "Half B"). This module
holds the immutable records the availability engine works on and a read-only
hierarchy view that answers parent/children questions for one resource.

Malformed references never raise: a part whose ``parent_id`` points at an
unknown part (or at itself) is simply treated as a top-level part.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from core.exceptions import InvalidBookingIntervalError

logger = logging.getLogger(__name__)


class BookingStatus(str, Enum):
    """Enum for booking status values"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


ACTIVE_STATUSES = frozenset({BookingStatus.PENDING.value, BookingStatus.APPROVED.value})


@dataclass(frozen=True)
class BlockingPolicy:
    """
    Resource-level switches governing whole-resource <-> part blocking.

    Part-to-part hierarchy blocking (parent/child) is not affected by these
    flags.
    """

    allow_whole_booking: bool = True
    block_parts_when_whole_booked: bool = True
    block_whole_when_part_booked: bool = True


@dataclass(frozen=True)
class Part:
    """A bookable subdivision of a resource."""

    id: str
    name: str
    parent_id: Optional[str] = None


@dataclass(frozen=True)
class Resource:
    """
    A bookable facility together with its ordered parts.

    Booking length limits are in minutes; None means unlimited.
    """

    id: str
    name: str
    color: Optional[str] = None
    parts: Tuple[Part, ...] = ()
    policy: BlockingPolicy = field(default_factory=BlockingPolicy)
    min_booking_minutes: Optional[int] = None
    max_booking_minutes: Optional[int] = None
    requires_approval: bool = True

    @property
    def hierarchy(self) -> "PartHierarchy":
        return PartHierarchy(self.parts)


@dataclass(frozen=True)
class Booking:
    """
    A reservation of a whole resource (``part_id`` is None) or of one part.

    ``end`` is exclusive.
    """

    id: str
    resource_id: str
    start: datetime
    end: datetime
    status: str = BookingStatus.PENDING.value
    part_id: Optional[str] = None
    title: str = ""
    is_recurring: bool = False
    parent_booking_id: Optional[str] = None

    def __post_init__(self):
        if not self.start < self.end:
            raise InvalidBookingIntervalError(
                f"Booking {self.id} must start before it ends "
                f"({self.start.isoformat()} >= {self.end.isoformat()})"
            )

    @property
    def is_active(self) -> bool:
        """Only pending and approved bookings take part in blocking."""
        return getattr(self.status, "value", self.status) in ACTIVE_STATUSES

    @property
    def is_whole_resource(self) -> bool:
        return self.part_id is None


class PartHierarchy:
    """
    Read-only parent/children view over the parts of a single resource.
    """

    def __init__(self, parts):
        """
        Initialize the hierarchy view.

        Args:
            parts: Iterable of Part records belonging to one resource
        """
        self._parts: List[Part] = list(parts)
        self._by_id: Dict[str, Part] = {part.id: part for part in self._parts}
        self._children: Dict[str, List[Part]] = {}

        for part in self._parts:
            parent_id = self._valid_parent_id(part)
            if parent_id is not None:
                self._children.setdefault(parent_id, []).append(part)

    def _valid_parent_id(self, part: Part) -> Optional[str]:
        if part.parent_id is None:
            return None
        if part.parent_id == part.id or part.parent_id not in self._by_id:
            logger.debug(
                f"Part {part.id} has a dangling parent reference {part.parent_id}; "
                "treating it as top-level"
            )
            return None
        return part.parent_id

    @property
    def parts(self) -> List[Part]:
        """All parts in their supplied order."""
        return list(self._parts)

    def __contains__(self, part_id) -> bool:
        return part_id in self._by_id

    def __len__(self) -> int:
        return len(self._parts)

    def get(self, part_id: Optional[str]) -> Optional[Part]:
        if part_id is None:
            return None
        return self._by_id.get(part_id)

    def children(self, part_id: Optional[str]) -> List[Part]:
        """
        Return the direct children of a part.

        Args:
            part_id: ID of the parent part

        Returns:
            Parts whose parent_id equals part_id, empty when unknown
        """
        if part_id is None:
            return []
        return list(self._children.get(part_id, []))

    def parent(self, part_id: Optional[str]) -> Optional[Part]:
        """
        Return the part referenced by a part's parent_id.

        Args:
            part_id: ID of the child part

        Returns:
            The parent Part, or None for top-level, unknown or malformed parts
        """
        part = self.get(part_id)
        if part is None:
            return None
        parent_id = self._valid_parent_id(part)
        return self._by_id.get(parent_id) if parent_id is not None else None

    def descendants(self, part_id: str) -> List[Part]:
        """Children, grandchildren and so on, depth first."""
        result: List[Part] = []
        seen = {part_id}
        stack = list(reversed(self.children(part_id)))
        while stack:
            part = stack.pop()
            if part.id in seen:
                continue
            seen.add(part.id)
            result.append(part)
            stack.extend(reversed(self.children(part.id)))
        return result

    def top_level(self) -> List[Part]:
        return [part for part in self._parts if self.parent(part.id) is None]
