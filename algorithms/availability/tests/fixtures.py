"""Shared builders for availability engine tests."""

from datetime import date, datetime, timezone

from algorithms.availability.part_hierarchy import (
    BlockingPolicy,
    Booking,
    Part,
    Resource,
)

DAY = date(2025, 3, 10)


def at(hour, minute=0, day=DAY):
    """Aware UTC datetime on the test day"""
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)


def create_flat_gym(**policy):
    """Gym with two sibling courts"""
    return Resource(
        id="gym",
        name="Gym",
        parts=(Part(id="court-1", name="Court 1"), Part(id="court-2", name="Court 2")),
        policy=BlockingPolicy(**policy),
    )


def create_nested_gym(**policy):
    """Gym with a main hall split in two halves plus a separate court"""
    return Resource(
        id="gym",
        name="Gym",
        parts=(
            Part(id="main", name="Main Hall"),
            Part(id="half-a", name="Half A", parent_id="main"),
            Part(id="half-b", name="Half B", parent_id="main"),
            Part(id="court", name="Court"),
        ),
        policy=BlockingPolicy(**policy),
    )


def create_booking(booking_id, start, end, part_id=None, status="approved", resource_id="gym", **extra):
    return Booking(
        id=booking_id,
        resource_id=resource_id,
        part_id=part_id,
        start=start,
        end=end,
        status=status,
        **extra,
    )
