# apps/bookingapp/tests/test_serializers.py
from datetime import date, timezone

from django.test import SimpleTestCase

from algorithms.availability.conflict_detector import BlockedSlot
from algorithms.availability.part_hierarchy import Booking, Resource
from algorithms.availability.tests.fixtures import DAY, at, create_booking
from algorithms.availability.timeline_layout import TimelineLayoutEngine
from apps.bookingapp.serializers import (
    BlockedSlotSerializer,
    BookingSerializer,
    PositionedItemSerializer,
    RecurrenceRequestSerializer,
    ResourceSerializer,
)


class ResourceSerializerTest(SimpleTestCase):
    """Test cases for the ResourceSerializer"""

    def test_create_resource_with_parts(self):
        serializer = ResourceSerializer(
            data={
                "id": "gym",
                "name": "Gym",
                "block_whole_when_part_booked": False,
                "parts": [
                    {"id": "main", "name": "Main Hall"},
                    {"id": "half-a", "name": "Half A", "parent_id": "main"},
                ],
            }
        )

        self.assertTrue(serializer.is_valid(), serializer.errors)
        resource = serializer.save()

        self.assertIsInstance(resource, Resource)
        self.assertTrue(resource.policy.allow_whole_booking)
        self.assertTrue(resource.policy.block_parts_when_whole_booked)
        self.assertFalse(resource.policy.block_whole_when_part_booked)
        self.assertEqual([part.id for part in resource.hierarchy.children("main")], ["half-a"])

    def test_representation(self):
        resource = Resource(id="gym", name="Gym")

        data = ResourceSerializer(resource).data

        self.assertEqual(data["name"], "Gym")
        self.assertTrue(data["allow_whole_booking"])
        self.assertEqual(data["parts"], [])

    def test_invalid_length_limits(self):
        serializer = ResourceSerializer(
            data={"id": "gym", "name": "Gym", "min_booking_minutes": 60, "max_booking_minutes": 30}
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn("max_booking_minutes", serializer.errors)


class BookingSerializerTest(SimpleTestCase):
    """Test cases for the BookingSerializer"""

    def test_create_booking(self):
        serializer = BookingSerializer(
            data={
                "resource_id": "gym",
                "part_id": "court-1",
                "start_time": "2025-03-10T10:00:00Z",
                "end_time": "2025-03-10T11:00:00Z",
                "status": "approved",
            }
        )

        self.assertTrue(serializer.is_valid(), serializer.errors)
        booking = serializer.save()

        self.assertIsInstance(booking, Booking)
        self.assertTrue(booking.id)
        self.assertEqual(booking.start, at(10))
        self.assertEqual(booking.status, "approved")
        self.assertTrue(booking.is_active)

    def test_defaults(self):
        serializer = BookingSerializer(
            data={
                "id": "b1",
                "resource_id": "gym",
                "start_time": "2025-03-10T10:00:00Z",
                "end_time": "2025-03-10T11:00:00Z",
            }
        )

        self.assertTrue(serializer.is_valid(), serializer.errors)
        booking = serializer.save()

        self.assertEqual(booking.id, "b1")
        self.assertIsNone(booking.part_id)
        self.assertEqual(booking.status, "pending")
        self.assertFalse(booking.is_recurring)

    def test_end_before_start(self):
        serializer = BookingSerializer(
            data={
                "resource_id": "gym",
                "start_time": "2025-03-10T11:00:00Z",
                "end_time": "2025-03-10T11:00:00Z",
            }
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn("end_time", serializer.errors)

    def test_invalid_status(self):
        serializer = BookingSerializer(
            data={
                "resource_id": "gym",
                "start_time": "2025-03-10T10:00:00Z",
                "end_time": "2025-03-10T11:00:00Z",
                "status": "maybe",
            }
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn("status", serializer.errors)


class RecurrenceRequestSerializerTest(SimpleTestCase):
    """Test cases for the RecurrenceRequestSerializer"""

    def test_recurring_request(self):
        serializer = RecurrenceRequestSerializer(
            data={
                "resource_id": "gym",
                "title": "Training",
                "start_time": "2025-01-31T18:00:00Z",
                "end_time": "2025-01-31T19:00:00Z",
                "is_recurring": True,
                "recurring_type": "monthly",
                "recurring_end_date": "2025-04-30",
            }
        )

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data["recurring_end_date"], date(2025, 4, 30))
        self.assertEqual(serializer.validated_data["recurring_type"], "monthly")

    def test_recurring_request_needs_type_and_end(self):
        serializer = RecurrenceRequestSerializer(
            data={
                "resource_id": "gym",
                "title": "Training",
                "start_time": "2025-01-31T18:00:00Z",
                "end_time": "2025-01-31T19:00:00Z",
                "is_recurring": True,
            }
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn("recurring_type", serializer.errors)
        self.assertIn("recurring_end_date", serializer.errors)

    def test_unknown_cadence(self):
        serializer = RecurrenceRequestSerializer(
            data={
                "resource_id": "gym",
                "title": "Training",
                "start_time": "2025-01-31T18:00:00Z",
                "end_time": "2025-01-31T19:00:00Z",
                "is_recurring": True,
                "recurring_type": "daily",
                "recurring_end_date": "2025-04-30",
            }
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn("recurring_type", serializer.errors)


class OutputSerializerTest(SimpleTestCase):
    """Test cases for the read-only engine output serializers"""

    def test_blocked_slot(self):
        slot = BlockedSlot(
            start=at(9), end=at(10), part_id=None, blocked_by="Court 1", booking_id="b1"
        )

        data = BlockedSlotSerializer(slot).data

        self.assertIsNone(data["part_id"])
        self.assertEqual(data["blocked_by"], "Court 1")
        self.assertEqual(data["booking_id"], "b1")
        self.assertIn("start_time", data)

    def test_positioned_item(self):
        positioned = TimelineLayoutEngine().layout_day(
            [create_booking("b1", at(9), at(10)), create_booking("b2", at(9), at(11))],
            DAY,
            tzinfo=timezone.utc,
        )

        data = PositionedItemSerializer(positioned, many=True).data

        self.assertEqual(data[0]["item_id"], "b1")
        self.assertEqual(data[0]["total_columns"], 2)
        self.assertEqual(data[1]["left_percent"], 50.0)
        self.assertEqual(data[1]["style"]["width"], "calc(50% - 2px)")
