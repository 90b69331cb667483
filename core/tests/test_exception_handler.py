from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError

from algorithms.availability.tests.fixtures import at, create_booking, create_flat_gym
from apps.bookingapp.services.conflict_service import ConflictService
from core.exceptions import (
    BookingConflictError,
    BookingDurationError,
    WholeBookingNotAllowedError,
)
from core.exceptions.exception_handler import exception_handler, get_error_code


class ExceptionHandlerTest(SimpleTestCase):
    """Test cases for the DRF exception handler"""

    def test_booking_conflict_is_409(self):
        resource = create_flat_gym()
        existing = [create_booking("b1", at(10), at(11), part_id="court-1")]
        proposed = [create_booking("p1", at(10), at(11), part_id="court-1")]

        with self.assertRaises(BookingConflictError) as raised:
            ConflictService.ensure_no_conflicts(resource, proposed, existing)

        response = exception_handler(raised.exception, {})

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "booking_conflict")
        self.assertIn('"Court 1"', response.data["message"])
        self.assertEqual(response.data["details"][0]["conflicting_booking_id"], "b1")

    def test_domain_errors_are_400(self):
        for exc, code in (
            (BookingDurationError("Minimum booking length is 30 minutes"), "booking_duration"),
            (WholeBookingNotAllowedError("Gym can only be booked by part"), "whole_booking_not_allowed"),
        ):
            response = exception_handler(exc, {})

            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data["error"], code)
            self.assertEqual(response.data["message"], str(exc))

    def test_validation_error_keeps_field_details(self):
        response = exception_handler(
            ValidationError({"end_time": ["End time must be after start time"]}), {}
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")
        self.assertIn("end_time", response.data["details"])

    def test_drf_exceptions(self):
        response = exception_handler(NotFound(), {})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "not_found")

    def test_unhandled_exceptions_are_left_to_django(self):
        self.assertIsNone(exception_handler(RuntimeError("boom"), {}))

    def test_error_code_from_class_name(self):
        self.assertEqual(get_error_code(KeyError("x")), "key")
