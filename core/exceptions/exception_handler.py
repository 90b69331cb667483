"""
Global exception handler for the Facility Booking platform.

This module provides a custom exception handler for DRF that turns the
booking engine's domain exceptions into consistent error responses.
"""

import logging
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from . import (
    BookingConflictError,
    BookingDurationError,
    FacilityBookingBaseException,
    InvalidBookingIntervalError,
    UnsupportedRecurrenceError,
    WholeBookingNotAllowedError,
)

logger = logging.getLogger(__name__)

# Domain exceptions and the HTTP status they map to
DOMAIN_STATUS_CODES = (
    (BookingConflictError, status.HTTP_409_CONFLICT),
    (InvalidBookingIntervalError, status.HTTP_400_BAD_REQUEST),
    (UnsupportedRecurrenceError, status.HTTP_400_BAD_REQUEST),
    (BookingDurationError, status.HTTP_400_BAD_REQUEST),
    (WholeBookingNotAllowedError, status.HTTP_400_BAD_REQUEST),
)


def get_error_code(exception: Exception) -> str:
    """
    Get standardized error code from exception.

    Args:
        exception: The exception to get code for

    Returns:
        str: Standardized error code
    """
    if isinstance(exception, ValidationError):
        return "validation_error"
    elif isinstance(exception, BookingConflictError):
        return "booking_conflict"
    elif hasattr(exception, "default_code"):
        return exception.default_code
    else:
        # Convert exception class name to snake case
        name = exception.__class__.__name__.replace("Error", "").replace("Exception", "")
        return "".join(
            f"_{char.lower()}" if char.isupper() else char for char in name
        ).lstrip("_")


def get_error_details(exception: Exception) -> Optional[Any]:
    """
    Get detailed error information from exception.

    Args:
        exception: The exception

    Returns:
        Optional details: field errors or the dates that conflict
    """
    if isinstance(exception, ValidationError) and not isinstance(exception.detail, str):
        if isinstance(exception.detail, list):
            return {"validation_errors": exception.detail}
        return exception.detail

    if isinstance(exception, BookingConflictError):
        return [
            {
                "start_time": result["booking"].start.isoformat(),
                "end_time": result["booking"].end.isoformat(),
                "conflicting_booking_id": result["conflict"].id,
            }
            for result in exception.conflicts
        ]

    return None


def domain_status_code(exception: Exception) -> Optional[int]:
    for exception_class, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exception, exception_class):
            return status_code
    return None


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """
    Custom exception handler for DRF views.

    Handles both DRF and booking domain exceptions, providing consistent
    response format. Anything else is left to Django (returns None).

    Args:
        exc: The exception
        context: The exception context

    Returns:
        Response: Consistent error response
    """
    # Handle Django ValidationError by converting to DRF ValidationError
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, "message_dict"):
            exc = ValidationError(detail=exc.message_dict)
        else:
            exc = ValidationError(detail=exc.messages)

    error_code = get_error_code(exc)
    error_details = get_error_details(exc)

    if isinstance(exc, FacilityBookingBaseException):
        status_code = domain_status_code(exc) or status.HTTP_400_BAD_REQUEST
        logger.warning(f"Booking rejected: {error_code} - {exc}")
        return Response(
            {
                "error": error_code,
                "message": str(exc),
                **({"details": error_details} if error_details is not None else {}),
            },
            status=status_code,
        )

    # Try the default DRF exception handler
    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        message = _("Invalid booking data.")
    else:
        message = getattr(exc, "detail", str(exc))

    logger.warning(f"Exception: {error_code} - {message}")

    response.data = {
        "error": error_code,
        "message": message,
        **({"details": error_details} if error_details is not None else {}),
    }
    return response
