# apps/bookingapp/apps.py
import logging

from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)

POSITIVE_SETTINGS = ("HOUR_HEIGHT_PX", "MAX_RECURRING_OCCURRENCES")
NON_NEGATIVE_SETTINGS = ("MIN_LENGTH_PERCENT", "GAP_PIXELS", "MIN_HEIGHT_PX")


class BookingAppConfig(AppConfig):
    name = "apps.bookingapp"
    verbose_name = _("Facility Booking")

    def ready(self):
        engine_settings = getattr(settings, "FACILITY_BOOKING", {})

        for key in POSITIVE_SETTINGS:
            if key in engine_settings and engine_settings[key] <= 0:
                raise ImproperlyConfigured(f"FACILITY_BOOKING['{key}'] must be positive")

        for key in NON_NEGATIVE_SETTINGS:
            if key in engine_settings and engine_settings[key] < 0:
                raise ImproperlyConfigured(f"FACILITY_BOOKING['{key}'] must not be negative")

        logger.debug(f"Facility booking engine settings: {engine_settings}")
