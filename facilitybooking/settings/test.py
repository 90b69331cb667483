"""
Test settings for Facility Booking project.

These settings override the base settings for test environments.
"""

from .base import *

# Use in-memory SQLite database for testing
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Disable caching in tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.dummy.DummyCache",
    }
}

# Make tests faster by avoiding real translations
USE_I18N = False

# Tests build their own aware datetimes in UTC
TIME_ZONE = "UTC"

# Engine defaults, independent of the local .env
FACILITY_BOOKING = {
    "MIN_LENGTH_PERCENT": 0.3,
    "GAP_PIXELS": 2,
    "HOUR_HEIGHT_PX": 60,
    "MIN_HEIGHT_PX": 40,
    "MAX_RECURRING_OCCURRENCES": 52,
}

# Disable logging during tests to speed them up
LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "loggers": {
        "": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
    },
}
