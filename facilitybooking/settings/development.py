"""
Development settings for Facility Booking project.

These settings override the base settings for local development environments.
"""

from .base import *

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", "django-insecure-development-key-not-for-production")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG", "True") == "True"

# Allow all hosts in development (for convenience)
ALLOWED_HOSTS = ["*"]

# Show the engine's debug output (dangling part references, skipped bookings)
LOGGING["handlers"]["console"]["level"] = "DEBUG" if DEBUG else "INFO"
LOGGING["loggers"]["algorithms"]["level"] = "DEBUG" if DEBUG else "INFO"
