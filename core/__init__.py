"""
Core shared components for the facility booking platform.

This package provides the exception hierarchy used across the availability
engine and the booking app.
"""

__version__ = "1.0.0"
