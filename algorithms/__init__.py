"""
Facility Booking Algorithms Package.

This package contains the pure, framework-independent logic behind the
facility booking calendar. It has no database access and can be called from
services, management commands or tests alike.

The algorithms are organized into the following subpackages:
- availability: Part hierarchy, blocked slot derivation, recurrence expansion
  and timeline layout
"""

__version__ = "1.0.0"
