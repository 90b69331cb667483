"""
Facility Booking Django project.

Holds the settings package; the availability engine lives in ``algorithms``
and the booking service layer in ``apps.bookingapp``.
"""
