# apps/bookingapp/utils/date_utils.py
import calendar
from datetime import date as date_cls
from datetime import timedelta

from django.utils import timezone


def get_week_dates(date=None):
    """
    Get list of dates for the week containing the given date

    Args:
        date: Date to get week for (defaults to today)

    Returns:
        List of 7 dates for the week (Monday to Sunday)
    """
    if date is None:
        date = timezone.localdate()

    # 0 = Monday, 6 = Sunday
    monday = date - timedelta(days=date.weekday())

    return [monday + timedelta(days=i) for i in range(7)]


def get_month_dates(year, month):
    """
    Get the calendar grid for a month as whole Monday-to-Sunday weeks

    Args:
        year: Year
        month: Month (1-12)

    Returns:
        List of dates starting on the Monday on or before the 1st and ending
        on the Sunday on or after the last day of the month
    """
    first_day = date_cls(year, month, 1)
    _, num_days = calendar.monthrange(year, month)
    last_day = first_day + timedelta(days=num_days - 1)

    grid_start = first_day - timedelta(days=first_day.weekday())
    grid_end = last_day + timedelta(days=6 - last_day.weekday())

    return get_date_range(grid_start, grid_end)


def get_date_range(start_date, end_date):
    """
    Get list of all dates in the specified range (inclusive)

    Args:
        start_date: Start date
        end_date: End date

    Returns:
        List of all dates in the range, empty if end_date precedes start_date
    """
    delta = end_date - start_date
    return [start_date + timedelta(days=i) for i in range(delta.days + 1)]


def get_week_number(date):
    """ISO week number, as shown next to each week row in the month grid"""
    return date.isocalendar()[1]


def format_date_display(date, include_day=True):
    """
    Format date for display (localization-ready)

    Args:
        date: Date to format
        include_day: Whether to include day of week

    Returns:
        Formatted date string
    """
    if include_day:
        return date.strftime("%a, %b %d, %Y")  # Mon, Jan 01, 2025
    return date.strftime("%b %d, %Y")  # Jan 01, 2025


def format_time_display(time, use_12h=False):
    """
    Format time for display (localization-ready)

    Args:
        time: Time to format
        use_12h: Whether to use 12-hour format

    Returns:
        Formatted time string
    """
    if use_12h:
        return time.strftime("%I:%M %p")  # 01:30 PM
    return time.strftime("%H:%M")  # 13:30
