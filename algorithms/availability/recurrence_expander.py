"""
Recurring booking expansion.

Turns a start moment, a cadence and an inclusive end date into the ordered
occurrences of a recurring booking. Each occurrence keeps the time of day of
the first one; monthly recurrences are always computed from the original
anchor day, so a series starting on the 31st clamps to the last day of
shorter months and comes back to the 31st afterwards.
"""

import logging
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from dateutil.relativedelta import relativedelta

from core.exceptions import UnsupportedRecurrenceError

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


class RecurrenceCadence(str, Enum):
    """Enum for supported recurrence cadences"""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value) -> "RecurrenceCadence":
        """
        Convert a raw cadence value into a RecurrenceCadence.

        Raises:
            UnsupportedRecurrenceError: If the cadence is not supported
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedRecurrenceError(
                f"Unsupported recurrence cadence '{value}'. "
                f"Expected one of: {', '.join(c.value for c in cls)}"
            )


# Fixed day steps for the non-monthly cadences
CADENCE_STEPS = {
    RecurrenceCadence.WEEKLY: timedelta(days=7),
    RecurrenceCadence.BIWEEKLY: timedelta(days=14),
}


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


class OccurrenceSequence:
    """
    Lazy, finite and restartable sequence of recurrence occurrences.

    Iterating twice yields the same occurrences; nothing is computed until
    iteration starts and nothing needs to be closed afterwards.
    """

    def __init__(
        self,
        start: DateLike,
        cadence,
        until: date,
        limit: Optional[int] = None,
    ):
        """
        Initialize the sequence.

        Args:
            start: First occurrence (date or datetime)
            cadence: weekly, biweekly or monthly
            until: Inclusive last date an occurrence may fall on
            limit: Optional maximum number of occurrences

        Raises:
            UnsupportedRecurrenceError: If the cadence is not supported
        """
        self.start = start
        self.cadence = RecurrenceCadence.parse(cadence)
        self.until = _as_date(until)
        self.limit = limit

    def __iter__(self) -> Iterator[DateLike]:
        if self.limit is not None and self.limit <= 0:
            return

        index = 0
        current = self.start
        while _as_date(current) <= self.until:
            yield current
            index += 1
            if self.limit is not None and index >= self.limit:
                logger.debug(
                    f"Recurrence from {self.start} stopped at limit of {self.limit}"
                )
                return
            current = self._nth(index)

    def _nth(self, index: int) -> DateLike:
        if self.cadence == RecurrenceCadence.MONTHLY:
            # Always from the anchor so clamped months don't drift the day;
            # relativedelta clamps to the last day of shorter months
            return self.start + relativedelta(months=index)
        return self.start + CADENCE_STEPS[self.cadence] * index

    def __repr__(self) -> str:
        return (
            f"OccurrenceSequence(start={self.start!r}, cadence={self.cadence.value!r}, "
            f"until={self.until!r}, limit={self.limit!r})"
        )


def expand_occurrences(
    start: DateLike, cadence, until: date, limit: Optional[int] = None
) -> List[DateLike]:
    """
    Expand a recurrence into a concrete list of occurrences.

    Args:
        start: First occurrence
        cadence: weekly, biweekly or monthly
        until: Inclusive end date
        limit: Optional maximum number of occurrences

    Returns:
        Occurrences in chronological order; empty if until precedes start
    """
    return list(OccurrenceSequence(start, cadence, until, limit=limit))


def occurrence_intervals(
    start: datetime,
    end: datetime,
    cadence,
    until: date,
    limit: Optional[int] = None,
) -> Iterator[Tuple[datetime, datetime]]:
    """
    Yield (start, end) pairs for each occurrence of a recurring booking.

    Every pair keeps the duration of the original booking.

    Args:
        start: Start of the first occurrence
        end: End of the first occurrence
        cadence: weekly, biweekly or monthly
        until: Inclusive end date
        limit: Optional maximum number of occurrences
    """
    duration = end - start
    for occurrence_start in OccurrenceSequence(start, cadence, until, limit=limit):
        yield occurrence_start, occurrence_start + duration
