"""
Timeline layout for calendar rendering.

Given the items of one day (bookings or blocked slots) this module computes
where each of them goes: overlapping items are placed side by side in
columns, every item gets a horizontal start/length percentage for timeline
rows and a vertical top/height in pixels for day columns.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .conflict_detector import TimeRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Rendering tunables for the layout engine."""

    min_length_percent: float = 0.3
    gap_pixels: int = 2
    hour_height_px: int = 60
    min_height_px: int = 40

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> "LayoutConfig":
        """Build a config from a settings-style dict with upper-case keys."""
        values = values or {}
        return cls(
            min_length_percent=values.get("MIN_LENGTH_PERCENT", cls.min_length_percent),
            gap_pixels=values.get("GAP_PIXELS", cls.gap_pixels),
            hour_height_px=values.get("HOUR_HEIGHT_PX", cls.hour_height_px),
            min_height_px=values.get("MIN_HEIGHT_PX", cls.min_height_px),
        )


@dataclass(frozen=True)
class PositionedItem:
    """Placement of one item inside a day."""

    item_id: str
    start: datetime
    end: datetime
    column: int
    total_columns: int
    left_percent: float
    width_percent: float
    gap_pixels: int
    top_pixels: float
    height_pixels: float
    start_percent: float
    length_percent: float
    adjacent_above: bool = False
    adjacent_below: bool = False
    item: Any = field(default=None, compare=False, repr=False)

    @property
    def is_single(self) -> bool:
        return self.total_columns == 1

    def as_css(self) -> Dict[str, str]:
        """Absolute-positioning style values for a vertical day column."""
        if self.gap_pixels:
            half_gap = self.gap_pixels / 2
            left = f"calc({self.left_percent:g}% + {half_gap:g}px)"
            width = f"calc({self.width_percent:g}% - {self.gap_pixels}px)"
        else:
            left = f"{self.left_percent:g}%"
            width = f"{self.width_percent:g}%"
        return {
            "position": "absolute",
            "top": f"{self.top_pixels:g}px",
            "height": f"{self.height_pixels:g}px",
            "left": left,
            "width": width,
        }

    def as_timeline_css(self) -> Dict[str, str]:
        """Style values for a horizontal timeline row."""
        return {
            "left": f"{self.start_percent:g}%",
            "width": f"{self.length_percent:g}%",
        }


def day_bounds(day: date, tzinfo=None) -> Tuple[datetime, datetime]:
    """Return (midnight, next midnight) of a calendar day."""
    window = TimeRange.for_day(day, tzinfo)
    return window.start, window.end


def items_timezone(items: List):
    """Timezone of the first aware item, or None when all items are naive."""
    for item in items:
        if item.start.tzinfo is not None:
            return item.start.tzinfo
    return None


def item_identifier(item) -> str:
    """Bookings carry ``id``, blocked slots carry ``booking_id``."""
    item_id = getattr(item, "id", None)
    if item_id is None:
        item_id = getattr(item, "booking_id", None)
    return str(item_id)


@dataclass
class _Clipped:
    item: Any
    item_id: str
    start: datetime
    end: datetime
    visual_end: datetime
    column: int = 0
    total_columns: int = 1


class TimelineLayoutEngine:
    """
    Assigns columns and positions to the items of a single day.

    Columns are assigned greedily in (start, end, id) order: an item reuses
    the first column whose last item has already ended, otherwise it opens a
    new column. Every item then gets a column count equal to the highest
    column among the items it overlaps, plus one.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def layout_day(
        self, items: Iterable, day: date, tzinfo=None, vertical: bool = False
    ) -> List[PositionedItem]:
        """
        Position the items that touch a day.

        Items are clamped to the day; items entirely outside it are dropped.

        Args:
            items: Objects with ``start``/``end`` and ``id`` or ``booking_id``
            day: The day to lay out
            tzinfo: Timezone of the day bounds; defaults to the zone of the
                first aware item so aware items never meet naive bounds
            vertical: Group columns by the rendered pixel height of a day
                column instead of the minimum timeline length

        Returns:
            Positioned items in (start, end, id) order
        """
        items = list(items)
        if tzinfo is None:
            tzinfo = items_timezone(items)

        day_start, day_end = day_bounds(day, tzinfo)
        day_seconds = (day_end - day_start).total_seconds()
        min_visual = self._min_visual_length(day_seconds, vertical)

        # 1. Clamp to the day
        clipped: List[_Clipped] = []
        for item in items:
            touches_day = item.start < day_end and (
                item.end > day_start or item.start == item.end == day_start
            )
            if not touches_day:
                continue
            start = max(item.start, day_start)
            end = min(item.end, day_end)
            clipped.append(
                _Clipped(
                    item=item,
                    item_id=item_identifier(item),
                    start=start,
                    end=end,
                    visual_end=max(end, start + min_visual),
                )
            )

        clipped.sort(key=lambda c: (c.start, c.end, c.item_id))

        # 2. Greedy column assignment
        column_ends: List[datetime] = []
        for entry in clipped:
            column = 0
            while column < len(column_ends) and column_ends[column] > entry.start:
                column += 1
            if column == len(column_ends):
                column_ends.append(entry.visual_end)
            else:
                column_ends[column] = entry.visual_end
            entry.column = column

        # 3. Column count per overlap set
        for entry in clipped:
            overlapping = [other for other in clipped if self._overlaps(entry, other)]
            total = max(other.column for other in overlapping) + 1
            for other in overlapping:
                other.total_columns = max(other.total_columns, total)

        positioned = [
            self._position(entry, clipped, day_start, day_seconds) for entry in clipped
        ]
        logger.debug(f"Laid out {len(positioned)} items for {day.isoformat()}")
        return positioned

    def _min_visual_length(self, day_seconds: float, vertical: bool) -> timedelta:
        min_visual = timedelta(seconds=day_seconds * self.config.min_length_percent / 100)
        if vertical:
            # Items shorter than the minimum height still draw that tall
            min_height = timedelta(hours=self.config.min_height_px / self.config.hour_height_px)
            min_visual = max(min_visual, min_height)
        return min_visual

    @staticmethod
    def _overlaps(first: _Clipped, second: _Clipped) -> bool:
        return first.start < second.visual_end and second.start < first.visual_end

    def _position(
        self,
        entry: _Clipped,
        clipped: List[_Clipped],
        day_start: datetime,
        day_seconds: float,
    ) -> PositionedItem:
        config = self.config
        offset_seconds = (entry.start - day_start).total_seconds()
        duration_seconds = (entry.end - entry.start).total_seconds()

        width = 100 / entry.total_columns
        height = duration_seconds / 3600 * config.hour_height_px

        # Touching items in the same column render as one stack
        adjacent_above = any(
            other is not entry and other.column == entry.column and other.end == entry.start
            for other in clipped
        )
        adjacent_below = any(
            other is not entry and other.column == entry.column and other.start == entry.end
            for other in clipped
        )

        return PositionedItem(
            item_id=entry.item_id,
            start=entry.start,
            end=entry.end,
            column=entry.column,
            total_columns=entry.total_columns,
            left_percent=entry.column * width,
            width_percent=width,
            gap_pixels=config.gap_pixels if entry.total_columns > 1 else 0,
            top_pixels=offset_seconds / 3600 * config.hour_height_px,
            height_pixels=max(height, config.min_height_px),
            start_percent=offset_seconds / day_seconds * 100,
            length_percent=max(
                duration_seconds / day_seconds * 100, config.min_length_percent
            ),
            adjacent_above=adjacent_above,
            adjacent_below=adjacent_below,
            item=entry.item,
        )


def layout_day(
    items: Iterable,
    day: date,
    tzinfo=None,
    config: Optional[LayoutConfig] = None,
    vertical: bool = False,
):
    """Shortcut for ``TimelineLayoutEngine(config).layout_day(items, day)``."""
    return TimelineLayoutEngine(config).layout_day(
        items, day, tzinfo=tzinfo, vertical=vertical
    )
