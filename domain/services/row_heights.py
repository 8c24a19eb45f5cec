from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from domain.models import DAYS_PER_WEEK, CalendarConfig

EventStrips = Sequence[Sequence[Any]]


@dataclass(frozen=True)
class RowSizing:
    height: int
    day_names_height: int
    day_nums_height: int
    event_height: int
    event_margin: int

    @classmethod
    def from_config(cls, config: CalendarConfig) -> RowSizing:
        return cls(
            height=config.height,
            day_names_height=config.day_names_height,
            day_nums_height=config.day_nums_height,
            event_height=config.event_height,
            event_margin=config.event_margin,
        )


def slot_at(strip: Sequence[Any], day_index: int) -> Any:
    # Slots past the end of a short strip count as empty days.
    if 0 <= day_index < len(strip):
        return strip[day_index]
    return None


def day_depth(strips: EventStrips, day_index: int) -> int:
    """Number of strips stacked on a day: highest occupied strip index + 1."""
    depth = 0
    for strip_index, strip in enumerate(strips):
        if slot_at(strip, day_index) is not None:
            depth = strip_index + 1
    return depth


def row_depth(strips: EventStrips, row_index: int) -> int:
    offset = row_index * DAYS_PER_WEEK
    return max(day_depth(strips, offset + day) for day in range(DAYS_PER_WEEK))


def minimum_row_height(sizing: RowSizing, row_count: int) -> int:
    if row_count <= 0:
        msg = f"row_count must be positive, got {row_count}"
        raise ValueError(msg)
    return max(0, (sizing.height - sizing.day_names_height) // row_count)


def height_for_depth(sizing: RowSizing, depth: int, min_height: int) -> int:
    content_height = (
        depth * (sizing.event_height + sizing.event_margin)
        + sizing.day_nums_height
        + sizing.event_margin
    )
    return max(min_height, content_height)


def compute_row_heights(strips: EventStrips, row_count: int, sizing: RowSizing) -> list[int]:
    min_height = minimum_row_height(sizing, row_count)
    return [
        height_for_depth(sizing, row_depth(strips, row_index), min_height)
        for row_index in range(row_count)
    ]
