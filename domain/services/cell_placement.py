from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta
from typing import Any

from domain.models import DAYS_PER_WEEK, BackgroundMode, PlacedCell, WeekSpan
from domain.ports.calendar import CalendarEvent
from domain.services.row_heights import slot_at


class LayoutInvariantError(RuntimeError):
    """Raised when a strip-row's cells do not cover the week exactly."""


def background_mode(event: CalendarEvent, use_all_day_distinction: bool) -> BackgroundMode:
    if not use_all_day_distinction or event.all_day:
        return "filled"
    if event.start_at.date() == event.end_at.date():
        return "no_background"
    return "filled"


def place_strip_row(
    strip: Sequence[Any],
    week: WeekSpan,
    strip_index: int,
    use_all_day_distinction: bool = False,
) -> list[PlacedCell]:
    cells: list[PlacedCell] = []
    for day_index, day in enumerate(week.days()):
        event = slot_at(strip, week.slot_offset + day_index)
        if event is None:
            cells.append(PlacedCell(day_index=day_index, strip_index=strip_index, span=1, day=day))
            continue

        first_visible, last_visible = event.clip_range(week.start, week.end)
        if first_visible != day:
            # Covered by the cell opened on the event's first visible day.
            continue
        cells.append(
            PlacedCell(
                day_index=day_index,
                strip_index=strip_index,
                span=(last_visible - first_visible).days + 1,
                day=day,
                event=event,
                clipped_left=event.start_at.date() < first_visible,
                clipped_right=event.end_at.date() > last_visible,
                background=background_mode(event, use_all_day_distinction),
            )
        )

    ensure_week_covered(cells, week, strip_index)
    return cells


def ensure_week_covered(cells: Sequence[PlacedCell], week: WeekSpan, strip_index: int) -> None:
    where = f"Strip {strip_index} in week {week.index} ({week.start}..{week.end})"
    covered = sum(cell.span for cell in cells)
    if covered != DAYS_PER_WEEK:
        msg = f"{where} covers {covered} day columns instead of {DAYS_PER_WEEK}"
        raise LayoutInvariantError(msg)

    column = 0
    for cell in cells:
        if cell.day_index != column or cell.day != week.start + timedelta(days=column):
            msg = f"{where} has a cell at day {cell.day_index} where column {column} was expected"
            raise LayoutInvariantError(msg)
        column += cell.span
