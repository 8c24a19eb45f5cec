from __future__ import annotations

from domain.models import CalendarConfig, CalendarLayout, WeekRow
from domain.services.row_heights import RowSizing, height_for_depth, minimum_row_height, row_depth
from domain.services.week_grid import build_week_spans


def plan_calendar_layout(config: CalendarConfig) -> CalendarLayout:
    spans = build_week_spans(config.first, config.last, config.first_day_of_week)
    sizing = RowSizing.from_config(config)
    min_height = minimum_row_height(sizing, len(spans))

    rows: list[WeekRow] = []
    top = 0
    for span in spans:
        depth = row_depth(config.event_strips, span.index)
        height = height_for_depth(sizing, depth, min_height)
        rows.append(WeekRow(span=span, depth=depth, height=height, top=top))
        top += height

    return CalendarLayout(
        rows=rows,
        day_names_height=config.day_names_height,
        total_height=config.day_names_height + top,
    )
