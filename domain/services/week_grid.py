from __future__ import annotations

from datetime import date, timedelta

from domain.models import DAYS_PER_WEEK, WeekSpan

WEEKEND_DAYS = frozenset({0, 6})


def sunday_weekday(day: date) -> int:
    """Weekday number with 0 as Sunday and 6 as Saturday."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def days_between(first: int, second: int) -> int:
    if first > second:
        return second + (DAYS_PER_WEEK - first)
    return second - first


def beginning_of_week(day: date, start: int = 0) -> date:
    return day - timedelta(days=days_between(start, sunday_weekday(day)))


def end_of_week(day: date, start: int = 0) -> date:
    return beginning_of_week(day, start) + timedelta(days=DAYS_PER_WEEK - 1)


def is_weekend(day: date) -> bool:
    return sunday_weekday(day) in WEEKEND_DAYS


def build_week_spans(first: date, last: date, first_day_of_week: int = 0) -> list[WeekSpan]:
    if not 0 <= first_day_of_week < DAYS_PER_WEEK:
        msg = f"first_day_of_week must be within 0..6, got {first_day_of_week}"
        raise ValueError(msg)
    if last < first:
        msg = f"last day {last} precedes first day {first}"
        raise ValueError(msg)

    week_start = beginning_of_week(first, first_day_of_week)
    last_day_of_grid = end_of_week(last, first_day_of_week)
    spans: list[WeekSpan] = []
    while True:
        week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
        if week_end > last_day_of_grid:
            break
        spans.append(WeekSpan(index=len(spans), start=week_start, end=week_end))
        week_start += timedelta(days=DAYS_PER_WEEK)
    return spans
