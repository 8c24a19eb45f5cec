from __future__ import annotations

from datetime import date, datetime

from domain.ports.calendar import CalendarEvent


def compact_clock_label(moment: datetime) -> str:
    """Shortest 12-hour label for a start time: ``9``, ``9:30``, ``2p``, ``2:15p``."""
    hour = moment.hour % 12 or 12
    label = str(hour) if moment.minute == 0 else f"{hour}:{moment.minute:02d}"
    if moment.hour >= 12:
        label += "p"
    return label


def event_time_label(event: CalendarEvent, day: date) -> str:
    if event.all_day or event.start_at.date() != day:
        return ""
    return compact_clock_label(event.start_at)
