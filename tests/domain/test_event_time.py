from __future__ import annotations

from datetime import date, datetime

from domain.services.event_time import compact_clock_label, event_time_label
from tests.helpers.calendar_fixtures import make_event


def test_compact_clock_label_formats() -> None:
    assert compact_clock_label(datetime(2024, 3, 5, 9, 0)) == "9"
    assert compact_clock_label(datetime(2024, 3, 5, 9, 30)) == "9:30"
    assert compact_clock_label(datetime(2024, 3, 5, 12, 0)) == "12p"
    assert compact_clock_label(datetime(2024, 3, 5, 14, 5)) == "2:05p"
    assert compact_clock_label(datetime(2024, 3, 5, 0, 15)) == "12:15"


def test_time_label_only_on_start_day_of_timed_events() -> None:
    timed = make_event("t", datetime(2024, 3, 5, 14, 0), datetime(2024, 3, 6, 9, 0))
    all_day = make_event("a", date(2024, 3, 5), all_day=True)

    assert event_time_label(timed, date(2024, 3, 5)) == "2p"
    assert event_time_label(timed, date(2024, 3, 6)) == ""
    assert event_time_label(all_day, date(2024, 3, 5)) == ""
