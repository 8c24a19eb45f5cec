from __future__ import annotations

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from domain.models import CalendarConfig, CalendarPayload, DateRange, Event, canonical_options
from tests.helpers.calendar_fixtures import load_payload_fixture, make_event


def test_month_selection_resolves_full_month() -> None:
    config = CalendarConfig(year=2024, month=2)

    assert config.first == date(2024, 2, 1)
    assert config.last == date(2024, 2, 29)
    assert config.header_month == (2024, 2)


def test_explicit_range_overrides_month() -> None:
    config = CalendarConfig.model_validate(
        {"year": 2024, "month": 2, "dates": ["2024-03-10", "2024-03-20"]}
    )

    assert config.first == date(2024, 3, 10)
    assert config.last == date(2024, 3, 20)
    assert config.header_month == (2024, 2)


def test_header_month_follows_range_when_month_not_given() -> None:
    config = CalendarConfig(date_range=DateRange(first=date(2024, 5, 30), last=date(2024, 6, 2)))

    assert config.header_month == (2024, 5)


def test_legacy_option_names_are_accepted() -> None:
    config = CalendarConfig.model_validate(
        {
            "year": 2024,
            "month": 3,
            "abbrev": False,
            "use_all_day": True,
            "use_javascript": False,
            "month_name_text": "Spring",
            "link_to_day_action": "day",
        }
    )

    assert config.abbreviate_day_names is False
    assert config.use_all_day_distinction is True
    assert config.enable_span_highlighting is False
    assert config.month_label == "Spring"
    assert config.day_link_action == "day"


def test_disabled_day_link_action_normalizes_to_none() -> None:
    assert CalendarConfig(year=2024, month=3, day_link_action=False).day_link_action is None
    assert CalendarConfig(year=2024, month=3, day_link_action="  ").day_link_action is None


def test_canonical_options_rename_legacy_keys() -> None:
    renamed = canonical_options({"dates": [1, 2], "height": 10})

    assert renamed == {"date_range": [1, 2], "height": 10}


@pytest.mark.parametrize(
    "overrides",
    [
        {"first_day_of_week": 7},
        {"first_day_of_week": -1},
        {"height": -1},
        {"event_margin": -2},
        {"width": -5},
        {"event_height": 4, "event_padding_top": 5},
        {"month": 13},
        {"dates": ["2024-03-10", "2024-03-01"]},
        {"dates": ["2024-03-10"]},
        {"colour_scheme": "dark"},
    ],
)
def test_invalid_configuration_fails_fast(overrides: dict[str, object]) -> None:
    options: dict[str, object] = {"year": 2024, "month": 3, **overrides}
    with pytest.raises(ValidationError):
        CalendarConfig.model_validate(options)


def test_strip_slots_must_be_events() -> None:
    with pytest.raises(ValidationError, match="expected None or a calendar event"):
        CalendarConfig(year=2024, month=3, event_strips=[[None, "meeting"]])


def test_config_is_immutable() -> None:
    config = CalendarConfig(year=2024, month=3)
    with pytest.raises(ValidationError):
        config.height = 10  # type: ignore[misc]


def test_event_clip_range_and_days() -> None:
    event = make_event("x", date(2024, 3, 1), date(2024, 3, 12))

    assert event.days == 11
    week = (date(2024, 3, 3), date(2024, 3, 9))
    assert event.clip_range(*week) == week
    assert event.clip_range(date(2024, 2, 25), date(2024, 3, 2)) == (
        date(2024, 3, 1),
        date(2024, 3, 2),
    )


def test_event_rejects_inverted_bounds() -> None:
    with pytest.raises(ValidationError, match="ends before it starts"):
        Event(
            id=1,
            name="Backwards",
            start_at=datetime(2024, 3, 2, 10),
            end_at=datetime(2024, 3, 2, 9),
        )


def test_payload_resolves_strip_references() -> None:
    payload = load_payload_fixture("march_2024.json")
    strips = payload.event_strips()

    assert len(strips) == 2
    assert all(len(strip) == 42 for strip in strips)
    assert strips[0][5] is not None and strips[0][5].id == "launch"
    assert strips[1][11] is strips[1][16]


def test_payload_rejects_unknown_and_duplicate_ids() -> None:
    event = {
        "id": "a",
        "name": "A",
        "start_at": "2024-03-01T10:00:00",
        "end_at": "2024-03-01T11:00:00",
    }

    with pytest.raises(ValidationError, match="unknown event id"):
        CalendarPayload.model_validate({"events": [event], "strips": [["b"]]})
    with pytest.raises(ValidationError, match="Duplicate event id"):
        CalendarPayload.model_validate({"events": [event, event]})


def test_date_range_membership() -> None:
    date_range = DateRange.model_validate(("2024-03-01", "2024-03-03"))

    assert date(2024, 3, 2) in date_range
    assert date(2024, 3, 4) not in date_range
    assert date_range.days == 3
