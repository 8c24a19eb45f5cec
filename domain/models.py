from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from domain.ports.calendar import CalendarEvent

DEFAULT_EVENT_COLOR = "#9aa4ad"
DAYS_PER_WEEK = 7

BackgroundMode = Literal["filled", "no_background"]

LEGACY_OPTION_NAMES = {
    "dates": "date_range",
    "abbrev": "abbreviate_day_names",
    "month_name_text": "month_label",
    "previous_month_text": "previous_label",
    "next_month_text": "next_label",
    "use_all_day": "use_all_day_distinction",
    "use_javascript": "enable_span_highlighting",
    "link_to_day_action": "day_link_action",
}


def canonical_options(options: dict[str, Any]) -> dict[str, Any]:
    return {LEGACY_OPTION_NAMES.get(key, key): value for key, value in options.items()}


class Event(BaseModel):
    id: str | int
    name: str = Field(..., min_length=1)
    category: str = "event"
    start_at: datetime
    end_at: datetime
    all_day: bool = False
    color: str = DEFAULT_EVENT_COLOR

    @model_validator(mode="after")
    def ensure_ordered_bounds(self) -> Event:
        if self.end_at < self.start_at:
            msg = f"Event {self.id} ends before it starts"
            raise ValueError(msg)
        return self

    @property
    def start_date(self) -> date:
        return self.start_at.date()

    @property
    def end_date(self) -> date:
        return self.end_at.date()

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days

    def clip_range(self, week_start: date, week_end: date) -> tuple[date, date]:
        return max(self.start_date, week_start), min(self.end_date, week_end)


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    first: date
    last: date

    @model_validator(mode="before")
    @classmethod
    def accept_pairs(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                msg = "date range must be a [first, last] pair"
                raise ValueError(msg)
            return {"first": value[0], "last": value[1]}
        return value

    @model_validator(mode="after")
    def ensure_ordered(self) -> DateRange:
        if self.last < self.first:
            msg = f"date range ends ({self.last}) before it starts ({self.first})"
            raise ValueError(msg)
        return self

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.first <= day <= self.last

    @property
    def days(self) -> int:
        return (self.last - self.first).days + 1


def _current_year() -> int:
    return date.today().year


def _current_month() -> int:
    return date.today().month


class CalendarConfig(BaseModel):
    """Immutable snapshot of everything one render needs.

    Field names are the canonical option names; the ``AliasChoices`` keep the
    historical option names accepted as well. Unknown options are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int = Field(default_factory=_current_year, ge=1, le=9999)
    month: int = Field(default_factory=_current_month, ge=1, le=12)
    date_range: DateRange | None = Field(
        default=None, validation_alias=AliasChoices("date_range", "dates")
    )
    abbreviate_day_names: bool = Field(
        default=True, validation_alias=AliasChoices("abbreviate_day_names", "abbrev")
    )
    first_day_of_week: int = Field(default=0, ge=0, le=6)
    show_today: bool = True
    show_header: bool = True
    month_label: str | None = Field(
        default=None, validation_alias=AliasChoices("month_label", "month_name_text")
    )
    previous_label: str | None = Field(
        default=None, validation_alias=AliasChoices("previous_label", "previous_month_text")
    )
    next_label: str | None = Field(
        default=None, validation_alias=AliasChoices("next_label", "next_month_text")
    )
    event_strips: tuple[tuple[Any, ...], ...] = ()

    width: int | None = Field(default=None, ge=0)
    height: int = Field(default=500, ge=0)
    day_names_height: int = Field(default=18, ge=0)
    day_nums_height: int = Field(default=18, ge=0)
    event_height: int = Field(default=18, ge=0)
    event_margin: int = Field(default=1, ge=0)
    event_padding_top: int = Field(default=2, ge=0)

    use_all_day_distinction: bool = Field(
        default=False, validation_alias=AliasChoices("use_all_day_distinction", "use_all_day")
    )
    enable_span_highlighting: bool = Field(
        default=True,
        validation_alias=AliasChoices("enable_span_highlighting", "use_javascript"),
    )
    day_link_action: str | None = Field(
        default=None,
        validation_alias=AliasChoices("day_link_action", "link_to_day_action"),
    )

    @field_validator("event_strips", mode="after")
    @classmethod
    def ensure_event_capability(
        cls, strips: tuple[tuple[Any, ...], ...]
    ) -> tuple[tuple[Any, ...], ...]:
        for strip_index, strip in enumerate(strips):
            for slot_index, slot in enumerate(strip):
                if slot is None or isinstance(slot, CalendarEvent):
                    continue
                msg = (
                    f"event_strips[{strip_index}][{slot_index}] is {type(slot).__name__}, "
                    "expected None or a calendar event"
                )
                raise ValueError(msg)
        return strips

    @field_validator("day_link_action", mode="before")
    @classmethod
    def normalize_day_link_action(cls, value: object) -> str | None:
        # `link_to_day_action: false` is the historical way to switch links off.
        if value is None or value is False:
            return None
        normalized = str(value).strip()
        return normalized or None

    @model_validator(mode="after")
    def ensure_event_padding_fits(self) -> CalendarConfig:
        if self.event_padding_top > self.event_height:
            msg = (
                f"event_padding_top ({self.event_padding_top}) must not exceed "
                f"event_height ({self.event_height})"
            )
            raise ValueError(msg)
        return self

    @property
    def resolved_range(self) -> DateRange:
        if self.date_range is not None:
            return self.date_range
        last_day = calendar.monthrange(self.year, self.month)[1]
        return DateRange(
            first=date(self.year, self.month, 1),
            last=date(self.year, self.month, last_day),
        )

    @property
    def header_month(self) -> tuple[int, int]:
        if self.date_range is not None and not {"year", "month"} & self.model_fields_set:
            return self.date_range.first.year, self.date_range.first.month
        return self.year, self.month

    @property
    def first(self) -> date:
        return self.resolved_range.first

    @property
    def last(self) -> date:
        return self.resolved_range.last


@dataclass(frozen=True)
class WeekSpan:
    index: int
    start: date
    end: date

    def days(self) -> list[date]:
        return [self.start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]

    @property
    def slot_offset(self) -> int:
        return self.index * DAYS_PER_WEEK


@dataclass(frozen=True)
class WeekRow:
    span: WeekSpan
    depth: int
    height: int
    top: int


@dataclass(frozen=True)
class CalendarLayout:
    rows: list[WeekRow]
    day_names_height: int
    total_height: int

    @property
    def rows_height(self) -> int:
        return self.total_height - self.day_names_height


@dataclass(frozen=True)
class PlacedCell:
    day_index: int
    strip_index: int
    span: int
    day: date
    event: CalendarEvent | None = None
    clipped_left: bool = False
    clipped_right: bool = False
    background: BackgroundMode = "filled"

    @property
    def is_filler(self) -> bool:
        return self.event is None


class CalendarPayload(BaseModel):
    """Events plus pre-bucketed strips (by event id) and rendering options."""

    options: dict[str, Any] = Field(default_factory=dict)
    events: list[Event] = Field(default_factory=list)
    strips: list[list[str | int | None]] = Field(default_factory=list)

    @field_validator("events", mode="after")
    @classmethod
    def ensure_unique_event_ids(cls, events: list[Event]) -> list[Event]:
        seen: set[str] = set()
        for event in events:
            key = str(event.id)
            if key in seen:
                msg = f"Duplicate event id found: {event.id}"
                raise ValueError(msg)
            seen.add(key)
        return events

    @model_validator(mode="after")
    def ensure_known_strip_refs(self) -> CalendarPayload:
        known = {str(event.id) for event in self.events}
        for strip_index, strip in enumerate(self.strips):
            for ref in strip:
                if ref is not None and str(ref) not in known:
                    msg = f"Strip {strip_index} references unknown event id: {ref}"
                    raise ValueError(msg)
        return self

    def event_strips(self) -> tuple[tuple[Event | None, ...], ...]:
        by_id = {str(event.id): event for event in self.events}
        return tuple(
            tuple(None if ref is None else by_id[str(ref)] for ref in strip)
            for strip in self.strips
        )
