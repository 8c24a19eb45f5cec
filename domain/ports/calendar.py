from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from domain.models import CalendarConfig


@runtime_checkable
class CalendarEvent(Protocol):
    """Capability set every event placed on the grid must provide."""

    @property
    def id(self) -> str | int: ...

    @property
    def name(self) -> str: ...

    @property
    def category(self) -> str: ...

    @property
    def start_at(self) -> datetime: ...

    @property
    def end_at(self) -> datetime: ...

    @property
    def all_day(self) -> bool: ...

    @property
    def color(self) -> str: ...

    def clip_range(self, week_start: date, week_end: date) -> tuple[date, date]: ...


class CalendarLocalizer(Protocol):
    def month_name(self, month: int) -> str: ...

    def day_names(self, abbreviated: bool) -> Sequence[str]: ...


class TodayResolver(Protocol):
    def __call__(self) -> date: ...


class DayLinkBuilder(Protocol):
    def build(self, text: str, day: date, action: str) -> str: ...


class ContentCallback(Protocol):
    def __call__(self, event: CalendarEvent, day: date, config: CalendarConfig) -> str: ...
