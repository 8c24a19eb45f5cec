from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from adapters.html.calendar_renderer import HtmlCalendarRenderer
from adapters.html.day_links import QueryStringDayLinkBuilder
from adapters.html.event_content import time_prefixed_content
from adapters.i18n.calendar_names import build_calendar_localizer
from app.config import AppSettings
from domain.models import CalendarConfig, CalendarPayload
from domain.ports.calendar import ContentCallback, TodayResolver


@dataclass(frozen=True)
class CalendarRequest:
    year: int | None = None
    month: int | None = None
    first_day_of_week: int | None = None
    language: str | None = None
    show_event_times: bool | None = None


def build_content_callback(show_event_times: bool) -> ContentCallback | None:
    return time_prefixed_content if show_event_times else None


def build_calendar_config(
    settings: AppSettings, payload: CalendarPayload, request: CalendarRequest
) -> CalendarConfig:
    overrides: dict[str, Any] = {
        "year": request.year,
        "month": request.month,
        "first_day_of_week": request.first_day_of_week,
    }
    return settings.calendar.to_calendar_config(payload, **overrides)


def build_renderer(
    settings: AppSettings,
    config: CalendarConfig,
    request: CalendarRequest,
    today: TodayResolver | None = None,
) -> HtmlCalendarRenderer:
    calendar_settings = settings.calendar
    show_times = (
        request.show_event_times
        if request.show_event_times is not None
        else calendar_settings.show_event_times
    )
    return HtmlCalendarRenderer(
        config,
        build_content_callback(show_times),
        localizer=build_calendar_localizer(request.language or calendar_settings.language),
        today=today,
        day_links=QueryStringDayLinkBuilder(base_path=calendar_settings.day_link_base_path),
    )
