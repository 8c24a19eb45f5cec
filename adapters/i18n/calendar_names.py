# ruff: noqa: RUF001

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from domain.ports.calendar import CalendarLocalizer

DEFAULT_CALENDAR_LANGUAGE: Final[str] = "en"
SUPPORTED_CALENDAR_LANGUAGES: Final[set[str]] = {"en", "ru"}

_MONTH_NAMES: Final[dict[str, tuple[str, ...]]] = {
    "en": (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
    "ru": (
        "Январь",
        "Февраль",
        "Март",
        "Апрель",
        "Май",
        "Июнь",
        "Июль",
        "Август",
        "Сентябрь",
        "Октябрь",
        "Ноябрь",
        "Декабрь",
    ),
}

# Sunday first, matching the 0=Sunday weekday numbering of the grid.
_DAY_NAMES: Final[dict[str, tuple[str, ...]]] = {
    "en": ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
    "ru": (
        "Воскресенье",
        "Понедельник",
        "Вторник",
        "Среда",
        "Четверг",
        "Пятница",
        "Суббота",
    ),
}

_ABBR_DAY_NAMES: Final[dict[str, tuple[str, ...]]] = {
    "en": ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
    "ru": ("Вс", "Пн", "Вт", "Ср", "Чт", "Пт", "Сб"),
}


def normalize_calendar_language(value: str | None) -> str | None:
    raw = str(value or "").strip().lower()
    if not raw:
        return None
    lang = raw.replace("_", "-").split("-", 1)[0]
    if lang in SUPPORTED_CALENDAR_LANGUAGES:
        return lang
    return None


@dataclass(frozen=True)
class StaticCalendarLocalizer(CalendarLocalizer):
    language: str = DEFAULT_CALENDAR_LANGUAGE

    def month_name(self, month: int) -> str:
        if not 1 <= month <= 12:
            msg = f"month must be within 1..12, got {month}"
            raise ValueError(msg)
        return _MONTH_NAMES[self._lang][month - 1]

    def day_names(self, abbreviated: bool) -> Sequence[str]:
        names = _ABBR_DAY_NAMES if abbreviated else _DAY_NAMES
        return names[self._lang]

    @property
    def _lang(self) -> str:
        return normalize_calendar_language(self.language) or DEFAULT_CALENDAR_LANGUAGE


def build_calendar_localizer(language: str | None) -> StaticCalendarLocalizer:
    return StaticCalendarLocalizer(
        language=normalize_calendar_language(language) or DEFAULT_CALENDAR_LANGUAGE
    )


def rotate_day_names(names: Sequence[str], first_day_of_week: int) -> list[str]:
    shift = first_day_of_week % len(names) if names else 0
    return list(names[shift:]) + list(names[:shift])
