from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from urllib.parse import urlencode

from markupsafe import Markup

from domain.ports.calendar import DayLinkBuilder

DAY_LINK_CLASS = "ec-day-link"


@dataclass(frozen=True)
class QueryStringDayLinkBuilder(DayLinkBuilder):
    base_path: str = ""

    def href(self, day: date, action: str) -> str:
        query = urlencode(
            [("action", action), ("year", day.year), ("month", day.month), ("day", day.day)]
        )
        return f"{self.base_path}?{query}"

    def build(self, text: str, day: date, action: str) -> Markup:
        return Markup('<a href="{}" class="{}">{}</a>').format(
            self.href(day, action), DAY_LINK_CLASS, text
        )
