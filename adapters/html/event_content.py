from __future__ import annotations

from datetime import date

from markupsafe import Markup

from adapters.html.markup_builder import css_token
from domain.models import CalendarConfig
from domain.ports.calendar import CalendarEvent
from domain.services.event_time import event_time_label


def pluralize(word: str) -> str:
    if not word:
        return word
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return f"{word}es"
    if word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        return f"{word[:-1]}ies"
    return f"{word}s"


def event_css_key(event: CalendarEvent) -> str:
    return css_token(event.category) or "event"


def event_resource_path(event: CalendarEvent) -> str:
    return f"/{pluralize(event_css_key(event))}/{event.id}"


def default_event_content(event: CalendarEvent, day: date, config: CalendarConfig) -> Markup:
    return Markup('<a href="{0}" title="{1}">{1}</a>').format(
        event_resource_path(event), event.name
    )


def time_prefixed_content(event: CalendarEvent, day: date, config: CalendarConfig) -> Markup:
    label = event_time_label(event, day)
    link = default_event_content(event, day, config)
    if not label:
        return link
    return Markup('<span class="ec-event-time">{}</span>{}').format(label, link)
