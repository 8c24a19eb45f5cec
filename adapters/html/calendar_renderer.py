from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from markupsafe import Markup

from adapters.html.day_links import QueryStringDayLinkBuilder
from adapters.html.event_content import default_event_content, event_css_key
from adapters.html.markup_builder import (
    NBSP,
    MarkupBuilder,
    class_names,
    css_token,
    is_safe_css_value,
)
from adapters.i18n.calendar_names import StaticCalendarLocalizer, rotate_day_names
from domain.models import (
    DAYS_PER_WEEK,
    DEFAULT_EVENT_COLOR,
    CalendarConfig,
    CalendarLayout,
    PlacedCell,
    WeekRow,
)
from domain.ports.calendar import (
    CalendarEvent,
    CalendarLocalizer,
    ContentCallback,
    DayLinkBuilder,
    TodayResolver,
)
from domain.services.calendar_layout import plan_calendar_layout
from domain.services.cell_placement import place_strip_row
from domain.services.week_grid import is_weekend

logger = logging.getLogger(__name__)

TABLE_ATTRS = {"cellpadding": "0", "cellspacing": "0"}


class HtmlCalendarRenderer:
    """Renders one calendar configuration to an HTML fragment.

    An instance is single-use: the markup buffer belongs to exactly one render,
    so build a new renderer for every configuration.
    """

    def __init__(
        self,
        config: CalendarConfig,
        content: ContentCallback | None = None,
        *,
        localizer: CalendarLocalizer | None = None,
        today: TodayResolver | None = None,
        day_links: DayLinkBuilder | None = None,
    ) -> None:
        self.config = config
        self.content = content or default_event_content
        self.localizer = localizer or StaticCalendarLocalizer()
        self.today_resolver = today or date.today
        self.day_links = day_links or QueryStringDayLinkBuilder()
        self._markup = MarkupBuilder()
        self._rendered = False
        self._today: date | None = None

    def render(self) -> str:
        if self._rendered:
            msg = "HtmlCalendarRenderer instances render once; create a new renderer"
            raise RuntimeError(msg)
        self._rendered = True

        config = self.config
        layout = plan_calendar_layout(config)
        self._warn_on_strip_length(layout)
        self._today = self.today_resolver()
        logger.debug(
            "Rendering calendar %s..%s: %d week rows, %d strips, %dpx tall",
            config.first,
            config.last,
            len(layout.rows),
            len(config.event_strips),
            layout.total_height,
        )

        outer_style = f"width: {config.width}px;" if config.width is not None else None
        with self._markup.element("div", {"class": "ec-calendar", "style": outer_style}):
            if config.show_header:
                self._add_header()
            body_style = f"height: {layout.total_height}px;"
            with self._markup.element("div", {"class": "ec-body", "style": body_style}):
                self._add_day_names()
                self._add_rows(layout)
        return self._markup.getvalue()

    def _add_header(self) -> None:
        config = self.config
        markup = self._markup
        header_attrs = {"class": "ec-calendar-header", **TABLE_ATTRS}
        with markup.element("table", header_attrs), markup.element("thead"), markup.element("tr"):
            has_nav = bool(config.previous_label or config.next_label)
            if has_nav:
                markup.leaf(
                    "th",
                    {"colspan": "2", "class": "ec-month-nav ec-previous-month"},
                    Markup(config.previous_label or ""),
                )
            month_attrs = {"colspan": "3" if has_nav else "7", "class": "ec-month-name"}
            markup.leaf("th", month_attrs, self._month_label())
            if config.next_label:
                markup.leaf(
                    "th",
                    {"colspan": "2", "class": "ec-month-nav ec-next-month"},
                    Markup(config.next_label),
                )

    def _month_label(self) -> str:
        if self.config.month_label is not None:
            return Markup(self.config.month_label)
        year, month = self.config.header_month
        return f"{self.localizer.month_name(month)} {year}"

    def _day_name_labels(self) -> tuple[list[str], list[str]]:
        fdow = self.config.first_day_of_week
        titles = rotate_day_names(self.localizer.day_names(False), fdow)
        if self.config.abbreviate_day_names:
            return rotate_day_names(self.localizer.day_names(True), fdow), titles
        return titles, titles

    def _add_day_names(self) -> None:
        markup = self._markup
        labels, titles = self._day_name_labels()
        attrs = {
            "class": "ec-day-names",
            "style": f"height: {self.config.day_names_height}px;",
            **TABLE_ATTRS,
        }
        with markup.element("table", attrs), markup.element("tbody"), markup.element("tr"):
            for label, title in zip(labels, titles):
                markup.leaf("th", {"class": "ec-day-name", "title": title}, label)

    def _add_rows(self, layout: CalendarLayout) -> None:
        style = f"top: {layout.day_names_height}px; height: {layout.rows_height}px;"
        with self._markup.element("div", {"class": "ec-rows", "style": style}):
            for row in layout.rows:
                self._add_week_row(row)

    def _add_week_row(self, row: WeekRow) -> None:
        markup = self._markup
        style = f"top: {row.top}px; height: {row.height}px;"
        with markup.element("div", {"class": "ec-row", "style": style}):
            self._add_week_background(row)
            row_table_attrs = {"class": "ec-row-table", **TABLE_ATTRS}
            with markup.element("table", row_table_attrs), markup.element("tbody"):
                self._add_day_numbers(row)
                for strip_index, strip in enumerate(self.config.event_strips):
                    cells = place_strip_row(
                        strip, row.span, strip_index, self.config.use_all_day_distinction
                    )
                    with markup.element("tr"):
                        for cell in cells:
                            self._add_cell(cell)

    def _add_week_background(self, row: WeekRow) -> None:
        markup = self._markup
        with markup.element("table", {"class": "ec-row-bg", **TABLE_ATTRS}):
            with markup.element("tbody"), markup.element("tr"):
                for day in row.span.days():
                    classes = class_names(
                        "ec-day-bg",
                        "ec-today-bg" if self._is_today(day) else None,
                        "ec-other-month-bg" if self._is_other_range(day) else None,
                        "ec-weekend-day-bg" if is_weekend(day) else None,
                    )
                    markup.leaf("td", {"class": classes}, NBSP)

    def _add_day_numbers(self, row: WeekRow) -> None:
        markup = self._markup
        action = self.config.day_link_action
        with markup.element("tr"):
            for day in row.span.days():
                classes = class_names(
                    "ec-day-header",
                    "ec-today-header" if self._is_today_header(day) else None,
                    "ec-other-month-header" if self._is_other_range(day) else None,
                    "ec-weekend-day-header" if is_weekend(day) else None,
                )
                attrs = {"class": classes, "style": f"height: {self.config.day_nums_height}px;"}
                if action:
                    number = Markup(self.day_links.build(str(day.day), day, action))
                else:
                    number = str(day.day)
                markup.leaf("td", attrs, number)

    def _add_cell(self, cell: PlacedCell) -> None:
        if cell.event is None:
            self._add_filler_cell()
        else:
            self._add_event_cell(cell, cell.event)

    def _event_box_style(self) -> str:
        padding = self.config.event_padding_top
        return f"padding-top: {padding}px; height: {self.config.event_height - padding}px;"

    def _add_filler_cell(self) -> None:
        markup = self._markup
        cell_attrs = {
            "class": "ec-event-cell ec-no-event-cell",
            "style": f"padding-top: {self.config.event_margin}px;",
        }
        with markup.element("td", cell_attrs):
            markup.leaf("div", {"class": "ec-event", "style": self._event_box_style()}, NBSP)

    def _add_event_cell(self, cell: PlacedCell, event: CalendarEvent) -> None:
        markup = self._markup
        color = _event_color(event)
        event_key = f"ec-{event_css_key(event)}-{css_token(event.id)}"
        no_background = cell.background == "no_background"

        cell_attrs: dict[str, Any] = {
            "class": "ec-event-cell",
            "colspan": str(cell.span),
            "style": f"padding-top: {self.config.event_margin}px;",
        }
        if no_background:
            event_style = f"color: {color}; {self._event_box_style()}"
        else:
            event_style = f"background-color: {color}; {self._event_box_style()}"
        event_attrs: dict[str, Any] = {
            "class": class_names(
                "ec-event", event_key, "ec-event-no-bg" if no_background else "ec-event-bg"
            ),
            "style": event_style,
        }
        if self.config.enable_span_highlighting:
            event_attrs.update(
                {
                    "data-event-id": event.id,
                    "data-event-class": event_css_key(event),
                    "data-color": color,
                }
            )

        with markup.element("td", cell_attrs), markup.element("div", event_attrs):
            if cell.clipped_left:
                markup.leaf("div", {"class": "ec-left-arrow"})
            if cell.clipped_right:
                markup.leaf("div", {"class": "ec-right-arrow"})
            if no_background:
                markup.leaf("div", {"class": "ec-bullet", "style": f"background-color: {color};"})
                # anchors do not reliably inherit the cell colour
                markup.leaf(
                    "style", {"type": "text/css"}, f".{event_key} a {{ color: {color}; }}"
                )
            markup.text(Markup(self._cell_content(event, cell.day)))

    def _cell_content(self, event: CalendarEvent, day: date) -> str:
        result = self.content(event, day, self.config)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            msg = "Content callbacks must return markup synchronously, got an awaitable"
            raise TypeError(msg)
        if result is None:
            return ""
        if not isinstance(result, str):
            msg = f"Content callback returned {type(result).__name__}, expected str"
            raise TypeError(msg)
        return result

    def _is_today(self, day: date) -> bool:
        return day == self._today

    def _is_today_header(self, day: date) -> bool:
        # show_today gates only the day-number marker.
        return self.config.show_today and self._is_today(day)

    def _is_other_range(self, day: date) -> bool:
        return day not in self.config.resolved_range

    def _warn_on_strip_length(self, layout: CalendarLayout) -> None:
        expected = len(layout.rows) * DAYS_PER_WEEK
        mismatched = _mismatched_strips(self.config.event_strips, expected)
        if mismatched:
            logger.warning(
                "Event strips %s do not have %d slots; missing slots render as empty days",
                mismatched,
                expected,
            )


def _mismatched_strips(strips: Sequence[Sequence[Any]], expected: int) -> list[int]:
    return [index for index, strip in enumerate(strips) if len(strip) != expected]


def _event_color(event: CalendarEvent) -> str:
    color = str(event.color or "").strip()
    return color if color and is_safe_css_value(color) else DEFAULT_EVENT_COLOR


def render_calendar(
    config: CalendarConfig,
    content: ContentCallback | None = None,
    *,
    localizer: CalendarLocalizer | None = None,
    today: TodayResolver | None = None,
    day_links: DayLinkBuilder | None = None,
) -> str:
    renderer = HtmlCalendarRenderer(
        config, content, localizer=localizer, today=today, day_links=day_links
    )
    return renderer.render()
