from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from markupsafe import Markup, escape

_CSS_TOKEN_RE = re.compile(r"[^a-z0-9_-]+")
_CSS_VALUE_RE = re.compile(r"^[#\w\s(),.%-]+$")

Attributes = Mapping[str, object]

NBSP = Markup("&nbsp;")


def css_token(value: object) -> str:
    return _CSS_TOKEN_RE.sub("-", str(value).strip().lower()).strip("-")


def is_safe_css_value(value: str) -> bool:
    return bool(_CSS_VALUE_RE.match(value))


def class_names(*names: str | None) -> str:
    return " ".join(name for name in names if name)


def render_attributes(attributes: Attributes | None) -> Markup:
    if not attributes:
        return Markup("")
    rendered: list[Markup] = []
    for key, value in attributes.items():
        if value is None or value is False:
            continue
        if isinstance(value, (list, tuple)):
            value = class_names(*value)
        rendered.append(Markup(' {}="{}"').format(Markup(key), str(value)))
    return Markup("").join(rendered)


class MarkupBuilder:
    """Append-only markup buffer whose elements are opened and closed in scope.

    Plain strings are escaped on the way in; pass ``markupsafe.Markup`` for
    fragments that are already trusted markup.
    """

    def __init__(self) -> None:
        self._parts: list[Markup] = []
        self._open_tags: list[str] = []

    @contextmanager
    def element(self, tag: str, attributes: Attributes | None = None) -> Iterator[None]:
        self._parts.append(Markup("<{}{}>").format(Markup(tag), render_attributes(attributes)))
        self._open_tags.append(tag)
        yield
        closed = self._open_tags.pop()
        if closed != tag:
            msg = f"Closing <{tag}> while <{closed}> is the innermost open element"
            raise RuntimeError(msg)
        self._parts.append(Markup("</{}>").format(Markup(tag)))

    def leaf(self, tag: str, attributes: Attributes | None = None, content: str = "") -> None:
        self._parts.append(
            Markup("<{0}{1}>{2}</{0}>").format(Markup(tag), render_attributes(attributes), content)
        )

    def text(self, content: str) -> None:
        self._parts.append(escape(content))

    @property
    def depth(self) -> int:
        return len(self._open_tags)

    def getvalue(self) -> str:
        if self._open_tags:
            msg = f"Unclosed elements: {', '.join(self._open_tags)}"
            raise RuntimeError(msg)
        return str(Markup("").join(self._parts))
