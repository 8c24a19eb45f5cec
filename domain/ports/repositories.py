from __future__ import annotations

from pathlib import Path
from typing import Protocol

from domain.models import CalendarPayload


class CalendarPayloadRepository(Protocol):
    def load(self, path: Path) -> CalendarPayload: ...

    def save(self, payload: CalendarPayload, path: Path) -> None: ...
