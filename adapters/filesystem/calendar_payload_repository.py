from __future__ import annotations

from pathlib import Path

from adapters.filesystem.json_utils import read_json_object, write_json_atomic
from domain.models import CalendarPayload
from domain.ports.repositories import CalendarPayloadRepository


class FileSystemCalendarPayloadRepository(CalendarPayloadRepository):
    def load(self, path: Path) -> CalendarPayload:
        if not path.exists():
            msg = f"Calendar payload not found: {path}"
            raise FileNotFoundError(msg)
        return CalendarPayload.model_validate(read_json_object(path))

    def save(self, payload: CalendarPayload, path: Path) -> None:
        write_json_atomic(path, payload.model_dump(mode="json"))
