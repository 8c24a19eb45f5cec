from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from pydantic import ValidationError

from adapters.filesystem.calendar_payload_repository import FileSystemCalendarPayloadRepository
from adapters.filesystem.json_utils import dump_json_bytes, read_json_object
from tests.helpers.calendar_fixtures import fixture_path, load_payload_dict


def test_load_fixture_payload() -> None:
    payload = FileSystemCalendarPayloadRepository().load(fixture_path("march_2024.json"))

    strips = payload.event_strips()
    assert len(strips) == 2
    assert all(len(strip) == 42 for strip in strips)
    assert strips[1][11] is not None and strips[1][11].id == "conf"


def test_missing_payload(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Calendar payload not found"):
        FileSystemCalendarPayloadRepository().load(tmp_path / "missing.json")


def test_save_then_load_preserves_strips(tmp_path: Path) -> None:
    repo = FileSystemCalendarPayloadRepository()
    payload = repo.load(fixture_path("march_2024.json"))
    target = tmp_path / "nested" / "events.json"

    repo.save(payload, target)

    assert not target.with_suffix(".json.tmp").exists()
    assert repo.load(target).strips == payload.strips


def test_invalid_payload_is_rejected(tmp_path: Path) -> None:
    data = load_payload_dict("march_2024.json")
    data["strips"][0][0] = "ghost"
    target = tmp_path / "events.json"
    target.write_bytes(orjson.dumps(data))

    with pytest.raises(ValidationError, match="unknown event id"):
        FileSystemCalendarPayloadRepository().load(target)


def test_non_object_payload_is_rejected(tmp_path: Path) -> None:
    target = tmp_path / "list.json"
    target.write_text('[{"id": 1}]', encoding="utf-8")

    with pytest.raises(ValueError, match="Expected a JSON object in .*list.json, got list"):
        FileSystemCalendarPayloadRepository().load(target)


def test_malformed_json_is_a_value_error(tmp_path: Path) -> None:
    target = tmp_path / "broken.json"
    target.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        read_json_object(target)


def test_dump_json_bytes_is_indented() -> None:
    assert dump_json_bytes({"rows": [1]}) == b'{\n  "rows": [\n    1\n  ]\n}'
