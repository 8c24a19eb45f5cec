from __future__ import annotations

import os
from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path

import pytest

from app.config import AppSettings, CalendarSettings
from tests.helpers.calendar_fixtures import fixture_path


def _clear_ecal_env() -> None:
    for key in list(os.environ):
        if key.startswith("ECAL_"):
            os.environ.pop(key, None)


_clear_ecal_env()


@pytest.fixture(autouse=True)
def clear_ecal_env() -> Generator[None, None, None]:
    _clear_ecal_env()
    yield
    _clear_ecal_env()


@pytest.fixture
def fixed_today() -> Callable[[], date]:
    return lambda: date(2024, 3, 5)


@pytest.fixture
def calendar_settings() -> CalendarSettings:
    return CalendarSettings(
        title="Test Calendar",
        language="en",
        payload_path=fixture_path("march_2024.json"),
        day_link_base_path="/calendar",
        show_event_times=False,
        first_day_of_week=0,
        height=500,
        use_all_day_distinction=False,
        enable_span_highlighting=True,
    )


@pytest.fixture
def calendar_settings_factory(
    calendar_settings: CalendarSettings,
) -> Callable[..., CalendarSettings]:
    def _factory(**overrides: object) -> CalendarSettings:
        return calendar_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(calendar_settings: CalendarSettings) -> AppSettings:
    return AppSettings(calendar=calendar_settings)


@pytest.fixture
def app_settings_factory(
    calendar_settings_factory: Callable[..., CalendarSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(calendar=calendar_settings_factory(**overrides))

    return _factory


@pytest.fixture
def payload_copy(tmp_path: Path) -> Path:
    target = tmp_path / "march_2024.json"
    target.write_bytes(fixture_path("march_2024.json").read_bytes())
    return target
