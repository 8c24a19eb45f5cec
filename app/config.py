from __future__ import annotations

import os
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.i18n.calendar_names import DEFAULT_CALENDAR_LANGUAGE, normalize_calendar_language
from domain.models import CalendarConfig, CalendarPayload, DateRange, canonical_options

DEFAULT_CONFIG_PATH = Path("config/calendar/app.yaml")

# Settings that map one-to-one onto CalendarConfig options.
_RENDER_OPTION_FIELDS = (
    "abbreviate_day_names",
    "first_day_of_week",
    "show_today",
    "show_header",
    "width",
    "height",
    "day_names_height",
    "day_nums_height",
    "event_height",
    "event_margin",
    "event_padding_top",
    "use_all_day_distinction",
    "enable_span_highlighting",
    "day_link_action",
)


class CalendarSettings(BaseModel):
    title: str = "Event Calendar"
    language: str = DEFAULT_CALENDAR_LANGUAGE
    payload_path: Path = Path("data/calendar/events.json")
    day_link_base_path: str = "/calendar"
    show_event_times: bool = False

    abbreviate_day_names: bool = True
    first_day_of_week: int = Field(default=0, ge=0, le=6)
    show_today: bool = True
    show_header: bool = True
    width: int | None = Field(default=None, ge=0)
    height: int = Field(default=500, ge=0)
    day_names_height: int = Field(default=18, ge=0)
    day_nums_height: int = Field(default=18, ge=0)
    event_height: int = Field(default=18, ge=0)
    event_margin: int = Field(default=1, ge=0)
    event_padding_top: int = Field(default=2, ge=0)
    use_all_day_distinction: bool = False
    enable_span_highlighting: bool = True
    day_link_action: str | None = None

    @field_validator("language", mode="before")
    @classmethod
    def normalize_language(cls, value: object) -> str:
        return normalize_calendar_language(str(value or "")) or DEFAULT_CALENDAR_LANGUAGE

    def render_options(self) -> dict[str, Any]:
        return {field: getattr(self, field) for field in _RENDER_OPTION_FIELDS}

    def to_calendar_config(self, payload: CalendarPayload, **overrides: Any) -> CalendarConfig:
        """Settings defaults, then payload options, then explicit overrides."""
        explicit = canonical_options(
            {key: value for key, value in overrides.items() if value is not None}
        )
        merged = {**self.render_options(), **canonical_options(payload.options), **explicit}
        merged["event_strips"] = payload.event_strips()
        if "year" in explicit or "month" in explicit:
            # An explicit month wins over a stored range; the range still
            # supplies whichever of year and month was not given.
            stored = merged.pop("date_range", None)
            if stored is not None:
                anchor = DateRange.model_validate(stored).first
                merged.setdefault("year", anchor.year)
                merged.setdefault("month", anchor.month)
        return CalendarConfig.model_validate(merged)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ECAL_", env_nested_delimiter="__")

    calendar: CalendarSettings = CalendarSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("ECAL_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
