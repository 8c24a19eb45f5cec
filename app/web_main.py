from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from adapters.filesystem.calendar_payload_repository import FileSystemCalendarPayloadRepository
from app.calendar_wiring import CalendarRequest, build_calendar_config, build_renderer
from app.config import AppSettings, load_settings
from domain.ports.calendar import TodayResolver
from domain.services.cell_placement import LayoutInvariantError

logger = logging.getLogger(__name__)


def create_app(settings: AppSettings, today: TodayResolver | None = None) -> FastAPI:
    app = FastAPI(title=settings.calendar.title)
    payload_repo = FileSystemCalendarPayloadRepository()

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/calendar", response_class=HTMLResponse)
    def calendar_fragment(
        year: int | None = Query(None, ge=1, le=9999),
        month: int | None = Query(None, ge=1, le=12),
        first_day_of_week: int | None = Query(None, ge=0, le=6),
        lang: str | None = None,
        show_times: bool | None = None,
    ) -> HTMLResponse:
        request = CalendarRequest(
            year=year,
            month=month,
            first_day_of_week=first_day_of_week,
            language=lang,
            show_event_times=show_times,
        )
        try:
            payload = payload_repo.load(settings.calendar.payload_path)
        except FileNotFoundError as exc:
            logger.warning("Calendar payload missing: %s", settings.calendar.payload_path)
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            logger.warning("Calendar payload rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        try:
            config = build_calendar_config(settings, payload, request)
        except ValidationError as exc:
            logger.info("Calendar request rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        try:
            markup = build_renderer(settings, config, request, today=today).render()
        except LayoutInvariantError as exc:
            logger.exception("Calendar layout failed for %s..%s", config.first, config.last)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return HTMLResponse(markup)

    return app


def create_default_app() -> FastAPI:
    return create_app(load_settings())
