from __future__ import annotations

import logging
from pathlib import Path

import typer
import uvicorn
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.filesystem.calendar_payload_repository import FileSystemCalendarPayloadRepository
from adapters.filesystem.json_utils import dump_json_bytes
from app.calendar_wiring import CalendarRequest, build_calendar_config, build_renderer
from app.config import load_settings
from app.web_main import create_app
from domain.services.calendar_layout import plan_calendar_layout
from domain.services.cell_placement import LayoutInvariantError

app = typer.Typer(no_args_is_help=True)
console = Console()

CALENDAR_ERRORS = (FileNotFoundError, ValidationError, ValueError, LayoutInvariantError)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log layout details."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.command("render")
def render(
    payload_path: Path = typer.Argument(..., help="Calendar payload JSON."),
    output: Path | None = typer.Option(None, help="Write the HTML fragment here, not stdout."),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
    year: int | None = typer.Option(None, help="Calendar year."),
    month: int | None = typer.Option(None, min=1, max=12, help="Calendar month."),
    first_day_of_week: int | None = typer.Option(None, min=0, max=6, help="0 = Sunday."),
    lang: str | None = typer.Option(None, help="Month and day name language (en, ru)."),
    show_times: bool | None = typer.Option(
        None, "--show-times/--no-show-times", help="Prefix timed events with their start time."
    ),
) -> None:
    request = CalendarRequest(
        year=year,
        month=month,
        first_day_of_week=first_day_of_week,
        language=lang,
        show_event_times=show_times,
    )
    try:
        settings = load_settings(config_path)
        payload = FileSystemCalendarPayloadRepository().load(payload_path)
        config = build_calendar_config(settings, payload, request)
        markup = build_renderer(settings, config, request).render()
    except CALENDAR_ERRORS as exc:
        console.print(f"[red]Render failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(markup)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markup, encoding="utf-8")
    console.print(f"[green]Wrote[/] {output}")


@app.command("layout")
def layout(
    payload_path: Path = typer.Argument(..., help="Calendar payload JSON."),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
    year: int | None = typer.Option(None, help="Calendar year."),
    month: int | None = typer.Option(None, min=1, max=12, help="Calendar month."),
    first_day_of_week: int | None = typer.Option(None, min=0, max=6, help="0 = Sunday."),
) -> None:
    request = CalendarRequest(year=year, month=month, first_day_of_week=first_day_of_week)
    try:
        settings = load_settings(config_path)
        payload = FileSystemCalendarPayloadRepository().load(payload_path)
        plan = plan_calendar_layout(build_calendar_config(settings, payload, request))
    except CALENDAR_ERRORS as exc:
        console.print(f"[red]Layout failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    summary = {
        "total_height": plan.total_height,
        "rows": [
            {
                "index": row.span.index,
                "start": row.span.start.isoformat(),
                "end": row.span.end.isoformat(),
                "depth": row.depth,
                "height": row.height,
                "top": row.top,
            }
            for row in plan.rows
        ],
    }
    typer.echo(dump_json_bytes(summary).decode("utf-8"))


@app.command("serve")
def serve(
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8000, help="Bind port."),
) -> None:
    settings = load_settings(config_path)
    payload_path = settings.calendar.payload_path
    console.print(f"[green]Serving[/] {payload_path} on http://{host}:{port}/calendar")
    uvicorn.run(create_app(settings), host=host, port=port)


@app.command("validate")
def validate(
    payload_path: Path = typer.Argument(..., help="Calendar payload JSON to validate."),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    if not payload_path.exists():
        console.print(f"[red]File not found:[/] {payload_path}")
        raise typer.Exit(code=1)

    request = CalendarRequest()
    try:
        settings = load_settings(config_path)
        payload = FileSystemCalendarPayloadRepository().load(payload_path)
        config = build_calendar_config(settings, payload, request)
        build_renderer(settings, config, request).render()
    except CALENDAR_ERRORS as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid calendar payload:[/] {payload_path}")


if __name__ == "__main__":
    app()
