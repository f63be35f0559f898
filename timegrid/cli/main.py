from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import List

import typer

from ..config import AppConfig, load_config
from ..data.loader import JsonScheduleStore
from ..layout.marker import get_current_time_marker_position, scroll_offset_for
from ..models import PositionedBlock
from ..render.csv_out import events_csv, write_events_csv
from ..render.html_ui import write_html_ui
from ..resolve.resolver import Failure, Resolved, ScheduleDataResolver
from ..session import ScheduleSession
from ..timemath import shift_week
from ..validate.checks import validate_events
from ..validate.report import format_validation_report, write_validation_report


def _setup_logging(project_root: Path, level: int = logging.INFO) -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "timegrid.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
        force=True,
    )


@dataclass
class PipelineResult:
    resolved: Resolved | None = None
    failure: Failure | None = None
    blocks: List[PositionedBlock] = field(default_factory=list)
    csv: str = ""
    validation: str = ""


def build_resolver(project_root: Path, config: AppConfig) -> ScheduleDataResolver:
    store = JsonScheduleStore(project_root, child_unknown=config.labels.child_unknown)
    return ScheduleDataResolver(store, config.resolver, config.labels)


def resolve_schedule(
    project_root: Path, subject_id: str, config: AppConfig, week: date | None = None
) -> Resolved | Failure:
    return asyncio.run(build_resolver(project_root, config).resolve(subject_id, week))


def run_pipeline(
    project_root: Path,
    subject_id: str,
    *,
    week: date | None = None,
    filter_course: str | None = None,
    width: float | None = None,
    locale: str | None = None,
    now: datetime | None = None,
    write_outputs: bool = True,
) -> PipelineResult:
    config = load_config(project_root, locale=locale)
    grid = config.grid if width is None else config.grid.with_width(width)
    session = ScheduleSession(build_resolver(project_root, config), grid)
    session.select(subject_id)
    session.set_filter(filter_course)
    result = asyncio.run(session.load(week))
    if result is None:
        raise ValueError("run_pipeline() needs a subject id")
    if isinstance(result, Failure):
        logging.getLogger(__name__).error(f"Schedule load failed: {result.reason} ({result.cause})")
        return PipelineResult(failure=result)

    blocks = session.blocks()
    report = validate_events(result.events, grid, teacher_unknown=config.labels.teacher_unknown)
    csv = events_csv(result.events)
    if write_outputs:
        outputs_dir = project_root / "outputs"
        write_events_csv(csv, outputs_dir)
        write_validation_report(report, outputs_dir)
        now = now or datetime.now()
        marker = session.tick(now)
        write_html_ui(blocks, grid, result.week_start, outputs_dir, marker, now.date())
        json_dir = outputs_dir / "json"
        json_dir.mkdir(parents=True, exist_ok=True)
        with (json_dir / "events.json").open("w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
    return PipelineResult(
        resolved=result,
        blocks=blocks,
        csv=csv,
        validation=format_validation_report(report),
    )


app = typer.Typer(add_completion=False, help="Weekly timetable resolution and week-grid layout")


@dataclass
class _Context:
    root: Path
    locale: str | None


def _parse_week(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {value!r}") from exc


def _target_week(week: str | None, shift: int) -> date | None:
    base = _parse_week(week)
    if not shift:
        return base
    return shift_week(base or date.today(), shift)


def _fail(failure: Failure) -> None:
    typer.echo(f"Failed to load schedule: {failure.reason}. Please try again.", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    root: Path = typer.Option(Path("."), help="Directory holding data/ and configs/"),
    log_level: str = typer.Option("WARNING", help="Log level"),
    locale: str = typer.Option(None, help="Label locale (en, ru, uz)"),
) -> None:
    root = root.resolve()
    _setup_logging(root, getattr(logging, log_level.upper(), logging.WARNING))
    ctx.obj = _Context(root=root, locale=locale)


@app.command("resolve")
def cli_resolve(
    ctx: typer.Context,
    subject_id: str = typer.Argument(..., help="Student id"),
    week: str = typer.Option(None, help="Any date inside the week (YYYY-MM-DD)"),
    shift: int = typer.Option(0, help="Weeks before (negative) or after --week"),
) -> None:
    c: _Context = ctx.obj
    config = load_config(c.root, locale=c.locale)
    result = resolve_schedule(c.root, subject_id, config, _target_week(week, shift))
    if isinstance(result, Failure):
        _fail(result)
    typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


@app.command("layout")
def cli_layout(
    ctx: typer.Context,
    subject_id: str = typer.Argument(..., help="Student id"),
    course: str = typer.Option(None, help="Only show this course"),
    width: float = typer.Option(None, help="Available grid width in pixels"),
) -> None:
    c: _Context = ctx.obj
    res = run_pipeline(c.root, subject_id, filter_course=course, width=width, locale=c.locale, write_outputs=False)
    if res.failure:
        _fail(res.failure)
    typer.echo(json.dumps([b.to_dict() for b in res.blocks], indent=2, ensure_ascii=False))


@app.command("export-csv")
def cli_export_csv(ctx: typer.Context, subject_id: str = typer.Argument(..., help="Student id")) -> None:
    c: _Context = ctx.obj
    res = run_pipeline(c.root, subject_id, locale=c.locale)
    if res.failure:
        _fail(res.failure)
    typer.echo(res.csv, nl=False)


@app.command("render-html")
def cli_render_html(
    ctx: typer.Context,
    subject_id: str = typer.Argument(..., help="Student id"),
    course: str = typer.Option(None, help="Only show this course"),
    week: str = typer.Option(None, help="Any date inside the week (YYYY-MM-DD)"),
    shift: int = typer.Option(0, help="Weeks before (negative) or after --week"),
) -> None:
    c: _Context = ctx.obj
    res = run_pipeline(c.root, subject_id, week=_target_week(week, shift), filter_course=course, locale=c.locale)
    if res.failure:
        _fail(res.failure)
    typer.echo(str(c.root / "outputs" / "ui" / "index.html"))


@app.command("validate")
def cli_validate(ctx: typer.Context, subject_id: str = typer.Argument(..., help="Student id")) -> None:
    c: _Context = ctx.obj
    res = run_pipeline(c.root, subject_id, locale=c.locale, write_outputs=False)
    if res.failure:
        _fail(res.failure)
    typer.echo(res.validation)


@app.command("children")
def cli_children(ctx: typer.Context, parent_id: str = typer.Argument(..., help="Parent id")) -> None:
    c: _Context = ctx.obj
    config = load_config(c.root, locale=c.locale)
    store = JsonScheduleStore(c.root, child_unknown=config.labels.child_unknown)
    typer.echo(json.dumps(asyncio.run(store.get_children(parent_id)), indent=2, ensure_ascii=False))


@app.command("marker")
def cli_marker(
    ctx: typer.Context,
    at: str = typer.Option(None, help="Wall-clock time HH:MM (default: now)"),
    scroll: bool = typer.Option(False, "--scroll", help="Print the auto-scroll offset instead"),
) -> None:
    c: _Context = ctx.obj
    now = datetime.now()
    if at:
        try:
            parsed = datetime.strptime(at, "%H:%M")
        except ValueError as exc:
            raise typer.BadParameter(f"Expected HH:MM, got {at!r}") from exc
        now = now.replace(hour=parsed.hour, minute=parsed.minute)
    grid = load_config(c.root, locale=c.locale).grid
    pos = scroll_offset_for(grid, now) if scroll else get_current_time_marker_position(grid, now)
    typer.echo("outside grid hours" if pos is None else f"{pos:.1f}")
