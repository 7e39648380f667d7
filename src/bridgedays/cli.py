"""Typer CLI for the vacation planner."""

from __future__ import annotations

import datetime
import json
import pathlib
import sys
from collections.abc import Mapping

import typer
from loguru import logger

from bridgedays.dates import DEFAULT_WORKDAYS
from bridgedays.formatting import format_calendar_view, format_plan
from bridgedays.holidays import PRESETS, REGIONS, get_holidays, preset_provider
from bridgedays.models import Holiday, MandatoryDay
from bridgedays.planner import VacationPlanner
from bridgedays.serialization import plan_to_dict
from bridgedays.settings import settings_from_mapping

app = typer.Typer(
    name="bridgedays",
    help="Vacation planner: spend a limited vacation budget on the workdays "
    "that bridge weekends and holidays into the longest breaks.",
    add_completion=False,
)

WEEKDAY_HELP = "0=Sun, 1=Mon, ..., 6=Sat"


def _parse_date(value: str) -> datetime.date:
    """Parse a YYYY-MM-DD date string."""
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date format {value!r}. Use YYYY-MM-DD.") from None


def _parse_weekdays(value: str | list[int]) -> frozenset[int]:
    """Parse ``"1,2,3"`` (or a list of ints) into a weekday set."""
    if isinstance(value, list):
        items = [str(v) for v in value]
    else:
        items = [v.strip() for v in value.split(",") if v.strip()]
    days: set[int] = set()
    for item in items:
        if not item.isdigit() or int(item) > 6:
            raise typer.BadParameter(f"Invalid weekday {item!r}. Use {WEEKDAY_HELP}.")
        days.add(int(item))
    return frozenset(days)


def _parse_mandatory(value: str | Mapping[str, object]) -> MandatoryDay:
    """Parse ``DATE`` or ``DATE:DURATION`` (or a config object)."""
    if isinstance(value, Mapping):
        raw_date = str(value["date"])
        raw_duration = str(value.get("duration", 1.0))
    else:
        raw_date, _, raw_duration = value.partition(":")
        raw_duration = raw_duration or "1"
    try:
        duration = float(raw_duration)
    except ValueError:
        raise typer.BadParameter(f"Invalid duration {raw_duration!r}. Use 0.5 or 1.") from None
    if duration not in (0.5, 1.0):
        raise typer.BadParameter(f"Invalid duration {raw_duration!r}. Use 0.5 or 1.")
    return MandatoryDay(_parse_date(raw_date[:10]), duration)


def _parse_holiday(value: str | Mapping[str, object]) -> Holiday:
    """Parse ``DATE`` or ``DATE=Name`` (or a config object)."""
    if isinstance(value, Mapping):
        return Holiday(_parse_date(str(value["date"])[:10]), str(value.get("name", "Holiday")))
    raw_date, _, name = value.partition("=")
    return Holiday(_parse_date(raw_date), name or "Holiday")


def _current_year() -> int:
    return datetime.date.today().year


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.enable("bridgedays")
    logger.add(
        lambda message: typer.echo(message, err=True, nl=False),
        level="DEBUG" if verbose else "WARNING",
        format="{level}: {message} {extra}",
    )


def _load_config(path: str) -> dict[str, object]:
    """Load a JSON config file."""
    p = pathlib.Path(path)
    if not p.exists():
        typer.echo(f"Error: Config file not found: {path}", err=True)
        raise typer.Exit(code=1)

    try:
        data = json.loads(p.read_text())
    except json.JSONDecodeError as exc:
        typer.echo(f"Error: Invalid JSON in config file: {exc}", err=True)
        raise typer.Exit(code=1) from None

    if not isinstance(data, dict):
        typer.echo("Error: Config file must contain a JSON object.", err=True)
        raise typer.Exit(code=1)

    return data


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def plan(
    budget: float = typer.Option(
        None,
        "--budget",
        "-b",
        help="Vacation days available for the year (steps of 0.5).",
        min=0,
    ),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Target year. Defaults to the current year.",
    ),
    country: str | None = typer.Option(
        None,
        "--country",
        "-c",
        help=f"Holiday preset ({', '.join(sorted(PRESETS))}). Use 'none' to skip. Default: us.",
    ),
    region: str | None = typer.Option(
        None,
        "--region",
        "-r",
        help="Region within the preset, e.g. a German state such as 'bavaria'.",
    ),
    holiday: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--holiday",
        "-H",
        help="Additional holiday, DATE or DATE=Name. Repeatable.",
    ),
    workdays: str | None = typer.Option(
        None,
        "--workdays",
        "-w",
        help=f"Comma separated workdays ({WEEKDAY_HELP}). Default: 1,2,3,4,5.",
    ),
    remote: str | None = typer.Option(
        None,
        "--remote",
        help="Comma separated remote workdays, a subset of --workdays.",
    ),
    company: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--company",
        help="Company-mandated day off, DATE or DATE:DURATION. Repeatable.",
    ),
    mandatory: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--mandatory",
        "-m",
        help="Personal fixed day off, DATE or DATE:DURATION. Repeatable.",
    ),
    start: str | None = typer.Option(
        None,
        "--start",
        help="First day to plan from (YYYY-MM-DD). Defaults to today for the current year.",
    ),
    weight_efficiency: float | None = typer.Option(
        None, "--weight-efficiency", help="Weight of days off per vacation day."
    ),
    weight_gap: float | None = typer.Option(
        None, "--weight-gap", help="Weight of short gaps (1 / vacation days)."
    ),
    weight_length: float | None = typer.Option(
        None, "--weight-length", help="Weight of the total break length."
    ),
    weight_early_month: float | None = typer.Option(
        None, "--weight-early-month", help="Penalty weight for later months."
    ),
    calendar: bool = typer.Option(
        True,
        "--calendar/--no-calendar",
        help="Show month-by-month calendar view.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output the plan as JSON.",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to a JSON config file. Command line options take precedence.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log candidate generation and selection decisions.",
    ),
) -> None:
    """Recommend the vacation days that yield the longest breaks."""
    _configure_logging(verbose)
    data: dict[str, object] = _load_config(config) if config is not None else {}

    if budget is None:
        raw_budget = data.get("budget")
        if raw_budget is None:
            typer.echo("Error: --budget is required (or set 'budget' in --config).", err=True)
            raise typer.Exit(code=1)
        budget = float(raw_budget)  # type: ignore[arg-type]

    resolved_year = year if year is not None else int(data.get("year", _current_year()))  # type: ignore[call-overload]

    # Calendar
    workday_set = (
        _parse_weekdays(workdays if workdays is not None else data["workdays"])  # type: ignore[arg-type]
        if workdays is not None or "workdays" in data
        else DEFAULT_WORKDAYS
    )
    remote_raw = remote if remote is not None else data.get("remote_workdays", "")
    remote_set = _parse_weekdays(remote_raw)  # type: ignore[arg-type]
    if not remote_set <= workday_set:
        typer.echo("Error: Remote workdays must be a subset of the workdays.", err=True)
        raise typer.Exit(code=1)

    # Holidays
    preset = country if country is not None else str(data.get("country", "us"))
    preset_region = region if region is not None else data.get("region")
    holidays: list[Holiday] = []
    provider = None
    if preset and preset != "none":
        try:
            holidays.extend(get_holidays(preset, resolved_year, preset_region))  # type: ignore[arg-type]
        except KeyError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from None
        provider = preset_provider(preset, preset_region)  # type: ignore[arg-type]

    extra_holidays = holiday or data.get("holidays", [])
    holidays.extend(_parse_holiday(h) for h in extra_holidays)  # type: ignore[union-attr]

    # Mandatory days
    company_days = [_parse_mandatory(v) for v in (company or data.get("company_days", []))]  # type: ignore[union-attr]
    user_days = [_parse_mandatory(v) for v in (mandatory or data.get("user_days", []))]  # type: ignore[union-attr]

    # Start of planning
    raw_start = start if start is not None else data.get("start")
    if raw_start is not None:
        start_date: datetime.date | None = _parse_date(str(raw_start))
    elif resolved_year == _current_year():
        start_date = datetime.date.today()
    else:
        start_date = None

    # Settings
    try:
        settings = settings_from_mapping(data)
    except (TypeError, ValueError) as exc:
        typer.echo(f"Error: Invalid settings in config file: {exc}", err=True)
        raise typer.Exit(code=1) from None
    weight_overrides = {
        name: value
        for name, value in (
            ("efficiency", weight_efficiency),
            ("gap", weight_gap),
            ("length", weight_length),
            ("early_month", weight_early_month),
        )
        if value is not None
    }
    if weight_overrides:
        settings = settings._replace(weights=settings.weights._replace(**weight_overrides))

    planner = VacationPlanner(
        budget,
        resolved_year,
        holidays,
        workday_set,
        remote_set,
        company_days,
        user_days,
        optimization_start_date=start_date,
        holiday_provider=provider,
        settings=settings,
    )
    result = planner.plan()

    if output_json:
        json.dump(plan_to_dict(result), sys.stdout, indent=2)
        typer.echo()
        return

    typer.echo(format_plan(result))
    if calendar:
        typer.echo(format_calendar_view(result))


@app.command()
def holidays(
    country: str = typer.Option(
        "us",
        "--country",
        "-c",
        help=f"Country preset ({', '.join(sorted(PRESETS))}).",
    ),
    region: str | None = typer.Option(
        None,
        "--region",
        "-r",
        help=f"German state ({', '.join(sorted(REGIONS))}).",
    ),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Year to list holidays for. Defaults to the current year.",
    ),
) -> None:
    """List holidays for a country preset."""
    resolved_year = year if year is not None else _current_year()

    try:
        preset = get_holidays(country, resolved_year, region)
    except KeyError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    label = PRESETS[country]
    if region is not None and region in REGIONS:
        label += f" ({REGIONS[region]})"
    typer.echo(f"  {label} - {resolved_year}")
    typer.echo()
    for h in preset:
        typer.echo(f"    {h.date.strftime('%a, %b %d'):>12}  {h.name}")


def main() -> None:
    """Entry point for the CLI."""
    app()
