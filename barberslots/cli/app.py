"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.json_store import JsonBookingStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import AvailabilityError
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="barberslots",
    help="Compute free appointment times for barbershop bookings",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
DurationOption = Annotated[
    Optional[int],
    typer.Option("--duration", "-d", help="Service duration in minutes"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log every availability decision."),
]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(config_file: Optional[Path]) -> tuple[AppConfig, AvailabilityService]:
    """Load the configuration and wire an availability service to the JSON store."""
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)

    if config.data_file is None:
        raise ValueError("No data_file configured; point it at a booking data JSON file.")

    store = JsonBookingStore(
        config.data_file,
        live_service_durations=config.booking.live_service_durations,
    )
    service = AvailabilityService(
        store,
        timezone=config.timezone,
        step_minutes=config.booking.slot_step_minutes,
        lookahead_days=config.booking.lookahead_days,
    )
    return config, service


def _parse_date(value: str, tz: str):
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).date()
    except Exception as e:
        console.print(f"[red]Could not parse date '{value}': {e}[/red]")
        raise typer.Exit(1)


def _parse_time(value: str, tz: str):
    try:
        return pendulum.from_format(value, "HH:mm", tz=tz).time()
    except Exception as e:
        console.print(f"[red]Could not parse time '{value}': {e}[/red]")
        raise typer.Exit(1)


@app.command()
def slots(
    barber: Annotated[str, typer.Argument(help="Barber id")],
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    duration: DurationOption = None,
    verbose: VerboseOption = False,
):
    """
    List the free start times of a barber on one day.

    Examples:

        barberslots slots tom 2024-11-25

        barberslots slots tom 2024-11-25 --duration 60
    """
    _setup_logging(verbose)
    try:
        config, service = _load(config_file)
        on_date = _parse_date(date, config.timezone)
        minutes = duration if duration is not None else config.booking.service_duration_minutes

        free = service.get_available_slots(barber, on_date, minutes)

        console.print()
        if not free:
            console.print(
                f"[yellow]⚠ No free times for {barber} on {on_date.isoformat()}.[/yellow]"
            )
        else:
            table = Table(
                title=f"Free times for {barber} on {on_date.isoformat()} ({minutes} min)",
                show_header=True,
                header_style="bold cyan"
            )
            table.add_column("Start", style="bold yellow")
            table.add_column("End", style="dim")

            for start in free:
                end = pendulum.datetime(
                    on_date.year, on_date.month, on_date.day,
                    start.hour, start.minute, tz=config.timezone,
                ).add(minutes=minutes)
                table.add_row(start.strftime("%H:%M"), end.format("HH:mm"))

            console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def check(
    barber: Annotated[str, typer.Argument(help="Barber id")],
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    config_file: ConfigOption = None,
    duration: DurationOption = None,
    exclude_booking: Annotated[
        Optional[str],
        typer.Option("--exclude-booking", help="Ignore this booking id (when moving an appointment)."),
    ] = None,
    verbose: VerboseOption = False,
):
    """
    Check whether one start time can be booked.
    """
    _setup_logging(verbose)
    try:
        config, service = _load(config_file)
        on_date = _parse_date(date, config.timezone)
        at_time = _parse_time(time, config.timezone)
        minutes = duration if duration is not None else config.booking.service_duration_minutes

        result = service.is_slot_bookable(
            barber, on_date, at_time, minutes, exclude_booking_id=exclude_booking
        )

        if result.bookable:
            console.print(f"\n[bold green]✓ {result.slot} is bookable for {barber}[/bold green]\n")
        else:
            detail = f" ({result.blocking_interval})" if result.blocking_interval else ""
            console.print(
                f"\n[bold red]✗ {result.slot} is not bookable:[/bold red] "
                f"{result.blocking_reason.value}{detail}\n"
            )
            raise typer.Exit(2)

    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def unavailable_days(
    barber: Annotated[str, typer.Argument(help="Barber id")],
    start: Annotated[Optional[str], typer.Option("--start", help="First date (YYYY-MM-DD). Defaults to today.")] = None,
    days: Annotated[Optional[int], typer.Option("--days", help="Number of days to check")] = None,
    config_file: ConfigOption = None,
    duration: DurationOption = None,
    verbose: VerboseOption = False,
):
    """
    List the dates in the look-ahead window without a single free time.
    """
    _setup_logging(verbose)
    try:
        config, service = _load(config_file)
        start_date = (
            _parse_date(start, config.timezone) if start else pendulum.today(config.timezone).date()
        )
        minutes = duration if duration is not None else config.booking.service_duration_minutes
        count = days if days is not None else config.booking.lookahead_days

        blocked = service.unavailable_days(barber, start_date, minutes, days=count)

        console.print()
        if not blocked:
            console.print(f"[green]✓ {barber} has free times on every one of the {count} day(s).[/green]")
        else:
            console.print(f"[bold]{len(blocked)} of {count} day(s) fully unavailable for {barber}:[/bold]\n")
            for day in blocked:
                console.print(f"  {day.strftime('%A, %d.%m.%Y')}")
        console.print()

    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]barberslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
