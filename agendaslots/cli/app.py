"""
Main CLI application using Typer.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import load_config
from ..domain.exceptions import NotFound, SlotError
from ..domain.models import ExtraSlot
from ..services.agenda import Agenda

app = typer.Typer(
    name="agendaslots",
    help="Publish appointment slots and look up bookable times",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show store activity.")] = False,
):
    """
    Slot availability for a service business.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@contextmanager
def _open_agenda(config_file: Optional[Path]) -> Iterator[Agenda]:
    """Load config, open the agenda and turn domain errors into exit code 1."""
    try:
        config = load_config(config_file)
        with Agenda.from_config(config) as agenda:
            yield agenda
    except FileNotFoundError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)
    except SlotError as e:
        console.print(f"[bold red]Erro:[/bold red] {e.user_message}")
        if e.detail:
            console.print(f"[dim]{e.detail}[/dim]")
        raise typer.Exit(1)


@app.command()
def show(
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
):
    """
    Show the admin agenda for a date, with origin and record ids.

    Expired records are purged first.
    """
    with _open_agenda(config_file) as agenda:
        agenda.manager.purge_expired()

        day = agenda.clock.date_string(date)
        slots = agenda.feed.resolve(day)

        console.print(f"\n[bold cyan]{agenda.clock.format_display(day)}[/bold cyan] ({day})\n")

        if not slots:
            console.print("[yellow]Nenhum horário oferecido nesta data.[/yellow]\n")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Horário", style="bold yellow")
        table.add_column("Origem")
        table.add_column("Registro", style="dim")

        for slot in slots:
            origin = "extra" if isinstance(slot, ExtraSlot) else "fixo"
            record = slot.source_id if isinstance(slot, ExtraSlot) else "-"
            table.add_row(slot.time, origin, record)

        console.print(table)
        console.print()


@app.command()
def available(
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
):
    """
    List the times a customer can book on a date.
    """
    with _open_agenda(config_file) as agenda:
        times = agenda.booking.available_times(date)

        if not times:
            console.print("[yellow]Nenhum horário disponível[/yellow]")
            return

        for time in times:
            console.print(f"  {time}")


@app.command()
def add(
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Time (HH:MM, 24h)")],
    config_file: ConfigOption = None,
):
    """
    Offer a time on a date (extra slot, or restore a suppressed one).
    """
    with _open_agenda(config_file) as agenda:
        record_id = agenda.manager.add_extra(date, time)
        console.print(f"[green]✓ {time} oferecido em {agenda.clock.date_string(date)}[/green] [dim]({record_id})[/dim]")


@app.command()
def suppress(
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Fixed time (HH:MM, 24h)")],
    config_file: ConfigOption = None,
):
    """
    Suspend a fixed time on one date.
    """
    with _open_agenda(config_file) as agenda:
        agenda.manager.suppress_fixed(date, time)
        console.print(f"[green]✓ {time} suspenso em {agenda.clock.date_string(date)}[/green]")


@app.command()
def remove(
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Offered time (HH:MM, 24h)")],
    config_file: ConfigOption = None,
):
    """
    Stop offering a time on a date, whatever its origin.
    """
    with _open_agenda(config_file) as agenda:
        day = agenda.clock.date_string(date)
        slot = next((s for s in agenda.feed.resolve(day) if s.time == time), None)
        if slot is None:
            raise NotFound(f"{time} is not offered on {day}")

        agenda.manager.withdraw(day, slot)
        console.print(f"[green]✓ {time} removido de {day}[/green]")


@app.command("remove-id")
def remove_id(
    record_id: Annotated[str, typer.Argument(help="Record id of an extra slot")],
    config_file: ConfigOption = None,
):
    """
    Delete an extra slot record by id.
    """
    with _open_agenda(config_file) as agenda:
        agenda.manager.remove_extra(record_id)
        console.print(f"[green]✓ Registro {record_id} removido[/green]")


@app.command()
def purge(config_file: ConfigOption = None):
    """
    Delete records for dates before today.
    """
    with _open_agenda(config_file) as agenda:
        report = agenda.manager.purge_expired()

        if not report.total:
            console.print("[green]✓ Nada a limpar.[/green]")
            return

        console.print(f"[green]✓ {len(report.deleted)} registro(s) expirado(s) removido(s)[/green]")
        if report.failed:
            console.print(f"[yellow]⚠ {len(report.failed)} registro(s) não puderam ser removidos[/yellow]")


@app.command()
def template(config_file: ConfigOption = None):
    """
    List the fixed times offered every day.
    """
    try:
        config = load_config(config_file)
    except (FileNotFoundError, SlotError) as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(
        title="Horários fixos",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Horário", style="bold yellow")

    for time in config.build_template().sorted_times():
        table.add_row(time)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]agendaslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
