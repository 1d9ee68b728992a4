"""CLI commands for events and RSVP management."""

import asyncio

import typer

from src.config.database import upgrade_database
from src.events.dtos import EventCreate
from src.events.repository.read_models import SqlEventReadModel
from src.events.repository.write_models import SqlEventWriteModel

app = typer.Typer(help="CLI commands for events and RSVP management")


@app.command()
def migrate():
    """Upgrade the database schema to the latest migration."""
    asyncio.run(upgrade_database())
    typer.secho("Database is up to date", fg=typer.colors.GREEN)


@app.command()
def create_event(
    title: str = typer.Option(..., "--title", "-t", help="Event title"),
    date: str = typer.Option(..., "--date", "-d", help="Event date, YYYY-MM-DD"),
    start_time: str = typer.Option(..., "--start", "-s", help="Start time, HH:MM"),
    end_time: str = typer.Option(..., "--end", "-e", help="End time, HH:MM"),
    location: str = typer.Option(..., "--location", "-l", help="Where the event takes place"),
    price: float = typer.Option(0.0, "--price", "-p", help="Price in fiat; 0 for a free event"),
    description: str = typer.Option("", "--description", help="Event description"),
):
    """Create an event."""
    try:
        event_data = EventCreate(
            event_title=title,
            event_description=description,
            event_date=date,
            event_start_time=start_time,
            event_end_time=end_time,
            event_price=price,
            event_location=location,
        )
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    event = asyncio.run(SqlEventWriteModel().add_event(event_data))

    typer.secho("Event created!", fg=typer.colors.GREEN)
    typer.secho(f"  ID: {event.id}", fg=typer.colors.CYAN)
    typer.secho(f"  Title: {event.title}", fg=typer.colors.BLUE)
    typer.secho(f"  When: {event.date} {event.start_time}-{event.end_time}", fg=typer.colors.BLUE)
    if event.is_priced:
        typer.secho(f"  Price: {event.price:.2f}", fg=typer.colors.MAGENTA)


@app.command()
def list_events(
    limit: int = typer.Option(10, "--limit", "-n", help="How many events to show"),
):
    """Show the latest events."""
    events = asyncio.run(SqlEventReadModel().get_latest_events(limit=limit))

    if not events:
        typer.secho("No events yet", fg=typer.colors.YELLOW)
        return

    for event in events:
        price = f"{event.price:.2f}" if event.is_priced else "free"
        typer.secho(
            f"[{event.id}] {event.date} {event.start_time} {event.title} ({price})",
            fg=typer.colors.BLUE,
        )


@app.command()
def delete_event(
    event_id: int = typer.Argument(..., help="ID of the event to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete an event and all of its RSVPs."""

    async def _delete_event():
        event = await SqlEventReadModel().get_event(event_id)
        if event is None:
            raise ValueError(f"Event not found: {event_id}")
        await SqlEventWriteModel().delete_event(event_id)
        return event

    if not yes:
        typer.confirm(f"Delete event {event_id} and its RSVPs?", abort=True)

    try:
        event = asyncio.run(_delete_event())
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(f"Deleted event {event.id}: {event.title}", fg=typer.colors.GREEN)


@app.command()
def list_rsvps():
    """Show RSVPs grouped by event."""
    groups = asyncio.run(SqlEventReadModel().get_rsvps_by_event())

    if not groups:
        typer.secho("No events yet", fg=typer.colors.YELLOW)
        return

    for group in groups:
        typer.secho(f"{group.title} - {group.date}", fg=typer.colors.GREEN)
        if not group.rsvps:
            typer.secho("  No RSVPs yet", fg=typer.colors.YELLOW)
        for rsvp in group.rsvps:
            typer.secho(f"  - {rsvp.name} ({rsvp.email})", fg=typer.colors.BLUE)


if __name__ == "__main__":
    app()
