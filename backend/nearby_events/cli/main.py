from __future__ import annotations

from typing import Optional

import typer

from nearby_events.config import DEFAULT_DISPLAY_TZ, DEFAULT_LOCALE, configure_logging
from nearby_events.domain.errors import EventsApiError
from nearby_events.domain.models import EventsResponse, Location, RequestContext
from nearby_events.domain.normalize import resolve_locale
from nearby_events.infra.database import engine_from_env
from nearby_events.services.events_lookup import build_events_service

app = typer.Typer(help="Look up community events near a location")

CLI_USER = "cli"


def _service(database_url: Optional[str], latitude: Optional[float], longitude: Optional[float]):
    service = build_events_service(engine_from_env(database_url))
    if latitude is not None and longitude is not None:
        service.locations.set(CLI_USER, Location(latitude=latitude, longitude=longitude))
    return service


def _echo_events(response: EventsResponse) -> None:
    location = response.location
    typer.echo(location.description or f"{location.latitude}, {location.longitude}")
    if not response.events:
        typer.echo("No upcoming events")
        return
    for event in response.events:
        typer.echo(f"{event.formatted_date}\t{event.formatted_time}\t{event.type}\t{event.title or ''}")


@app.command("lookup")
def cli_lookup(
    latitude: Optional[float] = typer.Option(None, help="Stored latitude"),
    longitude: Optional[float] = typer.Option(None, help="Stored longitude"),
    search: str = typer.Option("", help="City or place to search for"),
    timezone: str = typer.Option("", help="Timezone hint for the directory"),
    locale: str = typer.Option(DEFAULT_LOCALE, help="Locale for dates and the directory"),
    display_timezone: str = typer.Option(DEFAULT_DISPLAY_TZ, help="Timezone dates are shown in"),
    ip: Optional[str] = typer.Option(None, help="Client IP hint"),
    database_url: Optional[str] = typer.Option(None, help="Cache database (defaults to DATABASE_URL)"),
    log_level: Optional[str] = typer.Option(None, help="Logging level"),
):
    configure_logging(log_level)
    service = _service(database_url, latitude, longitude)
    context = RequestContext(
        user_id=CLI_USER,
        locale=str(resolve_locale(locale)),
        display_timezone=display_timezone,
        headers={"remote-addr": ip} if ip else {},
    )
    try:
        result = service.get_events(context, search=search, timezone=timezone)
    except EventsApiError as exc:
        typer.echo(f"Error: {exc.message} ({exc.request_url})", err=True)
        raise typer.Exit(code=1)
    _echo_events(result.response)


@app.command("cached")
def cli_cached(
    latitude: float = typer.Option(..., help="Latitude"),
    longitude: float = typer.Option(..., help="Longitude"),
    locale: str = typer.Option(DEFAULT_LOCALE, help="Locale for dates"),
    display_timezone: str = typer.Option(DEFAULT_DISPLAY_TZ, help="Timezone dates are shown in"),
    database_url: Optional[str] = typer.Option(None, help="Cache database (defaults to DATABASE_URL)"),
):
    service = _service(database_url, latitude, longitude)
    context = RequestContext(
        user_id=CLI_USER, locale=str(resolve_locale(locale)), display_timezone=display_timezone
    )
    cached = service.get_cached_events(context)
    if cached is None:
        typer.echo("Nothing cached for this location")
        raise typer.Exit(code=0)
    _echo_events(cached)


if __name__ == "__main__":
    app()
