"""CLI entry point for the globe tour engine."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer

from globe_tour import TourEngine, __version__
from globe_tour.core.errors import ProviderError
from globe_tour.core.interfaces import LocationProvider
from globe_tour.modules.event_bus import TourEventBus
from globe_tour.modules.labels import LabelCollisionResolver, build_labels
from globe_tour.modules.providers import (
    HttpLocationProvider,
    JsonFileLocationProvider,
    StaticLocationProvider,
)
from globe_tour.modules.stubs import ManualScheduler, RecordingRenderSink
from globe_tour.modules.viewport import ViewportMonitor
from globe_tour.sample_data import example_dataset
from globe_tour.schemas import TourConfig, TourEvent, TourEventType
from globe_tour.utils.config import (
    DEFAULT_AUTOPLAY_INTERVAL_MS,
    DEFAULT_LABEL_CELL_SIZE_DEG,
    DEFAULT_RESUME_DELAY_MS,
)
from globe_tour.utils.profiles import list_profiles

app = typer.Typer(
    name="globe-tour",
    help="Simulate and inspect globe location tours",
    add_completion=False,
)

# Events worth a console line during a simulated run
_RUN_EVENTS = {
    TourEventType.arrival,
    TourEventType.location_changed,
    TourEventType.arc_cleared,
    TourEventType.autoplay_state,
    TourEventType.sink_recreated,
    TourEventType.render_fallback,
    TourEventType.data_load_failed,
}


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def make_provider(data: Optional[Path], url: Optional[str]) -> LocationProvider:
    """Pick a provider from the CLI options (example data by default)."""
    if data is not None and url is not None:
        raise typer.BadParameter("Use either --data or --url, not both")
    if data is not None:
        return JsonFileLocationProvider(data)
    if url is not None:
        return HttpLocationProvider(url)
    dataset = example_dataset()
    return StaticLocationProvider(dataset.locations, dataset.points)


def format_event(event: TourEvent, names: dict[str, str]) -> str:
    """Format a single-line event summary for console output."""
    payload: dict[str, Any] = event.payload
    stamp = f"[t={event.clock_ms:>8.0f}ms]"
    kind = event.event_type

    if kind is TourEventType.arrival:
        detail = f"arrived at {names.get(payload['location'], payload['location'])}"
    elif kind is TourEventType.location_changed:
        origin = names.get(payload["from"], payload["from"])
        target = names.get(payload["to"], payload["to"])
        detail = f"{origin} -> {target} (index {payload['index']})"
    elif kind is TourEventType.arc_cleared:
        detail = f"arc #{payload['arc_id']} cleared after {payload['lifetime_ms']:.0f}ms"
    elif kind is TourEventType.autoplay_state:
        detail = f"autoplay {payload['state']}"
    else:
        detail = ", ".join(f"{k}={v}" for k, v in payload.items())
    return f"{stamp} {kind.value:18s} {detail}"


@app.command()
def run(
    duration_ms: int = typer.Option(
        40000,
        "--duration",
        "-d",
        help="Simulated milliseconds to run",
    ),
    interval_ms: int = typer.Option(
        DEFAULT_AUTOPLAY_INTERVAL_MS,
        "--interval",
        "-i",
        help="Autoplay interval in milliseconds",
    ),
    resume_delay_ms: int = typer.Option(
        DEFAULT_RESUME_DELAY_MS,
        "--resume-delay",
        help="Delay before autoplay resumes after an interaction (0 = never)",
    ),
    interact_at: Optional[List[int]] = typer.Option(
        None,
        "--interact-at",
        help="Simulated times (ms) of user interactions; repeatable",
    ),
    width: int = typer.Option(
        1920,
        "--width",
        help="Viewport width in pixels (selects the display profile)",
    ),
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        help="JSON file with 'locations' and 'ports'",
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        help="Base URL serving /locations and /ports",
    ),
    events_out: Optional[Path] = typer.Option(
        None,
        "--events-out",
        help="Write the recorded events to this JSON file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Run a tour on a virtual clock and print what the globe would show."""
    setup_logging(verbose)

    try:
        config = TourConfig().with_autoplay(
            interval_ms=interval_ms,
            resume_delay_ms=resume_delay_ms or None,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    scheduler = ManualScheduler()
    bus = TourEventBus()
    viewport = ViewportMonitor(width=width)
    engine = TourEngine(
        sink_factory=lambda profile: RecordingRenderSink(),
        provider=make_provider(data, url),
        scheduler=scheduler,
        config=config,
        viewport=viewport,
        event_bus=bus,
    )

    def echo_event(event: TourEvent) -> None:
        if event.event_type in _RUN_EVENTS:
            names = {loc.id: loc.name for loc in engine.dataset.locations}
            typer.echo(format_event(event, names))

    bus.subscribe(echo_event)

    typer.echo(f"Globe Tour v{__version__}")
    typer.echo(f"Profile: {viewport.breakpoint}, interval: {interval_ms}ms, "
               f"resume delay: {resume_delay_ms}ms")
    typer.echo("-" * 60)

    engine.mount()
    if len(engine.navigation) == 0:
        typer.echo("No locations to tour.")

    for t in sorted(t for t in interact_at or [] if 0 <= t <= duration_ms):
        scheduler.advance_to(t)
        typer.echo(f"[t={t:>8.0f}ms] {'interaction':18s} user touched the globe")
        engine.handle_interaction()
    scheduler.advance_to(duration_ms)

    snapshot = engine.snapshot()
    engine.destroy()

    typer.echo("-" * 60)
    typer.echo(f"Finished at {snapshot['clock_ms']:.0f}ms on {snapshot['active']}")
    typer.echo(f"Autoplay advances: {engine.autoplay.tick_count}")
    typer.echo(f"Transitions: {len(bus.get_events_by_type(TourEventType.location_changed))}")
    typer.echo(f"Events emitted: {bus.event_count}")

    if events_out is not None:
        with open(events_out, "w", encoding="utf-8") as f:
            json.dump(bus.snapshot(), f, indent=2)
        typer.echo(f"Events written to {events_out}")


@app.command()
def labels(
    location: str = typer.Argument(..., help="Location name"),
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        help="JSON file with 'locations' and 'ports'",
    ),
    cell_size: float = typer.Option(
        DEFAULT_LABEL_CELL_SIZE_DEG,
        "--cell-size",
        help="Collision grid cell size in degrees",
    ),
) -> None:
    """Show label placement for one location's points of interest."""
    try:
        dataset = make_provider(data, None).load()
    except ProviderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    match = next((loc for loc in dataset.locations if loc.name == location), None)
    if match is None:
        available = ", ".join(loc.name for loc in dataset.locations)
        typer.echo(f"Unknown location: {location}. Available: {available}", err=True)
        raise typer.Exit(1)

    config = TourConfig()
    candidates = build_labels(match, dataset.points, config.labels.size, config.labels.dot_radius)
    resolver = LabelCollisionResolver(cell_size_deg=cell_size)
    placed = resolver.resolve(candidates)

    typer.echo(f"{match.name} ({match.lat:.4f}, {match.lng:.4f}): {len(placed)} labels\n")
    for label in placed:
        typer.echo(
            f"  {label.text:30s} {label.orientation.value:6s} "
            f"({label.lat:.4f}, {label.lng:.4f})"
        )


@app.command()
def profiles() -> None:
    """List display profiles."""
    typer.echo("Available profiles:\n")
    for name, desc in list_profiles():
        typer.echo(f"  {name:15s} - {desc}")


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"globe-tour v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
