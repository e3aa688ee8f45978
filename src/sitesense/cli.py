"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import logging
import sys
from datetime import timedelta
from pathlib import Path

from sitesense import __version__
from sitesense.analysis.daily_forecast import aggregate
from sitesense.config import get_settings
from sitesense.datasources.weather import WeatherFetchError, fetch_forecast
from sitesense.flows.build import build_all
from sitesense.flows.fetch import fetch_all
from sitesense.preview import WeatherPreviewCache
from sitesense.renderers.weather_utils import display_value
from sitesense.samples.lab_results import format_percent_by_weight
from sitesense.samples.quantity import parse_quantity, quantity_to_text
from sitesense.store import DataStore


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        msg = f"must be >= 0, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return value


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="sitesense",
        description="Field weather and sample-entry helpers for site inspections",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    forecast_parser = subparsers.add_parser("forecast", help="Print the 7-day forecast")
    forecast_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    forecast_parser.add_argument("--lon", type=float, default=None, help="Longitude")

    preview_parser = subparsers.add_parser("preview", help="Show the header weather preview")
    preview_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    preview_parser.add_argument("--lon", type=float, default=None, help="Longitude")
    preview_parser.add_argument(
        "--refresh", action="store_true", help="Ignore the cached preview and fetch now"
    )

    quantity_parser = subparsers.add_parser("quantity", help="Normalize a quantity string")
    quantity_parser.add_argument("text", help='Quantity as typed, e.g. "500 sq ft"')

    lead_parser = subparsers.add_parser("lead", help="Convert a mg/kg result to %% by weight")
    lead_parser.add_argument("result", help="Lab result in mg/kg")
    lead_parser.add_argument(
        "--places", type=_non_negative_int, default=4, help="Decimal places"
    )

    subparsers.add_parser("refresh", help="Fetch weather and build site")

    serve_parser = subparsers.add_parser("serve", help="Serve site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Site: ({settings.lat}, {settings.lon})")
    return 0


def cmd_forecast(args: argparse.Namespace) -> int:
    """Handle the 'forecast' command: fetch, aggregate and print a daily table."""
    settings = get_settings()
    lat = args.lat if args.lat is not None else settings.lat
    lon = args.lon if args.lon is not None else settings.lon

    try:
        entries = fetch_forecast(lat, lon)
    except WeatherFetchError as e:
        print(f"Forecast unavailable: {e.detail}", file=sys.stderr)
        return 1

    days = aggregate(entries)
    if not days:
        print("Forecast unavailable.")
        return 0

    print(f"{'Day':<5} {'High':>5} {'Low':>5} {'Precip':>7}  Conditions")
    for day in days:
        print(
            f"{day.day_label:<5} {display_value(day.high_temperature):>5} "
            f"{display_value(day.low_temperature):>5} "
            f"{display_value(day.precipitation_percent) + '%':>7}  {day.condition_label}"
        )
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    """Handle the 'preview' command.

    Coordinates come from --lat/--lon, else the last-known coordinates,
    else an IP geolocation lookup.
    """
    settings = get_settings()
    cache = WeatherPreviewCache(
        DataStore(Path(settings.data_dir)),
        refresh_interval=timedelta(minutes=settings.preview_refresh_minutes),
    )
    if args.refresh:
        cache.invalidate()

    preview = cache.get(args.lat, args.lon)
    if preview is None:
        print("Weather unavailable", file=sys.stderr)
        return 1

    print(f"{preview.conditions} {display_value(preview.high)}° / {display_value(preview.low)}°")
    print(f"Location: {preview.coords.label()}")
    print(f"Updated: {preview.fetched_at.astimezone():%Y-%m-%d %H:%M}")
    return 0


def cmd_quantity(args: argparse.Namespace) -> int:
    """Handle the 'quantity' command."""
    quantity = parse_quantity(args.text)
    print(f"Value: {quantity.value}")
    print(f"Unit: {quantity.unit}")
    if quantity.other_unit_label:
        print(f"Other unit: {quantity.other_unit_label}")
    print(f"Formatted: {quantity_to_text(quantity) or ''}")
    return 0


def cmd_lead(args: argparse.Namespace) -> int:
    """Handle the 'lead' command."""
    percent = format_percent_by_weight(args.result, places=args.places)
    if not percent:
        print(f"Error: not a number: {args.result!r}", file=sys.stderr)
        return 1
    print(f"{percent}% by weight")
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fetch weather then build site."""
    settings = get_settings()
    print(f"Fetching weather for ({settings.lat}, {settings.lon})...")
    fetch_all(lat=settings.lat, lon=settings.lon)

    print("Building site...")
    build_all()

    print("Done.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = Path(settings.data_dir) / "derived" / "site"

    if not site_dir.exists():
        print("No site directory found. Run 'sitesense refresh' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "debug", False) else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "forecast": cmd_forecast,
        "preview": cmd_preview,
        "quantity": cmd_quantity,
        "lead": cmd_lead,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
