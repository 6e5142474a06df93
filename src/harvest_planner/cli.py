"""
Command-line interface for the application.

This module provides the main entry point for the CLI. Query commands print
JSON with camelCase field names.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import timedelta
from functools import partial
from pathlib import Path
from typing import Any

from harvest_planner import __version__
from harvest_planner.analysis.harvest_status import DISCOVERY_STATUSES
from harvest_planner.analysis.seasons import Season
from harvest_planner.config import Settings, get_settings
from harvest_planner.datasources.gdd import OpenMeteoAccumulationProvider
from harvest_planner.discovery import DiscoveryService, local_today
from harvest_planner.errors import NoPredictionsAvailable, PredictionError
from harvest_planner.flows.refresh import refresh_predictions
from harvest_planner.reference.catalog import default_catalog
from harvest_planner.reference.products import CATEGORY_DISPLAY_NAMES
from harvest_planner.schemas import DiscoveryFilters
from harvest_planner.store import DataStore, PredictionCache


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="harvest-planner",
        description="Harvest timing predictions for regional produce",
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
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    # 'discover' command - bucketed feed for a location
    discover_parser = subparsers.add_parser("discover", help="Show the discovery feed")
    discover_parser.add_argument("--lat", type=float, default=None, help="Caller latitude")
    discover_parser.add_argument("--lon", type=float, default=None, help="Caller longitude")
    discover_parser.add_argument(
        "--default-location",
        action="store_true",
        help="Use the configured HARVEST_LAT/HARVEST_LON when --lat/--lon are omitted",
    )
    discover_parser.add_argument(
        "--status",
        action="append",
        choices=[s.value for s in DISCOVERY_STATUSES],
        help="Only include this status (repeatable)",
    )
    discover_parser.add_argument(
        "--category",
        action="append",
        choices=sorted(CATEGORY_DISPLAY_NAMES),
        help="Only include this category (repeatable)",
    )
    discover_parser.add_argument(
        "--max-distance",
        type=float,
        default=None,
        help="Maximum distance in miles (needs --lat/--lon)",
    )
    discover_parser.add_argument(
        "--season",
        choices=[s.value for s in Season],
        default=None,
        help="Only include items harvested in this season",
    )

    # 'predict' command - one offering in detail
    predict_parser = subparsers.add_parser("predict", help="Predict a single offering")
    predict_parser.add_argument("offering_id", help="Offering id, e.g. honeycrisp_pacific_nw_yakima")

    # 'refresh' command - run the Prefect refresh flow
    refresh_parser = subparsers.add_parser("refresh", help="Rebuild the prediction snapshot")
    refresh_parser.add_argument(
        "--force",
        action="store_true",
        help="Refresh even if the snapshot is still fresh",
    )

    return parser


def build_service(settings: Settings) -> DiscoveryService:
    """Wire the discovery service from settings."""
    catalog = default_catalog()
    provider = OpenMeteoAccumulationProvider(
        catalog,
        window_days=settings.trailing_window_days,
        timeout=settings.weather_timeout_seconds,
        today=partial(local_today, settings.timezone),
    )
    cache = PredictionCache(
        ttl=timedelta(minutes=settings.cache_ttl_minutes),
        store=DataStore(Path(settings.data_dir)),
    )
    return DiscoveryService(
        catalog,
        provider,
        cache,
        approaching_days=settings.approaching_days,
        max_workers=settings.max_workers,
        timezone=settings.timezone,
    )


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    catalog = default_catalog()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Regions: {len(catalog.regions)}")
    print(f"Cultivars: {len(catalog.cultivars)}")
    print(f"Active offerings: {len(catalog.active_offerings())}")
    return 0


def cmd_discover(args: argparse.Namespace) -> int:
    """Handle the 'discover' command."""
    settings = get_settings()
    if (args.lat is None) != (args.lon is None):
        print("Error: --lat and --lon must be given together", file=sys.stderr)
        return 2

    filters = DiscoveryFilters(
        statuses=set(args.status) if args.status else None,
        categories=set(args.category) if args.category else None,
        max_distance_miles=args.max_distance,
        season=args.season,
    )
    lat, lon = args.lat, args.lon
    if lat is None and args.default_location:
        lat, lon = settings.lat, settings.lon

    service = build_service(settings)
    try:
        response = service.discover(lat, lon, filters)
    except NoPredictionsAvailable as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _print_json(response.model_dump(mode="json", by_alias=True))
    return 0


def cmd_predict(args: argparse.Namespace) -> int:
    """Handle the 'predict' command."""
    service = build_service(get_settings())
    try:
        item = service.predict(args.offering_id)
    except KeyError:
        print(f"Error: unknown offering {args.offering_id!r}", file=sys.stderr)
        return 1
    except PredictionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _print_json(item.model_dump(mode="json", by_alias=True))
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: run the refresh flow."""
    try:
        result = refresh_predictions(force=args.force)
    except NoPredictionsAvailable as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Done: {result}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    settings = get_settings()
    level = "DEBUG" if args.debug or settings.debug else settings.log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "discover": cmd_discover,
        "predict": cmd_predict,
        "refresh": cmd_refresh,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
