"""Command-line interface for mapmarker."""

import argparse
import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path

from constants import MAPMARKER_VERSION, MAX_ZOOM, MIN_ZOOM
from geocoding import DisabledGeocoder, GeocodeError, Geocoder, GoogleGeocoder
from model import GeocodeResult, MapConfig, MapType, MarkerRecord, MarkerState
from records import (
    MAPMARKER_RECORDS_DIR,
    MarkerFile,
    RecordValidationError,
    resolve_record_path,
)
from settings import Settings, SettingsError, build_map_config, load_settings


@dataclass
class ParsedArgs:
    """Parsed command-line arguments."""

    record: str | None
    lat: str | None
    lng: str | None
    zoom: int | None
    address: str | None
    geocode_enabled: bool
    map_type: str | None
    api_key: str | None
    timeout: float | None
    offline: bool
    geocode: bool
    list_records: bool


def print_error_box(title: str, *lines: str) -> None:
    """Print a formatted error box to stderr.

    Args:
        title: The error title (will be prefixed with "Error: ")
        *lines: Additional lines to print in the box
    """
    print("=" * 60, file=sys.stderr)
    print(f"Error: {title}", file=sys.stderr)
    print("", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


class MapMarkerHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that shows our structured help."""

    def format_help(self) -> str:
        lines = [
            "Map Marker - place a map marker and geocode its address.",
            f"Version: {MAPMARKER_VERSION}",
            "",
            "Core:",
            "  mapmarker                             Open the marker editor",
            "  mapmarker --record <name>             Edit a saved record (saved on Done)",
            "",
            "Marker Options:",
            "  mapmarker --lat <X> --lng <Y>         Start with a position",
            "  mapmarker --zoom <Z>                  Start with a zoom level",
            "  mapmarker --address <TEXT>            Start with an address",
            "  mapmarker --no-geocode                Turn automatic geocoding off",
            "  mapmarker --map-type <T>              hybrid, roadmap, satellite or terrain",
            "",
            "Geocoding:",
            "  mapmarker --api-key <KEY>             Geocoding API key (or MAPMARKER_API_KEY)",
            "  mapmarker --timeout <SECONDS>         Give up on a lookup after this long",
            "  mapmarker --offline                   Never contact the geocoding service",
            "  mapmarker --geocode --address <TEXT>  Geocode once without the editor",
            "",
            "Records:",
            "  mapmarker --list-records              List saved records",
            "",
            "Examples:",
            "",
            "  # Geocode an address and save it as 'office'",
            "  mapmarker --geocode --address '1600 Amphitheatre Parkway' --record office",
            "",
            "  # Place a marker over London by hand",
            "  mapmarker --lat 51.5074 --lng -0.1278 --zoom 10 --no-geocode",
            "",
            f"Records are stored in {MAPMARKER_RECORDS_DIR}",
        ]
        return "\n".join(lines) + "\n"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for mapmarker CLI."""
    parser = argparse.ArgumentParser(
        prog="mapmarker",
        formatter_class=MapMarkerHelpFormatter,
        add_help=True,
    )

    parser.add_argument("--record", metavar="NAME", help=argparse.SUPPRESS)

    # Marker values
    parser.add_argument("--lat", metavar="X", help=argparse.SUPPRESS)
    parser.add_argument("--lng", metavar="Y", help=argparse.SUPPRESS)
    parser.add_argument("--zoom", metavar="Z", type=int, help=argparse.SUPPRESS)
    parser.add_argument("--address", metavar="TEXT", help=argparse.SUPPRESS)
    parser.add_argument("--no-geocode", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument(
        "--map-type", choices=[t.value for t in MapType], help=argparse.SUPPRESS
    )

    # Geocoding
    parser.add_argument("--api-key", metavar="KEY", help=argparse.SUPPRESS)
    parser.add_argument("--timeout", metavar="SECONDS", type=float, help=argparse.SUPPRESS)
    parser.add_argument("--offline", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("--geocode", action="store_true", help=argparse.SUPPRESS)

    # Records
    parser.add_argument("--list-records", action="store_true", help=argparse.SUPPRESS)

    return parser


def parse_args(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command line arguments.

    Returns:
        ParsedArgs with record, marker values and geocoding options.
    """
    parser = create_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if (args.lat is None) != (args.lng is None):
        parser.error("--lat and --lng must be given together")
    if args.zoom is not None and not MIN_ZOOM <= args.zoom <= MAX_ZOOM:
        parser.error(f"--zoom must be between {MIN_ZOOM} and {MAX_ZOOM}")
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")
    if args.geocode and not args.address and not args.record:
        parser.error("--geocode needs --address or --record")

    return ParsedArgs(
        record=args.record,
        lat=args.lat,
        lng=args.lng,
        zoom=args.zoom,
        address=args.address,
        geocode_enabled=not args.no_geocode,
        map_type=args.map_type,
        api_key=args.api_key,
        timeout=args.timeout,
        offline=args.offline,
        geocode=args.geocode,
        list_records=args.list_records,
    )


def list_records(directory: Path = MAPMARKER_RECORDS_DIR) -> None:
    """List saved marker records."""
    records = MarkerFile.list_records(directory)

    if not records:
        print("No records found")
        print(f"(records are stored in {directory})")
        return

    print("Records:")
    for marker_file in records:
        print(f"  {marker_file.name}")
    print(f"\nRecord directory: {directory}")


def load_record(path: Path) -> MarkerRecord:
    """Load a record file, printing warnings; a missing file starts a new record."""
    if not path.exists():
        return MarkerRecord()
    try:
        record, warnings = MarkerFile(path).load()
    except (RecordValidationError, OSError) as e:
        print(f"Error loading record: {e}", file=sys.stderr)
        sys.exit(1)
    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    return record


def apply_overrides(record: MarkerRecord, args: ParsedArgs) -> MarkerRecord:
    """Apply marker flags on top of a loaded (or new) record."""
    if args.lat is not None:
        record.lat = args.lat
        record.lng = args.lng
    if args.zoom is not None:
        record.zoom = args.zoom
    if args.address is not None:
        record.address = args.address
    if not args.geocode_enabled:
        record.geocode_enabled = False
    if args.map_type is not None:
        record.map_type = args.map_type
    return record


def resolve_settings(args: ParsedArgs) -> Settings:
    """Load settings and apply command-line overrides."""
    try:
        settings = load_settings()
    except SettingsError as e:
        print_error_box("Invalid settings", str(e))
        sys.exit(1)
    return settings.with_overrides(
        api_key=args.api_key,
        lookup_timeout=args.timeout,
        map_type=MapType.parse(args.map_type) if args.map_type else None,
        offline=args.offline or None,
    )


def build_geocoder(settings: Settings) -> Geocoder:
    if settings.offline:
        return DisabledGeocoder()
    return GoogleGeocoder(api_key=settings.api_key)


async def geocode_record(record: MarkerRecord, geocoder: Geocoder, config: MapConfig) -> MarkerRecord:
    """Geocode a record's address once, as a save-time lookup would.

    A failed lookup clears the coordinates; a disabled record only gets
    the DISABLED status.
    """
    state = MarkerState.from_record(record, config)
    if not state.geocode_enabled:
        state.disable_geocoding()
        return state.to_record()
    if not state.address.strip():
        return state.to_record()
    try:
        lookup = geocoder.forward(state.address)
        if config.lookup_timeout is None:
            result = await lookup
        else:
            result = await asyncio.wait_for(lookup, config.lookup_timeout)
    except (GeocodeError, asyncio.TimeoutError) as e:
        print(f"Warning: geocode failed: {e}", file=sys.stderr)
        result = GeocodeResult.failure("UNKNOWN")
    state.apply_geocode_result(result)
    return state.to_record()


def main() -> None:
    """Main entry point."""
    args = parse_args()

    if args.list_records:
        list_records()
        sys.exit(0)

    settings = resolve_settings(args)
    config = build_map_config(settings)
    geocoder = build_geocoder(settings)

    record_path = resolve_record_path(args.record) if args.record else None
    record = load_record(record_path) if record_path else MarkerRecord()
    record = apply_overrides(record, args)

    if args.geocode:
        record = asyncio.run(geocode_record(record, geocoder, config))
        print(record)
        if record_path:
            MarkerFile(record_path).save(record)
        sys.exit(0)

    from app import MapMarkerTUI

    app = MapMarkerTUI(
        geocoder,
        record=record,
        config=config,
        record_name=record_path.stem if record_path else "",
    )
    result = app.run()

    if result is None:
        print("Cancelled.")
        sys.exit(0)

    print(result)
    if record_path:
        MarkerFile(record_path).save(result)
        print(f"Saved record: {record_path}")


if __name__ == "__main__":
    main()
