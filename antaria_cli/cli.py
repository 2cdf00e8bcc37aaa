"""
Antaria CLI - Main entry point.

Provides a command-line interface for inspecting saved regions and for
replaying recorded input-event scripts through an editing session.
"""

import argparse
import dataclasses
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from antaria_session import EditingSession, StoreConfig, TracerConfig
from antaria_trace import GeoPoint, Region

DEFAULT_STORE_DIR = "./data/regions"

POINT_EVENTS = {"tap", "drag_begin", "drag_changed", "drag_end"}


def load_trace_script(script_path: str) -> List[Tuple[str, Optional[GeoPoint]]]:
    """
    Load an input-event script.

    Example YAML:
        events:
          - start
          - {event: tap, lat: 35.6812, lon: 139.7671}
          - {event: drag_begin, lat: 35.6813, lon: 139.7671}
          - {event: drag_changed, lat: 35.6815, lon: 139.7672}
          - {event: drag_end, lat: 35.6815, lon: 139.7675}
          - undo
          - save

    Returns:
        List of (event name, point or None)

    Raises:
        FileNotFoundError: If script file doesn't exist
        ValueError: If YAML or an event entry is invalid
    """
    path = Path(script_path)

    if not path.exists():
        raise FileNotFoundError(f"Script file not found: {script_path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {script_path}: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("events"), list):
        raise ValueError(f"Script {script_path} must contain an 'events' list")

    events = []
    for index, entry in enumerate(data["events"]):
        events.append(_parse_event(entry, index))
    return events


def _parse_event(entry: Any, index: int) -> Tuple[str, Optional[GeoPoint]]:
    """Parse one script entry: a bare name or a mapping with lat/lon."""
    if isinstance(entry, str):
        name, fields = entry, {}
    elif isinstance(entry, dict) and "event" in entry:
        name, fields = str(entry["event"]), entry
    else:
        raise ValueError(f"Event #{index}: expected a name or a mapping with 'event'")

    if name not in POINT_EVENTS:
        return name, None

    try:
        point = GeoPoint(latitude=fields["lat"], longitude=fields["lon"])
    except KeyError as e:
        raise ValueError(f"Event #{index} ({name}): missing {e}")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Event #{index} ({name}): {e}")
    return name, point


def build_config(config_path: Optional[str], store_dir: Optional[str]) -> TracerConfig:
    """
    Resolve the session configuration.

    --store-dir always wins over the store section of --config.
    Without either, regions live in ./data/regions.
    """
    if config_path:
        config = TracerConfig.from_yaml(config_path)
    else:
        config = TracerConfig(store=StoreConfig(backend="directory", path=Path(DEFAULT_STORE_DIR)))

    if store_dir:
        config = dataclasses.replace(
            config, store=StoreConfig(backend="directory", path=Path(store_dir))
        )
    return config


def format_region(region: Region) -> str:
    """One-line summary of a region."""
    return (
        f"{region.id}  {region.created_at.isoformat(timespec='seconds')}  "
        f"{region.vertex_count:>4} points  {region.perimeter_m:>10.1f} m"
    )


def _find_region(session: EditingSession, region_id: str) -> Region:
    try:
        wanted = uuid.UUID(region_id)
    except ValueError:
        raise ValueError(f"Invalid region id: {region_id}")

    for region in session.saved_regions:
        if region.id == wanted:
            return region
    raise LookupError(f"Region not found: {region_id}")


def cmd_list(session: EditingSession, args) -> None:
    regions = session.reload()
    if not regions:
        print("No saved regions")
        return
    for region in regions:
        print(format_region(region))


def cmd_show(session: EditingSession, args) -> None:
    session.reload()
    region = _find_region(session, args.region_id)
    print(format_region(region))
    for index, point in enumerate(region.points):
        print(f"  {index:>4}  {point.latitude!r:>22}  {point.longitude!r:>22}")


def cmd_delete(session: EditingSession, args) -> None:
    session.reload()
    region = _find_region(session, args.region_id)
    session.delete_region(region.id)
    print(f"Deleted {region.id}")


def cmd_delete_all(session: EditingSession, args) -> None:
    regions = session.reload()
    if not args.yes:
        answer = input(
            f"Delete all {len(regions)} saved regions? This cannot be undone. [y/N] "
        )
        if answer.strip().lower() not in ("y", "yes"):
            print("Cancelled")
            return
    session.delete_all()
    print(f"Deleted {len(regions)} regions")


def cmd_trace(session: EditingSession, args) -> None:
    events = load_trace_script(args.script)
    session.reload()
    session.start_editing()

    saved = []
    for name, point in events:
        result = session.dispatch(name, point)
        if isinstance(result, Region):
            saved.append(result)
            print(f"Saved {format_region(result)}")

    if not saved:
        print(
            f"No region saved ({len(session.builder)} points in trace, "
            f"shape: {session.current_shape.value})"
        )


COMMANDS: Dict[str, Any] = {
    "list": cmd_list,
    "show": cmd_show,
    "delete": cmd_delete,
    "delete-all": cmd_delete_all,
    "trace": cmd_trace,
}


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Antaria CLI - Inspect saved regions and replay trace scripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List saved regions (newest first)
  antaria list

  # Show the vertices of one region
  antaria show 0b0f3c9e-5d7a-4c55-9a57-2f6f0b3d1c42

  # Replay an input-event script and save the traced region
  antaria trace config/traces/tokyo_station.yaml

  # Delete regions
  antaria delete 0b0f3c9e-5d7a-4c55-9a57-2f6f0b3d1c42
  antaria delete-all --yes

  # Use a config file / another store directory
  antaria --config config/antaria.yaml list
  antaria --store-dir /tmp/regions list
"""
    )

    # Global arguments
    parser.add_argument(
        "--config",
        default=None,
        help="Path to session config YAML"
    )
    parser.add_argument(
        "--store-dir",
        default=None,
        help=f"Region store directory (default: {DEFAULT_STORE_DIR})"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print progress logs to stderr"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('list', help='List saved regions')

    show = subparsers.add_parser('show', help='Show the vertices of a region')
    show.add_argument('region_id', help='Region ID')

    delete = subparsers.add_parser('delete', help='Delete a region by ID')
    delete.add_argument('region_id', help='Region ID to delete')

    delete_all = subparsers.add_parser('delete-all', help='Delete every saved region')
    delete_all.add_argument('--yes', action='store_true', help='Skip the confirmation prompt')

    trace = subparsers.add_parser('trace', help='Replay an input-event script from YAML')
    trace.add_argument('script', help='Path to event script YAML')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = build_config(args.config, args.store_dir)
        if not args.verbose:
            config = dataclasses.replace(config, log_level="ERROR")
        logging.basicConfig(level=config.logging_level, stream=sys.stderr)

        session = EditingSession.from_config(config)
        COMMANDS[args.command](session, args)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
