"""Command-line interface for romcatalog."""

import sys
import signal
import logging
import argparse
import asyncio
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, BarColumn, TextColumn, MofNCompleteColumn
from rich.table import Table

from romcatalog import __version__
from romcatalog.catalog import (
    CatalogError,
    CatalogService,
    Navigation,
    SortMode,
    STATION_TEMPLATES,
    find_template,
)
from romcatalog.catalog.utils import format_size
from romcatalog.config.loader import load_config, ConfigError
from romcatalog.config.validator import validate_config, ValidationError
from romcatalog.preview import PreviewPipeline

logger = logging.getLogger(__name__)

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='romcatalog',
        description='ROM catalog with libretro-thumbnails previews',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Add a station from a console preset
  romcatalog stations add --template NES

  # Scan every station and browse the result sorted by name
  romcatalog browse --sort name_asc

  # Search one station
  romcatalog browse --station 0 --search zelda

  # Download previews for a station
  romcatalog previews fetch --station 0
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to config.yaml (default: ./config.yaml)'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    # stations
    stations = commands.add_parser('stations', help='Manage game stations')
    station_commands = stations.add_subparsers(dest='action', required=True)

    station_commands.add_parser('list', help='List configured stations')
    station_commands.add_parser('templates', help='List console presets')

    add = station_commands.add_parser('add', help='Add a station')
    add.add_argument('--template', metavar='SHORT', help='Console preset short name (e.g. NES)')
    add.add_argument('fields', nargs='*', metavar='FIELD',
                     help='NAME SHORT_NAME ROM_PATH CORE EXTENSIONS (when not using --template)')

    remove = station_commands.add_parser('remove', help='Remove a station and its ROMs')
    remove.add_argument('station_id', type=int, metavar='ID')

    # scan
    scan = commands.add_parser('scan', help='Scan ROM folders')
    scan.add_argument('--station', type=int, metavar='ID', help='Scan a single station')

    # browse
    browse = commands.add_parser('browse', help='Scan and list ROMs')
    browse.add_argument('--station', type=int, metavar='ID', help='Only show one station')
    browse.add_argument('--search', metavar='TEXT', help='Case-insensitive name filter')
    browse.add_argument('--sort', choices=[m.value for m in SortMode], help='Sort order')
    browse.add_argument('--page-size', type=int, default=16, metavar='N',
                        help='Visible rows (default: 16)')
    browse.add_argument('--select', type=int, default=0, metavar='N',
                        help='Move the selection down N rows before listing')

    # previews
    previews = commands.add_parser('previews', help='Manage preview artwork')
    preview_commands = previews.add_subparsers(dest='action', required=True)

    fetch = preview_commands.add_parser('fetch', help='Download previews for a station')
    fetch.add_argument('--station', type=int, required=True, metavar='ID')

    clear = preview_commands.add_parser('clear', help='Delete cached previews')
    clear.add_argument('--station', type=int, metavar='ID', help='Only clear one station')

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging', {})

    level_str = logging_config.get('level', 'INFO').upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except (OSError, PermissionError) as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True
    )

    # Quiet per-request and per-chunk debug output
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.INFO)


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for romcatalog CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config)
    service = CatalogService.from_config(config)

    try:
        if args.command == 'stations':
            return run_stations(service, args)
        if args.command == 'scan':
            return run_scan(service, args)
        if args.command == 'browse':
            return run_browse(service, args)
        if args.command == 'previews':
            return asyncio.run(run_previews(config, service, args))
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        service.cancel_scan()
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130

    return 1


def run_stations(service: CatalogService, args: argparse.Namespace) -> int:
    """Handle the 'stations' subcommands."""
    if args.action == 'list':
        table = Table(title="Stations")
        for column in ("ID", "Short", "Name", "ROM path", "Core", "Extensions"):
            table.add_column(column)
        for station in service.registry.stations():
            table.add_row(
                str(station.id), station.short_name, station.display_name,
                station.rom_path, station.core_path, station.extensions,
            )
        console.print(table)
        return 0

    if args.action == 'templates':
        table = Table(title="Console presets")
        for column in ("Short", "Name", "Default path", "Core", "Extensions"):
            table.add_column(column)
        for template in STATION_TEMPLATES:
            table.add_row(
                template.short_name, template.name, template.default_path,
                template.core_name, template.extensions,
            )
        console.print(table)
        return 0

    if args.action == 'add':
        if args.template:
            template = find_template(args.template)
            if template is None:
                print(f"Error: Unknown console preset: {args.template}", file=sys.stderr)
                return 1
            station_id = service.registry.add_from_template(template)
        elif len(args.fields) == 5:
            station_id = service.add_station(*args.fields)
        else:
            print("Error: expected --template or NAME SHORT_NAME ROM_PATH CORE EXTENSIONS",
                  file=sys.stderr)
            return 1
        console.print(f"Added station {station_id}")
        return 0

    if args.action == 'remove':
        # Load the catalog first so the ROM count reflects what is removed
        service.scan_all()
        removed = service.remove_station(args.station_id)
        console.print(f"Removed station {args.station_id} ({removed} ROMs)")
        return 0

    return 1


def run_scan(service: CatalogService, args: argparse.Namespace) -> int:
    """Handle the 'scan' command."""
    if args.station is not None:
        found = service.scan_station(args.station)
        console.print(f"Found {found} ROMs for {service.registry.station_name(args.station)}")
        return 0

    total = service.scan_all()
    table = Table(title=service.scanner.status())
    table.add_column("Station")
    table.add_column("ROMs", justify="right")
    for station in service.registry.stations():
        table.add_row(escape(f"[{station.short_name}] {station.display_name}"), str(station.rom_count))
    table.add_row("Total", str(total))
    console.print(table)
    return 0


def run_browse(service: CatalogService, args: argparse.Namespace) -> int:
    """Handle the 'browse' command."""
    if args.station is not None:
        service.scan_station(args.station)
    else:
        service.scan_all()

    view = service.browse(args.station)
    if args.search:
        view.set_search(args.search)
    if args.sort:
        service.sort(SortMode(args.sort))

    page_size = max(1, args.page_size)
    for _ in range(max(0, args.select)):
        view.navigate(Navigation.NEXT, page_size)

    rows = view.visible_rows(page_size)
    table = Table(title=f"{len(view)} ROMs")
    table.add_column("", width=1)
    table.add_column("Name")
    table.add_column("Size", justify="right")
    for row in rows:
        marker = "▲" if row.more_above else "▼" if row.more_below else ""
        label = escape(row.label)
        if row.selected:
            label = f"[reverse]{label}[/reverse]"
        table.add_row(marker, label, format_size(row.entry.size_bytes))
    console.print(table)

    selection = view.select()
    if selection:
        console.print(f"Selected: {escape(selection.label)} ({selection.path}) core={selection.core or '-'}")
    return 0


async def run_previews(config: dict, service: CatalogService, args: argparse.Namespace) -> int:
    """Handle the 'previews' subcommands."""
    pipeline = PreviewPipeline.from_config(config, service)
    try:
        if args.action == 'clear':
            if args.station is not None:
                pipeline.cache_clear_station(args.station)
            else:
                pipeline.cache_clear()
            console.print("Preview cache cleared")
            return 0

        if args.action == 'fetch':
            service.scan_station(args.station)
            loop = asyncio.get_running_loop()
            try:
                loop.add_signal_handler(signal.SIGINT, pipeline.batch_cancel)
            except (NotImplementedError, RuntimeError):
                logger.debug("Signal handlers unavailable; Ctrl-C will abort the batch")

            with Progress(
                TextColumn("{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                console=console,
            ) as progress:
                task = progress.add_task("Fetching previews", total=None)

                def on_progress(current: int, total: int, rom_name: str) -> None:
                    progress.update(task, completed=current, total=total, description=rom_name)

                downloaded = await pipeline.batch_fetch(args.station, on_progress)

            console.print(f"Downloaded {downloaded} previews")
            return 0
    finally:
        await pipeline.close()

    return 1
