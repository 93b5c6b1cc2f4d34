"""Recursive ROM directory scanner."""

import logging
import os
import threading
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from romcatalog.catalog.errors import CapacityExceededError, StationNotFoundError
from romcatalog.catalog.models import PreviewState, RomEntry, Station
from romcatalog.catalog.registry import StationRegistry
from romcatalog.catalog.store import CatalogStore
from romcatalog.catalog.utils import derive_display_name, match_extension

logger = logging.getLogger(__name__)

MAX_SCAN_DEPTH = 5


class Scanner:
    """
    Populates the catalog store from station ROM folders.

    Features:
    - Idempotent re-scan (a station's entries are purged before walking)
    - Every storage root is tried independently for each station
    - Depth-bounded recursion, hidden entries skipped
    - Cooperative cancellation checked per directory entry and per
      recursion step

    A cancelled scan keeps the stations it completed; the station being
    walked when cancel() arrived is left partial and should be re-scanned.
    """

    def __init__(
        self,
        registry: StationRegistry,
        store: CatalogStore,
        games_root: Path,
        storage_roots: Optional[Sequence[Path]] = None,
        max_depth: int = MAX_SCAN_DEPTH,
        on_complete: Optional[Callable[[], None]] = None
    ):
        """
        Initialize scanner.

        Args:
            registry: Station registry
            store: Catalog store to populate
            games_root: Games directory (also the base for preview probes)
            storage_roots: Directories a station's rom_path is resolved
                against (default: games_root and its parent)
            max_depth: Maximum recursion depth below a ROM folder
            on_complete: Called after each station scan finishes
        """
        self.registry = registry
        self.store = store
        self.games_root = Path(games_root)
        self.storage_roots: List[Path] = (
            [Path(p) for p in storage_roots]
            if storage_roots
            else [self.games_root, self.games_root.parent]
        )
        self.max_depth = max_depth
        self.on_complete = on_complete

        self._cancel = threading.Event()
        self.scanning = False
        self._progress = 0
        self._status = ""

    def cancel(self) -> None:
        """Request cancellation of the running scan."""
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def progress(self) -> int:
        """Overall scan_all() progress, 0-100."""
        return self._progress

    def status(self) -> str:
        return self._status

    def scan_station(self, station_id: int) -> int:
        """
        Re-scan one station.

        Args:
            station_id: Station slot index

        Returns:
            Number of entries found for the station

        Raises:
            StationNotFoundError: If the station is not enabled
        """
        station = self.registry.get(station_id)
        if station is None:
            raise StationNotFoundError(station_id)

        self._cancel.clear()
        self.scanning = True
        try:
            return self._scan(station)
        finally:
            self.scanning = False

    def scan_all(self) -> int:
        """
        Re-scan every enabled station in registry order.

        Returns:
            Total entries found across stations
        """
        self._cancel.clear()
        self.scanning = True
        self._progress = 0
        total = 0

        stations = list(self.registry.stations())
        try:
            for completed, station in enumerate(stations):
                if self.cancelled:
                    break
                self._progress = (completed * 100) // len(stations)
                total += self._scan(station)
        finally:
            self.scanning = False

        if self.cancelled:
            self._status = "Scan cancelled"
            logger.info(f"Scan cancelled: {total} ROMs found before cancellation")
        else:
            self._progress = 100
            self._status = "Scan complete"
            logger.info(f"Scan complete: {total} ROMs across {len(stations)} stations")
        return total

    def _scan(self, station: Station) -> int:
        self._status = f"Scanning {station.short_name}..."
        logger.info(self._status)

        self.store.purge_station(station.id)
        station.rom_count = 0

        try:
            for root in self.storage_roots:
                if self.cancelled:
                    break
                rom_dir = root / station.rom_path
                if rom_dir.is_dir():
                    logger.debug(f"Walking {rom_dir} for {station.short_name}")
                    self._walk(station, rom_dir, 0)
        except CapacityExceededError as e:
            logger.warning(f"Stopped scanning {station.short_name}: {e}")

        logger.info(f"Found {station.rom_count} ROMs for {station.short_name}")
        if self.on_complete:
            self.on_complete()
        return station.rom_count

    def _walk(self, station: Station, directory: Path, depth: int) -> None:
        if depth > self.max_depth or self.cancelled:
            return

        try:
            with os.scandir(directory) as it:
                children = list(it)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return

        for child in children:
            if self.cancelled:
                return
            if child.name.startswith("."):
                continue

            path = Path(child.path)
            try:
                is_dir = child.is_dir()
                is_file = child.is_file()
                st = child.stat() if is_file else None
            except OSError:
                continue

            if is_dir:
                self._walk(station, path, depth + 1)
            elif is_file and match_extension(child.name, station.extensions):
                self._add_entry(station, path, st.st_size, int(st.st_mtime))

    def _add_entry(self, station: Station, path: Path, size: int, mtime: int) -> None:
        display_name = derive_display_name(path.name)
        entry = RomEntry(
            display_name=display_name,
            filename=path.name,
            absolute_path=path,
            station_id=station.id,
            size_bytes=size,
            modified_time=mtime,
            preview=self._probe_preview(station, display_name),
        )
        self.store.append(entry)
        station.rom_count += 1

    def _probe_preview(self, station: Station, display_name: str) -> PreviewState:
        """Check the shared and the station-specific preview folders."""
        candidates = [
            self.games_root / "previews" / f"{display_name}.png",
            self.games_root / station.short_name / "previews" / f"{display_name}.png",
        ]
        for candidate in candidates:
            if candidate.is_file():
                return PreviewState(has_preview=True, preview_path=candidate)
        return PreviewState()
