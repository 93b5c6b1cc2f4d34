"""
Catalog service: owns the station registry, catalog store, scanner and view.

One instance is created per process and passed to whatever needs the
catalog (the CLI, the preview pipeline, a host UI).
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from romcatalog.catalog.errors import StationNotFoundError
from romcatalog.catalog.registry import StationRegistry
from romcatalog.catalog.registry_store import RegistryStore
from romcatalog.catalog.scanner import MAX_SCAN_DEPTH, Scanner
from romcatalog.catalog.sorter import SortMode
from romcatalog.catalog.store import MAX_TOTAL_ROMS, CatalogStore
from romcatalog.catalog.view import FilteredView
from romcatalog.config.loader import get_config_value

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Entry point for catalog operations.

    Mutations that change the store (scans, station removal) rebuild the
    filtered view before returning, and the view re-applies the last
    sort mode on every rebuild.
    """

    def __init__(
        self,
        games_root: Path,
        registry: Optional[StationRegistry] = None,
        store: Optional[CatalogStore] = None,
        storage_roots=None,
        max_depth: int = MAX_SCAN_DEPTH
    ):
        self.games_root = Path(games_root)
        self.registry = registry or StationRegistry()
        self.store = store or CatalogStore()
        self.view = FilteredView(self.store, self.registry)
        self.scanner = Scanner(
            self.registry,
            self.store,
            self.games_root,
            storage_roots=storage_roots,
            max_depth=max_depth,
            on_complete=self.view.rebuild,
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "CatalogService":
        """
        Build a service from a validated configuration dictionary.

        Args:
            config: Configuration from load_config()
        """
        games_root = Path(config["paths"]["games_root"]).expanduser()

        stations_file = get_config_value(config, "paths.stations_file")
        stations_path = (
            Path(stations_file).expanduser()
            if stations_file
            else games_root / "rom_stations.yaml"
        )

        storage_roots = get_config_value(config, "paths.storage_roots") or None
        if storage_roots:
            storage_roots = [Path(p).expanduser() for p in storage_roots]

        return cls(
            games_root,
            registry=StationRegistry(RegistryStore(stations_path)),
            store=CatalogStore(
                get_config_value(config, "catalog.max_total", MAX_TOTAL_ROMS)
            ),
            storage_roots=storage_roots,
            max_depth=get_config_value(config, "catalog.max_depth", MAX_SCAN_DEPTH),
        )

    # ------------------------------------------------------------------
    # Stations
    # ------------------------------------------------------------------

    def add_station(
        self,
        name: str,
        short_name: str,
        rom_path: str,
        core_path: str,
        extensions: str
    ) -> int:
        """Add a station; see StationRegistry.add()."""
        return self.registry.add(name, short_name, rom_path, core_path, extensions)

    def remove_station(self, station_id: int) -> int:
        """
        Remove a station and every catalog entry it owns.

        Purges the store, disables and persists the slot, then rebuilds
        the view.

        Returns:
            Number of catalog entries removed

        Raises:
            StationNotFoundError: If the station is unknown or disabled
        """
        if self.registry.get(station_id) is None:
            raise StationNotFoundError(station_id)

        removed = self.store.purge_station(station_id)
        self.registry.remove(station_id)
        self.view.rebuild()
        return removed

    def update_station(self, station_id: int, fields: Dict[str, Any]) -> None:
        self.registry.update(station_id, fields)
        self.view.rebuild()

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def scan_station(self, station_id: int) -> int:
        return self.scanner.scan_station(station_id)

    def scan_all(self) -> int:
        return self.scanner.scan_all()

    def cancel_scan(self) -> None:
        self.scanner.cancel()

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    def browse(self, station_filter: Optional[int] = None) -> FilteredView:
        """Reset the view to a station (None for all) and return it."""
        self.view.init(station_filter)
        return self.view

    def sort(self, mode: SortMode) -> None:
        self.view.sort(mode)

    def rom_count(self, station_id: Optional[int] = None) -> int:
        """Total entries, or entries of one enabled station."""
        if station_id is None:
            return len(self.store)
        station = self.registry.get(station_id)
        return station.rom_count if station else 0
