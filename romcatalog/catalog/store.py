"""Catalog store: the authoritative list of discovered ROM entries."""

import logging
from typing import Iterator, List, Optional

from romcatalog.catalog.errors import CapacityExceededError
from romcatalog.catalog.models import RomEntry

logger = logging.getLogger(__name__)

MAX_TOTAL_ROMS = 32768


class CatalogStore:
    """
    Ordered, bounded collection of RomEntry objects.

    Entries are appended by the scanner and removed only in bulk when
    their station is re-scanned or removed. Store indices stay valid
    until the next purge, which is when views are rebuilt.
    """

    def __init__(self, max_total: int = MAX_TOTAL_ROMS):
        self.max_total = max_total
        self._entries: List[RomEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RomEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> RomEntry:
        return self._entries[index]

    def get(self, index: int) -> Optional[RomEntry]:
        """Get an entry by store index, or None when out of range."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def append(self, entry: RomEntry) -> None:
        """
        Append an entry.

        Raises:
            CapacityExceededError: If the store already holds max_total entries
        """
        if len(self._entries) >= self.max_total:
            raise CapacityExceededError(
                f"Catalog full ({self.max_total} entries)"
            )
        self._entries.append(entry)

    def purge_station(self, station_id: int) -> int:
        """
        Remove every entry owned by a station, preserving order of the rest.

        Returns:
            Number of entries removed
        """
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.station_id != station_id]
        removed = before - len(self._entries)
        if removed:
            logger.debug(f"Purged {removed} entries for station {station_id}")
        return removed

    def entries_for_station(self, station_id: int) -> List[RomEntry]:
        """Entries owned by a station, in store order."""
        return [e for e in self._entries if e.station_id == station_id]

    def count_for_station(self, station_id: int) -> int:
        return sum(1 for e in self._entries if e.station_id == station_id)

    def clear(self) -> None:
        self._entries = []
