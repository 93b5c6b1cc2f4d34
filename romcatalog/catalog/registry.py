"""Fixed-capacity station registry."""

import logging
from typing import Any, Dict, Iterator, List, Optional

from romcatalog.catalog.errors import CapacityExceededError, StationNotFoundError
from romcatalog.catalog.models import Station, StationTemplate
from romcatalog.catalog.registry_store import RegistryStore

logger = logging.getLogger(__name__)

MAX_STATIONS = 32


class StationRegistry:
    """
    Maps station ids (slot indices) to console configuration.

    Slots are never reallocated: removing a station disables its slot,
    and the next add() reuses the first disabled slot. Every mutation is
    persisted through the RegistryStore.

    Removing a station also purges its catalog entries, so callers go
    through CatalogService.remove_station() rather than remove() directly.
    """

    def __init__(self, store: Optional[RegistryStore] = None, capacity: int = MAX_STATIONS):
        self.capacity = capacity
        self.store = store or RegistryStore(None)
        self._slots: List[Station] = self.store.load(capacity)

    def add(
        self,
        name: str,
        short_name: str,
        rom_path: str,
        core_path: str,
        extensions: str
    ) -> int:
        """
        Add a station in the first free slot.

        Args:
            name: Display name (e.g. "Nintendo Entertainment System")
            short_name: Short name (e.g. "NES")
            rom_path: ROM folder relative to the storage roots
            core_path: Core identifier used to launch the ROM
            extensions: Space-separated extension allow-list

        Returns:
            New station id

        Raises:
            CapacityExceededError: If every slot is in use
        """
        slot = next((s.id for s in self._slots if not s.enabled), None)
        if slot is None:
            raise CapacityExceededError(
                f"Station registry full ({self.capacity} stations)"
            )

        self._slots[slot] = Station(
            id=slot,
            display_name=name,
            short_name=short_name,
            rom_path=rom_path,
            core_path=core_path,
            extensions=extensions,
            enabled=True,
        )
        logger.info(f"Added station {short_name} in slot {slot}")
        self.save()
        return slot

    def add_from_template(self, template: StationTemplate) -> int:
        """Add a station seeded from a console preset."""
        return self.add(
            template.name,
            template.short_name,
            template.default_path,
            template.core_name,
            template.extensions,
        )

    def remove(self, station_id: int) -> Station:
        """
        Disable a station's slot and persist.

        Returns:
            The removed station

        Raises:
            StationNotFoundError: If the station is unknown or disabled
        """
        station = self.get(station_id)
        if station is None:
            raise StationNotFoundError(station_id)

        station.enabled = False
        station.rom_count = 0
        logger.info(f"Removed station {station.short_name} from slot {station_id}")
        self.save()
        return station

    def update(self, station_id: int, fields: Dict[str, Any]) -> Station:
        """
        Update station fields and persist.

        Args:
            station_id: Slot index
            fields: Mapping of field name to new value; only
                Station.UPDATABLE fields are accepted

        Raises:
            StationNotFoundError: If the slot index is out of range
            ValueError: If a field is not updatable
        """
        if not 0 <= station_id < self.capacity:
            raise StationNotFoundError(station_id)

        unknown = set(fields) - set(Station.UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update station fields: {', '.join(sorted(unknown))}")

        station = self._slots[station_id]
        for key, value in fields.items():
            setattr(station, key, value)
        self.save()
        return station

    def get(self, station_id: int) -> Optional[Station]:
        """Get an enabled station by id, or None."""
        if not 0 <= station_id < self.capacity:
            return None
        station = self._slots[station_id]
        return station if station.enabled else None

    def get_by_ordinal(self, index: int) -> Optional[Station]:
        """Get the n-th enabled station in slot order, or None."""
        for ordinal, station in enumerate(self.stations()):
            if ordinal == index:
                return station
        return None

    def stations(self) -> Iterator[Station]:
        """Iterate enabled stations in slot order."""
        return (s for s in self._slots if s.enabled)

    def count(self) -> int:
        """Number of enabled stations."""
        return sum(1 for s in self._slots if s.enabled)

    def station_name(self, station_id: int) -> str:
        """Display name of a station, or "Unknown"."""
        station = self.get(station_id)
        return station.display_name if station else "Unknown"

    def save(self) -> None:
        """Persist all slots."""
        self.store.save(self._slots)
