"""
YAML persistence for the station registry.

The document holds one mapping per registry slot so that station ids
(slot indices) survive a reload:

    stations:
      - {id: 0, display_name: ..., enabled: true, ...}
      - {id: 1, enabled: false, ...}
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml

from romcatalog.catalog.models import Station

logger = logging.getLogger(__name__)


class RegistryStore:
    """Reads and writes the registry slot array."""

    def __init__(self, path: Optional[Path]):
        """
        Initialize registry store.

        Args:
            path: YAML file location, or None to disable persistence
        """
        self.path = Path(path) if path else None

    def load(self, capacity: int) -> List[Station]:
        """
        Load all slots from disk.

        A missing or unreadable file yields an empty registry; slots beyond
        ``capacity`` are ignored.

        Args:
            capacity: Number of registry slots

        Returns:
            List of exactly ``capacity`` stations
        """
        slots = [Station(id=i) for i in range(capacity)]

        if self.path is None or not self.path.exists():
            logger.debug("No station registry file found, starting empty")
            return slots

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            logger.warning(f"Failed to load station registry: {e}, starting empty")
            return slots

        persisted = data.get("stations", []) if isinstance(data, dict) else []
        if not isinstance(persisted, list):
            logger.warning("Station registry is malformed, starting empty")
            return slots

        for slot, entry in enumerate(persisted[:capacity]):
            if isinstance(entry, dict):
                slots[slot] = Station.from_dict(slot, entry)

        enabled = sum(1 for s in slots if s.enabled)
        logger.info(f"Loaded station registry: {enabled} stations from {self.path}")
        return slots

    def save(self, slots: List[Station]) -> None:
        """Write all slots to disk (temp file, then atomic replace)."""
        if self.path is None:
            return

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = self.path.with_suffix(".tmp")
            with open(temp_file, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    {"stations": [s.to_dict() for s in slots]},
                    f,
                    sort_keys=False,
                    allow_unicode=True,
                )
            temp_file.replace(self.path)
            logger.debug(f"Saved station registry to {self.path}")
        except OSError as e:
            logger.error(f"Failed to save station registry: {e}")
