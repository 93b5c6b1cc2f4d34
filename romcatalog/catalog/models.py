"""Catalog data structures."""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any


@dataclass
class PreviewState:
    """Preview knowledge recorded for an entry at scan time."""
    has_preview: bool = False
    preview_path: Optional[Path] = None


@dataclass
class RomEntry:
    """
    A discovered ROM file.

    Entries are created by the scanner and owned by the catalog store.
    Views reference them by store index and never copy them.
    """
    display_name: str               # Filename without extension, '_' -> ' '
    filename: str                   # Actual filename
    absolute_path: Path             # Full path to ROM file
    station_id: int                 # Owning station slot
    size_bytes: int                 # File size in bytes
    modified_time: int              # Modification time (Unix timestamp)
    preview: PreviewState = field(default_factory=PreviewState)


@dataclass
class Station:
    """
    A configured game console profile.

    The id is the station's slot index in the registry.
    """
    id: int
    display_name: str = ""          # e.g. "Nintendo Entertainment System"
    short_name: str = ""            # e.g. "NES"
    rom_path: str = ""              # ROM folder, relative to a storage root
    core_path: str = ""             # Core identifier used to launch
    extensions: str = ""            # Space-separated allow-list
    enabled: bool = False
    rom_count: int = 0

    # Fields callers may change through StationRegistry.update()
    UPDATABLE = (
        "display_name",
        "short_name",
        "rom_path",
        "core_path",
        "extensions",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize persistent fields (rom_count is rebuilt every session)."""
        data = asdict(self)
        data.pop("rom_count", None)
        return data

    @classmethod
    def from_dict(cls, slot: int, data: Dict[str, Any]) -> "Station":
        """Build a station for a slot from persisted fields."""
        return cls(
            id=slot,
            display_name=str(data.get("display_name", "")),
            short_name=str(data.get("short_name", "")),
            rom_path=str(data.get("rom_path", "")),
            core_path=str(data.get("core_path", "")),
            extensions=str(data.get("extensions", "")),
            enabled=bool(data.get("enabled", False)),
        )


@dataclass(frozen=True)
class StationTemplate:
    """Console preset used to seed StationRegistry.add()."""
    name: str
    short_name: str
    default_path: str
    core_name: str
    extensions: str
