"""
Catalog engine: station registry, scanner, catalog store and browsing view.
"""

from .errors import CatalogError, StationNotFoundError, CapacityExceededError
from .models import RomEntry, Station, StationTemplate, PreviewState
from .registry import StationRegistry, MAX_STATIONS
from .registry_store import RegistryStore
from .store import CatalogStore
from .scanner import Scanner
from .sorter import SortMode
from .view import FilteredView, Navigation, BrowseRow, Selection
from .service import CatalogService
from .templates import STATION_TEMPLATES, find_template

__all__ = [
    "CatalogError",
    "StationNotFoundError",
    "CapacityExceededError",
    "RomEntry",
    "Station",
    "StationTemplate",
    "PreviewState",
    "StationRegistry",
    "MAX_STATIONS",
    "RegistryStore",
    "CatalogStore",
    "Scanner",
    "SortMode",
    "FilteredView",
    "Navigation",
    "BrowseRow",
    "Selection",
    "CatalogService",
    "STATION_TEMPLATES",
    "find_template",
]
