"""
Filtered, sorted, paginated projection of the catalog store.

The view holds store indices only. It is rebuilt from scratch whenever
the store, the station filter or the search text changes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from romcatalog.catalog.models import RomEntry
from romcatalog.catalog.registry import StationRegistry
from romcatalog.catalog.sorter import SortMode, sort_indices
from romcatalog.catalog.store import CatalogStore

logger = logging.getLogger(__name__)


class Navigation(Enum):
    """Cursor movement intents."""
    INIT = "init"
    FIRST = "first"
    LAST = "last"
    NEXT = "next"
    PREV = "prev"
    NEXT_PAGE = "next_page"
    PREV_PAGE = "prev_page"


@dataclass
class BrowseRow:
    """One visible row of the browser window."""
    label: str
    entry: RomEntry
    selected: bool = False
    more_above: bool = False
    more_below: bool = False


@dataclass
class Selection:
    """What the host UI needs to launch the selected ROM."""
    path: Path
    core: str
    label: str


class FilteredView:
    """
    Browsing state over the catalog store.

    Cursor invariant: when the view is non-empty,
    0 <= selected_index < len(view) and the selection lies inside the
    visible window [first_index, first_index + page_size - 1].
    """

    def __init__(self, store: CatalogStore, registry: StationRegistry):
        self.store = store
        self.registry = registry
        self.station_filter: Optional[int] = None
        self.search_text = ""
        self.sort_mode: Optional[SortMode] = None
        self.first_index = 0
        self.selected_index = 0
        self._indices: List[int] = []

    def __len__(self) -> int:
        return len(self._indices)

    def entries(self) -> List[RomEntry]:
        """Entries in view order."""
        return [self.store[i] for i in self._indices]

    def init(self, station_filter: Optional[int] = None) -> None:
        """
        Start browsing a station (or all stations when None).

        Resets the search text and the cursor.
        """
        self.station_filter = station_filter
        self.search_text = ""
        self.first_index = 0
        self.selected_index = 0
        self.rebuild()

    def set_search(self, text: str) -> None:
        """Filter by case-insensitive substring of the display name."""
        self.search_text = text or ""
        self.rebuild()
        self.first_index = 0
        self.selected_index = 0

    def clear_search(self) -> None:
        self.set_search("")

    def filter_active(self) -> bool:
        return bool(self.search_text)

    def sort(self, mode: SortMode) -> None:
        """
        Sort the view and remember the mode.

        The mode is re-applied after every rebuild.
        """
        self.sort_mode = mode
        self._indices = sort_indices(self._indices, self.store, mode)

    def rebuild(self) -> None:
        """Recompute the view from the store and clamp the cursor."""
        needle = self.search_text.casefold()
        indices = []
        for index, entry in enumerate(self.store):
            if self.station_filter is not None and entry.station_id != self.station_filter:
                continue
            if self.registry.get(entry.station_id) is None:
                continue
            if needle and needle not in entry.display_name.casefold():
                continue
            indices.append(index)

        self._indices = indices
        if self.sort_mode is not None:
            self._indices = sort_indices(self._indices, self.store, self.sort_mode)
        self._clamp()
        logger.debug(f"View rebuilt: {len(self._indices)} of {len(self.store)} entries")

    def _clamp(self) -> None:
        count = len(self._indices)
        if count == 0:
            self.first_index = 0
            self.selected_index = 0
            return
        if self.selected_index >= count:
            self.selected_index = count - 1
        if self.first_index > self.selected_index:
            self.first_index = self.selected_index

    def navigate(self, intent: Navigation, page_size: int) -> None:
        """
        Move the cursor.

        Args:
            intent: Navigation intent
            page_size: Number of visible rows
        """
        if intent in (Navigation.INIT, Navigation.FIRST):
            self.first_index = 0
            self.selected_index = 0
            return

        count = len(self._indices)
        if not count:
            return

        page = max(1, page_size)
        last = count - 1

        if intent == Navigation.LAST or (intent == Navigation.PREV and self.selected_index <= 0):
            self.selected_index = last
            self.first_index = max(0, last - page + 1)

        elif intent == Navigation.NEXT:
            if self.selected_index < last:
                self.selected_index += 1
                if self.selected_index > self.first_index + page - 1:
                    self.first_index = self.selected_index - page + 1
            else:
                self.first_index = 0
                self.selected_index = 0

        elif intent == Navigation.PREV:
            self.selected_index -= 1
            if self.selected_index < self.first_index:
                self.first_index = self.selected_index

        elif intent == Navigation.NEXT_PAGE:
            window_last = self.first_index + page - 1
            if self.selected_index < window_last:
                self.selected_index = min(window_last, last)
            else:
                self.selected_index += page
                self.first_index += page
                if self.selected_index >= count:
                    self.selected_index = last
                    self.first_index = max(0, last - page + 1)
                elif self.first_index + page > count:
                    self.first_index = count - page

        elif intent == Navigation.PREV_PAGE:
            if self.selected_index != self.first_index:
                self.selected_index = self.first_index
            else:
                self.first_index = max(0, self.first_index - page)
                self.selected_index = self.first_index

    def visible_rows(self, page_size: int) -> List[BrowseRow]:
        """
        Rows for the visible window.

        The first row carries more_above when entries precede the window,
        the last row carries more_below when entries follow it.
        """
        count = len(self._indices)
        end = min(self.first_index + page_size, count)
        rows = []
        for k in range(self.first_index, end):
            entry = self.store[self._indices[k]]
            rows.append(BrowseRow(
                label=self.label_for(entry),
                entry=entry,
                selected=(k == self.selected_index),
            ))

        if rows:
            rows[0].more_above = self.first_index > 0
            rows[-1].more_below = self.first_index + page_size < count
        return rows

    def label_for(self, entry: RomEntry) -> str:
        """Row label: station tag when browsing all stations."""
        station = self.registry.get(entry.station_id)
        if station and self.station_filter is None:
            return f"[{station.short_name[:4]}] {entry.display_name}"
        return f" {entry.display_name}"

    def selected_entry(self) -> Optional[RomEntry]:
        if self.selected_index >= len(self._indices):
            return None
        return self.store[self._indices[self.selected_index]]

    def select(self) -> Optional[Selection]:
        """
        Describe the selected ROM for launching.

        Returns:
            Selection with the ROM path, core launch identifier
            ("_" + core path, or "" when the station has none) and label,
            or None when nothing is selected
        """
        entry = self.selected_entry()
        if entry is None:
            return None

        station = self.registry.get(entry.station_id)
        core = f"_{station.core_path}" if station and station.core_path else ""
        return Selection(path=entry.absolute_path, core=core, label=entry.display_name)
