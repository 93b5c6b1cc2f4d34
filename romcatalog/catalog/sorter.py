"""Sort modes for the filtered view."""

from enum import Enum
from typing import Callable, Dict, List, Tuple, Any

from romcatalog.catalog.models import RomEntry


class SortMode(Enum):
    """Sort key and direction."""
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    STATION_ASC = "station_asc"
    STATION_DESC = "station_desc"
    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"
    SIZE_ASC = "size_asc"
    SIZE_DESC = "size_desc"


def _name_key(entry: RomEntry) -> str:
    return entry.display_name.casefold()


# (key function, reverse). Station modes tie-break on ascending name in
# both directions, so the descending station key negates the id instead
# of reversing the whole sort.
_SORT_KEYS: Dict[SortMode, Tuple[Callable[[RomEntry], Any], bool]] = {
    SortMode.NAME_ASC: (_name_key, False),
    SortMode.NAME_DESC: (_name_key, True),
    SortMode.STATION_ASC: (lambda e: (e.station_id, _name_key(e)), False),
    SortMode.STATION_DESC: (lambda e: (-e.station_id, _name_key(e)), False),
    SortMode.DATE_ASC: (lambda e: e.modified_time, False),
    SortMode.DATE_DESC: (lambda e: e.modified_time, True),
    SortMode.SIZE_ASC: (lambda e: e.size_bytes, False),
    SortMode.SIZE_DESC: (lambda e: e.size_bytes, True),
}


def sort_indices(indices: List[int], entries: List[RomEntry], mode: SortMode) -> List[int]:
    """
    Order store indices by a sort mode.

    The sort is stable, so entries with equal keys keep their relative
    order and sorting twice with the same mode is a no-op.

    Args:
        indices: Store indices making up the view
        entries: Store entries, indexable by those indices
        mode: Sort mode

    Returns:
        New list of indices in sorted order
    """
    key, reverse = _SORT_KEYS[mode]
    return sorted(indices, key=lambda i: key(entries[i]), reverse=reverse)
