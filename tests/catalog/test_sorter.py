from pathlib import Path

import pytest

from romcatalog.catalog.models import RomEntry
from romcatalog.catalog.sorter import SortMode, sort_indices


def _entries():
    raw = [
        # name, station, size, mtime
        ("beta", 1, 300, 20),
        ("Alpha", 0, 100, 30),
        ("alpha2", 1, 200, 10),
        ("Gamma", 0, 200, 40),
    ]
    return [
        RomEntry(
            display_name=name,
            filename=f"{name}.rom",
            absolute_path=Path(f"/games/{name}.rom"),
            station_id=station,
            size_bytes=size,
            modified_time=mtime,
        )
        for name, station, size, mtime in raw
    ]


def _names(indices, entries):
    return [entries[i].display_name for i in indices]


@pytest.mark.unit
@pytest.mark.parametrize(
    "mode, expected",
    [
        (SortMode.NAME_ASC, ["Alpha", "alpha2", "beta", "Gamma"]),
        (SortMode.NAME_DESC, ["Gamma", "beta", "alpha2", "Alpha"]),
        (SortMode.STATION_ASC, ["Alpha", "Gamma", "alpha2", "beta"]),
        (SortMode.STATION_DESC, ["alpha2", "beta", "Alpha", "Gamma"]),
        (SortMode.DATE_ASC, ["alpha2", "beta", "Alpha", "Gamma"]),
        (SortMode.DATE_DESC, ["Gamma", "Alpha", "beta", "alpha2"]),
        (SortMode.SIZE_ASC, ["Alpha", "alpha2", "Gamma", "beta"]),
        (SortMode.SIZE_DESC, ["beta", "alpha2", "Gamma", "Alpha"]),
    ],
)
def test_sort_modes(mode, expected):
    entries = _entries()
    assert _names(sort_indices(range(len(entries)), entries, mode), entries) == expected


@pytest.mark.unit
def test_sort_is_idempotent():
    entries = _entries()
    once = sort_indices(list(range(len(entries))), entries, SortMode.SIZE_ASC)
    twice = sort_indices(once, entries, SortMode.SIZE_ASC)
    assert once == twice


@pytest.mark.unit
def test_sort_only_permutes_given_indices():
    entries = _entries()
    assert sorted(sort_indices([3, 1], entries, SortMode.NAME_DESC)) == [1, 3]
