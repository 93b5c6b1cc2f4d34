from pathlib import Path

import pytest

from romcatalog.catalog import (
    CatalogStore,
    FilteredView,
    Navigation,
    RomEntry,
    SortMode,
    StationRegistry,
)

PAGE = 4


def _entry(name: str, station_id: int = 0, size: int = 1, mtime: int = 0) -> RomEntry:
    filename = name.replace(" ", "_") + ".rom"
    return RomEntry(
        display_name=name,
        filename=filename,
        absolute_path=Path("/games") / filename,
        station_id=station_id,
        size_bytes=size,
        modified_time=mtime,
    )


def _view(count: int = 10, station_filter=None):
    registry = StationRegistry()
    registry.add("Nintendo Entertainment System", "NES", "NES", "NES", "nes")
    registry.add("Sega Genesis", "GENESIS", "GEN", "", "md")
    store = CatalogStore()
    for i in range(count):
        store.append(_entry(f"Game {i:02d}"))
    view = FilteredView(store, registry)
    view.init(station_filter)
    return view, store, registry


@pytest.mark.unit
def test_init_includes_enabled_station_entries_in_store_order():
    view, _, _ = _view(3)
    assert len(view) == 3
    assert [e.display_name for e in view.entries()] == ["Game 00", "Game 01", "Game 02"]
    assert (view.first_index, view.selected_index) == (0, 0)


@pytest.mark.unit
def test_prev_inside_window_keeps_window():
    view, _, _ = _view(10)
    view.navigate(Navigation.LAST, PAGE)
    assert (view.selected_index, view.first_index) == (9, 6)

    view.navigate(Navigation.PREV, PAGE)
    assert (view.selected_index, view.first_index) == (8, 6)


@pytest.mark.unit
def test_next_wraps_to_top_and_prev_wraps_to_bottom():
    view, _, _ = _view(10)
    view.navigate(Navigation.PREV, PAGE)
    assert (view.selected_index, view.first_index) == (9, 6)

    view.navigate(Navigation.NEXT, PAGE)
    assert (view.selected_index, view.first_index) == (0, 0)


@pytest.mark.unit
def test_next_scrolls_window_past_bottom_edge():
    view, _, _ = _view(10)
    for _ in range(4):
        view.navigate(Navigation.NEXT, PAGE)
    assert (view.selected_index, view.first_index) == (4, 1)


@pytest.mark.unit
def test_next_page_moves_to_window_end_then_pages():
    view, _, _ = _view(10)
    view.navigate(Navigation.NEXT_PAGE, PAGE)
    assert (view.selected_index, view.first_index) == (3, 0)

    view.navigate(Navigation.NEXT_PAGE, PAGE)
    assert (view.selected_index, view.first_index) == (7, 4)

    view.navigate(Navigation.NEXT_PAGE, PAGE)
    assert (view.selected_index, view.first_index) == (9, 6)


@pytest.mark.unit
def test_prev_page_moves_to_window_start_then_pages():
    view, _, _ = _view(10)
    view.navigate(Navigation.LAST, PAGE)

    view.navigate(Navigation.PREV_PAGE, PAGE)
    assert (view.selected_index, view.first_index) == (6, 6)

    view.navigate(Navigation.PREV_PAGE, PAGE)
    assert (view.selected_index, view.first_index) == (2, 2)

    view.navigate(Navigation.PREV_PAGE, PAGE)
    assert (view.selected_index, view.first_index) == (0, 0)


@pytest.mark.unit
def test_navigation_on_empty_view_is_noop():
    view, _, _ = _view(0)
    for intent in Navigation:
        view.navigate(intent, PAGE)
        assert (view.selected_index, view.first_index) == (0, 0)
    assert view.selected_entry() is None
    assert view.select() is None
    assert view.visible_rows(PAGE) == []


@pytest.mark.unit
def test_selection_stays_inside_window():
    view, _, _ = _view(10)
    intents = [Navigation.NEXT_PAGE, Navigation.NEXT, Navigation.PREV_PAGE,
               Navigation.LAST, Navigation.PREV, Navigation.NEXT, Navigation.PREV,
               Navigation.NEXT_PAGE, Navigation.FIRST, Navigation.PREV_PAGE]
    for intent in intents:
        view.navigate(intent, PAGE)
        assert 0 <= view.selected_index < len(view)
        assert view.first_index <= view.selected_index <= view.first_index + PAGE - 1


@pytest.mark.unit
def test_visible_rows_carry_scroll_indicators():
    view, _, _ = _view(10)
    rows = view.visible_rows(PAGE)
    assert len(rows) == PAGE
    assert rows[0].selected is True
    assert rows[0].more_above is False
    assert rows[-1].more_below is True

    view.navigate(Navigation.LAST, PAGE)
    rows = view.visible_rows(PAGE)
    assert rows[0].more_above is True
    assert rows[-1].more_below is False
    assert rows[-1].selected is True


@pytest.mark.unit
def test_rebuild_clamps_cursor_after_purge():
    view, store, _ = _view(10)
    store.append(_entry("Sonic", station_id=1))
    store.append(_entry("Streets of Rage", station_id=1))
    view.rebuild()
    view.navigate(Navigation.LAST, PAGE)
    assert view.selected_index == 11

    store.purge_station(1)
    view.rebuild()
    assert len(view) == 10
    assert view.selected_index == 9
    assert view.first_index <= view.selected_index


@pytest.mark.unit
def test_station_filter_and_disabled_stations():
    view, store, registry = _view(3)
    store.append(_entry("Sonic", station_id=1))

    view.init(1)
    assert [e.display_name for e in view.entries()] == ["Sonic"]

    registry.remove(1)
    view.init(None)
    assert len(view) == 3


@pytest.mark.unit
def test_search_is_case_insensitive_substring():
    view, store, _ = _view(0)
    store.append(_entry("Zelda II"))
    store.append(_entry("Metroid"))
    store.append(_entry("The Legend of Zelda"))
    view.rebuild()
    view.navigate(Navigation.LAST, PAGE)

    view.set_search("ZEL")
    assert view.filter_active() is True
    assert [e.display_name for e in view.entries()] == ["Zelda II", "The Legend of Zelda"]
    assert (view.selected_index, view.first_index) == (0, 0)

    view.clear_search()
    assert view.filter_active() is False
    assert len(view) == 3


@pytest.mark.unit
def test_init_resets_search():
    view, _, _ = _view(3)
    view.set_search("01")
    assert len(view) == 1
    view.init(None)
    assert view.search_text == ""
    assert len(view) == 3


@pytest.mark.unit
def test_labels_depend_on_station_filter():
    view, store, _ = _view(0)
    store.append(_entry("Zelda II"))
    store.append(_entry("Sonic", station_id=1))
    view.rebuild()

    assert [r.label for r in view.visible_rows(PAGE)] == ["[NES] Zelda II", "[GENE] Sonic"]

    view.init(0)
    assert [r.label for r in view.visible_rows(PAGE)] == [" Zelda II"]


@pytest.mark.unit
def test_select_builds_core_identifier():
    view, store, _ = _view(0)
    store.append(_entry("Zelda II"))
    store.append(_entry("Sonic", station_id=1))
    view.rebuild()

    selection = view.select()
    assert selection.path == Path("/games/Zelda_II.rom")
    assert selection.core == "_NES"
    assert selection.label == "Zelda II"

    view.navigate(Navigation.NEXT, PAGE)
    assert view.select().core == ""


@pytest.mark.unit
def test_sort_mode_survives_rebuild():
    view, store, _ = _view(0)
    store.append(_entry("beta"))
    store.append(_entry("Alpha"))
    view.rebuild()
    assert [e.display_name for e in view.entries()] == ["beta", "Alpha"]

    view.sort(SortMode.NAME_ASC)
    store.append(_entry("aardvark"))
    view.rebuild()
    assert [e.display_name for e in view.entries()] == ["aardvark", "Alpha", "beta"]
