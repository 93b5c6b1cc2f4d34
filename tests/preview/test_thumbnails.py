import pytest

from romcatalog.preview.thumbnails import (
    THUMBNAIL_CATEGORIES,
    build_thumbnail_url,
    libretro_system_name,
    thumbnail_file_name,
)

BASE = "https://thumbnails.libretro.com"


@pytest.mark.unit
def test_categories_in_priority_order():
    assert THUMBNAIL_CATEGORIES == ["Named_Boxarts", "Named_Snaps", "Named_Titles"]


@pytest.mark.unit
def test_system_name_lookup_is_case_insensitive():
    assert libretro_system_name("NES") == "Nintendo_-_Nintendo_Entertainment_System"
    assert libretro_system_name("snes") == "Nintendo_-_Super_Nintendo_Entertainment_System"
    assert libretro_system_name("HOMEBREW") == "HOMEBREW"


@pytest.mark.unit
def test_unsafe_characters_are_replaced():
    assert thumbnail_file_name('Q*bert: "Arcade" & More?') == "Q_bert_ _Arcade_ _ More_"


@pytest.mark.unit
def test_build_url_encodes_spaces_and_parentheses():
    url = build_thumbnail_url(BASE + "/", "NES", "Zelda II (USA)", "Named_Boxarts")
    assert url == (
        "https://thumbnails.libretro.com/Nintendo_-_Nintendo_Entertainment_System/"
        "Named_Boxarts/Zelda%20II%20%28USA%29.png"
    )


@pytest.mark.unit
def test_build_url_for_unmapped_station_uses_short_name():
    url = build_thumbnail_url(BASE, "My Box", "Game", "Named_Snaps")
    assert url == f"{BASE}/My%20Box/Named_Snaps/Game.png"
