"""
libretro-thumbnails naming conventions.

URL format:
    {base_url}/{system}/{category}/{game name}.png
"""

import re
from typing import Dict, List
from urllib.parse import quote

# Categories in priority order: box art, then screenshot, then title screen
THUMBNAIL_CATEGORIES: List[str] = [
    "Named_Boxarts",
    "Named_Snaps",
    "Named_Titles",
]

# Station short name -> libretro system folder
LIBRETRO_SYSTEM_MAP: Dict[str, str] = {
    # Nintendo
    "NES": "Nintendo_-_Nintendo_Entertainment_System",
    "SNES": "Nintendo_-_Super_Nintendo_Entertainment_System",
    "GB": "Nintendo_-_Game_Boy",
    "GBC": "Nintendo_-_Game_Boy_Color",
    "GBA": "Nintendo_-_Game_Boy_Advance",
    "N64": "Nintendo_-_Nintendo_64",
    # Sega
    "Genesis": "Sega_-_Mega_Drive_-_Genesis",
    "SMS": "Sega_-_Master_System_-_Mark_III",
    "SegaCD": "Sega_-_Mega-CD_-_Sega_CD",
    "Saturn": "Sega_-_Saturn",
    "S32X": "Sega_-_32X",
    # Atari
    "A2600": "Atari_-_2600",
    "A7800": "Atari_-_7800",
    "A5200": "Atari_-_5200",
    "AtariST": "Atari_-_ST",
    # NEC / SNK
    "TG16": "NEC_-_PC_Engine_-_TurboGrafx_16",
    "NeoGeo": "SNK_-_Neo_Geo",
    "NGP": "SNK_-_Neo_Geo_Pocket",
    # Sony
    "PS1": "Sony_-_PlayStation",
    "PSX": "Sony_-_PlayStation",
    # Computers
    "C64": "Commodore_-_64",
    "Amiga": "Commodore_-_Amiga",
    "MSX": "Microsoft_-_MSX",
    "Spectrum": "Sinclair_-_ZX_Spectrum",
    "CPC": "Amstrad_-_CPC",
    # Others
    "Arcade": "MAME",
    "Coleco": "Coleco_-_ColecoVision",
    "Intv": "Mattel_-_Intellivision",
    "Vectrex": "GCE_-_Vectrex",
    "WS": "Bandai_-_WonderSwan",
}

_LOOKUP = {k.lower(): v for k, v in LIBRETRO_SYSTEM_MAP.items()}

# libretro replaces these characters with '_' in thumbnail file names
_UNSAFE_CHARS = re.compile(r'[&*/:`<>?\\|"]')


def libretro_system_name(short_name: str) -> str:
    """
    Map a station short name to its libretro system folder.

    Lookup is case-insensitive; unknown names are returned unchanged.
    """
    return _LOOKUP.get(short_name.lower(), short_name)


def thumbnail_file_name(game_name: str) -> str:
    """Apply libretro's character substitution to a game name."""
    return _UNSAFE_CHARS.sub("_", game_name)


def build_thumbnail_url(base_url: str, short_name: str, game_name: str, category: str) -> str:
    """
    Build a libretro-thumbnails URL.

    Args:
        base_url: Service root (e.g. https://thumbnails.libretro.com)
        short_name: Station short name
        game_name: ROM display name
        category: One of THUMBNAIL_CATEGORIES

    Returns:
        Fully encoded image URL

    Example:
        >>> build_thumbnail_url("https://thumbnails.libretro.com", "NES",
        ...                     "Zelda II", "Named_Boxarts")
        'https://thumbnails.libretro.com/Nintendo_-_Nintendo_Entertainment_System/Named_Boxarts/Zelda%20II.png'
    """
    system = quote(libretro_system_name(short_name))
    name = quote(thumbnail_file_name(game_name))
    return f"{base_url.rstrip('/')}/{system}/{category}/{name}.png"
