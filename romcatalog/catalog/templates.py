"""
Well-known console presets.

Paths are relative to the games directory. Extensions are space-separated.
"""

from typing import List, Optional

from romcatalog.catalog.models import StationTemplate


STATION_TEMPLATES: List[StationTemplate] = [
    StationTemplate("Nintendo Entertainment System", "NES", "NES", "NES", "nes"),
    StationTemplate("Super Nintendo", "SNES", "SNES", "SNES", "sfc smc bin"),
    StationTemplate("Sega Genesis / Mega Drive", "Genesis", "Genesis", "Genesis", "bin gen md smd"),
    StationTemplate("Sega Master System", "SMS", "SMS", "SMS", "sms sg"),
    StationTemplate("Game Boy", "GB", "GameBoy", "GAMEBOY", "gb gbc"),
    StationTemplate("Game Boy Color", "GBC", "GameBoy", "GAMEBOY", "gbc gb"),
    StationTemplate("Game Boy Advance", "GBA", "GBA", "GBA", "gba"),
    StationTemplate("Nintendo 64", "N64", "N64", "N64", "n64 z64 v64"),
    StationTemplate("Atari 2600", "A2600", "Atari2600", "ATARI2600", "a26 bin"),
    StationTemplate("Atari 7800", "A7800", "Atari7800", "ATARI7800", "a78 bin"),
    StationTemplate("Atari 5200", "A5200", "Atari5200", "ATARI5200", "a52 bin car"),
    StationTemplate("ColecoVision", "Coleco", "Coleco", "Coleco", "col bin rom"),
    StationTemplate("TurboGrafx-16 / PC Engine", "TG16", "TGFX16", "TGFX16", "pce bin sgx"),
    StationTemplate("Neo Geo", "NeoGeo", "NEOGEO", "NEOGEO", "neo"),
    StationTemplate("Arcade", "Arcade", "_Arcade", "", "mra"),
    StationTemplate("PlayStation 1", "PS1", "PSX", "PSX", "cue chd bin iso img pbp"),
    StationTemplate("PlayStation", "PSX", "PSX", "PSX", "cue chd bin iso img pbp"),
    StationTemplate("Sega CD / Mega CD", "SegaCD", "MegaCD", "MegaCD", "cue chd iso"),
    StationTemplate("Sega Saturn", "Saturn", "Saturn", "Saturn", "cue chd"),
    StationTemplate("Sega 32X", "S32X", "S32X", "S32X", "32x bin"),
    StationTemplate("Commodore 64", "C64", "C64", "C64", "prg crt t64 d64"),
    StationTemplate("Amiga", "Amiga", "Amiga", "Minimig", "adf hdf"),
    StationTemplate("Atari ST", "AtariST", "AtariST", "AtariST", "st stx"),
    StationTemplate("MSX", "MSX", "MSX", "MSX", "rom dsk cas mx1 mx2"),
    StationTemplate("ZX Spectrum", "Spectrum", "Spectrum", "Spectrum", "tap tzx z80 dsk trd"),
    StationTemplate("Amstrad CPC", "CPC", "Amstrad", "Amstrad", "dsk cdt cpr"),
    StationTemplate("Intellivision", "Intv", "Intellivision", "Intellivision", "int bin rom"),
    StationTemplate("Vectrex", "Vectrex", "Vectrex", "Vectrex", "vec bin rom"),
    StationTemplate("WonderSwan", "WS", "WonderSwan", "WonderSwan", "ws wsc"),
    StationTemplate("Neo Geo Pocket", "NGP", "NeoGeo", "NeoGeo", "ngp ngc"),
]


def find_template(short_name: str) -> Optional[StationTemplate]:
    """
    Look up a template by short name (case-insensitive).

    Returns the first match; some short names (GB/GBC) share a folder.
    """
    wanted = short_name.lower()
    for template in STATION_TEMPLATES:
        if template.short_name.lower() == wanted:
            return template
    return None
