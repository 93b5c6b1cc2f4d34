"""Filename helpers shared by the scanner and the browser."""

from typing import List

# Extension tokens longer than this never match
MAX_EXTENSION_LEN = 8


def parse_extensions(extensions: str) -> List[str]:
    """
    Split a space-separated extension allow-list into lowercase tokens.

    Args:
        extensions: Allow-list such as "cue chd bin iso"

    Returns:
        List of lowercase extensions without dots
    """
    return [
        token.lower()
        for token in (extensions or "").split()
        if 0 < len(token) <= MAX_EXTENSION_LEN
    ]


def match_extension(filename: str, extensions: str) -> bool:
    """
    Check whether a filename is admitted by an extension allow-list.

    Matching is case-insensitive and tolerant of surrounding whitespace.
    An empty allow-list matches every filename.

    Args:
        filename: File name (not a path)
        extensions: Space-separated allow-list (e.g. "nes snes")

    Returns:
        True if the file's extension is in the allow-list

    Examples:
        >>> match_extension("Game.NES", "nes snes")
        True
        >>> match_extension("game.txt", "nes")
        False
    """
    if not extensions or not extensions.strip():
        return True

    if "." not in filename:
        return False

    ext = filename.rsplit(".", 1)[1][:MAX_EXTENSION_LEN].lower()
    return ext in parse_extensions(extensions)


def derive_display_name(filename: str) -> str:
    """
    Build a display name from a ROM filename.

    Strips the last extension and replaces underscores with spaces,
    so "Zelda_II.nes" becomes "Zelda II".
    """
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    return stem.replace("_", " ")


def format_size(size: int) -> str:
    """
    Format a byte count for display.

    Args:
        size: Size in bytes

    Returns:
        Human readable size ("512 B", "4.0 KB", "1.5 MB", "2.0 GB")
    """
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024.0:.1f} KB"
    if size < 1024 * 1024 * 1024:
        return f"{size / (1024.0 * 1024.0):.1f} MB"
    return f"{size / (1024.0 * 1024.0 * 1024.0):.1f} GB"
