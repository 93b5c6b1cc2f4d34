"""
On-disk preview cache.

Directory structure:
    <cache_dir>/<station short name>/<display name>.<png|jpg>
"""

import logging
import shutil
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

CACHE_EXTENSIONS = ("png", "jpg")


class PreviewCache:
    """Locates, checks and purges cached preview images."""

    def __init__(self, cache_dir: Path):
        self.cache_dir = Path(cache_dir)

    def ensure(self) -> None:
        """Create the cache directory if it doesn't exist."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def station_dir(self, short_name: str) -> Path:
        return self.cache_dir / short_name

    def path_for(self, short_name: str, rom_name: str, extension: str = "png") -> Path:
        """Cache path for a ROM's preview."""
        return self.station_dir(short_name) / f"{rom_name}.{extension}"

    def candidates(self, short_name: str, rom_name: str) -> List[Path]:
        """Cache paths to probe, in order."""
        return [self.path_for(short_name, rom_name, ext) for ext in CACHE_EXTENSIONS]

    def exists(self, short_name: str, rom_name: str) -> bool:
        """True when the PNG preview is cached."""
        return self.path_for(short_name, rom_name).is_file()

    def clear(self) -> None:
        """Remove everything below the cache directory."""
        if not self.cache_dir.is_dir():
            return
        for child in self.cache_dir.iterdir():
            self._remove(child)
        logger.info(f"Cleared preview cache {self.cache_dir}")

    def clear_station(self, short_name: str) -> None:
        """Remove one station's cached previews."""
        station_dir = self.station_dir(short_name)
        if not station_dir.is_dir():
            return
        for child in station_dir.iterdir():
            self._remove(child)
        logger.info(f"Cleared preview cache for {short_name}")

    @staticmethod
    def _remove(path: Path) -> None:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            logger.warning(f"Could not remove cached preview {path}: {e}")
