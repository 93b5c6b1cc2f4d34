"""
Shared pytest fixtures and utilities for the romcatalog test suite.
"""

from pathlib import Path
from typing import Dict, Any, Callable

import pytest
import yaml
from PIL import Image

from romcatalog.catalog import CatalogService, RegistryStore, StationRegistry


@pytest.fixture
def games_root(tmp_path: Path) -> Path:
    """
    Empty games directory inside the temp workspace.
    """
    root = tmp_path / "games"
    root.mkdir()
    return root


@pytest.fixture
def stations_file(tmp_path: Path) -> Path:
    return tmp_path / "rom_stations.yaml"


@pytest.fixture
def service(games_root: Path, stations_file: Path) -> CatalogService:
    """
    Catalog service with a persisted (initially empty) registry.

    Only games_root is used as a storage root so the temp workspace
    itself is never scanned.
    """
    registry = StationRegistry(RegistryStore(stations_file))
    return CatalogService(games_root, registry=registry, storage_roots=[games_root])


@pytest.fixture
def make_rom(games_root: Path) -> Callable[..., Path]:
    """
    Write a ROM file below games_root.

    Usage:
        path = make_rom("NES/Zelda_II.nes", size=4096)
    """

    def _builder(relative: str, size: int = 16) -> Path:
        path = games_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\0" * size)
        return path

    return _builder


@pytest.fixture
def make_png() -> Callable[..., Path]:
    """
    Write a small valid PNG.

    Usage:
        path = make_png(tmp_path / "cover.png", size=(4, 3))
    """

    def _builder(path: Path, size=(2, 2), color=(255, 0, 0)) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path, format="PNG")
        return path

    return _builder


@pytest.fixture
def png_bytes(tmp_path: Path) -> bytes:
    """Raw bytes of a 3x2 PNG, for mocked HTTP responses."""
    path = tmp_path / "payload.png"
    Image.new("RGB", (3, 2), (0, 128, 0)).save(path, format="PNG")
    return path.read_bytes()


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    """
    Create a minimal config.yaml in a temp directory.

    Usage:
        path = make_config({"preview": {"timeout": 5}})
    """

    def _builder(overrides: Dict[str, Any] | None = None) -> Path:
        base = {
            "paths": {
                "games_root": str(tmp_path / "games"),
                "storage_roots": [str(tmp_path / "games")],
            },
            "logging": {"console": False},
        }
        if overrides:
            base = merge_dicts(base, overrides)

        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text(yaml.safe_dump(base))
        return cfg_path

    return _builder


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow+deep merge helper for fixture config dictionaries.
    """
    result: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
