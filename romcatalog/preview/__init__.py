"""
Preview artwork: local cache lookup and libretro-thumbnails download.
"""

from .status import PreviewStatus, PreviewResult
from .cache import PreviewCache
from .decoder import DecodeError, decode_image, encode_png
from .downloader import PreviewDownloader
from .connectivity import check_connectivity
from .thumbnails import (
    THUMBNAIL_CATEGORIES,
    LIBRETRO_SYSTEM_MAP,
    libretro_system_name,
    build_thumbnail_url,
)
from .pipeline import PreviewPipeline

__all__ = [
    "PreviewStatus",
    "PreviewResult",
    "PreviewCache",
    "DecodeError",
    "decode_image",
    "encode_png",
    "PreviewDownloader",
    "check_connectivity",
    "THUMBNAIL_CATEGORIES",
    "LIBRETRO_SYSTEM_MAP",
    "libretro_system_name",
    "build_thumbnail_url",
    "PreviewPipeline",
]
