"""
Preview pipeline: local cache first, libretro-thumbnails as fallback.

Three ways to resolve a preview:
- load_local(): decode from the recorded preview path or the cache
- fetch_online(): connectivity check, download, then load_local()
- fetch_async(): fetch_online() in a single background task; starting a
  new one cancels and awaits the previous one first

batch_fetch() downloads a whole station's previews on the caller's task
and must not run concurrently with fetch_async().
"""

import asyncio
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx

from romcatalog.catalog.models import RomEntry
from romcatalog.catalog.service import CatalogService
from romcatalog.config.loader import get_config_value
from romcatalog.preview.cache import PreviewCache
from romcatalog.preview.connectivity import check_connectivity
from romcatalog.preview.decoder import DecodeError, decode_image, encode_png
from romcatalog.preview.downloader import PreviewDownloader
from romcatalog.preview.status import PreviewResult, PreviewStatus
from romcatalog.preview.thumbnails import THUMBNAIL_CATEGORIES, build_thumbnail_url

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://thumbnails.libretro.com"
PREVIEW_FETCH_TIMEOUT = 10
BATCH_DELAY_SECONDS = 0.1

ProgressCallback = Callable[[int, int, str], None]


class PreviewPipeline:
    """
    Resolves preview artwork for catalog entries.

    Exactly one PreviewResult is "current" at a time. Each resolution
    writes into its own result object, so a superseded background fetch
    can never overwrite the result that replaced it.
    """

    def __init__(
        self,
        catalog: CatalogService,
        cache: PreviewCache,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = PREVIEW_FETCH_TIMEOUT,
        batch_delay: float = BATCH_DELAY_SECONDS,
        connectivity_host: str = "github.com",
        connectivity_port: int = 443
    ):
        """
        Initialize preview pipeline.

        Args:
            catalog: Catalog service (for station lookups and batch entries)
            cache: Preview cache
            client: httpx.AsyncClient; one is created (and owned) if omitted
            base_url: libretro-thumbnails root URL
            timeout: Download timeout in seconds
            batch_delay: Pause between batch downloads in seconds
            connectivity_host: Host probed before going online
            connectivity_port: Port probed before going online
        """
        self.catalog = catalog
        self.cache = cache
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(follow_redirects=True)
        self.downloader = PreviewDownloader(self.client, timeout=timeout)
        self.base_url = base_url
        self.batch_delay = batch_delay
        self.connectivity_host = connectivity_host
        self.connectivity_port = connectivity_port

        self._current = PreviewResult()
        self._task: Optional[asyncio.Task] = None
        self._task_lock = asyncio.Lock()
        self._batch_cancel = threading.Event()

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        catalog: CatalogService,
        client: Optional[httpx.AsyncClient] = None
    ) -> "PreviewPipeline":
        """Build a pipeline from a validated configuration dictionary."""
        cache_dir = get_config_value(config, "paths.preview_cache")
        cache_path = (
            Path(cache_dir).expanduser()
            if cache_dir
            else catalog.games_root / "previews"
        )
        cache = PreviewCache(cache_path)
        cache.ensure()

        return cls(
            catalog,
            cache,
            client=client,
            base_url=get_config_value(config, "preview.base_url", DEFAULT_BASE_URL),
            timeout=get_config_value(config, "preview.timeout", PREVIEW_FETCH_TIMEOUT),
            batch_delay=get_config_value(config, "preview.batch_delay", BATCH_DELAY_SECONDS),
            connectivity_host=get_config_value(config, "preview.connectivity_host", "github.com"),
            connectivity_port=get_config_value(config, "preview.connectivity_port", 443),
        )

    @property
    def current(self) -> PreviewResult:
        return self._current

    def get_status(self) -> PreviewStatus:
        return self._current.status

    def clear(self) -> None:
        """Drop the current preview."""
        self._current.release()
        self._current = PreviewResult()

    def _begin(self, entry: RomEntry) -> PreviewResult:
        """Replace the current preview with a fresh LOADING result."""
        self._current.release()
        self._current = PreviewResult(
            status=PreviewStatus.LOADING,
            rom_name=entry.display_name,
            station_id=entry.station_id,
        )
        return self._current

    def _short_name(self, entry: RomEntry) -> Optional[str]:
        station = self.catalog.registry.get(entry.station_id)
        return station.short_name if station else None

    # ------------------------------------------------------------------
    # Local resolution
    # ------------------------------------------------------------------

    def load_local(self, entry: RomEntry) -> PreviewResult:
        """
        Load a preview from disk.

        Probes the entry's recorded preview path, then the PNG and JPG
        cache paths. The first decodable file wins.

        Returns:
            The new current result (READY or NOT_FOUND)
        """
        return self._resolve_local(entry, self._begin(entry))

    def _local_candidates(self, entry: RomEntry) -> List[Path]:
        candidates = []
        if entry.preview.has_preview and entry.preview.preview_path:
            candidates.append(Path(entry.preview.preview_path))
        short_name = self._short_name(entry) or "unknown"
        candidates.extend(self.cache.candidates(short_name, entry.display_name))
        return candidates

    def _resolve_local(self, entry: RomEntry, result: PreviewResult) -> PreviewResult:
        for candidate in self._local_candidates(entry):
            if not candidate.is_file():
                continue
            try:
                image, width, height = decode_image(candidate)
            except DecodeError as e:
                logger.debug(f"Skipping preview candidate: {e}")
                continue

            result.image = image
            result.width = width
            result.height = height
            result.status = PreviewStatus.READY
            logger.debug(f"Loaded preview for {entry.display_name} from {candidate}")
            return result

        result.status = PreviewStatus.NOT_FOUND
        return result

    # ------------------------------------------------------------------
    # Online resolution
    # ------------------------------------------------------------------

    async def check_internet(self) -> bool:
        return await check_connectivity(self.connectivity_host, self.connectivity_port)

    async def fetch_online(self, entry: RomEntry) -> PreviewResult:
        """
        Download a preview into the cache, then load it.

        Tries box art, then screenshot, then title screen. A cache write
        failure ends the fetch as NOT_FOUND or ERROR and is never raised.

        Returns:
            The new current result (READY, NOT_FOUND, ERROR or NO_INTERNET)
        """
        return await self._fetch(entry, self._begin(entry))

    async def _fetch(self, entry: RomEntry, result: PreviewResult) -> PreviewResult:
        try:
            return await self._resolve_online(entry, result)
        except (OSError, httpx.HTTPError) as e:
            logger.warning(f"Preview fetch failed for {entry.display_name}: {e}")
            result.status = PreviewStatus.ERROR
            return result

    async def _resolve_online(self, entry: RomEntry, result: PreviewResult) -> PreviewResult:
        short_name = self._short_name(entry)
        if short_name is None:
            result.status = PreviewStatus.ERROR
            return result

        if not await self.check_internet():
            result.status = PreviewStatus.NO_INTERNET
            return result

        save_path = self.cache.path_for(short_name, entry.display_name)
        for category in THUMBNAIL_CATEGORIES:
            url = build_thumbnail_url(self.base_url, short_name, entry.display_name, category)
            success, error = await self.downloader.download(url, save_path)
            if success:
                logger.info(f"Downloaded {category} preview for {entry.display_name}")
                return self._resolve_local(entry, result)
            logger.debug(f"{category} unavailable for {entry.display_name}: {error}")

        result.status = PreviewStatus.NOT_FOUND
        return result

    # ------------------------------------------------------------------
    # Single-slot background fetch
    # ------------------------------------------------------------------

    async def fetch_async(self, entry: RomEntry) -> None:
        """
        Start fetching a preview in the background.

        A fetch already in flight is cancelled and awaited before the new
        one becomes current. Overlapping calls are serialized, so at most
        one fetch is ever in flight.
        """
        async with self._task_lock:
            await self._cancel_task()
            result = self._begin(entry)
            self._task = asyncio.create_task(self._fetch(entry, result))

    def poll(self) -> bool:
        """True when no background fetch is running."""
        return self._task is None or self._task.done()

    async def _cancel_task(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.wait({task})
        logger.debug("Superseded background preview fetch")

    # ------------------------------------------------------------------
    # Batch fetch
    # ------------------------------------------------------------------

    async def batch_fetch(
        self,
        station_id: int,
        progress_callback: Optional[ProgressCallback] = None
    ) -> int:
        """
        Download previews for every ROM of a station.

        Entries whose PNG is already cached are skipped. The callback is
        called once per entry, cached or not. batch_cancel() stops the
        loop before the next entry; previews already downloaded stay.

        Args:
            station_id: Station slot index
            progress_callback: Optional callback(current, total, rom_name)

        Returns:
            Number of newly downloaded previews
        """
        self._batch_cancel.clear()

        station = self.catalog.registry.get(station_id)
        if station is None:
            return 0

        entries = self.catalog.store.entries_for_station(station_id)
        total = len(entries)
        downloaded = 0

        for current, entry in enumerate(entries, 1):
            if self._batch_cancel.is_set():
                logger.info(f"Batch preview fetch cancelled after {current - 1}/{total}")
                break

            if self.cache.exists(station.short_name, entry.display_name):
                if progress_callback:
                    progress_callback(current, total, entry.display_name)
                continue

            result = await self.fetch_online(entry)
            if result.ready:
                downloaded += 1

            if progress_callback:
                progress_callback(current, total, entry.display_name)

            await asyncio.sleep(self.batch_delay)

        logger.info(f"Batch preview fetch for {station.short_name}: {downloaded} downloaded")
        return downloaded

    def batch_cancel(self) -> None:
        """Request cancellation of the running batch fetch."""
        self._batch_cancel.set()

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def cache_exists(self, entry: RomEntry) -> bool:
        short_name = self._short_name(entry)
        return bool(short_name) and self.cache.exists(short_name, entry.display_name)

    def cache_save(self, entry: RomEntry, image) -> bool:
        """
        Encode an image as PNG into the entry's cache slot.

        Returns:
            True on success
        """
        short_name = self._short_name(entry)
        if short_name is None or image is None:
            return False
        try:
            encode_png(image, self.cache.path_for(short_name, entry.display_name))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to cache preview for {entry.display_name}: {e}")
            return False
        return True

    def cache_clear(self) -> None:
        self.cache.clear()

    def cache_clear_station(self, station_id: int) -> None:
        """Purge one station's cached previews; the catalog is untouched."""
        station = self.catalog.registry.get(station_id)
        if station is None:
            return
        self.cache.clear_station(station.short_name)

    async def close(self) -> None:
        """Stop any background fetch and release resources."""
        async with self._task_lock:
            await self._cancel_task()
        self.clear()
        if self._owns_client:
            await self.client.aclose()
