"""
Preview image downloader.

Downloads a URL to a local file with a fixed timeout. A failed or empty
download never leaves a file behind.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "romcatalog/0.1.0"


class PreviewDownloader:
    """
    Downloads preview images to the cache.

    Features:
    - HTTP GET with configurable timeout
    - Writes to a temporary file and renames on success
    - Empty responses are treated as failures
    """

    def __init__(self, client: httpx.AsyncClient, timeout: float = 10):
        """
        Initialize preview downloader.

        Args:
            client: httpx.AsyncClient for HTTP requests
            timeout: Request timeout in seconds
        """
        self.client = client
        self.timeout = timeout

    async def download(self, url: str, output_path: Path) -> Tuple[bool, Optional[str]]:
        """
        Download a URL to output_path.

        Args:
            url: Image URL
            output_path: Destination file

        Returns:
            Tuple of (success: bool, error_message: str or None)
        """
        temp_path = output_path.with_suffix(output_path.suffix + '.tmp')

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            response = await self.client.get(
                url,
                timeout=self.timeout,
                headers={'User-Agent': USER_AGENT}
            )
            response.raise_for_status()

            if not response.content:
                self._discard(output_path)
                return False, "Empty response"

            with open(temp_path, 'wb') as f:
                f.write(response.content)
            temp_path.replace(output_path)
            return True, None

        except httpx.HTTPError as e:
            self._discard(temp_path)
            self._discard(output_path)
            return False, f"Download failed: {e}"
        except OSError as e:
            self._discard(temp_path)
            return False, f"Could not write {output_path}: {e}"

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.debug(f"Could not remove {path}: {e}")
