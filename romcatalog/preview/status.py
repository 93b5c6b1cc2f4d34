"""Preview request state."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class PreviewStatus(Enum):
    """
    Lifecycle of the current preview.

    NONE -> LOADING -> READY | NOT_FOUND | ERROR | NO_INTERNET,
    and any state -> NONE on clear().
    """
    NONE = "none"
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    ERROR = "error"
    NO_INTERNET = "no_internet"


@dataclass
class PreviewResult:
    """
    The preview being shown for one ROM.

    Readers must not touch image/width/height while status is LOADING.
    """
    status: PreviewStatus = PreviewStatus.NONE
    image: Optional[Any] = None     # Decoded PIL.Image.Image
    width: int = 0
    height: int = 0
    rom_name: str = ""
    station_id: Optional[int] = None

    @property
    def ready(self) -> bool:
        return self.status == PreviewStatus.READY

    def release(self) -> None:
        """Close the decoded image, if any."""
        if self.image is not None:
            self.image.close()
            self.image = None
