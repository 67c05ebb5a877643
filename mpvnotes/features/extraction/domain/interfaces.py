from abc import ABC, abstractmethod
from pathlib import Path

from mpvnotes.core.shared_types import ClipRange
from .models import ExtractionResult, MediaDescription


class ISiteHandler(ABC):
    """
    Contract for per-site URL handling.
    Each handler decides how a URL from its host should be played.
    """

    @abstractmethod
    def extract(self, url: str) -> ExtractionResult:
        pass


class IMediaDownloader(ABC):
    """
    Contract for the metadata/download tool.
    """

    @abstractmethod
    def describe(self, url: str) -> MediaDescription:
        """Flat description of a URL: playlist entries or a single item."""
        pass

    @abstractmethod
    def download_clip(self, url: str, clip_range: ClipRange, output: Path) -> Path:
        """
        Downloads `url` (only the given range) to `output`.

        Raises:
            ExternalToolFailed: If the download fails.
        """
        pass
