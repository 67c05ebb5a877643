from abc import ABC, abstractmethod
from .models import ClipRequest


class IClipGenerator(ABC):
    """
    Contract for the clipping engine.
    Abstracts away the underlying tool (FFmpeg, yt-dlp) from the business logic.
    """

    @abstractmethod
    def create_clip(self, request: ClipRequest) -> None:
        """
        Writes the requested segment of the source to the output file.

        Args:
            request: The ClipRequest containing source, output, and range.

        Raises:
            ExternalToolMissing: If the tool is not installed.
            ExternalToolFailed: If the underlying process fails.
        """
        pass
