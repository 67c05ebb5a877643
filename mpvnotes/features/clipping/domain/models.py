from dataclasses import dataclass

from mpvnotes.core.shared_types import ClipRange, MediaFile, is_remote


@dataclass(frozen=True)
class ClipRequest:
    """
    Cut (or convert) `source` into `output_video`.
    `source` is a local path or a URL; a full ClipRange means no cut.
    """
    source: str
    output_video: MediaFile
    time_range: ClipRange = ClipRange()

    @property
    def is_remote(self) -> bool:
        return is_remote(self.source)
