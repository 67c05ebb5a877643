from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def is_remote(path: str) -> bool:
    """True for anything that looks like a URL rather than a local file."""
    return "://" in str(path)


@dataclass(frozen=True)
class ClipRange:
    """
    Value Object representing a span of media time.
    The end is optional: an open range runs to the end of the media.
    """
    start_seconds: float = 0.0
    end_seconds: Optional[float] = None

    def __post_init__(self):
        if self.start_seconds < 0 or (self.end_seconds is not None and self.end_seconds < 0):
            raise ValueError("Timestamps cannot be negative.")
        if self.end_seconds is not None and self.start_seconds >= self.end_seconds:
            raise ValueError(f"Start time ({self.start_seconds}) must be before end time ({self.end_seconds}).")

    @property
    def duration(self) -> Optional[float]:
        if self.end_seconds is None:
            return None
        return self.end_seconds - self.start_seconds

    @property
    def is_full(self) -> bool:
        return self.start_seconds == 0 and self.end_seconds is None


@dataclass(frozen=True)
class MediaFile:
    """
    Entity representing a media file on the filesystem.
    Encapsulates path validation and directory creation.
    """
    path: Path

    def __post_init__(self):
        if str(self.path).strip() == "." or str(self.path).strip() == "":
            raise ValueError("File path cannot be empty.")

    def exists(self) -> bool:
        return self.path.exists()

    def ensure_parent_dir(self) -> None:
        """Creates the directory structure for this file if it doesn't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)


def free_path(path: Path) -> Path:
    """`path` itself if unused, else the first free `stem_1.ext`, `stem_2.ext`, ..."""
    path = Path(path)
    candidate = path
    counter = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.stem}_{counter}{path.suffix}")
        counter += 1
    return candidate
