from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from mpvnotes.core.shared_types import is_remote
from mpvnotes.features.extraction.domain.models import MediaDescription
from .interfaces import IPlayerChannel


@dataclass(frozen=True)
class PlaybackRequest:
    """User intent to play something, optionally between two timestamps."""
    path: str
    begin: Optional[float] = None
    end: Optional[float] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not str(self.path).strip():
            raise ValueError("Nothing to play: empty path.")

    @property
    def is_remote(self) -> bool:
        return is_remote(self.path)


@dataclass
class PlaybackSession:
    """
    State of one player session.

    `path` is what the player is actually playing (links point at it);
    `requested` is what the user asked for, e.g. a playlist URL.

    `metadata` is the current-metadata slot: it is replaced wholesale
    every time a new playback starts on this session.
    """
    channel: IPlayerChannel
    path: str
    requested: str
    metadata: Optional[MediaDescription] = None
    loaded: bool = False

    @property
    def title(self) -> str:
        if self.metadata and self.metadata.title:
            return self.metadata.title
        return self.path
