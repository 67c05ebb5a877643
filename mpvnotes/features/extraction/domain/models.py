from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PlaylistEntry:
    url: str
    title: str = ""


@dataclass
class MediaDescription:
    """
    What yt-dlp tells us about a URL.
    `entries` is filled for flat playlists and empty for a single item.
    """
    url: str
    title: str = ""
    duration: Optional[float] = None
    entries: List[PlaylistEntry] = field(default_factory=list)

    @property
    def is_playlist(self) -> bool:
        return bool(self.entries)


@dataclass
class ExtractionResult:
    """
    Output of a site handler: the URL mpv should open,
    the player options it needs, and the playlist info if any.
    """
    resolved_url: str
    options: Dict[str, Any] = field(default_factory=dict)
    playlist_info: Optional[MediaDescription] = None
