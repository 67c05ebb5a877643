import logging

from mpvnotes.core.config.settings import settings
from ..domain.interfaces import IMediaDownloader, ISiteHandler
from ..domain.models import ExtractionResult

logger = logging.getLogger(__name__)


class DefaultSiteHandler(ISiteHandler):
    """Hands the URL to mpv untouched."""

    def extract(self, url: str) -> ExtractionResult:
        return ExtractionResult(resolved_url=url)


class YtDlpSiteHandler(ISiteHandler):
    """
    Playlist-aware handler for sites yt-dlp knows.
    A playlist URL resolves to its first entry; the full listing is kept
    as playlist info so the caller can offer the other entries.
    """

    def __init__(self, downloader: IMediaDownloader):
        self.downloader = downloader

    def player_options(self) -> dict:
        return {"ytdl-format": settings.YTDL_FORMAT}

    def extract(self, url: str) -> ExtractionResult:
        description = self.downloader.describe(url)

        resolved = url
        if description.is_playlist:
            resolved = description.entries[0].url
            logger.info(f"Playlist '{description.title}' has {len(description.entries)} entries, starting with {resolved}")

        return ExtractionResult(
            resolved_url=resolved,
            options=self.player_options(),
            playlist_info=description,
        )


class BilibiliSiteHandler(YtDlpSiteHandler):
    """Bilibili refuses stream requests without a matching Referer."""

    REFERER = "https://www.bilibili.com"

    def player_options(self) -> dict:
        options = super().player_options()
        options["http-header-fields"] = f"Referer: {self.REFERER}"
        return options
