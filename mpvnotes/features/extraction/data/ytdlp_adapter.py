import logging
from pathlib import Path
from typing import Any, Dict

from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError, download_range_func

from mpvnotes.core.config.settings import settings
from mpvnotes.core.errors import ExternalToolFailed
from mpvnotes.core.shared_types import ClipRange
from ..domain.interfaces import IMediaDownloader
from ..domain.models import MediaDescription, PlaylistEntry

logger = logging.getLogger(__name__)


class YtDlpClient(IMediaDownloader):
    """
    Concrete implementation of IMediaDownloader using the yt-dlp Python API.
    """

    def __init__(self, extra_options: Dict[str, Any] = None):
        self.extra_options = extra_options or {}

    def _options(self, **overrides) -> Dict[str, Any]:
        opts = {
            "quiet": True,
            "no_warnings": True,
            "noprogress": True,
        }
        # yt-dlp wants the directory or the binary itself
        if settings.FFMPEG_BINARY and Path(settings.FFMPEG_BINARY).exists():
            opts["ffmpeg_location"] = settings.FFMPEG_BINARY
        opts.update(self.extra_options)
        opts.update(overrides)
        return opts

    def describe(self, url: str) -> MediaDescription:
        logger.info(f"Fetching metadata: {url}")
        opts = self._options(extract_flat="in_playlist", skip_download=True)

        try:
            with YoutubeDL(opts) as ydl:
                info = ydl.extract_info(url, download=False)
        except DownloadError as e:
            logger.error(f"yt-dlp metadata failed for {url}: {e}")
            raise ExternalToolFailed("yt-dlp", str(e)) from e

        if not info:
            raise ExternalToolFailed("yt-dlp", f"No metadata returned for {url}")

        entries = []
        for entry in info.get("entries") or []:
            if not entry:
                continue
            entry_url = entry.get("webpage_url") or entry.get("url")
            if not entry_url:
                continue
            entries.append(PlaylistEntry(url=entry_url, title=entry.get("title") or ""))

        return MediaDescription(
            url=info.get("webpage_url") or url,
            title=info.get("title") or "",
            duration=info.get("duration"),
            entries=entries,
        )

    def download_clip(self, url: str, clip_range: ClipRange, output: Path) -> Path:
        output.parent.mkdir(parents=True, exist_ok=True)
        overrides = {
            "outtmpl": str(output),
            "format": settings.YTDL_FORMAT,
            "merge_output_format": output.suffix.lstrip(".") or "mp4",
            "overwrites": True,
        }
        if not clip_range.is_full:
            end = clip_range.end_seconds if clip_range.end_seconds is not None else float("inf")
            overrides["download_ranges"] = download_range_func(None, [(clip_range.start_seconds, end)])
            overrides["force_keyframes_at_cuts"] = True

        logger.info(f"Downloading {url} [{clip_range.start_seconds}-{clip_range.end_seconds}] -> {output}")

        try:
            with YoutubeDL(self._options(**overrides)) as ydl:
                retcode = ydl.download([url])
        except DownloadError as e:
            logger.error(f"yt-dlp download failed for {url}: {e}")
            raise ExternalToolFailed("yt-dlp", str(e)) from e

        if retcode:
            raise ExternalToolFailed("yt-dlp", f"exit status {retcode} for {url}")
        return output
