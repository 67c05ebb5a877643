import logging

from mpvnotes.features.extraction.domain.interfaces import IMediaDownloader
from ..domain.interfaces import IClipGenerator
from ..domain.models import ClipRequest

logger = logging.getLogger(__name__)


class YtDlpClipAdapter(IClipGenerator):
    """
    IClipGenerator for remote sources: yt-dlp downloads only the range.
    """

    def __init__(self, downloader: IMediaDownloader = None):
        if downloader is None:
            from mpvnotes.features.extraction.data.ytdlp_adapter import YtDlpClient
            downloader = YtDlpClient()
        self.downloader = downloader

    def create_clip(self, request: ClipRequest) -> None:
        request.output_video.ensure_parent_dir()
        self.downloader.download_clip(request.source, request.time_range, request.output_video.path)
