import logging
from typing import Dict, Optional
from urllib.parse import urlparse

from ..domain.interfaces import IMediaDownloader, ISiteHandler
from ..domain.models import ExtractionResult
from ..data.site_handlers import BilibiliSiteHandler, DefaultSiteHandler, YtDlpSiteHandler

logger = logging.getLogger(__name__)


class SiteHandlerRegistry:
    """
    Maps a host key (e.g. 'youtube.com') to the handler for that site.
    A key matches the URL host exactly or as a dot-suffix.
    """

    def __init__(self, default: Optional[ISiteHandler] = None):
        self._handlers: Dict[str, ISiteHandler] = {}
        self.default = default or DefaultSiteHandler()

    def register(self, host_key: str, handler: ISiteHandler) -> None:
        self._handlers[host_key.lower().lstrip(".")] = handler

    def handler_for(self, url: str) -> ISiteHandler:
        host = (urlparse(url).hostname or "").lower()
        # Longest key first so 'music.youtube.com' beats 'youtube.com'
        for key in sorted(self._handlers, key=len, reverse=True):
            if host == key or host.endswith("." + key):
                return self._handlers[key]
        return self.default

    def extract(self, url: str) -> ExtractionResult:
        handler = self.handler_for(url)
        logger.debug(f"Extracting {url} with {type(handler).__name__}")
        return handler.extract(url)


def default_registry(downloader: Optional[IMediaDownloader] = None) -> SiteHandlerRegistry:
    """Registry with the built-in site handlers."""
    if downloader is None:
        from ..data.ytdlp_adapter import YtDlpClient
        downloader = YtDlpClient()

    registry = SiteHandlerRegistry()
    ytdlp = YtDlpSiteHandler(downloader)
    for host in ("youtube.com", "youtu.be", "vimeo.com"):
        registry.register(host, ytdlp)
    registry.register("bilibili.com", BilibiliSiteHandler(downloader))
    return registry
