import logging
from pathlib import Path
from typing import Optional

from mpvnotes.core.config.settings import settings
from mpvnotes.core.errors import OutputAlreadyExists
from mpvnotes.core.shared_types import ClipRange, MediaFile, is_remote
from mpvnotes.features.links.service.codec import seconds_to_hms
from ..domain.interfaces import IClipGenerator
from ..domain.models import ClipRequest
from ..data.ffmpeg_adapter import FFmpegClipAdapter
from ..data.ytdlp_clip_adapter import YtDlpClipAdapter

logger = logging.getLogger(__name__)


def _adapter_for(request: ClipRequest) -> IClipGenerator:
    if request.is_remote:
        return YtDlpClipAdapter()
    return FFmpegClipAdapter()


def default_clip_path(source: str, begin: Optional[float], end: Optional[float], suffix: str = ".mp4") -> Path:
    """Naming: original_0-01-05_0-01-20.mp4"""
    stem = Path(source.rstrip("/")).stem or "clip"
    parts = [stem]
    if begin is not None:
        parts.append(seconds_to_hms(begin, full=True, truncate=True).replace(":", "-"))
    if end is not None:
        parts.append(seconds_to_hms(end, full=True, truncate=True).replace(":", "-"))
    return settings.CLIP_DIR / ("_".join(parts) + suffix)


def create_clip(source: str,
                begin: Optional[float],
                end: Optional[float],
                dest: Optional[str] = None,
                overwrite: bool = False,
                adapter: Optional[IClipGenerator] = None) -> Path:
    """
    Public Service API: Extract a segment from a local file or a URL.

    Args:
        source: Local path or URL.
        begin: Start timestamp in seconds (None = from the start).
        end: End timestamp in seconds (None = to the end).
        dest: Output path; derived from the source name when omitted.
        overwrite: Replace an existing output instead of failing.
        adapter: Clip generator to use; picked by source kind when omitted.

    Returns:
        Path of the written file.
    """
    # 1. Map Primitives to Domain Objects
    if not is_remote(source):
        source_path = Path(source).expanduser()
        if not source_path.is_file():
            raise FileNotFoundError(f"Media file not found: {source_path}")
        source = str(source_path.resolve())

    output = MediaFile(Path(dest).expanduser() if dest else default_clip_path(source, begin, end))
    if output.exists() and not overwrite:
        raise OutputAlreadyExists(output.path)

    time_range = ClipRange(start_seconds=begin or 0.0, end_seconds=end)

    # 2. Create the Request Entity
    request = ClipRequest(source=source, output_video=output, time_range=time_range)

    # 3. Execute Logic
    (adapter or _adapter_for(request)).create_clip(request)
    logger.info(f"Clip written: {output.path}")
    return output.path


def convert_media(source: str, dest: str, overwrite: bool = False,
                  adapter: Optional[IClipGenerator] = None) -> Path:
    """Full-length conversion; the target format follows the dest suffix."""
    return create_clip(source, None, None, dest, overwrite=overwrite, adapter=adapter)
