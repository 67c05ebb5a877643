import shutil
import subprocess
import logging
from mpvnotes.core.config.settings import settings
from mpvnotes.core.errors import ExternalToolFailed, ExternalToolMissing
from ..domain.interfaces import IClipGenerator
from ..domain.models import ClipRequest

logger = logging.getLogger(__name__)

# Containers we re-encode to H.264/AAC; anything else is left to ffmpeg's defaults
REENCODE_SUFFIXES = {".mp4", ".mkv", ".mov", ".m4v"}


class FFmpegClipAdapter(IClipGenerator):
    """
    Concrete implementation of IClipGenerator using FFmpeg.
    Ensures precise cuts by re-encoding streams.
    """

    def build_command(self, request: ClipRequest) -> list:
        # -y: Overwrite (existence was already checked by the service)
        # -ss before -i: fast input seeking
        # -t: Duration of the clip
        cmd = [settings.FFMPEG_BINARY, "-hide_banner", "-y"]

        time_range = request.time_range
        if time_range.start_seconds:
            cmd += ["-ss", str(time_range.start_seconds)]
        cmd += ["-i", request.source]
        if time_range.duration is not None:
            cmd += ["-t", str(time_range.duration)]

        if request.output_video.path.suffix.lower() in REENCODE_SUFFIXES:
            # Re-encode video to ensure frame accuracy (prevents black frames at start)
            cmd += ["-c:v", "libx264", "-c:a", "aac"]

        cmd.append(str(request.output_video.path))
        return cmd

    def create_clip(self, request: ClipRequest) -> None:
        if shutil.which(settings.FFMPEG_BINARY) is None:
            raise ExternalToolMissing(settings.FFMPEG_BINARY)

        request.output_video.ensure_parent_dir()
        cmd = self.build_command(request)

        logger.info(f"Executing FFmpeg Clip: {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True,
                timeout=settings.tool_timeout
            )
        except subprocess.CalledProcessError as e:
            error_message = e.stderr if e.stderr else "Unknown FFmpeg error"
            logger.error(f"FFmpeg Clipping Failed. STDERR: {error_message}")
            raise ExternalToolFailed("ffmpeg", error_message) from e
        except subprocess.TimeoutExpired as e:
            logger.error(f"FFmpeg timed out after {e.timeout}s")
            raise ExternalToolFailed("ffmpeg", f"timed out after {e.timeout}s") from e
