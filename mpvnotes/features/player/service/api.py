import logging
from pathlib import Path
from typing import Optional

from mpvnotes.core.config.settings import settings
from mpvnotes.core.errors import NoLivePlayer, NotSeekable, OutputAlreadyExists
from mpvnotes.core.shared_types import MediaFile, free_path, is_remote
from mpvnotes.features.extraction.service.registry import SiteHandlerRegistry
from mpvnotes.features.links.domain.models import MediaLink
from mpvnotes.features.links.service.codec import number_to_string, seconds_to_hms
from ..domain.interfaces import IPlayerChannel
from ..domain.models import PlaybackRequest, PlaybackSession

logger = logging.getLogger(__name__)


def open_player(**mpv_options) -> IPlayerChannel:
    """
    Builds the default player channel.
    Imported lazily so the rest of the package works without libmpv.
    """
    from ..data.mpv_adapter import MpvPlayerChannel
    return MpvPlayerChannel(**mpv_options)


def _load(channel: IPlayerChannel, request: PlaybackRequest, registry: SiteHandlerRegistry):
    """Resolves the request and starts it on the channel."""
    path = request.path
    options = {}
    metadata = None

    if request.is_remote:
        extraction = registry.extract(path)
        path = extraction.resolved_url
        options.update(extraction.options)
        metadata = extraction.playlist_info
    else:
        path = str(Path(path).expanduser().resolve())
        if not Path(path).exists():
            raise FileNotFoundError(f"Media file not found: {path}")

    if request.begin is not None:
        options["start"] = number_to_string(request.begin)
    if request.end is not None:
        options["end"] = number_to_string(request.end)
    options.update(request.options)

    channel.play(path, options)
    return path, metadata


def start_playback(channel: IPlayerChannel,
                   request: PlaybackRequest,
                   registry: SiteHandlerRegistry,
                   library=None) -> PlaybackSession:
    """
    Public Service API: start playing a path or URL and return its session.

    Args:
        channel: Player to drive.
        request: What to play and where to start/stop.
        registry: Site handlers for remote URLs.
        library: Optional LibraryService; the play is recorded in history.
    """
    resolved, metadata = _load(channel, request, registry)

    session = PlaybackSession(
        channel=channel,
        path=resolved,
        requested=request.path,
        metadata=metadata,
    )

    def _mark_loaded():
        session.loaded = True
        logger.debug(f"Player loaded {session.path}")

    channel.on_file_loaded(_mark_loaded)

    if library is not None:
        library.record_play(session.requested, session.title)

    logger.info(f"Playing {session.title}")
    return session


def restart_playback(session: PlaybackSession,
                     request: PlaybackRequest,
                     registry: SiteHandlerRegistry,
                     library=None) -> PlaybackSession:
    """Plays something new on an existing session, replacing its metadata."""
    require_live(session)
    resolved, metadata = _load(session.channel, request, registry)

    session.path = resolved
    session.requested = request.path
    session.metadata = metadata
    session.loaded = False

    if library is not None:
        library.record_play(session.requested, session.title)
    return session


def require_live(session: Optional[PlaybackSession]) -> PlaybackSession:
    if session is None or not session.channel.is_alive():
        raise NoLivePlayer()
    return session


def require_seekable(session: PlaybackSession) -> PlaybackSession:
    require_live(session)
    if session.channel.get_property("seekable") is False:
        raise NotSeekable(session.path)
    return session


def current_position(session: PlaybackSession) -> float:
    require_live(session)
    return float(session.channel.get_property("time-pos") or 0.0)


def duration(session: PlaybackSession) -> Optional[float]:
    require_live(session)
    value = session.channel.get_property("duration")
    return float(value) if value is not None else None


def seek_to(session: PlaybackSession, seconds: float) -> float:
    require_seekable(session)
    total = duration(session)
    target = max(0.0, float(seconds))
    if total is not None:
        target = min(target, total)
    session.channel.set_property("time-pos", target)
    return target


def seek_percent(session: PlaybackSession, percent: float) -> None:
    require_seekable(session)
    session.channel.set_property("percent-pos", max(0.0, min(100.0, float(percent))))


def toggle_pause(session: PlaybackSession) -> bool:
    require_live(session)
    paused = not bool(session.channel.get_property("pause"))
    session.channel.set_property("pause", paused)
    return paused


def set_speed(session: PlaybackSession, speed: float) -> float:
    require_live(session)
    if speed <= 0:
        raise ValueError(f"Speed must be positive: {speed}")
    session.channel.set_property("speed", float(speed))
    return float(speed)


def frame_step(session: PlaybackSession, forward: bool = True) -> None:
    require_seekable(session)
    session.channel.command("frame-step" if forward else "frame-back-step")


def chapter_step(session: PlaybackSession, delta: int = 1) -> None:
    require_seekable(session)
    session.channel.command("add", "chapter", str(delta))


def add_subtitle(session: PlaybackSession, path: str) -> None:
    require_live(session)
    sub = Path(path).expanduser()
    if not sub.exists():
        raise FileNotFoundError(f"Subtitle file not found: {sub}")
    session.channel.command("sub-add", str(sub.resolve()), "select")


def remove_subtitle(session: PlaybackSession) -> None:
    require_live(session)
    session.channel.command("sub-remove")


def subtitle_text(session: PlaybackSession) -> str:
    require_live(session)
    return session.channel.get_property("sub-text") or ""


def current_link(session: PlaybackSession, begin: Optional[float] = None, with_end: bool = False) -> MediaLink:
    """
    Link to the moment being played.
    With `begin`, the current position becomes the end of the range.
    """
    position = current_position(session)
    if begin is not None and with_end:
        return MediaLink(path=session.path, begin=begin, end=position)
    return MediaLink(path=session.path, begin=position)


def default_screenshot_path(session: PlaybackSession, position: float) -> Path:
    """
    SCREENSHOT_DIR/<stem>_H-MM-SS.png; later captures within the same
    second get a _1, _2, ... suffix.
    """
    stem = "screenshot" if is_remote(session.path) else Path(session.path).stem
    stamp = seconds_to_hms(position, full=True, truncate=True).replace(":", "-")
    return free_path(settings.SCREENSHOT_DIR / f"{stem}_{stamp}.png")


def capture_screenshot(session: PlaybackSession, dest: Optional[Path] = None, overwrite: bool = False) -> Path:
    """
    Saves the current video frame (without subtitles/OSD) to a PNG.

    Raises:
        OutputAlreadyExists: an explicit dest exists and overwrite is False.
    """
    require_live(session)
    if dest is None:
        dest = default_screenshot_path(session, current_position(session))

    output = MediaFile(Path(dest))
    if output.exists() and not overwrite:
        raise OutputAlreadyExists(output.path)
    output.ensure_parent_dir()

    session.channel.command("screenshot-to-file", str(output.path), "video")
    logger.info(f"Screenshot saved: {output.path}")
    return output.path
