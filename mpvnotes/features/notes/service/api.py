import logging
from pathlib import Path
from typing import Optional

from mpvnotes.features.links.domain.models import LinkElement, MediaLink
from mpvnotes.features.links.service.codec import encode, encode_link, time_to_seconds
from mpvnotes.features.player.domain.models import PlaybackRequest, PlaybackSession
from mpvnotes.features.player.service.api import start_playback
from ..domain.interfaces import IAttachmentStore
from ..data.document import NoteDocument

logger = logging.getLogger(__name__)


def insert_link(doc: NoteDocument, pos: int, link: MediaLink, description: Optional[str] = None) -> int:
    """Inserts an encoded link at `pos`; returns the position after it."""
    return doc.insert(pos, encode_link(link, description))


def update_link_end(doc: NoteDocument, pos: int, end) -> LinkElement:
    """
    Rewrites the link at `pos` so its range ends at `end`.

    Raises:
        ValueError: No link at `pos`, or the link has no begin to pair with.
    """
    element = doc.link_at(pos)
    if element is None:
        raise ValueError(f"No media link at position {pos}")

    link = element.link
    if link.begin is None:
        raise ValueError("Link has no start time; cannot set an end.")

    new_end = time_to_seconds(end)
    doc.replace(element.span, encode(link.path, link.begin, new_end))
    updated = doc.link_at(element.span[0])
    logger.info(f"Link end updated to {new_end}")
    return updated


def insert_attachment(doc: NoteDocument, pos: int, store: IAttachmentStore, file_path: Path, move: bool = False) -> int:
    """Attaches a file (e.g. a screenshot) and inserts its reference at `pos`."""
    return doc.insert(pos, store.attach(Path(file_path), move=move))


def playback_request_at(doc: NoteDocument, pos: int) -> PlaybackRequest:
    """
    The playback request for the link at `pos` (following a link).
    Relative local paths resolve against the note's folder.
    """
    element = doc.link_at(pos)
    if element is None:
        raise ValueError(f"No media link at position {pos}")

    link = element.link
    path = link.path
    if "://" not in path and doc.path is not None:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            path = str((doc.path.parent / candidate).resolve())

    return PlaybackRequest(path=path, begin=link.begin, end=link.end)


def follow_link(doc: NoteDocument, pos: int, channel, registry, library=None) -> PlaybackSession:
    """Starts playback of the link at `pos`."""
    return start_playback(channel, playback_request_at(doc, pos), registry, library)
