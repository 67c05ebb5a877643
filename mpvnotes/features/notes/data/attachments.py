import logging
import shutil
from pathlib import Path

from mpvnotes.core.shared_types import free_path
from ..domain.interfaces import IAttachmentStore

logger = logging.getLogger(__name__)


class LocalAttachmentStore(IAttachmentStore):
    """
    Keeps attachments in '<note stem>.attachments/' beside the note file.
    References are relative so the note folder can be moved as a whole.
    """

    def __init__(self, note_path: Path):
        self.note_path = Path(note_path)
        self.directory = self.note_path.parent / f"{self.note_path.stem}.attachments"

    def attach(self, file_path: Path, move: bool = False) -> str:
        file_path = Path(file_path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Attachment not found: {file_path}")

        self.directory.mkdir(parents=True, exist_ok=True)
        destination = free_path(self.directory / file_path.name)

        if move:
            shutil.move(str(file_path), str(destination))
        else:
            shutil.copy2(str(file_path), str(destination))

        relative = destination.relative_to(self.note_path.parent)
        logger.info(f"Attached {file_path.name} to {self.note_path.name}")
        return f"[[file:{relative.as_posix()}]]"
