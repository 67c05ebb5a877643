import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from mpvnotes.features.links.domain.models import LINK_TYPE, LinkElement
from mpvnotes.features.links.service.codec import parse

logger = logging.getLogger(__name__)

# [[mpv:PATH#B-E][LABEL]] or [[mpv:PATH#B-E]]
LINK_PATTERN = re.compile(r"\[\[" + re.escape(LINK_TYPE) + r":(?P<target>[^\]]+)\](?:\[(?P<label>[^\]]*)\])?\]")


class NoteDocument:
    """
    A plain-text note held in memory.
    Positions are character offsets into `text`.
    """

    def __init__(self, text: str = "", path: Optional[Path] = None):
        self.text = text
        self.path = path

    @classmethod
    def load(cls, path: Path) -> "NoteDocument":
        path = Path(path)
        text = path.read_text(encoding="utf-8") if path.exists() else ""
        return cls(text, path)

    def save(self) -> Path:
        if self.path is None:
            raise ValueError("Note has no file path.")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.text, encoding="utf-8")
        logger.debug(f"Saved note {self.path}")
        return self.path

    def links(self) -> List[LinkElement]:
        """Every media link in the note, in order. Malformed targets raise."""
        return [self._element(m) for m in LINK_PATTERN.finditer(self.text)]

    def link_at(self, pos: int) -> Optional[LinkElement]:
        """The link whose brackets contain `pos`, if any."""
        for match in LINK_PATTERN.finditer(self.text):
            if match.start() <= pos <= match.end():
                return self._element(match)
            if match.start() > pos:
                break
        return None

    def insert(self, pos: int, text: str) -> int:
        """Inserts text and returns the position just after it."""
        pos = self._clamp(pos)
        self.text = self.text[:pos] + text + self.text[pos:]
        return pos + len(text)

    def replace(self, span: Tuple[int, int], text: str) -> int:
        start, end = self._clamp(span[0]), self._clamp(span[1])
        if end < start:
            raise ValueError(f"Invalid span: {span}")
        self.text = self.text[:start] + text + self.text[end:]
        return start + len(text)

    def append_line(self, line: str) -> int:
        prefix = "" if not self.text or self.text.endswith("\n") else "\n"
        return self.insert(len(self.text), f"{prefix}{line}\n")

    def _clamp(self, pos: int) -> int:
        return max(0, min(len(self.text), pos))

    @staticmethod
    def _element(match) -> LinkElement:
        return LinkElement(
            link=parse(match.group("target")),
            label=match.group("label") or "",
            span=(match.start(), match.end()),
        )
