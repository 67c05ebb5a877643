from dataclasses import dataclass
from typing import Optional, Tuple, Union

from mpvnotes.core.errors import InvalidLinkFormat

LINK_TYPE = "mpv"

Number = Union[int, float]


@dataclass(frozen=True)
class MediaLink:
    """
    A playable resource plus an optional time range inside it.
    Only its text form is ever persisted (inside notes).
    """
    path: str
    begin: Optional[Number] = None
    end: Optional[Number] = None

    def __post_init__(self):
        # The text form has no way to express an end-only range
        if self.end is not None and self.begin is None:
            raise InvalidLinkFormat(f"{self.path}#-{self.end}")

    @property
    def has_range(self) -> bool:
        return self.begin is not None


@dataclass(frozen=True)
class LinkElement:
    """A link located inside note text."""
    link: MediaLink
    label: str
    span: Tuple[int, int]
