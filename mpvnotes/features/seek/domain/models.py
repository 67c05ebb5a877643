from dataclasses import dataclass, field
from enum import Enum, unique
from pathlib import Path
from typing import Optional, Tuple

from mpvnotes.features.links.domain.models import MediaLink


@unique
class SeekAction(str, Enum):
    STEP = "step"                    # arg: seconds, signed
    FRAME_STEP = "frame_step"        # arg: +1 / -1
    JUMP_PERCENT = "jump_percent"    # arg: 0-100
    SET_SPEED = "set_speed"          # arg: absolute speed
    TOGGLE_PAUSE = "toggle_pause"
    MARK_BEGIN = "mark_begin"
    INSERT_LINK = "insert_link"
    CAPTURE = "capture"
    OCR = "ocr"
    COPY_FRAME = "copy_frame"
    QUIT = "quit"


@dataclass(frozen=True)
class SeekState:
    """
    Snapshot of the interactive seek loop.
    `message` holds the output of the last action for display.
    """
    position: float
    paused: bool
    speed: float = 1.0
    begin_mark: Optional[float] = None
    captures: Tuple[Path, ...] = ()
    message: str = ""


@dataclass(frozen=True)
class SeekResult:
    """Terminal outcome of the seek loop."""
    position: float
    link: Optional[MediaLink] = None
    captures: Tuple[Path, ...] = field(default_factory=tuple)
    aborted: bool = False
