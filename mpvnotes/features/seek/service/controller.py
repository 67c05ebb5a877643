import logging
from dataclasses import replace
from typing import Callable, Dict, Optional, Tuple, Union

from mpvnotes.features.links.domain.models import MediaLink
from mpvnotes.features.links.service.codec import seconds_to_hms
from mpvnotes.features.player.domain.models import PlaybackSession
from mpvnotes.features.player.service import api as player
from ..domain.models import SeekAction, SeekResult, SeekState

logger = logging.getLogger(__name__)

# Single-key bindings for the interactive loop
KEYMAP: Dict[str, Tuple[SeekAction, object]] = {
    "n": (SeekAction.STEP, 1.0),
    "p": (SeekAction.STEP, -1.0),
    "N": (SeekAction.STEP, 10.0),
    "P": (SeekAction.STEP, -10.0),
    "f": (SeekAction.STEP, 60.0),
    "b": (SeekAction.STEP, -60.0),
    ".": (SeekAction.FRAME_STEP, 1),
    ",": (SeekAction.FRAME_STEP, -1),
    " ": (SeekAction.TOGGLE_PAUSE, None),
    "m": (SeekAction.MARK_BEGIN, None),
    "i": (SeekAction.INSERT_LINK, None),
    "s": (SeekAction.CAPTURE, None),
    "o": (SeekAction.OCR, None),
    "c": (SeekAction.COPY_FRAME, None),
    "q": (SeekAction.QUIT, None),
}
KEYMAP.update({str(d): (SeekAction.JUMP_PERCENT, d * 10.0) for d in range(10)})

SPEED_KEYS = {"[": 0.9, "]": 1.1, "=": None}


def resolve_key(key: str, state: SeekState) -> Optional[Tuple[SeekAction, object]]:
    """Maps a key press to (action, arg); None for unbound keys."""
    if key in SPEED_KEYS:
        factor = SPEED_KEYS[key]
        speed = 1.0 if factor is None else round(state.speed * factor, 2)
        return SeekAction.SET_SPEED, speed
    return KEYMAP.get(key)


class SeekController:
    """
    Transitions of the interactive seek loop.

    apply() takes the current state and a named action, drives the player,
    and returns the next SeekState, or a SeekResult when the loop is over.
    """

    def __init__(self,
                 session: PlaybackSession,
                 capture: Callable = None,
                 ocr: Callable = None,
                 copy_image: Callable = None):
        self.session = session
        self.capture = capture or player.capture_screenshot
        if ocr is None:
            from mpvnotes.features.ocr.service.api import ocr_current_frame
            ocr = ocr_current_frame
        self.ocr = ocr
        if copy_image is None:
            from mpvnotes.features.desktop.service.api import copy_file_to_clipboard
            copy_image = copy_file_to_clipboard
        self.copy_image = copy_image

    def snapshot(self) -> SeekState:
        player.require_live(self.session)
        channel = self.session.channel
        return SeekState(
            position=player.current_position(self.session),
            paused=bool(channel.get_property("pause")),
            speed=float(channel.get_property("speed") or 1.0),
        )

    def apply(self, state: SeekState, action: SeekAction, arg=None) -> Union[SeekState, SeekResult]:
        player.require_live(self.session)
        handler = getattr(self, f"_{action.value}")
        result = handler(state, arg)
        logger.debug(f"seek {action.value}({arg}) -> {result}")
        return result

    def _refresh(self, state: SeekState, **changes) -> SeekState:
        return replace(state, position=player.current_position(self.session), **changes)

    def _step(self, state: SeekState, arg) -> SeekState:
        target = player.seek_to(self.session, player.current_position(self.session) + float(arg))
        return replace(state, position=target, message=seconds_to_hms(target, truncate=True))

    def _frame_step(self, state: SeekState, arg) -> SeekState:
        player.frame_step(self.session, forward=(arg or 1) > 0)
        # mpv pauses on frame stepping
        return self._refresh(state, paused=True, message="")

    def _jump_percent(self, state: SeekState, arg) -> SeekState:
        player.seek_percent(self.session, float(arg))
        return self._refresh(state, message=f"{float(arg):g}%")

    def _set_speed(self, state: SeekState, arg) -> SeekState:
        speed = player.set_speed(self.session, float(arg))
        return replace(state, speed=speed, message=f"speed {speed:g}x")

    def _toggle_pause(self, state: SeekState, arg) -> SeekState:
        paused = player.toggle_pause(self.session)
        return self._refresh(state, paused=paused, message="paused" if paused else "playing")

    def _mark_begin(self, state: SeekState, arg) -> SeekState:
        position = player.current_position(self.session)
        return replace(state, position=position, begin_mark=position,
                       message=f"begin {seconds_to_hms(position, truncate=True)}")

    def _insert_link(self, state: SeekState, arg) -> SeekResult:
        position = player.current_position(self.session)
        if state.begin_mark is not None and position > state.begin_mark:
            link = MediaLink(self.session.path, state.begin_mark, position)
        else:
            link = MediaLink(self.session.path, position)
        return SeekResult(position=position, link=link, captures=state.captures)

    def _capture(self, state: SeekState, arg) -> SeekState:
        path = self.capture(self.session)
        return replace(state, captures=state.captures + (path,), message=f"saved {path}")

    def _ocr(self, state: SeekState, arg) -> SeekState:
        text = self.ocr(self.session, arg)
        return replace(state, message=text or "(no text found)")

    def _copy_frame(self, state: SeekState, arg) -> SeekState:
        path = self.capture(self.session)
        self.copy_image(str(path))
        return replace(state, captures=state.captures + (path,), message="frame copied to clipboard")

    def _quit(self, state: SeekState, arg) -> SeekResult:
        return SeekResult(position=state.position, captures=state.captures, aborted=True)
