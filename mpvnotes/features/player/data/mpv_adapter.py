import logging
from typing import Any, Callable, Dict

import mpv

from mpvnotes.core.errors import NoLivePlayer
from ..domain.interfaces import IPlayerChannel

logger = logging.getLogger(__name__)

# mpv log levels -> logging levels
_LOG_LEVELS = {
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "v": logging.DEBUG,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


class MpvPlayerChannel(IPlayerChannel):
    """
    Concrete implementation of IPlayerChannel on top of python-mpv.
    The mpv window keeps its own key bindings and on-screen controller.
    """

    def __init__(self, **mpv_options: Any):
        options = {
            "input_default_bindings": True,
            "input_vo_keyboard": True,
            "osc": True,
            "ytdl": True,
            "keep_open": True,
            "force_window": "yes",
        }
        options.update(mpv_options)
        self.player = mpv.MPV(log_handler=self._handle_log, loglevel="warn", **options)

    def get_property(self, name: str) -> Any:
        try:
            return self.player[name]
        except mpv.ShutdownError as e:
            raise NoLivePlayer() from e

    def set_property(self, name: str, value: Any) -> None:
        try:
            self.player[name] = value
        except mpv.ShutdownError as e:
            raise NoLivePlayer() from e

    def command(self, name: str, *args: Any) -> Any:
        logger.debug(f"mpv command: {name} {args}")
        try:
            return self.player.command(name, *args)
        except mpv.ShutdownError as e:
            raise NoLivePlayer() from e

    def play(self, path: str, options: Dict[str, Any]) -> None:
        logger.info(f"mpv loadfile: {path} {options}")
        try:
            self.player.loadfile(path, "replace", **options)
        except mpv.ShutdownError as e:
            raise NoLivePlayer() from e

    def on_file_loaded(self, callback: Callable[[], None]) -> None:
        @self.player.event_callback("file-loaded")
        def _loaded(event):
            callback()

    def is_alive(self) -> bool:
        try:
            return not self.player.core_shutdown
        except AttributeError:
            return False

    def terminate(self) -> None:
        self.player.terminate()

    def _handle_log(self, level, prefix, text):
        logger.log(_LOG_LEVELS.get(level, logging.DEBUG), f"[mpv/{prefix}] {text.rstrip()}")
