from abc import ABC, abstractmethod
from typing import Any, Callable, Dict


class IPlayerChannel(ABC):
    """
    Contract for talking to a running media player.
    Abstracts away python-mpv from the playback logic.
    """

    @abstractmethod
    def get_property(self, name: str) -> Any:
        """Reads a named property such as 'time-pos' or 'pause'."""
        pass

    @abstractmethod
    def set_property(self, name: str, value: Any) -> None:
        pass

    @abstractmethod
    def command(self, name: str, *args: Any) -> Any:
        """Issues a named command such as 'screenshot-to-file' or 'frame-step'."""
        pass

    @abstractmethod
    def play(self, path: str, options: Dict[str, Any]) -> None:
        """
        Starts a new playback, replacing whatever is playing.

        Args:
            path: Local path or URL handed to the player.
            options: Per-file player options (start, end, http-header-fields...).
        """
        pass

    @abstractmethod
    def on_file_loaded(self, callback: Callable[[], None]) -> None:
        """Registers a callback fired once the player has loaded a file."""
        pass

    @abstractmethod
    def is_alive(self) -> bool:
        pass

    @abstractmethod
    def terminate(self) -> None:
        pass
