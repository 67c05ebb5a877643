from abc import ABC, abstractmethod
from pathlib import Path


class IDesktop(ABC):
    """
    Contract for the OS side: clipboard and default opener.
    """

    @abstractmethod
    def copy_text(self, text: str) -> None:
        pass

    @abstractmethod
    def copy_image(self, image_path: Path) -> None:
        """Puts the image contents (not its path) on the clipboard."""
        pass

    @abstractmethod
    def open_external(self, target: str) -> None:
        """Hands a path or URL to the OS default application."""
        pass
