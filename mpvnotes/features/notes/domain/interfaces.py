from abc import ABC, abstractmethod
from pathlib import Path


class IAttachmentStore(ABC):
    """
    Contract for keeping files next to a note.
    """

    @abstractmethod
    def attach(self, file_path: Path, move: bool = False) -> str:
        """
        Stores the file for the note and returns the text that references it.
        """
        pass
