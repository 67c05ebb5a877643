from abc import ABC, abstractmethod
from pathlib import Path


class IOcrEngine(ABC):
    """
    Contract for turning an image into text.
    """

    @abstractmethod
    def recognize(self, image_path: Path, lang: str) -> str:
        """
        Args:
            image_path: Image file to read.
            lang: Tesseract language code(s), e.g. 'eng' or 'eng+chi_sim'.

        Raises:
            ExternalToolMissing: If the OCR program is not installed.
            ExternalToolFailed: If recognition fails.
        """
        pass
