import logging
from pathlib import Path

import pytesseract

from mpvnotes.core.config.settings import settings
from mpvnotes.core.errors import ExternalToolFailed, ExternalToolMissing
from ..domain.interfaces import IOcrEngine

logger = logging.getLogger(__name__)


class TesseractOcrAdapter(IOcrEngine):
    """
    Concrete implementation of IOcrEngine using tesseract through pytesseract.
    """

    def __init__(self):
        pytesseract.pytesseract.tesseract_cmd = settings.TESSERACT_BINARY

    def recognize(self, image_path: Path, lang: str) -> str:
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        logger.info(f"Running OCR ({lang}) on {image_path}")

        try:
            text = pytesseract.image_to_string(
                str(image_path),
                lang=lang,
                timeout=settings.EXTERNAL_TOOL_TIMEOUT
            )
        except pytesseract.TesseractNotFoundError as e:
            raise ExternalToolMissing(settings.TESSERACT_BINARY) from e
        except pytesseract.TesseractError as e:
            logger.error(f"Tesseract failed: {e.message}")
            raise ExternalToolFailed("tesseract", e.message) from e
        except RuntimeError as e:
            # pytesseract signals its own timeout as a bare RuntimeError
            raise ExternalToolFailed("tesseract", str(e)) from e

        return text.strip()
