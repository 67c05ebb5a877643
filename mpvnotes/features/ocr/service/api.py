import logging
import tempfile
from pathlib import Path
from typing import Optional

from mpvnotes.core.config.settings import settings
from mpvnotes.features.player.domain.models import PlaybackSession
from mpvnotes.features.player.service.api import capture_screenshot
from ..domain.interfaces import IOcrEngine

logger = logging.getLogger(__name__)


def _engine(engine: Optional[IOcrEngine]) -> IOcrEngine:
    if engine is not None:
        return engine
    from ..data.tesseract_adapter import TesseractOcrAdapter
    return TesseractOcrAdapter()


def ocr_image(image_path: str, lang: Optional[str] = None, engine: Optional[IOcrEngine] = None) -> str:
    """
    Standalone API: recognized text of an image file.
    """
    return _engine(engine).recognize(Path(image_path).expanduser(), lang or settings.OCR_LANG)


def ocr_current_frame(session: PlaybackSession,
                      lang: Optional[str] = None,
                      engine: Optional[IOcrEngine] = None) -> str:
    """
    Screenshots the frame on screen into a temp dir and runs OCR on it.
    """
    with tempfile.TemporaryDirectory() as tmp_dir:
        frame = capture_screenshot(session, Path(tmp_dir) / "frame.png")
        text = ocr_image(str(frame), lang, engine)

    logger.info(f"OCR found {len(text)} characters")
    return text
