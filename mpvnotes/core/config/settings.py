# File: mpvnotes/core/config/settings.py

import os
import shutil
from pathlib import Path
from typing import List


class Settings:
    # --- Paths ---
    # Everything the tool writes on its own lives under DATA_DIR
    DATA_DIR: Path = Path(os.getenv("MPVNOTES_DATA_DIR", Path.home() / ".local" / "share" / "mpvnotes"))
    SCREENSHOT_DIR: Path = Path(os.getenv("MPVNOTES_SCREENSHOT_DIR", DATA_DIR / "screenshots"))
    CLIP_DIR: Path = Path(os.getenv("MPVNOTES_CLIP_DIR", DATA_DIR / "clips"))

    # --- Database ---
    @property
    def DATABASE_URL(self) -> str:
        # Read lazily so tests can point it elsewhere before the engine is built
        override = os.getenv("MPVNOTES_DATABASE_URL")
        if override:
            return override
        return f"sqlite:///{self.DATA_DIR / 'mpvnotes.db'}"

    # --- External Tools ---
    # Auto-detect binaries or use env vars
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    TESSERACT_BINARY: str = os.getenv("TESSERACT_BINARY_PATH", shutil.which("tesseract") or "tesseract")

    # 0 disables the timeout
    EXTERNAL_TOOL_TIMEOUT: float = float(os.getenv("MPVNOTES_TOOL_TIMEOUT", "0"))

    # --- Player / Downloads ---
    YTDL_FORMAT: str = os.getenv("MPVNOTES_YTDL_FORMAT", "bestvideo[height<=1080]+bestaudio/best")
    OCR_LANG: str = os.getenv("MPVNOTES_OCR_LANG", "eng")

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("MPVNOTES_LOG_LEVEL", "INFO").upper()

    @property
    def FAVORITES(self) -> List[str]:
        """User-configured favorites, separated by ';'."""
        raw = os.getenv("MPVNOTES_FAVORITES", "")
        return [item.strip() for item in raw.split(";") if item.strip()]

    @property
    def tool_timeout(self):
        """Timeout argument for subprocess.run (None means wait forever)."""
        return self.EXTERNAL_TOOL_TIMEOUT or None

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
        self.CLIP_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
