import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List

import pyperclip

from mpvnotes.core.config.settings import settings
from mpvnotes.core.errors import ExternalToolFailed, ExternalToolMissing
from ..domain.interfaces import IDesktop

logger = logging.getLogger(__name__)


class SystemDesktop(IDesktop):
    """
    IDesktop for Linux (X11/Wayland), macOS and Windows.
    Text goes through pyperclip; images and opening need platform tools.
    """

    def __init__(self, platform: str = None):
        self.platform = platform or sys.platform

    def copy_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ExternalToolMissing(f"clipboard ({e})") from e
        logger.info(f"Copied {len(text)} characters to clipboard")

    def copy_image(self, image_path: Path) -> None:
        image_path = Path(image_path).resolve()
        if not image_path.is_file():
            raise FileNotFoundError(f"Image not found: {image_path}")
        self._run(self.image_clipboard_command(image_path))
        logger.info(f"Copied image {image_path.name} to clipboard")

    def open_external(self, target: str) -> None:
        if self.platform.startswith("win"):
            os.startfile(target)
            return
        self._run(self.open_command(target), wait=False)

    def image_clipboard_command(self, image_path: Path) -> List[str]:
        if self.platform == "darwin":
            script = f'set the clipboard to (read (POSIX file "{image_path}") as «class PNGf»)'
            return ["osascript", "-e", script]
        if self.platform.startswith("win"):
            script = (
                "Add-Type -AssemblyName System.Windows.Forms;"
                f"[Windows.Forms.Clipboard]::SetImage([System.Drawing.Image]::FromFile('{image_path}'))"
            )
            return ["powershell", "-NoProfile", "-Command", script]
        if os.getenv("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
            return ["sh", "-c", f'wl-copy --type image/png < "{image_path}"']
        return ["xclip", "-selection", "clipboard", "-t", "image/png", "-i", str(image_path)]

    def open_command(self, target: str) -> List[str]:
        if self.platform == "darwin":
            return ["open", target]
        return ["xdg-open", target]

    def _run(self, cmd: List[str], wait: bool = True) -> None:
        if shutil.which(cmd[0]) is None:
            raise ExternalToolMissing(cmd[0])

        logger.debug(f"Running: {' '.join(cmd)}")

        if not wait:
            subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, start_new_session=True)
            return

        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=settings.tool_timeout)
        except subprocess.CalledProcessError as e:
            logger.error(f"{cmd[0]} failed: {e.stderr}")
            raise ExternalToolFailed(cmd[0], e.stderr or "") from e
        except subprocess.TimeoutExpired as e:
            raise ExternalToolFailed(cmd[0], f"timed out after {e.timeout}s") from e
