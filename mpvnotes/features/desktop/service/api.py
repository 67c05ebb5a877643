from pathlib import Path
from typing import Optional

from ..domain.interfaces import IDesktop
from ..data.system_adapter import SystemDesktop


def _desktop(desktop: Optional[IDesktop]) -> IDesktop:
    return desktop or SystemDesktop()


def copy_text(text: str, desktop: Optional[IDesktop] = None) -> None:
    _desktop(desktop).copy_text(text)


def copy_file_to_clipboard(path: str, desktop: Optional[IDesktop] = None) -> None:
    """Images go on the clipboard as images, anything else as its path."""
    file_path = Path(path).expanduser()
    if file_path.suffix.lower() in {".png", ".jpg", ".jpeg", ".bmp", ".webp"}:
        _desktop(desktop).copy_image(file_path)
    else:
        _desktop(desktop).copy_text(str(file_path.resolve()))


def open_external(target: str, desktop: Optional[IDesktop] = None) -> None:
    _desktop(desktop).open_external(target)


def preview_image(path: str, desktop: Optional[IDesktop] = None) -> None:
    """Shows an image with the OS viewer (no inline display outside an editor)."""
    image = Path(path).expanduser()
    if not image.is_file():
        raise FileNotFoundError(f"Image not found: {image}")
    _desktop(desktop).open_external(str(image.resolve()))
