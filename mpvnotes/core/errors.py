# File: mpvnotes/core/errors.py

class MpvNotesError(Exception):
    """Base class for every user-facing failure."""


class InvalidLinkFormat(MpvNotesError, ValueError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid link format: {text!r}")


class InvalidTimeFormat(MpvNotesError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid time format: {value!r}")


class NotSeekable(MpvNotesError):
    def __init__(self, path: str = ""):
        self.path = path
        super().__init__(f"Current media is not seekable: {path}" if path else "Current media is not seekable")


class NoLivePlayer(MpvNotesError):
    def __init__(self, message: str = "No live mpv player"):
        super().__init__(message)


class ExternalToolMissing(MpvNotesError):
    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Required program not found: {tool}")


class ExternalToolFailed(MpvNotesError):
    """
    A tool ran but exited non-zero or produced unusable output.
    `output` keeps whatever the tool printed so callers can show it.
    """
    def __init__(self, tool: str, output: str = ""):
        self.tool = tool
        self.output = output
        detail = f": {output.strip()}" if output and output.strip() else ""
        super().__init__(f"{tool} failed{detail}")


class OutputAlreadyExists(MpvNotesError, FileExistsError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Output already exists: {path}")
