"""
Text form of media links and the time formats used in them.

A link's path segment looks like ``path#begin-end``; inside a note it is
wrapped as ``[[mpv:path#begin-end][▶ 1:05 → 1:20]] description``.
"""
import math
import re
from decimal import Decimal
from pathlib import PurePosixPath
from typing import Optional

from mpvnotes.core.errors import InvalidLinkFormat, InvalidTimeFormat
from ..domain.models import LINK_TYPE, MediaLink, Number

# begin/end are captured loosely and validated by time_to_seconds,
# so a bad timestamp reports InvalidTimeFormat rather than a grammar error
_LINK_RE = re.compile(r"^(?P<path>[^#]+)(?:#(?:(?P<begin>[^#-]+)(?:-(?P<end>[^#-]*))?)?)?$")
_TIME_RE = re.compile(r"^-?[0-9:.]+$")
_FRACTION_RE = re.compile(r"\.[0-9]*")
_LEADING_INT_RE = re.compile(r"^-?[0-9]*")
_GROUPING_RE = re.compile(r"^(-?[0-9]+)([0-9]{3})")

LABEL_MARKER = "▶"
RANGE_ARROW = "→"


def parse(text: str) -> MediaLink:
    """
    Parses ``path[#[begin][-[end]]]`` into a MediaLink.

    Raises:
        InvalidLinkFormat: text does not match the grammar.
        InvalidTimeFormat: begin or end is not a timestamp.
    """
    match = _LINK_RE.match(text or "")
    if not match:
        raise InvalidLinkFormat(text)

    begin = match.group("begin") or None
    end = match.group("end") or None

    return MediaLink(
        path=match.group("path"),
        begin=time_to_seconds(begin),
        end=time_to_seconds(end),
    )


def time_to_seconds(value) -> Optional[Number]:
    """
    Converts ``H:MM:SS[.frac]``, ``MM:SS`` or a plain decimal to seconds.
    Numbers and None pass through unchanged.

    For colon forms the fractional part is the first ``.digits`` run in the
    whole string, so ``1.5:02:03`` reads as 3723.5.
    """
    if value is None or isinstance(value, (int, float)):
        return value

    text = str(value).strip()
    if not _TIME_RE.match(text):
        raise InvalidTimeFormat(value)

    if ":" not in text:
        try:
            if "." not in text:
                return int(text)
            return float(text)
        except ValueError as e:
            raise InvalidTimeFormat(value) from e

    fields = [_leading_int(part) for part in text.split(":")]
    if len(fields) > 3:
        raise InvalidTimeFormat(value)
    while len(fields) < 3:
        fields.insert(0, 0)

    hours, minutes, seconds = fields
    total = hours * 3600 + minutes * 60 + seconds

    fraction = _FRACTION_RE.search(text)
    if fraction and len(fraction.group(0)) > 1:
        total += float("0" + fraction.group(0))
    return total


def _leading_int(field: str) -> int:
    digits = _LEADING_INT_RE.match(field).group(0)
    if digits in ("", "-"):
        return 0
    return int(digits)


def seconds_to_hms(seconds: Number, full: bool = False, truncate: bool = False) -> str:
    """
    Formats seconds as ``H:MM:SS[.frac]``.

    Args:
        full: keep a zero hours field (``0:01:05`` instead of ``1:05``).
        truncate: drop the fractional digits.
    """
    whole = int(math.floor(seconds))
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)

    if full or hours:
        hms = f"{hours}:{minutes:02d}:{secs:02d}"
    else:
        hms = f"{minutes}:{secs:02d}"

    if truncate:
        return hms

    # Fraction digits are copied from the number's own text form
    text = str(seconds)
    if "." in text and "e" not in text.lower():
        return f"{hms}.{text.split('.', 1)[1]}"
    return hms


def seconds_to_display_string(seconds: Number, grouped: bool = False) -> str:
    """
    Short human form: integers as-is, otherwise cut (not rounded)
    to two decimals. ``grouped`` adds thousands separators.
    """
    if float(seconds).is_integer():
        text = str(int(seconds))
    else:
        text = str(math.floor(seconds * 100) / 100)

    if not grouped:
        return text

    integer, dot, fraction = text.partition(".")
    while True:
        regrouped = _GROUPING_RE.sub(r"\1,\2", integer)
        if regrouped == integer:
            break
        integer = regrouped
    return integer + dot + fraction


def number_to_string(value: Number) -> str:
    """Raw number as embedded in a link fragment (positional, no trailing ``.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        # str() switches to exponent form (2.5e-05), which the grammar cannot read
        return format(Decimal(repr(value)), "f")
    return str(value)


def format_fragment(path: str, begin: Optional[Number] = None, end: Optional[Number] = None) -> str:
    """Builds the ``path#begin-end`` segment that parse() reads back."""
    if end is not None and begin is None:
        raise InvalidLinkFormat(f"{path}#-{end}")
    if begin is None:
        return path
    fragment = f"{path}#{number_to_string(begin)}"
    if end is not None:
        fragment += f"-{number_to_string(end)}"
    return fragment


def format_label(path: str, begin: Optional[Number] = None, end: Optional[Number] = None) -> str:
    if begin is None:
        return f"{LABEL_MARKER} {PurePosixPath(path.rstrip('/')).name or path}"
    label = f"{LABEL_MARKER} {seconds_to_hms(begin, full=False, truncate=True)}"
    if end is not None:
        label += f" {RANGE_ARROW} {seconds_to_hms(end, full=False, truncate=True)}"
    return label


def encode(path: str,
           begin: Optional[Number] = None,
           end: Optional[Number] = None,
           description: Optional[str] = None) -> str:
    """
    Note-link text for a media moment, e.g.
    ``[[mpv:a.mp4#10-20][▶ 0:10 → 0:20]] note``.
    """
    text = f"[[{LINK_TYPE}:{format_fragment(path, begin, end)}][{format_label(path, begin, end)}]]"
    if description:
        text += f" {description}"
    return text


def encode_link(link: MediaLink, description: Optional[str] = None) -> str:
    return encode(link.path, link.begin, link.end, description)
