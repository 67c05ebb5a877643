import math
import re

import pytest

from mpvnotes.core.errors import InvalidLinkFormat, InvalidTimeFormat
from mpvnotes.features.links.domain.models import MediaLink
from mpvnotes.features.links.service.codec import (
    encode,
    format_fragment,
    parse,
    seconds_to_display_string,
    seconds_to_hms,
    time_to_seconds,
)


# --- parse ---

def test_parse_full_range():
    assert parse("a.mp4#10-20") == MediaLink(path="a.mp4", begin=10, end=20)


def test_parse_open_range():
    assert parse("a.mp4#10-") == MediaLink(path="a.mp4", begin=10, end=None)


def test_parse_plain_path():
    assert parse("a.mp4") == MediaLink(path="a.mp4", begin=None, end=None)


def test_parse_empty_fragment():
    assert parse("a.mp4#") == MediaLink(path="a.mp4")


def test_parse_hms_timestamps():
    link = parse("/videos/lecture 1.mkv#1:02:03.5-1:05:00")
    assert link.path == "/videos/lecture 1.mkv"
    assert link.begin == pytest.approx(3723.5)
    assert link.end == 3900


def test_parse_url():
    link = parse("https://www.youtube.com/watch?v=abc#90")
    assert link.path == "https://www.youtube.com/watch?v=abc"
    assert link.begin == 90


def test_parse_bad_timestamp_is_a_time_error():
    with pytest.raises(InvalidTimeFormat):
        parse("a.mp4#bad-text")


@pytest.mark.parametrize("text", ["a.mp4#-20", "", "#10", "a.mp4#10-20-30", "a.mp4#1#2"])
def test_parse_rejects_malformed_links(text):
    with pytest.raises(InvalidLinkFormat):
        parse(text)


def test_end_without_begin_is_not_a_link():
    with pytest.raises(InvalidLinkFormat):
        MediaLink(path="a.mp4", end=5)


# --- time_to_seconds ---

def test_time_to_seconds_hms():
    assert time_to_seconds("1:02:03") == 3723
    assert time_to_seconds("0:01:30.5") == 90.5


def test_time_to_seconds_minutes_seconds():
    assert time_to_seconds("1:30") == 90


def test_time_to_seconds_plain_numbers():
    assert time_to_seconds("42") == 42
    assert time_to_seconds("42.25") == 42.25


def test_time_to_seconds_passes_numbers_and_none_through():
    assert time_to_seconds(None) is None
    assert time_to_seconds(12.5) == 12.5
    assert time_to_seconds(7) == 7


def test_time_to_seconds_fraction_is_found_anywhere_in_the_string():
    # The first '.digits' run counts, even before the colons
    assert time_to_seconds("1.5:02:03") == pytest.approx(3723.5)


@pytest.mark.parametrize("value", ["abc", "1.2.3", "1:2:3:4", "10s", "."])
def test_time_to_seconds_rejects_garbage(value):
    with pytest.raises(InvalidTimeFormat):
        time_to_seconds(value)


# --- seconds_to_hms ---

def test_seconds_to_hms_short_form():
    assert seconds_to_hms(65) == "1:05"
    assert seconds_to_hms(0) == "0:00"
    assert seconds_to_hms(600) == "10:00"


def test_seconds_to_hms_with_hours():
    assert seconds_to_hms(3665, full=False, truncate=True) == "1:01:05"


def test_seconds_to_hms_full():
    assert seconds_to_hms(65, full=True) == "0:01:05"


def test_seconds_to_hms_fraction_is_verbatim():
    assert seconds_to_hms(90.5) == "1:30.5"
    assert seconds_to_hms(90.25, truncate=True) == "1:30"


@pytest.mark.parametrize("seconds", [0, 1, 59.9, 61.25, 3599.999, 3600, 86399.5, 100000.75])
def test_hms_round_trip_floors_seconds(seconds):
    assert time_to_seconds(seconds_to_hms(seconds, full=True, truncate=True)) == math.floor(seconds)


# --- seconds_to_display_string ---

def test_display_string_grouped():
    assert seconds_to_display_string(1234.567, grouped=True) == "1,234.56"
    assert seconds_to_display_string(1234567, grouped=True) == "1,234,567"


def test_display_string_plain():
    assert seconds_to_display_string(12) == "12"
    assert seconds_to_display_string(12.0) == "12"
    assert seconds_to_display_string(1234.567) == "1234.56"


def test_display_string_truncates_instead_of_rounding():
    assert seconds_to_display_string(2.999) == "2.99"


# --- encode ---

def test_encode_range_with_description():
    text = encode("a.mp4", 10, 20, "note")
    assert "[[mpv:a.mp4#10-20][" in text
    assert text.endswith(" note")
    assert "▶ 0:10 → 0:20" in text


def test_encode_then_parse_recovers_range():
    text = encode("a.mp4", 10, 20, "note")
    target = re.search(r"\[\[mpv:([^\]]+)\]", text).group(1)
    link = parse(target)
    assert (link.begin, link.end) == (10, 20)


def test_encode_keeps_full_precision_in_fragment():
    text = encode("/v/a.mp4", 12.345, None)
    assert "[[mpv:/v/a.mp4#12.345][▶ 0:12]]" == text
    target = re.search(r"\[\[mpv:([^\]]+)\]", text).group(1)
    assert parse(target).begin == pytest.approx(12.345)


def test_encode_without_range_labels_with_file_name():
    assert encode("/v/a.mp4") == "[[mpv:/v/a.mp4][▶ a.mp4]]"


def test_format_fragment_rejects_end_only():
    with pytest.raises(InvalidLinkFormat):
        format_fragment("a.mp4", None, 20)


def test_integral_floats_are_written_without_fraction():
    assert format_fragment("a.mp4", 10.0, 20.5) == "a.mp4#10-20.5"


@pytest.mark.parametrize("begin, end", [
    (2.5e-05, None),
    (1e-05, 3.0),
    (1e16, None),
    (0.5, 1e16),
])
def test_tiny_and_huge_times_round_trip(begin, end):
    text = encode("a.mp4", begin, end)
    target = re.search(r"\[\[mpv:([^\]]+)\]", text).group(1)

    assert "e" not in target.split("#", 1)[1]
    link = parse(target)
    assert (link.begin, link.end) == (begin, end)


def test_tiny_time_fragment_is_positional():
    assert format_fragment("a.mp4", 2.5e-05) == "a.mp4#0.000025"
