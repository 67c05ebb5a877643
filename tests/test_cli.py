from pathlib import Path

import pytest
from typer.testing import CliRunner

from mpvnotes.cli import app, read_target, write_to_note
from mpvnotes.features.clipping.service import api as clipping_api
from mpvnotes.features.library.service.api import LibraryService
from mpvnotes.features.links.domain.models import MediaLink

runner = CliRunner()


def test_read_target_accepts_all_forms():
    expected = MediaLink("a.mp4", 10, 20)

    assert read_target("a.mp4#10-20") == expected
    assert read_target("mpv:a.mp4#10-20") == expected
    assert read_target("[[mpv:a.mp4#10-20][▶ 0:10 → 0:20]]") == expected


def test_link_parse():
    result = runner.invoke(app, ["link", "parse", "a.mp4#1:05-1:20"])

    assert result.exit_code == 0
    assert "path:  a.mp4" in result.stdout
    assert "begin: 1:05" in result.stdout
    assert "end:   1:20" in result.stdout


def test_link_encode():
    result = runner.invoke(app, ["link", "encode", "a.mp4", "-b", "10", "-e", "20", "-d", "intro"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "[[mpv:a.mp4#10-20][▶ 0:10 → 0:20]] intro"


def test_bad_timestamp_exits_with_error():
    result = runner.invoke(app, ["link", "parse", "a.mp4#soon"])

    assert result.exit_code == 1


def test_clip_prints_written_path(monkeypatch, tmp_path):
    calls = []

    def fake_create_clip(source, begin, end, dest=None, overwrite=False):
        calls.append((source, begin, end, dest, overwrite))
        return tmp_path / "out.mp4"

    monkeypatch.setattr(clipping_api, "create_clip", fake_create_clip)

    result = runner.invoke(app, ["clip", "talk.mp4#1:00-1:30"])

    assert result.exit_code == 0
    assert calls == [("talk.mp4", 60, 90, None, False)]
    assert str(tmp_path / "out.mp4") in result.stdout


def test_history_lists_plays():
    LibraryService().record_play("/v/lecture.mp4", "Lecture")

    result = runner.invoke(app, ["history"])

    assert result.exit_code == 0
    assert "Lecture" in result.stdout
    assert "/v/lecture.mp4" in result.stdout


def test_write_to_note_moves_captures(tmp_path):
    note = tmp_path / "lecture.org"
    note.write_text("* Lecture\n", encoding="utf-8")
    shot = tmp_path / "talk_0-00-42.png"
    shot.write_bytes(b"\x89PNG")

    write_to_note(note, "[[mpv:/v/talk.mp4#42][▶ 0:42]]", [shot])

    assert note.read_text(encoding="utf-8") == (
        "* Lecture\n"
        "[[mpv:/v/talk.mp4#42][▶ 0:42]]\n"
        "[[file:lecture.attachments/talk_0-00-42.png]]\n"
    )
    assert not shot.exists()
    assert Path(tmp_path / "lecture.attachments" / "talk_0-00-42.png").is_file()


def test_write_to_note_same_capture_name_in_a_later_session(tmp_path):
    note = tmp_path / "n.org"
    note.write_text("old\n", encoding="utf-8")
    for link_text in ("LINK-ONE", "LINK-TWO"):
        shot = tmp_path / "talk_0-00-10.png"
        shot.write_bytes(b"\x89PNG")
        write_to_note(note, link_text, [shot])

    assert note.read_text(encoding="utf-8") == (
        "old\n"
        "LINK-ONE\n"
        "[[file:n.attachments/talk_0-00-10.png]]\n"
        "LINK-TWO\n"
        "[[file:n.attachments/talk_0-00-10_1.png]]\n"
    )


def test_write_to_note_keeps_link_when_an_attachment_fails(tmp_path):
    note = tmp_path / "n.org"
    shot = tmp_path / "talk_0-00-10.png"
    shot.write_bytes(b"\x89PNG")

    with pytest.raises(FileNotFoundError):
        write_to_note(note, "LINK", [shot, tmp_path / "gone.png"])

    assert note.read_text(encoding="utf-8") == (
        "LINK\n"
        "[[file:n.attachments/talk_0-00-10.png]]\n"
    )
