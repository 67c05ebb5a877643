# File: tests/conftest.py

import os
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Point all data (and the database) at a throwaway directory
#    before the settings module is imported
TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="mpvnotes-tests-"))
os.environ["MPVNOTES_DATA_DIR"] = str(TEST_DATA_DIR)
os.environ["MPVNOTES_DATABASE_URL"] = f"sqlite:///{TEST_DATA_DIR / 'test_mpvnotes.db'}"
os.environ.pop("MPVNOTES_SCREENSHOT_DIR", None)
os.environ.pop("MPVNOTES_CLIP_DIR", None)
os.environ.pop("MPVNOTES_FAVORITES", None)

from mpvnotes.core.config.settings import settings  # noqa: E402
from mpvnotes.features.player.domain.interfaces import IPlayerChannel  # noqa: E402


class FakePlayerChannel(IPlayerChannel):
    """
    In-memory stand-in for mpv.
    Records commands and plays; screenshots write a tiny file.
    """

    def __init__(self, **properties):
        self.properties = {
            "time-pos": 0.0,
            "duration": 100.0,
            "pause": False,
            "speed": 1.0,
            "seekable": True,
            "percent-pos": 0.0,
            "sub-text": "",
        }
        self.properties.update(properties)
        self.commands = []
        self.played = []
        self.callbacks = []
        self.alive = True

    def get_property(self, name):
        return self.properties.get(name)

    def set_property(self, name, value):
        self.properties[name] = value
        if name == "percent-pos" and self.properties.get("duration"):
            self.properties["time-pos"] = self.properties["duration"] * value / 100

    def command(self, name, *args):
        self.commands.append((name,) + args)
        if name == "screenshot-to-file":
            Path(args[0]).write_bytes(b"\x89PNG fake frame")

    def play(self, path, options):
        self.played.append((path, dict(options)))

    def on_file_loaded(self, callback):
        self.callbacks.append(callback)

    def is_alive(self):
        return self.alive

    def terminate(self):
        self.alive = False


class FakeLibrary:
    def __init__(self):
        self.plays = []

    def record_play(self, path, title=""):
        self.plays.append((path, title))


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Creates the data dirs and the tables.
    """
    settings.ensure_dirs()

    from mpvnotes.core.database.connection import init_db
    init_db()

    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test. Empties every table and the output dirs.
    """
    from mpvnotes.core.database.base import Base
    from mpvnotes.core.database.connection import engine

    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())

    # Default screenshot/clip names repeat between tests
    for directory in (settings.SCREENSHOT_DIR, settings.CLIP_DIR):
        shutil.rmtree(directory, ignore_errors=True)
        directory.mkdir(parents=True, exist_ok=True)

    yield


@pytest.fixture
def fake_channel():
    return FakePlayerChannel()


@pytest.fixture
def fake_library():
    return FakeLibrary()


@pytest.fixture
def media_file(tmp_path):
    """An existing (fake) local video file."""
    path = tmp_path / "talk.mp4"
    path.write_bytes(b"FAKE_VIDEO")
    return path


@pytest.fixture
def session(fake_channel, media_file):
    """A playback session on the fake channel, started from a local file."""
    from mpvnotes.features.extraction.service.registry import SiteHandlerRegistry
    from mpvnotes.features.player.domain.models import PlaybackRequest
    from mpvnotes.features.player.service.api import start_playback

    return start_playback(fake_channel, PlaybackRequest(path=str(media_file)), SiteHandlerRegistry())
