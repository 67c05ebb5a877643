import pytest

from mpvnotes.core.config.settings import settings
from mpvnotes.core.errors import NoLivePlayer, NotSeekable
from mpvnotes.features.links.domain.models import MediaLink
from mpvnotes.features.seek.domain.models import SeekAction, SeekResult, SeekState
from mpvnotes.features.seek.service.controller import SeekController, resolve_key


@pytest.fixture
def controller(session, tmp_path):
    shots = []

    def capture(sess):
        path = tmp_path / f"shot{len(shots)}.png"
        path.write_bytes(b"\x89PNG")
        shots.append(path)
        return path

    copied = []
    ctl = SeekController(
        session,
        capture=capture,
        ocr=lambda sess, lang: "Slide title",
        copy_image=copied.append,
    )
    ctl.copied = copied
    return ctl


def test_resolve_key():
    state = SeekState(position=0, paused=False, speed=1.0)

    assert resolve_key("n", state) == (SeekAction.STEP, 1.0)
    assert resolve_key("5", state) == (SeekAction.JUMP_PERCENT, 50.0)
    assert resolve_key("]", state) == (SeekAction.SET_SPEED, 1.1)
    assert resolve_key("=", SeekState(0, False, speed=2.0)) == (SeekAction.SET_SPEED, 1.0)
    assert resolve_key("z", state) is None


def test_snapshot(controller, fake_channel):
    fake_channel.properties.update({"time-pos": 12.0, "pause": True, "speed": 1.25})

    assert controller.snapshot() == SeekState(position=12.0, paused=True, speed=1.25)


def test_step(controller, fake_channel):
    fake_channel.properties["time-pos"] = 30.0
    state = controller.snapshot()

    state = controller.apply(state, SeekAction.STEP, -10.0)

    assert state.position == 20.0
    assert fake_channel.properties["time-pos"] == 20.0
    assert state.message == "0:20"


def test_jump_percent(controller, fake_channel):
    state = controller.apply(controller.snapshot(), SeekAction.JUMP_PERCENT, 50.0)
    assert state.position == 50.0


def test_frame_step_pauses(controller, fake_channel):
    state = controller.apply(controller.snapshot(), SeekAction.FRAME_STEP, -1)

    assert state.paused is True
    assert fake_channel.commands[-1] == ("frame-back-step",)


def test_pause_and_speed(controller, fake_channel):
    state = controller.apply(controller.snapshot(), SeekAction.TOGGLE_PAUSE)
    assert state.paused is True
    assert state.message == "paused"

    state = controller.apply(state, SeekAction.SET_SPEED, 1.5)
    assert state.speed == 1.5
    assert fake_channel.properties["speed"] == 1.5


def test_insert_link_at_position(controller, session, fake_channel):
    fake_channel.properties["time-pos"] = 42.5

    result = controller.apply(controller.snapshot(), SeekAction.INSERT_LINK)

    assert isinstance(result, SeekResult)
    assert result.link == MediaLink(session.path, 42.5)
    assert result.aborted is False


def test_mark_then_insert_gives_a_range(controller, session, fake_channel):
    fake_channel.properties["time-pos"] = 10.0
    state = controller.apply(controller.snapshot(), SeekAction.MARK_BEGIN)
    fake_channel.properties["time-pos"] = 25.0

    result = controller.apply(state, SeekAction.INSERT_LINK)

    assert result.link == MediaLink(session.path, 10.0, 25.0)


def test_capture_ocr_and_copy(controller):
    state = controller.apply(controller.snapshot(), SeekAction.CAPTURE)
    assert len(state.captures) == 1

    state = controller.apply(state, SeekAction.OCR)
    assert state.message == "Slide title"

    state = controller.apply(state, SeekAction.COPY_FRAME)
    assert len(state.captures) == 2
    assert controller.copied == [str(state.captures[1])]

    result = controller.apply(state, SeekAction.QUIT)
    assert result.aborted is True
    assert result.link is None
    assert result.captures == state.captures


def test_actions_need_a_live_player(controller, fake_channel):
    state = controller.snapshot()
    fake_channel.alive = False

    with pytest.raises(NoLivePlayer):
        controller.apply(state, SeekAction.STEP, 1.0)


def test_seeking_needs_seekable_media(controller, fake_channel):
    fake_channel.properties["seekable"] = False

    with pytest.raises(NotSeekable):
        controller.apply(controller.snapshot(), SeekAction.STEP, 1.0)


def test_repeated_captures_in_one_second_use_the_player(session, fake_channel):
    copied = []
    ctl = SeekController(session, ocr=lambda sess, lang: "", copy_image=copied.append)
    fake_channel.properties["time-pos"] = 12.0

    state = ctl.apply(ctl.snapshot(), SeekAction.CAPTURE)
    state = ctl.apply(state, SeekAction.FRAME_STEP, 1)
    fake_channel.properties["time-pos"] = 12.04
    state = ctl.apply(state, SeekAction.COPY_FRAME)
    state = ctl.apply(state, SeekAction.CAPTURE)

    names = [path.name for path in state.captures]
    assert names == ["talk_0-00-12.png", "talk_0-00-12_1.png", "talk_0-00-12_2.png"]
    assert all(path.parent == settings.SCREENSHOT_DIR for path in state.captures)
    assert all(path.exists() for path in state.captures)
    assert copied == [str(state.captures[1])]
    assert [cmd[0] for cmd in fake_channel.commands].count("screenshot-to-file") == 3
