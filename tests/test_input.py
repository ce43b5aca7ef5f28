import json

import pytest

from voxelcore.input import (
    DownTime,
    FrameState,
    InputError,
    InputEventFilter,
    InputState,
    Key,
    input_error_from_exception,
)


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def test_error_from_missing_file():
    err = input_error_from_exception(FileNotFoundError())
    assert err.kind is InputError.Kind.FILE_NOT_FOUND
    assert str(err) == "the settings file was not found in the current directory"


def test_error_from_permission():
    err = input_error_from_exception(PermissionError())
    assert err.kind is InputError.Kind.PERMISSION_ERROR


def test_error_from_bad_json():
    with pytest.raises(json.JSONDecodeError) as info:
        json.loads("{nope")
    err = input_error_from_exception(info.value)
    assert err.kind is InputError.Kind.JSON_SYNTAX_ERROR
    assert str(err) == "the settings file didn't contain valid JSON syntax"


def test_error_from_semantics_and_other():
    assert input_error_from_exception(KeyError("k")).kind is InputError.Kind.JSON_SEMANTICS_ERROR
    assert input_error_from_exception(OSError()).kind is InputError.Kind.UNKNOWN_ERROR


@pytest.mark.parametrize(
    "state, expected",
    [
        (FrameState.PRESSED, True),
        (FrameState.JUST_PRESSED, True),
        (FrameState.NOT_PRESSED, False),
        (FrameState.JUST_RELEASED, False),
    ],
)
def test_input_state_pressed_follows_frame_state(state, expected):
    assert InputState(state, clock=FakeClock()).pressed() is expected


def test_frame_state_subtraction_antisymmetric():
    states = [FrameState(member.value) for member in FrameState]
    for a in states:
        assert a - a == 0.0
        for b in states:
            assert a - b == -(b - a)


def test_input_state_pressed_timing():
    clock = FakeClock(100)
    state = InputState(FrameState.JUST_PRESSED, clock=clock)
    clock.now = 600
    assert state.just_pressed() and state.pressed()
    assert state.time_pressed() == 500
    assert state.time_released() is None
    assert state.pressed_for(400, 600)
    assert not state.pressed_for(501, 700)
    assert not state.released_for(0, 1000)


def test_input_state_released_timing():
    clock = FakeClock(0)
    state = InputState(FrameState.JUST_RELEASED, clock=clock)
    clock.now = 2_000_000_000
    assert state.just_released() and not state.pressed()
    assert state.time_pressed() is None
    assert state.time_input_present() == 0.0
    assert state.time_released() == 2_000_000_000
    assert state.released_for(0, 2_000_000_000)


def test_downtime_held_and_processed():
    clock = FakeClock(0.0)
    dt = DownTime(clock)
    assert dt.process() == 0.0
    dt.press()
    clock.now = 2.0
    assert dt.process() == 2.0
    assert dt.held
    clock.now = 3.0
    dt.release()
    assert not dt.held
    assert dt.process() == 1.0
    assert dt.process() == 0.0


def test_downtime_press_after_release_accumulates():
    clock = FakeClock(0.0)
    dt = DownTime(clock)
    dt.press()
    clock.now = 1.0
    dt.release()
    clock.now = 5.0
    dt.press()
    clock.now = 7.0
    assert dt.process() == 3.0
    assert dt.held


def test_key_input_drives_downtime():
    clock = FakeClock(0.0)
    f = InputEventFilter(clock)
    assert f.key_input(Key.W, True) is True
    clock.now = 4.0
    assert f.key_input(Key.W, False) is True
    assert f.inputs.forward.process() == 4.0
    assert f.inputs.backwards.process() == 0.0


def test_focus_lost_releases_keys():
    clock = FakeClock(0.0)
    f = InputEventFilter(clock)
    f.key_input(Key.SPACE, True)
    clock.now = 3.0
    assert f.focus_changed(False) is False
    assert not f.inputs.up.held
    assert f.inputs.up.process() == 3.0


def test_escape():
    f = InputEventFilter()
    assert f.key_input(Key.ESCAPE, False) is False
    assert f.inputs.esc is False
    assert f.key_input(Key.ESCAPE, True) is True
    assert f.inputs.esc is True
    f.frame_done()
    assert f.inputs.esc is False


def test_mouse_motion_accumulates_and_clears():
    f = InputEventFilter()
    f.mouse_motion(1.0, 2.0)
    f.mouse_motion(3.0, 4.0)
    assert f.inputs.mouse_motion == (1.0 + 3.0, -2.0 - 4.0)
    f.frame_done()
    assert f.inputs.mouse_motion is None


def test_mouse_wheel_lines_and_pixels():
    f = InputEventFilter()
    f.mouse_wheel_lines(1.0, 2.0)
    f.mouse_wheel_pixels(0.5, 2.0)
    assert f.inputs.mouse_wheel == (1.0 + 0.5, 2.0 - 2.0)
    f.frame_done()
    assert f.inputs.mouse_wheel is None