"""Keyboard and mouse state collected between frames."""

from __future__ import annotations

import enum
import json
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field


class InputErrorKind(enum.Enum):
    FILE_NOT_FOUND = "the settings file was not found in the current directory"
    PERMISSION_ERROR = "the process didnt had the permission to access the settings file"
    UNKNOWN_ERROR = "an unknown error occured in the process"
    JSON_SYNTAX_ERROR = "the settings file didn't contain valid JSON syntax"
    JSON_SEMANTICS_ERROR = "the settings file didn't contain semantically correct JSON"
    JSON_IO_ERROR = "an IO error occured in the process of processing the JSON"


class InputError(Exception):
    """A failure while loading the input settings."""

    Kind = InputErrorKind

    def __init__(self, kind: InputErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __str__(self) -> str:
        return self.kind.value


def input_error_from_exception(exc: BaseException) -> InputError:
    """Classify a file or JSON exception as an :class:`InputError`."""
    if isinstance(exc, json.JSONDecodeError):
        kind = InputErrorKind.JSON_SYNTAX_ERROR
    elif isinstance(exc, UnicodeDecodeError):
        kind = InputErrorKind.JSON_IO_ERROR
    elif isinstance(exc, FileNotFoundError):
        kind = InputErrorKind.FILE_NOT_FOUND
    elif isinstance(exc, PermissionError):
        kind = InputErrorKind.PERMISSION_ERROR
    elif isinstance(exc, (TypeError, KeyError, ValueError)):
        kind = InputErrorKind.JSON_SEMANTICS_ERROR
    else:
        kind = InputErrorKind.UNKNOWN_ERROR
    return InputError(kind)


class FrameState(enum.Enum):
    """State of a key within the current frame."""

    PRESSED = 0
    JUST_PRESSED = 1
    NOT_PRESSED = 2
    JUST_RELEASED = 3

    def __bool__(self) -> bool:
        return self in (FrameState.PRESSED, FrameState.JUST_PRESSED)

    def __sub__(self, other: FrameState) -> float:
        if not isinstance(other, FrameState):
            return NotImplemented
        return float(self.value - other.value)


@dataclass
class InputState:
    """A key's frame state and the moment (in nanoseconds) it last changed."""

    frame_state: FrameState
    timestamp: int | None = None
    clock: Callable[[], int] = field(default=time.monotonic_ns, repr=False)

    def __post_init__(self) -> None:
        if self.timestamp is None:
            self.timestamp = self.clock()

    def _elapsed_ns(self) -> int:
        return self.clock() - self.timestamp

    def just_pressed(self) -> bool:
        return self.frame_state is FrameState.JUST_PRESSED

    def pressed(self) -> bool:
        return bool(self.frame_state)

    def just_released(self) -> bool:
        return self.frame_state is FrameState.JUST_RELEASED

    def time_pressed(self) -> int | None:
        """Nanoseconds the key has been held, or None if it is up."""
        return self._elapsed_ns() if self.frame_state else None

    def time_input_present(self) -> float:
        """Seconds the key has been held, or 0.0 if it is up."""
        return self._elapsed_ns() / 1e9 if self.frame_state else 0.0

    def time_released(self) -> int | None:
        """Nanoseconds since the key was let go, or None if it is held."""
        return None if self.frame_state else self._elapsed_ns()

    def pressed_for(self, low: int, high: int) -> bool:
        """Whether the key has been held between ``low`` and ``high`` ns."""
        if not self.frame_state:
            return False
        return low <= self._elapsed_ns() <= high

    def released_for(self, low: int, high: int) -> bool:
        """Whether the key has been up between ``low`` and ``high`` ns."""
        if self.frame_state:
            return False
        return low <= self._elapsed_ns() <= high


class DownTime:
    """Accumulates how long a key was held since it was last processed."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._duration: float | None = None
        self._since: float | None = None

    @property
    def held(self) -> bool:
        return self._since is not None

    def process(self) -> float:
        """Return the held seconds gathered so far and start a new count."""
        now = self._clock()
        seconds = 0.0
        if self._duration is not None:
            seconds += self._duration
            self._duration = None
        if self._since is not None:
            seconds += now - self._since
            self._since = now
        return seconds

    def press(self) -> None:
        if self._since is None:
            self._since = self._clock()

    def release(self) -> None:
        if self._since is None:
            return
        held = self._clock() - self._since
        self._duration = (self._duration or 0.0) + held
        self._since = None

    def __repr__(self) -> str:
        return f"DownTime(duration={self._duration!r}, held={self.held})"


class Key(enum.Enum):
    W = "KeyW"
    S = "KeyS"
    A = "KeyA"
    D = "KeyD"
    SPACE = "Space"
    SHIFT_LEFT = "ShiftLeft"
    ESCAPE = "Escape"


_KEY_FIELDS = {
    Key.W: "forward",
    Key.S: "backwards",
    Key.A: "left",
    Key.D: "right",
    Key.SPACE: "up",
    Key.SHIFT_LEFT: "down",
}


@dataclass
class Inputs:
    """Everything the player did since the previous frame."""

    forward: DownTime = field(default_factory=DownTime)
    backwards: DownTime = field(default_factory=DownTime)
    left: DownTime = field(default_factory=DownTime)
    right: DownTime = field(default_factory=DownTime)
    up: DownTime = field(default_factory=DownTime)
    down: DownTime = field(default_factory=DownTime)

    mouse_motion: tuple[float, float] | None = None
    mouse_wheel: tuple[float, float] | None = None

    esc: bool = False

    def downtimes(self) -> Iterator[DownTime]:
        yield from (self.forward, self.backwards, self.left, self.right, self.up, self.down)


class InputEventFilter:
    """Turns raw window events into :class:`Inputs`.

    Each handler returns True if it consumed the event.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self.inputs = Inputs(*(DownTime(clock) for _ in range(6)))

    def mouse_motion(self, dx: float, dy: float) -> bool:
        x, y = self.inputs.mouse_motion or (0.0, 0.0)
        self.inputs.mouse_motion = (x + dx, y - dy)
        return True

    def mouse_wheel_lines(self, x: float, y: float) -> bool:
        wx, wy = self.inputs.mouse_wheel or (0.0, 0.0)
        self.inputs.mouse_wheel = (wx + x, wy + y)
        return True

    def mouse_wheel_pixels(self, x: float, y: float) -> bool:
        wx, wy = self.inputs.mouse_wheel or (0.0, 0.0)
        self.inputs.mouse_wheel = (wx + x, wy - y)
        return True

    def focus_changed(self, focused: bool) -> bool:
        """Release every key when focus is lost; never consumes the event."""
        if not focused:
            for down_time in self.inputs.downtimes():
                down_time.release()
        return False

    def key_input(self, key: Key, pressed: bool) -> bool:
        if key is Key.ESCAPE and pressed:
            self.inputs.esc = True
            return True
        name = _KEY_FIELDS.get(key)
        if name is None:
            return False
        down_time: DownTime = getattr(self.inputs, name)
        if pressed:
            down_time.press()
        else:
            down_time.release()
        return True

    def frame_done(self) -> None:
        """Clear the per-frame mouse and escape state."""
        self.inputs.mouse_motion = None
        self.inputs.mouse_wheel = None
        self.inputs.esc = False