"""Movement events gathered from keyboard, mouse and joystick input."""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass
from enum import IntFlag

FORWARD_KEY = 72
BACK_KEY = 80
LEFT_KEY = 75
RIGHT_KEY = 77
QUIT_KEY = 1

JOY_X = 1
JOY_Y = 2
JBUTTON1 = 0x10
JBUTTON2 = 0x20
LMBUTTON = 1
RMBUTTON = 2

_JOYSTICK_DEAD_ZONE = 100
_MOUSE_Y_THRESHOLD = 5
_MOUSE_X_THRESHOLD = 20


class EventSource(IntFlag):
    """Input devices that events may be read from."""

    MOUSE = 1
    JOYSTICK = 2
    KEYBOARD = 4


@dataclass
class Events:
    """The movement requests made during one frame."""

    go_forward: bool = False
    go_back: bool = False
    go_left: bool = False
    go_right: bool = False
    quit_game: bool = False


@dataclass
class JoystickCalibration:
    """Joystick readings at its extremes and at rest."""

    xmin: int = 0
    xmax: int = 0
    xcent: int = 0
    ymin: int = 0
    ymax: int = 0
    ycent: int = 0


def get_event(
    sources: int,
    keys: Container[int] = frozenset(),
    mouse: tuple[int, int, int] | None = None,
    joystick: tuple[int, int, int] | None = None,
    calibration: JoystickCalibration | None = None,
) -> Events:
    """Combine the input from the selected sources into one set of events.

    keys holds the scan codes currently pressed; mouse is
    (dx, dy, buttons) of relative motion; joystick is (x, y, buttons).
    """
    events = Events()
    sources = EventSource(sources)

    if EventSource.JOYSTICK in sources:
        if joystick is None:
            raise ValueError("joystick events requested without joystick input")
        cal = calibration or JoystickCalibration()
        x, y, buttons = joystick
        if y < cal.ycent - _JOYSTICK_DEAD_ZONE:
            events.go_forward = True
        if y > cal.ycent + _JOYSTICK_DEAD_ZONE:
            events.go_back = True
        if x < cal.xcent - _JOYSTICK_DEAD_ZONE:
            events.go_left = True
        if x > cal.xcent + _JOYSTICK_DEAD_ZONE:
            events.go_right = True
        if buttons & JBUTTON1:
            events.quit_game = True

    if EventSource.MOUSE in sources:
        if mouse is None:
            raise ValueError("mouse events requested without mouse input")
        dx, dy, buttons = mouse
        if dy < -_MOUSE_Y_THRESHOLD:
            events.go_forward = True
        if dy > _MOUSE_Y_THRESHOLD:
            events.go_back = True
        if dx < -_MOUSE_X_THRESHOLD:
            events.go_left = True
        if dx > _MOUSE_X_THRESHOLD:
            events.go_right = True
        if buttons & LMBUTTON:
            events.quit_game = True

    if EventSource.KEYBOARD in sources:
        if FORWARD_KEY in keys:
            events.go_forward = True
        if BACK_KEY in keys:
            events.go_back = True
        if LEFT_KEY in keys:
            events.go_left = True
        if RIGHT_KEY in keys:
            events.go_right = True
        if QUIT_KEY in keys:
            events.quit_game = True

    return events