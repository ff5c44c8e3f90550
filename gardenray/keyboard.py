"""Keyboard state tracking driven by raw PC scan codes."""

from __future__ import annotations

from enum import IntEnum

SCANCODE_COUNT = 128
_RELEASE_BIT = 0x80
_EXT = 128


class Key(IntEnum):
    """Key codes: ASCII values, or 128 plus the scan code of an extended key."""

    HOME = _EXT + 71
    PAGE_UP = _EXT + 73
    END = _EXT + 79
    PAGE_DOWN = _EXT + 81
    F1 = _EXT + 59
    F2 = _EXT + 60
    F3 = _EXT + 61
    F4 = _EXT + 62
    F5 = _EXT + 63
    F6 = _EXT + 64
    F7 = _EXT + 65
    F8 = _EXT + 66
    F9 = _EXT + 67
    F10 = _EXT + 68
    F11 = _EXT + 87
    F12 = _EXT + 88
    UP = _EXT + 72
    DOWN = _EXT + 80
    RIGHT = _EXT + 77
    LEFT = _EXT + 75
    INSERT = _EXT + 82
    DELETE = _EXT + 83
    ALT = _EXT + 56
    PLUS = _EXT + 78
    MINUS = _EXT + 74
    ESC = 27


# Runs of keys on a US keyboard whose scan codes are consecutive.
_KEY_ROWS = {
    "1234567890-=": 2,
    "qwertyuiop[]": 16,
    "asdfghjkl;'`": 30,
    "\\zxcvbnm,./": 43,
}

_SINGLE_KEYS = {7: 15, 8: 14, 13: 28, 27: 1, ord(" "): 57, ord("*"): 55, ord("+"): 78}


def _build_scancodes() -> tuple[int, ...]:
    table = [0] * 256
    for chars, first in _KEY_ROWS.items():
        for code, char in enumerate(chars, start=first):
            table[ord(char)] = code
            if char.isalpha():
                table[ord(char.upper())] = code
    for ascii_code, code in _SINGLE_KEYS.items():
        table[ascii_code] = code
    extended = [56, *range(59, 69), *range(71, 76), *range(77, 84)]
    for code in extended:
        table[_EXT + code] = code
    # F11 and F12 sit right after F10 in the table rather than at 128 + scan code.
    table[_EXT + 69] = 87
    table[_EXT + 70] = 88
    return tuple(table)


SCANCODES = _build_scancodes()


def scancode_for(key: int) -> int:
    """Return the scan code of a key code (0 if the key has none)."""
    if not 0 <= key < len(SCANCODES):
        raise ValueError(f"key code {key} is out of range")
    return SCANCODES[key]


class Keyboard:
    """Tracks which keys are held, fed with raw scan codes from the keyboard."""

    def __init__(self) -> None:
        self._down = [False] * SCANCODE_COUNT
        self._consumed: set[int] = set()
        self.last_scancode = 0

    def handle_scancode(self, raw: int) -> None:
        """Record a make (press) or break (release) scan code."""
        raw &= 0xFF
        self.last_scancode = raw
        code = raw & (SCANCODE_COUNT - 1)
        pressed = (raw & _RELEASE_BIT) == 0
        self._down[code] = pressed
        if not pressed:
            self._consumed.discard(code)

    def is_key_down(self, key: int) -> bool:
        """Return whether the key is being held down."""
        return self._down[scancode_for(key)]

    def was_pressed(self, key: int) -> bool:
        """Return True once per press of the key.

        After reporting a press, the key is not reported again until it
        has been released and pressed anew.
        """
        code = scancode_for(key)
        if self._down[code] and code not in self._consumed:
            self._consumed.add(code)
            return True
        return False