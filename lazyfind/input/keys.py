"""Decode raw terminal bytes into key events.

Decoding is total: malformed or unknown sequences become ``ESCAPE``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MAX_KEY_BYTES = 4
ESC = 0x1B


class KeyKind(Enum):
    CHAR = "char"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    DELETE = "delete"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    TAB = "tab"
    SPACE = "space"
    CTRL = "ctrl"


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def of_char(cls, ch: str) -> KeyEvent:
        return cls(KeyKind.CHAR, ch)

    @classmethod
    def ctrl(cls, letter: str) -> KeyEvent:
        return cls(KeyKind.CTRL, letter)


ESCAPE_EVENT = KeyEvent(KeyKind.ESCAPE)

_CSI_FINAL_KEYS: dict[int, KeyKind] = {
    ord("A"): KeyKind.ARROW_UP,
    ord("B"): KeyKind.ARROW_DOWN,
    ord("C"): KeyKind.ARROW_RIGHT,
    ord("D"): KeyKind.ARROW_LEFT,
    ord("H"): KeyKind.HOME,
    ord("F"): KeyKind.END,
}

# ESC [ <digit> ~
_CSI_TILDE_KEYS: dict[int, KeyKind] = {
    ord("5"): KeyKind.PAGE_UP,
    ord("6"): KeyKind.PAGE_DOWN,
    ord("3"): KeyKind.DELETE,
    ord("1"): KeyKind.HOME,
    ord("4"): KeyKind.END,
    ord("7"): KeyKind.HOME,
    ord("8"): KeyKind.END,
}

# ESC O <final>, application cursor mode
_SS3_KEYS: dict[int, KeyKind] = {
    ord("H"): KeyKind.HOME,
    ord("F"): KeyKind.END,
    ord("A"): KeyKind.ARROW_UP,
    ord("B"): KeyKind.ARROW_DOWN,
    ord("C"): KeyKind.ARROW_RIGHT,
    ord("D"): KeyKind.ARROW_LEFT,
}


def _decode_single(byte: int) -> KeyEvent:
    if byte in (0x0D, 0x0A):
        return KeyEvent(KeyKind.ENTER)
    if byte == ESC:
        return ESCAPE_EVENT
    if byte in (127, 8):
        return KeyEvent(KeyKind.BACKSPACE)
    if byte == 0x09:
        return KeyEvent(KeyKind.TAB)
    if byte == 0x20:
        return KeyEvent(KeyKind.SPACE)
    if 1 <= byte <= 26:
        return KeyEvent.ctrl(chr(byte + ord("a") - 1))
    return KeyEvent.of_char(chr(byte))


def decode_key(data: bytes) -> KeyEvent:
    """Map 1-4 raw bytes from one terminal read to a single key event.

    Only the first ``MAX_KEY_BYTES`` bytes are inspected. Empty input is not a
    key; callers treat a zero-byte read as end of input before decoding.
    """
    buf = bytes(data[:MAX_KEY_BYTES])
    n = len(buf)
    if n == 0:
        return ESCAPE_EVENT
    if n == 1:
        return _decode_single(buf[0])

    if n >= 3 and buf[0] == ESC and buf[1] == ord("["):
        final = buf[2]
        if final in _CSI_FINAL_KEYS:
            return KeyEvent(_CSI_FINAL_KEYS[final])
        if final in _CSI_TILDE_KEYS:
            if n >= 4 and buf[3] == ord("~"):
                return KeyEvent(_CSI_TILDE_KEYS[final])
            return ESCAPE_EVENT
        return ESCAPE_EVENT

    if n == 3 and buf[0] == ESC and buf[1] == ord("O"):
        kind = _SS3_KEYS.get(buf[2])
        return KeyEvent(kind) if kind is not None else ESCAPE_EVENT

    return ESCAPE_EVENT
