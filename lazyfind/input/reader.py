"""Blocking key reads from the raw-mode terminal file descriptor."""

from __future__ import annotations

import os
import select

from .keys import ESC, MAX_KEY_BYTES, KeyEvent, decode_key

ESC_SEQUENCE_TIMEOUT_MS = 25


class EndOfInput(Exception):
    """Raised when the input stream returns zero bytes."""


def _read_ready(fd: int, limit: int, timeout_ms: int) -> bytes:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return b""
    return os.read(fd, limit)


def read_key_bytes(fd: int, timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> bytes:
    """Read up to ``MAX_KEY_BYTES`` bytes for one key press.

    A lone ESC waits ``timeout_ms`` for the rest of an escape sequence that
    the terminal delivered in a separate chunk.
    """
    data = os.read(fd, MAX_KEY_BYTES)
    if not data:
        raise EndOfInput()
    if data == bytes([ESC]):
        data += _read_ready(fd, MAX_KEY_BYTES - 1, timeout_ms)
    return data[:MAX_KEY_BYTES]


def read_key(fd: int, timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> KeyEvent:
    return decode_key(read_key_bytes(fd, timeout_ms))
