"""Input-layer public API: byte decoding and blocking key reads."""

from .keys import ESCAPE_EVENT, MAX_KEY_BYTES, KeyEvent, KeyKind, decode_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, EndOfInput, read_key, read_key_bytes

__all__ = [
    "ESCAPE_EVENT",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "EndOfInput",
    "KeyEvent",
    "KeyKind",
    "MAX_KEY_BYTES",
    "decode_key",
    "read_key",
    "read_key_bytes",
]
