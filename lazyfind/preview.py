"""Preview loading, sanitization, and syntax highlighting.

Reads are capped at ``PREVIEW_MAX_BYTES``; a truncated file is still a valid
preview. Terminal control bytes are neutralized before anything is shown.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

PREVIEW_MAX_BYTES = 50 * 1024
DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def read_preview_text(path: str | Path, max_bytes: int = PREVIEW_MAX_BYTES) -> str:
    """Read at most ``max_bytes`` of ``path`` as text.

    Raises ``OSError`` for missing files, permission problems, and directories.
    Undecodable bytes are replaced rather than rejected.
    """
    with open(path, "rb") as handle:
        data = handle.read(max(0, max_bytes))
    return data.decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    formatter = TerminalFormatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_preview(source: str, path: str | Path, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` with a lexer picked from the file name."""
    try:
        lexer = get_lexer_for_filename(Path(path).name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    rendered = pygments_highlight(source, lexer, _formatter_for_style(style))
    # Pygments appends a trailing newline when the source lacks one.
    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered


def preview_start_line(target_line: int, pane_rows: int) -> int:
    """Return the 0-based first line to show so ``target_line`` sits near mid-pane.

    ``target_line`` is 1-based; 0 means "no target" and starts at the top.
    """
    half = pane_rows // 2
    if target_line <= 0 or target_line <= half:
        return 0
    return target_line - half


def load_preview_lines(
    path: str | Path,
    *,
    colorize: bool = True,
    style: str = DEFAULT_STYLE,
    max_bytes: int = PREVIEW_MAX_BYTES,
    reader=read_preview_text,
) -> list[str]:
    """Load display lines for ``path``; propagates ``OSError`` from ``reader``."""
    text = sanitize_terminal_text(reader(path, max_bytes)).replace("\r", "")
    if colorize and text:
        text = colorize_preview(text, path, style)
    return text.split("\n")
