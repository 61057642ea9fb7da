"""Terminal control helpers for the finder session.

Owns raw-mode lifecycle, alternate-screen switching, and geometry lookups.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import termios
import tty

logger = logging.getLogger(__name__)

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
EXIT_TUI_SEQUENCE = b"\x1b[?25h\x1b[?1049l"
FALLBACK_SIZE = (80, 24)


class TerminalController:
    """Manage raw-mode transitions for one stdin/stdout pair.

    Construction captures the current tty attributes and raises
    ``termios.error`` when stdin is not a terminal.
    """

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter byte-at-a-time, no-echo input on the alternate screen."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)

    def disable_tui_mode(self) -> None:
        """Restore the saved tty state; failures are logged, not raised."""
        try:
            os.write(self.stdout_fd, EXIT_TUI_SEQUENCE)
        except OSError as exc:
            logger.warning("failed to leave alternate screen: %s", exc)
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            logger.warning("failed to restore terminal attributes: %s", exc)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` for the output terminal."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = shutil.get_terminal_size(FALLBACK_SIZE)
        return max(1, size.columns), max(1, size.lines)

    def write(self, frame: str) -> None:
        os.write(self.stdout_fd, frame.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()
