"""Main interactive event loop for the finder.

``apply_key`` is the key-to-state transition and does no terminal I/O, so it
can be driven from tests. ``run_finder`` wires it to a raw-mode terminal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..input import KeyEvent, KeyKind, read_key
from ..preview import DEFAULT_STYLE
from ..render import compute_layout, render_frame
from ..search.types import MatchCandidate
from ..state import CursorMove, FinderState
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)


class LoopAction(Enum):
    CONTINUE = "continue"
    QUIT = "quit"
    CONFIRM = "confirm"


_MOVE_KEYS: dict[KeyKind, CursorMove] = {
    KeyKind.ARROW_UP: CursorMove.UP,
    KeyKind.ARROW_DOWN: CursorMove.DOWN,
    KeyKind.PAGE_UP: CursorMove.PAGE_UP,
    KeyKind.PAGE_DOWN: CursorMove.PAGE_DOWN,
    KeyKind.HOME: CursorMove.HOME,
    KeyKind.END: CursorMove.END,
}

_MOVE_CHARS: dict[str, CursorMove] = {
    "j": CursorMove.DOWN,
    "k": CursorMove.UP,
    "g": CursorMove.HOME,
    "G": CursorMove.END,
}


@dataclass
class FinderSession:
    """Loop-owned state around ``FinderState``.

    ``prompt`` holds the query being typed after ``/``; ``None`` means the
    prompt is closed.
    """

    state: FinderState
    prompt: str | None = None


def _search(state: FinderState) -> None:
    results = state.run_search()
    logger.debug(
        "search mode=%s query=%r -> %d results%s",
        state.search_mode.value,
        state.query,
        len(results),
        f" (error: {results.error})" if results.error else "",
    )


def _handle_prompt_key(session: FinderSession, event: KeyEvent) -> LoopAction:
    state = session.state
    assert session.prompt is not None
    if event.kind is KeyKind.CHAR and event.char.isprintable():
        session.prompt += event.char
    elif event.kind is KeyKind.SPACE:
        session.prompt += " "
    elif event.kind is KeyKind.BACKSPACE:
        session.prompt = session.prompt[:-1]
    elif event.kind is KeyKind.ENTER:
        submitted = session.prompt
        session.prompt = None
        state.set_query(submitted)
        _search(state)
    elif event.kind is KeyKind.ESCAPE:
        session.prompt = None
    elif event.kind is KeyKind.CTRL and event.char == "c":
        return LoopAction.QUIT
    return LoopAction.CONTINUE


def _handle_normal_key(session: FinderSession, event: KeyEvent) -> LoopAction:
    state = session.state
    kind = event.kind

    if kind in _MOVE_KEYS:
        state.move_cursor(_MOVE_KEYS[kind])
        return LoopAction.CONTINUE

    if kind is KeyKind.CHAR:
        ch = event.char
        if ch == "/":
            session.prompt = ""
        elif ch == "p":
            state.cycle_preview_mode()
        elif ch == "q":
            return LoopAction.QUIT
        elif ch in _MOVE_CHARS:
            state.move_cursor(_MOVE_CHARS[ch])
        elif ch.isprintable():
            state.set_query(state.query + ch, record_history=False)
            _search(state)
        return LoopAction.CONTINUE

    if kind is KeyKind.BACKSPACE:
        if state.query:
            state.set_query(state.query[:-1], record_history=False)
            _search(state)
    elif kind is KeyKind.TAB:
        state.toggle_search_mode()
        _search(state)
    elif kind is KeyKind.SPACE:
        state.toggle_select()
    elif kind is KeyKind.ENTER:
        if state.collect_selection():
            return LoopAction.CONFIRM
    elif kind is KeyKind.CTRL:
        if event.char == "c":
            return LoopAction.QUIT
        if event.char == "p" and state.history_prev():
            _search(state)
        elif event.char == "n" and state.history_next():
            _search(state)
    return LoopAction.CONTINUE


def apply_key(session: FinderSession, event: KeyEvent) -> LoopAction:
    """Apply one key event to the session and report what the loop should do."""
    if session.prompt is not None:
        return _handle_prompt_key(session, event)
    return _handle_normal_key(session, event)


def run_finder(
    state: FinderState,
    terminal: TerminalController,
    stdin_fd: int,
    *,
    theme: UITheme = DEFAULT_THEME,
    style: str = DEFAULT_STYLE,
) -> list[MatchCandidate]:
    """Run the interactive loop until the user quits or confirms.

    Returns the confirmed candidates (empty on quit). ``EndOfInput`` from the
    key reader propagates after the terminal has been restored.
    """
    session = FinderSession(state=state)
    with terminal.raw_mode():
        while True:
            width, height = terminal.size()
            layout = compute_layout(state.preview_mode, width, height)
            state.set_max_display(layout.max_display)
            terminal.write(
                render_frame(
                    state,
                    width,
                    height,
                    theme=theme,
                    prompt=session.prompt,
                    style=style,
                )
            )

            action = apply_key(session, read_key(stdin_fd))
            if action is LoopAction.QUIT:
                return []
            if action is LoopAction.CONFIRM:
                return state.collect_selection()
