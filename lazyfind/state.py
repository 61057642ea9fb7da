"""Mutable finder state: query, results, viewport, selection, and history.

One ``FinderState`` is owned by the driving loop. Operations here never do
terminal I/O; searches go through the injected backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .search.results import RipgrepBackend
from .search.types import MatchCandidate, ResultSet, SearchMode, SearchOptions


class PreviewMode(Enum):
    NONE = "none"
    RIGHT = "right"
    BOTTOM = "bottom"


_NEXT_PREVIEW_MODE = {
    PreviewMode.NONE: PreviewMode.RIGHT,
    PreviewMode.RIGHT: PreviewMode.BOTTOM,
    PreviewMode.BOTTOM: PreviewMode.NONE,
}


class CursorMove(Enum):
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


class SearchBackend(Protocol):
    def search(self, mode: SearchMode, query: str, options: SearchOptions) -> ResultSet: ...


def clamp_viewport(cursor: int, offset: int, max_display: int, total: int) -> tuple[int, int]:
    """Return ``(cursor, offset)`` with ``offset <= cursor < offset + max_display``.

    The cursor is clamped to ``[0, total - 1]``; empty results give ``(0, 0)``.
    """
    if total <= 0:
        return 0, 0
    rows = max(1, max_display)
    cursor = max(0, min(cursor, total - 1))
    offset = max(0, offset)
    if cursor < offset:
        offset = cursor
    elif cursor >= offset + rows:
        offset = cursor - rows + 1
    return cursor, offset


@dataclass
class FinderState:
    query: str = ""
    search_mode: SearchMode = SearchMode.CONTENT
    preview_mode: PreviewMode = PreviewMode.RIGHT
    options: SearchOptions = field(default_factory=SearchOptions)
    backend: SearchBackend = field(default_factory=RipgrepBackend)
    results: ResultSet = field(default_factory=lambda: ResultSet(mode=SearchMode.CONTENT))
    cursor: int = 0
    offset: int = 0
    max_display: int = 1
    selected: set[int] = field(default_factory=set)
    history: list[str] = field(default_factory=list)
    history_index: int = 0

    def set_query(self, text: str, record_history: bool = True) -> None:
        """Replace the live query and reset the viewport.

        Recorded queries are appended to history unless empty or equal to the
        last entry; the history cursor then returns to the live position.
        """
        self.query = text
        self.cursor = 0
        self.offset = 0
        if not record_history or not text:
            return
        if self.history and self.history[-1] == text:
            return
        self.history.append(text)
        self.history_index = len(self.history)

    def run_search(self) -> ResultSet:
        """Replace results with a fresh search for the current query and mode."""
        self.results = self.backend.search(self.search_mode, self.query, self.options)
        self.selected.clear()
        self.cursor = 0
        self.offset = 0
        return self.results

    def set_max_display(self, rows: int) -> None:
        self.max_display = max(1, rows)
        self._scroll_to_cursor()

    def _scroll_to_cursor(self) -> None:
        self.cursor, self.offset = clamp_viewport(self.cursor, self.offset, self.max_display, len(self.results))

    def move_cursor(self, direction: CursorMove) -> None:
        total = len(self.results)
        if total == 0:
            return
        last = total - 1
        if direction is CursorMove.UP:
            if self.cursor > 0:
                self.cursor -= 1
        elif direction is CursorMove.DOWN:
            if self.cursor < last:
                self.cursor += 1
        elif direction is CursorMove.PAGE_UP:
            self.cursor = max(0, self.cursor - self.max_display)
        elif direction is CursorMove.PAGE_DOWN:
            self.cursor = min(last, self.cursor + self.max_display)
        elif direction is CursorMove.HOME:
            self.cursor = 0
        elif direction is CursorMove.END:
            self.cursor = last
        self._scroll_to_cursor()

    def current_candidate(self) -> MatchCandidate | None:
        if 0 <= self.cursor < len(self.results):
            return self.results[self.cursor]
        return None

    def toggle_select(self) -> None:
        if not 0 <= self.cursor < len(self.results):
            return
        if self.cursor in self.selected:
            self.selected.discard(self.cursor)
        else:
            self.selected.add(self.cursor)

    def collect_selection(self) -> list[MatchCandidate]:
        """Return selected candidates in index order, else the cursor row."""
        if self.selected:
            total = len(self.results)
            return [self.results[idx] for idx in sorted(self.selected) if idx < total]
        current = self.current_candidate()
        return [current] if current is not None else []

    def toggle_search_mode(self) -> None:
        if self.search_mode is SearchMode.CONTENT:
            self.search_mode = SearchMode.FILES
        else:
            self.search_mode = SearchMode.CONTENT

    def cycle_preview_mode(self) -> None:
        self.preview_mode = _NEXT_PREVIEW_MODE[self.preview_mode]

    def history_prev(self) -> bool:
        """Recall the previous history entry; returns whether the query changed."""
        if not self.history or self.history_index == 0:
            return False
        self.history_index -= 1
        self.set_query(self.history[self.history_index], record_history=False)
        return True

    def history_next(self) -> bool:
        """Step forward through history, ending on an empty live query."""
        if not self.history or self.history_index >= len(self.history):
            return False
        self.history_index += 1
        if self.history_index >= len(self.history):
            self.set_query("", record_history=False)
        else:
            self.set_query(self.history[self.history_index], record_history=False)
        return True
