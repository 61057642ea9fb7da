"""Frame rendering for the finder.

``render_frame`` turns a ``FinderState`` and terminal size into one ANSI
frame string. It reads state but never mutates it; the driving loop syncs
``max_display`` from ``compute_layout`` before rendering.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..ansi import clip_ansi_line, fit_ansi_line
from ..preview import DEFAULT_STYLE, load_preview_lines, preview_start_line, sanitize_terminal_text
from ..search.fuzzy import match_positions
from ..search.types import MatchCandidate, SearchMode
from ..state import FinderState, clamp_viewport
from ..ui_theme import DEFAULT_THEME, PLAIN_THEME, UITheme
from .layout import FOOTER_ROWS, HEADER_ROWS, FrameLayout, PaneRect, compute_layout

logger = logging.getLogger(__name__)

APP_TITLE = "lazyfind"
FILLER_MARKER = "~"
SELECTED_MARKER = "* "
CURSOR_MARKER = ">"
KEY_HINTS = "[↑/↓:Nav] [Tab:Mode] [Space:Select] [p:Preview] [/:Search] [Enter:Open] [Ctrl+C:Quit]"

PreviewLoader = Callable[[MatchCandidate], list[str]]

__all__ = [
    "FOOTER_ROWS",
    "HEADER_ROWS",
    "FrameLayout",
    "PaneRect",
    "compute_layout",
    "display_text",
    "highlight_match",
    "page_numbers",
    "render_frame",
    "render_preview_rows",
    "render_results_rows",
    "selected_with_ansi",
]


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply cursor-row styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace(theme.reset, theme.reset + theme.reverse) + theme.reset


def highlight_match(text: str, query: str, theme: UITheme) -> str:
    """Mark the characters of ``text`` that ``query`` matches as a subsequence."""
    positions = set(match_positions(query, text))
    if not positions or not theme.match_highlight:
        return text

    out: list[str] = []
    highlighted = False
    for idx, ch in enumerate(text):
        is_match = idx in positions
        if is_match and not highlighted:
            out.append(theme.match_highlight)
            highlighted = True
        elif not is_match and highlighted:
            out.append(theme.reset)
            highlighted = False
        out.append(ch)
    if highlighted:
        out.append(theme.reset)
    return "".join(out)


def page_numbers(total: int, offset: int, max_display: int) -> tuple[int, int]:
    """Return 1-based ``(current_page, total_pages)`` for the viewport."""
    rows = max(1, max_display)
    if total == 0:
        return 1, 1
    return offset // rows + 1, (total + rows - 1) // rows


def display_text(text: str) -> str:
    """Neutralize control bytes so result text cannot drive the terminal."""
    return sanitize_terminal_text(text).replace("\r", "\\r").replace("\n", "\\n")


def _candidate_text(candidate: MatchCandidate, mode: SearchMode, query: str, theme: UITheme) -> str:
    if mode is SearchMode.CONTENT:
        location = f"{display_text(candidate.path)}:{candidate.line_number}: "
        if theme.location:
            location = f"{theme.location}{location}{theme.reset}"
        return location + highlight_match(display_text(candidate.content), query, theme)
    return highlight_match(display_text(candidate.path), query, theme)


def _query_line(state: FinderState, theme: UITheme, prompt: str | None) -> str:
    if prompt is not None:
        return f"Enter search: {theme.query}{prompt}{theme.reset}_"
    return f"Query: {theme.query}{state.query}{theme.reset}"


def _status_line(state: FinderState, offset: int, max_display: int, theme: UITheme) -> str:
    total = len(state.results)
    current_page, total_pages = page_numbers(total, offset, max_display)
    status = (
        f"{theme.status}[{total} results] [{len(state.selected)} selected] "
        f"[Page {current_page}/{total_pages}]{theme.reset}"
    )
    if state.results.error:
        status += f" {theme.error}[error: {display_text(state.results.error)}]{theme.reset}"
    return status


def render_results_rows(
    state: FinderState,
    max_display: int,
    theme: UITheme = DEFAULT_THEME,
    prompt: str | None = None,
) -> list[str]:
    """Build header, result rows, filler rows, and footer for the results pane."""
    total = len(state.results)
    cursor, offset = clamp_viewport(state.cursor, state.offset, max_display, total)
    mode_label = "Content Search" if state.search_mode is SearchMode.CONTENT else "File Search"

    rows = [
        f"{theme.title}=== {APP_TITLE} ({mode_label}) ==={theme.reset}",
        _query_line(state, theme, prompt),
        "",
    ]

    # Result rows follow the mode the results were produced in, not the
    # toggled mode that has not been searched yet.
    result_mode = state.results.mode
    for idx in range(offset, min(total, offset + max_display)):
        is_cursor = idx == cursor
        if idx in state.selected:
            prefix = f"{theme.selected_marker}{SELECTED_MARKER}{theme.reset}"
        else:
            prefix = " " * len(SELECTED_MARKER)
        if is_cursor and not theme.reverse:
            # No reverse video without color; mark the cursor row in the gutter.
            prefix = prefix[:-1] + CURSOR_MARKER
        row = prefix + _candidate_text(state.results[idx], result_mode, state.query, theme)
        if is_cursor:
            row = selected_with_ansi(row, theme)
        rows.append(row)

    shown = len(rows) - HEADER_ROWS
    filler = f"{theme.filler}{FILLER_MARKER}{theme.reset}"
    rows.extend(filler for _ in range(max_display - shown))

    rows.append(_status_line(state, offset, max_display, theme))
    rows.append(f"{theme.hint}{KEY_HINTS}{theme.reset}")
    return rows


def _default_preview_loader(theme: UITheme, style: str) -> PreviewLoader:
    colorize = theme is not PLAIN_THEME

    def load(candidate: MatchCandidate) -> list[str]:
        return load_preview_lines(candidate.path, colorize=colorize, style=style)

    return load


def render_preview_rows(
    candidate: MatchCandidate | None,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
    loader: PreviewLoader | None = None,
    style: str = DEFAULT_STYLE,
) -> list[str]:
    """Build ``height`` rows for the preview pane, each at most ``width`` columns.

    The target line sits near mid-pane and is highlighted. Read failures are
    shown inline instead of raising.
    """
    if height <= 0:
        return []
    if candidate is None:
        rows = [clip_ansi_line(f"{theme.status}No preview available{theme.reset}", width)]
        return rows + [""] * (height - 1)

    load = loader or _default_preview_loader(theme, style)
    title = f"=== Preview: {display_text(candidate.path)} ==="
    rows = [clip_ansi_line(f"{theme.preview_title}{title}{theme.reset}", width)]
    try:
        lines = load(candidate)
    except OSError as exc:
        logger.debug("preview unavailable for %r: %s", candidate.path, exc)
        message = f"Error reading file: {exc.strerror or exc}"
        rows.append(clip_ansi_line(f"{theme.error}{message}{theme.reset}", width))
        return rows + [""] * (height - len(rows))

    body_rows = height - 1
    start = preview_start_line(candidate.line_number, height)
    for line_idx in range(start, min(len(lines), start + body_rows)):
        text = clip_ansi_line(lines[line_idx], width)
        if line_idx + 1 == candidate.line_number:
            if theme.preview_target:
                text = theme.preview_target + text.replace(theme.reset, theme.reset + theme.preview_target)
            text += theme.reset
        elif "\033" in text:
            text += "\033[0m"
        rows.append(text)
    return rows + [""] * (height - len(rows))


def render_frame(
    state: FinderState,
    width: int,
    height: int,
    *,
    theme: UITheme = DEFAULT_THEME,
    prompt: str | None = None,
    preview_loader: PreviewLoader | None = None,
    style: str = DEFAULT_STYLE,
) -> str:
    """Compose a full-screen frame for ``state`` at ``width`` x ``height``."""
    layout = compute_layout(state.preview_mode, width, height)
    results_pane = layout.results
    results_rows = render_results_rows(state, layout.max_display, theme, prompt)[: results_pane.height]
    results_rows += [""] * (results_pane.height - len(results_rows))

    preview_pane = layout.preview
    screen: list[str]
    if preview_pane is None:
        screen = [clip_ansi_line(row, results_pane.width) for row in results_rows]
    elif preview_pane.y == 0:
        # Right-hand pane: one divider column, then preview text.
        preview_rows = render_preview_rows(
            state.current_candidate(),
            max(0, preview_pane.width - 1),
            preview_pane.height,
            theme,
            preview_loader,
            style,
        )
        divider = f"{theme.divider}│{theme.reset}"
        screen = []
        for row_idx, row in enumerate(results_rows):
            line = fit_ansi_line(row, results_pane.width)
            if row_idx < len(preview_rows):
                line += divider + preview_rows[row_idx]
            screen.append(line)
    else:
        preview_rows = render_preview_rows(
            state.current_candidate(),
            preview_pane.width,
            preview_pane.height,
            theme,
            preview_loader,
            style,
        )
        screen = [clip_ansi_line(row, results_pane.width) for row in results_rows] + preview_rows

    out: list[str] = ["\033[H\033[J"]
    for row_idx, line in enumerate(screen[: layout.height]):
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
        if row_idx < layout.height - 1:
            out.append("\r\n")
    return "".join(out)
