"""Screen geometry for the results and preview panes."""

from __future__ import annotations

from dataclasses import dataclass

from ..state import PreviewMode

HEADER_ROWS = 3  # title, query, blank
FOOTER_ROWS = 2  # status, key hints
RIGHT_PREVIEW_MARGIN_ROWS = 5


@dataclass(frozen=True)
class PaneRect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class FrameLayout:
    width: int
    height: int
    results: PaneRect
    preview: PaneRect | None
    max_display: int


def compute_layout(preview_mode: PreviewMode, width: int, height: int) -> FrameLayout:
    """Split a ``width`` x ``height`` screen between results and preview.

    RIGHT gives the preview the right half (``height - 5`` rows tall); BOTTOM
    gives it the bottom third at full width. ``max_display`` is the results
    pane height minus header and footer rows, never below 1.
    """
    width = max(1, width)
    height = max(1, height)
    results = PaneRect(0, 0, width, height)
    preview: PaneRect | None = None

    if preview_mode is PreviewMode.RIGHT:
        preview_width = width // 2
        results = PaneRect(0, 0, width - preview_width, height)
        preview = PaneRect(width - preview_width, 0, preview_width, max(1, height - RIGHT_PREVIEW_MARGIN_ROWS))
    elif preview_mode is PreviewMode.BOTTOM:
        preview_height = height // 3
        results = PaneRect(0, 0, width, height - preview_height)
        preview = PaneRect(0, height - preview_height, width, preview_height)

    if preview is not None and (preview.width <= 0 or preview.height <= 0):
        preview = None
        results = PaneRect(0, 0, width, height)

    max_display = max(1, results.height - HEADER_ROWS - FOOTER_ROWS)
    return FrameLayout(width=width, height=height, results=results, preview=preview, max_display=max_display)
