"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (chrome, rows, preview). Syntax highlighting
style for the preview pane remains a separate Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    reverse: str
    divider: str
    title: str
    query: str
    selected_marker: str
    match_highlight: str
    location: str
    filler: str
    status: str
    hint: str
    error: str
    preview_title: str
    preview_target: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2m",
    title="\033[1m",
    query="\033[1m",
    selected_marker="\033[36m",
    match_highlight="\033[33m",
    location="\033[34m",
    filler="\033[90m",
    status="\033[90m",
    hint="\033[90m",
    error="\033[31m",
    preview_title="\033[1m",
    preview_target="\033[7m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    query="\033[1;38;5;81m",
    selected_marker="\033[38;5;45m",
    match_highlight="\033[38;5;229m",
    location="\033[38;5;117m",
    filler="\033[2;38;5;24m",
    status="\033[2;38;5;110m",
    hint="\033[2;38;5;110m",
    error="\033[38;5;203m",
    preview_title="\033[1;38;5;39m",
    preview_target="\033[7m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    divider="",
    title="",
    query="",
    selected_marker="",
    match_highlight="",
    location="",
    filler="",
    status="",
    hint="",
    error="",
    preview_title="",
    preview_target="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
