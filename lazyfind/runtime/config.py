"""Persistent JSON config helpers.

Stores startup defaults: preview layout, search flags, and UI styling.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..preview import DEFAULT_STYLE
from ..state import PreviewMode

logger = logging.getLogger(__name__)

APP_NAME = "lazyfind"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class FinderConfig:
    preview_mode: PreviewMode = PreviewMode.RIGHT
    search_hidden: bool = False
    case_sensitive: bool = False
    regex: bool = False
    max_results: int | None = None
    style: str = DEFAULT_STYLE
    theme: str | None = None


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so an
    unwritable config never breaks the session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("failed to save config %s: %s", CONFIG_PATH, exc)


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_positive_int(value: object) -> int | None:
    """Booleans, non-integers, and values below 1 are treated as unset."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _coerce_preview_mode(value: object) -> PreviewMode:
    if isinstance(value, str):
        try:
            return PreviewMode(value.strip().lower())
        except ValueError:
            pass
    return PreviewMode.RIGHT


def _coerce_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def load_finder_config() -> FinderConfig:
    """Read startup defaults with per-key validation."""
    data = load_config()
    return FinderConfig(
        preview_mode=_coerce_preview_mode(data.get("preview_mode")),
        search_hidden=_coerce_bool(data.get("search_hidden"), False),
        case_sensitive=_coerce_bool(data.get("case_sensitive"), False),
        regex=_coerce_bool(data.get("regex"), False),
        max_results=_coerce_positive_int(data.get("max_results")),
        style=_coerce_str(data.get("style")) or DEFAULT_STYLE,
        theme=_coerce_str(data.get("theme")),
    )


def save_preview_mode(mode: PreviewMode) -> None:
    """Persist the preview layout so the next session starts with it."""
    config = load_config()
    config["preview_mode"] = mode.value
    save_config(config)
