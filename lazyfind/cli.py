"""Command-line front door for lazyfind.

Parses CLI options, merges them with persisted config, runs the first search,
then hands over to the interactive loop. Confirmed selections are printed to
stdout after the terminal has been restored.
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
import termios
from pathlib import Path

from .input import EndOfInput
from .logs import configure_logging
from .runtime import run_finder
from .runtime.config import FinderConfig, load_finder_config, save_preview_mode
from .search.types import SearchMode, SearchOptions
from .state import FinderState, PreviewMode
from .terminal import TerminalController
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyfind",
        description="A telescope-like fuzzy finder for the terminal.",
        epilog=(
            "keys: Up/Down j/k navigate, PgUp/PgDn pages, / search prompt, Space select, "
            "Tab content/file mode, p preview layout, Enter confirm, Ctrl+P/Ctrl+N history, "
            "q or Ctrl+C quit"
        ),
    )
    parser.add_argument("query", nargs="?", default="", help="Initial query.")
    parser.add_argument("-d", "--dir", dest="directory", default=None, help="Directory to search.")
    parser.add_argument(
        "-f", "--files", action="store_true", help="Start in file search mode (default is content search)."
    )
    preview = parser.add_mutually_exclusive_group()
    preview.add_argument("--no-preview", action="store_true", help="Disable the preview pane.")
    preview.add_argument("--preview-bottom", action="store_true", help="Show the preview pane at the bottom.")
    parser.add_argument("--hidden", action="store_true", help="Search hidden files and directories.")
    parser.add_argument("--case-sensitive", action="store_true", help="Match content case-sensitively.")
    parser.add_argument(
        "--regex", action="store_true", help="Treat content queries as ripgrep regular expressions."
    )
    parser.add_argument(
        "--max-results", type=_positive_int, default=None, help="Maximum matches per file for content search."
    )
    parser.add_argument("--style", default=None, help="Pygments style name for the preview pane.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    return parser


def build_state(args: argparse.Namespace, config: FinderConfig) -> FinderState:
    """Create the initial ``FinderState`` from CLI args layered over config."""
    if args.no_preview:
        preview_mode = PreviewMode.NONE
    elif args.preview_bottom:
        preview_mode = PreviewMode.BOTTOM
    else:
        preview_mode = config.preview_mode

    options = SearchOptions(
        case_sensitive=args.case_sensitive or config.case_sensitive,
        regex=args.regex or config.regex,
        search_hidden=args.hidden or config.search_hidden,
        max_results=args.max_results if args.max_results is not None else config.max_results,
        directory=args.directory,
    )
    state = FinderState(
        search_mode=SearchMode.FILES if args.files else SearchMode.CONTENT,
        preview_mode=preview_mode,
        options=options,
    )
    state.set_query(args.query or "")
    return state


@contextlib.contextmanager
def _terminal_fds():
    """Yield ``(stdin_fd, stdout_fd)`` for the interactive terminal.

    Falls back to ``/dev/tty`` when stdin or stdout is redirected, so the
    selection can be piped elsewhere.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if os.isatty(stdin_fd) and os.isatty(stdout_fd):
        yield stdin_fd, stdout_fd
        return
    try:
        tty_fd = os.open(TTY_PATH, os.O_RDWR)
    except OSError as exc:
        raise SystemExit(f"lazyfind needs an interactive terminal: {exc}") from exc
    try:
        yield tty_fd, tty_fd
    finally:
        os.close(tty_fd)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, run the finder, and print confirmed selections."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    if args.directory is not None and not Path(args.directory).is_dir():
        raise SystemExit(f"Directory not found: {args.directory}")

    config = load_finder_config()
    state = build_state(args, config)
    initial_preview_mode = state.preview_mode
    theme = resolve_theme(args.theme or config.theme, no_color=args.no_color)
    style = args.style or config.style
    logger.debug(
        "starting: mode=%s preview=%s options=%s", state.search_mode.value, state.preview_mode.value, state.options
    )

    with _terminal_fds() as (stdin_fd, stdout_fd):
        try:
            terminal = TerminalController(stdin_fd, stdout_fd)
        except termios.error as exc:
            raise SystemExit(f"Cannot configure terminal: {exc}") from exc

        state.run_search()
        try:
            selection = run_finder(state, terminal, stdin_fd, theme=theme, style=style)
        except termios.error as exc:
            raise SystemExit(f"Cannot configure terminal: {exc}") from exc
        except EndOfInput as exc:
            raise SystemExit("Input closed.") from exc

    if state.preview_mode != initial_preview_mode:
        save_preview_mode(state.preview_mode)

    for candidate in selection:
        sys.stdout.write(candidate.output_line() + "\n")
    sys.stdout.flush()


if __name__ == "__main__":
    main()
