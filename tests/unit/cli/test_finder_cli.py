"""CLI argument handling and entrypoint behavior tests.

Verifies how flags layer over persisted config, how confirmed selections
are printed, and how startup failures turn into exit messages.
"""

from __future__ import annotations

import contextlib
import io
import tempfile
import termios
import unittest
from unittest import mock

from lazyfind import cli
from lazyfind.input import EndOfInput
from lazyfind.runtime.config import FinderConfig
from lazyfind.search.types import MatchCandidate, SearchMode
from lazyfind.state import FinderState, PreviewMode
from lazyfind.ui_theme import OCEAN_THEME, PLAIN_THEME


@contextlib.contextmanager
def _fake_terminal_fds():
    yield 0, 1


class BuildStateTests(unittest.TestCase):
    def test_flags_override_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            args = cli.build_parser().parse_args(
                ["needle", "-f", "--hidden", "--regex", "--max-results", "9", "-d", tmp]
            )
            state = cli.build_state(args, FinderConfig(case_sensitive=True, preview_mode=PreviewMode.BOTTOM, max_results=3))

        self.assertEqual(state.query, "needle")
        self.assertIs(state.search_mode, SearchMode.FILES)
        self.assertIs(state.preview_mode, PreviewMode.BOTTOM)
        self.assertTrue(state.options.case_sensitive)
        self.assertTrue(state.options.search_hidden)
        self.assertEqual(state.options.max_results, 9)
        self.assertTrue(state.options.regex)
        self.assertEqual(state.options.directory, tmp)
        self.assertEqual(state.history, ["needle"])

    def test_defaults_come_from_config(self) -> None:
        args = cli.build_parser().parse_args([])
        state = cli.build_state(args, FinderConfig(search_hidden=True, max_results=4))

        self.assertEqual(state.query, "")
        self.assertIs(state.search_mode, SearchMode.CONTENT)
        self.assertIs(state.preview_mode, PreviewMode.RIGHT)
        self.assertTrue(state.options.search_hidden)
        self.assertFalse(state.options.case_sensitive)
        self.assertFalse(state.options.regex)
        self.assertEqual(state.options.max_results, 4)
        self.assertIsNone(state.options.directory)
        self.assertEqual(state.history, [])

    def test_preview_flags(self) -> None:
        config = FinderConfig(preview_mode=PreviewMode.BOTTOM)
        no_preview = cli.build_state(cli.build_parser().parse_args(["--no-preview"]), config)
        bottom = cli.build_state(cli.build_parser().parse_args(["--preview-bottom"]), FinderConfig())

        self.assertIs(no_preview.preview_mode, PreviewMode.NONE)
        self.assertIs(bottom.preview_mode, PreviewMode.BOTTOM)

    def test_invalid_flag_combinations_exit(self) -> None:
        for argv in (["--no-preview", "--preview-bottom"], ["--max-results", "0"], ["--max-results", "x"]):
            with self.subTest(argv=argv), mock.patch("sys.stderr", new_callable=io.StringIO):
                with self.assertRaises(SystemExit):
                    cli.build_parser().parse_args(argv)


class MainTests(unittest.TestCase):
    def _run_main(self, argv: list[str], run_finder_mock: mock.Mock, config: FinderConfig | None = None):
        with mock.patch("lazyfind.cli.configure_logging"), mock.patch(
            "lazyfind.cli.load_finder_config", return_value=config or FinderConfig()
        ), mock.patch("lazyfind.cli._terminal_fds", _fake_terminal_fds), mock.patch(
            "lazyfind.cli.TerminalController"
        ) as controller_cls, mock.patch("lazyfind.cli.run_finder", run_finder_mock), mock.patch.object(
            FinderState, "run_search"
        ) as run_search, mock.patch(
            "lazyfind.cli.save_preview_mode"
        ) as save_mode, mock.patch(
            "sys.stdout", new_callable=io.StringIO
        ) as stdout:
            cli.main(argv)
        return stdout.getvalue(), controller_cls, run_search, save_mode

    def test_confirmed_selection_is_printed_one_per_line(self) -> None:
        selection = [
            MatchCandidate(path="a.py", line_number=3, content="x = 1"),
            MatchCandidate(path="b.py", line_number=0, content=""),
        ]
        run_finder = mock.Mock(return_value=selection)

        output, controller_cls, run_search, save_mode = self._run_main(["x"], run_finder)

        self.assertEqual(output, "a.py:3: x = 1\nb.py:0: \n")
        controller_cls.assert_called_once_with(0, 1)
        run_search.assert_called_once_with()
        save_mode.assert_not_called()

    def test_quit_prints_nothing(self) -> None:
        output, *_rest = self._run_main([], mock.Mock(return_value=[]))
        self.assertEqual(output, "")

    def test_theme_and_style_are_resolved(self) -> None:
        run_finder = mock.Mock(return_value=[])
        self._run_main(["--no-color"], run_finder, FinderConfig(theme="ocean", style="friendly"))
        self.assertIs(run_finder.call_args.kwargs["theme"], PLAIN_THEME)
        self.assertEqual(run_finder.call_args.kwargs["style"], "friendly")

        run_finder = mock.Mock(return_value=[])
        self._run_main(["--style", "vim"], run_finder, FinderConfig(theme="ocean", style="friendly"))
        self.assertIs(run_finder.call_args.kwargs["theme"], OCEAN_THEME)
        self.assertEqual(run_finder.call_args.kwargs["style"], "vim")

    def test_changed_preview_mode_is_saved(self) -> None:
        def cycle_and_quit(state, terminal, stdin_fd, **kwargs):
            state.cycle_preview_mode()
            return []

        _output, _controller, _search, save_mode = self._run_main([], mock.Mock(side_effect=cycle_and_quit))

        save_mode.assert_called_once_with(PreviewMode.BOTTOM)

    def test_missing_directory_exits_before_terminal_setup(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = f"{tmp}/nope"
            with mock.patch("lazyfind.cli.configure_logging"), mock.patch("lazyfind.cli.TerminalController") as ctl:
                with self.assertRaises(SystemExit) as raised:
                    cli.main(["-d", missing])

        self.assertEqual(str(raised.exception), f"Directory not found: {missing}")
        ctl.assert_not_called()

    def test_closed_input_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as raised:
            self._run_main([], mock.Mock(side_effect=EndOfInput()))
        self.assertEqual(str(raised.exception), "Input closed.")

    def test_terminal_setup_failure_exits_with_message(self) -> None:
        with mock.patch("lazyfind.cli.configure_logging"), mock.patch(
            "lazyfind.cli.load_finder_config", return_value=FinderConfig()
        ), mock.patch("lazyfind.cli._terminal_fds", _fake_terminal_fds), mock.patch(
            "lazyfind.cli.TerminalController", side_effect=termios.error(25, "Inappropriate ioctl for device")
        ), mock.patch("lazyfind.cli.run_finder") as run_finder:
            with self.assertRaises(SystemExit) as raised:
                cli.main([])

        self.assertTrue(str(raised.exception).startswith("Cannot configure terminal:"))
        run_finder.assert_not_called()


if __name__ == "__main__":
    unittest.main()
