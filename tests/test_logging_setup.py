"""Tests for optional file logging."""

from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyfind.logs import LOG_ENV_VAR, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger("lazyfind")
        self.saved_handlers = list(self.logger.handlers)
        self.saved_level = self.logger.level

    def tearDown(self) -> None:
        for handler in list(self.logger.handlers):
            if handler not in self.saved_handlers:
                self.logger.removeHandler(handler)
                handler.close()
        self.logger.setLevel(self.saved_level)

    def test_disabled_without_file_or_env(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(configure_logging())
        self.assertFalse(any(isinstance(h, logging.FileHandler) for h in self.logger.handlers))

    def test_explicit_file_receives_package_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "finder.log"

            self.assertEqual(configure_logging(log_path), log_path)
            logging.getLogger("lazyfind.search.content").debug("ran rg for %r", "needle")
            for handler in self.logger.handlers:
                handler.flush()

            text = log_path.read_text(encoding="utf-8")
            self.tearDown()

        self.assertIn("DEBUG lazyfind.search.content: ran rg for 'needle'", text)

    def test_env_var_is_used_and_handler_is_replaced(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp) / "first.log"
            second = Path(tmp) / "second.log"
            with mock.patch.dict(os.environ, {LOG_ENV_VAR: str(first)}):
                self.assertEqual(configure_logging(), first)
            configure_logging(second)

            file_handlers = [h for h in self.logger.handlers if isinstance(h, logging.FileHandler)]
            self.assertEqual(len(file_handlers), 1)
            self.assertEqual(Path(file_handlers[0].baseFilename), second)
            self.tearDown()


if __name__ == "__main__":
    unittest.main()
