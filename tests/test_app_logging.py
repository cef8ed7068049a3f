from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazymd import app_logging


class ResolveLevelTests(unittest.TestCase):
    def test_argument_wins_over_environment(self) -> None:
        with mock.patch.dict(os.environ, {app_logging.LOG_LEVEL_ENV: "error"}):
            self.assertEqual(app_logging.resolve_level("debug"), logging.DEBUG)
            self.assertEqual(app_logging.resolve_level(), logging.ERROR)

    def test_default_and_unknown_names(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(app_logging.resolve_level(), logging.WARNING)
            self.assertEqual(app_logging.resolve_level("chatty"), logging.WARNING)


class InitLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        logger = logging.getLogger("lazymd")
        saved = (list(logger.handlers), logger.level, logger.propagate)

        def restore() -> None:
            for handler in logger.handlers:
                if handler not in saved[0]:
                    handler.close()
            logger.handlers[:] = saved[0]
            logger.setLevel(saved[1])
            logger.propagate = saved[2]
            app_logging._log_path = None

        app_logging._log_path = None
        self.addCleanup(restore)

    def test_records_go_to_log_file_only(self) -> None:
        log_dir = Path(self._tmp.name) / "logs"
        path = app_logging.init_logging("info", log_dir=log_dir)

        self.assertEqual(path, log_dir / app_logging.LOG_FILENAME)
        logging.getLogger("lazymd.explorer.fs").info("listed %s", "docs")
        for handler in logging.getLogger("lazymd").handlers:
            handler.flush()
        self.assertIn("listed docs", path.read_text(encoding="utf-8"))
        self.assertFalse(logging.getLogger("lazymd").propagate)

    def test_second_call_reuses_handler(self) -> None:
        log_dir = Path(self._tmp.name) / "logs"
        first = app_logging.init_logging(log_dir=log_dir)
        count = len(logging.getLogger("lazymd").handlers)
        second = app_logging.init_logging(log_dir=Path(self._tmp.name) / "other")

        self.assertEqual(first, second)
        self.assertEqual(len(logging.getLogger("lazymd").handlers), count)

    def test_unwritable_directory_returns_none(self) -> None:
        blocker = Path(self._tmp.name) / "file"
        blocker.write_text("", encoding="utf-8")
        self.assertIsNone(app_logging.init_logging(log_dir=blocker / "logs"))
        self.assertTrue(
            any(isinstance(h, logging.NullHandler) for h in logging.getLogger("lazymd").handlers)
        )


if __name__ == "__main__":
    unittest.main()
