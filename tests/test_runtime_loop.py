"""Event loop tests.

Covers event production from raw input plus size polling, and the session
lifecycle around the controller.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazymd.runtime import KeyPress, Quit, Resize, iter_events, run_app
from lazymd.runtime import config
from lazymd.ui_theme import PLAIN_THEME


def sizes(*values: tuple[int, int]):
    remaining = list(values)

    def size_fn() -> tuple[int, int]:
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return size_fn


class IterEventsTests(unittest.TestCase):
    def collect(self, data: bytes, size_fn) -> list:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, data)
            os.close(write_fd)
            return list(iter_events(read_fd, (80, 24), size_fn=size_fn, poll_ms=20))
        finally:
            os.close(read_fd)

    def test_keys_then_quit_on_end_of_input(self) -> None:
        events = self.collect(b"jk", sizes((80, 24)))
        self.assertEqual(events, [KeyPress("j"), KeyPress("k"), Quit()])

    def test_resize_is_reported_only_on_change(self) -> None:
        events = self.collect(b"j", sizes((80, 24), (100, 30)))
        self.assertEqual(events, [KeyPress("j"), Resize(100, 30), Quit()])


class RunAppTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        (self.root / "a.md").write_text("# A\n", encoding="utf-8")
        patcher = mock.patch("lazymd.runtime.config.CONFIG_PATH", self.root / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_requires_interactive_terminal(self) -> None:
        fake_sys = mock.Mock()
        fake_sys.stdin.isatty.return_value = False
        with mock.patch("lazymd.runtime.loop.sys", fake_sys):
            with self.assertRaises(SystemExit):
                run_app(self.root)

    def run_session(self, keys: list[str], **kwargs) -> mock.Mock:
        fake_sys = mock.Mock()
        fake_sys.stdin.isatty.return_value = True
        fake_sys.stdout.isatty.return_value = True
        fake_sys.stdin.fileno.return_value = 0
        fake_sys.stdout.fileno.return_value = 1
        events = [KeyPress(key) for key in keys]
        with mock.patch("lazymd.runtime.loop.sys", fake_sys), mock.patch(
            "lazymd.runtime.loop.terminal_size", return_value=(40, 10)
        ), mock.patch("lazymd.runtime.loop.TerminalController") as terminal_cls, mock.patch(
            "lazymd.runtime.loop.iter_events", return_value=iter(events)
        ), mock.patch("lazymd.runtime.loop.draw") as draw_mock:
            run_app(self.root, PLAIN_THEME, **kwargs)
        terminal_cls.return_value.raw_mode.assert_called_once()
        return draw_mock

    def test_session_draws_initial_frame_and_after_each_event(self) -> None:
        draw_mock = self.run_session(["j", "q"])
        # Initial frame plus one per event that keeps the loop running.
        self.assertEqual(draw_mock.call_count, 2)
        rows, fd = draw_mock.call_args.args
        self.assertEqual(fd, 1)
        self.assertEqual(len(rows), 10)

    def test_toggled_hidden_preference_is_saved(self) -> None:
        self.run_session([".", "q"])
        self.assertTrue(config.load_show_hidden())

    def test_unchanged_hidden_preference_is_not_written(self) -> None:
        self.run_session(["q"], show_hidden=True)
        self.assertFalse((self.root / "config.json").exists())


if __name__ == "__main__":
    unittest.main()
