from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazymd.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch("lazymd.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def test_missing_config_gives_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertFalse(config.load_show_hidden())
        self.assertIsNone(config.load_theme_name())

    def test_round_trip_preferences_share_one_file(self) -> None:
        config.save_show_hidden(True)
        config.save_theme_name("  ocean  ")

        self.assertEqual(config.load_config(), {"show_hidden": True, "theme": "ocean"})
        self.assertTrue(config.load_show_hidden())
        self.assertEqual(config.load_theme_name(), "ocean")

    def test_blank_theme_name_is_not_saved(self) -> None:
        config.save_theme_name("   ")
        self.assertFalse(self.config_path.exists())

    def test_malformed_config_is_ignored_with_warning(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("lazymd.runtime.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

    def test_non_object_and_wrong_types_fall_back(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(config.load_config(), {})
        self.config_path.write_text('{"show_hidden": "yes", "theme": 3}', encoding="utf-8")
        self.assertFalse(config.load_show_hidden())
        self.assertIsNone(config.load_theme_name())

    def test_unwritable_location_is_logged_not_raised(self) -> None:
        blocker = Path(self._tmp.name) / "file"
        blocker.write_text("", encoding="utf-8")
        with mock.patch("lazymd.runtime.config.CONFIG_PATH", blocker / "config.json"):
            with self.assertLogs("lazymd.runtime.config", level="WARNING"):
                config.save_show_hidden(True)


if __name__ == "__main__":
    unittest.main()
