import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from beatdeck_ui import settings_store


class SettingsStoreTestCase(unittest.TestCase):
    def test_missing_file_returns_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            with patch.object(settings_store, "SETTINGS_PATH", Path(td) / "settings.ini"):
                data = settings_store.load_settings()
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)

    def test_save_then_load(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                settings_store.save_settings(
                    {
                        "deck_source": "remote",
                        "api_url": "https://example.test/api/deck",
                        "timeout": "3",
                        "seed": "12",
                        "theme_name": "Ocean",
                        "font_scale": "Large",
                    }
                )
                text = ini_path.read_text(encoding="utf-8")
                data = settings_store.load_settings()
        self.assertIn("[deck]", text)
        self.assertIn("deck_source = remote", text)
        self.assertIn("theme_name = Ocean", text)
        self.assertEqual("remote", data["deck_source"])
        self.assertEqual("3.0", data["timeout"])
        self.assertEqual("12", data["seed"])
        self.assertEqual("Large", data["font_scale"])

    def test_invalid_values_fall_back(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text(
                "[deck]\n"
                "deck_source = carrier-pigeon\n"
                "api_url = ftp://nowhere\n"
                "timeout = -4\n"
                "seed = twelve\n"
                "[ui]\n"
                "theme_name = Neon\n"
                "font_scale = Huge\n",
                encoding="utf-8",
            )
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                data = settings_store.load_settings()
        self.assertEqual("local", data["deck_source"])
        self.assertEqual(settings_store.DEFAULT_SETTINGS["api_url"], data["api_url"])
        self.assertEqual(settings_store.DEFAULT_SETTINGS["timeout"], data["timeout"])
        self.assertEqual("", data["seed"])
        self.assertEqual("Forest", data["theme_name"])
        self.assertEqual("Normal", data["font_scale"])

    def test_unknown_keys_are_dropped(self):
        data = settings_store._sanitize({"volume": "11", "deck_code": "2S,3S"})
        self.assertNotIn("volume", data)
        self.assertEqual("2S,3S", data["deck_code"])


if __name__ == "__main__":
    unittest.main()
