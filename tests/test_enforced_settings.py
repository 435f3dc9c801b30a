import json
import shutil
import sys
import time
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pyprefs.app_settings import AppConfig, EnforcedSettings
from pyprefs.options import BoundOptionList, EnforcementPolicy, LinkType


class EnforcedSettingsTests(unittest.TestCase):
    def test_is_locked_matches_section_and_name(self) -> None:
        config = AppConfig()
        enforced = EnforcedSettings({"security": {"clipboard_clear_on_exit": True}})
        self.assertIsInstance(enforced, EnforcementPolicy)
        self.assertTrue(enforced.is_locked(config.security, "clipboard_clear_on_exit"))
        self.assertFalse(enforced.is_locked(config.security, "clipboard_no_persist"))
        self.assertFalse(enforced.is_locked(config.application, "clipboard_clear_on_exit"))
        self.assertFalse(enforced.is_locked({"clipboard_clear_on_exit": True}, "clipboard_clear_on_exit"))

    def test_apply_overwrites_values_and_skips_unknown(self) -> None:
        config = AppConfig()
        enforced = EnforcedSettings(
            {
                "security": {"clipboard_clear_on_exit": "false", "bogus": True},
                "nowhere": {"x": True},
            }
        )
        enforced.apply(config)
        self.assertFalse(config.security.clipboard_clear_on_exit)
        self.assertFalse(hasattr(config.security, "bogus"))
        self.assertEqual(enforced.count(), 3)

    def test_apply_coerces_to_field_types(self) -> None:
        config = AppConfig()
        EnforcedSettings({"workspace_locking": {"lock_after_time": "900"}, "security": {"clipboard_no_persist": 0}}).apply(config)
        self.assertEqual(config.workspace_locking.lock_after_time, 900)
        self.assertIs(config.security.clipboard_no_persist, False)

    def test_user_values_are_restored_for_saving(self) -> None:
        config = AppConfig()
        config.security.clipboard_no_persist = True
        enforced = EnforcedSettings({"security": {"clipboard_no_persist": False}})
        enforced.apply(config)
        enforced.apply(config)
        self.assertFalse(config.security.clipboard_no_persist)
        self.assertTrue(enforced.user_value("security", "clipboard_no_persist"))
        settings = enforced.restore_user_values(config.to_settings())
        self.assertTrue(settings["security"]["clipboard_no_persist"])
        self.assertFalse(config.security.clipboard_no_persist)

    def test_load_from_file(self) -> None:
        tmp = ROOT / "tests_tmp" / f"enforced_{time.time_ns()}"
        tmp.mkdir(parents=True, exist_ok=True)
        try:
            self.assertFalse(EnforcedSettings.load(tmp / "missing.json"))
            path = tmp / "settings.enforced.json"
            path.write_text(
                json.dumps({"application": {"check_for_update": True}, "logging_level": "DEBUG"}),
                encoding="utf-8",
            )
            enforced = EnforcedSettings.load(path)
        finally:
            shutil.rmtree(tmp, ignore_errors=True)
        self.assertTrue(enforced)
        self.assertTrue(enforced.is_enforced("application", "check_for_update"))
        self.assertEqual(enforced.count(), 1)

    def test_enforced_options_survive_commit(self) -> None:
        config = AppConfig()
        enforced = EnforcedSettings({"integration": {"search_key_files": True}})
        enforced.apply(config)
        options = BoundOptionList(enforced)
        search = options.create_item(config.integration, "search_key_files", None, "Search")
        removable = options.create_item(config.integration, "search_key_files_on_removable_media", None, "Removable")
        options.add_link(search, removable, LinkType.UNCHECKED_UNCHECKED)
        options.add_link(removable, search, LinkType.CHECKED_CHECKED)
        self.assertFalse(search.enabled)
        self.assertEqual(options.toggle(search, False), [])
        options.toggle(removable, True)
        report = options.update_data(True)
        self.assertTrue(config.integration.search_key_files)
        self.assertTrue(config.integration.search_key_files_on_removable_media)
        self.assertEqual(report.skipped, [search])


if __name__ == "__main__":
    unittest.main()
