import json
import logging
import os
import shutil
import sys
import time
import unittest
from pathlib import Path
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from PySide6.QtWidgets import QApplication, QDialog

from pyprefs import app as app_module
from pyprefs.logging_utils import configure_app_logging, get_level_number, normalize_log_level_name
from pyprefs.options import SyncReport


class _FakeDialog:
    result_code = QDialog.Accepted
    get_config_calls = 0
    instances: list["_FakeDialog"] = []

    def __init__(self, parent, config, policy) -> None:
        self.config = config
        self.policy = policy
        self.last_report = SyncReport(write_back=True)
        _FakeDialog.instances.append(self)

    def get_config(self):
        self.get_config_calls += 1
        return self.config

    def exec(self):
        self.config.application.check_for_update = True
        return self.result_code


class LoggingUtilsTests(unittest.TestCase):
    def test_level_names_are_normalized(self) -> None:
        self.assertEqual(normalize_log_level_name("debug"), "DEBUG")
        self.assertEqual(normalize_log_level_name("loud"), "INFO")
        self.assertEqual(get_level_number("warning"), logging.WARNING)

    def test_configure_installs_one_handler(self) -> None:
        root = logging.getLogger()
        configure_app_logging("DEBUG")
        configure_app_logging("INFO")
        handlers = [h for h in root.handlers if getattr(h, "_pyprefs_console_handler", False)]
        self.assertEqual(len(handlers), 1)
        self.assertEqual(root.level, logging.INFO)


class AppEntryTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        self.tmp = ROOT / "tests_tmp" / f"app_{time.time_ns()}"
        self.tmp.mkdir(parents=True, exist_ok=True)
        self._hook = sys.excepthook
        _FakeDialog.instances = []

    def tearDown(self) -> None:
        sys.excepthook = self._hook
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_accept_saves_user_values_of_enforced_options(self) -> None:
        settings = self.tmp / "settings.json"
        settings.write_text(json.dumps({"security": {"clipboard_no_persist": True}}), encoding="utf-8")
        enforced = self.tmp / "settings.enforced.json"
        enforced.write_text(json.dumps({"security": {"clipboard_no_persist": False}}), encoding="utf-8")
        with patch.object(app_module, "OptionsDialog", _FakeDialog):
            code = app_module.main(self.app, settings_path=settings, enforced_path=enforced, log_level="WARNING")
        self.assertEqual(code, 0)
        saved = json.loads(settings.read_text(encoding="utf-8"))
        self.assertTrue(saved["application"]["check_for_update"])
        self.assertTrue(saved["security"]["clipboard_no_persist"])
        self.assertFalse(_FakeDialog.instances[0].config.security.clipboard_no_persist)
        self.assertTrue(_FakeDialog.instances[0].policy.is_enforced("security", "clipboard_no_persist"))
        self.assertEqual(_FakeDialog.instances[0].get_config_calls, 1)

    def test_cancel_does_not_write_settings(self) -> None:
        settings = self.tmp / "settings.json"
        with patch.object(app_module, "OptionsDialog", _FakeDialog), patch.object(
            _FakeDialog, "result_code", QDialog.Rejected
        ):
            code = app_module.main(self.app, settings_path=settings, enforced_path=self.tmp / "none.json", log_level="WARNING")
        self.assertEqual(code, 0)
        self.assertFalse(settings.exists())

    def test_cli_forwards_arguments(self) -> None:
        with patch.object(app_module, "main", return_value=0) as main:
            code = app_module.cli(["--settings", "a.json", "--enforced", "b.json", "--log-level", "debug"])
        self.assertEqual(code, 0)
        main.assert_called_once_with(settings_path=Path("a.json"), enforced_path=Path("b.json"), log_level="DEBUG")


if __name__ == "__main__":
    unittest.main()
