import argparse
import sys
import traceback
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QApplication, QDialog

from .app_settings import EnforcedSettings, load_config, save_config
from .logging_utils import LOG_LEVEL_OPTIONS, configure_app_logging, get_logger
from .ui import OptionsDialog

LOGGER = get_logger(__name__)


def main(
    existing_app: Optional[QApplication] = None,
    settings_path: Optional[Path] = None,
    enforced_path: Optional[Path] = None,
    log_level: Optional[str] = None,
) -> int:
    owns_app = existing_app is None
    app = existing_app or QApplication(sys.argv)
    configure_app_logging(log_level or "INFO")
    app.setApplicationName("Pyprefs")
    LOGGER.info("App main() starting (owns_app=%s)", owns_app)

    config = load_config(settings_path)
    if log_level is None:
        configure_app_logging(config.logging_level)

    enforced = EnforcedSettings.load(enforced_path)
    enforced.apply(config)

    def _global_exception_hook(exc_type, exc_value, exc_tb) -> None:
        error_text = "".join(traceback.format_exception(exc_type, exc_value, exc_tb)).strip()
        LOGGER.error("Unhandled exception routed to global hook\n%s", error_text)
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = _global_exception_hook

    dialog = OptionsDialog(None, config, enforced)
    if dialog.exec() != QDialog.Accepted:
        LOGGER.info("Options dialog cancelled; settings left unchanged")
        return 0
    save_config(dialog.get_config(), settings_path, enforced)
    report = dialog.last_report
    if report is not None and not report.ok:
        LOGGER.warning("Options saved with %d failure(s)", len(report.failures))
        return 1
    LOGGER.info("Options accepted and saved")
    return 0


def cli(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="pyprefs", add_help=True, description="Edit application options.")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings file to edit (defaults to the per-user settings.json).",
    )
    parser.add_argument(
        "--enforced",
        type=Path,
        default=None,
        help="Enforced settings file whose options are shown read-only.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVEL_OPTIONS,
        default=None,
        help="Override the logging level stored in the settings file.",
    )
    args = parser.parse_args(argv)
    return main(settings_path=args.settings, enforced_path=args.enforced, log_level=args.log_level)
