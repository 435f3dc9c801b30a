from __future__ import annotations

import sys

from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QLabel,
    QMessageBox,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from pyprefs.app_settings import AppConfig
from pyprefs.logging_utils import get_logger
from pyprefs.options import BoundOptionList, EnforcementPolicy, OptionEntry, SyncReport

from .checked_list_view import CheckedListView
from .option_pages import OPTION_PAGES, OptionPage, populate_page
from .option_rows import HotkeyRow, NumericOptionRow, is_alt_only_hotkey

_LOGGER = get_logger(__name__)


class OptionsDialog(QDialog):
    def __init__(
        self,
        parent: QWidget | None,
        config: AppConfig,
        policy: EnforcementPolicy | None = None,
        pages: tuple[OptionPage, ...] = OPTION_PAGES,
        platform: str | None = None,
        *,
        show_errors: bool = True,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Options")
        self.resize(640, 520)
        self._config = config
        self._policy = policy
        self._show_errors = show_errors
        self._lists: dict[str, BoundOptionList] = {}
        self._views: dict[str, CheckedListView] = {}
        self._entries: dict[str, OptionEntry] = {}
        self._numeric_rows: dict[str, NumericOptionRow] = {}
        self._hotkey_rows: dict[str, HotkeyRow] = {}
        self._released = False
        self.last_report: SyncReport | None = None

        root = QVBoxLayout(self)
        self.tabs = QTabWidget(self)
        self.tabs.setObjectName("optionsTabs")
        root.addWidget(self.tabs, 1)
        for page in pages:
            self._add_page(page, platform)

        self.enforced_notice = QLabel(
            "Some options are managed by an enforced configuration and cannot be changed here.",
            self,
        )
        self.enforced_notice.setObjectName("enforcedNotice")
        self.enforced_notice.setWordWrap(True)
        self.enforced_notice.setVisible(self._has_locked_options())
        root.addWidget(self.enforced_notice)

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
            parent=self,
        )
        self.button_box.accepted.connect(self._accept_with_apply)
        self.button_box.rejected.connect(self.reject)
        root.addWidget(self.button_box)

    def _add_page(self, page: OptionPage, platform: str | None) -> None:
        current_platform = platform if platform is not None else sys.platform
        container = QWidget(self.tabs)
        layout = QVBoxLayout(container)
        for spec in page.numeric:
            section = self._section(spec.section)
            row = NumericOptionRow(
                spec,
                section,
                locked=self._is_locked(section, spec.name),
                supported=spec.is_supported(current_platform),
                parent=container,
            )
            layout.addWidget(row)
            self._numeric_rows[spec.key] = row
        for spec in page.hotkeys:
            section = self._section(spec.section)
            row = HotkeyRow(spec, section, locked=self._is_locked(section, spec.name), parent=container)
            layout.addWidget(row)
            self._hotkey_rows[spec.key] = row
        view = CheckedListView(container)
        layout.addWidget(view, 1)
        option_list = BoundOptionList(self._policy)
        view.bind(option_list)
        self._entries.update(populate_page(option_list, self._config, page, current_platform))
        if not page.groups:
            view.hide()
            layout.addStretch(1)
        self._lists[page.title] = option_list
        self._views[page.title] = view
        self.tabs.addTab(container, page.title)

    def _section(self, name: str):
        section = self._config.section(name)
        if section is None:
            raise KeyError(f"unknown settings section {name!r}")
        return section

    def _is_locked(self, section, name: str) -> bool:
        return self._policy is not None and bool(self._policy.is_locked(section, name))

    def _has_locked_options(self) -> bool:
        rows = [*self._numeric_rows.values(), *self._hotkey_rows.values()]
        return any(entry.locked for entry in self._entries.values()) or any(row.locked for row in rows)

    def option_list(self, title: str) -> BoundOptionList:
        return self._lists[title]

    def view(self, title: str) -> CheckedListView:
        return self._views[title]

    def entry(self, key: str) -> OptionEntry:
        return self._entries[key]

    def numeric_row(self, key: str) -> NumericOptionRow:
        return self._numeric_rows[key]

    def hotkey_row(self, key: str) -> HotkeyRow:
        return self._hotkey_rows[key]

    def _validate_options(self) -> bool:
        alt_only = [row.spec.label for row in self._hotkey_rows.values() if is_alt_only_hotkey(row.text())]
        if not alt_only:
            return True
        ret = QMessageBox.question(
            self,
            "Hotkeys",
            "These hotkeys use only Alt (optionally with Shift) as modifier:\n\n"
            + "\n".join(alt_only)
            + "\n\nSuch hotkeys can clash with menu shortcuts and with characters typed on some "
            "keyboard layouts. Adding Ctrl is recommended.\n\nUse them anyway?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if ret != QMessageBox.Yes:
            _LOGGER.info("Commit cancelled: Alt-only hotkeys rejected (%s)", ", ".join(alt_only))
            return False
        return True

    def _apply_to_memory(self) -> SyncReport:
        for row in self._numeric_rows.values():
            row.commit()
        for row in self._hotkey_rows.values():
            row.commit()
        report = SyncReport(write_back=True)
        for option_list in self._lists.values():
            report.merge(option_list.update_data(True))
        self.last_report = report
        _LOGGER.info(
            "Options committed: %d written, %d skipped, %d failed",
            len(report.written),
            len(report.skipped),
            len(report.failures),
        )
        return report

    def _accept_with_apply(self) -> None:
        if not self._validate_options():
            return
        report = self._apply_to_memory()
        if not report.ok and self._show_errors:
            QMessageBox.warning(
                self,
                "Some Options Were Not Saved",
                "The following options could not be saved:\n\n" + report.summary(),
            )
        self.accept()

    def get_config(self) -> AppConfig:
        return self._config

    def release(self) -> None:
        if self._released:
            return
        for option_list in self._lists.values():
            option_list.release()
        self._released = True

    def done(self, result: int) -> None:
        self.release()
        super().done(result)
