from __future__ import annotations

import sys
from dataclasses import dataclass

from pyprefs.app_settings import AppConfig
from pyprefs.logging_utils import get_logger
from pyprefs.options import BoundOptionList, LinkType, OptionEntry

_LOGGER = get_logger(__name__)

CLIPBOARD_HINT = (
    "This option applies to clipboard contents copied by this application, "
    "not to data copied by other programs."
)
POLICY_HINT = "Changing a policy option takes effect after the dialog is confirmed."


@dataclass(frozen=True, slots=True)
class OptionSpec:
    section: str
    name: str
    label: str
    tooltip: str = ""
    description: str = ""
    unsupported_on: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.section}.{self.name}"

    def is_supported(self, platform: str) -> bool:
        return not any(platform.startswith(prefix) for prefix in self.unsupported_on)


@dataclass(frozen=True, slots=True)
class NumericOptionSpec:
    """A checkbox enabling an integer option, with a spin box for its value.

    The option is on while its stored value is above ``off_value``; unchecking
    the box stores ``off_value``. ``fallback`` fills the spin box while off.
    """

    section: str
    name: str
    label: str
    off_value: int
    fallback: int
    minimum: int
    maximum: int
    suffix: str = ""
    unsupported_on: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.section}.{self.name}"

    def is_active(self, value: int) -> bool:
        return value > self.off_value

    def is_supported(self, platform: str) -> bool:
        return not any(platform.startswith(prefix) for prefix in self.unsupported_on)


@dataclass(frozen=True, slots=True)
class HotkeySpec:
    section: str
    name: str
    label: str

    @property
    def key(self) -> str:
        return f"{self.section}.{self.name}"


@dataclass(frozen=True, slots=True)
class LinkSpec:
    source: str
    target: str
    link_type: LinkType


@dataclass(frozen=True, slots=True)
class OptionPage:
    title: str
    groups: tuple[tuple[str | None, tuple[OptionSpec, ...]], ...]
    links: tuple[LinkSpec, ...] = ()
    numeric: tuple[NumericOptionSpec, ...] = ()
    hotkeys: tuple[HotkeySpec, ...] = ()

    def option_specs(self) -> list[OptionSpec]:
        return [spec for _group, specs in self.groups for spec in specs]


def _clip(name: str, label: str) -> OptionSpec:
    return OptionSpec("security", name, label, tooltip=f"{label}.\n\n{CLIPBOARD_HINT}")


def _policy(name: str, label: str, description: str) -> OptionSpec:
    return OptionSpec("policy", name, f"{label}*", description=description)


SECURITY_PAGE = OptionPage(
    title="Security",
    groups=(
        (
            "General",
            (
                OptionSpec("workspace_locking", "lock_on_window_minimize", "Lock workspace when minimizing main window to taskbar"),
                OptionSpec("workspace_locking", "lock_on_window_minimize_to_tray", "Lock workspace when minimizing main window to tray"),
                OptionSpec(
                    "workspace_locking",
                    "lock_on_session_switch",
                    "Lock workspace when locking the computer or switching the user",
                    unsupported_on=("darwin",),
                ),
                OptionSpec(
                    "workspace_locking",
                    "lock_on_suspend",
                    "Lock workspace when the computer is about to be suspended",
                    unsupported_on=("darwin",),
                ),
                OptionSpec("workspace_locking", "lock_on_remote_control_change", "Lock workspace when the remote control mode changes"),
                OptionSpec("workspace_locking", "exit_instead_of_locking_after_time", "Exit instead of locking the workspace after the specified time"),
                OptionSpec("workspace_locking", "always_exit_instead_of_locking", "Always exit instead of locking the workspace"),
            ),
        ),
        (
            "Clipboard",
            (
                _clip("clipboard_clear_on_exit", "Clipboard: clear on exit"),
                _clip("clipboard_no_persist", "Clipboard: do not keep data after exit"),
                _clip("use_clipboard_viewer_ignore_format", "Clipboard: hide copied data from clipboard viewers"),
            ),
        ),
        (
            "Advanced",
            (
                OptionSpec(
                    "security",
                    "master_key_on_secure_desktop",
                    "Enter master key on secure desktop",
                    unsupported_on=("linux", "darwin", "freebsd"),
                ),
                OptionSpec("security", "clear_key_command_line_params", "Clear master key command line parameters after using them once"),
                OptionSpec("security", "remember_master_password_while_open", "Remember master password while the workspace is open"),
            ),
        ),
    ),
    numeric=(
        NumericOptionSpec(
            "workspace_locking",
            "lock_after_time",
            "Lock workspace after application inactivity",
            off_value=0,
            fallback=300,
            minimum=1,
            maximum=1209600,
            suffix=" s",
        ),
        NumericOptionSpec(
            "workspace_locking",
            "lock_after_global_time",
            "Lock workspace after global user inactivity",
            off_value=0,
            fallback=240,
            minimum=1,
            maximum=1209600,
            suffix=" s",
            unsupported_on=("linux", "darwin", "freebsd"),
        ),
        NumericOptionSpec(
            "security",
            "clipboard_clear_after_seconds",
            "Clipboard auto-clear time",
            off_value=-1,
            fallback=12,
            minimum=0,
            maximum=86400,
            suffix=" s",
        ),
        NumericOptionSpec(
            "defaults",
            "new_entry_expires_in_days",
            "By default, new entries expire in",
            off_value=-1,
            fallback=365,
            minimum=0,
            maximum=36500,
            suffix=" days",
        ),
    ),
)


POLICY_PAGE = OptionPage(
    title="Policy",
    groups=(
        (
            None,
            (
                _policy("plugins", "Plugins", "Allow loading and using plugins."),
                _policy("export", "Export", "Allow exporting entries."),
                _policy("export_no_key", "Export - No Key Repeat", "Export without re-entering the master key."),
                _policy("import_files", "Import", "Allow importing entries from files."),
                _policy("print_data", "Print", "Allow printing entry lists."),
                _policy("print_no_key", "Print - No Key Repeat", "Print without re-entering the master key."),
                _policy("new_file", "New File", "Allow creating new workspace files."),
                _policy("save_file", "Save File", "Allow saving workspace files."),
                _policy("auto_type", "Auto-Type", "Allow sending entry data by auto-type."),
                _policy(
                    "auto_type_without_context",
                    "Auto-Type - Without Context",
                    "Allow global auto-type and auto-type of the selected entry without a target window context.",
                ),
                _policy("copy_to_clipboard", "Copy to Clipboard", "Allow copying entry fields to the clipboard."),
                _policy("copy_whole_entries", "Copy Whole Entries", "Allow copying complete entries to the clipboard."),
                _policy("drag_drop", "Drag & Drop", "Allow dragging entry fields into other windows."),
                _policy("unhide_passwords", "Unhide Passwords", "Allow showing passwords as plain text."),
                _policy("change_master_key", "Change Master Key", "Allow changing the master key."),
                _policy(
                    "change_master_key_no_key",
                    "Change Master Key - No Key Repeat",
                    "Change the master key without entering the current one.",
                ),
                _policy("edit_triggers", "Edit Triggers", "Allow editing the trigger system."),
            ),
        ),
    ),
)


INTERFACE_PAGE = OptionPage(
    title="Interface",
    groups=(
        (
            "Main Window",
            (
                OptionSpec("main_window", "minimize_to_tray", "Minimize to tray instead of taskbar"),
                OptionSpec("main_window", "minimize_after_clipboard_copy", "Minimize main window after copying data to the clipboard"),
                OptionSpec("main_window", "minimize_after_locking", "Minimize main window after locking the workspace"),
                OptionSpec("main_window", "close_button_minimizes_window", "Close button [X] minimizes main window instead of terminating the application"),
                OptionSpec("main_window", "show_full_path_in_title", "Show full path in title bar (instead of file name only)"),
            ),
        ),
        (
            "Entry List",
            (
                OptionSpec("main_window", "entry_list_alternating_bg_colors", "Use alternating item background colors"),
                OptionSpec("main_window", "entry_list_show_deref_data", "Show dereferenced data"),
                OptionSpec("main_window", "entry_list_show_deref_data_async", "Show dereferenced data asynchronously"),
            ),
        ),
        (
            "Quick Search",
            (
                OptionSpec("main_window", "quick_find_search_in_passwords", "Search in passwords"),
                OptionSpec("main_window", "quick_find_exclude_expired", "Exclude expired entries"),
                OptionSpec("main_window", "focus_results_after_quick_find", "Focus entry list after a successful quick search"),
            ),
        ),
    ),
    links=(
        LinkSpec("main_window.entry_list_show_deref_data", "main_window.entry_list_show_deref_data_async", LinkType.UNCHECKED_UNCHECKED),
        LinkSpec("main_window.entry_list_show_deref_data_async", "main_window.entry_list_show_deref_data", LinkType.CHECKED_CHECKED),
    ),
)


INTEGRATION_PAGE = OptionPage(
    title="Integration",
    groups=(),
    hotkeys=(
        HotkeySpec("integration", "hotkey_global_auto_type", "Global auto-type"),
        HotkeySpec("integration", "hotkey_auto_type_password", "Global auto-type - password only"),
        HotkeySpec("integration", "hotkey_auto_type_selected", "Auto-type selected entry"),
        HotkeySpec("integration", "hotkey_show_window", "Show application window"),
    ),
)


ADVANCED_PAGE = OptionPage(
    title="Advanced",
    groups=(
        (
            "Start and Exit",
            (
                OptionSpec("application", "open_last_file", "Remember and automatically open last used workspace on startup"),
                OptionSpec("integration", "limit_to_single_instance", "Limit to single instance"),
                OptionSpec("application", "check_for_update", "Check for update at startup"),
                OptionSpec(
                    "application",
                    "start_minimized_and_locked",
                    "Start minimized and locked",
                    unsupported_on=("darwin",),
                ),
                OptionSpec("application", "auto_save_at_exit", "Automatically save when closing/locking the workspace"),
                OptionSpec("application", "auto_save_after_entry_edit", "Automatically save after modifying an entry"),
            ),
        ),
        (
            "Auto-Type",
            (
                OptionSpec("integration", "auto_type_match_by_title", "An entry matches if its title is contained in the target window title"),
                OptionSpec("integration", "auto_type_match_by_url_in_title", "An entry matches if its URL is contained in the target window title"),
                OptionSpec("integration", "auto_type_expired_can_match", "Expired entries can match"),
                OptionSpec("integration", "auto_type_always_show_sel_dialog", "Always show global auto-type entry selection dialog"),
            ),
        ),
        (
            "Files",
            (
                OptionSpec("application", "verify_written_file_after_saving", "Verify written file after saving"),
                OptionSpec("application", "use_transacted_file_writes", "Use file transactions for writing workspaces"),
                OptionSpec("application", "use_file_locks", "Use file locks (not recommended)"),
                OptionSpec("security", "ssl_certs_accept_invalid", "Accept invalid SSL certificates (self-signed, expired, etc.)"),
            ),
        ),
        (
            "Advanced",
            (
                OptionSpec("integration", "search_key_files", "Search for key files"),
                OptionSpec("integration", "search_key_files_on_removable_media", "Search for key files also on removable media"),
                OptionSpec("application", "remember_working_directories", "Remember working directories"),
                OptionSpec("application", "optimize_for_screen_reader", "Optimize for screen reader (only enable if you're using a screen reader)"),
            ),
        ),
    ),
    links=(
        LinkSpec("integration.search_key_files", "integration.search_key_files_on_removable_media", LinkType.UNCHECKED_UNCHECKED),
        LinkSpec("integration.search_key_files_on_removable_media", "integration.search_key_files", LinkType.CHECKED_CHECKED),
    ),
)


OPTION_PAGES: tuple[OptionPage, ...] = (
    SECURITY_PAGE,
    POLICY_PAGE,
    INTERFACE_PAGE,
    INTEGRATION_PAGE,
    ADVANCED_PAGE,
)


def populate_page(
    option_list: BoundOptionList,
    config: AppConfig,
    page: OptionPage,
    platform: str | None = None,
) -> dict[str, OptionEntry]:
    """Create the entries and links of ``page`` and load their current values."""
    current_platform = platform if platform is not None else sys.platform
    created: dict[str, OptionEntry] = {}
    for group, specs in page.groups:
        for spec in specs:
            section = config.section(spec.section)
            if section is None:
                raise KeyError(f"unknown settings section {spec.section!r}")
            label = spec.label
            forced_state = None
            if not spec.is_supported(current_platform):
                # Shown unchecked and read-only; the stored value is left alone.
                forced_state = False
                label = f"{label} (unsupported on this platform)"
            created[spec.key] = option_list.create_item(
                section,
                spec.name,
                group,
                label,
                forced_state,
                tooltip=spec.tooltip,
                description=spec.description,
            )
    for link in page.links:
        option_list.add_link(created[link.source], created[link.target], link.link_type)
    option_list.update_data(False)
    _LOGGER.debug(
        "Populated %s page with %d option(s) in %d group(s)",
        page.title,
        len(created),
        len(option_list.groups()),
    )
    return created
