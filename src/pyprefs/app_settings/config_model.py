from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from .coercion import coerce_bool, coerce_int_clamped, coerce_section, coerce_text


def _ranged(default: int, min_value: int, max_value: int) -> Any:
    return field(default=default, metadata={"range": (min_value, max_value)})


class _Section:
    __slots__ = ()

    SECTION: ClassVar[str] = ""

    @classmethod
    def from_settings(cls, raw: Any):
        data = coerce_section(raw)
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            kwargs[f.name] = cls._coerce_field(f, data.get(f.name, f.default))
        return cls(**kwargs)

    @classmethod
    def coerce_option(cls, name: str, value: Any) -> Any:
        for f in fields(cls):
            if f.name == name:
                return cls._coerce_field(f, value)
        raise KeyError(f"{cls.SECTION}.{name}")

    @staticmethod
    def _coerce_field(f, value: Any) -> Any:
        default = f.default
        if isinstance(default, bool):
            return coerce_bool(value, default=default)
        if isinstance(default, int):
            low, high = f.metadata.get("range", (-(2**31), 2**31 - 1))
            return coerce_int_clamped(value, default, low, high)
        return coerce_text(value, default)

    def to_settings(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def option_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass(slots=True)
class WorkspaceLockingConfig(_Section):
    SECTION: ClassVar[str] = "workspace_locking"

    # Seconds; 0 means off.
    lock_after_time: int = _ranged(0, 0, 1209600)
    lock_after_global_time: int = _ranged(0, 0, 1209600)
    lock_on_window_minimize: bool = False
    lock_on_window_minimize_to_tray: bool = False
    lock_on_session_switch: bool = False
    lock_on_suspend: bool = False
    lock_on_remote_control_change: bool = False
    exit_instead_of_locking_after_time: bool = False
    always_exit_instead_of_locking: bool = False


@dataclass(slots=True)
class SecurityConfig(_Section):
    SECTION: ClassVar[str] = "security"

    # Seconds; -1 means never.
    clipboard_clear_after_seconds: int = _ranged(12, -1, 86400)
    clipboard_clear_on_exit: bool = True
    clipboard_no_persist: bool = True
    use_clipboard_viewer_ignore_format: bool = False
    master_key_on_secure_desktop: bool = False
    clear_key_command_line_params: bool = True
    remember_master_password_while_open: bool = True
    ssl_certs_accept_invalid: bool = False


@dataclass(slots=True)
class DefaultsConfig(_Section):
    SECTION: ClassVar[str] = "defaults"

    # Days; -1 means new entries do not expire.
    new_entry_expires_in_days: int = _ranged(-1, -1, 36500)


@dataclass(slots=True)
class PolicyConfig(_Section):
    SECTION: ClassVar[str] = "policy"

    plugins: bool = True
    export: bool = True
    export_no_key: bool = True
    import_files: bool = True
    print_data: bool = True
    print_no_key: bool = False
    new_file: bool = True
    save_file: bool = True
    auto_type: bool = True
    auto_type_without_context: bool = True
    copy_to_clipboard: bool = True
    copy_whole_entries: bool = True
    drag_drop: bool = True
    unhide_passwords: bool = True
    change_master_key: bool = True
    change_master_key_no_key: bool = True
    edit_triggers: bool = True

@dataclass(slots=True)
class MainWindowConfig(_Section):
    SECTION: ClassVar[str] = "main_window"

    minimize_to_tray: bool = False
    minimize_after_clipboard_copy: bool = False
    minimize_after_locking: bool = True
    close_button_minimizes_window: bool = False
    show_full_path_in_title: bool = False
    entry_list_alternating_bg_colors: bool = True
    entry_list_show_deref_data: bool = True
    entry_list_show_deref_data_async: bool = True
    quick_find_search_in_passwords: bool = False
    quick_find_exclude_expired: bool = False
    focus_results_after_quick_find: bool = True


@dataclass(slots=True)
class IntegrationConfig(_Section):
    SECTION: ClassVar[str] = "integration"

    limit_to_single_instance: bool = True
    auto_type_match_by_title: bool = True
    auto_type_match_by_url_in_title: bool = False
    auto_type_expired_can_match: bool = False
    auto_type_always_show_sel_dialog: bool = False
    search_key_files: bool = True
    search_key_files_on_removable_media: bool = False
    # Qt portable key sequence text; empty means no hotkey.
    hotkey_global_auto_type: str = "Ctrl+Alt+A"
    hotkey_auto_type_password: str = ""
    hotkey_auto_type_selected: str = ""
    hotkey_show_window: str = "Ctrl+Alt+K"


@dataclass(slots=True)
class ApplicationConfig(_Section):
    SECTION: ClassVar[str] = "application"

    open_last_file: bool = True
    check_for_update: bool = False
    start_minimized_and_locked: bool = False
    auto_save_at_exit: bool = False
    auto_save_after_entry_edit: bool = False
    verify_written_file_after_saving: bool = True
    use_transacted_file_writes: bool = True
    use_file_locks: bool = False
    remember_working_directories: bool = True
    optimize_for_screen_reader: bool = False


SECTION_TYPES: tuple[type, ...] = (
    WorkspaceLockingConfig,
    SecurityConfig,
    DefaultsConfig,
    PolicyConfig,
    MainWindowConfig,
    IntegrationConfig,
    ApplicationConfig,
)


@dataclass(slots=True)
class AppConfig:
    workspace_locking: WorkspaceLockingConfig = field(default_factory=WorkspaceLockingConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    main_window: MainWindowConfig = field(default_factory=MainWindowConfig)
    integration: IntegrationConfig = field(default_factory=IntegrationConfig)
    application: ApplicationConfig = field(default_factory=ApplicationConfig)
    logging_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> "AppConfig":
        s = settings if isinstance(settings, dict) else {}
        known = {section_type.SECTION for section_type in SECTION_TYPES} | {"logging_level"}
        config = cls(
            workspace_locking=WorkspaceLockingConfig.from_settings(s.get("workspace_locking")),
            security=SecurityConfig.from_settings(s.get("security")),
            defaults=DefaultsConfig.from_settings(s.get("defaults")),
            policy=PolicyConfig.from_settings(s.get("policy")),
            main_window=MainWindowConfig.from_settings(s.get("main_window")),
            integration=IntegrationConfig.from_settings(s.get("integration")),
            application=ApplicationConfig.from_settings(s.get("application")),
            logging_level=str(s.get("logging_level", "INFO") or "INFO").strip().upper(),
            extra={k: v for k, v in s.items() if k not in known},
        )
        return normalize_linked_settings(config)

    def to_settings(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        for section in self.sections():
            out[section.SECTION] = section.to_settings()
        out["logging_level"] = self.logging_level
        return out

    def sections(self) -> tuple[Any, ...]:
        return (
            self.workspace_locking,
            self.security,
            self.defaults,
            self.policy,
            self.main_window,
            self.integration,
            self.application,
        )

    def section(self, name: str) -> Any | None:
        for section in self.sections():
            if section.SECTION == name:
                return section
        return None


def normalize_linked_settings(config: AppConfig) -> AppConfig:
    # Dependent options cannot be on while the option they refine is off.
    if not config.integration.search_key_files:
        config.integration.search_key_files_on_removable_media = False
    if not config.main_window.entry_list_show_deref_data:
        config.main_window.entry_list_show_deref_data_async = False
    return config
