"""Qt widgets for presenting bound option lists."""

from .checked_list_view import CheckedListView
from .option_pages import (
    OPTION_PAGES,
    HotkeySpec,
    LinkSpec,
    NumericOptionSpec,
    OptionPage,
    OptionSpec,
    populate_page,
)
from .option_rows import HotkeyRow, NumericOptionRow, hotkey_modifiers, is_alt_only_hotkey
from .options_dialog import OptionsDialog

__all__ = [
    "CheckedListView",
    "HotkeyRow",
    "HotkeySpec",
    "LinkSpec",
    "NumericOptionRow",
    "NumericOptionSpec",
    "OPTION_PAGES",
    "OptionPage",
    "OptionSpec",
    "OptionsDialog",
    "hotkey_modifiers",
    "is_alt_only_hotkey",
    "populate_page",
]
