"""Bound option lists: checkable entries backed by boolean properties."""

from .binding import PropertyBinding
from .checked_list import BoundOptionList, OptionListView
from .errors import BindingError, OptionListReleasedError, SyncFailure, SyncReport
from .model import EnablementOverride, ImplicationLink, LinkType, OptionEntry
from .policy import NO_ENFORCEMENT, EnforcementPolicy

__all__ = [
    "BindingError",
    "BoundOptionList",
    "EnablementOverride",
    "EnforcementPolicy",
    "ImplicationLink",
    "LinkType",
    "NO_ENFORCEMENT",
    "OptionEntry",
    "OptionListReleasedError",
    "OptionListView",
    "PropertyBinding",
    "SyncFailure",
    "SyncReport",
]
