from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .binding import PropertyBinding


class LinkType(Enum):
    UNCHECKED_UNCHECKED = (False, False)
    CHECKED_CHECKED = (True, True)
    UNCHECKED_CHECKED = (False, True)
    CHECKED_UNCHECKED = (True, False)

    @property
    def trigger_state(self) -> bool:
        return self.value[0]

    @property
    def forced_state(self) -> bool:
        return self.value[1]


class EnablementOverride(Enum):
    USER = "user"
    FORCED_ON = "forced_on"
    FORCED_OFF = "forced_off"

    @classmethod
    def from_forced_state(cls, forced_state: bool | None) -> "EnablementOverride":
        if forced_state is None:
            return cls.USER
        return cls.FORCED_ON if forced_state else cls.FORCED_OFF

    @property
    def forced_state(self) -> bool | None:
        if self is EnablementOverride.USER:
            return None
        return self is EnablementOverride.FORCED_ON


@dataclass(eq=False)
class OptionEntry:
    label: str
    binding: PropertyBinding
    group: str | None = None
    checked: bool = False
    override: EnablementOverride = EnablementOverride.USER
    locked: bool = False
    tooltip: str = ""
    description: str = ""
    index: int = -1

    @property
    def name(self) -> str:
        return self.binding.name

    @property
    def forced(self) -> bool:
        return self.override is not EnablementOverride.USER

    @property
    def enabled(self) -> bool:
        return not self.locked and not self.forced

    def __repr__(self) -> str:
        flags = []
        if self.locked:
            flags.append("locked")
        if self.forced:
            flags.append(self.override.value)
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"OptionEntry({self.label!r}, checked={self.checked}{suffix})"


@dataclass(frozen=True, eq=False)
class ImplicationLink:
    source: OptionEntry
    target: OptionEntry
    link_type: LinkType
    index: int

    def fires_for(self, state: bool) -> bool:
        return state == self.link_type.trigger_state
