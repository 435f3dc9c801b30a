from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import OptionEntry


class BindingError(ValueError):
    """Raised when an option cannot be bound to a boolean property."""

    def __init__(self, target: object, name: str, reason: str) -> None:
        self.target = target
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot bind option {type(target).__name__}.{name}: {reason}")


class OptionListReleasedError(RuntimeError):
    """Raised when an option list is used after ``release()``."""


@dataclass(frozen=True, slots=True)
class SyncFailure:
    entry: "OptionEntry"
    error: Exception

    def describe(self) -> str:
        return f"{self.entry.label}: {self.error}"


@dataclass(slots=True)
class SyncReport:
    """Outcome of one ``update_data`` pass."""

    write_back: bool
    written: list["OptionEntry"] = field(default_factory=list)
    skipped: list["OptionEntry"] = field(default_factory=list)
    failures: list[SyncFailure] = field(default_factory=list)
    inconsistencies: list["OptionEntry"] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        return "\n".join(failure.describe() for failure in self.failures)

    def merge(self, other: "SyncReport") -> "SyncReport":
        self.written.extend(other.written)
        self.skipped.extend(other.skipped)
        self.failures.extend(other.failures)
        self.inconsistencies.extend(other.inconsistencies)
        return self
