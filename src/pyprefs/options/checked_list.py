"""Checkable option lists bound to boolean configuration properties.

A :class:`BoundOptionList` owns the entries of one list widget. Entries are
read from their properties on ``update_data(False)`` and written back only on
``update_data(True)``, so a cancelled dialog never touches the configuration.
User toggles run through :meth:`BoundOptionList.toggle`, which applies the
registered implication links in a single bounded pass.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any, Protocol

from pyprefs.logging_utils import get_logger

from .binding import PropertyBinding
from .errors import BindingError, OptionListReleasedError, SyncFailure, SyncReport
from .model import EnablementOverride, ImplicationLink, LinkType, OptionEntry
from .policy import NO_ENFORCEMENT, EnforcementPolicy

_LOGGER = get_logger(__name__)


class OptionListView(Protocol):
    def entry_added(self, entry: OptionEntry) -> None: ...

    def entry_changed(self, entry: OptionEntry) -> None: ...

    def entries_cleared(self) -> None: ...


class BoundOptionList:
    def __init__(self, policy: EnforcementPolicy | None = None, view: OptionListView | None = None) -> None:
        self._policy: EnforcementPolicy = policy if policy is not None else NO_ENFORCEMENT
        self._view = view
        self._entries: list[OptionEntry] = []
        self._links: list[ImplicationLink] = []
        self._released = False

    # -- setup -------------------------------------------------------------

    def attach_view(self, view: OptionListView | None) -> None:
        self._ensure_alive()
        self._view = view
        if view is not None:
            for entry in self._entries:
                view.entry_added(entry)

    def create_item(
        self,
        target: Any,
        name: str,
        group: str | None,
        label: str,
        forced_state: bool | None = None,
        *,
        tooltip: str = "",
        description: str = "",
    ) -> OptionEntry:
        self._ensure_alive()
        if isinstance(target, MutableMapping):
            binding = PropertyBinding.for_key(target, name)
        elif isinstance(target, Mapping):
            raise BindingError(target, name, "mapping is read-only")
        else:
            binding = PropertyBinding.for_attribute(target, name)
        return self.create_bound_item(
            binding,
            group,
            label,
            forced_state,
            tooltip=tooltip,
            description=description,
        )

    def create_bound_item(
        self,
        binding: PropertyBinding,
        group: str | None,
        label: str,
        forced_state: bool | None = None,
        *,
        tooltip: str = "",
        description: str = "",
    ) -> OptionEntry:
        self._ensure_alive()
        if not isinstance(binding, PropertyBinding):
            raise BindingError(binding, "", "expected a PropertyBinding")
        try:
            current = binding.read()
        except Exception as exc:
            raise BindingError(binding.target, binding.name, f"reading failed: {exc}") from exc

        override = EnablementOverride.from_forced_state(forced_state)
        locked = bool(self._policy.is_locked(binding.target, binding.name))
        entry = OptionEntry(
            label=str(label),
            binding=binding,
            group=group,
            checked=current if override.forced_state is None else override.forced_state,
            override=override,
            locked=locked,
            tooltip=str(tooltip or ""),
            description=str(description or ""),
            index=len(self._entries),
        )
        self._entries.append(entry)
        if locked:
            _LOGGER.debug("Option %r is enforced and shown read-only", entry.label)
        if self._view is not None:
            self._view.entry_added(entry)
        return entry

    def add_link(self, source: OptionEntry, target: OptionEntry, link_type: LinkType) -> ImplicationLink:
        self._ensure_alive()
        if not self._owns(source) or not self._owns(target):
            raise ValueError("both entries of a link must belong to this option list")
        if source is target:
            raise ValueError("an entry cannot be linked to itself")
        if not isinstance(link_type, LinkType):
            raise TypeError(f"expected LinkType, got {type(link_type).__name__}")
        link = ImplicationLink(source, target, link_type, len(self._links))
        self._links.append(link)
        return link

    # -- user actions ------------------------------------------------------

    def toggle(self, entry: OptionEntry, checked: bool | None = None) -> list[OptionEntry]:
        """Apply a user toggle and return the entries whose state changed."""
        self._ensure_alive()
        if not self._owns(entry):
            raise ValueError("entry does not belong to this option list")
        new_state = (not entry.checked) if checked is None else bool(checked)
        if not entry.enabled:
            _LOGGER.debug("Ignoring toggle of read-only option %r", entry.label)
            if self._view is not None:
                self._view.entry_changed(entry)
            return []
        if new_state == entry.checked:
            return []

        before = {id(e): e.checked for e in self._entries}
        entry.checked = new_state
        touched = self._propagate(entry)
        changed = [e for e in touched if e.checked != before[id(e)]]
        if self._view is not None:
            for e in changed:
                self._view.entry_changed(e)
        return changed

    def _propagate(self, origin: OptionEntry) -> list[OptionEntry]:
        touched: list[OptionEntry] = [origin]
        fired: set[int] = set()
        deciders: dict[int, int] = {}
        worklist: deque[OptionEntry] = deque([origin])
        while worklist:
            current = worklist.popleft()
            for link in self._links:
                if link.source is not current or link.index in fired:
                    continue
                if not link.fires_for(current.checked):
                    continue
                fired.add(link.index)
                target = link.target
                if target is origin or not target.enabled:
                    continue
                decided_by = deciders.get(id(target), -1)
                if decided_by > link.index:
                    continue
                deciders[id(target)] = link.index
                forced = link.link_type.forced_state
                if target.checked == forced:
                    continue
                target.checked = forced
                if target not in touched:
                    touched.append(target)
                worklist.append(target)
        return touched

    # -- synchronisation ---------------------------------------------------

    def update_data(self, write_back: bool) -> SyncReport:
        self._ensure_alive()
        report = SyncReport(write_back=bool(write_back))
        for entry in self._entries:
            if write_back:
                self._write_entry(entry, report)
            else:
                self._read_entry(entry, report)
        if report.failures:
            _LOGGER.warning(
                "%d option(s) failed to %s", len(report.failures), "save" if write_back else "load"
            )
        return report

    def _read_entry(self, entry: OptionEntry, report: SyncReport) -> None:
        forced = entry.override.forced_state
        if forced is not None:
            value = forced
        else:
            try:
                value = entry.binding.read()
            except Exception as exc:
                _LOGGER.exception("Reading option %r failed", entry.label)
                report.failures.append(SyncFailure(entry, exc))
                return
        if value != entry.checked:
            entry.checked = value
            if self._view is not None:
                self._view.entry_changed(entry)

    def _write_entry(self, entry: OptionEntry, report: SyncReport) -> None:
        if entry.forced:
            report.skipped.append(entry)
            return
        if entry.locked:
            report.skipped.append(entry)
            try:
                bound = entry.binding.read()
            except Exception as exc:
                _LOGGER.exception("Reading enforced option %r failed", entry.label)
                report.failures.append(SyncFailure(entry, exc))
                return
            if bound != entry.checked:
                _LOGGER.warning(
                    "Enforced option %r shows %s but is bound to %s; leaving it unchanged",
                    entry.label,
                    entry.checked,
                    bound,
                )
                report.inconsistencies.append(entry)
            return
        try:
            entry.binding.write(entry.checked)
        except Exception as exc:
            _LOGGER.exception("Saving option %r failed", entry.label)
            report.failures.append(SyncFailure(entry, exc))
        else:
            report.written.append(entry)

    def release(self) -> None:
        if self._released:
            return
        if self._view is not None:
            self._view.entries_cleared()
        self._view = None
        self._links.clear()
        self._entries.clear()
        self._released = True

    # -- queries -----------------------------------------------------------

    @property
    def released(self) -> bool:
        return self._released

    @property
    def policy(self) -> EnforcementPolicy:
        return self._policy

    @property
    def entries(self) -> tuple[OptionEntry, ...]:
        self._ensure_alive()
        return tuple(self._entries)

    @property
    def links(self) -> tuple[ImplicationLink, ...]:
        self._ensure_alive()
        return tuple(self._links)

    def links_from(self, entry: OptionEntry) -> list[ImplicationLink]:
        return [link for link in self.links if link.source is entry]

    def find(self, key: str) -> OptionEntry | None:
        for entry in self.entries:
            if entry.name == key or entry.label == key:
                return entry
        return None

    def groups(self) -> list[str]:
        out: list[str] = []
        for entry in self.entries:
            if entry.group and entry.group not in out:
                out.append(entry.group)
        return out

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[OptionEntry]:
        return iter(self.entries)

    def _owns(self, entry: Any) -> bool:
        return any(e is entry for e in self._entries)

    def _ensure_alive(self) -> None:
        if self._released:
            raise OptionListReleasedError("option list has been released")
