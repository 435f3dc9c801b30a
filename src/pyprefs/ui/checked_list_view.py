from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QAbstractItemView, QListWidget, QListWidgetItem, QWidget

from pyprefs.logging_utils import get_logger
from pyprefs.options import BoundOptionList, OptionEntry

_LOGGER = get_logger(__name__)

_ENTRY_ROLE = int(Qt.ItemDataRole.UserRole)
_HEADER_ROLE = int(Qt.ItemDataRole.UserRole) + 1


class CheckedListView(QListWidget):
    """List widget rendering one :class:`BoundOptionList`.

    Group names become bold, non-checkable header rows. Check-state changes made
    by the user are forwarded to ``BoundOptionList.toggle``; state pushed back by
    the list is applied without echoing.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("checkedOptionList")
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setUniformItemSizes(False)
        self._option_list: BoundOptionList | None = None
        self._entries: dict[int, OptionEntry] = {}
        self._items: dict[int, QListWidgetItem] = {}
        self._syncing = False
        self.itemChanged.connect(self._on_item_changed)

    def bind(self, option_list: BoundOptionList) -> None:
        self._option_list = option_list
        option_list.attach_view(self)

    def option_list(self) -> BoundOptionList | None:
        return self._option_list

    def item_for(self, entry: OptionEntry) -> QListWidgetItem | None:
        return self._items.get(entry.index)

    def header_items(self) -> list[QListWidgetItem]:
        return [self.item(row) for row in range(self.count()) if self.item(row).data(_HEADER_ROLE)]

    # -- OptionListView ----------------------------------------------------

    def entry_added(self, entry: OptionEntry) -> None:
        item = QListWidgetItem(entry.label)
        flags = Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsSelectable
        if entry.enabled:
            flags |= Qt.ItemFlag.ItemIsEnabled
        item.setFlags(flags)
        item.setData(_ENTRY_ROLE, entry.index)
        tooltip = entry.tooltip
        if entry.description:
            tooltip = f"{tooltip or entry.label}\n\n{entry.description}"
        if tooltip:
            item.setToolTip(tooltip)
        item.setCheckState(Qt.CheckState.Checked if entry.checked else Qt.CheckState.Unchecked)

        self._syncing = True
        try:
            self.insertItem(self._insert_row_for(entry.group), item)
        finally:
            self._syncing = False
        self._entries[entry.index] = entry
        self._items[entry.index] = item

    def entry_changed(self, entry: OptionEntry) -> None:
        item = self._items.get(entry.index)
        if item is None:
            return
        state = Qt.CheckState.Checked if entry.checked else Qt.CheckState.Unchecked
        if item.checkState() == state:
            return
        self._syncing = True
        try:
            item.setCheckState(state)
        finally:
            self._syncing = False

    def entries_cleared(self) -> None:
        self._syncing = True
        try:
            self.clear()
        finally:
            self._syncing = False
        self._entries.clear()
        self._items.clear()
        self._option_list = None

    # -- internals ---------------------------------------------------------

    def _insert_row_for(self, group: str | None) -> int:
        if not group:
            # Ungrouped rows stay above every header.
            for row in range(self.count()):
                if self.item(row).data(_HEADER_ROLE):
                    return row
            return self.count()
        header_row = -1
        for row in range(self.count()):
            if self.item(row).data(_HEADER_ROLE) == group:
                header_row = row
                break
        if header_row < 0:
            header = QListWidgetItem(group)
            header.setFlags(Qt.ItemFlag.ItemIsEnabled)
            header.setData(_HEADER_ROLE, group)
            font = QFont(header.font())
            font.setBold(True)
            header.setFont(font)
            self.addItem(header)
            return self.count()
        row = header_row + 1
        while row < self.count() and not self.item(row).data(_HEADER_ROLE):
            row += 1
        return row

    def _on_item_changed(self, item: QListWidgetItem) -> None:
        if self._syncing or self._option_list is None:
            return
        index = item.data(_ENTRY_ROLE)
        entry = self._entries.get(index) if isinstance(index, int) else None
        if entry is None:
            return
        checked = item.checkState() == Qt.CheckState.Checked
        if checked == entry.checked:
            return
        changed = self._option_list.toggle(entry, checked)
        if len(changed) > 1:
            _LOGGER.debug(
                "Toggling %r also changed: %s",
                entry.label,
                ", ".join(e.label for e in changed if e is not entry),
            )
