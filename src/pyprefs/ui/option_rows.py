from __future__ import annotations

from typing import Any

from PySide6.QtGui import QKeySequence
from PySide6.QtWidgets import QCheckBox, QHBoxLayout, QKeySequenceEdit, QLabel, QSpinBox, QWidget

from pyprefs.logging_utils import get_logger

from .option_pages import HotkeySpec, NumericOptionSpec

_LOGGER = get_logger(__name__)

_ALT_ONLY_MODIFIERS = (frozenset({"alt"}), frozenset({"alt", "shift"}))


def hotkey_modifiers(text: str) -> frozenset[str]:
    """Lower-case modifier names of the first chord of a portable key sequence."""
    chord = str(text or "").split(", ")[0].strip()
    if not chord:
        return frozenset()
    if chord.endswith("++"):
        prefix = chord[:-2]
    else:
        prefix, _sep, _key = chord.rpartition("+")
    return frozenset(part.strip().lower() for part in prefix.split("+") if part.strip())


def is_alt_only_hotkey(text: str) -> bool:
    # Alt or Alt+Shift combinations collide with menu and text input shortcuts.
    return hotkey_modifiers(text) in _ALT_ONLY_MODIFIERS


class NumericOptionRow(QWidget):
    """Checkbox plus spin box editing one integer option."""

    def __init__(
        self,
        spec: NumericOptionSpec,
        section: Any,
        *,
        locked: bool = False,
        supported: bool = True,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.spec = spec
        self.locked = locked
        self.supported = supported
        self._section = section

        label = spec.label if supported else f"{spec.label} (unsupported on this platform)"
        self.checkbox = QCheckBox(label, self)
        self.spin = QSpinBox(self)
        self.spin.setRange(spec.minimum, spec.maximum)
        if spec.suffix:
            self.spin.setSuffix(spec.suffix)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.checkbox, 1)
        layout.addWidget(self.spin)
        self.checkbox.toggled.connect(self.update_state)
        self.load()

    def load(self) -> None:
        value = getattr(self._section, self.spec.name)
        active = self.supported and self.spec.is_active(value)
        self.spin.setValue(value if active else self.spec.fallback)
        self.checkbox.setChecked(active)
        self.checkbox.setEnabled(self.supported and not self.locked)
        self.update_state()

    def update_state(self, *_args) -> None:
        self.spin.setEnabled(self.checkbox.isChecked() and self.checkbox.isEnabled())

    def value(self) -> int:
        return self.spin.value() if self.checkbox.isChecked() else self.spec.off_value

    def commit(self) -> bool:
        if self.locked or not self.supported:
            return False
        setattr(self._section, self.spec.name, self.value())
        return True


class HotkeyRow(QWidget):
    def __init__(self, spec: HotkeySpec, section: Any, *, locked: bool = False, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.spec = spec
        self.locked = locked
        self._section = section

        self.label = QLabel(spec.label, self)
        self.editor = QKeySequenceEdit(self)
        self.editor.setEnabled(not locked)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.label, 1)
        layout.addWidget(self.editor)
        self.load()

    def load(self) -> None:
        text = str(getattr(self._section, self.spec.name) or "")
        seq = QKeySequence.fromString(text, QKeySequence.SequenceFormat.PortableText)
        if text and seq.isEmpty():
            _LOGGER.warning("Ignoring invalid hotkey %r for %s", text, self.spec.key)
        self.editor.setKeySequence(seq)

    def text(self) -> str:
        return self.editor.keySequence().toString(QKeySequence.SequenceFormat.PortableText)

    def set_text(self, text: str) -> None:
        self.editor.setKeySequence(QKeySequence.fromString(text, QKeySequence.SequenceFormat.PortableText))

    def commit(self) -> bool:
        if self.locked:
            return False
        setattr(self._section, self.spec.name, self.text())
        return True
