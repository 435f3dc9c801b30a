import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pyprefs.options import BoundOptionList, LinkType


class _Flags:
    def __init__(self, **values: bool) -> None:
        for name, value in values.items():
            setattr(self, name, value)


class _Policy:
    def __init__(self, *locked: str) -> None:
        self.locked = set(locked)

    def is_locked(self, target, name: str) -> bool:
        return name in self.locked


def _build(policy=None, **values: bool):
    flags = _Flags(**values)
    options = BoundOptionList(policy)
    entries = {name: options.create_item(flags, name, None, name.upper()) for name in values}
    return flags, options, entries


class LinkTypeTests(unittest.TestCase):
    def test_trigger_and_forced_states(self) -> None:
        self.assertEqual((LinkType.UNCHECKED_UNCHECKED.trigger_state, LinkType.UNCHECKED_UNCHECKED.forced_state), (False, False))
        self.assertEqual((LinkType.CHECKED_CHECKED.trigger_state, LinkType.CHECKED_CHECKED.forced_state), (True, True))
        self.assertEqual((LinkType.UNCHECKED_CHECKED.trigger_state, LinkType.UNCHECKED_CHECKED.forced_state), (False, True))
        self.assertEqual((LinkType.CHECKED_UNCHECKED.trigger_state, LinkType.CHECKED_UNCHECKED.forced_state), (True, False))


class LinkPropagationTests(unittest.TestCase):
    def test_dependent_pair_stays_consistent(self) -> None:
        _flags, options, e = _build(a=True, b=True)
        options.add_link(e["a"], e["b"], LinkType.UNCHECKED_UNCHECKED)
        options.add_link(e["b"], e["a"], LinkType.CHECKED_CHECKED)

        changed = options.toggle(e["a"], False)
        self.assertEqual(changed, [e["a"], e["b"]])
        self.assertFalse(e["b"].checked)

        changed = options.toggle(e["b"], True)
        self.assertEqual(changed, [e["b"], e["a"]])
        self.assertTrue(e["a"].checked)

    def test_link_does_not_fire_on_other_state(self) -> None:
        _flags, options, e = _build(a=False, b=False)
        options.add_link(e["a"], e["b"], LinkType.UNCHECKED_UNCHECKED)
        self.assertEqual(options.toggle(e["a"], True), [e["a"]])
        self.assertFalse(e["b"].checked)

    def test_inverse_links(self) -> None:
        _flags, options, e = _build(a=True, b=False, c=True)
        options.add_link(e["a"], e["b"], LinkType.UNCHECKED_CHECKED)
        options.add_link(e["a"], e["c"], LinkType.UNCHECKED_UNCHECKED)
        options.toggle(e["a"])
        self.assertTrue(e["b"].checked)
        self.assertFalse(e["c"].checked)
        options.add_link(e["b"], e["c"], LinkType.CHECKED_UNCHECKED)
        options.toggle(e["c"], True)
        self.assertTrue(e["c"].checked)

    def test_toggle_to_current_state_is_a_no_op(self) -> None:
        _flags, options, e = _build(a=True, b=True)
        options.add_link(e["a"], e["b"], LinkType.CHECKED_UNCHECKED)
        self.assertEqual(options.toggle(e["a"], True), [])
        self.assertTrue(e["b"].checked)

    def test_later_link_wins_on_same_source(self) -> None:
        _flags, options, e = _build(a=False, c=True)
        options.add_link(e["a"], e["c"], LinkType.CHECKED_CHECKED)
        options.add_link(e["a"], e["c"], LinkType.CHECKED_UNCHECKED)
        options.toggle(e["a"], True)
        self.assertFalse(e["c"].checked)

        _flags, options, e = _build(a=False, c=False)
        options.add_link(e["a"], e["c"], LinkType.CHECKED_UNCHECKED)
        options.add_link(e["a"], e["c"], LinkType.CHECKED_CHECKED)
        options.toggle(e["a"], True)
        self.assertTrue(e["c"].checked)

    def test_later_link_wins_even_when_evaluated_first(self) -> None:
        _flags, options, e = _build(a=False, b=False, c=True)
        options.add_link(e["a"], e["b"], LinkType.CHECKED_CHECKED)
        options.add_link(e["b"], e["c"], LinkType.CHECKED_CHECKED)
        options.add_link(e["a"], e["c"], LinkType.CHECKED_UNCHECKED)
        options.toggle(e["a"], True)
        self.assertTrue(e["b"].checked)
        self.assertFalse(e["c"].checked)

    def test_later_link_wins_when_evaluated_last(self) -> None:
        _flags, options, e = _build(a=False, b=False, c=True)
        options.add_link(e["a"], e["b"], LinkType.CHECKED_CHECKED)
        options.add_link(e["a"], e["c"], LinkType.CHECKED_UNCHECKED)
        options.add_link(e["b"], e["c"], LinkType.CHECKED_CHECKED)
        options.toggle(e["a"], True)
        self.assertTrue(e["c"].checked)

    def test_transitive_chain(self) -> None:
        _flags, options, e = _build(a=True, b=True, c=True, d=True)
        options.add_link(e["c"], e["d"], LinkType.UNCHECKED_UNCHECKED)
        options.add_link(e["b"], e["c"], LinkType.UNCHECKED_UNCHECKED)
        options.add_link(e["a"], e["b"], LinkType.UNCHECKED_UNCHECKED)
        changed = options.toggle(e["a"], False)
        self.assertEqual(changed, [e["a"], e["b"], e["c"], e["d"]])

    def test_oscillating_cycle_terminates(self) -> None:
        _flags, options, e = _build(a=False, b=False, d=False)
        options.add_link(e["d"], e["a"], LinkType.CHECKED_CHECKED)
        options.add_link(e["a"], e["b"], LinkType.CHECKED_CHECKED)
        options.add_link(e["b"], e["a"], LinkType.CHECKED_UNCHECKED)
        changed = options.toggle(e["d"], True)
        self.assertFalse(e["a"].checked)
        self.assertTrue(e["b"].checked)
        self.assertEqual(changed, [e["d"], e["b"]])

    def test_links_never_override_the_toggled_entry(self) -> None:
        _flags, options, e = _build(a=True, b=True)
        options.add_link(e["a"], e["b"], LinkType.UNCHECKED_UNCHECKED)
        options.add_link(e["b"], e["a"], LinkType.UNCHECKED_CHECKED)
        options.toggle(e["a"], False)
        self.assertFalse(e["a"].checked)
        self.assertFalse(e["b"].checked)

    def test_locked_and_forced_targets_are_not_forced(self) -> None:
        flags = _Flags(a=True, locked=True, forced=True)
        options = BoundOptionList(_Policy("locked"))
        a = options.create_item(flags, "a", None, "A")
        locked = options.create_item(flags, "locked", None, "Locked")
        forced = options.create_item(flags, "forced", None, "Forced", forced_state=True)
        options.add_link(a, locked, LinkType.UNCHECKED_UNCHECKED)
        options.add_link(a, forced, LinkType.UNCHECKED_UNCHECKED)
        self.assertEqual(options.toggle(a, False), [a])
        self.assertTrue(locked.checked)
        self.assertTrue(forced.checked)

    def test_links_from_lists_outgoing_links_in_order(self) -> None:
        _flags, options, e = _build(a=True, b=True, c=True)
        first = options.add_link(e["a"], e["b"], LinkType.UNCHECKED_UNCHECKED)
        options.add_link(e["b"], e["c"], LinkType.UNCHECKED_UNCHECKED)
        second = options.add_link(e["a"], e["c"], LinkType.CHECKED_CHECKED)
        self.assertEqual(options.links_from(e["a"]), [first, second])
        self.assertEqual([link.index for link in options.links], [0, 1, 2])


if __name__ == "__main__":
    unittest.main()
