from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any

from .errors import BindingError


class PropertyBinding:
    """Getter/setter pair for one boolean option.

    ``target`` and ``name`` identify the option for enforcement lookups; reads
    and writes only ever go through the two callables.
    """

    __slots__ = ("_getter", "_setter", "target", "name")

    def __init__(
        self,
        getter: Callable[[], bool],
        setter: Callable[[bool], None],
        *,
        target: Any = None,
        name: str = "",
    ) -> None:
        if not callable(getter) or not callable(setter):
            raise BindingError(target, name, "getter and setter must be callable")
        self._getter = getter
        self._setter = setter
        self.target = target
        self.name = name

    @classmethod
    def for_attribute(cls, target: Any, name: str) -> "PropertyBinding":
        if target is None:
            raise BindingError(target, name, "target is None")
        if not isinstance(name, str) or not name or name.startswith("_"):
            raise BindingError(target, str(name), "invalid property name")
        if not hasattr(target, name):
            raise BindingError(target, name, "property does not exist")
        current = getattr(target, name)
        if not isinstance(current, bool):
            raise BindingError(target, name, f"property is {type(current).__name__}, not bool")

        def _get() -> bool:
            return getattr(target, name)

        def _set(value: bool) -> None:
            setattr(target, name, bool(value))

        return cls(_get, _set, target=target, name=name)

    @classmethod
    def for_key(cls, mapping: MutableMapping[str, Any], key: str) -> "PropertyBinding":
        if not isinstance(mapping, MutableMapping):
            raise BindingError(mapping, str(key), "target is not a mutable mapping")
        if key not in mapping:
            raise BindingError(mapping, str(key), "key does not exist")
        if not isinstance(mapping[key], bool):
            raise BindingError(mapping, key, f"value is {type(mapping[key]).__name__}, not bool")

        def _get() -> bool:
            return mapping[key]

        def _set(value: bool) -> None:
            mapping[key] = bool(value)

        return cls(_get, _set, target=mapping, name=key)

    def read(self) -> bool:
        value = self._getter()
        if not isinstance(value, bool):
            raise TypeError(f"{self.name or 'option'} returned {type(value).__name__}, not bool")
        return value

    def write(self, value: bool) -> None:
        self._setter(bool(value))

    def __repr__(self) -> str:
        return f"PropertyBinding({type(self.target).__name__}.{self.name})"
