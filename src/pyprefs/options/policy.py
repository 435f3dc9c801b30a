from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EnforcementPolicy(Protocol):
    def is_locked(self, target: Any, name: str) -> bool: ...


class _NoEnforcement:
    def is_locked(self, target: Any, name: str) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_ENFORCEMENT"


NO_ENFORCEMENT: EnforcementPolicy = _NoEnforcement()
