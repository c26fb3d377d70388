"""
State Cells

A state cell is a storage location owned by a factory. Registered in an
object's method table, it reads like an argumentless method: the dispatcher
returns its current value and never writes through it.
"""

from typing import Any


class StateCell:
    """Single mutable value, exposed read-only through a dispatcher."""

    __slots__ = ('_value',)

    def __init__(self, value: Any = None):
        self._value = value

    def get(self) -> Any:
        """Get current value"""
        return self._value

    def set(self, value: Any) -> None:
        """Set value (owner only; dispatchers never call this)"""
        self._value = value

    def __repr__(self) -> str:
        return f'StateCell({self._value!r})'
