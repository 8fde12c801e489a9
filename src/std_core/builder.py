"""Builder: explicit construction context that assembles the value tree.

The parser drives one ``Builder`` per decode call. It holds two stacks: the
value stack (open containers and finished values) and the pending-key stack
(keys waiting for their value inside a compound).
"""

from __future__ import annotations

from .errors import BuilderStateError
from .values import Value, VCompound, VList


class Builder:

    def __init__(self) -> None:
        self._stack: list[Value] = []
        self._keys: list[str] = []
        # stack indices of containers opened but not yet ended
        self._open: list[int] = []

    @property
    def depth(self) -> int:
        return len(self._open)

    # -- helpers --------------------------------------------------------

    def _pop_value(self) -> Value:
        """Pop a finished value sitting directly above an open container."""
        if not self._stack or (self._open and self._open[-1] == len(self._stack) - 1):
            raise BuilderStateError("no finished value on top of the stack")
        return self._stack.pop()

    def _open_container(self, kind: type) -> Value:
        if not self._open or self._open[-1] != len(self._stack) - 1:
            raise BuilderStateError(f"expected an open {kind.__name__} on top of the stack")
        top = self._stack[-1]
        if not isinstance(top, kind):
            raise BuilderStateError(f"expected an open {kind.__name__}, found {type(top).__name__}")
        return top

    # -- actions --------------------------------------------------------

    def begin_compound(self) -> None:
        self._open.append(len(self._stack))
        self._stack.append(VCompound())

    def begin_list(self) -> None:
        self._open.append(len(self._stack))
        self._stack.append(VList())

    def push_scalar(self, value: Value) -> None:
        self._stack.append(value)

    def set_pending_key(self, key: str) -> None:
        self._keys.append(key)

    def commit_pair(self) -> None:
        """Pop a value and its pending key into the compound below it."""
        value = self._pop_value()
        compound = self._open_container(VCompound)
        if not self._keys:
            raise BuilderStateError("commit_pair without a pending key")
        compound.entries[self._keys.pop()] = value

    def commit_list_item(self) -> None:
        value = self._pop_value()
        self._open_container(VList).items.append(value)

    def end_compound(self) -> None:
        self._open_container(VCompound)
        self._open.pop()

    def end_list(self) -> None:
        self._open_container(VList)
        self._open.pop()

    # -- result ---------------------------------------------------------

    def result(self) -> Value:
        """Return the single finished value left on the stack."""
        if self._open or self._keys:
            raise BuilderStateError(
                f"unfinished construction: {len(self._open)} open container(s), "
                f"{len(self._keys)} pending key(s)"
            )
        if len(self._stack) != 1:
            raise BuilderStateError(f"expected exactly one value on stack, found {len(self._stack)}")
        return self._stack[0]
