"The single-slot handoff between a coroutine and the Generator driving it"
from __future__ import annotations
from syncgen.exceptions import AlreadyOccupied
import outcome
import threading
import typing as t

__all__ = [
    'HandoffCell',
]

Item = t.TypeVar('Item')

class HandoffCell(t.Generic[Item]):
    """Holds at most one emitted item until the driver takes it.

    Only `Communication.emit` writes to the cell and only the `Generator`
    reads it, and the two never run at the same time. The lock is there so
    that an item put on one thread is visible when the Generator is next
    pulled from another thread.

    The item is stored wrapped in an `outcome.Value`, so that None is a
    perfectly good item and an empty cell is still distinguishable.

    """
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._slot: t.Optional[outcome.Value] = None

    def put(self, item: Item) -> None:
        with self._lock:
            if self._slot is not None:
                raise AlreadyOccupied(self._slot.value, item)
            self._slot = outcome.Value(item)

    def take(self) -> t.Optional[outcome.Value]:
        "Remove and return the pending item, or None if the cell is empty"
        with self._lock:
            slot, self._slot = self._slot, None
        return slot

    @property
    def occupied(self) -> bool:
        with self._lock:
            return self._slot is not None

    def __repr__(self) -> str:
        with self._lock:
            slot = self._slot
        if slot is None:
            return "HandoffCell(<empty>)"
        return f"HandoffCell({slot.value!r})"
