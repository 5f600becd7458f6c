"""DestinationQueue - FIFO of positions waiting to be navigated to."""
from __future__ import annotations

from collections import deque
from typing import Iterator

from delve import Position


class DestinationQueue:
    """Arrival-ordered destinations. Removal by index is for not-yet-started ones."""

    def __init__(self) -> None:
        self._pending: deque[Position] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._pending)

    def __contains__(self, pos: object) -> bool:
        return pos in self._pending

    def enqueue(self, pos: tuple[int, int]) -> Position:
        """Add a destination. Safe to call between ticks."""
        position = Position(*pos)
        self._pending.append(position)
        return position

    def pending(self) -> int:
        return len(self._pending)

    def peek(self) -> Position | None:
        return self._pending[0] if self._pending else None

    def pop_next(self) -> Position | None:
        return self._pending.popleft() if self._pending else None

    def remove(self, index: int) -> Position | None:
        """Remove and return the destination at *index*; None if out of range."""
        if not 0 <= index < len(self._pending):
            return None
        pos = self._pending[index]
        del self._pending[index]
        return pos

    def clear(self) -> list[Position]:
        """Drop everything, returning what was queued in order."""
        dropped = list(self._pending)
        self._pending.clear()
        return dropped
