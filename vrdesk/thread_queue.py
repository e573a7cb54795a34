"""A FIFO queue safe to share between threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, Optional, TypeVar

T = TypeVar("T")


class ThreadSafeQueue(Generic[T]):
    """Unbounded FIFO queue guarded by a lock, with blocking and non-blocking pops."""

    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._ready = threading.Condition()

    def push(self, item: T) -> None:
        """Append ``item`` and wake one waiting consumer."""
        with self._ready:
            self._items.append(item)
            self._ready.notify()

    def try_pop(self) -> Optional[T]:
        """Remove and return the oldest item, or ``None`` if the queue is empty."""
        with self._ready:
            if not self._items:
                return None
            return self._items.popleft()

    def wait_and_pop(self) -> T:
        """Block until an item is available, then remove and return it."""
        with self._ready:
            self._ready.wait_for(lambda: bool(self._items))
            return self._items.popleft()

    def empty(self) -> bool:
        """Whether the queue holds no items."""
        with self._ready:
            return not self._items

    def __len__(self) -> int:
        with self._ready:
            return len(self._items)