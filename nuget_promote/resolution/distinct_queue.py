"""FIFO queue that accepts each item at most once for its whole lifetime."""

from collections import deque
from typing import Deque, Generic, Hashable, Iterable, Set, TypeVar

T = TypeVar("T", bound=Hashable)


class DistinctQueue(Generic[T]):
    """
    A FIFO work queue with lifetime de-duplication.

    An item that has ever been enqueued, including one already dequeued, is
    rejected by later ``enqueue`` calls. Worklist traversals over cyclic
    graphs terminate because of this.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._pending: Deque[T] = deque()
        self._seen: Set[T] = set()
        for item in items:
            self.enqueue(item)

    def enqueue(self, item: T) -> bool:
        """
        Add an item unless it was enqueued before.

        Returns:
            True if the item was added, False if it had been seen already
        """
        if item in self._seen:
            return False
        self._seen.add(item)
        self._pending.append(item)
        return True

    def dequeue(self) -> T:
        """
        Remove and return the oldest pending item.

        Raises:
            IndexError: If the queue is empty
        """
        if not self._pending:
            raise IndexError("dequeue from an empty DistinctQueue")
        return self._pending.popleft()

    def has_seen(self, item: T) -> bool:
        return item in self._seen

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)


__all__ = ["DistinctQueue"]
