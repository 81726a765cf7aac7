"""FIFO eviction order over RAM page indices.

The queue records RAM slot indices in the order they were handed to a
process, oldest first.  It is the only thing that decides which RAM
page is evicted next; neither index order nor timestamps are consulted.

The queue is not kept in sync with ``free()``: a released slot keeps
its place until an eviction pops it.
"""

from collections import deque
from collections.abc import Iterator


class FIFOQueue:
    """First In, First Out queue of RAM indices."""

    def __init__(self) -> None:
        """Create an empty queue."""
        self._queue: deque[int] = deque()

    def push(self, index: int) -> None:
        """Append a RAM index as the newest entry."""
        self._queue.append(index)

    def pop_oldest(self) -> int:
        """Remove and return the oldest RAM index.

        Raises:
            IndexError: If the queue is empty.

        """
        if not self._queue:
            msg = "No pages to evict"
            raise IndexError(msg)
        return self._queue.popleft()

    def peek_oldest(self) -> int:
        """Return the oldest RAM index without removing it.

        Raises:
            IndexError: If the queue is empty.

        """
        if not self._queue:
            msg = "No pages to evict"
            raise IndexError(msg)
        return self._queue[0]

    def __len__(self) -> int:
        """Return the number of queued indices."""
        return len(self._queue)

    def __iter__(self) -> Iterator[int]:
        """Iterate oldest first."""
        return iter(self._queue)

    def __contains__(self, index: object) -> bool:
        """Check whether a RAM index is queued."""
        return index in self._queue
