"""Page table manager — RAM and swap bookkeeping with FIFO eviction.

Memory is split into two fixed-length tables of page slots:

- **RAM** — ``ram_bytes // page_bytes`` slots.
- **Swap** — ``swap_bytes // page_bytes`` slots.

A request for ``n`` pages is served one page at a time.  Each page
takes the lowest free RAM slot.  When RAM is full the oldest RAM page
(by FIFO queue order) is copied into the lowest free swap slot and its
RAM slot is handed to the requester.  When swap is full too, the
request fails.

Known quirks of the eviction bookkeeping:
    - **No rollback.**  Pages placed before a failing unit stay owned
      by the requester even though ``allocate()`` returns False.  Use
      ``allocate_all_or_release()`` for all-or-nothing behaviour.
    - **Lost queue entry.**  A failed eviction has already popped the
      oldest index; it is not pushed back, so that RAM slot cannot be
      chosen for eviction until it is freed and handed out again.
    - **Stale queue entries.**  ``free()`` does not touch the queue.
      A released (and possibly reused) slot is evicted when its old
      queue entry comes up.

Why scan instead of keeping per-process counts?
    Ownership lives only on the entries.  ``pages_owned()`` and
    ``free()`` are linear in the number of slots, which is fine for a
    simulator but does not scale to large tables.
"""

from pagesim.logging import Logger, LogLevel
from pagesim.memory.fifo import FIFOQueue
from pagesim.memory.page_table import PageSlot, PageTableEntry, PageTableSnapshot, Tier

_SOURCE = "memory"


class PageTableManager:
    """Own the RAM and swap tables, the FIFO queue, and the logical clock."""

    def __init__(
        self,
        *,
        ram_bytes: int,
        swap_bytes: int,
        page_bytes: int,
        logger: Logger | None = None,
    ) -> None:
        """Create a manager with every slot free.

        Args:
            ram_bytes: Size of the RAM pool in bytes.
            swap_bytes: Size of the swap pool in bytes.
            page_bytes: Size of one page in bytes.
            logger: Where to record events.  A private logger is used
                when none is given.

        Raises:
            ValueError: If the page size is not positive or a pool size
                is negative.

        """
        if page_bytes <= 0:
            msg = f"Page size must be positive, got {page_bytes}"
            raise ValueError(msg)
        if ram_bytes < 0 or swap_bytes < 0:
            msg = f"Pool sizes must not be negative (ram={ram_bytes}, swap={swap_bytes})"
            raise ValueError(msg)

        self._page_bytes = page_bytes
        self._ram = [PageTableEntry(tier=Tier.RAM) for _ in range(ram_bytes // page_bytes)]
        self._swap = [PageTableEntry(tier=Tier.SWAP) for _ in range(swap_bytes // page_bytes)]
        self._fifo = FIFOQueue()
        self._clock = 0
        self._logger = logger if logger is not None else Logger()
        self._logger.log(
            LogLevel.INFO,
            f"{len(self._ram)} RAM pages, {len(self._swap)} swap pages of {page_bytes} bytes",
            source=_SOURCE,
        )

    @property
    def ram_pages(self) -> int:
        """Return the number of RAM slots."""
        return len(self._ram)

    @property
    def swap_pages(self) -> int:
        """Return the number of swap slots."""
        return len(self._swap)

    @property
    def page_bytes(self) -> int:
        """Return the page size in bytes."""
        return self._page_bytes

    @property
    def clock(self) -> int:
        """Return the next logical timestamp to be handed out."""
        return self._clock

    @property
    def free_ram_pages(self) -> int:
        """Return the number of unowned RAM slots."""
        return sum(1 for entry in self._ram if entry.is_free)

    @property
    def free_swap_pages(self) -> int:
        """Return the number of unowned swap slots."""
        return sum(1 for entry in self._swap if entry.is_free)

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    def pages_owned(self, pid: int) -> int:
        """Count the slots a process holds across both tiers (linear scan)."""
        return sum(1 for entry in (*self._ram, *self._swap) if entry.owner == pid)

    def fifo_order(self) -> list[int]:
        """Return the queued RAM indices, oldest first."""
        return list(self._fifo)

    def allocate(self, pid: int, page_count: int) -> bool:
        """Place ``page_count`` pages for a process, one at a time.

        Placement stops at the first page that cannot be found a slot.
        Pages placed before that point are kept.

        Args:
            pid: The requesting process.
            page_count: Number of pages wanted.

        Returns:
            True if every page was placed, False otherwise.

        Raises:
            ValueError: If page_count is negative.

        """
        if page_count < 0:
            msg = f"Cannot allocate {page_count} pages for PID {pid}"
            raise ValueError(msg)

        for placed in range(page_count):
            if not self._place_page(pid):
                self._logger.log(
                    LogLevel.WARNING,
                    f"Out of memory for PID {pid}: placed {placed} of {page_count} pages",
                    source=_SOURCE,
                    pid=pid,
                )
                return False

        self._logger.log(
            LogLevel.INFO,
            f"Allocated {page_count} pages for PID {pid}",
            source=_SOURCE,
            pid=pid,
        )
        return True

    def allocate_all_or_release(self, pid: int, page_count: int) -> bool:
        """Allocate like ``allocate()`` but release the process on failure.

        When any page cannot be placed, every page owned by ``pid`` is
        freed, including pages from earlier requests.  Pages of other
        processes that were pushed to swap along the way stay there.

        Returns:
            True if every page was placed, False otherwise.

        """
        if self.allocate(pid, page_count):
            return True
        self.free(pid)
        return False

    def free(self, pid: int) -> None:
        """Release every RAM and swap slot owned by a process.

        Timestamps and the FIFO queue are left alone.  Freeing an
        unknown PID is a no-op.
        """
        released = 0
        for entry in (*self._ram, *self._swap):
            if entry.owner == pid:
                entry.release()
                released += 1
        if released:
            self._logger.log(
                LogLevel.INFO,
                f"Freed {released} pages of PID {pid}",
                source=_SOURCE,
                pid=pid,
            )

    def snapshot(self) -> PageTableSnapshot:
        """Return a read-only copy of both tables."""
        return PageTableSnapshot(
            ram=tuple(PageSlot(Tier.RAM, i, e.owner) for i, e in enumerate(self._ram)),
            swap=tuple(PageSlot(Tier.SWAP, i, e.owner) for i, e in enumerate(self._swap)),
        )

    def _tick(self) -> int:
        """Return the current clock value and advance it."""
        now = self._clock
        self._clock += 1
        return now

    def _place_page(self, pid: int) -> bool:
        """Give one page to a process: free RAM first, then eviction."""
        for index, entry in enumerate(self._ram):
            if entry.is_free:
                entry.assign(pid, self._tick())
                self._fifo.push(index)
                self._logger.log(
                    LogLevel.DEBUG,
                    f"RAM page {index} -> PID {pid}",
                    source=_SOURCE,
                    pid=pid,
                )
                return True
        return self._evict_into(pid)

    def _evict_into(self, pid: int) -> bool:
        """Move the oldest RAM page to swap and give its slot to ``pid``.

        The popped queue index is not restored when swap is full.
        """
        try:
            victim_index = self._fifo.pop_oldest()
        except IndexError:
            self._logger.log(
                LogLevel.WARNING,
                "Nothing in RAM to evict",
                source=_SOURCE,
                pid=pid,
            )
            return False

        victim = self._ram[victim_index]
        for swap_index, slot in enumerate(self._swap):
            if slot.is_free:
                evicted_owner = victim.owner
                slot.copy_from(victim)
                victim.assign(pid, self._tick())
                self._fifo.push(victim_index)
                self._logger.log(
                    LogLevel.DEBUG,
                    f"Evicted RAM page {victim_index} (PID {evicted_owner}) "
                    f"to swap page {swap_index}; RAM page {victim_index} -> PID {pid}",
                    source=_SOURCE,
                    pid=pid,
                )
                return True

        self._logger.log(
            LogLevel.WARNING,
            f"Swap full; RAM page {victim_index} dropped from eviction order",
            source=_SOURCE,
            pid=pid,
        )
        return False
