"""Memory subsystem — page tables, FIFO eviction, and the manager.

Re-exports public symbols so callers can write::

    from pagesim.memory import PageTableManager, Tier
"""

from pagesim.memory.fifo import FIFOQueue
from pagesim.memory.manager import PageTableManager
from pagesim.memory.page_table import PageSlot, PageTableEntry, PageTableSnapshot, Tier

__all__ = [
    "FIFOQueue",
    "PageSlot",
    "PageTableEntry",
    "PageTableManager",
    "PageTableSnapshot",
    "Tier",
]
