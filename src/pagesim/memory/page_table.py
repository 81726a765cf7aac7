"""Page-table entries and read-only snapshots.

Each physical page slot, in RAM or in swap, is described by a
``PageTableEntry``.  The manager owns two fixed-length lists of them;
nothing else holds a reference to the mutable entries.  Callers that
want to look at the tables get a ``PageTableSnapshot`` instead, built
from frozen ``PageSlot`` records.

Why no per-process record?
    Ownership is a tag on each entry.  How many pages a process holds
    is found by scanning both tiers, which is fine at simulation scale
    but grows with the total number of slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class Tier(StrEnum):
    """Which pool a page slot belongs to."""

    RAM = "ram"
    SWAP = "swap"


@dataclass
class PageTableEntry:
    """One physical page slot.

    Attributes:
        tier: The pool this slot lives in.
        owner: The owning process id, or None when the slot is free.
        timestamp: Logical clock value of the last assignment.  Only
            meaningful while the slot is owned.

    """

    tier: Tier
    owner: int | None = None
    timestamp: int = 0

    @property
    def is_free(self) -> bool:
        """Return True if no process owns this slot."""
        return self.owner is None

    def assign(self, owner: int, timestamp: int) -> None:
        """Hand the slot to a process, stamping it with the clock."""
        self.owner = owner
        self.timestamp = timestamp

    def release(self) -> None:
        """Clear the owner.  The timestamp is left as it was."""
        self.owner = None

    def copy_from(self, other: PageTableEntry) -> None:
        """Take over another entry's owner and timestamp, keeping our tier."""
        self.owner = other.owner
        self.timestamp = other.timestamp


@dataclass(frozen=True)
class PageSlot:
    """Immutable view of one slot at snapshot time."""

    tier: Tier
    index: int
    owner: int | None

    @property
    def is_free(self) -> bool:
        """Return True if the slot was free when the snapshot was taken."""
        return self.owner is None

    def __str__(self) -> str:
        """Format as ``Page i: Free`` or ``Page i: Process n``."""
        state = "Free" if self.owner is None else f"Process {self.owner}"
        return f"Page {self.index}: {state}"


@dataclass(frozen=True)
class PageTableSnapshot:
    """Read-only copy of both page tables.

    Attributes:
        ram: One slot per RAM page, in index order.
        swap: One slot per swap page, in index order.

    """

    ram: tuple[PageSlot, ...]
    swap: tuple[PageSlot, ...]

    def slots(self) -> Iterator[PageSlot]:
        """Yield every RAM slot, then every swap slot."""
        yield from self.ram
        yield from self.swap

    def owners(self, tier: Tier) -> list[int | None]:
        """Return the owner of each slot in a tier, None for free slots."""
        table = self.ram if tier is Tier.RAM else self.swap
        return [slot.owner for slot in table]

    def owned_by(self, pid: int) -> list[PageSlot]:
        """Return every slot held by a process, RAM first."""
        return [slot for slot in self.slots() if slot.owner == pid]

    def free_count(self, tier: Tier) -> int:
        """Return how many slots in a tier were free."""
        return self.owners(tier).count(None)

    def __str__(self) -> str:
        """Render both tables the way the console shows them."""
        ram = "\n".join(str(slot) for slot in self.ram)
        swap = "\n".join(str(slot) for slot in self.swap)
        return f"RAM:\n{ram}\n\nSwap:\n{swap}".rstrip("\n")
