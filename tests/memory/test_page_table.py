"""Tests for page-table entries and snapshots."""

from pagesim.memory.page_table import PageSlot, PageTableEntry, PageTableSnapshot, Tier


def _snapshot() -> PageTableSnapshot:
    """Build a snapshot with two RAM slots and one swap slot."""
    return PageTableSnapshot(
        ram=(PageSlot(Tier.RAM, 0, 7), PageSlot(Tier.RAM, 1, None)),
        swap=(PageSlot(Tier.SWAP, 0, 7),),
    )


class TestPageTableEntry:
    """Verify entry state changes."""

    def test_new_entry_is_free(self) -> None:
        """An entry without an owner is free."""
        assert PageTableEntry(tier=Tier.RAM).is_free

    def test_assign_sets_owner_and_timestamp(self) -> None:
        """Assigning should record both fields."""
        entry = PageTableEntry(tier=Tier.RAM)
        entry.assign(4, 9)
        expected_owner = 4
        expected_timestamp = 9
        assert entry.owner == expected_owner
        assert entry.timestamp == expected_timestamp

    def test_release_keeps_timestamp(self) -> None:
        """Releasing clears only the owner."""
        entry = PageTableEntry(tier=Tier.RAM)
        entry.assign(4, 9)
        entry.release()
        expected_timestamp = 9
        assert entry.is_free
        assert entry.timestamp == expected_timestamp

    def test_copy_from_keeps_tier(self) -> None:
        """Copying moves owner and timestamp but not the tier."""
        ram = PageTableEntry(tier=Tier.RAM, owner=1, timestamp=3)
        swap = PageTableEntry(tier=Tier.SWAP)
        swap.copy_from(ram)
        assert swap.owner == 1
        assert swap.tier is Tier.SWAP


class TestPageTableSnapshot:
    """Verify snapshot queries and rendering."""

    def test_slots_are_ram_then_swap(self) -> None:
        """Iteration should cover RAM before swap."""
        tiers = [slot.tier for slot in _snapshot().slots()]
        assert tiers == [Tier.RAM, Tier.RAM, Tier.SWAP]

    def test_owned_by(self) -> None:
        """Every slot of a process should be found in both tiers."""
        owned = _snapshot().owned_by(7)
        assert [(s.tier, s.index) for s in owned] == [(Tier.RAM, 0), (Tier.SWAP, 0)]

    def test_free_count(self) -> None:
        """Free slots should be counted per tier."""
        snap = _snapshot()
        assert snap.free_count(Tier.RAM) == 1
        assert snap.free_count(Tier.SWAP) == 0

    def test_str_matches_console_layout(self) -> None:
        """Rendering should list each page under its tier header."""
        text = str(_snapshot())
        assert text == "RAM:\nPage 0: Process 7\nPage 1: Free\n\nSwap:\nPage 0: Process 7"
