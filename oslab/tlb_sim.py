"""A fixed-size TLB with FIFO replacement and a small MMU built on it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


@dataclass
class TlbEntry:
    """One TLB slot: an address-space-tagged mapping of a virtual page."""

    valid: bool = False
    asid: int = 0
    vpn: int = 0
    ppn: int = 0
    flags: int = 0

    def matches(self, vpn: int, asid: int) -> bool:
        """Return whether this slot holds a valid mapping of ``vpn`` in ``asid``."""
        return self.valid and self.vpn == vpn and self.asid == asid


@dataclass
class TlbStats:
    """Hit and miss counts of a TLB."""

    hits: int = 0
    misses: int = 0

    def hit_rate(self) -> float:
        """Return the fraction of lookups that hit, or 0.0 before any lookup."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class Tlb:
    """Translation lookaside buffer of fixed capacity using FIFO replacement."""

    __slots__ = ("_entries", "capacity", "_fifo_ptr", "stats")

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self._entries: List[TlbEntry] = [TlbEntry() for _ in range(capacity)]
        self.capacity = capacity
        self._fifo_ptr = 0
        self.stats = TlbStats()

    def __iter__(self) -> Iterator[TlbEntry]:
        return iter(self._entries)

    def _find(self, vpn: int, asid: int) -> Optional[TlbEntry]:
        return next((e for e in self._entries if e.matches(vpn, asid)), None)

    def lookup(self, vpn: int, asid: int) -> Optional[int]:
        """Return the cached physical page for ``(vpn, asid)``, or None on a miss."""
        entry = self._find(vpn, asid)
        if entry is None:
            self.stats.misses += 1
            return None
        self.stats.hits += 1
        return entry.ppn

    def insert(self, vpn: int, ppn: int, asid: int, flags: int) -> None:
        """Cache a mapping, updating an existing one or replacing the oldest slot."""
        existing = self._find(vpn, asid)
        if existing is not None:
            existing.ppn = ppn
            existing.flags = flags
            return
        if not self.capacity:
            raise ValueError("cannot insert into a TLB with no slots")
        self._entries[self._fifo_ptr] = TlbEntry(True, asid, vpn, ppn, flags)
        self._fifo_ptr = (self._fifo_ptr + 1) % self.capacity

    def _invalidate_where(self, predicate) -> None:
        for entry in self._entries:
            if predicate(entry):
                entry.valid = False

    def flush_all(self) -> None:
        """Invalidate every entry."""
        self._invalidate_where(lambda entry: True)

    def flush_by_vpn(self, vpn: int) -> None:
        """Invalidate the entries for ``vpn`` in every address space."""
        self._invalidate_where(lambda entry: entry.vpn == vpn)

    def flush_by_asid(self, asid: int) -> None:
        """Invalidate every entry of address space ``asid``."""
        self._invalidate_where(lambda entry: entry.asid == asid)

    def valid_count(self) -> int:
        """Return the number of valid entries."""
        return sum(entry.valid for entry in self._entries)


@dataclass(frozen=True)
class PageMapping:
    """A page-table mapping of a virtual page to a physical page."""

    vpn: int
    ppn: int
    flags: int


class Mmu:
    """Translates virtual pages through a TLB backed by a simple page table."""

    __slots__ = ("tlb", "_page_table", "current_asid")

    def __init__(self, tlb_capacity: int) -> None:
        self.tlb = Tlb(tlb_capacity)
        self._page_table: List[Tuple[int, PageMapping]] = []
        self.current_asid = 0

    def add_mapping(self, asid: int, vpn: int, ppn: int, flags: int) -> None:
        """Add a mapping to the page table of address space ``asid``."""
        self._page_table.append((asid, PageMapping(vpn, ppn, flags)))

    def switch_asid(self, new_asid: int) -> None:
        """Make ``new_asid`` the current address space."""
        self.current_asid = new_asid

    def translate(self, vpn: int) -> Optional[int]:
        """Return the physical page for ``vpn`` in the current address space.

        The TLB is consulted first; on a miss the page table is searched and a
        found mapping is cached. Returns None when no mapping exists.
        """
        asid = self.current_asid
        ppn = self.tlb.lookup(vpn, asid)
        if ppn is not None:
            return ppn
        mapping = next(
            (m for owner, m in self._page_table if owner == asid and m.vpn == vpn),
            None,
        )
        if mapping is None:
            return None
        self.tlb.insert(vpn, mapping.ppn, asid, mapping.flags)
        return mapping.ppn