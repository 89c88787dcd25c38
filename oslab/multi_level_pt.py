"""A simulated three-level SV39 page table with 4 KiB pages and 2 MiB superpages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from oslab.pte_flags import (
    PTE_R,
    PTE_V,
    PTE_W,
    PTE_X,
    extract_ppn,
    is_leaf,
    is_valid,
    make_pte,
)

__all__ = [
    "PAGE_SIZE",
    "PT_ENTRIES",
    "PTE_R",
    "PTE_V",
    "PTE_W",
    "PTE_X",
    "PageFault",
    "PageTableNode",
    "Sv39PageTable",
]

PAGE_SIZE = 4096
PT_ENTRIES = 512
SUPERPAGE_SIZE = PAGE_SIZE * PT_ENTRIES
_PAGE_SHIFT = 12
_VPN_BITS = 9
_VPN_MASK = PT_ENTRIES - 1


class PageFault(Exception):
    """The virtual address has no valid mapping."""

    def __init__(self, va: int) -> None:
        super().__init__(f"page fault at virtual address {va:#x}")
        self.va = va


@dataclass
class PageTableNode:
    """One page-table page holding 512 entries."""

    entries: List[int] = field(default_factory=lambda: [0] * PT_ENTRIES)


class Sv39PageTable:
    """Three-level page table whose table pages live in a simulated memory."""

    __slots__ = ("_nodes", "root_ppn", "_next_ppn")

    def __init__(self) -> None:
        self.root_ppn = 0x80000
        self._next_ppn = self.root_ppn + 1
        self._nodes: Dict[int, PageTableNode] = {self.root_ppn: PageTableNode()}

    def _alloc_node(self) -> int:
        ppn = self._next_ppn
        self._next_ppn += 1
        self._nodes[ppn] = PageTableNode()
        return ppn

    @staticmethod
    def extract_vpn(va: int, level: int) -> int:
        """Return the 9-bit VPN index of ``va`` for ``level`` (2, 1 or 0)."""
        return (va >> (_PAGE_SHIFT + level * _VPN_BITS)) & _VPN_MASK

    def _walk_to(self, va: int, leaf_level: int) -> PageTableNode:
        """Return the node at ``leaf_level`` for ``va``, creating tables on the way."""
        node = self._nodes[self.root_ppn]
        for level in range(2, leaf_level, -1):
            index = self.extract_vpn(va, level)
            pte = node.entries[index]
            if not is_valid(pte):
                child = self._alloc_node()
                node.entries[index] = make_pte(child, PTE_V)
                node = self._nodes[child]
            elif is_leaf(pte):
                raise ValueError(
                    f"virtual address {va:#x} lies inside an existing larger mapping"
                )
            else:
                node = self._nodes[extract_ppn(pte)]
        return node

    def map_page(self, va: int, pa: int, flags: int) -> None:
        """Map the 4 KiB page holding ``va`` to the one holding ``pa``."""
        node = self._walk_to(va, 0)
        node.entries[self.extract_vpn(va, 0)] = make_pte(pa >> _PAGE_SHIFT, flags)

    def map_superpage(self, va: int, pa: int, flags: int) -> None:
        """Map a 2 MiB superpage; ``va`` and ``pa`` must be 2 MiB aligned."""
        if va % SUPERPAGE_SIZE:
            raise ValueError("va must be 2MB-aligned")
        if pa % SUPERPAGE_SIZE:
            raise ValueError("pa must be 2MB-aligned")
        node = self._walk_to(va, 1)
        node.entries[self.extract_vpn(va, 1)] = make_pte(pa >> _PAGE_SHIFT, flags)

    def translate(self, va: int) -> int:
        """Walk the table and return the physical address for ``va``.

        Raises PageFault when an entry on the way is not valid, or when the
        last level does not hold a leaf.
        """
        node = self._nodes[self.root_ppn]
        for level in (2, 1, 0):
            pte = node.entries[self.extract_vpn(va, level)]
            if not is_valid(pte):
                raise PageFault(va)
            if is_leaf(pte):
                offset_bits = _PAGE_SHIFT + level * _VPN_BITS
                offset = va & ((1 << offset_bits) - 1)
                return (extract_ppn(pte) << _PAGE_SHIFT) + offset
            if level == 0:
                break
            child = self._nodes.get(extract_ppn(pte))
            if child is None:
                raise PageFault(va)
            node = child
        raise PageFault(va)