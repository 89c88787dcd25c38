"""Building and decoding 64-bit SV39 page table entries."""

from __future__ import annotations

PTE_V = 1 << 0
"""Valid."""
PTE_R = 1 << 1
"""Readable."""
PTE_W = 1 << 2
"""Writable."""
PTE_X = 1 << 3
"""Executable."""
PTE_U = 1 << 4
"""Accessible from user mode."""
PTE_G = 1 << 5
"""Global mapping."""
PTE_A = 1 << 6
"""Accessed."""
PTE_D = 1 << 7
"""Dirty."""

PPN_SHIFT = 10
PPN_MASK = (1 << 44) - 1
FLAGS_MASK = 0xFF
_U64_MASK = (1 << 64) - 1
_LEAF_BITS = PTE_R | PTE_W | PTE_X


def make_pte(ppn: int, flags: int) -> int:
    """Build an entry with ``ppn`` in bits 53..10 and ``flags`` in the low bits."""
    return ((ppn << PPN_SHIFT) | flags) & _U64_MASK


def extract_ppn(pte: int) -> int:
    """Return the 44-bit physical page number held in ``pte``."""
    return (pte >> PPN_SHIFT) & PPN_MASK


def extract_flags(pte: int) -> int:
    """Return the low eight flag bits of ``pte``."""
    return pte & FLAGS_MASK


def is_valid(pte: int) -> bool:
    """Return whether the V bit is set."""
    return bool(pte & PTE_V)


def is_leaf(pte: int) -> bool:
    """Return whether any of R, W or X is set, i.e. the entry maps a page."""
    return bool(pte & _LEAF_BITS)


def check_permission(pte: int, read: bool, write: bool, execute: bool) -> bool:
    """Return whether ``pte`` is valid and grants every requested access."""
    if not is_valid(pte):
        return False
    required = (
        (PTE_R if read else 0) | (PTE_W if write else 0) | (PTE_X if execute else 0)
    )
    return pte & required == required