"""A single-level page table translating 32-bit virtual addresses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

PAGE_SIZE = 4096
PAGE_OFFSET_BITS = 12
_OFFSET_MASK = (1 << PAGE_OFFSET_BITS) - 1
_U32_MASK = (1 << 32) - 1

PTE_VALID = 1 << 0
PTE_READ = 1 << 1
PTE_WRITE = 1 << 2


@dataclass(frozen=True)
class PageTableEntry:
    """Mapping of one virtual page to a physical page, with its flag bits."""

    ppn: int
    flags: int


class TranslationError(Exception):
    """Raised when a virtual address cannot be translated."""

    def __init__(self, va: int, message: str) -> None:
        super().__init__(f"{message} at virtual address {va:#x}")
        self.va = va


class PageFault(TranslationError):
    """The virtual page is not mapped, or its entry is not valid."""

    def __init__(self, va: int) -> None:
        super().__init__(va, "page fault")


class PermissionDenied(TranslationError):
    """A write was attempted on a page that is not writable."""

    def __init__(self, va: int) -> None:
        super().__init__(va, "write to read-only page")


def va_to_vpn(va: int) -> int:
    """Return the virtual page number of ``va``."""
    return va >> PAGE_OFFSET_BITS


def va_to_offset(va: int) -> int:
    """Return the offset of ``va`` within its page."""
    return va & _OFFSET_MASK


def make_pa(ppn: int, offset: int) -> int:
    """Combine a physical page number and an offset into a 32-bit physical address."""
    pa = ppn * PAGE_SIZE + offset
    if pa > _U32_MASK:
        raise OverflowError(f"physical address {pa:#x} does not fit in 32 bits")
    return pa


class SingleLevelPageTable:
    """Flat table mapping up to ``max_pages`` virtual pages."""

    __slots__ = ("_entries",)

    def __init__(self, max_pages: int) -> None:
        if max_pages < 0:
            raise ValueError(f"max_pages must not be negative, got {max_pages}")
        self._entries: List[Optional[PageTableEntry]] = [None] * max_pages

    def __len__(self) -> int:
        return len(self._entries)

    def _check_vpn(self, vpn: int) -> None:
        if not 0 <= vpn < len(self._entries):
            raise IndexError(
                f"vpn {vpn} out of range for a table of {len(self._entries)} pages"
            )

    def map(self, vpn: int, ppn: int, flags: int) -> None:
        """Map virtual page ``vpn`` to physical page ``ppn`` with ``flags``."""
        self._check_vpn(vpn)
        self._entries[vpn] = PageTableEntry(ppn, flags)

    def unmap(self, vpn: int) -> None:
        """Remove the mapping of virtual page ``vpn``."""
        self._check_vpn(vpn)
        self._entries[vpn] = None

    def lookup(self, vpn: int) -> Optional[PageTableEntry]:
        """Return the entry for ``vpn``, or None if it is unmapped."""
        self._check_vpn(vpn)
        return self._entries[vpn]

    def translate(self, va: int, is_write: bool) -> int:
        """Translate ``va`` to a physical address.

        Raises PageFault for an unmapped or invalid page and PermissionDenied
        for a write to a page without the write flag.
        """
        vpn = va_to_vpn(va)
        entry = self._entries[vpn] if 0 <= vpn < len(self._entries) else None
        if entry is None or not entry.flags & PTE_VALID:
            raise PageFault(va)
        if is_write and not entry.flags & PTE_WRITE:
            raise PermissionDenied(va)
        return make_pa(entry.ppn, va_to_offset(va))