import pytest

from oslab.page_table_walk import (
    PAGE_SIZE,
    PTE_READ,
    PTE_VALID,
    PTE_WRITE,
    PageFault,
    PageTableEntry,
    PermissionDenied,
    SingleLevelPageTable,
    TranslationError,
    make_pa,
    va_to_offset,
    va_to_vpn,
)


def test_va_decompose():
    assert va_to_vpn(0x12345678) == 0x12345
    assert va_to_offset(0x12345678) == 0x678


def test_va_decompose_zero():
    assert va_to_vpn(0) == 0
    assert va_to_offset(0) == 0


def test_va_decompose_page_boundary():
    assert va_to_vpn(0x3000) == 3
    assert va_to_offset(0x3000) == 0


def test_make_pa():
    assert make_pa(0x80, 0x100) == 0x80 * 4096 + 0x100
    assert make_pa(0, 0) == 0
    assert make_pa(1, 0) == 4096


def test_make_pa_overflow():
    with pytest.raises(OverflowError):
        make_pa(1 << 20, 0)


def test_map_and_lookup():
    pt = SingleLevelPageTable(1024)
    pt.map(5, 100, PTE_VALID | PTE_READ)
    entry = pt.lookup(5)
    assert entry == PageTableEntry(100, PTE_VALID | PTE_READ)
    assert entry.ppn == 100
    assert entry.flags == PTE_VALID | PTE_READ


def test_lookup_unmapped():
    pt = SingleLevelPageTable(1024)
    assert pt.lookup(0) is None


def test_unmap():
    pt = SingleLevelPageTable(1024)
    pt.map(10, 200, PTE_VALID | PTE_READ)
    assert pt.lookup(10) == PageTableEntry(200, PTE_VALID | PTE_READ)
    pt.unmap(10)
    assert pt.lookup(10) is None


def test_map_out_of_range():
    pt = SingleLevelPageTable(4)
    with pytest.raises(IndexError):
        pt.map(4, 1, PTE_VALID)
    with pytest.raises(IndexError):
        pt.lookup(-1)


def test_translate_basic():
    pt = SingleLevelPageTable(1024)
    pt.map(1, 0x80, PTE_VALID | PTE_READ)
    assert pt.translate(0x1100, False) == 0x80100


def test_translate_page_fault():
    pt = SingleLevelPageTable(1024)
    with pytest.raises(PageFault) as info:
        pt.translate(0x5000, False)
    assert info.value.va == 0x5000


def test_translate_beyond_table_is_page_fault():
    pt = SingleLevelPageTable(4)
    with pytest.raises(PageFault):
        pt.translate(0x10000, False)


def test_translate_write_permission():
    pt = SingleLevelPageTable(1024)
    pt.map(2, 0x90, PTE_VALID | PTE_READ)
    assert pt.translate(0x2000, False) == 0x90 * PAGE_SIZE
    with pytest.raises(PermissionDenied):
        pt.translate(0x2000, True)


def test_translation_errors_share_base():
    pt = SingleLevelPageTable(8)
    pt.map(0, 1, PTE_VALID | PTE_READ)
    with pytest.raises(TranslationError):
        pt.translate(0x0, True)
    with pytest.raises(TranslationError):
        pt.translate(0x1000, False)


def test_translate_writable_page():
    pt = SingleLevelPageTable(1024)
    pt.map(3, 0xA0, PTE_VALID | PTE_READ | PTE_WRITE)
    assert pt.translate(0x3456, True) == 0xA0 * PAGE_SIZE + 0x456


def test_translate_invalid_entry():
    pt = SingleLevelPageTable(1024)
    pt.map(4, 0x50, PTE_READ)
    with pytest.raises(PageFault):
        pt.translate(0x4000, False)


def test_multiple_mappings():
    pt = SingleLevelPageTable(1024)
    pt.map(0, 0x10, PTE_VALID | PTE_READ)
    pt.map(1, 0x20, PTE_VALID | PTE_READ | PTE_WRITE)
    pt.map(2, 0x30, PTE_VALID | PTE_READ)
    assert pt.translate(0x0FFF, False) == 0x10FFF
    assert pt.translate(0x1000, True) == 0x20000
    assert pt.translate(0x2800, False) == 0x30800