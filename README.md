# oslab

Small, self-contained Python models of the mechanisms an operating system is built from. Each module covers one idea and can be read, used and tested on its own. There are no dependencies beyond the standard library.

## Modules

### Synchronisation

- `oslab.atomic_counter`: `AtomicCounter`, an unsigned 64-bit counter that wraps on overflow. `increment` and `decrement` return the value before the change, `get` reads it, `compare_and_swap(expected, new_val)` returns the value found before the operation (the swap happened exactly when that equals `expected`), and `fetch_multiply` multiplies in a compare-and-swap loop.
- `oslab.atomic_ordering`: `FlagChannel`, a single-slot channel whose `consume` blocks until `produce` has stored a value (`reset` clears it), and `OnceCell`, whose `init` succeeds only once and whose `get` returns `None` until then. Both hold unsigned 32-bit values and raise `ValueError` for others.
- `oslab.spinlock`: `SpinLock`, with explicit `lock` (spins, then returns the protected data), `unlock` and `try_lock` (returns whether the lock was taken). The data is available as `data`.
- `oslab.spinlock_guard`: `GuardedSpinLock`, whose `lock()` returns a `SpinGuard`. The guard exposes the data as `value` (readable and assignable) and releases the lock on `release()` or at the end of a `with` block.
- `oslab.rwlock`: `RwLock`, a writer-priority read-write lock. `read()` returns an `RwLockReadGuard` and `write()` an `RwLockWriteGuard`; once a writer is waiting, new readers wait until it has run. Both guards expose `value` (assignable only through the write guard) and release on `release()` or when their `with` block ends.

### Asynchronous programming

- `oslab.basic_future`: hand-written awaitables. `CountDown(n)` suspends `n` times and then returns `"liftoff!"`; `YieldOnce()` suspends exactly once.
- `oslab.tasks`: `concurrent_squares(n)` computes `i * i` for each `i` in `range(n)` in separate tasks; `parallel_sleep_tasks(n, duration_ms)` runs `n` sleeping tasks concurrently and returns their ids sorted.
- `oslab.async_channel`: `producer_consumer(items)` passes items through a bounded queue and returns them in order; `fan_in(n_producers)` collects `"producer {id}: message"` from each producer, sorted.
- `oslab.select_timeout`: `with_timeout(awaitable, timeout_ms)` returns the result or `None` on timeout; `race(first, second)` returns the result of whichever finishes first and cancels the other.

### Paging

- `oslab.pte_flags`: RISC-V SV39 page-table entries. `make_pte`, `extract_ppn`, `extract_flags`, `is_valid`, `is_leaf` and `check_permission`, with the flag constants `PTE_V`, `PTE_R`, `PTE_W`, `PTE_X`, `PTE_U`, `PTE_G`, `PTE_A` and `PTE_D`.
- `oslab.page_table_walk`: `SingleLevelPageTable` for 32-bit addresses and 4 KiB pages, with `map`, `unmap`, `lookup` and `translate(va, is_write)`. Translation raises `PageFault` for an unmapped or invalid page and `PermissionDenied` for a write to a page without `PTE_WRITE`; both derive from `TranslationError`. Helpers `va_to_vpn`, `va_to_offset` and `make_pa`.
- `oslab.multi_level_pt`: `Sv39PageTable`, a three-level table kept in simulated memory, with `map_page`, `map_superpage` (2 MiB aligned addresses, otherwise `ValueError`), `translate` (raises `PageFault`) and the static `extract_vpn(va, level)`.
- `oslab.tlb_sim`: `Tlb`, a fixed-capacity translation lookaside buffer with FIFO replacement, address-space ids, `lookup`, `insert`, `flush_all`, `flush_by_vpn`, `flush_by_asid`, `valid_count` and hit/miss counts in `stats` (`TlbStats.hit_rate()`). `Mmu` puts a `Tlb` in front of a page table built with `add_mapping`; `translate` checks the TLB, falls back to the table and caches what it finds, returning `None` when there is no mapping.

## Examples

```python
from oslab.pte_flags import make_pte, extract_ppn, check_permission
from oslab.multi_level_pt import Sv39PageTable
from oslab.tlb_sim import Mmu

pte = make_pte(0x12345, 0b111)
assert extract_ppn(pte) == 0x12345
assert check_permission(pte, True, True, False)

pt = Sv39PageTable()
pt.map_superpage(0x200000, 0x80200000, 0b111)
assert pt.translate(0x200ABC) == 0x80200ABC

mmu = Mmu(4)
mmu.add_mapping(1, 0x100, 0x200, 0x7)
mmu.switch_asid(1)
assert mmu.translate(0x100) == 0x200
assert mmu.tlb.stats.misses == 1
```

Guards as context managers:

```python
from oslab.spinlock_guard import GuardedSpinLock

lock = GuardedSpinLock([])
with lock.lock() as guard:
    guard.value.append(1)
```

Asynchronous helpers run under `asyncio`:

```python
import asyncio
from oslab.select_timeout import with_timeout

async def slow():
    await asyncio.sleep(1)
    return 42

assert asyncio.run(with_timeout(slow(), 50)) is None
```

## What it does not do

- It is a library only: there is no command-line tool.
- The paging modules are simulations on Python integers; they do not touch real page tables, memory or a hardware TLB.
- The locks are built on the standard `threading` primitives; there is no task scheduler or context switching of its own.

## Installing and testing

```
pip install .[test]
pytest
```