import threading
import time

import pytest

from oslab.rwlock import RwLock


def test_multiple_readers():
    lock = RwLock(0)
    seen = []
    seen_lock = threading.Lock()

    def reader():
        with lock.read() as g:
            with seen_lock:
                seen.append(g.value)

    threads = [threading.Thread(target=reader) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert seen == [0] * 10
    with lock.read() as g:
        assert g.value == 0


def test_readers_hold_lock_together():
    lock = RwLock(0)
    barrier = threading.Barrier(5, timeout=5)
    passed = []
    passed_lock = threading.Lock()

    def reader():
        with lock.read():
            barrier.wait()
            with passed_lock:
                passed.append(True)

    threads = [threading.Thread(target=reader) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(passed) == 5
    # All readers released: a writer can now take the lock.
    with lock.write() as g:
        g.value = 3
    with lock.read() as g:
        assert g.value == 3


def test_writer_excludes_readers():
    lock = RwLock(0)

    def writer():
        with lock.write() as g:
            g.value = 42

    t = threading.Thread(target=writer)
    t.start()
    t.join()
    with lock.read() as g:
        assert g.value == 42


def test_concurrent_reads_after_write():
    lock = RwLock([])
    with lock.write() as g:
        g.value.append(1)
        g.value.append(2)

    results = []
    results_lock = threading.Lock()

    def reader():
        with lock.read() as g:
            with results_lock:
                results.append(list(g.value))

    threads = [threading.Thread(target=reader) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == [[1, 2]] * 5
    with lock.read() as g:
        assert g.value == [1, 2]


def test_concurrent_writes_serialized():
    lock = RwLock(0)

    def worker():
        for _ in range(100):
            with lock.write() as g:
                g.value += 1

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    with lock.read() as g:
        assert g.value == 1000


def test_waiting_writer_blocks_new_readers():
    lock = RwLock(0)
    order = []
    order_lock = threading.Lock()
    first_reader = lock.read()
    assert first_reader.value == 0

    def writer():
        with lock.write() as g:
            g.value = 7
            with order_lock:
                order.append("write")

    def reader():
        with lock.read() as g:
            with order_lock:
                order.append(("read", g.value))

    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.1)
    r = threading.Thread(target=reader)
    r.start()
    time.sleep(0.1)
    with order_lock:
        assert order == []
    first_reader.release()
    w.join()
    r.join()
    assert order == ["write", ("read", 7)]
    with lock.read() as g:
        assert g.value == 7


def test_released_guard_rejects_access():
    lock = RwLock(5)
    guard = lock.write()
    guard.release()
    guard.release()
    with pytest.raises(RuntimeError):
        _ = guard.value
    with lock.read() as g:
        assert g.value == 5