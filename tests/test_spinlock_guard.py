import threading

import pytest

from oslab.spinlock_guard import GuardedSpinLock


def test_guard_auto_release():
    lock = GuardedSpinLock(0)
    with lock.lock() as guard:
        guard.value = 42
    with lock.lock() as guard:
        assert guard.value == 42


def test_guard_deref():
    lock = GuardedSpinLock("hello")
    with lock.lock() as guard:
        assert len(guard.value) == 5
        assert guard.value == "hello"


def test_guard_deref_mut():
    lock = GuardedSpinLock([])
    with lock.lock() as guard:
        guard.value.append(1)
        guard.value.append(2)
        guard.value.append(3)
    with lock.lock() as guard:
        assert guard.value == [1, 2, 3]


def test_concurrent_with_guard():
    lock = GuardedSpinLock(0)

    def work():
        for _ in range(1000):
            with lock.lock() as guard:
                guard.value += 1

    threads = [threading.Thread(target=work) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    with lock.lock() as guard:
        assert guard.value == 10000


def test_panic_safety():
    lock = GuardedSpinLock(0)
    errors = []

    def work():
        try:
            with lock.lock() as guard:
                guard.value = 42
                raise RuntimeError("intentional failure")
        except RuntimeError as exc:
            errors.append(str(exc))

    t = threading.Thread(target=work)
    t.start()
    t.join()

    assert errors == ["intentional failure"]
    with lock.lock() as guard:
        assert guard.value == 42


def test_explicit_release_is_idempotent():
    lock = GuardedSpinLock(1)
    guard = lock.lock()
    guard.release()
    guard.release()
    with lock.lock() as again:
        assert again.value == 1


def test_access_after_release_raises():
    lock = GuardedSpinLock(1)
    guard = lock.lock()
    guard.release()
    with pytest.raises(RuntimeError):
        guard.value
    with pytest.raises(RuntimeError):
        guard.value = 5
    with lock.lock() as again:
        assert again.value == 1