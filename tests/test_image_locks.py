import threading

from services.image_locks import ParentLockRegistry


def test_hold_is_reentrant():
    locks = ParentLockRegistry()
    with locks.hold(1):
        with locks.hold(1):
            assert locks.active() == [1]
        assert locks.active() == [1]
    assert locks.active() == []


def test_same_product_is_serialized():
    locks = ParentLockRegistry()
    acquired = threading.Event()
    events = []

    def worker():
        with locks.hold(1):
            events.append("worker")
            acquired.set()

    with locks.hold(1):
        thread = threading.Thread(target=worker)
        thread.start()
        assert not acquired.wait(0.2)
        events.append("main")

    thread.join(timeout=5)
    assert acquired.is_set()
    assert events == ["main", "worker"]
    assert locks.active() == []


def test_different_products_do_not_block():
    locks = ParentLockRegistry()
    done = threading.Event()

    def worker():
        with locks.hold(2):
            done.set()

    with locks.hold(1):
        thread = threading.Thread(target=worker)
        thread.start()
        assert done.wait(5)
        thread.join(timeout=5)


def test_lock_released_on_error():
    locks = ParentLockRegistry()
    try:
        with locks.hold(3):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert locks.active() == []
