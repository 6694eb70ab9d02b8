"""
Per-product locks for image ordering writes
"""
import threading
from contextlib import contextmanager


class ParentLockRegistry:
    """
    Hands out one re-entrant lock per product id.

    Holding ``hold(product_id)`` serializes every writer that goes through the
    same registry for that product; other products are never blocked. A lock is
    dropped from the registry once nobody holds or waits for it.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}
        self._users = {}

    @contextmanager
    def hold(self, product_id):
        with self._guard:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = self._locks[product_id] = threading.RLock()
            self._users[product_id] = self._users.get(product_id, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._users[product_id] -= 1
                if self._users[product_id] == 0:
                    del self._users[product_id]
                    del self._locks[product_id]

    def active(self):
        """Product ids that currently have a holder or waiter"""
        with self._guard:
            return sorted(self._locks)
