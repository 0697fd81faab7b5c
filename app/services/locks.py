"""Per-entity mutual exclusion for read-modify-write sequences."""
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple


class SlugLocks:
    """Hands out one lock per ``(kind, slug)`` pair while it is in use.

    An entry lives only as long as some thread holds or waits for it, so
    requests for slugs that never exist do not accumulate.  Locks only
    serialise writers inside this process; separate processes sharing a
    data directory are not coordinated.
    """

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        # key -> [lock, number of threads holding or waiting]
        self._locks: Dict[Tuple[str, str], List] = {}

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)

    @contextmanager
    def hold(self, kind: str, slug: str) -> Iterator[None]:
        """Context manager holding the lock for *kind*/*slug*."""
        key = (kind, slug)
        with self._registry_lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._registry_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]
