from typing import Any

from .engine import MutationEngine
from .exceptions import CollectorHalted


class Collector:
    """Accumulate values into a copy of a collection.

    Values are folded in through the same `put` path as `Collection.put`,
    but against one private copy of the store and catalog, so a long stream
    costs one copy rather than one per value. `halt()` throws the copy away;
    the originating collection is never modified either way.

    Usable as a context manager: leaving the block with an exception halts.
    """

    def __init__(self, origin):
        self._origin = origin
        self._store = origin._store.copy()
        self._catalog = origin._catalog.copy()
        self._engine = MutationEngine(self._store, self._catalog)
        self._halted = False
        self._finished = False

    def _check(self):
        if self._halted:
            raise CollectorHalted("collector was halted")
        if self._finished:
            raise CollectorHalted("collector already finished")

    def add(self, value: Any) -> "Collector":
        self._check()
        self._engine.put(value)
        return self

    def done(self):
        if self._halted:
            raise CollectorHalted("collector was halted")
        if not self._finished:
            self._finished = True
            self._result = type(self._origin)._from_parts(self._store, self._catalog)
        return self._result

    def halt(self):
        self._halted = True
        self._store = self._catalog = self._engine = None

    @property
    def halted(self) -> bool:
        return self._halted

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None and not self._finished:
            self.halt()
        return False
