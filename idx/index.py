from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Optional, Tuple

from .types import NOT_FOUND


class EagerIndex:
    """Materialized index: secondary key -> primary keys of the values producing it.

    Each bucket keeps its primary keys in insertion order (dict keys used as an
    ordered set) and the newest one answers lookups, so removing the newest
    value falls back to the previous holder instead of losing the key.
    Buckets are never mutated in place once created; `add` and `remove`
    install a fresh bucket so copies taken earlier stay intact.
    """

    kind = "eager"

    def __init__(self, fn: Callable[[Any], Hashable], buckets: Optional[Dict[Hashable, Dict[Hashable, None]]] = None):
        self.fn = fn
        self._map: Dict[Hashable, Dict[Hashable, None]] = buckets if buckets is not None else {}

    @classmethod
    def build(cls, fn: Callable[[Any], Hashable], rows: Iterable[Tuple[Hashable, Any]]) -> "EagerIndex":
        index = cls(fn)
        for pk, value in rows:
            index.add(value, pk)
        return index

    def copy(self) -> "EagerIndex":
        return EagerIndex(self.fn, dict(self._map))

    def add(self, value: Any, pk: Hashable):
        key = self.fn(value)
        bucket = {k: None for k in self._map.get(key, ()) if k != pk}
        bucket[pk] = None
        self._map[key] = bucket

    def remove(self, value: Any, pk: Hashable):
        key = self.fn(value)
        bucket = self._map.get(key)
        if bucket is None or pk not in bucket:
            return
        if len(bucket) == 1:
            del self._map[key]
            return
        self._map[key] = {k: None for k in bucket if k != pk}

    def lookup(self, key: Hashable, rows: Optional[Mapping[Hashable, Any]] = None):
        # same signature as LazyIndex.lookup; the materialized map needs no rows
        bucket = self._map.get(key)
        if not bucket:
            return NOT_FOUND
        return next(reversed(bucket))

    def __len__(self):
        return len(self._map)


class LazyIndex:
    """Index kept only as its function; lookups scan the stored values.

    The scan runs newest-first so it settles duplicates the same way
    `EagerIndex` does.
    """

    kind = "lazy"

    def __init__(self, fn: Callable[[Any], Hashable]):
        self.fn = fn

    def copy(self) -> "LazyIndex":
        return self

    def lookup(self, key: Hashable, rows: Mapping[Hashable, Any]):
        for pk in reversed(rows):
            if self.fn(rows[pk]) == key:
                return pk
        return NOT_FOUND
