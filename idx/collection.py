"""
Collection facade: one set of values, many lookup paths.

A `Collection` is a value. Every write (`put`, `pop`, `update`, index
creation...) returns a new collection built from copies of the store and the
index catalog, and the receiver keeps answering exactly as before.

Keys are addressed uniformly: a bare object (or `Primary(k)`) is a primary
key, `Secondary(name, k)` goes through the index called `name`.
"""

from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Tuple

from .catalog import IndexCatalog
from .engine import MutationEngine
from .exceptions import KeyNotFound, UnsupportedIndexOperation
from .resolver import KeyResolver
from .storage import PrimaryStore
from .types import MISSING, NOT_FOUND, POP, Found


class Collection:
    """In-memory collection keyed by `primary_fn`, with named secondary indices."""

    def __init__(self, primary_fn: Callable[[Any], Hashable], values: Iterable[Any] = ()):
        self.primary_fn = primary_fn
        self._store = PrimaryStore.from_values(values, primary_fn)
        self._catalog = IndexCatalog()
        self._resolver = KeyResolver(self._store, self._catalog)

    @classmethod
    def _from_parts(cls, store: PrimaryStore, catalog: IndexCatalog) -> "Collection":
        coll = cls.__new__(cls)
        coll.primary_fn = store.primary_fn
        coll._store = store
        coll._catalog = catalog
        coll._resolver = KeyResolver(store, catalog)
        return coll

    def _mutate(self, apply: Callable[[MutationEngine], Any]) -> "Collection":
        store, catalog = self._store.copy(), self._catalog.copy()
        apply(MutationEngine(store, catalog))
        return self._from_parts(store, catalog)

    # --- indices ------------------------------------------------------------

    def create_index(self, name: Hashable, fn: Callable[[Any], Hashable], lazy: bool = False) -> "Collection":
        """Return a collection with a new index `name` over `fn(value)`.

        An eager index is built right away in one pass over the values and
        maintained on every later write. A lazy index only remembers `fn`
        and scans the values on each lookup.
        """
        store, catalog = self._store.copy(), self._catalog.copy()
        catalog.create_index(name, fn, store.rows().items(), lazy=lazy)
        return self._from_parts(store, catalog)

    def drop_index(self, name: Hashable) -> "Collection":
        store, catalog = self._store.copy(), self._catalog.copy()
        catalog.drop_index(name)
        return self._from_parts(store, catalog)

    @property
    def indices(self) -> Dict[Hashable, str]:
        """Index name -> "eager" or "lazy"."""
        return self._catalog.kinds()

    def has_index(self, name: Hashable) -> bool:
        return self._catalog.has_index(name)

    def primary_key(self, name: Hashable, secondary_key: Hashable) -> Hashable:
        """Translate a secondary key of an eager index into a primary key."""
        index = self._catalog.get(name)
        if index.kind != "eager":
            raise UnsupportedIndexOperation(f"primary_key is not supported for lazy index {name!r}")
        pk = index.lookup(secondary_key)
        if pk is NOT_FOUND:
            raise KeyNotFound(f"Key {secondary_key!r} not found in index {name!r}")
        return pk

    # --- reads --------------------------------------------------------------

    def fetch(self, key: Any):
        found = self._resolver.find(key)
        if found is NOT_FOUND:
            return NOT_FOUND
        return Found(found[1])

    def fetch_strict(self, key: Any) -> Any:
        return self._resolver.find_strict(key)[1]

    __getitem__ = fetch_strict

    def get(self, key: Any, default: Any = None) -> Any:
        found = self._resolver.find(key)
        if found is NOT_FOUND:
            return default
        return found[1]

    def member(self, value: Any) -> bool:
        stored = self._store.get(self.primary_fn(value))
        return stored is not NOT_FOUND and stored == value

    __contains__ = member

    def size(self) -> int:
        return len(self._store)

    __len__ = size

    def to_list(self) -> List[Any]:
        return self._store.scan()

    def to_map(self) -> Dict[Hashable, Any]:
        return dict(self._store.rows())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    # --- writes -------------------------------------------------------------

    def put(self, value: Any) -> "Collection":
        return self._mutate(lambda engine: engine.put(value))

    def pop(self, key: Any, default: Any = None) -> Tuple[Any, "Collection"]:
        found = self._resolver.find(key)
        if found is NOT_FOUND:
            return default, self
        pk, value = found
        return value, self._mutate(lambda engine: engine.remove(pk))

    def pop_strict(self, key: Any) -> Tuple[Any, "Collection"]:
        pk, value = self._resolver.find_strict(key)
        return value, self._mutate(lambda engine: engine.remove(pk))

    def update(self, key: Any, transform: Callable[[Any], Any]) -> "Collection":
        """Replace the value at `key` with `transform(value)`.

        Runs as a full pop followed by a put, so `transform` may change the
        primary key or any indexed key. Raises KeyNotFound if `key` is absent.
        """
        pk, value = self._resolver.find_strict(key)
        return self._mutate(lambda engine: self._swap(engine, pk, transform(value)))

    def fast_update(self, key: Any, transform: Callable[[Any], Any]) -> "Collection":
        """Like `update`, but leaves every index alone.

        Only valid when `transform` changes neither the primary key nor any
        key an index is built on; nothing checks this.
        """
        pk, value = self._resolver.find_strict(key)
        new_value = transform(value)
        return self._mutate(lambda engine: engine.replace_in_place(pk, new_value))

    def get_and_update_strict(self, key: Any, fn: Callable[[Any], Any]) -> Tuple[Any, "Collection"]:
        pk, value = self._resolver.find_strict(key)
        return self._get_and_update(pk, value, fn)

    def get_and_update(self, key: Any, fn: Callable[[Any], Any]) -> Tuple[Any, "Collection"]:
        """Call `fn` on the current value and apply what it returns.

        `fn` returns either `(result, new_value)` or `POP`. When `key` is
        absent `fn` receives `MISSING`; a `POP` answer then leaves the
        collection unchanged and yields `(None, self)`.
        """
        found = self._resolver.find(key)
        if found is not NOT_FOUND:
            return self._get_and_update(found[0], found[1], fn)
        outcome = fn(MISSING)
        if outcome is POP:
            return None, self
        result, new_value = outcome
        return result, self.put(new_value)

    def _get_and_update(self, pk: Hashable, value: Any, fn: Callable[[Any], Any]) -> Tuple[Any, "Collection"]:
        outcome = fn(value)
        if outcome is POP:
            return value, self._mutate(lambda engine: engine.remove(pk))
        result, new_value = outcome
        return result, self._mutate(lambda engine: self._swap(engine, pk, new_value))

    @staticmethod
    def _swap(engine: MutationEngine, pk: Hashable, new_value: Any):
        engine.remove(pk)
        engine.put(new_value)

    # --- builders -----------------------------------------------------------

    def collector(self):
        from .collect import Collector

        return Collector(self)

    def into(self, values: Iterable[Any]) -> "Collection":
        with self.collector() as collector:
            for value in values:
                collector.add(value)
        return collector.done()

    def __repr__(self):
        primary = getattr(self.primary_fn, "__name__", repr(self.primary_fn))
        return (
            f"Collection<{self.to_list()!r}, primary={primary}, "
            f"eager={list(self._catalog.eager)!r}, lazy={list(self._catalog.lazy)!r}>"
        )


def new(values: Iterable[Any], primary_fn: Callable[[Any], Hashable]) -> Collection:
    return Collection(primary_fn, values)
