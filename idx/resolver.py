from typing import Any, Hashable

from .catalog import IndexCatalog
from .exceptions import KeyNotFound
from .keys import Primary, as_full_key
from .storage import PrimaryStore
from .types import NOT_FOUND


class KeyResolver:
    """Translate any addressing form into a primary key.

    A bare primary key (or `Primary`) is returned untouched; existence is
    checked by the store lookup that follows. A `Secondary(name, key)` goes
    through the named index: a dict lookup for eager indices, a scan of the
    store for lazy ones. An unknown index name always raises `UnknownIndex`,
    in both the strict and the tolerant variant.
    """

    def __init__(self, store: PrimaryStore, catalog: IndexCatalog):
        self.store = store
        self.catalog = catalog

    def resolve(self, key: Any):
        """Return the primary key for `key`, or NOT_FOUND."""
        full = as_full_key(key)
        if isinstance(full, Primary):
            return full.key
        index = self.catalog.get(full.name)
        return index.lookup(full.key, self.store.rows())

    def resolve_strict(self, key: Any) -> Hashable:
        pk = self.resolve(key)
        if pk is NOT_FOUND:
            raise KeyNotFound(f"Key {key!r} not found")
        return pk

    def find(self, key: Any):
        """Resolve `key` and return `(pk, value)`, or NOT_FOUND when absent."""
        pk = self.resolve(key)
        if pk is NOT_FOUND:
            return NOT_FOUND
        value = self.store.get(pk)
        if value is NOT_FOUND:
            return NOT_FOUND
        return pk, value

    def find_strict(self, key: Any):
        found = self.find(key)
        if found is NOT_FOUND:
            raise KeyNotFound(f"Key {key!r} not found")
        return found
