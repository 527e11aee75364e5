from typing import Any, Hashable

from .catalog import IndexCatalog
from .storage import PrimaryStore


class MutationEngine:
    """Apply writes to a store and keep every eager index in step with it.

    The engine mutates the store and catalog it is given; `Collection` hands
    it fresh copies so earlier collection values are never touched.
    """

    def __init__(self, store: PrimaryStore, catalog: IndexCatalog):
        self.store = store
        self.catalog = catalog

    def put(self, value: Any) -> Hashable:
        pk = self.store.primary_fn(value)
        if pk in self.store:
            self.remove(pk)
        self.store.insert(value)
        for index in self.catalog.eager.values():
            index.add(value, pk)
        return pk

    def remove(self, pk: Hashable) -> Any:
        value = self.store.delete(pk)
        for index in self.catalog.eager.values():
            index.remove(value, pk)
        return value

    def replace_in_place(self, pk: Hashable, value: Any):
        # indices are not consulted; the caller vouches that no indexed key moved
        self.store.replace(pk, value)
