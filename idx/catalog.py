import logging
from typing import Any, Callable, Dict, Hashable, Iterable, Optional, Tuple, Union

from .exceptions import IndexAlreadyExists, UnknownIndex
from .index import EagerIndex, LazyIndex

logger = logging.getLogger(__name__)

AnyIndex = Union[EagerIndex, LazyIndex]


class IndexCatalog:
    """Manage the named secondary indices of a collection.

    Eager and lazy indices live in separate registries but share one
    namespace: a name may be used by at most one index of either kind.
    """

    def __init__(self, eager: Optional[Dict[Hashable, EagerIndex]] = None,
                 lazy: Optional[Dict[Hashable, LazyIndex]] = None):
        self.eager: Dict[Hashable, EagerIndex] = eager if eager is not None else {}
        self.lazy: Dict[Hashable, LazyIndex] = lazy if lazy is not None else {}

    def copy(self) -> "IndexCatalog":
        return IndexCatalog(
            {name: index.copy() for name, index in self.eager.items()},
            dict(self.lazy),
        )

    def has_index(self, name: Hashable) -> bool:
        return name in self.eager or name in self.lazy

    def create_index(self, name: Hashable, fn: Callable[[Any], Hashable],
                     rows: Iterable[Tuple[Hashable, Any]] = (), lazy: bool = False) -> AnyIndex:
        if self.has_index(name):
            raise IndexAlreadyExists(f"Index {name!r} already present")
        if lazy:
            index = self.lazy[name] = LazyIndex(fn)
        else:
            index = self.eager[name] = EagerIndex.build(fn, rows)
        logger.debug("created %s index %r", index.kind, name)
        return index

    def drop_index(self, name: Hashable) -> AnyIndex:
        if name in self.eager:
            index = self.eager.pop(name)
        elif name in self.lazy:
            index = self.lazy.pop(name)
        else:
            raise UnknownIndex(f"Unknown index {name!r}")
        logger.debug("dropped %s index %r", index.kind, name)
        return index

    def get(self, name: Hashable) -> AnyIndex:
        if name in self.eager:
            return self.eager[name]
        if name in self.lazy:
            return self.lazy[name]
        raise UnknownIndex(f"Unknown index {name!r}")

    def kinds(self) -> Dict[Hashable, str]:
        out = {name: "eager" for name in self.eager}
        out.update((name, "lazy") for name in self.lazy)
        return out

    def __len__(self):
        return len(self.eager) + len(self.lazy)
