from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

from .types import NOT_FOUND


class PrimaryStore:
    """Primary-key map holding the values themselves.

    Ground truth for membership and size. Insertion order doubles as recency
    order: `insert` drops an existing entry before writing, so the newest
    value always sits last.
    """

    def __init__(self, primary_fn: Callable[[Any], Hashable], rows: Optional[Dict[Hashable, Any]] = None):
        self.primary_fn = primary_fn
        self._rows: Dict[Hashable, Any] = rows if rows is not None else {}

    @classmethod
    def from_values(cls, values: Iterable[Any], primary_fn: Callable[[Any], Hashable]) -> "PrimaryStore":
        store = cls(primary_fn)
        for value in values:
            store.insert(value)
        return store

    def copy(self) -> "PrimaryStore":
        return PrimaryStore(self.primary_fn, dict(self._rows))

    def get(self, pk: Hashable):
        return self._rows.get(pk, NOT_FOUND)

    def insert(self, value: Any) -> Hashable:
        pk = self.primary_fn(value)
        self._rows.pop(pk, None)
        self._rows[pk] = value
        return pk

    def replace(self, pk: Hashable, value: Any):
        # keeps the slot (and its position) of an existing row
        self._rows[pk] = value

    def delete(self, pk: Hashable):
        return self._rows.pop(pk)

    def rows(self) -> Dict[Hashable, Any]:
        return self._rows

    def scan(self) -> List[Any]:
        return list(self._rows.values())

    def __contains__(self, pk: object) -> bool:
        return pk in self._rows

    def __len__(self) -> int:
        return len(self._rows)
