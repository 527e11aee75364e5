from dataclasses import dataclass
from typing import Any, Hashable, Union


@dataclass(frozen=True)
class Primary:
    key: Hashable


@dataclass(frozen=True)
class Secondary:
    # name of an eager or lazy index, and the key that index function produces
    name: Hashable
    key: Hashable


FullKey = Union[Primary, Secondary]


def as_full_key(key: Any) -> FullKey:
    """Wrap a bare primary key as `Primary`; tagged keys pass through unchanged."""
    if isinstance(key, (Primary, Secondary)):
        return key
    return Primary(key)
