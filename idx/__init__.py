from .collection import Collection, new
from .exceptions import (
    CollectorHalted,
    IdxException,
    IndexAlreadyExists,
    KeyNotFound,
    UnknownIndex,
    UnsupportedIndexOperation,
)
from .keys import Primary, Secondary
from .types import MISSING, NOT_FOUND, POP, Found

__all__ = [
    "Collection",
    "new",
    "Primary",
    "Secondary",
    "Found",
    "NOT_FOUND",
    "MISSING",
    "POP",
    "IdxException",
    "IndexAlreadyExists",
    "UnknownIndex",
    "KeyNotFound",
    "UnsupportedIndexOperation",
    "CollectorHalted",
]
