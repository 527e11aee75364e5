"""Result markers shared by the lookup and update operations.

`fetch` answers with either `Found(value)` or `NOT_FOUND`; the non-strict
`get_and_update` hands `MISSING` to its callback when the key is absent, and
callbacks return `POP` to ask for the value to be removed.
"""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Found:
    value: Any


class _Marker:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self):
        return self._name

    def __bool__(self):
        return False


NOT_FOUND = _Marker("NOT_FOUND")
MISSING = _Marker("MISSING")
POP = _Marker("POP")
