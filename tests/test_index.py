"""
tests/test_index.py — Tests for eager and lazy secondary indices.

Validates index creation and drop, lookups through `Secondary` keys,
`primary_key`, index consistency across writes, and how both index kinds
settle duplicate secondary keys.
"""

import pytest

from idx import (
    NOT_FOUND,
    Found,
    IndexAlreadyExists,
    KeyNotFound,
    Secondary,
    UnknownIndex,
    UnsupportedIndexOperation,
    new,
)
from idx.index import EagerIndex, LazyIndex

BOB = {"name": "Bob", "age": 20}
EVE = {"name": "Eve", "age": 27}
JOHN = {"name": "John", "age": 45}


def by_name(user):
    return user["name"]


def initial(user):
    return user["name"][0]


@pytest.fixture
def users():
    return new([BOB, EVE, JOHN], by_name)


@pytest.fixture(params=[False, True], ids=["eager", "lazy"])
def lazy(request):
    return request.param


class TestCreateAndDrop:
    def test_create_reports_kind(self, users):
        users = users.create_index("initial", initial)
        users = users.create_index("age", lambda u: u["age"], lazy=True)
        assert users.indices == {"initial": "eager", "age": "lazy"}

    def test_duplicate_name_rejected(self, users, lazy):
        users = users.create_index("initial", initial)
        with pytest.raises(IndexAlreadyExists):
            users.create_index("initial", initial, lazy=lazy)

    def test_name_shared_across_kinds(self, users):
        users = users.create_index("initial", initial, lazy=True)
        with pytest.raises(IndexAlreadyExists):
            users.create_index("initial", initial)

    def test_drop_unknown_raises(self, users):
        with pytest.raises(UnknownIndex):
            users.drop_index("nope")

    def test_drop_then_lookup_is_unknown(self, users, lazy):
        users = users.create_index("initial", initial, lazy=lazy)
        assert users.fetch(Secondary("initial", "J")) == Found(JOHN)
        users = users.drop_index("initial")
        assert not users.has_index("initial")
        with pytest.raises(UnknownIndex):
            users.fetch(Secondary("initial", "J"))

    def test_name_reusable_after_drop(self, users):
        users = users.create_index("initial", initial).drop_index("initial")
        users = users.create_index("initial", lambda u: u["age"], lazy=True)
        assert users.fetch_strict(Secondary("initial", 27)) == EVE


class TestLookup:
    def test_secondary_fetch(self, users, lazy):
        users = users.create_index("initial", initial, lazy=lazy)
        assert users.fetch(Secondary("initial", "J")) == Found(JOHN)
        assert users.fetch_strict(Secondary("initial", "E")) == EVE
        assert users.get(Secondary("initial", "B")) == BOB

    def test_secondary_miss(self, users, lazy):
        users = users.create_index("initial", initial, lazy=lazy)
        assert users.fetch(Secondary("initial", "Z")) is NOT_FOUND
        assert users.get(Secondary("initial", "Z"), "none") == "none"
        with pytest.raises(KeyNotFound):
            users.fetch_strict(Secondary("initial", "Z"))

    def test_unknown_index_is_never_tolerated(self, users):
        with pytest.raises(UnknownIndex):
            users.fetch(Secondary("nope", "J"))
        with pytest.raises(UnknownIndex):
            users.get(Secondary("nope", "J"), "default")
        with pytest.raises(UnknownIndex):
            users.pop(Secondary("nope", "J"))

    def test_eager_and_lazy_agree(self, users):
        users = users.create_index("eager", lambda u: u["age"])
        users = users.create_index("lazy", lambda u: u["age"], lazy=True)
        for age in (20, 27, 45, 99):
            assert users.fetch(Secondary("eager", age)) == users.fetch(Secondary("lazy", age))


class TestPrimaryKey:
    def test_eager(self, users):
        users = users.create_index("initial", initial)
        assert users.primary_key("initial", "J") == "John"

    def test_eager_miss(self, users):
        users = users.create_index("initial", initial)
        with pytest.raises(KeyNotFound):
            users.primary_key("initial", "Z")

    def test_lazy_unsupported(self, users):
        users = users.create_index("initial", initial, lazy=True)
        with pytest.raises(UnsupportedIndexOperation):
            users.primary_key("initial", "J")

    def test_unknown(self, users):
        with pytest.raises(UnknownIndex):
            users.primary_key("nope", "J")


class TestConsistency:
    def test_every_value_resolvable_after_writes(self, users):
        users = users.create_index("initial", initial)
        users = users.create_index("age", lambda u: u["age"])
        users = users.put({"name": "Anna", "age": 50})
        users = users.update("Bob", lambda u: {**u, "name": "Steve", "age": 21})
        _, users = users.pop("Eve")
        for value in users:
            assert users.primary_key("initial", initial(value)) == by_name(value)
            assert users.primary_key("age", value["age"]) == by_name(value)

    def test_update_moves_keys(self, users, lazy):
        users = users.create_index("initial", initial, lazy=lazy)
        users = users.update("Bob", lambda u: {**u, "name": "Steve"})
        assert users.fetch(Secondary("initial", "B")) is NOT_FOUND
        assert users.fetch_strict(Secondary("initial", "S")) == {"name": "Steve", "age": 20}


class TestDuplicateSecondaryKeys:
    def test_newest_put_wins(self, users, lazy):
        jane = {"name": "Jane", "age": 33}
        users = users.create_index("initial", initial, lazy=lazy).put(jane)
        assert users.fetch_strict(Secondary("initial", "J")) == jane

    def test_pop_newest_falls_back(self, users, lazy):
        jane = {"name": "Jane", "age": 33}
        users = users.create_index("initial", initial, lazy=lazy).put(jane)
        _, users = users.pop("Jane")
        assert users.fetch_strict(Secondary("initial", "J")) == JOHN

    def test_reput_makes_value_newest(self, users, lazy):
        jane = {"name": "Jane", "age": 33}
        users = users.put(jane).create_index("initial", initial, lazy=lazy)
        users = users.put({"name": "John", "age": 46})
        assert users.fetch_strict(Secondary("initial", "J")) == {"name": "John", "age": 46}

    def test_kinds_agree_on_collisions(self, users):
        users = users.put({"name": "Jane", "age": 33})
        users = users.create_index("eager", initial).create_index("lazy", initial, lazy=True)
        assert users.fetch(Secondary("eager", "J")) == users.fetch(Secondary("lazy", "J"))
        _, users = users.pop("Jane")
        assert users.fetch(Secondary("eager", "J")) == users.fetch(Secondary("lazy", "J"))


class TestIndexClasses:
    def test_eager_copy_is_independent(self):
        index = EagerIndex.build(initial, [("Bob", BOB), ("John", JOHN)])
        snapshot = index.copy()
        index.remove(JOHN, "John")
        index.add({"name": "Bill"}, "Bill")
        assert snapshot.lookup("J") == "John"
        assert snapshot.lookup("B") == "Bob"
        assert index.lookup("J") is NOT_FOUND
        assert index.lookup("B") == "Bill"

    def test_eager_remove_unknown_is_noop(self):
        index = EagerIndex.build(initial, [("Bob", BOB)])
        index.remove(EVE, "Eve")
        assert len(index) == 1

    def test_lazy_scan(self):
        index = LazyIndex(initial)
        rows = {"Bob": BOB, "Eve": EVE}
        assert index.lookup("E", rows) == "Eve"
        assert index.lookup("Z", rows) is NOT_FOUND

    def test_both_kinds_share_lookup_signature(self):
        rows = {"Bob": BOB, "John": JOHN}
        eager = EagerIndex.build(initial, rows.items())
        lazy = LazyIndex(initial)
        for key in ("B", "J", "Z"):
            assert eager.lookup(key, rows) == lazy.lookup(key, rows)
