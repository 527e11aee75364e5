"""
tests/test_collect.py — Tests for Collector and Collection.into.
"""

import pytest

from idx import NOT_FOUND, CollectorHalted, Secondary, new


def by_name(user):
    return user["name"]


@pytest.fixture
def users():
    return new([{"name": "Bob", "age": 20}], by_name).create_index("age", lambda u: u["age"])


class TestCollector:
    def test_done_yields_collection(self, users):
        collector = users.collector()
        collector.add({"name": "Eve", "age": 27}).add({"name": "John", "age": 45})
        result = collector.done()
        assert result.size() == 3
        assert result.fetch_strict(Secondary("age", 45))["name"] == "John"
        assert users.size() == 1

    def test_done_is_idempotent(self, users):
        collector = users.collector()
        collector.add({"name": "Eve", "age": 27})
        assert collector.done() is collector.done()

    def test_add_after_done_raises(self, users):
        collector = users.collector()
        collector.done()
        with pytest.raises(CollectorHalted):
            collector.add({"name": "Eve", "age": 27})

    def test_halt_discards(self, users):
        collector = users.collector()
        collector.add({"name": "Eve", "age": 27})
        collector.halt()
        assert collector.halted
        assert users.size() == 1
        with pytest.raises(CollectorHalted):
            collector.done()
        with pytest.raises(CollectorHalted):
            collector.add({"name": "John", "age": 45})

    def test_context_manager_halts_on_error(self, users):
        with pytest.raises(RuntimeError):
            with users.collector() as collector:
                collector.add({"name": "Eve", "age": 27})
                raise RuntimeError("boom")
        assert collector.halted
        assert users.fetch("Eve") is NOT_FOUND


def test_into(users):
    result = users.into([{"name": "Eve", "age": 27}, {"name": "Bob", "age": 21}])
    assert sorted(result, key=by_name) == [{"name": "Bob", "age": 21}, {"name": "Eve", "age": 27}]
    assert result.fetch_strict(Secondary("age", 21))["name"] == "Bob"
    assert users.fetch_strict("Bob")["age"] == 20
