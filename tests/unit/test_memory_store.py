"""Unit tests for InMemoryVectorStore.

Covers ranking, limit, session filtering, deletion and concurrent access.
"""

from __future__ import annotations

import threading

import pytest

from vectorgate.providers.vector_store.memory_store import InMemoryVectorStore


@pytest.fixture
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def ranked_store(store: InMemoryVectorStore) -> InMemoryVectorStore:
    store.store("orthogonal", {}, None, [0.0, 1.0, 0.0])
    store.store("exact", {"kind": "a"}, None, [1.0, 0.0, 0.0])
    store.store("close", {}, None, [0.9, 0.1, 0.0])
    return store


class TestStore:
    def test_returns_uuid_and_grows(self, store: InMemoryVectorStore) -> None:
        entry_id = store.store("hello", {"k": "v"}, None, [1.0, 0.0])
        assert len(entry_id) == 36
        assert len(store) == 1

    def test_ids_are_unique(self, store: InMemoryVectorStore) -> None:
        ids = {store.store(f"t{i}", {}, None, [1.0]) for i in range(20)}
        assert len(ids) == 20


class TestSearch:
    def test_ranks_by_cosine_descending(self, ranked_store: InMemoryVectorStore) -> None:
        results = ranked_store.search([1.0, 0.0, 0.0], limit=3)

        assert [r.text for r in results] == ["exact", "close", "orthogonal"]
        assert results[0].score == pytest.approx(1.0)
        assert results[1].score == pytest.approx(0.994, abs=1e-3)
        assert results[2].score == pytest.approx(0.0)

    def test_result_carries_metadata(self, ranked_store: InMemoryVectorStore) -> None:
        top = ranked_store.search([1.0, 0.0, 0.0], limit=1)[0]
        assert top.metadata == {"kind": "a"}

    def test_limit_truncates(self, ranked_store: InMemoryVectorStore) -> None:
        assert len(ranked_store.search([1.0, 0.0, 0.0], limit=2)) == 2

    def test_limit_two_of_five(self, store: InMemoryVectorStore) -> None:
        for i in range(5):
            store.store(f"entry {i}", {}, None, [1.0, float(i), 0.0])

        results = store.search([1.0, 0.0, 0.0], limit=2)

        assert [r.text for r in results] == ["entry 0", "entry 1"]

    def test_limit_larger_than_store(self, ranked_store: InMemoryVectorStore) -> None:
        assert len(ranked_store.search([1.0, 0.0, 0.0], limit=50)) == 3

    def test_empty_store_returns_empty(self, store: InMemoryVectorStore) -> None:
        assert store.search([1.0, 0.0], limit=5) == []

    def test_zero_limit_returns_empty(self, ranked_store: InMemoryVectorStore) -> None:
        assert ranked_store.search([1.0, 0.0, 0.0], limit=0) == []

    def test_ties_keep_insertion_order(self, store: InMemoryVectorStore) -> None:
        first = store.store("first", {}, None, [1.0, 0.0])
        second = store.store("second", {}, None, [2.0, 0.0])
        third = store.store("third", {}, None, [3.0, 0.0])

        results = store.search([1.0, 0.0], limit=3)

        assert [r.id for r in results] == [first, second, third]

    def test_session_filter_is_exact(self, store: InMemoryVectorStore) -> None:
        store.store("alpha", {}, "s1", [1.0, 0.0])
        store.store("beta", {}, "s2", [1.0, 0.0])
        store.store("untagged", {}, None, [1.0, 0.0])

        results = store.search([1.0, 0.0], limit=10, session="s1")

        assert [r.text for r in results] == ["alpha"]
        assert results[0].session == "s1"

    def test_untagged_entries_never_match_a_filter(self, store: InMemoryVectorStore) -> None:
        store.store("untagged", {}, None, [1.0, 0.0])
        assert store.search([1.0, 0.0], limit=10, session="s1") == []

    def test_no_filter_returns_all_sessions(self, store: InMemoryVectorStore) -> None:
        store.store("alpha", {}, "s1", [1.0, 0.0])
        store.store("untagged", {}, None, [1.0, 0.0])
        assert len(store.search([1.0, 0.0], limit=10)) == 2


class TestDelete:
    def test_delete_existing_then_missing(self, store: InMemoryVectorStore) -> None:
        entry_id = store.store("bye", {}, None, [1.0])
        assert store.delete(entry_id) is True
        assert store.delete(entry_id) is False
        assert len(store) == 0

    def test_deleted_entry_not_searchable(self, ranked_store: InMemoryVectorStore) -> None:
        exact_id = ranked_store.search([1.0, 0.0, 0.0], limit=1)[0].id
        ranked_store.delete(exact_id)
        results = ranked_store.search([1.0, 0.0, 0.0], limit=3)
        assert exact_id not in {r.id for r in results}

    def test_delete_unknown_id(self, store: InMemoryVectorStore) -> None:
        assert store.delete("does-not-exist") is False


class TestConcurrentAccess:
    def test_parallel_writes_and_searches(self, store: InMemoryVectorStore) -> None:
        errors: list[Exception] = []

        def writer(offset: int) -> None:
            try:
                for i in range(50):
                    store.store(f"w{offset}-{i}", {}, None, [float(i + 1), 1.0])
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        def reader() -> None:
            try:
                for _ in range(50):
                    store.search([1.0, 1.0], limit=5)
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert errors == []
        assert len(store) == 200
