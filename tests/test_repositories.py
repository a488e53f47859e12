import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from todo_api.repositories import TodoNotFoundError, TodoStore


class TestTodoStore:
    def test_starts_empty(self):
        store = TodoStore()
        assert store.list() == []
        assert store.count() == 0

    def test_add_returns_unique_ids_in_order(self):
        store = TodoStore()
        ids = [store.add(f"msg {i}") for i in range(10)]
        assert len(set(ids)) == 10
        todos = store.list()
        assert [t["id"] for t in todos] == ids
        assert [t["message"] for t in todos] == [f"msg {i}" for i in range(10)]
        assert all(t["complete"] is False for t in todos)

    def test_initialize_does_not_reset_populated_store(self):
        store = TodoStore()
        store.initialize()
        tid = store.add("keep")
        store.initialize()
        store.initialize()
        assert [t["id"] for t in store.list()] == [tid]

    def test_list_returns_copies(self):
        store = TodoStore()
        tid = store.add("original")
        snapshot = store.list()
        snapshot[0]["message"] = "mutated"
        snapshot[0]["complete"] = True
        snapshot.clear()
        assert store.list() == [{"id": tid, "message": "original", "complete": False}]

    def test_delete_removes_exactly_one(self):
        store = TodoStore()
        a, b, c = store.add("a"), store.add("b"), store.add("c")
        store.delete(b)
        assert [t["id"] for t in store.list()] == [a, c]

    def test_delete_unknown_raises_and_leaves_state(self):
        store = TodoStore()
        store.add("a")
        before = store.list()
        with pytest.raises(TodoNotFoundError) as excinfo:
            store.delete("missing")
        assert excinfo.value.todo_id == "missing"
        assert "missing" in str(excinfo.value)
        assert store.list() == before

    def test_complete_sets_flag_only(self):
        store = TodoStore()
        tid = store.add("task")
        store.complete(tid)
        store.complete(tid)
        assert store.list() == [{"id": tid, "message": "task", "complete": True}]

    def test_complete_unknown_raises_and_leaves_state(self):
        store = TodoStore()
        store.add("a")
        before = store.list()
        with pytest.raises(TodoNotFoundError):
            store.complete("missing")
        assert store.list() == before

    def test_not_found_is_lookup_error(self):
        assert issubclass(TodoNotFoundError, LookupError)


class TestTodoStoreConcurrency:
    def test_concurrent_adds(self):
        store = TodoStore()
        messages = [f"message {i}" for i in range(100)]
        with ThreadPoolExecutor(max_workers=16) as pool:
            ids = list(pool.map(store.add, messages))

        assert len(set(ids)) == 100
        todos = store.list()
        assert len(todos) == 100
        assert {t["id"] for t in todos} == set(ids)
        assert sorted(t["message"] for t in todos) == sorted(messages)

    def test_concurrent_initialize(self):
        store = TodoStore()
        barrier = threading.Barrier(8)

        def init_then_add(i):
            barrier.wait()
            store.initialize()
            return store.add(str(i))

        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(init_then_add, range(8)))

        assert {t["id"] for t in store.list()} == set(ids)

    def test_concurrent_deletes_and_completes(self):
        store = TodoStore()
        ids = [store.add(str(i)) for i in range(100)]
        to_delete, to_complete = ids[::2], ids[1::2]

        def mutate(pair):
            delete_id, complete_id = pair
            store.delete(delete_id)
            store.complete(complete_id)

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(mutate, zip(to_delete, to_complete)))

        todos = store.list()
        assert [t["id"] for t in todos] == to_complete
        assert all(t["complete"] for t in todos)

    def test_double_delete_race_has_single_winner(self):
        store = TodoStore()
        tid = store.add("contested")
        barrier = threading.Barrier(8)

        def try_delete(_):
            barrier.wait()
            try:
                store.delete(tid)
            except TodoNotFoundError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(try_delete, range(8)))

        assert results.count(True) == 1
        assert store.list() == []

    def test_list_snapshots_during_mutations(self):
        store = TodoStore()
        seed = [store.add(f"seed {i}") for i in range(50)]
        to_delete, to_complete = seed[::2], seed[1::2]
        added_count = 50
        stop = threading.Event()
        snapshots = []

        def reader():
            while not stop.is_set():
                snapshots.append(store.list())

        def writer(i):
            store.add(f"new {i}")
            if i < len(to_delete):
                store.delete(to_delete[i])
            store.complete(to_complete[i % len(to_complete)])

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(writer, range(added_count)))
        stop.set()
        for t in readers:
            t.join()
        snapshots.append(store.list())

        final_ids = [t["id"] for t in store.list()]
        assert len(final_ids) == len(seed) - len(to_delete) + added_count
        assert all(t["complete"] for t in store.list() if t["id"] in to_complete)
        # Every id ever present, in the one order the store can hold them
        order = {tid: i for i, tid in enumerate(seed + [t for t in final_ids if t not in seed])}
        for snap in snapshots:
            ids = [t["id"] for t in snap]
            assert len(ids) == len(set(ids))
            assert len(seed) - len(to_delete) <= len(ids) <= len(seed) + added_count
            assert ids == sorted(ids, key=order.__getitem__)
            for t in snap:
                assert isinstance(t["complete"], bool)
                if t["id"] in to_delete:
                    assert t["complete"] is False
