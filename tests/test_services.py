from datetime import datetime

import pytest

from todostore.models import Todo
from todostore.repositories import InMemoryRepository, Repository
from todostore.services import TodoStore

FIXED_NOW = datetime(2025, 1, 25, 10, 15, 30)


class RecordingRepository(Repository):
    """Repository double that records calls and returns canned results."""

    def __init__(self, exists=False, found=None, fail_with=None):
        self.calls = []
        self._exists = exists
        self._found = found
        self._fail_with = fail_with

    def _record(self, *call):
        self.calls.append(call)
        if self._fail_with is not None:
            raise self._fail_with

    def find_all(self):
        self._record("find_all")
        return [] if self._found is None else [self._found]

    def find_by_id(self, todo_id):
        self._record("find_by_id", todo_id)
        return self._found

    def save(self, todo):
        self._record("save", todo)
        return todo.model_copy(update={"id": 99})

    def delete_by_id(self, todo_id):
        self._record("delete_by_id", todo_id)

    def exists_by_id(self, todo_id):
        self._record("exists_by_id", todo_id)
        return self._exists


@pytest.fixture
def store():
    return TodoStore(InMemoryRepository())


class TestCreatedAtDefault:
    def test_save_sets_created_at_when_missing(self, store):
        todo = Todo(title="buy milk")
        before = datetime.now()
        saved = store.save(todo)
        after = datetime.now()

        assert saved.created_at is not None
        assert before <= saved.created_at <= after
        assert saved.title == "buy milk"
        assert saved.id is not None

    def test_save_mutates_caller_record(self):
        store = TodoStore(InMemoryRepository(), clock=lambda: FIXED_NOW)
        todo = Todo(title="buy milk")
        store.save(todo)
        assert todo.created_at == FIXED_NOW

    def test_save_keeps_existing_created_at(self):
        original = datetime(2020, 5, 1, 8, 0, 0)
        store = TodoStore(InMemoryRepository(), clock=lambda: FIXED_NOW)
        todo = Todo(title="old task", created_at=original)
        saved = store.save(todo)
        assert saved.created_at == original
        assert todo.created_at == original

    def test_resave_does_not_overwrite_timestamp(self):
        ticks = iter([datetime(2025, 1, 1), datetime(2025, 6, 1)])
        store = TodoStore(InMemoryRepository(), clock=lambda: next(ticks))
        first = store.save(Todo(title="once"))
        first.title = "renamed"
        second = store.save(first)
        assert second.id == first.id
        assert second.created_at == datetime(2025, 1, 1)
        assert second.title == "renamed"

    def test_other_fields_pass_through_unvalidated(self):
        store = TodoStore(InMemoryRepository(), clock=lambda: FIXED_NOW)
        saved = store.save(Todo(title="", description=None, completed=True))
        assert saved.title == ""
        assert saved.description is None
        assert saved.completed is True


class TestDelegation:
    def test_find_all_returns_repository_result(self):
        found = Todo(id=1, title="a", created_at=FIXED_NOW)
        repo = RecordingRepository(found=found)
        assert TodoStore(repo).find_all() == [found]
        assert repo.calls == [("find_all",)]

    def test_find_by_id_returns_none_when_absent(self):
        repo = RecordingRepository()
        assert TodoStore(repo).find_by_id(7) is None
        assert repo.calls == [("find_by_id", 7)]

    def test_save_returns_persisted_representation(self):
        repo = RecordingRepository()
        saved = TodoStore(repo, clock=lambda: FIXED_NOW).save(Todo(title="x"))
        assert saved.id == 99
        assert saved.created_at == FIXED_NOW
        assert repo.calls[0][0] == "save"

    def test_delete_by_id_does_not_check_existence(self):
        repo = RecordingRepository()
        assert TodoStore(repo).delete_by_id(3) is None
        assert repo.calls == [("delete_by_id", 3)]

    def test_exists_by_id_delegates(self):
        repo = RecordingRepository(exists=True)
        assert TodoStore(repo).exists_by_id(5) is True
        assert repo.calls == [("exists_by_id", 5)]

    @pytest.mark.parametrize(
        "operation,args",
        [
            ("find_all", ()),
            ("find_by_id", (1,)),
            ("delete_by_id", (1,)),
            ("exists_by_id", (1,)),
        ],
    )
    def test_repository_errors_propagate_unchanged(self, operation, args):
        error = ConnectionError("database unreachable")
        store = TodoStore(RecordingRepository(fail_with=error))
        with pytest.raises(ConnectionError) as excinfo:
            getattr(store, operation)(*args)
        assert excinfo.value is error

    def test_save_error_propagates_after_stamping(self):
        error = RuntimeError("constraint violated")
        store = TodoStore(RecordingRepository(fail_with=error), clock=lambda: FIXED_NOW)
        todo = Todo(title="x")
        with pytest.raises(RuntimeError):
            store.save(todo)
        assert todo.created_at == FIXED_NOW


class TestStoreLifecycle:
    def test_exists_then_deleted(self, store):
        saved = store.save(Todo(title="walk dog"))
        assert store.exists_by_id(saved.id) is True
        store.delete_by_id(saved.id)
        assert store.exists_by_id(saved.id) is False
        assert store.find_by_id(saved.id) is None

    def test_find_all_returns_exactly_stored_records(self, store):
        ids = {store.save(Todo(title=f"Task {i}")).id for i in range(4)}
        assert {t.id for t in store.find_all()} == ids

        removed = ids.pop()
        store.delete_by_id(removed)
        assert {t.id for t in store.find_all()} == ids

    def test_find_by_unknown_id_is_none(self, store):
        assert store.find_by_id(424242) is None

    def test_every_saved_record_has_created_at(self, store):
        store.save(Todo(title="a"))
        store.save(Todo(title="b", created_at=datetime(2021, 1, 1)))
        assert all(t.created_at is not None for t in store.find_all())
