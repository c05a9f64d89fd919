from datetime import datetime, timezone

from bson.objectid import ObjectId
import pytest

from app.models.todo import Todo
from app.services.todos import TodoStore
from app.utils.errors import NotFoundError, ValidationError


FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
FIXED_NOW_MS = int(FIXED_NOW.timestamp() * 1000)


@pytest.fixture
def todos():
    return TodoStore(clock=lambda: FIXED_NOW)


class TestCreate:
    def test_create_defaults(self, todos):
        owner = ObjectId()
        todo = todos.create(owner, "  Walk the dog ")
        assert todo.text == "Walk the dog"
        assert todo.completed is False
        assert todo.completed_at is None
        assert todo.creator == owner

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_text_is_rejected(self, todos, text):
        with pytest.raises(ValidationError):
            todos.create(ObjectId(), text)
        assert Todo.objects.count() == 0


class TestOwnership:
    def test_list_for_returns_only_own_todos(self, seed, todos):
        own = todos.list_for(seed.first.id)
        assert [t.text for t in own] == ["First test todo"]
        assert todos.list_for(ObjectId()) == []

    def test_get_owned(self, seed, todos):
        todo = todos.get_owned(str(seed.todos[0].id), seed.first.id)
        assert todo.text == "First test todo"

    def test_foreign_todo_looks_absent(self, seed, todos):
        foreign = str(seed.todos[1].id)
        absent = str(ObjectId())
        with pytest.raises(NotFoundError) as foreign_exc:
            todos.get_owned(foreign, seed.first.id)
        with pytest.raises(NotFoundError) as absent_exc:
            todos.get_owned(absent, seed.first.id)
        assert str(foreign_exc.value) == str(absent_exc.value)

    def test_malformed_id_is_not_found(self, seed, todos):
        with pytest.raises(NotFoundError):
            todos.get_owned("123abc", seed.first.id)

    def test_foreign_update_and_delete_leave_todo_untouched(self, seed, todos):
        foreign = str(seed.todos[1].id)
        with pytest.raises(NotFoundError):
            todos.update_owned(foreign, seed.first.id, text="hijacked")
        with pytest.raises(NotFoundError):
            todos.delete_owned(foreign, seed.first.id)

        stored = Todo.objects(id=foreign).first()
        assert stored.text == "Second test todo"
        assert stored.completed is True


class TestUpdate:
    def test_completing_stamps_completed_at(self, seed, todos):
        todo = todos.update_owned(str(seed.todos[0].id), seed.first.id, text="Done it", completed=True)
        assert todo.text == "Done it"
        assert todo.completed is True
        assert todo.completed_at == FIXED_NOW_MS

    def test_not_completed_clears_completed_at(self, seed, todos):
        todo = todos.update_owned(str(seed.todos[1].id), seed.second.id, completed=False)
        assert todo.completed is False
        assert todo.completed_at is None
        assert todo.text == "Second test todo"

    def test_omitting_completed_resets_completion(self, seed, todos):
        todo = todos.update_owned(str(seed.todos[1].id), seed.second.id, text="Renamed")
        assert todo.text == "Renamed"
        assert todo.completed is False
        assert todo.completed_at is None

    @pytest.mark.parametrize("completed", ["true", 1, None])
    def test_only_literal_true_completes(self, seed, todos, completed):
        todo = todos.update_owned(str(seed.todos[0].id), seed.first.id, completed=completed)
        assert todo.completed is False
        assert todo.completed_at is None

    def test_blank_text_to_missing_or_foreign_todo_is_not_found(self, seed, todos):
        for todo_id in ["123abc", str(ObjectId()), str(seed.todos[1].id)]:
            with pytest.raises(NotFoundError):
                todos.update_owned(todo_id, seed.first.id, text="")

    def test_blank_text_update_is_rejected(self, seed, todos):
        with pytest.raises(ValidationError):
            todos.update_owned(str(seed.todos[0].id), seed.first.id, text="  ")

    def test_update_is_persisted(self, seed, todos):
        todos.update_owned(str(seed.todos[0].id), seed.first.id, completed=True)
        stored = Todo.objects(id=seed.todos[0].id).first()
        assert stored.completed is True
        assert stored.completed_at == FIXED_NOW_MS


class TestDelete:
    def test_delete_returns_removed_todo(self, seed, todos):
        todo = todos.delete_owned(str(seed.todos[0].id), seed.first.id)
        assert todo.id == seed.todos[0].id
        assert Todo.objects(id=seed.todos[0].id).first() is None

    def test_delete_absent_is_not_found(self, seed, todos):
        with pytest.raises(NotFoundError):
            todos.delete_owned(str(ObjectId()), seed.first.id)


class TestOutput:
    def test_output_uses_camel_case_completed_at(self, seed):
        data = seed.todos[1].to_output()
        assert data["completedAt"] == 333
        assert "completed_at" not in data
        assert data["id"] == str(seed.todos[1].id)
        assert data["creator"] == str(seed.second.id)
