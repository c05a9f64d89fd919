from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from bson.objectid import ObjectId

from app.models.todo import Todo
from app.utils.errors import NotFoundError, ValidationError
from app.utils.logging import get_logger


logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clean_text(text: str | None) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("text must be a non-empty string")
    return text.strip()


class TodoStore:
    """Todos scoped to their creator.

    Lookups by id always include the owner, so a todo of another user is
    reported exactly like one that does not exist.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self.clock = clock

    def _owned(self, todo_id: str, owner_id: ObjectId):
        # Malformed ids are just another kind of "not found"
        if not ObjectId.is_valid(todo_id):
            raise NotFoundError("Todo not found")
        return Todo.objects(id=todo_id, creator=owner_id)

    def create(self, owner_id: ObjectId, text: str | None) -> Todo:
        todo = Todo(text=_clean_text(text), creator=owner_id)
        todo.save()
        return todo

    def list_for(self, owner_id: ObjectId) -> list[Todo]:
        return list(Todo.objects(creator=owner_id).order_by("created_at"))

    def get_owned(self, todo_id: str, owner_id: ObjectId) -> Todo:
        todo: Todo | None = self._owned(todo_id, owner_id).first()
        if not todo:
            raise NotFoundError("Todo not found")
        return todo

    def update_owned(
        self,
        todo_id: str,
        owner_id: ObjectId,
        text: str | None = None,
        completed: bool | None = None,
    ) -> Todo:
        """Apply a partial text update and the completion rule.

        Only an explicit `completed=True` keeps the todo completed and stamps
        `completed_at`; anything else resets it to not completed.
        """
        owned = self._owned(todo_id, owner_id)
        if not owned.first():
            raise NotFoundError("Todo not found")

        now = self.clock()
        updates = {"set__updated_at": now}
        if text is not None:
            updates["set__text"] = _clean_text(text)
        if completed is True:
            updates["set__completed"] = True
            updates["set__completed_at"] = int(now.timestamp() * 1000)
        else:
            updates["set__completed"] = False
            updates["set__completed_at"] = None

        todo: Todo | None = owned.modify(new=True, **updates)
        if not todo:
            raise NotFoundError("Todo not found")
        return todo

    def delete_owned(self, todo_id: str, owner_id: ObjectId) -> Todo:
        todo = self.get_owned(todo_id, owner_id)
        todo.delete()
        logger.info("Deleted todo %s", todo.id)
        return todo
