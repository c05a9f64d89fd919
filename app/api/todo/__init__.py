from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.connections import AppContext, get_context
from app.services.authenticate import Session, authenticate


router = APIRouter()


class CreateTodoBody(BaseModel):
    text: str | None = None


class UpdateTodoBody(BaseModel):
    text: str | None = None
    # only a literal true completes; anything else resets
    completed: Any = None


@router.post("")
def create_todo(
    body: CreateTodoBody,
    session: Session = Depends(authenticate),
    context: AppContext = Depends(get_context),
) -> dict:
    """PROTECTED: Create a todo owned by the caller."""
    todo = context.todos.create(session.user.id, body.text)
    return todo.to_output()


@router.get("")
def list_todos(
    session: Session = Depends(authenticate),
    context: AppContext = Depends(get_context),
) -> dict:
    """PROTECTED: The caller's todos only."""
    todos = context.todos.list_for(session.user.id)
    return {"todos": [t.to_output() for t in todos]}


@router.get("/{todo_id}")
def get_todo(
    todo_id: str,
    session: Session = Depends(authenticate),
    context: AppContext = Depends(get_context),
) -> dict:
    todo = context.todos.get_owned(todo_id, session.user.id)
    return {"todo": todo.to_output()}


@router.delete("/{todo_id}")
def delete_todo(
    todo_id: str,
    session: Session = Depends(authenticate),
    context: AppContext = Depends(get_context),
) -> dict:
    todo = context.todos.delete_owned(todo_id, session.user.id)
    return {"todo": todo.to_output()}


@router.patch("/{todo_id}")
def update_todo(
    todo_id: str,
    body: UpdateTodoBody,
    session: Session = Depends(authenticate),
    context: AppContext = Depends(get_context),
) -> dict:
    """PROTECTED: Update text and completion; omitting `completed` un-completes."""
    todo = context.todos.update_owned(
        todo_id,
        session.user.id,
        text=body.text,
        completed=body.completed,
    )
    return {"todo": todo.to_output()}
