from dataclasses import dataclass

import mongomock
import pytest
from fastapi.testclient import TestClient
from mongoengine import connect, disconnect

from main import create_app
from app.models.todo import Todo
from app.models.user import User
from app.utils.config import Settings


# Low bcrypt cost keeps the suite fast; production default is 10
TEST_SETTINGS = Settings(bcrypt_rounds=4, jwt_secret_key="test-secret", debug=False, log_level="WARNING")


@dataclass
class Seed:
    first: User
    first_password: str
    first_token: str
    second: User
    second_password: str
    todos: list


@pytest.fixture(autouse=True)
def mongo():
    connect(
        db="todo_api_test",
        alias="default",
        host="mongodb://localhost",
        mongo_client_class=mongomock.MongoClient,
        tz_aware=True,
    )
    yield
    User.drop_collection()
    Todo.drop_collection()
    disconnect(alias="default")


@pytest.fixture
def app():
    return create_app(TEST_SETTINGS)


@pytest.fixture
def context(app):
    return app.state.context


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def seed(context) -> Seed:
    """Two users, the first logged in once, and one todo each.

    The second user's todo is already completed.
    """
    first = context.users.register_user("andrew@example.com", "userOnePass")
    first_token = context.users.issue_session_token(first)
    second = context.users.register_user("jen@example.com", "userTwoPass")

    first_todo = context.todos.create(first.id, "First test todo")
    second_todo = Todo(text="Second test todo", completed=True, completed_at=333, creator=second.id)
    second_todo.save()

    return Seed(
        first=first,
        first_password="userOnePass",
        first_token=first_token,
        second=second,
        second_password="userTwoPass",
        todos=[first_todo, second_todo],
    )
