from mongoengine import BooleanField, LongField, ObjectIdField, StringField

from app.models.base import BaseDocument


class Todo(BaseDocument):
    """Todo document.

    Fields:
    - text (str): What to do, never blank
    - completed (bool)
    - completed_at (int|None): Epoch milliseconds, set only while completed
    - creator (ObjectId): Owning user's id
    """
    text = StringField(required=True, null=False, min_length=1)
    completed = BooleanField(required=True, null=False, default=False)
    completed_at = LongField(required=False, null=True, default=None)
    creator = ObjectIdField(required=True, null=False)

    meta = {
        "collection": "todos",
        "indexes": [
            {"fields": ["creator"]},
        ],
    }

    def to_output(self, fields=None, exclude=None):
        data = super().to_output(fields=fields, exclude=exclude)
        # Clients read the camelCase name
        if "completed_at" in data:
            data["completedAt"] = data.pop("completed_at")
        return data
