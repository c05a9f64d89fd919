from mongoengine import EmailField, EmbeddedDocumentField, ListField, StringField

from app.utils.base import AccessLevel
from app.models.base import BaseDocument, BaseEmbeddedDocument


class SessionToken(BaseEmbeddedDocument):
    """Embedded: one active session of a user.

    Fields:
    - access_level (str): what the token grants, always "auth" for now
    - token (str): the signed token handed to the client
    """
    access_level = StringField(required=True, null=False, choices=AccessLevel.choices())
    token = StringField(required=True, null=False)


class User(BaseDocument):
    """User document.

    Fields:
    - email (str, unique): Login identifier
    - password (str, hashed): Bcrypt digest, never plaintext once saved
    - tokens (list[SessionToken]): Active sessions, removed one by one on logout

    Never hand this document to a client; use `app.services.users.to_public_view`.
    """
    email = EmailField(required=True, null=False, unique=True)
    password = StringField(required=True, null=False)
    tokens = ListField(EmbeddedDocumentField(SessionToken), required=False, default=list, null=False)

    meta = {
        "collection": "users",
        "indexes": [
            {"fields": ["email"], "unique": True},
        ],
    }
