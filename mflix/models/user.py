"""
mflix/models/user.py

Purpose: User and Session document models

- User accounts keyed by email
- Free-form string preferences, replaced wholesale on update
- Login sessions keyed by user_id (the user's email)
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any


class User(BaseModel):
    """A registered account in the `users` collection."""

    model_config = ConfigDict(extra="ignore")

    email: str
    name: Optional[str] = None
    password: Optional[str] = None
    preferences: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]) -> Optional["User"]:
        if document is None:
            return None
        data = dict(document)
        data["preferences"] = {
            key: str(value) for key, value in (data.get("preferences") or {}).items()
        }
        return cls.model_validate(data)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()


class Session(BaseModel):
    """
    An active login in the `sessions` collection.

    user_id references User.email by value only; nothing in the store
    enforces that the user exists.
    """

    model_config = ConfigDict(extra="ignore")

    user_id: str
    jwt: str

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]) -> Optional["Session"]:
        if document is None:
            return None
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()
