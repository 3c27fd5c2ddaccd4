"""
mflix/models/comment.py

Purpose: Comment document model and the derived Critic report row

- Comment id is supplied by the caller and stored as the document _id
- Owner is referenced by email value
- Critic rows exist only as output of the commenters report
"""

from bson import ObjectId
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any

from mflix.utils.validation_utils import to_document_id


class Comment(BaseModel):
    """A user-authored comment in the `comments` collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    email: Optional[str] = None
    text: Optional[str] = None
    date: Optional[datetime] = None
    name: Optional[str] = None
    movie_id: Optional[str] = None

    @field_validator("id", "movie_id", mode="before")
    @classmethod
    def stringify_object_id(cls, value):
        if isinstance(value, ObjectId):
            return str(value)
        return value

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]) -> Optional["Comment"]:
        if document is None:
            return None
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump(exclude={"id"}, exclude_none=True)
        document["_id"] = to_document_id(self.id)
        if self.movie_id is not None:
            document["movie_id"] = to_document_id(self.movie_id)
        return document


class Critic(BaseModel):
    """One row of the most active commenters report."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    comment_count: int = Field(alias="commentCount", ge=1)
