"""
mflix/repositories/comment_repository.py

Purpose: Comment management and the commenters report

- Adds comments with caller-supplied identifiers
- Lets only the owner (by email) update or delete a comment
- Ranks the users who comment the most

Ownership is a value comparison between the acting email and the stored
`email` field; the store itself knows nothing about permissions.
"""

from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError
from pymongo.read_concern import ReadConcern

from mflix.core.exceptions import InvalidArgumentError
from mflix.core.logging import LogContext
from mflix.db.mongo import MflixContext, COMMENTS_COLLECTION, USERS_COLLECTION
from mflix.models.comment import Comment, Critic
from mflix.repositories.user_repository import UserRepository
from mflix.utils.constants import (
    COMMENT_COUNT_FIELD,
    EMAIL_FIELD,
    EMPTY_COMMENT_ID_MESSAGE,
    EMPTY_COMMENT_TEXT_MESSAGE,
    NULL_COMMENT_ID_MESSAGE,
    PRIVATE_USER_FIELDS,
    UNKNOWN_AUTHOR_MESSAGE,
)
from mflix.utils.time_utils import utc_now
from mflix.utils.validation_utils import require_text, to_document_id


class CommentRepository:
    """Repository for `comments` documents."""

    def __init__(self, context: MflixContext, users: Optional[UserRepository] = None):
        self.context = context
        self.users = users
        self.logger = context.child_logger("comments")
        database = context.database
        self.collection: AsyncIOMotorCollection = database[COMMENTS_COLLECTION]
        # The report must not include writes that could still be rolled back
        self.report_collection: AsyncIOMotorCollection = database.get_collection(
            USERS_COLLECTION, read_concern=ReadConcern("majority")
        )

    async def get_comment(self, comment_id: str) -> Optional[Comment]:
        """
        Returns the comment with the given identifier, or None.
        """
        try:
            document = await self.collection.find_one({"_id": to_document_id(comment_id)})
        except PyMongoError as e:
            self.logger.error(f"Failed to read comment: {e}", exc_info=True)
            return None
        return Comment.from_document(document)

    async def add_comment(self, comment: Comment, verify_author: bool = False) -> Optional[Comment]:
        """
        Inserts a new comment.

        Args:
            comment: Comment to insert, including its identifier
            verify_author: Require the comment email to belong to a registered user

        Returns:
            The inserted comment, or None if the store rejected the write

        Raises:
            InvalidArgumentError: If the identifier or text is empty, or the
                author is unknown while verify_author is set
        """
        require_text(comment.id, EMPTY_COMMENT_ID_MESSAGE)
        require_text(comment.text, EMPTY_COMMENT_TEXT_MESSAGE)

        with LogContext(comment_id=comment.id, email=comment.email, operation="add_comment"):
            if verify_author and self.users is not None:
                if comment.email is None or await self.users.get_user(comment.email) is None:
                    raise InvalidArgumentError(
                        UNKNOWN_AUTHOR_MESSAGE, details={"email": comment.email}
                    )

            try:
                await self.collection.insert_one(comment.to_document())
            except PyMongoError as e:
                self.logger.error(f"Failed to insert comment: {e}", exc_info=True)
                return None

            self.logger.info("Comment added")
            return comment

    async def update_comment(self, comment_id: str, text: str, email: Optional[str]) -> bool:
        """
        Replaces the text of a comment owned by `email` and stamps its date.

        Returns:
            True if the owner's comment was updated; False if the comment
            does not exist or belongs to someone else

        Raises:
            InvalidArgumentError: If text is empty
        """
        require_text(text, EMPTY_COMMENT_TEXT_MESSAGE)

        with LogContext(comment_id=comment_id, email=email, operation="update_comment"):
            document_id = to_document_id(comment_id)
            try:
                existing = await self.collection.find_one({"_id": document_id})
            except PyMongoError as e:
                self.logger.error(f"Failed to look up comment: {e}", exc_info=True)
                return False

            if email is None or existing is None or existing.get(EMAIL_FIELD) != email:
                self.logger.warning("Comment update refused")
                return False

            try:
                result = await self.collection.update_one(
                    {"_id": document_id, EMAIL_FIELD: email},
                    {"$set": {"text": text, "date": utc_now()}},
                )
            except PyMongoError as e:
                self.logger.error(f"Failed to update comment: {e}", exc_info=True)
                return False

            updated = result.acknowledged and result.matched_count > 0
            if updated:
                self.logger.info("Comment updated")
            return updated

    async def delete_comment(self, comment_id: Optional[str], email: Optional[str]) -> bool:
        """
        Deletes the comment matching both identifier and owner email.

        Returns:
            True if a comment was removed

        Raises:
            InvalidArgumentError: If comment_id is None
        """
        if comment_id is None:
            raise InvalidArgumentError(NULL_COMMENT_ID_MESSAGE)

        with LogContext(comment_id=comment_id, email=email, operation="delete_comment"):
            # a None filter value would also match comments without an owner
            if email is None:
                self.logger.warning("Comment delete refused")
                return False

            try:
                result = await self.collection.delete_one(
                    {"_id": to_document_id(comment_id), EMAIL_FIELD: email}
                )
            except PyMongoError as e:
                self.logger.error(f"Failed to delete comment: {e}", exc_info=True)
                return False

            deleted = result.deleted_count > 0
            if deleted:
                self.logger.info("Comment deleted")
            else:
                self.logger.warning("No comment of this user with that id")
            return deleted

    def most_active_commenters_pipeline(self) -> List[Dict[str, Any]]:
        """
        Aggregation run on `users`: joins each user with the comments
        carrying its email, keeps the top commenters and hides private fields.
        """
        return [
            {
                "$lookup": {
                    "from": COMMENTS_COLLECTION,
                    "localField": EMAIL_FIELD,
                    "foreignField": EMAIL_FIELD,
                    "as": "comments",
                }
            },
            {"$addFields": {COMMENT_COUNT_FIELD: {"$size": "$comments"}}},
            {"$sort": {COMMENT_COUNT_FIELD: -1}},
            {"$limit": self.context.settings.CRITICS_LIMIT},
            {"$project": {field: 0 for field in (*PRIVATE_USER_FIELDS, "comments")}},
            # Users without comments produce no row
            {"$match": {COMMENT_COUNT_FIELD: {"$gt": 0}}},
        ]

    async def most_active_commenters(self) -> List[Critic]:
        """
        Ranks users by number of comments, highest first.

        Returns:
            At most CRITICS_LIMIT critics, each with at least one comment;
            an empty list if the store could not run the report
        """
        critics = []
        try:
            async for document in self.report_collection.aggregate(self.most_active_commenters_pipeline()):
                critics.append(
                    Critic(email=document[EMAIL_FIELD], comment_count=document[COMMENT_COUNT_FIELD])
                )
        except PyMongoError as e:
            self.logger.error(f"Most active commenters report failed: {e}", exc_info=True)
            return []

        self.logger.debug(f"Most active commenters report: {len(critics)} critic(s)")
        return critics
