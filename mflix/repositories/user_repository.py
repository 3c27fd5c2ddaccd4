"""
mflix/repositories/user_repository.py

Purpose: Account management

- Registers users (one account per email, majority-acknowledged insert)
- Looks up users by email
- Replaces user preferences wholesale
- Deletes users and cascades to their sessions
"""

from typing import Optional, Dict, Any
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError
from pymongo.write_concern import WriteConcern

from mflix.core.exceptions import DuplicateKeyError
from mflix.core.logging import LogContext
from mflix.db.mongo import MflixContext, USERS_COLLECTION, SESSIONS_COLLECTION
from mflix.models.user import User
from mflix.utils.constants import (
    DUPLICATE_USER_MESSAGE,
    EMAIL_FIELD,
    PREFERENCES_FIELD,
    USER_ID_FIELD,
)
from mflix.utils.validation_utils import coerce_preferences


class UserRepository:
    """Repository for `users` documents and the session cascade on delete."""

    def __init__(self, context: MflixContext):
        self.context = context
        self.logger = context.child_logger("users")
        database = context.database
        self.collection: AsyncIOMotorCollection = database[USERS_COLLECTION]
        # Account creation has to survive a primary failover
        self.durable_collection: AsyncIOMotorCollection = database.get_collection(
            USERS_COLLECTION,
            write_concern=WriteConcern(
                "majority", wtimeout=context.settings.WRITE_CONCERN_TIMEOUT_MS
            ),
        )
        self.sessions: AsyncIOMotorCollection = database[SESSIONS_COLLECTION]

    async def add_user(self, user: User) -> bool:
        """
        Inserts a new user.

        Args:
            user: User to register

        Returns:
            True if inserted, False if the store rejected the write

        Raises:
            DuplicateKeyError: If a user with the same email already exists
        """
        with LogContext(email=user.email, operation="add_user"):
            try:
                existing = await self.collection.find_one({EMAIL_FIELD: user.email})
            except PyMongoError as e:
                self.logger.error(f"Failed to look up user: {e}", exc_info=True)
                return False

            if existing is not None:
                self.logger.warning("Refusing to register existing email")
                raise DuplicateKeyError(DUPLICATE_USER_MESSAGE, details={"email": user.email})

            try:
                await self.durable_collection.insert_one(user.to_document())
            except PyMongoError as e:
                self.logger.error(f"Failed to insert user: {e}", exc_info=True)
                return False

            self.logger.info("User registered")
            return True

    async def get_user(self, email: str) -> Optional[User]:
        """
        Returns the user with the given email, or None.
        """
        try:
            document = await self.collection.find_one({EMAIL_FIELD: email})
        except PyMongoError as e:
            self.logger.error(f"Failed to read user: {e}", exc_info=True)
            return None
        return User.from_document(document)

    async def update_user_preferences(self, email: str, preferences: Optional[Dict[str, Any]]) -> bool:
        """
        Replaces the user's preferences with the given map.

        Every value is stored as its string representation. The existing
        preferences are overwritten, not merged.

        Args:
            email: Email of the user to update
            preferences: New preferences, must not be None or empty

        Returns:
            True if the write went through

        Raises:
            InvalidArgumentError: If preferences is None or empty
        """
        preferences_document = coerce_preferences(preferences)

        with LogContext(email=email, operation="update_user_preferences"):
            try:
                await self.collection.update_one(
                    {EMAIL_FIELD: email},
                    {"$set": {PREFERENCES_FIELD: preferences_document}},
                    upsert=True,
                )
            except PyMongoError as e:
                self.logger.error(f"Failed to update preferences: {e}", exc_info=True)
                return False

            self.logger.info(
                "Preferences updated",
                extra={"keys": sorted(preferences_document)}
            )
            return True

    async def delete_user(self, email: str) -> bool:
        """
        Removes the user and all of its sessions.

        Returns:
            True only if a user document was removed
        """
        with LogContext(email=email, operation="delete_user"):
            try:
                result = await self.collection.delete_one({EMAIL_FIELD: email})
            except PyMongoError as e:
                self.logger.error(f"Failed to delete user: {e}", exc_info=True)
                return False

            try:
                sessions_result = await self.sessions.delete_many({USER_ID_FIELD: email})
                self.logger.debug(
                    f"Removed {sessions_result.deleted_count} session(s) of deleted user"
                )
            except PyMongoError as e:
                # Orphaned sessions are harmless: they reference the email by value
                self.logger.warning(f"Session cascade failed: {e}")

            deleted = result.deleted_count > 0
            if deleted:
                self.logger.info("User deleted")
            return deleted
