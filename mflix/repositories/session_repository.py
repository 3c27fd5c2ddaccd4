"""
mflix/repositories/session_repository.py

Purpose: Login session management

- One session per user: logging in again replaces the token in place
- A token can never be attached to a second session
- Logout removes the user's session

Creating a session is check-then-act across several store calls with no
transaction. Two concurrent logins for the same user can both take the
insert branch; the unique indexes from mflix.db.indexes turn the loser
into a DuplicateKeyError, which is reported as a failed login.
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError, PyMongoError

from mflix.core.logging import LogContext
from mflix.db.mongo import MflixContext, SESSIONS_COLLECTION
from mflix.models.user import Session
from mflix.utils.constants import JWT_FIELD, USER_ID_FIELD


class SessionRepository:
    """Repository for `sessions` documents."""

    def __init__(self, context: MflixContext):
        self.context = context
        self.logger = context.child_logger("sessions")
        self.collection: AsyncIOMotorCollection = context.database[SESSIONS_COLLECTION]

    async def create_user_session(self, user_id: str, jwt: str) -> bool:
        """
        Stores `jwt` as the active session of `user_id`.

        Args:
            user_id: User identifier (the user's email)
            jwt: Opaque session token

        Returns:
            True if the session was created or refreshed,
            False if the token already belongs to a session
        """
        with LogContext(user_id=user_id, operation="create_user_session"):
            try:
                token_owner = await self.collection.find_one({JWT_FIELD: jwt})
                existing = None
                if token_owner is None:
                    existing = await self.collection.find_one({USER_ID_FIELD: user_id})
            except PyMongoError as e:
                self.logger.error(f"Failed to look up sessions: {e}", exc_info=True)
                return False

            if token_owner is not None:
                self.logger.warning("Session token already in use")
                return False

            try:
                if existing is not None:
                    await self.collection.update_one(
                        {USER_ID_FIELD: user_id},
                        {"$set": {JWT_FIELD: jwt}},
                    )
                    self.logger.info("Session token refreshed")
                else:
                    await self.collection.insert_one(
                        Session(user_id=user_id, jwt=jwt).to_document()
                    )
                    self.logger.info("Session created")
            except MongoDuplicateKeyError as e:
                self.logger.warning(f"Concurrent session write rejected: {e}")
                return False
            except PyMongoError as e:
                self.logger.error(f"Failed to store session: {e}", exc_info=True)
                return False

            return True

    async def get_user_session(self, user_id: str) -> Optional[Session]:
        """
        Returns the session of the given user, or None.
        """
        try:
            document = await self.collection.find_one({USER_ID_FIELD: user_id})
        except PyMongoError as e:
            self.logger.error(f"Failed to read session: {e}", exc_info=True)
            return None
        return Session.from_document(document)

    async def delete_user_sessions(self, user_id: str) -> bool:
        """
        Removes the sessions of the given user.

        Returns:
            True if at least one session was removed
        """
        with LogContext(user_id=user_id, operation="delete_user_sessions"):
            try:
                result = await self.collection.delete_many({USER_ID_FIELD: user_id})
            except PyMongoError as e:
                self.logger.error(f"Failed to delete sessions: {e}", exc_info=True)
                return False

            deleted = result.deleted_count > 0
            if deleted:
                self.logger.info(f"Removed {result.deleted_count} session(s)")
            else:
                self.logger.debug("No session to remove")
            return deleted
