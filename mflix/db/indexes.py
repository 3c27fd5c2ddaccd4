"""
mflix/db/indexes.py

Purpose: Database index management

- Unique indexes backing the account and session uniqueness rules
- Lookup indexes for comment ownership and the commenters report
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from mflix.db.mongo import USERS_COLLECTION, SESSIONS_COLLECTION, COMMENTS_COLLECTION
from mflix.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(database: AsyncIOMotorDatabase):
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = database[USERS_COLLECTION]
        sessions = database[SESSIONS_COLLECTION]
        comments = database[COMMENTS_COLLECTION]

        logger.info("Creating database indexes...")

        # ==============================================
        # USERS COLLECTION INDEXES
        # ==============================================

        # One account per email
        await users.create_index([("email", ASCENDING)], unique=True, name="email_unique")
        logger.debug("Created unique index on users.email")

        # ==============================================
        # SESSIONS COLLECTION INDEXES
        # ==============================================

        # One active session per user
        await sessions.create_index([("user_id", ASCENDING)], unique=True, name="user_id_unique")
        logger.debug("Created unique index on sessions.user_id")

        # A token belongs to a single session
        await sessions.create_index([("jwt", ASCENDING)], unique=True, name="jwt_unique")
        logger.debug("Created unique index on sessions.jwt")

        # ==============================================
        # COMMENTS COLLECTION INDEXES
        # ==============================================

        # Ownership filters and the commenters report join on email
        await comments.create_index([("email", ASCENDING)], name="comment_email_idx")
        logger.debug("Created index on comments.email")

        await comments.create_index([("movie_id", ASCENDING)], name="comment_movie_idx")
        logger.debug("Created index on comments.movie_id")

        logger.info("✅ All database indexes created successfully")

        user_indexes = await users.index_information()
        session_indexes = await sessions.index_information()
        comment_indexes = await comments.index_information()

        logger.info(
            f"Index summary: Users={len(user_indexes)}, "
            f"Sessions={len(session_indexes)}, "
            f"Comments={len(comment_indexes)}"
        )

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


async def drop_all_indexes(database: AsyncIOMotorDatabase):
    """
    Drops all custom indexes (keeps _id index).
    Use with caution! Only for maintenance/migration.
    """
    try:
        logger.warning("Dropping all database indexes...")

        await database[USERS_COLLECTION].drop_indexes()
        await database[SESSIONS_COLLECTION].drop_indexes()
        await database[COMMENTS_COLLECTION].drop_indexes()

        logger.info("✅ All indexes dropped successfully")

    except Exception as e:
        logger.error(f"Failed to drop indexes: {str(e)}", exc_info=True)
        raise
