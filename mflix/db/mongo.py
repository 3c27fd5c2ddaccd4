"""
mflix/db/mongo.py

Purpose: MongoDB connection setup

- Builds the Motor client from settings (pool size, timeouts, durable writes)
- Verifies connectivity with bounded retries at startup
- Bundles database handle, settings and logger into an explicit context
  that repositories receive in their constructors (no module-level client)
"""

from dataclasses import dataclass, field
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
from typing import Optional
import asyncio
import logging
from mflix.core.config import Settings, settings as default_settings
from mflix.core.logging import get_logger

logger = get_logger(__name__)

USERS_COLLECTION = "users"
SESSIONS_COLLECTION = "sessions"
COMMENTS_COLLECTION = "comments"


@dataclass
class MflixContext:
    """
    Everything a repository needs to talk to the store.

    database: Motor database handle (or any object with the same API)
    settings: Settings used for durability and report configuration
    logger:   Parent logger; repositories derive child loggers from it
    """
    database: AsyncIOMotorDatabase
    settings: Settings = field(default_factory=lambda: default_settings)
    logger: logging.Logger = field(default_factory=lambda: get_logger("repositories"))

    def child_logger(self, name: str) -> logging.Logger:
        return self.logger.getChild(name)


async def connect_to_mongo(config: Optional[Settings] = None) -> AsyncIOMotorClient:
    """
    Creates a MongoDB client and verifies the connection with retry logic.
    Called during application startup; the caller owns the returned client.

    Raises:
        ConnectionError: If the server cannot be reached after all retries
    """
    config = config or default_settings

    max_retries = 3
    retry_delay = 2

    for attempt in range(1, max_retries + 1):
        client = None
        try:
            logger.info(
                f"Attempting to connect to MongoDB (attempt {attempt}/{max_retries})"
            )

            client = AsyncIOMotorClient(
                config.MONGODB_URL,
                maxPoolSize=config.MONGODB_MAX_POOL_SIZE,
                serverSelectionTimeoutMS=config.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
                connectTimeoutMS=config.MONGODB_CONNECT_TIMEOUT_MS,
                w="majority",
                wTimeoutMS=config.WRITE_CONCERN_TIMEOUT_MS,
                appname="mflix",
            )

            # Verify connection
            await client.admin.command("ping")

            logger.info(
                f"✅ Successfully connected to MongoDB: {config.MONGODB_DB_NAME}"
            )
            return client

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            if client is not None:
                client.close()
            logger.error(
                f"Failed to connect to MongoDB (attempt {attempt}/{max_retries}): {e}"
            )

            if attempt < max_retries:
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
                retry_delay *= 2  # Exponential backoff
            else:
                logger.critical("Failed to connect to MongoDB after all retries")
                raise ConnectionError("Could not establish MongoDB connection") from e


def build_context(
    client: AsyncIOMotorClient,
    config: Optional[Settings] = None,
    logger_: Optional[logging.Logger] = None,
) -> MflixContext:
    """
    Returns the repository context for the configured database.
    """
    config = config or default_settings
    return MflixContext(
        database=client[config.MONGODB_DB_NAME],
        settings=config,
        logger=logger_ or get_logger("repositories"),
    )


async def close_mongo_connection(client: Optional[AsyncIOMotorClient]):
    """
    Closes the MongoDB connection.
    Called during application shutdown.
    """
    if client:
        logger.info("Closing MongoDB connection")
        client.close()
        logger.info("MongoDB connection closed")


async def check_database_health(client: Optional[AsyncIOMotorClient]) -> bool:
    """
    Checks if the database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    if client is None:
        logger.error("MongoDB client not initialized")
        return False

    try:
        await client.admin.command("ping")
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        return False
