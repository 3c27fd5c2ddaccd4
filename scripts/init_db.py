"""
Database initialization script - indexes for accounts, sessions and comments

Run once against a deployment:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from mflix.core.config import Settings, validate_settings
from mflix.core.logging import setup_logging
from mflix.db.indexes import create_indexes
from mflix.db.mongo import (
    COMMENTS_COLLECTION,
    SESSIONS_COLLECTION,
    USERS_COLLECTION,
    close_mongo_connection,
    connect_to_mongo,
)


async def main():
    """Main initialization"""
    config = Settings()
    logger = setup_logging(config)
    validate_settings(config)

    logger.info("=" * 60)
    logger.info("  MFlix Database Setup")
    logger.info("=" * 60)

    client = await connect_to_mongo(config)
    db = client[config.MONGODB_DB_NAME]

    try:
        await create_indexes(db)

        # ==================== VERIFICATION ====================
        logger.info("🔍 Verifying indexes...")

        for collection_name in [USERS_COLLECTION, SESSIONS_COLLECTION, COMMENTS_COLLECTION]:
            collection = db[collection_name]
            indexes = await collection.index_information()
            count = await collection.count_documents({})
            logger.info(f"  {collection_name}: {count} document(s)")
            for idx_name in indexes.keys():
                if idx_name != "_id_":
                    logger.info(f"    ✅ {idx_name}")

        logger.info("✅ Database initialization complete!")

    finally:
        await close_mongo_connection(client)


if __name__ == "__main__":
    asyncio.run(main())
