import logging

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from config import settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages MongoDB database connections using async PyMongo."""

    def __init__(self):
        self.client: AsyncMongoClient | None = None
        self.db: AsyncDatabase | None = None

    async def connect(self):
        """Connect to MongoDB and make sure the indexes exist."""
        try:
            logger.info(f"Connecting to MongoDB at {settings.mongodb_url}")
            self.client = AsyncMongoClient(settings.mongodb_url, tz_aware=True)
            self.db = self.client[settings.mongodb_database]

            # Test the connection
            await self.client.admin.command("ping")
            logger.info("Successfully connected to MongoDB")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

        await self.ensure_indexes()

    async def ensure_indexes(self):
        """Create the indexes the repositories rely on."""
        await self.db["workouts"].create_index(
            [("discord_id", ASCENDING), ("activity_id", ASCENDING)],
            unique=True,
            name="owner_activity_unique",
        )
        await self.db["workouts"].create_index([("timestamp", ASCENDING)], name="timestamp")
        await self.db["athletes"].create_index([("athlete_id", ASCENDING)], unique=True)
        await self.db["strava_tokens"].create_index([("athlete_id", ASCENDING)], unique=True)
        logger.debug("MongoDB indexes ensured")

    async def disconnect(self):
        """Disconnect from MongoDB."""
        if self.client:
            await self.client.close()
            logger.info("Disconnected from MongoDB")

    async def ping(self) -> bool:
        """
        Check if database connection is alive.

        Returns:
            True if connection is alive, False otherwise
        """
        try:
            await self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.error(f"Database ping failed: {e}")
            return False


# Global database manager instance
db_manager = DatabaseManager()


def get_db() -> AsyncDatabase:
    """
    Dependency function to get database instance for FastAPI.

    Raises RuntimeError when the lifespan has not connected yet.
    """
    if db_manager.db is None:
        raise RuntimeError("Database not connected. Call db_manager.connect() first.")
    return db_manager.db
