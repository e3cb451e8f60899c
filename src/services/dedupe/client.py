"""MongoDB client for the dedupe store - data layer."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from src.config import settings
from src.core.logging import get_logger

logger = get_logger("dedupe.data")

_client: AsyncIOMotorClient | None = None
_collection: AsyncIOMotorCollection | None = None


async def connect_db() -> None:
    """Open the MongoDB connection and ensure the TTL index exists."""
    global _client, _collection

    if not settings.mongodb_uri:
        raise ValueError("MONGODB_URI not configured")

    logger.info(f"Connecting to MongoDB database: {settings.mongodb_database}")

    _client = AsyncIOMotorClient(settings.mongodb_uri)
    db = _client[settings.mongodb_database]

    await _client.admin.command("ping")
    logger.info("MongoDB connection established")

    _collection = db[settings.dedupe_collection]
    # Records are removed by MongoDB once expires_at has passed
    await _collection.create_index("expires_at", expireAfterSeconds=0)
    logger.info(f"TTL index ensured on {settings.dedupe_collection}.expires_at")


async def close_db() -> None:
    """Close MongoDB connection."""
    global _client, _collection

    if _client:
        _client.close()
        _client = None
        _collection = None
        logger.info("MongoDB connection closed")


def get_collection() -> AsyncIOMotorCollection:
    """Get the dedupe collection. Raises if not connected."""
    if _collection is None:
        raise RuntimeError("Database not initialized. Call connect_db() first.")
    return _collection
