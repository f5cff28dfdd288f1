import logging

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Keep driver-level chatter out of the structured logs
logging.getLogger('pymongo').setLevel(logging.WARNING)

USERS_COLLECTION_NAME = 'users'


def create_mongodb_client(mongo_url: str | None) -> MongoClient | None:
    """Connect to MongoDB and verify the connection with a ping.

    Called once at application startup; the returned client owns the
    connection pool shared by every request.

    Returns:
        MongoDB client or None if MONGO_URL is not configured or unreachable
    """
    if not mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    try:
        client = MongoClient(
            mongo_url,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
        )
        client.admin.command('ping')
        logger.info("[MONGODB] Connected successfully")
        return client
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
        return None


def ping(client: MongoClient | None) -> bool:
    """Return True if the client answers a ping."""
    if client is None:
        return False
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False
