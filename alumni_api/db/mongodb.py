"""
MongoDB Connection Utility

MongoDB stores:
- Alumni profiles
- Employment history (pekerjaan) of each alumni
- User accounts
- Metadata of uploaded photos and certificates (bytes live on disk)

Every service operation runs under ``db_operation()``, which applies the
per-operation deadline and converts driver failures into ``StorageError``.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import pymongo
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from alumni_api.core.config import get_settings
from alumni_api.core.errors import StorageError

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        settings = get_settings()
        connect_ms = int(settings.db_connect_timeout_seconds * 1000)
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=connect_ms,
            connectTimeoutMS=connect_ms,
        )
    return _client


def get_mongo_db() -> Database:
    """Get the alumni database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str, db: Optional[Database] = None) -> Collection:
    """
    Get a specific collection.
    Collections we'll use:
    - alumni: Alumni profiles
    - pekerjaan_alumni: Employment records
    - users: Accounts (admin / user)
    - photos, certificates: Uploaded file metadata
    """
    db = db if db is not None else get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


@contextmanager
def db_operation(timeout: Optional[float] = None) -> Iterator[None]:
    """
    Run a block of driver calls under a deadline.

    Usage:
        with db_operation():
            collection.update_one(...)
    """
    seconds = timeout if timeout is not None else get_settings().db_timeout_seconds
    with pymongo.timeout(seconds):
        try:
            yield
        except PyMongoError as e:
            logger.error("MongoDB operation failed: %s", e)
            raise StorageError(f"Database error: {e}") from e


# Collection name constants (avoid typos)
COLLECTIONS = {
    "alumni": "alumni",
    "pekerjaan": "pekerjaan_alumni",
    "users": "users",
    "photos": "photos",
    "certificates": "certificates"
}


def init_mongo_indexes(db: Optional[Database] = None):
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = db if db is not None else get_mongo_db()

    # One profile per user; unlinked profiles (user_id null) are not indexed
    db[COLLECTIONS["alumni"]].create_index(
        "user_id",
        unique=True,
        partialFilterExpression={"user_id": {"$type": "objectId"}},
    )
    db[COLLECTIONS["alumni"]].create_index([("deleted", 1), ("created_at", -1)])

    # Employment history per alumni, and the trash listing
    db[COLLECTIONS["pekerjaan"]].create_index([("alumni_id", 1), ("deleted", 1)])
    db[COLLECTIONS["pekerjaan"]].create_index([("deleted", 1), ("updated_at", -1)])

    db[COLLECTIONS["users"]].create_index("username", unique=True)
    db[COLLECTIONS["users"]].create_index("email")

    db[COLLECTIONS["photos"]].create_index([("alumni_id", 1), ("deleted", 1)])
    db[COLLECTIONS["certificates"]].create_index([("alumni_id", 1), ("deleted", 1)])

    logger.info("MongoDB indexes created successfully")
