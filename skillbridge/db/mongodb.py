"""
MongoDB Connection Utility

MongoDB stores:
- Student, company and evaluator profiles (keyed by identity uid)
- Internship postings
- Applications (with the match snapshot taken at apply time)
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from skillbridge.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the skillbridge_docs database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by name (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "students": "students",
    "companies": "companies",
    "evaluators": "evaluators",
    "internships": "internships",
    "applications": "applications"
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # One profile document per identity uid
    for name in ("students", "companies", "evaluators"):
        db[COLLECTIONS[name]].create_index("uid", unique=True)

    db[COLLECTIONS["internships"]].create_index("company_id")
    db[COLLECTIONS["internships"]].create_index([("created_at", DESCENDING)])

    # A student applies to an internship at most once
    db[COLLECTIONS["applications"]].create_index([
        ("student_id", ASCENDING),
        ("internship_id", ASCENDING)
    ], unique=True)
    db[COLLECTIONS["applications"]].create_index("status")

    logger.info("MongoDB indexes created successfully")
