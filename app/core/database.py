"""
MongoDB initialization and helpers.

This module owns the single MongoClient used by the API. Routes fetch the
database handle through ``get_db()`` and work on two collections:
``users`` (patients and providers, tagged by ``role``) and ``tips``.
"""

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, MongoClient

from app.core.config import settings
from app.services.logger import log_debug

# Global references to avoid re-initialization
_client = None
db = None


def init_mongo(client: Optional[MongoClient] = None):
    """
    Connect to MongoDB if not already connected.

    A pre-built client can be passed in (tests hand in a mongomock client);
    otherwise MONGO_URI must be set.
    """

    global _client, db

    # Prevent re-initialization (important for Uvicorn reload)
    if db is not None and client is None:
        return db

    if client is None:
        if not settings.MONGO_URI:
            raise RuntimeError(
                "MONGO_URI not defined in environment variables.\n"
                "Set MONGO_URI or add it to the .env file."
            )
        client = MongoClient(settings.MONGO_URI)

    _client = client
    db = client.get_default_database(default=settings.MONGO_DB_NAME)

    ensure_indexes(db)
    log_debug("mongo_connected", {"database": db.name})
    return db


def ensure_indexes(database):
    # Email uniqueness is enforced by the store, not by the route check alone
    database["users"].create_index([("email", ASCENDING)], unique=True)


def get_db():
    return db


def close_mongo():
    global _client, db
    if _client is not None:
        _client.close()
    _client = None
    db = None


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id string into an ObjectId, or None if it is not one."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize(value: Any) -> Any:
    """Convert a MongoDB document (or part of one) to JSON-serializable data."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value
