"""
MongoDB access helpers.

One collection per entity, named after the lowercased entity (theme, user,
project, skill). Records are never removed: "delete" flips isActive to False
and every read helper filters on isActive=True.
"""
import logging
import re
import time
from datetime import datetime, timezone
from typing import Optional

from bson.objectid import ObjectId
from fastapi import Request
from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

import config
from errors import DatabaseUnavailable, InvalidIdFormat

logger = logging.getLogger(__name__)

COLLECTIONS = ("theme", "user", "project", "skill")

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]

_client: Optional[MongoClient] = None


def connect(url: str = config.DATABASE_URL, name: str = config.DATABASE_NAME) -> Database:
    global _client
    _client = MongoClient(url, serverSelectionTimeoutMS=config.SERVER_SELECTION_TIMEOUT_MS)
    return _client[name]


def close():
    global _client
    if _client is not None:
        _client.close()
        _client = None


def ping(db: Database) -> bool:
    try:
        db.client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("Database ping failed: %s", e)
        return False


def ensure_indexes(db: Database):
    db["theme"].create_index("themeName", unique=True)
    db["user"].create_index("username", unique=True)
    db["user"].create_index("email", unique=True)
    db["skill"].create_index("name", unique=True)
    db["project"].create_index("userId")
    db["project"].create_index([("status", ASCENDING), ("createdAt", DESCENDING)])
    db["skill"].create_index("category")
    logger.info("Indexes ensured on %s", ", ".join(COLLECTIONS))


def is_ready(state) -> bool:
    """Ping the server, reusing a recent success, and build indexes once.

    Failures are never cached, so the app recovers as soon as MongoDB does.
    """
    db = getattr(state, "db", None)
    if db is None:
        return False
    if time.monotonic() < getattr(state, "db_ready_until", 0):
        return True
    if not ping(db):
        return False
    if not getattr(state, "indexes_ready", False):
        try:
            ensure_indexes(db)
        except PyMongoError as e:
            logger.warning("Could not ensure indexes: %s", e)
            return False
        state.indexes_ready = True
    state.db_ready_until = time.monotonic() + config.READINESS_CACHE_SECONDS
    return True


def get_db(request: Request) -> Database:
    if not is_ready(request.app.state):
        raise DatabaseUnavailable()
    return request.app.state.db


def now() -> datetime:
    return datetime.now(timezone.utc)


def key_filter(field: str, value: str, exact: bool = False) -> dict:
    """Case-insensitive match on a natural key.

    Substring match for lookups, whole-value match when `exact` is set.
    """
    pattern = re.escape(value.strip())
    if exact:
        pattern = f"^{pattern}$"
    return {field: {"$regex": pattern, "$options": "i"}}


def parse_object_id(value, message: Optional[str] = None) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdFormat(message)
    return ObjectId(value)


def to_public(doc: Optional[dict]):
    if not doc:
        return doc
    doc = {**doc}
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    for k, v in doc.items():
        if isinstance(v, ObjectId):
            doc[k] = str(v)
    return doc


def create_document(db: Database, collection_name: str, data) -> dict:
    data_dict = data.model_dump() if isinstance(data, BaseModel) else dict(data)
    stamp = now()
    data_dict["isActive"] = True
    data_dict["createdAt"] = stamp
    data_dict["updatedAt"] = stamp
    result = db[collection_name].insert_one(data_dict)
    return db[collection_name].find_one({"_id": result.inserted_id})


def get_documents(db: Database, collection_name: str, filter_dict: Optional[dict] = None, limit: Optional[int] = None) -> list:
    query = {**(filter_dict or {}), "isActive": True}
    cursor = db[collection_name].find(query).sort(NEWEST_FIRST)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def find_active(db: Database, collection_name: str, filter_dict: dict) -> Optional[dict]:
    return db[collection_name].find_one({**filter_dict, "isActive": True})


def update_active(db: Database, collection_name: str, filter_dict: dict, changes: dict) -> Optional[dict]:
    update = {**changes, "updatedAt": now()}
    return db[collection_name].find_one_and_update(
        {**filter_dict, "isActive": True},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )


def soft_delete(db: Database, collection_name: str, filter_dict: dict) -> bool:
    res = db[collection_name].update_one(
        {**filter_dict, "isActive": True},
        {"$set": {"isActive": False, "updatedAt": now()}},
    )
    return res.modified_count > 0


def count_active(db: Database, collection_name: str) -> int:
    return db[collection_name].count_documents({"isActive": True})


def collection_counts(db: Database) -> dict:
    return {f"{name}s": count_active(db, name) for name in COLLECTIONS}
