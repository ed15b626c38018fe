"""
Database helpers for the Confession API

A single MongoClient is created at import time from DATABASE_URL and
DATABASE_NAME. When DATABASE_URL is not set the module still imports and
`db` stays None, which /test reports.
"""

import logging
import os
from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel
from pymongo import MongoClient

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME", "confessions")

db = None

if DATABASE_URL:
    _client = MongoClient(DATABASE_URL, tz_aware=True)
    db = _client[DATABASE_NAME]
    logger.info("MongoDB client configured for database %s", DATABASE_NAME)
else:
    logger.warning("DATABASE_URL is not set, database is not initialized")


def _collection(collection_name: str):
    if db is None:
        raise RuntimeError("Database not initialized. Set DATABASE_URL.")
    return db[collection_name]


def create_document(collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert a document stamped with created_at/updated_at and return its id."""
    if isinstance(data, BaseModel):
        data_dict = data.model_dump()
    else:
        data_dict = dict(data)

    now = datetime.now(timezone.utc)
    data_dict["created_at"] = now
    data_dict["updated_at"] = now

    result = _collection(collection_name).insert_one(data_dict)
    return str(result.inserted_id)


def get_documents(collection_name: str, filter_dict: Optional[dict] = None, limit: Optional[int] = None) -> List[dict]:
    cursor = _collection(collection_name).find(filter_dict or {})
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)
