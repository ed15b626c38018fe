"""Pytest fixtures for the Confession API.

An in-memory mongomock database replaces the MongoDB client, so tests never
need a running server.
"""

from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

import database
import main
from schemas import Comment, Confession, User


@pytest.fixture
def test_db(monkeypatch):
    """Patch the module-level db handles with a fresh mongomock database."""
    client = mongomock.MongoClient(tz_aware=True)
    mongo_db = client["confessions_test"]
    monkeypatch.setattr(database, "db", mongo_db)
    monkeypatch.setattr(main, "db", mongo_db)
    yield mongo_db
    client.close()


@pytest.fixture
def client(test_db) -> TestClient:
    return TestClient(main.app)


@pytest.fixture
def make_user(test_db):
    """Insert a user directly, skipping bcrypt for speed."""

    def _make(username: str, **overrides) -> dict:
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash="not-a-real-hash",
            **overrides,
        )
        user_id = database.create_document("user", user)
        return test_db["user"].find_one({"_id": ObjectId(user_id)})

    return _make


@pytest.fixture
def make_confession(test_db):
    """Insert a confession with optional likes, comments and age."""

    def _make(author: dict, content: str = "I never read the terms", likes=(), comments=(), age=None) -> dict:
        confession = Confession(
            content=content,
            author=author["_id"],
            likes=[u["_id"] for u in likes],
            comments=[Comment(user=u["_id"], content=text) for u, text in comments],
        )
        doc = confession.model_dump()
        for comment in doc["comments"]:
            comment["_id"] = ObjectId()
        created = datetime.now(timezone.utc) - (age or timedelta(0))
        doc["created_at"] = created
        doc["updated_at"] = created
        result = test_db["confession"].insert_one(doc)
        test_db["user"].update_one({"_id": author["_id"]}, {"$inc": {"confession_count": 1}})
        return test_db["confession"].find_one({"_id": result.inserted_id})

    return _make
