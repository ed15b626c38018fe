"""
Database Schemas for the Confession API

Each Pydantic model maps to a MongoDB collection whose name is the lowercase class name.

Collections:
- User        -> "user"
- Confession  -> "confession"

Comment is not a collection; comments are embedded in Confession.comments.
"""

from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DISPLAY_NAME = "Anonymous Soul"
BIO_MAX_LENGTH = 200
COMMENT_MAX_LENGTH = 200
# Storage allows long posts; creation and edits are capped lower in main.py
CONTENT_STORAGE_MAX_LENGTH = 10000


class User(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    username: str = Field(..., min_length=1, description="Public username (unique)")
    email: str = Field(..., description="User email (unique, lowercase)")
    password_hash: str = Field(..., description="BCrypt password hash")
    display_name: str = Field(DEFAULT_DISPLAY_NAME)
    profile_picture: Optional[str] = Field(None, description="Emoji or image URL")
    bio: str = Field("", max_length=BIO_MAX_LENGTH)
    interests: List[str] = []
    is_onboarded: bool = False
    is_anonymous: bool = True
    # Denormalized, maintained on post create/delete
    confession_count: int = 0
    followers: List[ObjectId] = []
    following: List[ObjectId] = []
    achievements: List[str] = []
    streak: int = 0


class Comment(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: ObjectId
    content: str = Field(..., min_length=1, max_length=COMMENT_MAX_LENGTH)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Confession(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: str = Field(..., min_length=1, max_length=CONTENT_STORAGE_MAX_LENGTH)
    # Required even for anonymous posts; anonymity is display-only
    author: ObjectId
    is_anonymous: bool = True
    likes: List[ObjectId] = []
    comments: List[Comment] = []
    shares: int = Field(0, ge=0)
