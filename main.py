import logging
import math
import os
import re
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

import jwt
from bson import ObjectId
from bson.errors import InvalidId
from email_validator import EmailNotValidError, validate_email
from fastapi import FastAPI, Header, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from passlib.hash import bcrypt
from pydantic import BaseModel, ConfigDict, Field
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from starlette.middleware.base import BaseHTTPMiddleware

from database import create_document, db, get_documents
from schemas import BIO_MAX_LENGTH, COMMENT_MAX_LENGTH, Comment, Confession, User

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ----------------------- Config -----------------------

JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    logger.warning("JWT_SECRET is not set, using the development secret")
    JWT_SECRET = "confession-api-development-secret-key"
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))

# Off by default: account deletion does not verify the bearer token
ENFORCE_TOKEN_OWNERSHIP = os.getenv("ENFORCE_TOKEN_OWNERSHIP", "false").lower() == "true"

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

CONTENT_MAX_LENGTH = 500
PASSWORD_MIN_LENGTH = 6
DEFAULT_PROFILE_PICTURE = "👤"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
TRENDING_WINDOW = timedelta(hours=24)
TRENDING_LIMIT = 10
FEED_SORT = [("created_at", -1), ("_id", -1)]


app = FastAPI(title="Confession API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = uuid.uuid4().hex[:8]
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            "[%s] %s %s status=%s duration=%.3fs",
            request_id, request.method, request.url.path, response.status_code, duration,
        )
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "Invalid request"
    errors = exc.errors()
    if errors:
        error = errors[0]
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {error.get('msg')}" if field else error.get("msg", message)
    return JSONResponse(status_code=400, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Something went wrong!"})


# ----------------------- Helpers -----------------------

def now_utc():
    return datetime.now(timezone.utc)


def to_object_id(value) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def hash_password(password: str) -> str:
    return bcrypt.hash(password)


def verify_password(password: str, pw_hash: str) -> bool:
    return bcrypt.verify(password, pw_hash)


def create_token(user_id: str) -> str:
    issued = now_utc()
    payload = {
        "userId": user_id,
        "iat": issued,
        "exp": issued + timedelta(days=JWT_EXPIRE_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Optional[str]:
    """Return the user id carried by a valid token, None otherwise."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    return payload.get("userId")


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None


def validate_content(content: Optional[str], max_length: int, label: str = "Content") -> str:
    # Length is checked before trimming
    if not content or not content.strip():
        raise HTTPException(status_code=400, detail=f"{label} is required")
    if len(content) > max_length:
        raise HTTPException(status_code=400, detail=f"{label} is too long")
    return content.strip()


LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Read the leading integer of a query value ("2.5" -> 2); default when absent or non-positive."""
    match = LEADING_INT.match(value or "")
    if not match:
        return default
    number = int(match.group(1))
    return number if number > 0 else default


def require_object_id(value: Optional[str], field: str) -> ObjectId:
    if not value:
        raise HTTPException(status_code=400, detail=f"{field} is required")
    oid = to_object_id(value)
    if oid is None:
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    return oid


# ----------------------- Serialization -----------------------

def user_card(user: Optional[dict]) -> Optional[dict]:
    if not user:
        return None
    return {
        "id": str(user["_id"]),
        "username": user.get("username"),
        "displayName": user.get("display_name"),
        "profilePicture": user.get("profile_picture"),
        "isOnboarded": user.get("is_onboarded", False),
    }


def user_summary(user: dict) -> dict:
    return {
        "id": str(user["_id"]),
        "username": user["username"],
        "email": user["email"],
        "displayName": user.get("display_name"),
        "profilePicture": user.get("profile_picture"),
        "isOnboarded": user.get("is_onboarded", False),
    }


def public_profile(user: dict) -> dict:
    return {
        **user_summary(user),
        "bio": user.get("bio", ""),
        "interests": user.get("interests", []),
        "streak": user.get("streak", 0),
        "achievements": user.get("achievements", []),
        "confessionCount": user.get("confession_count", 0),
        "followers": len(user.get("followers", [])),
        "following": len(user.get("following", [])),
        "createdAt": user.get("created_at"),
    }


def resolve_users(ids: Iterable[ObjectId]) -> dict:
    wanted = list({i for i in ids if i is not None})
    if not wanted:
        return {}
    users = db["user"].find({"_id": {"$in": wanted}}, {"password_hash": 0})
    return {u["_id"]: u for u in users}


def public_confession(doc: dict, users: dict, with_commenters: bool = False) -> dict:
    comments = []
    for comment in doc.get("comments", []):
        commenter = comment.get("user")
        comments.append({
            "id": str(comment["_id"]) if comment.get("_id") else None,
            "user": user_card(users.get(commenter)) if with_commenters else str(commenter),
            "content": comment.get("content"),
            "createdAt": comment.get("created_at"),
        })
    likes = doc.get("likes", [])
    return {
        "id": str(doc["_id"]),
        "content": doc.get("content"),
        "author": user_card(users.get(doc.get("author"))),
        "isAnonymous": doc.get("is_anonymous", True),
        "likes": [str(like) for like in likes],
        "likeCount": len(likes),
        "comments": comments,
        "shares": doc.get("shares", 0),
        "createdAt": doc.get("created_at"),
        "updatedAt": doc.get("updated_at"),
    }


def present_confessions(docs: List[dict], with_commenters: bool = False) -> List[dict]:
    """Serialize confessions, resolving authors (and commenters) in one query."""
    ids = [d.get("author") for d in docs]
    if with_commenters:
        ids += [c.get("user") for d in docs for c in d.get("comments", [])]
    users = resolve_users(ids)
    return [public_confession(d, users, with_commenters) for d in docs]


# ----------------------- Lookups -----------------------

def get_user_by_id(user_id) -> Optional[dict]:
    oid = to_object_id(user_id)
    if oid is None:
        return None
    return db["user"].find_one({"_id": oid})


def get_user_by_email(email: str) -> Optional[dict]:
    users = get_documents("user", {"email": email.lower()}, 1)
    return users[0] if users else None


def get_user_by_username(username: str) -> Optional[dict]:
    users = get_documents("user", {"username": username}, 1)
    return users[0] if users else None


def get_confession_by_id(confession_id) -> Optional[dict]:
    oid = to_object_id(confession_id)
    if oid is None:
        return None
    return db["confession"].find_one({"_id": oid})


def require_user(user_id) -> dict:
    user = get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def require_confession(confession_id, label: str = "Confession") -> dict:
    confession = get_confession_by_id(confession_id)
    if not confession:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return confession


# ----------------------- Account lifecycle -----------------------

def delete_account(user_id: str) -> None:
    """Delete a user, their confessions and every follow edge pointing at them.

    The four writes are independent; there is no transaction, so a failure
    part way through leaves the earlier steps applied. Likes and comments the
    user left on other confessions are kept.
    """
    user = require_user(user_id)
    uid = user["_id"]

    result = db["confession"].delete_many({"author": uid})
    logger.info("Account %s: deleted %d confessions", uid, result.deleted_count)

    result = db["user"].update_many({"followers": uid}, {"$pull": {"followers": uid}})
    logger.info("Account %s: removed from %d followers lists", uid, result.modified_count)

    result = db["user"].update_many({"following": uid}, {"$pull": {"following": uid}})
    logger.info("Account %s: removed from %d following lists", uid, result.modified_count)

    db["user"].delete_one({"_id": uid})
    logger.info("Account %s: user record deleted", uid)


def check_ownership(user_id: str, authorization: Optional[str]) -> None:
    token = bearer_token(authorization)
    if not ENFORCE_TOKEN_OWNERSHIP:
        if token is None:
            logger.warning("Account %s deletion requested without a bearer token", user_id)
        return
    if token is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    token_user = decode_token(token)
    if token_user is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    if token_user != user_id:
        raise HTTPException(status_code=403, detail="Forbidden")


def toggle_follow(user_id: str, follower_id: Optional[str]) -> bool:
    """Toggle the follow edge follower -> user. Returns True when now following."""
    follower_oid = require_object_id(follower_id, "followerId")
    if to_object_id(user_id) == follower_oid:
        raise HTTPException(status_code=400, detail="You cannot follow yourself")
    target = require_user(user_id)
    follower = require_user(follower_oid)

    # Two single-document writes keep the mirror sets in step
    if follower["_id"] in target.get("followers", []):
        db["user"].update_one({"_id": target["_id"]}, {"$pull": {"followers": follower["_id"]}})
        db["user"].update_one({"_id": follower["_id"]}, {"$pull": {"following": target["_id"]}})
        logger.info("User %s unfollowed %s", follower["_id"], target["_id"])
        return False

    db["user"].update_one({"_id": target["_id"]}, {"$addToSet": {"followers": follower["_id"]}})
    db["user"].update_one({"_id": follower["_id"]}, {"$addToSet": {"following": target["_id"]}})
    logger.info("User %s followed %s", follower["_id"], target["_id"])
    return True


# ----------------------- Engagement -----------------------

def toggle_like(confession_id: str, user_id: Optional[str]) -> bool:
    """Add or remove user_id in the confession's likes. Returns True when liked.

    Membership is read first and the set-add/set-remove issued afterwards,
    so two concurrent toggles by the same user can race.
    """
    user_oid = require_object_id(user_id, "userId")
    confession = require_confession(confession_id)

    if user_oid in confession.get("likes", []):
        db["confession"].update_one({"_id": confession["_id"]}, {"$pull": {"likes": user_oid}})
        return False
    db["confession"].update_one({"_id": confession["_id"]}, {"$addToSet": {"likes": user_oid}})
    return True


def add_comment(confession_id: str, user_id: Optional[str], content: Optional[str]) -> dict:
    if not user_id or not content:
        raise HTTPException(status_code=400, detail="User ID and content are required")
    user_oid = require_object_id(user_id, "userId")
    text = validate_content(content, COMMENT_MAX_LENGTH, label="Comment")
    confession = require_confession(confession_id)

    comment = Comment(user=user_oid, content=text).model_dump()
    comment["_id"] = ObjectId()
    updated = db["confession"].find_one_and_update(
        {"_id": confession["_id"]},
        {"$push": {"comments": comment}, "$set": {"updated_at": now_utc()}},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise HTTPException(status_code=404, detail="Confession not found")
    return updated


# ----------------------- Queries -----------------------

def feed_page(page: int, limit: int):
    skip = (page - 1) * limit
    docs = list(db["confession"].find({}).sort(FEED_SORT).skip(skip).limit(limit))
    total = db["confession"].count_documents({})
    return docs, total


def trending_confessions() -> List[dict]:
    # Sorted by the number of likes, not by the raw likes array
    since = now_utc() - TRENDING_WINDOW
    return list(db["confession"].aggregate([
        {"$match": {"created_at": {"$gte": since}}},
        {"$addFields": {"like_count": {"$size": "$likes"}}},
        {"$sort": {"like_count": -1, "created_at": -1}},
        {"$limit": TRENDING_LIMIT},
    ]))


def count_unwound(author_id: ObjectId, field: str) -> int:
    result = list(db["confession"].aggregate([
        {"$match": {"author": author_id}},
        {"$unwind": f"${field}"},
        {"$count": "total"},
    ]))
    return result[0]["total"] if result else 0


def user_stats(user_id: str) -> dict:
    user = require_user(user_id)
    return {
        "confessionCount": user.get("confession_count", 0),
        "likeCount": count_unwound(user["_id"], "likes"),
        "commentCount": count_unwound(user["_id"], "comments"),
        "followerCount": len(user.get("followers", [])),
        "followingCount": len(user.get("following", [])),
    }


# ----------------------- Models -----------------------

class RegisterInput(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginInput(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class CompleteProfileInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bio: Optional[str] = None
    interests: Optional[List[str]] = None
    profile_picture: Optional[str] = Field(None, alias="profilePicture")


class ProfileInput(CompleteProfileInput):
    username: Optional[str] = None


class PostInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = None
    author: Optional[str] = None
    is_anonymous: bool = Field(True, alias="isAnonymous")


class PostUpdateInput(BaseModel):
    content: Optional[str] = None


class LikeInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")


class CommentInput(LikeInput):
    content: Optional[str] = None


class FollowInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    follower_id: Optional[str] = Field(None, alias="followerId")


def check_bio(bio: Optional[str]) -> None:
    if bio is not None and len(bio) > BIO_MAX_LENGTH:
        raise HTTPException(status_code=400, detail="Bio is too long")


# ----------------------- Public -----------------------

@app.get("/")
def read_root():
    return {"name": "Confession API", "status": "ok"}


@app.get("/test")
def database_check():
    response = {
        "backend": "running",
        "database": "not initialized",
        "database_name": None,
        "counts": {},
    }
    if db is None:
        return response

    response["database_name"] = db.name
    try:
        response["counts"] = {name: db[name].count_documents({}) for name in ("user", "confession")}
        response["database"] = "connected"
    except PyMongoError as e:
        logger.warning("Database check failed: %s", e)
        response["database"] = "error"
    return response


# ----------------------- Onboarding -----------------------

@app.post("/api/onboarding/register", status_code=201)
def register(payload: RegisterInput):
    if not payload.username or not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Username, email and password are required")

    username = payload.username.strip()
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")

    try:
        email = validate_email(payload.email.strip(), check_deliverability=False).normalized.lower()
    except EmailNotValidError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if len(payload.password) < PASSWORD_MIN_LENGTH:
        raise HTTPException(status_code=400, detail=f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    # Check and insert are separate calls; concurrent sign-ups can both pass
    if get_user_by_email(email) or get_user_by_username(username):
        raise HTTPException(status_code=400, detail="User with this email or username already exists")

    user = User(username=username, email=email, password_hash=hash_password(payload.password))
    user_id = create_document("user", user)
    logger.info("Registered user %s", user_id)

    created = get_user_by_id(user_id)
    return {
        "message": "User registered successfully",
        "token": create_token(user_id),
        "user": user_summary(created),
    }


@app.post("/api/onboarding/login")
def login(payload: LoginInput):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")
    user = get_user_by_email(payload.email.strip())
    if not user:
        raise HTTPException(status_code=400, detail="Invalid credentials")
    if not verify_password(payload.password, user.get("password_hash", "")):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    user_id = str(user["_id"])
    return {"message": "Login successful", "token": create_token(user_id), "user": user_summary(user)}


@app.put("/api/onboarding/complete-profile/{user_id}")
def complete_profile(user_id: str, payload: CompleteProfileInput):
    check_bio(payload.bio)
    updates = payload.model_dump(exclude_none=True)
    updates["profile_picture"] = payload.profile_picture or DEFAULT_PROFILE_PICTURE
    updates["is_onboarded"] = True
    updates["updated_at"] = now_utc()

    user = require_user(user_id)
    updated = db["user"].find_one_and_update(
        {"_id": user["_id"]}, {"$set": updates}, return_document=ReturnDocument.AFTER
    )
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return {
        "message": "Profile completed successfully",
        "user": {
            **user_summary(updated),
            "bio": updated.get("bio", ""),
            "interests": updated.get("interests", []),
        },
    }


# ----------------------- Profiles -----------------------

@app.get("/api/profile/{user_id}")
def get_profile(user_id: str):
    return {"user": public_profile(require_user(user_id))}


@app.put("/api/profile/{user_id}")
def update_profile(user_id: str, payload: ProfileInput):
    check_bio(payload.bio)
    user = require_user(user_id)
    updates = payload.model_dump(exclude_none=True)

    if "username" in updates:
        username = updates["username"].strip()
        if not username:
            raise HTTPException(status_code=400, detail="Username is required")
        taken = get_user_by_username(username)
        if taken and taken["_id"] != user["_id"]:
            raise HTTPException(status_code=400, detail="User with this email or username already exists")
        updates["username"] = username

    updates["updated_at"] = now_utc()
    updated = db["user"].find_one_and_update(
        {"_id": user["_id"]}, {"$set": updates}, return_document=ReturnDocument.AFTER
    )
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "Profile updated successfully", "user": public_profile(updated)}


@app.get("/api/profile/{user_id}/confessions")
def get_user_confessions(user_id: str):
    oid = to_object_id(user_id)
    docs = list(db["confession"].find({"author": oid}).sort(FEED_SORT)) if oid else []
    return {"confessions": present_confessions(docs), "count": len(docs)}


@app.get("/api/profile/{user_id}/stats")
def get_user_stats(user_id: str):
    return {"stats": user_stats(user_id)}


@app.post("/api/profile/{user_id}/follow")
def follow_user(user_id: str, payload: FollowInput):
    following = toggle_follow(user_id, payload.follower_id)
    target = require_user(user_id)
    return {
        "message": "User followed" if following else "User unfollowed",
        "following": following,
        "followerCount": len(target.get("followers", [])),
    }


def list_edges(ids: List[ObjectId]) -> dict:
    # count is the stored edge count; ids of users that no longer exist get no card
    users = resolve_users(ids)
    cards = [user_card(users[i]) for i in ids if i in users]
    return {"users": cards, "count": len(ids)}


@app.get("/api/profile/{user_id}/followers")
def get_followers(user_id: str):
    user = require_user(user_id)
    return list_edges(user.get("followers", []))


@app.get("/api/profile/{user_id}/following")
def get_following(user_id: str):
    user = require_user(user_id)
    return list_edges(user.get("following", []))


@app.delete("/api/profile/{user_id}")
def delete_profile(user_id: str, authorization: Optional[str] = Header(None)):
    check_ownership(user_id, authorization)
    delete_account(user_id)
    return {"message": "Account deleted successfully"}


# ----------------------- Feed -----------------------

@app.get("/api/feed")
def get_feed(page: Optional[str] = Query(None), limit: Optional[str] = Query(None)):
    page = parse_positive_int(page, DEFAULT_PAGE)
    limit = parse_positive_int(limit, DEFAULT_LIMIT)
    docs, total = feed_page(page, limit)
    return {
        "confessions": present_confessions(docs),
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
    }


@app.get("/api/feed/trending")
def get_trending():
    return {"confessions": present_confessions(trending_confessions())}


@app.get("/api/feed/following")
def get_following_feed(user_id: Optional[str] = Query(None, alias="userId")):
    if not user_id:
        raise HTTPException(status_code=400, detail="User ID is required")
    user = require_user(user_id)
    docs = list(db["confession"].find({"author": {"$in": user.get("following", [])}}).sort(FEED_SORT))
    return {"confessions": present_confessions(docs)}


@app.get("/api/feed/{confession_id}")
def get_confession(confession_id: str):
    confession = require_confession(confession_id)
    return {"confession": present_confessions([confession], with_commenters=True)[0]}


@app.post("/api/feed/{confession_id}/like")
def like_confession(confession_id: str, payload: LikeInput):
    liked = toggle_like(confession_id, payload.user_id)
    return {"message": "Confession liked" if liked else "Confession unliked", "liked": liked}


@app.post("/api/feed/{confession_id}/comment")
def comment_confession(confession_id: str, payload: CommentInput):
    updated = add_comment(confession_id, payload.user_id, payload.content)
    return {"message": "Comment added successfully", "confession": present_confessions([updated])[0]}


# ----------------------- Posts -----------------------

@app.post("/api/post", status_code=201)
def create_post(payload: PostInput):
    content = validate_content(payload.content, CONTENT_MAX_LENGTH)
    author_oid = require_object_id(payload.author, "author")
    if get_user_by_id(author_oid) is None:
        raise HTTPException(status_code=400, detail="Author does not exist")

    confession = Confession(content=content, author=author_oid, is_anonymous=payload.is_anonymous)
    post_id = create_document("confession", confession)
    # Separate write; the counter can drift if this one fails
    db["user"].update_one({"_id": author_oid}, {"$inc": {"confession_count": 1}})
    logger.info("Confession %s created by %s", post_id, author_oid)

    post = get_confession_by_id(post_id)
    return {"message": "Post created successfully", "post": present_confessions([post])[0]}


@app.get("/api/post/{post_id}")
def get_post(post_id: str):
    post = require_confession(post_id, label="Post")
    return {"post": present_confessions([post], with_commenters=True)[0]}


@app.put("/api/post/{post_id}")
def update_post(post_id: str, payload: PostUpdateInput):
    content = validate_content(payload.content, CONTENT_MAX_LENGTH)
    post = require_confession(post_id, label="Post")
    updated = db["confession"].find_one_and_update(
        {"_id": post["_id"]},
        {"$set": {"content": content, "updated_at": now_utc()}},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise HTTPException(status_code=404, detail="Post not found")
    return {"message": "Post updated successfully", "post": present_confessions([updated])[0]}


@app.delete("/api/post/{post_id}")
def delete_post(post_id: str):
    post = require_confession(post_id, label="Post")
    db["confession"].delete_one({"_id": post["_id"]})
    db["user"].update_one({"_id": post["author"]}, {"$inc": {"confession_count": -1}})
    logger.info("Confession %s deleted, count decremented for %s", post["_id"], post["author"])
    return {"message": "Post deleted successfully"}


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
