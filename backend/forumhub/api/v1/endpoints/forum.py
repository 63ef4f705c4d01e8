"""
Forum API Endpoints.

Users, forums, membership and messages.
"""

from typing import Any, NoReturn

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from forumhub.api.deps import get_acting_user_id
from forumhub.core.exceptions import ForumError
from forumhub.models.forum import Forum, Message
from forumhub.models.user import User
from forumhub.modules.forum.service import ForumService
from forumhub.modules.forum.store import ForumStore, get_store

router = APIRouter()


# ==================== Schemas ====================


class CreateForumRequest(BaseModel):
    """Create new forum."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    user_id: str | None = Field(None, alias="userId")


class PostMessageRequest(BaseModel):
    """Post message to forum."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    user_id: str | None = Field(None, alias="userId")


# ==================== Projection ====================


def _raise_http(error: ForumError) -> NoReturn:
    raise HTTPException(
        status_code=error.status_code,
        detail={"error": error.kind, "message": error.message},
    ) from error


def _user_ref(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "picture": user.picture,
    }


def _forum_ref(forum: Forum) -> dict[str, Any]:
    return {"id": forum.id, "name": forum.name}


def _message_payload(forum: ForumService, message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "forumId": message.forum_id,
        "text": message.text,
        "createdAt": message.created_at,
        "user": _user_ref(forum.get_message_author(message)),
    }


def _user_payload(forum: ForumService, user: User) -> dict[str, Any]:
    return {
        **_user_ref(user),
        "forums": [_forum_ref(f) for f in forum.get_user_joined_forums(user.id)],
    }


def _forum_payload(forum: ForumService, item: Forum) -> dict[str, Any]:
    return {
        **_forum_ref(item),
        "users": [_user_ref(u) for u in forum.get_forum_members(item)],
        "messages": [
            _message_payload(forum, m) for m in forum.get_forum_history(item)
        ],
    }


# ==================== Users ====================


@router.get("/users")
async def list_users(
    store: ForumStore = Depends(get_store),
) -> list[dict[str, Any]]:
    """Get all users."""
    forum = ForumService(store)
    return [_user_payload(forum, user) for user in forum.list_users()]


@router.get("/me")
async def get_me(
    user_id: str = Depends(get_acting_user_id),
    store: ForumStore = Depends(get_store),
) -> dict[str, Any]:
    """Get the acting user."""
    forum = ForumService(store)
    try:
        user = forum.get_user(user_id)
    except ForumError as e:
        _raise_http(e)
    return _user_payload(forum, user)


@router.get("/users/{user_id}/forums")
async def get_user_joined_forums(
    user_id: str,
    store: ForumStore = Depends(get_store),
) -> list[dict[str, Any]]:
    """Get forums joined by user."""
    forum = ForumService(store)
    try:
        joined = forum.get_user_joined_forums(user_id)
    except ForumError as e:
        _raise_http(e)
    return [_forum_payload(forum, item) for item in joined]


# ==================== Forums ====================


@router.get("/forums")
async def list_forums(
    store: ForumStore = Depends(get_store),
) -> list[dict[str, Any]]:
    """Get all forums."""
    forum = ForumService(store)
    return [_forum_payload(forum, item) for item in forum.list_forums()]


@router.get("/forums/{forum_id}")
async def get_forum(
    forum_id: str,
    store: ForumStore = Depends(get_store),
) -> dict[str, Any]:
    """Get forum details."""
    forum = ForumService(store)
    try:
        item = forum.get_forum(forum_id)
    except ForumError as e:
        _raise_http(e)
    return _forum_payload(forum, item)


@router.post("/forums", status_code=201)
async def create_forum(
    request: CreateForumRequest,
    acting_user_id: str = Depends(get_acting_user_id),
    store: ForumStore = Depends(get_store),
) -> dict[str, Any]:
    """Create new forum."""
    forum = ForumService(store)
    user_id = acting_user_id if request.user_id is None else request.user_id

    try:
        item = forum.create_forum(request.name, user_id)
    except ForumError as e:
        _raise_http(e)

    logger.info(f"Forum {item.id} created by user {user_id}")
    return _forum_payload(forum, item)


@router.post("/forums/{forum_id}/join")
async def join_forum(
    forum_id: str,
    user_id: str = Depends(get_acting_user_id),
    store: ForumStore = Depends(get_store),
) -> dict[str, Any]:
    """Join forum."""
    forum = ForumService(store)

    try:
        membership = forum.join_forum(user_id, forum_id)
    except ForumError as e:
        _raise_http(e)

    logger.info(f"User {user_id} joined forum {forum_id}")
    return {
        "forum": _forum_payload(forum, membership.forum),
        "user": _user_payload(forum, membership.user),
    }


# ==================== Messages ====================


@router.get("/forums/{forum_id}/messages")
async def get_messages(
    forum_id: str,
    store: ForumStore = Depends(get_store),
) -> list[dict[str, Any]]:
    """Get forum messages, newest first."""
    forum = ForumService(store)
    try:
        messages = forum.get_messages(forum_id)
    except ForumError as e:
        _raise_http(e)
    return [_message_payload(forum, m) for m in messages]


@router.post("/forums/{forum_id}/messages", status_code=201)
async def post_message(
    forum_id: str,
    request: PostMessageRequest,
    acting_user_id: str = Depends(get_acting_user_id),
    store: ForumStore = Depends(get_store),
) -> dict[str, Any]:
    """Post message to forum."""
    forum = ForumService(store)
    user_id = acting_user_id if request.user_id is None else request.user_id

    try:
        message = forum.post_message(user_id, forum_id, request.text)
    except ForumError as e:
        _raise_http(e)

    logger.info(f"Message {message.id} posted to forum {forum_id} by user {user_id}")
    return _message_payload(forum, message)
