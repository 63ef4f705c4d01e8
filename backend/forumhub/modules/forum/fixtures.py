"""
Fixture Loader - Seeds the forum store from JSON.

Expected document:
    {
        "users": [{"id": "1", "name": "Ada", "picture": "...", "forums": ["1"]}],
        "forums": [{"id": "1", "name": "General", "users": ["1"]}],
        "messages": [
            {"id": "1", "forumId": "1", "userId": "1",
             "text": "hi", "createdAt": "2024-01-01T09:00:00.000Z"}
        ]
    }

Membership may be declared on either side; both are linked.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from forumhub.core.exceptions import FixtureError
from forumhub.models.forum import Forum, Message
from forumhub.models.user import User
from forumhub.modules.forum.service import format_timestamp
from forumhub.modules.forum.store import ForumStore


class _FixtureModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class UserFixture(_FixtureModel):
    id: str
    name: str
    picture: str | None = None
    forums: list[str] = []


class ForumFixture(_FixtureModel):
    id: str
    name: str
    users: list[str] = []


class MessageFixture(_FixtureModel):
    id: str
    forum_id: str = Field(alias="forumId")
    user_id: str = Field(alias="userId")
    text: str
    created_at: datetime = Field(alias="createdAt")


class Fixtures(_FixtureModel):
    users: list[UserFixture] = []
    forums: list[ForumFixture] = []
    messages: list[MessageFixture] = []


def build_store(data: dict[str, Any]) -> ForumStore:
    """
    Build a populated store from a fixture document.

    Args:
        data: Parsed fixture document

    Returns:
        Store holding the seeded entities

    Raises:
        FixtureError: Document is malformed, repeats an ID, references an
            unknown entity, has a blank forum name or message text, or
            seeds a message by a non-member
    """
    try:
        fixtures = Fixtures.model_validate(data)
    except ValidationError as e:
        raise FixtureError(f"Invalid fixture document: {e}") from e

    store = ForumStore()

    try:
        for item in fixtures.users:
            store.add_user(User(id=item.id, name=item.name, picture=item.picture))
        for item in fixtures.forums:
            if not item.name.strip():
                raise FixtureError(f"Forum {item.id} has an empty name")
            store.add_forum(Forum(id=item.id, name=item.name))
    except ValueError as e:
        raise FixtureError(str(e)) from e

    # Membership from the forum side
    for item in fixtures.forums:
        forum = store.forums[item.id]
        for user_id in item.users:
            user = store.find_user(user_id)
            if user is None:
                raise FixtureError(f"Forum {item.id} lists unknown user {user_id}")
            store.link_membership(user, forum)

    # Membership from the user side
    for item in fixtures.users:
        user = store.users[item.id]
        for forum_id in item.forums:
            forum = store.find_forum(forum_id)
            if forum is None:
                raise FixtureError(f"User {item.id} lists unknown forum {forum_id}")
            store.link_membership(user, forum)

    for item in fixtures.messages:
        if not item.text.strip():
            raise FixtureError(f"Message {item.id} has empty text")
        forum = store.find_forum(item.forum_id)
        if forum is None:
            raise FixtureError(f"Message {item.id} targets unknown forum {item.forum_id}")
        user = store.find_user(item.user_id)
        if user is None:
            raise FixtureError(f"Message {item.id} has unknown author {item.user_id}")
        if not store.is_member(user, forum):
            raise FixtureError(
                f"Message {item.id} author {user.id} is not a member of forum {forum.id}"
            )
        try:
            store.append_message(
                forum,
                Message(
                    id=item.id,
                    forum_id=forum.id,
                    user_id=user.id,
                    text=item.text,
                    created_at=format_timestamp(item.created_at),
                ),
            )
        except ValueError as e:
            raise FixtureError(str(e)) from e

    return store


def load_fixtures(path: Path | str) -> ForumStore:
    """Read a fixture file and build a store from it."""
    path = Path(path)

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as e:
        raise FixtureError(f"Cannot read fixtures from {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FixtureError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise FixtureError(f"Fixture root in {path} must be an object")

    store = build_store(data)
    logger.info(
        f"Loaded fixtures from {path}: {len(store.users)} users, "
        f"{len(store.forums)} forums, {len(store.messages)} messages"
    )
    return store
