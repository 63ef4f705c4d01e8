"""
Forum models for group discussions.

Includes:
- Forums (groups with members)
- Messages (append-only history per forum)

Relationships are held as ID lists and resolved through the store.
"""

from dataclasses import dataclass, field

from forumhub.models.user import User


@dataclass
class Forum:
    """Discussion group."""

    id: str
    name: str

    # Members, in join order
    user_ids: list[str] = field(default_factory=list)

    # Posted messages, in posting order (append-only)
    message_ids: list[str] = field(default_factory=list)

    def has_member(self, user_id: str) -> bool:
        return user_id in self.user_ids

    def __repr__(self) -> str:
        return f"<Forum {self.id} {self.name[:30]}>"


@dataclass(frozen=True)
class Message:
    """Message posted to a forum. Immutable once created."""

    id: str
    forum_id: str
    user_id: str
    text: str
    created_at: str  # ISO-8601 UTC, e.g. 2024-05-01T12:00:00.000Z

    def __repr__(self) -> str:
        return f"<Message {self.id} in forum {self.forum_id}>"


@dataclass
class ForumMembership:
    """Result of joining a forum."""

    forum: Forum
    user: User
