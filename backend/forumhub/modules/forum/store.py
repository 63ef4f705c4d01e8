"""
Forum Store - In-memory owner of users, forums and messages.
"""

from forumhub.models.forum import Forum, Message
from forumhub.models.user import User


class ForumStore:
    """
    Process-wide arena holding the three entity collections.

    Collections are insertion-ordered dicts keyed by ID. Relationship
    fields on entities hold IDs, so every entity exists exactly once here
    and every view of it goes through the lookups below.

    Usage:
        store = ForumStore()
        store.add_user(User(id="1", name="Ada"))
        user = store.find_user("1")
    """

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.forums: dict[str, Forum] = {}
        self.messages: dict[str, Message] = {}

    # ==================== IDs ====================

    @staticmethod
    def _next_id(collection: dict) -> str:
        """
        Next sequential ID for a collection.

        Starts from count + 1 and skips IDs already taken by seeded
        entities, so an ID is never handed out twice.
        """
        candidate = len(collection) + 1
        while str(candidate) in collection:
            candidate += 1
        return str(candidate)

    def next_forum_id(self) -> str:
        return self._next_id(self.forums)

    def next_message_id(self) -> str:
        return self._next_id(self.messages)

    # ==================== Lookups ====================

    def find_user(self, user_id: str) -> User | None:
        """Get user by ID, or None."""
        return self.users.get(user_id)

    def find_forum(self, forum_id: str) -> Forum | None:
        """Get forum by ID, or None."""
        return self.forums.get(forum_id)

    def find_message(self, message_id: str) -> Message | None:
        """Get message by ID, or None."""
        return self.messages.get(message_id)

    def list_users(self) -> list[User]:
        return list(self.users.values())

    def list_forums(self) -> list[Forum]:
        return list(self.forums.values())

    def list_messages(self) -> list[Message]:
        return list(self.messages.values())

    # ==================== Writes ====================

    def add_user(self, user: User) -> User:
        if user.id in self.users:
            raise ValueError(f"Duplicate user ID {user.id}")
        self.users[user.id] = user
        return user

    def add_forum(self, forum: Forum) -> Forum:
        if forum.id in self.forums:
            raise ValueError(f"Duplicate forum ID {forum.id}")
        self.forums[forum.id] = forum
        return forum

    def link_membership(self, user: User, forum: Forum) -> None:
        """Record membership on both sides at once."""
        if forum.id not in user.forum_ids:
            user.forum_ids.append(forum.id)
        if user.id not in forum.user_ids:
            forum.user_ids.append(user.id)

    def append_message(self, forum: Forum, message: Message) -> Message:
        """Append message to the global history and to its forum."""
        if message.id in self.messages:
            raise ValueError(f"Duplicate message ID {message.id}")
        if message.forum_id != forum.id:
            raise ValueError(
                f"Message {message.id} targets forum {message.forum_id}, not {forum.id}"
            )
        self.messages[message.id] = message
        forum.message_ids.append(message.id)
        return message

    def is_member(self, user: User, forum: Forum) -> bool:
        """Membership holds only when both sides agree."""
        return user.is_member_of(forum.id) and forum.has_member(user.id)


# Singleton instance
_store: ForumStore | None = None


def get_store() -> ForumStore:
    """Get or create store singleton."""
    global _store
    if _store is None:
        _store = ForumStore()
    return _store


def set_store(store: ForumStore | None) -> None:
    """Replace the store singleton (startup seeding and tests)."""
    global _store
    _store = store
