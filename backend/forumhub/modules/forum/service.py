"""
Forum Service - Queries and mutations over the forum store.
"""

from collections.abc import Callable
from datetime import datetime, timezone

from forumhub.core.exceptions import (
    AlreadyMemberError,
    InvalidArgumentError,
    NotAMemberError,
    NotFoundError,
)
from forumhub.models.forum import Forum, ForumMembership, Message
from forumhub.models.user import User
from forumhub.modules.forum.store import ForumStore


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with milliseconds and a Z suffix.

    The fixed width keeps string order identical to chronological order.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class ForumService:
    """
    Service exposing forum queries and mutations.

    Every method runs synchronously to completion, so a mutation's
    read-validate-write cycle cannot interleave with another request.

    Usage:
        forum = ForumService(get_store())
        general = forum.create_forum("General", user_id="1")
        forum.post_message("1", general.id, "hello")
    """

    def __init__(
        self,
        store: ForumStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize forum service.

        Args:
            store: Store holding all entities
            clock: Source of message timestamps
        """
        self.store = store
        self.clock = clock

    # ==================== Lookups ====================

    def _require_user(self, user_id: str) -> User:
        user = self.store.find_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def _require_forum(self, forum_id: str) -> Forum:
        forum = self.store.find_forum(forum_id)
        if forum is None:
            raise NotFoundError("Forum", forum_id)
        return forum

    def _require_pair(self, user_id: str, forum_id: str) -> tuple[User, Forum]:
        """Resolve both entities, reporting a missing forum first."""
        forum = self._require_forum(forum_id)
        user = self._require_user(user_id)
        return user, forum

    # ==================== Queries ====================

    def list_users(self) -> list[User]:
        """Get all users."""
        return self.store.list_users()

    def list_forums(self) -> list[Forum]:
        """Get all forums."""
        return self.store.list_forums()

    def get_user(self, user_id: str) -> User:
        return self._require_user(user_id)

    def get_forum(self, forum_id: str) -> Forum:
        """Get forum by ID."""
        return self._require_forum(forum_id)

    def get_user_joined_forums(self, user_id: str) -> list[Forum]:
        """Get forums the user belongs to, in join order."""
        user = self._require_user(user_id)
        return [self.store.forums[forum_id] for forum_id in user.forum_ids]

    def get_forum_members(self, forum: Forum) -> list[User]:
        return [self.store.users[user_id] for user_id in forum.user_ids]

    def get_forum_history(self, forum: Forum) -> list[Message]:
        """Forum messages in posting order."""
        return [self.store.messages[message_id] for message_id in forum.message_ids]

    def get_message_author(self, message: Message) -> User:
        return self.store.users[message.user_id]

    def get_messages(self, forum_id: str) -> list[Message]:
        """
        Get messages posted to a forum, newest first.

        Args:
            forum_id: Forum ID

        Returns:
            Messages sorted by creation time, descending

        Raises:
            NotFoundError: Forum does not exist
        """
        self._require_forum(forum_id)

        messages = [
            message
            for message in self.store.list_messages()
            if message.forum_id == forum_id
        ]
        messages.sort(key=lambda message: message.created_at, reverse=True)
        return messages

    # ==================== Mutations ====================

    def create_forum(self, name: str, user_id: str) -> Forum:
        """
        Create new forum with the creator as its first member.

        Args:
            name: Forum name (must not be blank)
            user_id: Creator user ID

        Returns:
            Created forum

        Raises:
            NotFoundError: Creator does not exist
            InvalidArgumentError: Name is blank
        """
        user = self._require_user(user_id)

        if not name.strip():
            raise InvalidArgumentError("name")

        forum = Forum(id=self.store.next_forum_id(), name=name)
        self.store.add_forum(forum)
        self.store.link_membership(user, forum)

        return forum

    def join_forum(self, user_id: str, forum_id: str) -> ForumMembership:
        """
        Add user to forum members.

        Args:
            user_id: Joining user ID
            forum_id: Forum ID

        Returns:
            Updated forum and user

        Raises:
            NotFoundError: Forum or user does not exist
            AlreadyMemberError: User already belongs to the forum
        """
        user, forum = self._require_pair(user_id, forum_id)

        if user.is_member_of(forum.id) or forum.has_member(user.id):
            raise AlreadyMemberError(user_id, forum_id)

        self.store.link_membership(user, forum)

        return ForumMembership(forum=forum, user=user)

    def post_message(self, user_id: str, forum_id: str, text: str) -> Message:
        """
        Post message to a forum the author belongs to.

        Args:
            user_id: Author user ID
            forum_id: Target forum ID
            text: Message text (must not be blank)

        Returns:
            Created message

        Raises:
            InvalidArgumentError: Text is blank
            NotFoundError: Forum or user does not exist
            NotAMemberError: Author is not a member of the forum
        """
        if not text.strip():
            raise InvalidArgumentError("text")

        user, forum = self._require_pair(user_id, forum_id)

        if not self.store.is_member(user, forum):
            raise NotAMemberError(user_id, forum_id)

        message = Message(
            id=self.store.next_message_id(),
            forum_id=forum.id,
            user_id=user.id,
            text=text,
            created_at=format_timestamp(self.clock()),
        )
        self.store.append_message(forum, message)

        return message
