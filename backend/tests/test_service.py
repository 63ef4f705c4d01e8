"""Tests for forum queries and mutations."""

from datetime import datetime, timedelta, timezone

import pytest

from forumhub.core.exceptions import (
    AlreadyMemberError,
    InvalidArgumentError,
    NotAMemberError,
    NotFoundError,
)
from forumhub.modules.forum.service import ForumService, format_timestamp


def assert_symmetric(store):
    for user in store.users.values():
        for forum in store.forums.values():
            assert (forum.id in user.forum_ids) == (user.id in forum.user_ids)


class TestTimestamps:
    def test_format_matches_iso_with_millis(self):
        moment = datetime(2024, 5, 1, 12, 0, 3, 45_678, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024-05-01T12:00:03.045Z"

    def test_converts_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        moment = datetime(2024, 5, 1, 14, 0, 0, tzinfo=plus_two)
        assert format_timestamp(moment) == "2024-05-01T12:00:00.000Z"

    def test_string_order_is_chronological(self):
        early = datetime(2024, 5, 1, 9, 59, 59, 999_000, tzinfo=timezone.utc)
        late = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
        assert format_timestamp(early) < format_timestamp(late)


class TestQueries:
    def test_list_users(self, service):
        assert [u.name for u in service.list_users()] == ["Ada", "Alan", "Grace"]

    def test_list_forums_empty(self, service):
        assert service.list_forums() == []

    def test_get_forum_missing(self, service):
        with pytest.raises(NotFoundError) as exc:
            service.get_forum("99")
        assert exc.value.entity == "Forum"
        assert exc.value.entity_id == "99"
        assert '"99"' in str(exc.value)

    def test_get_user_joined_forums(self, service):
        general = service.create_forum("General", "1")
        random = service.create_forum("Random", "2")
        service.join_forum("1", random.id)
        assert service.get_user_joined_forums("1") == [general, random]

    def test_get_user_joined_forums_unknown_user(self, service):
        with pytest.raises(NotFoundError) as exc:
            service.get_user_joined_forums("42")
        assert exc.value.entity == "User"

    def test_get_messages_newest_first(self, service):
        forum = service.create_forum("General", "1")
        first = service.post_message("1", forum.id, "t1")
        second = service.post_message("1", forum.id, "t2")
        assert first.created_at < second.created_at
        assert service.get_messages(forum.id) == [second, first]

    def test_get_messages_only_for_forum(self, service):
        general = service.create_forum("General", "1")
        random = service.create_forum("Random", "1")
        service.post_message("1", general.id, "in general")
        service.post_message("1", random.id, "in random")
        assert [m.text for m in service.get_messages(random.id)] == ["in random"]

    def test_get_messages_unknown_forum(self, service):
        with pytest.raises(NotFoundError):
            service.get_messages("7")

    def test_resolvers(self, service):
        forum = service.create_forum("General", "1")
        service.join_forum("3", forum.id)
        message = service.post_message("3", forum.id, "hey")
        assert [u.id for u in service.get_forum_members(forum)] == ["1", "3"]
        assert service.get_forum_history(forum) == [message]
        assert service.get_message_author(message).name == "Grace"


class TestCreateForum:
    def test_creates_forum_with_creator(self, service, store):
        forum = service.create_forum("General", "1")
        assert forum.id == "1"
        assert forum.name == "General"
        assert forum.user_ids == ["1"]
        assert forum.message_ids == []
        assert store.find_forum("1") is forum

    def test_creator_is_member_on_both_sides(self, service, store):
        forum = service.create_forum("General", "1")
        assert store.users["1"].forum_ids == [forum.id]
        assert store.is_member(store.users["1"], forum)

    def test_blank_name_rejected(self, service, store):
        with pytest.raises(InvalidArgumentError) as exc:
            service.create_forum("  ", "1")
        assert exc.value.field == "name"
        assert store.forums == {}
        assert store.users["1"].forum_ids == []

    def test_unknown_user_checked_before_name(self, service):
        with pytest.raises(NotFoundError):
            service.create_forum("", "99")

    def test_ids_are_sequential(self, service):
        ids = [service.create_forum(f"forum {i}", "1").id for i in range(3)]
        assert ids == ["1", "2", "3"]


class TestJoinForum:
    def test_join(self, service, store):
        forum = service.create_forum("General", "1")
        membership = service.join_forum("2", forum.id)
        assert membership.forum is forum
        assert membership.user is store.users["2"]
        assert forum.user_ids == ["1", "2"]
        assert store.users["2"].forum_ids == [forum.id]

    def test_join_twice_fails(self, service):
        forum = service.create_forum("General", "1")
        service.join_forum("2", forum.id)
        with pytest.raises(AlreadyMemberError) as exc:
            service.join_forum("2", forum.id)
        assert exc.value.user_id == "2"
        assert exc.value.forum_id == forum.id
        assert forum.user_ids == ["1", "2"]

    def test_creator_cannot_join_again(self, service):
        forum = service.create_forum("General", "1")
        with pytest.raises(AlreadyMemberError):
            service.join_forum("1", forum.id)

    def test_unknown_user(self, service):
        forum = service.create_forum("General", "1")
        with pytest.raises(NotFoundError) as exc:
            service.join_forum("99", forum.id)
        assert exc.value.entity == "User"

    def test_missing_forum_reported_first(self, service):
        with pytest.raises(NotFoundError) as exc:
            service.join_forum("99", "98")
        assert exc.value.entity == "Forum"
        assert exc.value.entity_id == "98"


class TestPostMessage:
    def test_post(self, service, store):
        forum = service.create_forum("General", "1")
        message = service.post_message("1", forum.id, "hello")
        assert message.id == "1"
        assert message.forum_id == forum.id
        assert message.text == "hello"
        assert message.user_id == "1"
        assert message.created_at == "2024-05-01T12:00:00.000Z"
        assert forum.message_ids == ["1"]
        assert store.find_message("1") is message

    def test_non_member_rejected(self, service, store):
        forum = service.create_forum("General", "1")
        with pytest.raises(NotAMemberError):
            service.post_message("2", forum.id, "hi")
        assert forum.message_ids == []
        assert store.messages == {}
        assert "2" not in forum.user_ids

    def test_blank_text_checked_first(self, service):
        with pytest.raises(InvalidArgumentError) as exc:
            service.post_message("99", "98", "   ")
        assert exc.value.field == "text"

    def test_missing_forum_reported_first(self, service):
        with pytest.raises(NotFoundError) as exc:
            service.post_message("99", "98", "hi")
        assert exc.value.entity == "Forum"

    def test_unknown_user(self, service):
        forum = service.create_forum("General", "1")
        with pytest.raises(NotFoundError) as exc:
            service.post_message("99", forum.id, "hi")
        assert exc.value.entity == "User"

    def test_message_ids_are_global(self, service):
        general = service.create_forum("General", "1")
        random = service.create_forum("Random", "1")
        ids = [
            service.post_message("1", general.id, "a").id,
            service.post_message("1", random.id, "b").id,
            service.post_message("1", general.id, "c").id,
        ]
        assert ids == ["1", "2", "3"]

    def test_uses_clock_at_posting_time(self, store):
        moment = datetime(2030, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        service = ForumService(store, clock=lambda: moment)
        forum = service.create_forum("General", "1")
        message = service.post_message("1", forum.id, "later")
        assert message.created_at == "2030-01-02T03:04:05.000Z"


class TestInvariants:
    def test_operation_sequence_keeps_invariants(self, service, store):
        general = service.create_forum("General", "1")
        random = service.create_forum("Random", "2")
        service.join_forum("3", general.id)
        service.join_forum("1", random.id)

        history_sizes = {}
        for user_id, forum, text in [
            ("1", general, "a"),
            ("3", general, "b"),
            ("2", random, "c"),
            ("1", random, "d"),
            ("2", general, "rejected"),
        ]:
            try:
                service.post_message(user_id, forum.id, text)
            except NotAMemberError:
                pass

            assert_symmetric(store)
            for item in store.forums.values():
                in_global = [
                    m for m in store.messages.values() if m.forum_id == item.id
                ]
                assert len(item.message_ids) == len(in_global)
                assert len(item.message_ids) >= history_sizes.get(item.id, 0)
                history_sizes[item.id] = len(item.message_ids)

        assert [int(i) for i in store.messages] == [1, 2, 3, 4]
        assert len(general.message_ids) == 2
        assert len(random.message_ids) == 2
