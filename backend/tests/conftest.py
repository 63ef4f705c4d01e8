from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from forumhub.main import app
from forumhub.models.user import User
from forumhub.modules.forum.service import ForumService
from forumhub.modules.forum.store import ForumStore, set_store


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        moment = self.current
        self.current += timedelta(seconds=1)
        return moment


@pytest.fixture
def store():
    """Store seeded with three users and no forums."""
    store = ForumStore()
    store.add_user(User(id="1", name="Ada", picture="ada.png"))
    store.add_user(User(id="2", name="Alan"))
    store.add_user(User(id="3", name="Grace"))
    return store


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def service(store, clock):
    return ForumService(store, clock=clock)


@pytest.fixture
def fixture_document():
    return {
        "users": [
            {"id": "1", "name": "Ada", "forums": ["1"]},
            {"id": "2", "name": "Alan", "picture": "alan.png"},
            {"id": "3", "name": "Grace"},
        ],
        "forums": [
            {"id": "1", "name": "General", "users": ["2"]},
        ],
        "messages": [
            {
                "id": "1",
                "forumId": "1",
                "userId": "1",
                "text": "first",
                "createdAt": "2024-03-01T09:00:00.000Z",
            },
            {
                "id": "2",
                "forumId": "1",
                "userId": "2",
                "text": "second",
                "createdAt": "2024-03-01T10:00:00.000Z",
            },
        ],
    }


@pytest.fixture()
def client():
    """Client running the app lifespan, seeded from the bundled fixtures."""
    with TestClient(app) as test_client:
        yield test_client
    set_store(None)
