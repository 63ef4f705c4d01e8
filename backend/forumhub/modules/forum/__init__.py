"""
Forum Module - Group discussions held in memory.

Features:
- Users seeded from fixtures
- Forums with symmetric membership
- Append-only message history
"""

from forumhub.modules.forum.fixtures import build_store, load_fixtures
from forumhub.modules.forum.service import ForumService
from forumhub.modules.forum.store import ForumStore, get_store, set_store

__all__ = [
    "ForumService",
    "ForumStore",
    "build_store",
    "get_store",
    "load_fixtures",
    "set_store",
]
