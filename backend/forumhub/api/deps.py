"""
Shared API dependencies.
"""

from fastapi import Query

from forumhub.core.config import settings


def get_acting_user_id(
    user_id: str | None = Query(
        None,
        alias="userId",
        description="Acting user ID (defaults to the configured user)",
    ),
) -> str:
    """Resolve the acting user, falling back to the default identity."""
    return settings.default_user_id if user_id is None else user_id
