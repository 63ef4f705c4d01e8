"""
API Version 1 Router.

Combines all API endpoints under /api/v1 prefix.
"""

from fastapi import APIRouter

from forumhub.api.v1.endpoints import forum

router = APIRouter()

# Include endpoint routers
router.include_router(forum.router, tags=["Forum"])
