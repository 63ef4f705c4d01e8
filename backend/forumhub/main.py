"""
ForumHub Backend Application.

FastAPI application serving users, forums and messages
from an in-memory store seeded at startup.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from loguru import logger

from forumhub.api.v1 import router as api_v1_router
from forumhub.core.config import settings
from forumhub.modules.forum import get_store, load_fixtures, set_store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting ForumHub Backend...")

    # Seed the store once, before any request is accepted
    set_store(load_fixtures(settings.fixtures_path))
    logger.info(f"Default acting user: {settings.default_user_id}")

    logger.info("ForumHub Backend started successfully")

    yield

    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ForumHub Backend

    ## Features

    - **Users**: Seeded from fixtures
    - **Forums**: Create and join discussion groups
    - **Messages**: Post to forums you belong to

    ## Documentation

    - [API Docs](/docs) - Interactive Swagger UI
    - [ReDoc](/redoc) - Alternative documentation
    """,
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_v1_router, prefix=settings.api_v1_prefix)


@app.get("/health", tags=["System"])
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    store = get_store()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "users": len(store.users),
        "forums": len(store.forums),
        "messages": len(store.messages),
    }


@app.get("/", tags=["System"])
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "api": settings.api_v1_prefix,
    }
