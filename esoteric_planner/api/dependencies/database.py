"""
Database Dependency

FastAPI dependency for database sessions.

This module provides the get_db dependency that yields async database sessions
to route handlers. The session is automatically committed on success and
rolled back on error.

Tests replace it through app.dependency_overrides[get_db].

Usage:
======
    from esoteric_planner.api.dependencies.database import DbSession

    @router.get("/health/db")
    async def check(db: DbSession):
        await db.execute(text("SELECT 1"))
"""

from typing import Annotated, AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.db import get_db as _get_db


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency for database sessions.

    Yields an async database session for the duration of the request.
    The session is automatically:
    - Committed on success
    - Rolled back on exception
    - Closed after the request
    """
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
