"""
Database Module

This module provides database connectivity and session management.

Architecture Overview:
======================
    FastAPI Route
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (session.py)     ← one per request, commit/rollback/close
        │  passed to services
        ▼
    Repositories (repositories/)  ← UserRepository, ContentStrategyRepository, ...
        │  SQL
        ▼
    PostgreSQL

Usage in FastAPI:
=================
    from fastapi import Depends
    from esoteric_planner.shared.db import get_db

    @app.get("/strategies")
    async def list_strategies(db: AsyncSession = Depends(get_db)):
        ...
"""

from esoteric_planner.shared.db.session import (
    get_db,
    init_db,
    close_db,
    check_db_connection,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "check_db_connection",
    "AsyncSessionLocal",
    "engine",
]
