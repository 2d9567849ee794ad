"""
Base Repository

This module provides the generic repositories every entity repository
builds on.

What This Provides:
===================
BaseRepository[Model]
- get(id)            → Fetch single record by UUID (optionally row-locked)
- list()             → List records with pagination, filtering and ordering
- count()            → Count records with filtering
- create()           → Create new record
- apply()            → Write field changes to a loaded record
- delete()           → Hard delete record

OwnedRepository[Model]   (models with a user_id column)
- get_for_user()     → Fetch a record only if it belongs to the user
- list_for_user()    → The user's records, newest first
- delete_for_user()  → Delete a record only if it belongs to the user
- delete_all_for_user() → Bulk delete (admin user removal)

Ownership:
==========
Every user-facing read and delete goes through the *_for_user methods,
so a record owned by somebody else behaves exactly like a missing one.

    repo.get_for_user(strategy_id, user_id)
        SELECT * FROM content_strategies WHERE id = :id AND user_id = :user_id

flush() vs commit():
====================
Repository methods only flush(). The transaction is committed once by
get_db() after the request handler returns, so a failure anywhere in the
request rolls back everything the request did.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete as sql_delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from esoteric_planner.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Example:
        class UserRepository(BaseRepository[User]):
            def __init__(self, session: AsyncSession):
                super().__init__(User, session)
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, VoicePost)
            session: Async database session from get_db()
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID, *, for_update: bool = False) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        With for_update the row stays locked until the request transaction
        ends, and an instance already in the session is overwritten with the
        committed values (populate_existing).

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM users WHERE id = :id FOR UPDATE
        """
        query = select(self.model).where(self.model.id == record_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list(
        self,
        *,
        offset: int = 0,
        limit: Optional[int] = None,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = "created_at",
        order_desc: bool = True,
    ) -> list[ModelType]:
        """
        List records with optional pagination and filtering.

        Args:
            offset: Number of records to skip
            limit: Maximum records to return (None = all)
            filters: Dict of field=value for WHERE clauses
            order_by: Field name to order results by
            order_desc: If True, order descending; if False, ascending

        Returns:
            List of model instances

        SQL Generated:
            SELECT * FROM voice_posts
            WHERE user_id = :user_id
            ORDER BY created_at DESC
        """
        query = select(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            query = query.order_by(order_field.desc() if order_desc else order_field)

        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """
        Count records with optional equality filtering.

        SQL Generated:
            SELECT COUNT(*) FROM content_strategies
        """
        query = select(sql_count()).select_from(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance to the session, flushes to send the INSERT and
        refreshes to pick up database-generated values.

        Example:
            post = await repo.create(user_id=user.id, original_text="...")
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def apply(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """
        Apply field changes to an already loaded instance and flush.

        None values are written, so fields can be cleared.
        """
        for field, value in kwargs.items():
            if hasattr(instance, field):
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete(self, record_id: UUID) -> bool:
        """
        Hard delete a record by ID.

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True


class OwnedRepository(BaseRepository[ModelType]):
    """
    Repository for models that belong to a user (have a user_id column).
    """

    async def get_for_user(self, record_id: UUID, user_id: UUID) -> Optional[ModelType]:
        """
        Get a record only if it belongs to the user.

        Returns:
            The model instance, or None if missing or owned by someone else
        """
        result = await self.session.execute(
            select(self.model).where(
                self.model.id == record_id,
                self.model.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        limit: Optional[int] = None,
    ) -> list[ModelType]:
        """The user's records, newest first."""
        return await self.list(filters={"user_id": user_id}, limit=limit)

    async def delete_for_user(self, record_id: UUID, user_id: UUID) -> bool:
        """
        Delete a record only if it belongs to the user.

        Returns:
            True if deleted, False if missing or owned by someone else
        """
        instance = await self.get_for_user(record_id, user_id)
        if not instance:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """
        Bulk delete every record of the user.

        Returns:
            Number of deleted rows
        """
        result = await self.session.execute(
            sql_delete(self.model).where(self.model.user_id == user_id)
        )
        await self.session.flush()
        return result.rowcount or 0
