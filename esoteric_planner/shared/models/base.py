"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models.
It includes the declarative base, the portable column types and the
timestamp mixins shared by every table.

Model Hierarchy:
================
    Base                     ← SQLAlchemy declarative base
       │
       ├── CreatedAtMixin    ← created_at only (append-only records)
       │
       └── TimestampMixin    ← created_at + updated_at

Portable Types:
===============
    UUIDType  → native UUID on PostgreSQL, CHAR(32) elsewhere
    JSONType  → JSONB on PostgreSQL, JSON elsewhere

Usage:
======
    from esoteric_planner.shared.models.base import Base, CreatedAtMixin, JSONType, UUIDType

    class VoicePost(Base, CreatedAtMixin):
        __tablename__ = "voice_posts"
        id: Mapped[uuid.UUID] = mapped_column(UUIDType, primary_key=True, default=uuid.uuid4)
        tags: Mapped[list[str]] = mapped_column(JSONType, default=list)
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, DateTime, Uuid, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


UUIDType = Uuid(as_uuid=True)

JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime read from the database to aware UTC.

    Drivers without timezone support (SQLite) hand back naive values,
    which are stored as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the application inherit from this class either
    directly or together with one of the mixins below.
    """


class CreatedAtMixin:
    """
    Mixin for records that are written once and never updated.

    created_at is set in Python (microsecond precision) so that
    "newest first" ordering is stable even for rows created in the
    same second, with a server default as a fallback for raw inserts.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
        index=True,
    )


class TimestampMixin(CreatedAtMixin):
    """
    Mixin that adds automatic created_at/updated_at tracking.

    Database Behavior:
    ==================
    - created_at: Set on INSERT
    - updated_at: Set on INSERT, refreshed by SQLAlchemy on every UPDATE
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
