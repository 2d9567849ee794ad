"""
Content Strategy Model

A saved content plan: one entry per day, each holding the idea of the
day and up to four ready-made format variants.

POSTS COLUMN (JSON):
====================
    [
      {
        "day": 1,
        "idea": "Почему расклады не сбываются",
        "type": "Экспертный",
        "post":     {"content": "...", "hashtags": ["#таро"]},
        "carousel": {"content": "Слайд 1 ---  Слайд 2", "hashtags": []},
        "reels":    {"content": "Хук: ...", "hashtags": []},
        "stories":  {"content": "Сторис 1: ...", "hashtags": []}
      },
      ...
    ]

Format variants are optional: the two-step pipeline saves ideas first
and fills formats on demand.
"""

from typing import Any, Optional
import uuid

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, CreatedAtMixin, JSONType, UUIDType


class ContentStrategy(Base, CreatedAtMixin):
    """
    Content plan owned by a user.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owner user ID
        topic: Niche / topic the plan was generated for
        goal: sale or engagement
        days: Number of days in the plan
        posts: List of ContentPost dicts (see module docstring)
    """

    __tablename__ = "content_strategies"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    topic: Mapped[str] = mapped_column(Text, nullable=False)
    goal: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    days: Mapped[int] = mapped_column(Integer, default=7, nullable=False)

    posts: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONType,
        default=list,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ContentStrategy(id={self.id}, topic={self.topic!r}, days={self.days})>"
