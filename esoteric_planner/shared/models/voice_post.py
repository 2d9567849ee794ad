"""
Voice Post Model

A social post produced from a dictated voice note: the transcript is kept
next to the refined text.
"""

from typing import Optional
import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, CreatedAtMixin, UUIDType


class VoicePost(Base, CreatedAtMixin):
    """Voice note transcript and the post generated from it."""

    __tablename__ = "voice_posts"

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

    original_text: Mapped[str] = mapped_column(Text, nullable=False)
    refined_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tone: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<VoicePost(id={self.id}, user_id={self.user_id})>"
