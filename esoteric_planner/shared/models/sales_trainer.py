"""
Sales Trainer Models

The money trainer rewrites an expert's draft answer to a client question
into an answer that leads to a paid consultation.

    SalesTrainerSample   ← curated by admins, global, used as few-shot examples
    SalesTrainerSession  ← one row per user request, private to that user
"""

from typing import Optional
import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, CreatedAtMixin, JSONType, UUIDType


class SalesTrainerSample(Base, CreatedAtMixin):
    """Reference question / draft / improved answer written by a coach."""

    __tablename__ = "sales_trainer_samples"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4,
    )

    client_question: Mapped[str] = mapped_column(Text, nullable=False)
    expert_draft: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    improved_answer: Mapped[str] = mapped_column(Text, nullable=False)
    coach_feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pain_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    tags: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<SalesTrainerSample(id={self.id}, pain_type={self.pain_type})>"


class SalesTrainerSession(Base, CreatedAtMixin):
    """A user's trainer request and the improved answer they received."""

    __tablename__ = "sales_trainer_sessions"

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

    client_question: Mapped[str] = mapped_column(Text, nullable=False)
    expert_draft: Mapped[str] = mapped_column(Text, nullable=False)
    improved_answer: Mapped[str] = mapped_column(Text, nullable=False)
    pain_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    offer_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<SalesTrainerSession(id={self.id}, user_id={self.user_id})>"
