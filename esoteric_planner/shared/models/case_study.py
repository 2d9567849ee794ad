"""
Case Study Model

A client review turned into a selling case: the raw review, the expert's
before / action / after notes and the generated headlines, quote and body.
"""

from typing import Optional
import uuid

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, CreatedAtMixin, JSONType, UUIDType


class CaseStudy(Base, CreatedAtMixin):
    """
    Case study owned by a user.

    Attributes:
        review_text: Client review (often OCR'd from a screenshot)
        before / action / after: Expert's short description of the work
        tags: Topics, e.g. ["отношения", "таро"]
        generated_headlines: Three headline variants
        generated_quote: Strongest sentence of the review
        generated_body: Full case text
    """

    __tablename__ = "case_studies"

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

    review_text: Mapped[str] = mapped_column(Text, nullable=False)
    before: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    action: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    after: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)

    generated_headlines: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    generated_quote: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    generated_body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<CaseStudy(id={self.id}, user_id={self.user_id})>"
