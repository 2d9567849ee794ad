"""
Archetype Result Model

The outcome of the brand archetype quiz. Scoring happens in the browser;
the server stores the result so that content generation can write in the
brand's voice.
"""

from typing import Optional
import uuid

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, CreatedAtMixin, JSONType, UUIDType


class ArchetypeResult(Base, CreatedAtMixin):
    """
    Brand archetype quiz result.

    Attributes:
        archetype_name: Leading archetypes, e.g. "Маг-Мудрец"
        archetype_description: Text shown to the user
        answers: Raw quiz answers (option indexes)
        recommendations: Brand keywords
        brand_colors / brand_fonts: Visual suggestions
        content_style: Style hints fed into prompts
        trigger_words: Words the brand voice should use
    """

    __tablename__ = "archetype_results"

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

    archetype_name: Mapped[str] = mapped_column(Text, nullable=False)
    archetype_description: Mapped[str] = mapped_column(Text, nullable=False)

    answers: Mapped[list[int]] = mapped_column(JSONType, default=list, nullable=False)
    recommendations: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    brand_colors: Mapped[Optional[list[str]]] = mapped_column(JSONType, nullable=True)
    brand_fonts: Mapped[Optional[list[str]]] = mapped_column(JSONType, nullable=True)
    content_style: Mapped[Optional[list[str]]] = mapped_column(JSONType, nullable=True)
    trigger_words: Mapped[Optional[list[str]]] = mapped_column(JSONType, nullable=True)

    def __repr__(self) -> str:
        return f"<ArchetypeResult(id={self.id}, name={self.archetype_name!r})>"
