"""
Roadmap content models - roadmaps, concepts and prerequisite edges.
"""

import uuid
from typing import Any, List, Optional

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from knowledge_tree.kernel.models.base import Base, CreatedAtMixin, generate_uuid


class Roadmap(Base, CreatedAtMixin):
    """
    A named subject track.
    Titles are not unique at this layer; see maintenance.cleanup.
    """

    __tablename__ = "roadmaps"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    concepts: Mapped[List["Concept"]] = relationship(
        back_populates="roadmap",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Concept(Base, CreatedAtMixin):
    """One learning unit: article plus optional quiz (JSON)."""

    __tablename__ = "concepts"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=generate_uuid)
    roadmap_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("roadmaps.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    short_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    article_content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    quiz: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    roadmap: Mapped["Roadmap"] = relationship(back_populates="concepts")


class ConceptDependency(Base):
    """
    Directed prerequisite edge: concept_id requires prerequisite_id.
    Global table, not scoped to a roadmap.
    """

    __tablename__ = "concept_dependencies"

    concept_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("concepts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    prerequisite_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("concepts.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
