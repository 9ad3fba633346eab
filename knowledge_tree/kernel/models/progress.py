"""
Learner progress model - one completion record per (user, concept).
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from knowledge_tree.kernel.models.base import Base, generate_uuid


class UserProgress(Base):
    """
    Completion record written when a learner passes a concept's quiz.
    Append-only: never updated or deleted by the application.
    """

    __tablename__ = "user_progress"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=generate_uuid)
    # Opaque id from the identity provider
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    concept_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("concepts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quiz_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (UniqueConstraint("user_id", "concept_id", name="uq_user_progress_user_concept"),)
