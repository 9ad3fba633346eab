"""
Content store - read access to roadmaps, concepts and prerequisite edges.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_tree.engines.roadmap.types import PrerequisiteEdge, Quiz, Roadmap, Topic
from knowledge_tree.kernel.models.roadmap import Concept, ConceptDependency
from knowledge_tree.kernel.models.roadmap import Roadmap as RoadmapRow
from knowledge_tree.logging_config import get_logger

logger = get_logger(__name__)


class RoadmapSummary(BaseModel):
    """Roadmap with its concept count, for the dashboard."""

    roadmap: Roadmap
    concept_count: int


def parse_id(value: str) -> Optional[uuid.UUID]:
    """Opaque id -> UUID, or None when it cannot name a stored row."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def roadmap_from_row(row: RoadmapRow) -> Roadmap:
    return Roadmap(
        id=str(row.id),
        title=row.title,
        description=row.description,
        icon=row.icon,
        created_at=row.created_at,
    )


def topic_from_row(row: Concept) -> Topic:
    quiz = None
    if row.quiz:
        try:
            quiz = Quiz.model_validate(row.quiz)
        except ValidationError as exc:
            # Broken quiz content must not hide the concept from the roadmap
            logger.warning(
                "Ignoring malformed quiz",
                extra={"concept_id": str(row.id), "errors": exc.error_count()},
            )
    return Topic(
        id=str(row.id),
        roadmap_id=str(row.roadmap_id),
        title=row.title,
        short_description=row.short_description,
        article_content=row.article_content,
        quiz=quiz,
        created_at=row.created_at,
    )


class ContentStore:
    """Reads roadmap content. Content is authored elsewhere and read-only here."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_roadmaps(self) -> List[RoadmapSummary]:
        """All roadmaps, oldest first, with concept counts."""
        q = (
            select(RoadmapRow, func.count(Concept.id))
            .outerjoin(Concept, Concept.roadmap_id == RoadmapRow.id)
            .group_by(RoadmapRow.id)
            .order_by(RoadmapRow.created_at, RoadmapRow.title)
        )
        result = await self.session.execute(q)
        return [
            RoadmapSummary(roadmap=roadmap_from_row(row), concept_count=count)
            for row, count in result.all()
        ]

    async def get_roadmap(self, roadmap_id: str) -> Optional[Roadmap]:
        rid = parse_id(roadmap_id)
        if rid is None:
            return None
        row = await self.session.get(RoadmapRow, rid)
        return roadmap_from_row(row) if row else None

    async def list_topics(self, roadmap_id: str) -> List[Topic]:
        """Concepts of one roadmap in creation order."""
        rid = parse_id(roadmap_id)
        if rid is None:
            return []
        q = (
            select(Concept)
            .where(Concept.roadmap_id == rid)
            .order_by(Concept.created_at, Concept.title)
        )
        result = await self.session.execute(q)
        return [topic_from_row(row) for row in result.scalars().all()]

    async def get_topic(self, topic_id: str) -> Optional[Topic]:
        tid = parse_id(topic_id)
        if tid is None:
            return None
        row = await self.session.get(Concept, tid)
        return topic_from_row(row) if row else None

    async def list_edges(self) -> List[PrerequisiteEdge]:
        """Every prerequisite edge; callers scope them to a roadmap."""
        result = await self.session.execute(select(ConceptDependency))
        return [
            PrerequisiteEdge(topic_id=str(row.concept_id), prerequisite_id=str(row.prerequisite_id))
            for row in result.scalars().all()
        ]
