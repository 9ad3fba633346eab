"""
Roadmap maintenance - duplicate and empty roadmap removal.

Roadmap titles are not unique in storage, so repeated content imports can
leave several roadmaps with the same title. Within each title group the
roadmap with the most concepts survives (newest on a tie).
"""

import uuid
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_tree.kernel.models.progress import UserProgress
from knowledge_tree.kernel.models.roadmap import Concept, ConceptDependency, Roadmap
from knowledge_tree.logging_config import get_logger

logger = get_logger(__name__)


class RoadmapCount(BaseModel):
    """A roadmap and how many concepts it holds."""

    id: uuid.UUID
    title: str
    concept_count: int
    created_at: Optional[datetime] = None


class CleanupReport(BaseModel):
    """What a maintenance pass kept and removed."""

    kept: List[RoadmapCount] = []
    removed: List[RoadmapCount] = []


class RoadmapMaintenance:
    """Destructive data-quality operations; callers own the commit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _roadmap_counts(self) -> List[RoadmapCount]:
        q = (
            select(Roadmap.id, Roadmap.title, Roadmap.created_at, func.count(Concept.id))
            .outerjoin(Concept, Concept.roadmap_id == Roadmap.id)
            .group_by(Roadmap.id)
        )
        result = await self.session.execute(q)
        return [
            RoadmapCount(id=rid, title=title, created_at=created_at, concept_count=count)
            for rid, title, created_at, count in result.all()
        ]

    async def _delete_roadmap(self, roadmap_id: uuid.UUID) -> None:
        """Remove a roadmap with its concepts, their edges and their progress rows."""
        concept_ids = select(Concept.id).where(Concept.roadmap_id == roadmap_id)
        await self.session.execute(
            delete(ConceptDependency).where(
                or_(
                    ConceptDependency.concept_id.in_(concept_ids),
                    ConceptDependency.prerequisite_id.in_(concept_ids),
                )
            )
        )
        await self.session.execute(delete(UserProgress).where(UserProgress.concept_id.in_(concept_ids)))
        await self.session.execute(delete(Concept).where(Concept.roadmap_id == roadmap_id))
        await self.session.execute(delete(Roadmap).where(Roadmap.id == roadmap_id))

    async def remove_duplicate_roadmaps(self) -> CleanupReport:
        """Collapse roadmaps sharing a title into the richest, newest one."""
        groups: Dict[str, List[RoadmapCount]] = defaultdict(list)
        for item in await self._roadmap_counts():
            groups[item.title].append(item)

        report = CleanupReport()
        for title, group in groups.items():
            group.sort(
                key=lambda r: (r.concept_count, r.created_at.timestamp() if r.created_at else float("-inf")),
                reverse=True,
            )
            keep, duplicates = group[0], group[1:]
            report.kept.append(keep)
            if not duplicates:
                continue
            logger.info(
                "Keeping roadmap among duplicates",
                extra={"title": title, "roadmap_id": str(keep.id), "duplicates": len(duplicates)},
            )
            for duplicate in duplicates:
                logger.info(
                    "Deleting duplicate roadmap",
                    extra={"roadmap_id": str(duplicate.id), "concept_count": duplicate.concept_count},
                )
                await self._delete_roadmap(duplicate.id)
                report.removed.append(duplicate)

        await self.session.flush()
        return report

    async def remove_empty_roadmaps(self) -> CleanupReport:
        """Delete roadmaps that have no concepts."""
        report = CleanupReport()
        for item in await self._roadmap_counts():
            if item.concept_count > 0:
                report.kept.append(item)
                continue
            logger.info("Deleting empty roadmap", extra={"roadmap_id": str(item.id), "title": item.title})
            await self._delete_roadmap(item.id)
            report.removed.append(item)

        await self.session.flush()
        return report
