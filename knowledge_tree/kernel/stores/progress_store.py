"""
Progress store - learners' completion records (DB-backed).
"""

from typing import List, Set

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_tree.engines.roadmap.types import CompletionRecord
from knowledge_tree.exceptions import CompletionWriteError
from knowledge_tree.kernel.models.progress import UserProgress
from knowledge_tree.kernel.stores.content_store import parse_id
from knowledge_tree.logging_config import get_logger

logger = get_logger(__name__)


def _record_from_row(row: UserProgress) -> CompletionRecord:
    return CompletionRecord(
        user_id=row.user_id,
        topic_id=str(row.concept_id),
        completed_at=row.completed_at,
        quiz_score=row.quiz_score,
    )


class ProgressStore:
    """
    Reads and appends completion records. Records are never updated or
    deleted here; one record per (user, concept) is enforced by the schema.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_completions(self, user_id: str) -> List[CompletionRecord]:
        q = (
            select(UserProgress)
            .where(UserProgress.user_id == user_id)
            .order_by(UserProgress.completed_at)
        )
        result = await self.session.execute(q)
        return [_record_from_row(row) for row in result.scalars().all()]

    async def completed_topic_ids(self, user_id: str) -> Set[str]:
        q = select(UserProgress.concept_id).where(UserProgress.user_id == user_id)
        result = await self.session.execute(q)
        return {str(concept_id) for concept_id in result.scalars().all()}

    async def record_completion(self, user_id: str, topic_id: str, score: int) -> CompletionRecord:
        """
        Append a completion record.

        Raises:
            CompletionWriteError: the id is malformed or the database rejected
                the row. The session transaction is rolled back.
        """
        concept_id = parse_id(topic_id)
        if concept_id is None:
            raise CompletionWriteError(f"Malformed concept id: {topic_id}")

        row = UserProgress(user_id=user_id, concept_id=concept_id, quiz_score=score)
        self.session.add(row)
        try:
            await self.session.flush()
            await self.session.refresh(row)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to record completion", extra={"topic_id": topic_id})
            raise CompletionWriteError(f"Could not record completion for {topic_id}") from exc

        return _record_from_row(row)
