"""
Domain records for the roadmap core.

The engines only ever see these typed records; storage rows and HTTP payloads
are converted at the boundary.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TopicStatus(str, Enum):
    """Per-learner status of a topic."""
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    COMPLETED = "completed"


class QuizQuestion(BaseModel):
    """One multiple-choice question. Stored JSON uses camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    prompt: str = Field(alias="question")
    options: List[str]
    correct_index: int = Field(alias="correctAnswer")
    explanation: str = ""

    @model_validator(mode="after")
    def _correct_index_in_range(self) -> "QuizQuestion":
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(
                f"Question {self.id}: correct answer index {self.correct_index} "
                f"outside {len(self.options)} options"
            )
        return self


class Quiz(BaseModel):
    """Ordered questions attached to a topic."""

    questions: List[QuizQuestion] = []


class Topic(BaseModel):
    """A learning unit (stored as a concept)."""

    id: str
    roadmap_id: str
    title: str
    short_description: Optional[str] = None
    article_content: Optional[str] = None
    quiz: Optional[Quiz] = None
    created_at: Optional[datetime] = None


class Roadmap(BaseModel):
    """A subject track."""

    id: str
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = None


class PrerequisiteEdge(BaseModel):
    """topic_id requires prerequisite_id."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topic_id: str = Field(alias="concept_id")
    prerequisite_id: str


class CompletionRecord(BaseModel):
    """Proof a learner passed a topic's quiz."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str
    topic_id: str = Field(alias="concept_id")
    completed_at: datetime
    quiz_score: Optional[int] = None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive timestamps; treat them as UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def creation_order(topics: List[Topic]) -> List[Topic]:
    """Topics sorted by creation time; input order when any timestamp is missing."""
    if any(t.created_at is None for t in topics):
        return list(topics)
    return sorted(topics, key=lambda t: _as_utc(t.created_at))
