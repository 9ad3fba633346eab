"""
Builders shared by the test suites.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_tree.engines.roadmap.types import PrerequisiteEdge, Quiz, QuizQuestion, Topic
from knowledge_tree.kernel.models import Concept, ConceptDependency, Roadmap

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_topic(topic_id: str, minutes: Optional[int] = None, roadmap_id: str = "rm-1") -> Topic:
    """Topic with an optional creation offset (minutes after BASE_TIME)."""
    created_at = BASE_TIME + timedelta(minutes=minutes) if minutes is not None else None
    return Topic(id=topic_id, roadmap_id=roadmap_id, title=f"Topic {topic_id}", created_at=created_at)


def edge(topic_id: str, prerequisite_id: str) -> PrerequisiteEdge:
    return PrerequisiteEdge(topic_id=topic_id, prerequisite_id=prerequisite_id)


def sample_quiz(correct: List[int]) -> Quiz:
    """Quiz with one question per entry; each question has four options."""
    return Quiz(
        questions=[
            QuizQuestion(
                id=f"q{i + 1}",
                prompt=f"Question {i + 1}?",
                options=["a", "b", "c", "d"],
                correct_index=index,
                explanation=f"Option {index} is right.",
            )
            for i, index in enumerate(correct)
        ]
    )


def quiz_json(correct: List[int]) -> dict:
    """The stored (camelCase) form of sample_quiz."""
    return {
        "questions": [
            {
                "id": f"q{i + 1}",
                "question": f"Question {i + 1}?",
                "options": ["a", "b", "c", "d"],
                "correctAnswer": index,
                "explanation": f"Option {index} is right.",
            }
            for i, index in enumerate(correct)
        ]
    }


async def seed_roadmap(
    session: AsyncSession,
    title: str,
    concepts: List[str],
    prerequisites: Optional[Dict[str, List[str]]] = None,
    created_at: datetime = BASE_TIME,
    quiz: Optional[dict] = None,
) -> Dict[str, Concept]:
    """
    Insert a roadmap whose concepts are created one minute apart in list
    order. Returns concepts by title; each carries .roadmap_id.
    """
    roadmap = Roadmap(title=title, description=f"{title} track", icon="book", created_at=created_at)
    session.add(roadmap)
    await session.flush()

    by_title: Dict[str, Concept] = {}
    for i, name in enumerate(concepts):
        concept = Concept(
            roadmap_id=roadmap.id,
            title=name,
            short_description=f"About {name}",
            article_content=f"<p>{name}</p>",
            quiz=quiz,
            created_at=created_at + timedelta(minutes=i),
        )
        session.add(concept)
        by_title[name] = concept
    await session.flush()

    for name, prereqs in (prerequisites or {}).items():
        for prereq in prereqs:
            session.add(
                ConceptDependency(concept_id=by_title[name].id, prerequisite_id=by_title[prereq].id)
            )
    await session.flush()
    return by_title
