"""
Pydantic schemas for the roadmap API.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from knowledge_tree.engines.roadmap.types import Quiz, TopicStatus
from knowledge_tree.orchestration.roadmap_orchestrator import CompletionOutcome, RenderEdge, RenderNode


class RoadmapResponse(BaseModel):
    """Roadmap card on the dashboard."""

    id: str
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = None
    concept_count: int = 0


class RoadmapViewResponse(BaseModel):
    """Roadmap plus the render-ready graph for the current learner."""

    roadmap: RoadmapResponse
    layout: str
    nodes: List[RenderNode]
    edges: List[RenderEdge]
    completed_count: int


class QuizQuestionPublic(BaseModel):
    """Question as shown to the learner; the correct answer is withheld."""

    id: str
    question: str
    options: List[str]


class ConceptDetailResponse(BaseModel):
    """Article and quiz for one concept."""

    id: str
    roadmap_id: str
    title: str
    short_description: Optional[str] = None
    article_content: Optional[str] = None
    status: TopicStatus
    questions: List[QuizQuestionPublic] = []


class QuizSubmitRequest(BaseModel):
    """Selected option index per question id."""

    answers: Dict[str, int] = Field(..., min_length=1)


class QuestionResultResponse(BaseModel):
    question_id: str
    selected_index: int
    correct_index: int
    correct: bool
    explanation: str = ""


class QuizResultResponse(BaseModel):
    """Graded quiz, the completion outcome and the refreshed graph."""

    score: int
    correct_count: int
    total: int
    passed: bool
    results: List[QuestionResultResponse]
    completion: CompletionOutcome
    nodes: List[RenderNode]


class CompletionRequest(BaseModel):
    """Completion event sent by the renderer."""

    score: int = Field(..., ge=0, le=100)


class CompletionResponse(BaseModel):
    completion: CompletionOutcome
    nodes: List[RenderNode]


def public_questions(quiz: Optional[Quiz]) -> List[QuizQuestionPublic]:
    if quiz is None:
        return []
    return [
        QuizQuestionPublic(id=q.id, question=q.prompt, options=q.options)
        for q in quiz.questions
    ]
