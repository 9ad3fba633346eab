"""
Pydantic schemas for API request/response validation.
"""

from knowledge_tree.schemas.common import HealthResponse
from knowledge_tree.schemas.roadmap import (
    CompletionRequest,
    CompletionResponse,
    ConceptDetailResponse,
    QuestionResultResponse,
    QuizQuestionPublic,
    QuizResultResponse,
    QuizSubmitRequest,
    RoadmapResponse,
    RoadmapViewResponse,
)

__all__ = [
    "HealthResponse",
    "CompletionRequest",
    "CompletionResponse",
    "ConceptDetailResponse",
    "QuestionResultResponse",
    "QuizQuestionPublic",
    "QuizResultResponse",
    "QuizSubmitRequest",
    "RoadmapResponse",
    "RoadmapViewResponse",
]
