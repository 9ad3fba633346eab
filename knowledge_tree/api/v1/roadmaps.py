"""
Roadmap endpoints - dashboard, roadmap graph, concept detail, quiz and
completion events.
"""

from typing import List, Tuple

from fastapi import APIRouter, HTTPException, status

from knowledge_tree.api.deps import (
    ContentStoreDep,
    CurrentUserId,
    LayoutEngineDep,
    LayoutModeDep,
    ProgressStoreDep,
    UnlockPolicyDep,
)
from knowledge_tree.config import get_settings
from knowledge_tree.engines.roadmap.layout_engine import LayoutEngine, LayoutMode
from knowledge_tree.engines.roadmap.quiz_grader import QuizGrader
from knowledge_tree.engines.roadmap.types import Roadmap
from knowledge_tree.engines.roadmap.unlock_evaluator import UnlockPolicy
from knowledge_tree.exceptions import QuizGradingError, UnknownTopicError
from knowledge_tree.kernel.stores import ContentStore, ProgressStore
from knowledge_tree.orchestration.roadmap_orchestrator import RoadmapOrchestrator
from knowledge_tree.schemas.roadmap import (
    CompletionRequest,
    CompletionResponse,
    ConceptDetailResponse,
    QuestionResultResponse,
    QuizResultResponse,
    QuizSubmitRequest,
    RoadmapResponse,
    RoadmapViewResponse,
    public_questions,
)


router = APIRouter()


def _roadmap_response(roadmap: Roadmap, concept_count: int) -> RoadmapResponse:
    return RoadmapResponse(
        id=roadmap.id,
        title=roadmap.title,
        description=roadmap.description,
        icon=roadmap.icon,
        created_at=roadmap.created_at,
        concept_count=concept_count,
    )


async def _load_orchestrator(
    roadmap_id: str,
    user_id: str,
    content: ContentStore,
    progress: ProgressStore,
    policy: UnlockPolicy,
    layout_engine: LayoutEngine,
    layout_mode: LayoutMode = LayoutMode.LAYERED,
) -> Tuple[Roadmap, RoadmapOrchestrator]:
    """Read roadmap, concepts, edges and completions, or 404."""
    roadmap = await content.get_roadmap(roadmap_id)
    if roadmap is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Roadmap not found")

    topics = await content.list_topics(roadmap_id)
    edges = await content.list_edges()
    completed = await progress.completed_topic_ids(user_id)
    orchestrator = RoadmapOrchestrator(
        user_id=user_id,
        topics=topics,
        edges=edges,
        completed_ids=completed,
        completion_writer=progress,
        unlock_policy=policy,
        layout_engine=layout_engine,
        layout_mode=layout_mode,
        pass_threshold=get_settings().pass_threshold,
    )
    return roadmap, orchestrator


def _require_open(orchestrator: RoadmapOrchestrator, concept_id: str) -> None:
    """404 for concepts outside the roadmap, 403 for locked ones."""
    try:
        can_open = orchestrator.can_open(concept_id)
    except UnknownTopicError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Concept not found")
    if not can_open:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Concept is locked until its prerequisites are completed",
        )


@router.get("", response_model=List[RoadmapResponse])
async def list_roadmaps(content: ContentStoreDep, _: CurrentUserId):
    """Roadmaps for the dashboard."""
    summaries = await content.list_roadmaps()
    return [_roadmap_response(s.roadmap, s.concept_count) for s in summaries]


@router.get("/{roadmap_id}", response_model=RoadmapViewResponse)
async def get_roadmap_view(
    roadmap_id: str,
    user_id: CurrentUserId,
    content: ContentStoreDep,
    progress: ProgressStoreDep,
    policy: UnlockPolicyDep,
    layout_engine: LayoutEngineDep,
    layout_mode: LayoutModeDep,
):
    """Roadmap graph with positions and the learner's status per concept."""
    roadmap, orchestrator = await _load_orchestrator(
        roadmap_id, user_id, content, progress, policy, layout_engine, layout_mode
    )
    view = orchestrator.view()
    return RoadmapViewResponse(
        roadmap=_roadmap_response(roadmap, len(orchestrator.topics)),
        layout=layout_mode.value,
        nodes=view.nodes,
        edges=view.edges,
        completed_count=sum(1 for t in orchestrator.topics if t.id in orchestrator.completed_ids),
    )


@router.get("/{roadmap_id}/concepts/{concept_id}", response_model=ConceptDetailResponse)
async def get_concept(
    roadmap_id: str,
    concept_id: str,
    user_id: CurrentUserId,
    content: ContentStoreDep,
    progress: ProgressStoreDep,
    policy: UnlockPolicyDep,
    layout_engine: LayoutEngineDep,
):
    """Article and quiz questions for an unlocked concept."""
    _, orchestrator = await _load_orchestrator(roadmap_id, user_id, content, progress, policy, layout_engine)
    _require_open(orchestrator, concept_id)
    topic = next(t for t in orchestrator.topics if t.id == concept_id)
    return ConceptDetailResponse(
        id=topic.id,
        roadmap_id=topic.roadmap_id,
        title=topic.title,
        short_description=topic.short_description,
        article_content=topic.article_content,
        status=orchestrator.status_of(concept_id),
        questions=public_questions(topic.quiz),
    )


@router.post("/{roadmap_id}/concepts/{concept_id}/quiz", response_model=QuizResultResponse)
async def submit_quiz(
    roadmap_id: str,
    concept_id: str,
    data: QuizSubmitRequest,
    user_id: CurrentUserId,
    content: ContentStoreDep,
    progress: ProgressStoreDep,
    policy: UnlockPolicyDep,
    layout_engine: LayoutEngineDep,
):
    """
    Grade a quiz and, when it passes, record the completion.
    A failed write still returns the graded result with completion.recorded = false.
    """
    _, orchestrator = await _load_orchestrator(roadmap_id, user_id, content, progress, policy, layout_engine)
    _require_open(orchestrator, concept_id)
    topic = next(t for t in orchestrator.topics if t.id == concept_id)

    try:
        result = QuizGrader.grade(topic.quiz, data.answers, orchestrator.pass_threshold)
    except QuizGradingError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    outcome = await orchestrator.complete_topic(concept_id, result.score)
    return QuizResultResponse(
        score=result.score,
        correct_count=result.correct_count,
        total=result.total,
        passed=result.passed,
        results=[QuestionResultResponse(**r.model_dump()) for r in result.results],
        completion=outcome,
        nodes=orchestrator.view().nodes,
    )


@router.post("/{roadmap_id}/concepts/{concept_id}/complete", response_model=CompletionResponse)
async def complete_concept(
    roadmap_id: str,
    concept_id: str,
    data: CompletionRequest,
    user_id: CurrentUserId,
    content: ContentStoreDep,
    progress: ProgressStoreDep,
    policy: UnlockPolicyDep,
    layout_engine: LayoutEngineDep,
):
    """Completion event (concept, score) reported by the client."""
    _, orchestrator = await _load_orchestrator(roadmap_id, user_id, content, progress, policy, layout_engine)
    _require_open(orchestrator, concept_id)
    outcome = await orchestrator.complete_topic(concept_id, data.score)
    if outcome.error:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=outcome.error)
    return CompletionResponse(completion=outcome, nodes=orchestrator.view().nodes)
