"""
Roadmap orchestrator - composes unlock status and layout into the node/edge
view the client renders, and applies completion events.

The completed set is the only mutable state. It is append-only and is
updated only after the completion store has accepted the write.
"""

from datetime import datetime
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Optional, Protocol

from pydantic import BaseModel

from knowledge_tree.engines.roadmap.graph import PrerequisiteGraph
from knowledge_tree.engines.roadmap.layout_engine import LayoutEngine, LayoutMode
from knowledge_tree.engines.roadmap.quiz_grader import PASS_THRESHOLD
from knowledge_tree.engines.roadmap.types import CompletionRecord, PrerequisiteEdge, Topic, TopicStatus
from knowledge_tree.engines.roadmap.unlock_evaluator import UnlockEvaluator, UnlockPolicy
from knowledge_tree.exceptions import CompletionWriteError, UnknownTopicError
from knowledge_tree.logging_config import get_logger

logger = get_logger(__name__)


class CompletionWriter(Protocol):
    """Persists completion records (see kernel.stores.ProgressStore)."""

    async def record_completion(self, user_id: str, topic_id: str, score: int) -> CompletionRecord:
        ...


class RenderNode(BaseModel):
    """Node as consumed by the roadmap renderer."""

    id: str
    x: float
    y: float
    status: TopicStatus
    title: str
    short_description: Optional[str] = None


class RenderEdge(BaseModel):
    """Edge drawn from prerequisite (source) to dependent topic (target)."""

    id: str
    source: str
    target: str


class RoadmapView(BaseModel):
    """Everything the renderer needs for one roadmap."""

    nodes: List[RenderNode]
    edges: List[RenderEdge]


class CompletionOutcome(BaseModel):
    """Result of a completion event."""

    topic_id: str
    score: int
    passed: bool
    recorded: bool = False
    already_completed: bool = False
    completed_at: Optional[datetime] = None
    error: Optional[str] = None


class RoadmapOrchestrator:
    """
    One learner's view of one roadmap.

    Usage:
        orchestrator = RoadmapOrchestrator(user_id, topics, edges, completed, progress_store)
        view = orchestrator.view()
        outcome = await orchestrator.complete_topic(topic_id, score=90)
    """

    def __init__(
        self,
        user_id: str,
        topics: List[Topic],
        edges: Iterable[PrerequisiteEdge],
        completed_ids: AbstractSet[str],
        completion_writer: CompletionWriter,
        unlock_policy: UnlockPolicy = UnlockPolicy.PREREQUISITES,
        layout_engine: Optional[LayoutEngine] = None,
        layout_mode: LayoutMode = LayoutMode.LAYERED,
        pass_threshold: int = PASS_THRESHOLD,
    ):
        self.user_id = user_id
        self.topics = list(topics)
        self.graph = PrerequisiteGraph.build(self.topics, edges)
        self.completion_writer = completion_writer
        self.unlock_policy = unlock_policy
        self.layout_engine = layout_engine or LayoutEngine()
        self.layout_mode = layout_mode
        self.pass_threshold = pass_threshold
        self._topics_by_id: Dict[str, Topic] = {t.id: t for t in self.topics}
        self._completed: FrozenSet[str] = frozenset(completed_ids)
        self._statuses = self._evaluate()

        if self.graph.dropped_edges:
            logger.debug(
                "Ignored prerequisite edges outside roadmap",
                extra={"dropped_edges": len(self.graph.dropped_edges)},
            )

    @property
    def completed_ids(self) -> FrozenSet[str]:
        return self._completed

    @property
    def statuses(self) -> Dict[str, TopicStatus]:
        return dict(self._statuses)

    def _evaluate(self) -> Dict[str, TopicStatus]:
        return UnlockEvaluator.evaluate(
            self.topics,
            self.graph.edges,
            self._completed,
            self.unlock_policy,
            graph=self.graph,
        )

    def _require_topic(self, topic_id: str) -> Topic:
        topic = self._topics_by_id.get(topic_id)
        if topic is None:
            raise UnknownTopicError(topic_id)
        return topic

    def status_of(self, topic_id: str) -> TopicStatus:
        self._require_topic(topic_id)
        return self._statuses[topic_id]

    def can_open(self, topic_id: str) -> bool:
        """Click gate: locked topics do not open."""
        return self.status_of(topic_id) != TopicStatus.LOCKED

    def view(self) -> RoadmapView:
        """Render-ready nodes and edges for the current completed set."""
        positions = self.layout_engine.layout(
            self.topics,
            self.graph.edges,
            self.layout_mode,
            graph=self.graph,
        )
        nodes = [
            RenderNode(
                id=topic.id,
                x=positions[topic.id].x,
                y=positions[topic.id].y,
                status=self._statuses[topic.id],
                title=topic.title,
                short_description=topic.short_description,
            )
            for topic in self.topics
        ]
        edges = [
            RenderEdge(
                id=f"{edge.prerequisite_id}-{edge.topic_id}",
                source=edge.prerequisite_id,
                target=edge.topic_id,
            )
            for edge in self.graph.edges
        ]
        return RoadmapView(nodes=nodes, edges=edges)

    async def complete_topic(self, topic_id: str, score: int) -> CompletionOutcome:
        """
        Apply a completion event (topic, quiz score out of 100).

        Below the pass threshold nothing changes. A rejected write leaves the
        completed set untouched and is reported on the outcome.
        """
        self._require_topic(topic_id)
        if not 0 <= score <= 100:
            raise ValueError(f"Quiz score must be between 0 and 100, got {score}")

        if score < self.pass_threshold:
            return CompletionOutcome(topic_id=topic_id, score=score, passed=False)

        if topic_id in self._completed:
            return CompletionOutcome(topic_id=topic_id, score=score, passed=True, already_completed=True)

        try:
            record = await self.completion_writer.record_completion(self.user_id, topic_id, score)
        except CompletionWriteError as exc:
            logger.warning(
                "Completion write rejected; unlock state unchanged",
                extra={"topic_id": topic_id, "error": str(exc)},
            )
            return CompletionOutcome(topic_id=topic_id, score=score, passed=True, error=str(exc))

        self._completed = self._completed | {topic_id}
        self._statuses = self._evaluate()
        logger.info("Topic completed", extra={"topic_id": topic_id, "score": score})
        return CompletionOutcome(
            topic_id=topic_id,
            score=score,
            passed=True,
            recorded=True,
            completed_at=record.completed_at,
        )
