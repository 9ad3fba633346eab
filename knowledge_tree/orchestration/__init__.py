"""Orchestration layer - composes the roadmap engines for one learner."""

from knowledge_tree.orchestration.roadmap_orchestrator import (
    CompletionOutcome,
    CompletionWriter,
    RenderEdge,
    RenderNode,
    RoadmapOrchestrator,
    RoadmapView,
)

__all__ = [
    "CompletionOutcome",
    "CompletionWriter",
    "RenderEdge",
    "RenderNode",
    "RoadmapOrchestrator",
    "RoadmapView",
]
