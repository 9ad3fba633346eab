"""
Prerequisite graph restricted to one roadmap's topics.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from knowledge_tree.engines.roadmap.types import PrerequisiteEdge, Topic


@dataclass
class PrerequisiteGraph:
    """Prerequisite ids per topic, in topic order, plus the edges that were dropped."""

    topic_ids: List[str]
    prerequisites: Dict[str, List[str]]
    edges: List[PrerequisiteEdge] = field(default_factory=list)
    dropped_edges: List[PrerequisiteEdge] = field(default_factory=list)

    @classmethod
    def build(cls, topics: Iterable[Topic], edges: Iterable[PrerequisiteEdge]) -> "PrerequisiteGraph":
        """
        Keep only edges whose both ends are topics of this roadmap.

        Dangling and cross-roadmap references are dropped instead of locking a
        topic forever; duplicate edges are collapsed.
        """
        topic_ids = [t.id for t in topics]
        known = set(topic_ids)
        prerequisites: Dict[str, List[str]] = {tid: [] for tid in topic_ids}
        kept: List[PrerequisiteEdge] = []
        dropped: List[PrerequisiteEdge] = []
        seen = set()

        for edge in edges:
            if edge.topic_id not in known or edge.prerequisite_id not in known:
                dropped.append(edge)
                continue
            key = (edge.topic_id, edge.prerequisite_id)
            if key in seen:
                continue
            seen.add(key)
            prerequisites[edge.topic_id].append(edge.prerequisite_id)
            kept.append(edge)

        return cls(topic_ids=topic_ids, prerequisites=prerequisites, edges=kept, dropped_edges=dropped)

    def prerequisites_of(self, topic_id: str) -> List[str]:
        return self.prerequisites.get(topic_id, [])
