"""
Unlock evaluator - locked / unlocked / completed status per topic.

Two policies:
- prerequisites (default): a topic unlocks once every one of its explicit
  prerequisites is completed. Topics without prerequisites are always open.
- linear: topics are ordered by creation time and a topic unlocks only when
  every earlier topic is completed. Prerequisite edges are ignored.
"""

from enum import Enum
from typing import AbstractSet, Dict, Iterable, List, Optional

from knowledge_tree.engines.roadmap.graph import PrerequisiteGraph
from knowledge_tree.engines.roadmap.types import PrerequisiteEdge, Topic, TopicStatus, creation_order


class UnlockPolicy(str, Enum):
    """How completion of one topic opens others."""
    PREREQUISITES = "prerequisites"
    LINEAR = "linear"


class UnlockEvaluator:
    """Pure status computation; holds no state between calls."""

    @classmethod
    def evaluate(
        cls,
        topics: List[Topic],
        edges: Iterable[PrerequisiteEdge],
        completed_ids: AbstractSet[str],
        policy: UnlockPolicy = UnlockPolicy.PREREQUISITES,
        graph: Optional[PrerequisiteGraph] = None,
    ) -> Dict[str, TopicStatus]:
        """Return a status for every topic, keyed by topic id, in topic order."""
        if policy == UnlockPolicy.LINEAR:
            return cls._evaluate_linear(topics, completed_ids)

        graph = graph or PrerequisiteGraph.build(topics, edges)
        statuses: Dict[str, TopicStatus] = {}
        for topic in topics:
            if topic.id in completed_ids:
                statuses[topic.id] = TopicStatus.COMPLETED
            elif all(p in completed_ids for p in graph.prerequisites_of(topic.id)):
                statuses[topic.id] = TopicStatus.UNLOCKED
            else:
                statuses[topic.id] = TopicStatus.LOCKED
        return statuses

    @classmethod
    def _evaluate_linear(cls, topics: List[Topic], completed_ids: AbstractSet[str]) -> Dict[str, TopicStatus]:
        by_order: Dict[str, TopicStatus] = {}
        earlier_done = True
        for topic in creation_order(topics):
            if topic.id in completed_ids:
                by_order[topic.id] = TopicStatus.COMPLETED
            elif earlier_done:
                by_order[topic.id] = TopicStatus.UNLOCKED
            else:
                by_order[topic.id] = TopicStatus.LOCKED
            earlier_done = earlier_done and topic.id in completed_ids
        # Report in the caller's topic order
        return {t.id: by_order[t.id] for t in topics}

    @classmethod
    def is_unlocked(
        cls,
        topic_id: str,
        topics: List[Topic],
        edges: Iterable[PrerequisiteEdge],
        completed_ids: AbstractSet[str],
        policy: UnlockPolicy = UnlockPolicy.PREREQUISITES,
    ) -> bool:
        """Whether a learner may open a topic (completed topics stay open)."""
        status = cls.evaluate(topics, edges, completed_ids, policy).get(topic_id)
        return status in (TopicStatus.UNLOCKED, TopicStatus.COMPLETED)
