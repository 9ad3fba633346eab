"""
Layout engine - 2-D positions for the roadmap graph.

Layered layout (default): a topic's row is its level, the length of the
longest prerequisite chain ending at it. Rows are centred on x_origin so
prerequisites read top-to-bottom and same-row nodes never overlap.

Snake layout: creation order laid out `columns` per row, alternating
direction on every row. Ignores edges, so edges may point backwards.
"""

from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from pydantic import BaseModel, Field

from knowledge_tree.engines.roadmap.graph import PrerequisiteGraph
from knowledge_tree.engines.roadmap.types import PrerequisiteEdge, Topic, creation_order
from knowledge_tree.logging_config import get_logger

logger = get_logger(__name__)


class LayoutMode(str, Enum):
    """Available roadmap layouts."""
    LAYERED = "layered"
    SNAKE = "snake"


class LayoutConfig(BaseModel):
    """
    Spacing in abstract units. Rendered nodes are roughly 320-400 wide and
    110-200 tall, so the defaults keep neighbours apart.
    """

    horizontal_spacing: float = Field(400.0, gt=0)
    vertical_spacing: float = Field(200.0, gt=0)
    x_origin: float = 400.0
    y_origin: float = 100.0
    columns: int = Field(3, ge=1)


class Position(BaseModel):
    """Node position."""

    x: float
    y: float


class LevelAssignment(BaseModel):
    """Level per topic plus any back-edges (topic_id, prerequisite_id) cut to break cycles."""

    levels: Dict[str, int]
    back_edges: List[Tuple[str, str]] = []

    @property
    def has_cycle(self) -> bool:
        return bool(self.back_edges)


class LayoutEngine:
    """Computes positions; pure, safe to call on every render."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def compute_levels(
        self,
        topics: List[Topic],
        edges: Iterable[PrerequisiteEdge],
        graph: Optional[PrerequisiteGraph] = None,
    ) -> LevelAssignment:
        """
        Longest-path levels, memoized so shared prerequisites (diamonds) take
        the max rather than the sum.

        A prerequisite that is still being computed when reached again closes
        a cycle: it contributes level 0 and the edge is reported as a back-edge.
        """
        graph = graph or PrerequisiteGraph.build(topics, edges)
        levels: Dict[str, int] = {}
        in_progress: Set[str] = set()
        back_edges: List[Tuple[str, str]] = []

        # Iterative depth-first walk; frame = (topic_id, remaining prerequisites, collected levels)
        for root_id in graph.topic_ids:
            if root_id in levels:
                continue
            in_progress.add(root_id)
            stack: List[Tuple[str, Iterator[str], List[int]]] = [
                (root_id, iter(graph.prerequisites_of(root_id)), [])
            ]
            while stack:
                topic_id, pending, contributions = stack[-1]
                for prerequisite_id in pending:
                    if prerequisite_id in levels:
                        contributions.append(levels[prerequisite_id])
                    elif prerequisite_id in in_progress:
                        back_edges.append((topic_id, prerequisite_id))
                        contributions.append(0)
                    else:
                        in_progress.add(prerequisite_id)
                        stack.append((prerequisite_id, iter(graph.prerequisites_of(prerequisite_id)), []))
                        break
                else:
                    stack.pop()
                    in_progress.discard(topic_id)
                    levels[topic_id] = 1 + max(contributions) if contributions else 0
                    if stack:
                        stack[-1][2].append(levels[topic_id])

        if back_edges:
            logger.warning(
                "Prerequisite cycle detected; back-edges counted as level 0",
                extra={"back_edges": [list(e) for e in back_edges]},
            )
        return LevelAssignment(
            levels={tid: levels[tid] for tid in graph.topic_ids},
            back_edges=back_edges,
        )

    def layout(
        self,
        topics: List[Topic],
        edges: Iterable[PrerequisiteEdge],
        mode: LayoutMode = LayoutMode.LAYERED,
        graph: Optional[PrerequisiteGraph] = None,
    ) -> Dict[str, Position]:
        """Position for every topic id."""
        if mode == LayoutMode.SNAKE:
            return self._snake(topics)
        levels = self.compute_levels(topics, edges, graph).levels
        return self._layered(topics, levels)

    def _layered(self, topics: List[Topic], levels: Dict[str, int]) -> Dict[str, Position]:
        cfg = self.config
        rows: Dict[int, List[str]] = {}
        for topic in topics:
            rows.setdefault(levels[topic.id], []).append(topic.id)

        positions: Dict[str, Position] = {}
        for level, row in rows.items():
            centre_offset = (len(row) - 1) * cfg.horizontal_spacing / 2
            for slot, topic_id in enumerate(row):
                positions[topic_id] = Position(
                    x=slot * cfg.horizontal_spacing - centre_offset + cfg.x_origin,
                    y=level * cfg.vertical_spacing + cfg.y_origin,
                )
        return {t.id: positions[t.id] for t in topics}

    def _snake(self, topics: List[Topic]) -> Dict[str, Position]:
        cfg = self.config
        positions: Dict[str, Position] = {}
        for index, topic in enumerate(creation_order(topics)):
            row, col = divmod(index, cfg.columns)
            if row % 2 == 1:
                col = cfg.columns - 1 - col
            positions[topic.id] = Position(
                x=col * cfg.horizontal_spacing + cfg.x_origin,
                y=row * cfg.vertical_spacing + cfg.y_origin,
            )
        return {t.id: positions[t.id] for t in topics}
