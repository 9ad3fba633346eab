"""
Roadmap engines - unlock status, graph layout and quiz grading.

All engines are pure: they take topics, prerequisite edges and the learner's
completed set as explicit inputs and keep nothing between calls.
"""

from knowledge_tree.engines.roadmap.graph import PrerequisiteGraph
from knowledge_tree.engines.roadmap.layout_engine import (
    LayoutConfig,
    LayoutEngine,
    LayoutMode,
    LevelAssignment,
    Position,
)
from knowledge_tree.engines.roadmap.quiz_grader import QuizGrader, QuizResult, QuestionResult
from knowledge_tree.engines.roadmap.types import (
    CompletionRecord,
    PrerequisiteEdge,
    Quiz,
    QuizQuestion,
    Roadmap,
    Topic,
    TopicStatus,
)
from knowledge_tree.engines.roadmap.unlock_evaluator import UnlockEvaluator, UnlockPolicy

__all__ = [
    "PrerequisiteGraph",
    "LayoutConfig",
    "LayoutEngine",
    "LayoutMode",
    "LevelAssignment",
    "Position",
    "QuizGrader",
    "QuizResult",
    "QuestionResult",
    "CompletionRecord",
    "PrerequisiteEdge",
    "Quiz",
    "QuizQuestion",
    "Roadmap",
    "Topic",
    "TopicStatus",
    "UnlockEvaluator",
    "UnlockPolicy",
]
