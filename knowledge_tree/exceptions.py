"""
Domain exceptions raised by the roadmap engines, stores and orchestrator.

Routers translate these into HTTP errors; pure-computation anomalies
(cycles, dangling edges) are recovered locally and never raised.
"""


class KnowledgeTreeError(Exception):
    """Base class for all Knowledge Tree errors."""


class UnknownTopicError(KnowledgeTreeError):
    """A topic id does not belong to the roadmap being evaluated."""

    def __init__(self, topic_id: str):
        self.topic_id = topic_id
        super().__init__(f"Unknown topic: {topic_id}")


class CompletionWriteError(KnowledgeTreeError):
    """The completion store rejected a completion record."""


class QuizGradingError(KnowledgeTreeError):
    """A quiz submission cannot be graded (empty quiz, missing answers)."""
