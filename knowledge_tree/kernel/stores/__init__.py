"""Stores - async SQLAlchemy access for roadmap content and learner progress."""

from knowledge_tree.kernel.stores.content_store import ContentStore, RoadmapSummary
from knowledge_tree.kernel.stores.progress_store import ProgressStore

__all__ = ["ContentStore", "RoadmapSummary", "ProgressStore"]
