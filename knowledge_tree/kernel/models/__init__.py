"""
Kernel data models.
"""

from knowledge_tree.kernel.models.base import Base, CreatedAtMixin, generate_uuid
from knowledge_tree.kernel.models.roadmap import Concept, ConceptDependency, Roadmap
from knowledge_tree.kernel.models.progress import UserProgress

__all__ = [
    # Base
    "Base",
    "CreatedAtMixin",
    "generate_uuid",
    # Content
    "Roadmap",
    "Concept",
    "ConceptDependency",
    # Progress
    "UserProgress",
]
