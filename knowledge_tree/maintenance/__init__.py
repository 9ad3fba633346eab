"""Data-quality maintenance for roadmap content."""

from knowledge_tree.maintenance.cleanup import CleanupReport, RoadmapCount, RoadmapMaintenance

__all__ = ["CleanupReport", "RoadmapCount", "RoadmapMaintenance"]
