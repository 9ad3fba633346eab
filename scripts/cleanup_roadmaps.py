"""Remove duplicate and empty roadmaps from the configured database.

Usage:
    python scripts/cleanup_roadmaps.py
"""
import asyncio
import os
import sys

# Ensure we can import knowledge_tree
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from knowledge_tree.config import get_settings
from knowledge_tree.database import async_session_maker, close_db
from knowledge_tree.logging_config import configure_logging
from knowledge_tree.maintenance import RoadmapMaintenance


async def main() -> None:
    async with async_session_maker() as session:
        maintenance = RoadmapMaintenance(session)
        duplicates = await maintenance.remove_duplicate_roadmaps()
        empty = await maintenance.remove_empty_roadmaps()
        await session.commit()

    print(f"Removed {len(duplicates.removed)} duplicate roadmap(s)")
    print(f"Removed {len(empty.removed)} empty roadmap(s)")
    print("\nRemaining roadmaps:")
    for item in empty.kept:
        print(f"  - {item.title}: {item.concept_count} concepts")
    await close_db()


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(log_level=settings.log_level, environment=settings.environment, debug=settings.debug)
    asyncio.run(main())
