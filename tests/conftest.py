"""
Pytest fixtures for Knowledge Tree tests.
"""

from pathlib import Path
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from knowledge_tree.database import build_engine, build_session_maker, init_db
from knowledge_tree.engines.roadmap.types import PrerequisiteEdge, Topic
from tests.helpers import edge, make_topic


@pytest.fixture
def diamond_topics() -> List[Topic]:
    """A; B and C need A; D needs B and C."""
    return [make_topic("A", 0), make_topic("B", 1), make_topic("C", 2), make_topic("D", 3)]


@pytest.fixture
def diamond_edges() -> List[PrerequisiteEdge]:
    return [edge("B", "A"), edge("C", "A"), edge("D", "B"), edge("D", "C")]


@pytest_asyncio.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Temp-file SQLite engine with all tables created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'knowledge_tree_test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session on the temp database; uncommitted work is rolled back."""
    session_maker = build_session_maker(db_engine)
    async with session_maker() as session:
        yield session
        await session.rollback()
