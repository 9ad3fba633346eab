"""
FastAPI dependencies for database sessions, learner identity and the
roadmap orchestrator.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_tree.config import get_settings
from knowledge_tree.database import get_db
from knowledge_tree.engines.roadmap.layout_engine import LayoutConfig, LayoutEngine, LayoutMode
from knowledge_tree.engines.roadmap.unlock_evaluator import UnlockPolicy
from knowledge_tree.kernel.stores import ContentStore, ProgressStore
from knowledge_tree.logging_config import user_id_var

DbSession = Annotated[AsyncSession, Depends(get_db)]

USER_ID_HEADER = "X-User-Id"


async def get_current_user_id(
    x_user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> str:
    """
    Opaque learner id handed over by the identity provider in front of this
    service. Authentication happens upstream; a missing id means 401.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    user_id_var.set(user_id)
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]


def get_content_store(db: DbSession) -> ContentStore:
    return ContentStore(db)


def get_progress_store(db: DbSession) -> ProgressStore:
    return ProgressStore(db)


ContentStoreDep = Annotated[ContentStore, Depends(get_content_store)]
ProgressStoreDep = Annotated[ProgressStore, Depends(get_progress_store)]


def get_layout_engine() -> LayoutEngine:
    settings = get_settings()
    return LayoutEngine(
        LayoutConfig(
            horizontal_spacing=settings.layout_horizontal_spacing,
            vertical_spacing=settings.layout_vertical_spacing,
            x_origin=settings.layout_x_origin,
            y_origin=settings.layout_y_origin,
            columns=settings.layout_snake_columns,
        )
    )


def get_layout_mode(
    layout: Annotated[Optional[LayoutMode], Query(description="layered or snake")] = None,
) -> LayoutMode:
    return layout or get_settings().layout_mode


def get_unlock_policy() -> UnlockPolicy:
    return get_settings().unlock_policy


LayoutEngineDep = Annotated[LayoutEngine, Depends(get_layout_engine)]
LayoutModeDep = Annotated[LayoutMode, Depends(get_layout_mode)]
UnlockPolicyDep = Annotated[UnlockPolicy, Depends(get_unlock_policy)]


def get_request_id(request: Request) -> Optional[str]:
    """Get request correlation ID (set by RequestIdMiddleware)."""
    return getattr(request.state, "request_id", None)
