"""
API v1 routes.
"""

from fastapi import APIRouter

from knowledge_tree.api.v1 import roadmaps

router = APIRouter()

router.include_router(roadmaps.router, prefix="/roadmaps", tags=["Roadmaps"])
