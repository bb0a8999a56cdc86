"""
Top‑level router for the resource endpoints.

When new resources are introduced, include their routers here; the
application mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import posts, users


router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
