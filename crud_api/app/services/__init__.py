"""
Service layer abstraction.

Each service encapsulates business logic for a resource and owns its
in‑memory collection.  Endpoints receive service instances through
FastAPI dependencies, so the storage can later be swapped for a
database without touching the API handlers.
"""

from .post_service import PostService  # noqa: F401
from .user_service import UserService  # noqa: F401
