"""
Domain records.

``User`` and ``Post`` are plain dataclasses owned by their services.
They know how to normalise raw input and how to validate themselves;
they never raise on invalid data but report every violation at once.
"""

from .post import Post, POST_STATUSES  # noqa: F401
from .user import User  # noqa: F401
