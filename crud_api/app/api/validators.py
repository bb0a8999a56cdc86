"""
Request gates.

These checks run on the raw request fields before the service layer
is reached.  They are deliberately coarse (the email format, for
instance, is left to entity validation) and each one reports only the
first rule that fails, so the client gets a single readable message.
Every ``check_*`` function returns that message, or ``None`` when the
input passes.
"""

from typing import Any, Mapping, Optional

from ..core.numbers import is_numeric, parse_int
from ..models.post import CONTENT_MAX_LENGTH, POST_STATUSES, TITLE_MAX_LENGTH


MAX_PAGE_SIZE = 100


def _blank(value: Any) -> bool:
    return not value or not isinstance(value, str) or not value.strip()


def check_user_input(body: Mapping[str, Any]) -> Optional[str]:
    if _blank(body.get("name")):
        return "Name is required and must be a non-empty string"
    if _blank(body.get("email")):
        return "Email is required and must be a non-empty string"
    age = body.get("age")
    if not age or not is_numeric(age):
        return "Age is required and must be a number"
    return None


def check_post_input(body: Mapping[str, Any]) -> Optional[str]:
    title = body.get("title")
    if _blank(title):
        return "Title is required and must be a non-empty string"
    if len(title.strip()) > TITLE_MAX_LENGTH:
        return f"Title must not exceed {TITLE_MAX_LENGTH} characters"

    content = body.get("content")
    if _blank(content):
        return "Content is required and must be a non-empty string"
    if len(content.strip()) > CONTENT_MAX_LENGTH:
        return f"Content must not exceed {CONTENT_MAX_LENGTH} characters"

    status = body.get("status")
    if status and status not in POST_STATUSES:
        return 'Status must be either "draft" or "published"'
    return None


def check_id(raw: Any, entity: str) -> Optional[str]:
    """Validate an ``:id`` path segment; ``entity`` is ``"user"`` or ``"post"``."""
    value = parse_int(raw) if is_numeric(raw) else None
    if value is None or value <= 0:
        return f"Valid {entity} ID is required"
    return None


def check_query_params(page: Any = None, limit: Any = None) -> Optional[str]:
    if page and (not is_numeric(page) or (parse_int(page) or 0) <= 0):
        return "Page must be a positive number"
    if limit and (not is_numeric(limit) or not 0 < (parse_int(limit) or 0) <= MAX_PAGE_SIZE):
        return f"Limit must be a positive number and not exceed {MAX_PAGE_SIZE}"
    return None
