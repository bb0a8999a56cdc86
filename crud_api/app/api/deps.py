"""
FastAPI dependencies shared by the endpoint modules.

They pull the service instances off ``app.state``, turn the request
body into a plain dict and apply the request gates from
``validators``.  A failed gate raises ``BadRequest`` which the
exception handlers render as a 400 envelope.
"""

from typing import Any, Dict, Optional, Tuple

from fastapi import Body, Path, Query, Request

from ..core.errors import BadRequest
from ..core.numbers import parse_int
from ..schemas.post import ActingUserInput, PostInput
from ..schemas.user import UserInput
from ..services.post_service import PostService
from ..services.user_service import UserService
from .validators import check_id, check_post_input, check_query_params, check_user_input


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def pagination_params(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size, at most 100"),
) -> Tuple[int, int]:
    message = check_query_params(page, limit)
    if message:
        raise BadRequest(message)
    return (parse_int(page) if page else 1), (parse_int(limit) if limit else 10)


def user_id_param(id: str = Path(..., description="User ID")) -> int:
    message = check_id(id, "user")
    if message:
        raise BadRequest(message)
    return parse_int(id)


def post_id_param(id: str = Path(..., description="Post ID")) -> int:
    message = check_id(id, "post")
    if message:
        raise BadRequest(message)
    return parse_int(id)


def user_payload(body: Optional[UserInput] = Body(None)) -> Dict[str, Any]:
    payload = body.to_payload() if body else {}
    message = check_user_input(payload)
    if message:
        raise BadRequest(message)
    return payload


def post_payload(body: Optional[PostInput] = Body(None)) -> Dict[str, Any]:
    payload = body.to_payload() if body else {}
    message = check_post_input(payload)
    if message:
        raise BadRequest(message)
    return payload


def acting_user_payload(body: Optional[ActingUserInput] = Body(None)) -> Dict[str, Any]:
    """Body of a delete request; it may be missing altogether."""
    return body.to_payload() if body else {}
