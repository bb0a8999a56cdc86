"""
Post endpoints.

Posts support the same listing, pagination and search as users, plus
``authorId`` and ``status`` filters.  There is no authentication: the
author of a new post is taken from ``authorId`` in the body and the
acting user of an update or delete from ``requestingUserId``.  Both
fall back to user 1 when omitted.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Request, Response, status

from crud_api.app.api.deps import acting_user_payload, get_post_service, pagination_params, post_id_param, post_payload
from crud_api.app.core.rate_limit import general_limit, strict_limit
from crud_api.app.schemas.common import Envelope, PostStats
from crud_api.app.schemas.post import PostRead
from crud_api.app.services.post_service import PostService


router = APIRouter()

DEFAULT_USER_ID = 1


def _acting_user(payload: Dict[str, Any], key: str) -> Any:
    return payload.get(key) or DEFAULT_USER_ID


@router.get("", response_model=Envelope[List[PostRead]], response_model_exclude_none=True)
@general_limit
async def list_posts(
    request: Request,
    response: Response,
    paging: Tuple[int, int] = Depends(pagination_params),
    search: Optional[str] = Query(None, description="Substring of title or content"),
    author_id: Optional[str] = Query(None, alias="authorId"),
    post_status: Optional[str] = Query(None, alias="status"),
    service: PostService = Depends(get_post_service),
) -> Envelope[List[PostRead]]:
    """List posts, newest first.

    - **page**, **limit**: pagination (1‑based page, at most 100 per page).
    - **authorId**: only posts written by this user.
    - **status**: ``draft`` or ``published``.
    - **search**: case‑insensitive match on title or content.
    """
    page, limit = paging
    posts, pagination = service.list(
        page=page,
        limit=limit,
        search=search,
        author_id=author_id,
        status=post_status,
    )
    return Envelope[List[PostRead]](
        data=[PostRead.model_validate(p) for p in posts],
        pagination=pagination,
    )


@router.get("/stats", response_model=Envelope[PostStats], response_model_exclude_none=True)
@general_limit
async def post_stats(
    request: Request,
    response: Response,
    service: PostService = Depends(get_post_service),
) -> Envelope[PostStats]:
    return Envelope[PostStats](
        data=PostStats(total_posts=service.count(), timestamp=datetime.now(timezone.utc))
    )


@router.get("/{id}", response_model=Envelope[PostRead], response_model_exclude_none=True)
@general_limit
async def get_post(
    request: Request,
    response: Response,
    post_id: int = Depends(post_id_param),
    service: PostService = Depends(get_post_service),
) -> Envelope[PostRead]:
    return Envelope[PostRead](data=PostRead.model_validate(service.get_by_id(post_id)))


@router.post(
    "",
    response_model=Envelope[PostRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
@strict_limit
async def create_post(
    request: Request,
    response: Response,
    payload: Dict[str, Any] = Depends(post_payload),
    service: PostService = Depends(get_post_service),
) -> Envelope[PostRead]:
    """Create a post; ``status`` defaults to ``draft``."""
    post = service.create(
        {
            "title": payload.get("title"),
            "content": payload.get("content"),
            "authorId": _acting_user(payload, "authorId"),
            "status": payload.get("status"),
        }
    )
    return Envelope[PostRead](message="Post created successfully", data=PostRead.model_validate(post))


@router.put("/{id}", response_model=Envelope[PostRead], response_model_exclude_none=True)
@strict_limit
async def update_post(
    request: Request,
    response: Response,
    post_id: int = Depends(post_id_param),
    payload: Dict[str, Any] = Depends(post_payload),
    service: PostService = Depends(get_post_service),
) -> Envelope[PostRead]:
    """Update title, content and/or status of one's own post.

    Fields left out keep their current value.  Updating someone else's
    post is rejected with 403.
    """
    changes = {key: payload[key] for key in ("title", "content", "status") if key in payload}
    post = service.update(post_id, changes, _acting_user(payload, "requestingUserId"))
    return Envelope[PostRead](message="Post updated successfully", data=PostRead.model_validate(post))


@router.delete("/{id}", response_model=Envelope[PostRead], response_model_exclude_none=True)
@strict_limit
async def delete_post(
    request: Request,
    response: Response,
    post_id: int = Depends(post_id_param),
    payload: Dict[str, Any] = Depends(acting_user_payload),
    service: PostService = Depends(get_post_service),
) -> Envelope[PostRead]:
    post = service.delete(post_id, _acting_user(payload, "requestingUserId"))
    return Envelope[PostRead](message="Post deleted successfully", data=PostRead.model_validate(post))
