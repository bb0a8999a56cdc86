"""
User endpoints.

CRUD over the in‑memory user collection plus a small statistics
route.  Every handler answers with the standard envelope; failures are
raised as ``ServiceError`` subclasses and rendered by the exception
handlers registered in ``main``.  Reads count against the general rate
limit, writes against the strict one.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Request, Response, status

from crud_api.app.api.deps import get_user_service, pagination_params, user_id_param, user_payload
from crud_api.app.core.rate_limit import general_limit, strict_limit
from crud_api.app.schemas.common import Envelope, UserStats
from crud_api.app.schemas.user import UserRead
from crud_api.app.services.user_service import UserService


router = APIRouter()


@router.get("", response_model=Envelope[List[UserRead]], response_model_exclude_none=True)
@general_limit
async def list_users(
    request: Request,
    response: Response,
    paging: Tuple[int, int] = Depends(pagination_params),
    search: Optional[str] = Query(None, description="Substring of name or email"),
    service: UserService = Depends(get_user_service),
) -> Envelope[List[UserRead]]:
    """List users.

    Supports ``page``/``limit`` pagination and a case‑insensitive
    ``search`` over name and email.  Pagination totals describe the
    filtered result.
    """
    page, limit = paging
    users, pagination = service.list(page=page, limit=limit, search=search)
    return Envelope[List[UserRead]](
        data=[UserRead.model_validate(u) for u in users],
        pagination=pagination,
    )


@router.get("/stats", response_model=Envelope[UserStats], response_model_exclude_none=True)
@general_limit
async def user_stats(
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> Envelope[UserStats]:
    return Envelope[UserStats](
        data=UserStats(total_users=service.count(), timestamp=datetime.now(timezone.utc))
    )


@router.get("/{id}", response_model=Envelope[UserRead], response_model_exclude_none=True)
@general_limit
async def get_user(
    request: Request,
    response: Response,
    user_id: int = Depends(user_id_param),
    service: UserService = Depends(get_user_service),
) -> Envelope[UserRead]:
    return Envelope[UserRead](data=UserRead.model_validate(service.get_by_id(user_id)))


@router.post(
    "",
    response_model=Envelope[UserRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
@strict_limit
async def create_user(
    request: Request,
    response: Response,
    payload: Dict[str, Any] = Depends(user_payload),
    service: UserService = Depends(get_user_service),
) -> Envelope[UserRead]:
    """Register a new user.

    Name, email and age are required; the email is stored lower‑cased
    and must not belong to another user (409 otherwise).
    """
    user = service.create({key: payload.get(key) for key in ("name", "email", "age")})
    return Envelope[UserRead](message="User created successfully", data=UserRead.model_validate(user))


@router.put("/{id}", response_model=Envelope[UserRead], response_model_exclude_none=True)
@strict_limit
async def update_user(
    request: Request,
    response: Response,
    user_id: int = Depends(user_id_param),
    payload: Dict[str, Any] = Depends(user_payload),
    service: UserService = Depends(get_user_service),
) -> Envelope[UserRead]:
    """Replace a user's name, email and age.

    This is a full replacement: all three fields must be sent, unlike
    the partial update offered for posts.
    """
    user = service.update(user_id, {key: payload.get(key) for key in ("name", "email", "age")})
    return Envelope[UserRead](message="User updated successfully", data=UserRead.model_validate(user))


@router.delete("/{id}", response_model=Envelope[UserRead], response_model_exclude_none=True)
@strict_limit
async def delete_user(
    request: Request,
    response: Response,
    user_id: int = Depends(user_id_param),
    service: UserService = Depends(get_user_service),
) -> Envelope[UserRead]:
    user = service.delete(user_id)
    return Envelope[UserRead](message="User deleted successfully", data=UserRead.model_validate(user))
