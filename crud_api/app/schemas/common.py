"""
Response envelope, pagination metadata and the request body base.

Every endpoint answers with the same wrapper::

    {"success": true, "message": "...", "data": ..., "pagination": {...}}

Keys that do not apply to a response are left out rather than sent as
``null``.
"""

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union
from urllib.parse import parse_qsl

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RawInput(CamelModel):
    """Loose request body: a JSON object or a url‑encoded form.

    Fields are untyped so the request gates see the values exactly as
    sent, and unknown keys are kept.
    """

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _as_mapping(cls, data: Any) -> Any:
        # FastAPI passes non‑JSON bodies through as raw bytes.
        if isinstance(data, (bytes, bytearray)):
            return dict(parse_qsl(data.decode("utf-8", errors="replace"), keep_blank_values=True))
        # A JSON document that is not an object reads as an empty one.
        if not isinstance(data, dict):
            return {}
        return data

    def to_payload(self) -> Dict[str, Any]:
        """The fields that were actually sent, keyed as on the wire."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class Pagination(CamelModel):
    current_page: int = Field(..., examples=[1])
    total_pages: int = Field(..., examples=[1])
    limit: int = Field(..., examples=[10])


class UserPagination(Pagination):
    total_users: int = Field(..., examples=[3])


class PostPagination(Pagination):
    total_posts: int = Field(..., examples=[3])


class Envelope(CamelModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    errors: Optional[List[str]] = None
    pagination: Optional[Union[UserPagination, PostPagination]] = None


class UserStats(CamelModel):
    total_users: int
    timestamp: datetime


class PostStats(CamelModel):
    total_posts: int
    timestamp: datetime
