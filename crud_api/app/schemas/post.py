"""Pydantic models for post data."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .common import CamelModel, RawInput


class ActingUserInput(RawInput):
    """Body of ``DELETE /api/posts/{id}``: who is asking."""

    requesting_user_id: Any = Field(None, examples=[1])


class PostInput(ActingUserInput):
    """Body of ``POST /api/posts`` and ``PUT /api/posts/{id}``.

    ``authorId`` is read on create, ``requestingUserId`` on update.
    """

    title: Any = Field(None, examples=["First Blog Post"])
    content: Any = Field(None, examples=["This is the content of the first blog post."])
    status: Any = Field(None, examples=["draft"])
    author_id: Any = Field(None, examples=[1])


class PostRead(CamelModel):
    """Schema for reading a post from the API."""

    id: int
    title: str = Field(..., examples=["First Blog Post"])
    content: str
    author_id: int = Field(..., examples=[1])
    status: str = Field("draft", examples=["published"])
    created_at: datetime
    updated_at: datetime
