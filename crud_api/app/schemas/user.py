"""Pydantic models for user data."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from .common import CamelModel, RawInput


class UserInput(RawInput):
    """Body of ``POST /api/users`` and ``PUT /api/users/{id}``.

    Values are kept exactly as sent; the request gates and the entity
    validation decide what is acceptable.
    """

    name: Any = Field(None, examples=["John Doe"])
    email: Any = Field(None, examples=["john@example.com"])
    age: Any = Field(None, examples=[30])


class UserRead(CamelModel):
    """Schema for reading a user from the API."""

    id: int
    name: str = Field(..., examples=["John Doe"])
    email: str = Field(..., examples=["john@example.com"])
    age: Optional[int] = Field(None, examples=[30])
    created_at: datetime
    updated_at: datetime
