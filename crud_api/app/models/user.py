"""User record and its validation rules."""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..core.numbers import parse_int


EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


@dataclass
class User:
    id: Optional[int]
    name: str
    email: str
    age: Optional[int]
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, data: Mapping[str, Any]) -> "User":
        """Build an unsaved user from raw input.

        The name is trimmed, the email trimmed and lower‑cased and the
        age read as an integer (``None`` when it is not a number).
        """
        return cls(
            id=None,
            name=_text(data.get("name")),
            email=_text(data.get("email")).lower(),
            age=parse_int(data.get("age")),
        )

    def replaced(self, data: Mapping[str, Any]) -> "User":
        """Return a copy with name, email and age all overwritten.

        User updates are full replacements: a missing field is treated
        as empty rather than kept.
        """
        return replace(
            self,
            name=_text(data.get("name")),
            email=_text(data.get("email")).lower(),
            age=parse_int(data.get("age")),
            updated_at=_utcnow(),
        )

    def validate(self) -> List[str]:
        errors: List[str] = []

        if not self.name or not self.name.strip():
            errors.append("Name is required")

        if not self.email or not self.email.strip():
            errors.append("Email is required")
        elif not EMAIL_RE.search(self.email):
            errors.append("Email format is invalid")

        # An age of 0 counts as missing.
        if not self.age or self.age < 0 or self.age > 150:
            errors.append("Age must be a valid number between 0 and 150")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
