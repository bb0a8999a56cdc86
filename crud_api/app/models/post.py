"""Post record and its validation rules."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..core.numbers import parse_int


POST_STATUSES = ("draft", "published")
TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 10000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


@dataclass
class Post:
    id: Optional[int]
    title: str
    content: str
    author_id: Optional[int]
    status: Any = "draft"
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, data: Mapping[str, Any]) -> "Post":
        """Build an unsaved post from raw input; status defaults to draft."""
        return cls(
            id=None,
            title=_text(data.get("title")),
            content=_text(data.get("content")),
            author_id=parse_int(data.get("authorId")),
            status=data.get("status") or "draft",
        )

    def patched(self, data: Mapping[str, Any]) -> "Post":
        """Return a copy with only the supplied fields overwritten.

        ``title``, ``content`` and ``status`` are patchable; keys that
        are absent (or ``None``) keep the current value.  The author
        never changes.
        """
        changes: Dict[str, Any] = {"updated_at": _utcnow()}
        if data.get("title") is not None:
            changes["title"] = _text(data["title"])
        if data.get("content") is not None:
            changes["content"] = _text(data["content"])
        if data.get("status") is not None:
            changes["status"] = data["status"]
        return replace(self, **changes)

    def validate(self) -> List[str]:
        errors: List[str] = []

        if not self.title or not self.title.strip():
            errors.append("Title is required")
        elif len(self.title.strip()) > TITLE_MAX_LENGTH:
            errors.append(f"Title must not exceed {TITLE_MAX_LENGTH} characters")

        if not self.content or not self.content.strip():
            errors.append("Content is required")
        elif len(self.content.strip()) > CONTENT_MAX_LENGTH:
            errors.append(f"Content must not exceed {CONTENT_MAX_LENGTH} characters")

        if not self.author_id or self.author_id <= 0:
            errors.append("Valid author ID is required")

        if self.status and self.status not in POST_STATUSES:
            errors.append('Status must be either "draft" or "published"')

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "authorId": self.author_id,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
