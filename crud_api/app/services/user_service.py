"""
Business logic for users.

``UserService`` owns an in‑memory, insertion‑ordered list of users and
the counter used to assign ids.  One instance is built per application
(see ``main.create_app``) and handed to the endpoints as a dependency,
so tests can work on isolated instances.

Updates are full replacements: name, email and age must all be
supplied.  Posts, in contrast, are patched (see ``PostService``).
"""

import logging
import math
import threading
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Tuple

from ..core.errors import BadRequest, Conflict, NotFound, ValidationFailed
from ..models.user import User
from ..schemas.common import UserPagination


logger = logging.getLogger(__name__)

SEED_USERS = (
    ("John Doe", "john@example.com", 30),
    ("Jane Smith", "jane@example.com", 25),
    ("Bob Johnson", "bob@example.com", 35),
)


class UserService:
    """In‑memory user store.

    All mutations run under a re‑entrant lock so the collection and
    the id counter stay consistent when the service is shared between
    threads.
    """

    def __init__(self, seed: bool = True) -> None:
        self._users: List[User] = []
        self._next_id = 1
        self._lock = threading.RLock()
        if seed:
            seeded_at = datetime.now(timezone.utc)
            for name, email, age in SEED_USERS:
                self._users.append(
                    User(
                        id=self._next_id,
                        name=name,
                        email=email,
                        age=age,
                        created_at=seeded_at,
                        updated_at=seeded_at,
                    )
                )
                self._next_id += 1

    def list(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
    ) -> Tuple[List[User], UserPagination]:
        """Return one page of users and its pagination metadata.

        ``search`` keeps users whose name or email contains the term,
        ignoring case.  ``page`` is 1‑based; a page past the end is
        simply empty.  Totals are computed over the filtered users.
        """
        if page < 1 or limit < 1:
            raise BadRequest("Page and limit must be positive numbers")

        with self._lock:
            users = list(self._users)

        if search:
            term = search.lower()
            users = [u for u in users if term in u.name.lower() or term in u.email.lower()]

        start = (page - 1) * limit
        pagination = UserPagination(
            current_page=page,
            total_pages=math.ceil(len(users) / limit),
            total_users=len(users),
            limit=limit,
        )
        return users[start:start + limit], pagination

    def get_by_id(self, user_id: int) -> User:
        with self._lock:
            for user in self._users:
                if user.id == user_id:
                    return user
        raise NotFound("User", user_id)

    def create(self, data: Mapping[str, Any]) -> User:
        """Validate and store a new user.

        Raises ``ValidationFailed`` with every violated rule, or
        ``Conflict`` when the (normalised) email is already registered.
        """
        user = User.create(data)
        errors = user.validate()
        if errors:
            raise ValidationFailed(errors)

        with self._lock:
            if self.email_exists(user.email):
                raise Conflict("User with this email already exists")
            user.id = self._next_id
            self._next_id += 1
            self._users.append(user)

        logger.info("Created user %s <%s>", user.id, user.email)
        return user

    def update(self, user_id: int, data: Mapping[str, Any]) -> User:
        """Replace name, email and age of an existing user.

        The new values are validated on a copy; the stored user only
        changes once validation and the uniqueness check pass.
        """
        with self._lock:
            current = self.get_by_id(user_id)
            candidate = current.replaced(data)

            errors = candidate.validate()
            if errors:
                raise ValidationFailed(errors)

            if self.email_exists(candidate.email, exclude_id=user_id):
                raise Conflict("Email already exists for another user")

            current.name = candidate.name
            current.email = candidate.email
            current.age = candidate.age
            current.updated_at = candidate.updated_at

        logger.info("Updated user %s", user_id)
        return current

    def delete(self, user_id: int) -> User:
        with self._lock:
            for index, user in enumerate(self._users):
                if user.id == user_id:
                    removed = self._users.pop(index)
                    break
            else:
                raise NotFound("User", user_id)

        logger.info("Deleted user %s", user_id)
        return removed

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """Whether another user already holds ``email`` (compared lower‑cased)."""
        email = email.lower()
        with self._lock:
            return any(
                u.email == email and (exclude_id is None or u.id != exclude_id)
                for u in self._users
            )

    def count(self) -> int:
        with self._lock:
            return len(self._users)

