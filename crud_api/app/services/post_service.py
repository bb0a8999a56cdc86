"""
Business logic for posts.

``PostService`` keeps posts in memory together with the id counter.
Only the author of a post may change or delete it; the requesting user
is identified by a plain id passed in by the caller.  Updates are
partial: fields that are not supplied keep their current value.
"""

import logging
import math
import threading
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Tuple

from ..core.errors import BadRequest, Forbidden, NotFound, ValidationFailed
from ..core.numbers import parse_int
from ..models.post import Post
from ..schemas.common import PostPagination


logger = logging.getLogger(__name__)

SEED_POSTS = (
    (
        "First Blog Post",
        "This is the content of the first blog post. It contains some interesting "
        "information about our platform.",
        1,
        "published",
    ),
    ("Draft Post", "This is a draft post that is not yet published.", 2, "draft"),
    (
        "Another Published Post",
        "Here is another published post with more content and interesting insights.",
        1,
        "published",
    ),
)


class PostService:
    """Service class for managing posts."""

    def __init__(self, seed: bool = True) -> None:
        self._posts: List[Post] = []
        self._next_id = 1
        self._lock = threading.RLock()
        if seed:
            # Fixtures share one timestamp, so newest‑first listing keeps
            # them in insertion order.
            seeded_at = datetime.now(timezone.utc)
            for title, content, author_id, status in SEED_POSTS:
                self._posts.append(
                    Post(
                        id=self._next_id,
                        title=title,
                        content=content,
                        author_id=author_id,
                        status=status,
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
        author_id: Any = None,
        status: Optional[str] = None,
    ) -> Tuple[List[Post], PostPagination]:
        """Return one page of posts, newest first.

        Filters are applied in order and only when given: author id
        (exact match), status (exact match), then ``search`` over title
        and content ignoring case.  The sort is stable, so posts created
        at the same instant keep their insertion order.
        """
        if page < 1 or limit < 1:
            raise BadRequest("Page and limit must be positive numbers")

        with self._lock:
            posts = list(self._posts)

        if author_id:
            wanted = parse_int(author_id)
            posts = [p for p in posts if p.author_id == wanted]

        if status:
            posts = [p for p in posts if p.status == status]

        if search:
            term = search.lower()
            posts = [p for p in posts if term in p.title.lower() or term in p.content.lower()]

        posts.sort(key=lambda p: p.created_at, reverse=True)

        start = (page - 1) * limit
        pagination = PostPagination(
            current_page=page,
            total_pages=math.ceil(len(posts) / limit),
            total_posts=len(posts),
            limit=limit,
        )
        return posts[start:start + limit], pagination

    def get_by_id(self, post_id: int) -> Post:
        with self._lock:
            for post in self._posts:
                if post.id == post_id:
                    return post
        raise NotFound("Post", post_id)

    def create(self, data: Mapping[str, Any]) -> Post:
        post = Post.create(data)
        errors = post.validate()
        if errors:
            raise ValidationFailed(errors)

        with self._lock:
            post.id = self._next_id
            self._next_id += 1
            self._posts.append(post)

        logger.info("Created post %s by author %s", post.id, post.author_id)
        return post

    def update(self, post_id: int, data: Mapping[str, Any], requesting_user_id: Any) -> Post:
        """Patch a post on behalf of ``requesting_user_id``.

        The changes are applied to a copy and validated first; the
        stored post is left untouched when the author check or
        validation fails.
        """
        with self._lock:
            current = self.get_by_id(post_id)
            if current.author_id != parse_int(requesting_user_id):
                raise Forbidden("You can only update your own posts")

            candidate = current.patched(data)
            errors = candidate.validate()
            if errors:
                raise ValidationFailed(errors)

            current.title = candidate.title
            current.content = candidate.content
            current.status = candidate.status
            current.updated_at = candidate.updated_at

        logger.info("Updated post %s", post_id)
        return current

    def delete(self, post_id: int, requesting_user_id: Any) -> Post:
        with self._lock:
            post = self.get_by_id(post_id)
            if post.author_id != parse_int(requesting_user_id):
                raise Forbidden("You can only delete your own posts")
            self._posts.remove(post)

        logger.info("Deleted post %s", post_id)
        return post

    def count(self) -> int:
        with self._lock:
            return len(self._posts)

    def list_by_author(self, author_id: Any) -> List[Post]:
        wanted = parse_int(author_id)
        with self._lock:
            return [p for p in self._posts if p.author_id == wanted]
