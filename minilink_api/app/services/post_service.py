"""
Business logic for posts, likes and comments.

Posts live in the ``posts`` table; their like sets and comment
threads live in ``post_likes`` and ``post_comments``.  Every read goes
through ``_load_posts``, which resolves author and comment‑author
names and attaches likes and comments, so callers always receive
fully populated ``PostRead`` objects.

Only the author may edit or delete a post.  Likes and comments
reference users weakly: if a user disappears, their name resolves to
``None`` but the like or comment stays.
"""

import logging
import sqlite3
from typing import Dict, List, Optional

from ..core.errors import AuthorizationError, NotFoundError, ValidationError
from ..schemas.post import (
    COMMENT_MAX_LENGTH,
    POST_MAX_LENGTH,
    CommentAuthor,
    CommentRead,
    PostAuthor,
    PostRead,
)


logger = logging.getLogger(__name__)

_POST_SELECT = """
    SELECT p.id, p.content, p.author_id, p.created_at, p.updated_at,
           u.name AS author_name, u.email AS author_email
    FROM posts p
    LEFT JOIN users u ON u.id = p.author_id
"""


def clean_content(content: Optional[str]) -> str:
    """Trim post content and enforce the 1–1000 character rule."""
    text = (content or "").strip()
    if not text:
        raise ValidationError("Content is required")
    if len(text) > POST_MAX_LENGTH:
        raise ValidationError(f"Content must be {POST_MAX_LENGTH} characters or fewer")
    return text


def clean_comment(text: Optional[str]) -> str:
    value = (text or "").strip()
    if not value:
        raise ValidationError("Comment text is required")
    if len(value) > COMMENT_MAX_LENGTH:
        raise ValidationError(f"Comment must be {COMMENT_MAX_LENGTH} characters or fewer")
    return value


def _load_comments(cursor: sqlite3.Cursor, post_filter: str, params: tuple) -> Dict[int, List[CommentRead]]:
    """Return comments (oldest first) for the posts matched by ``post_filter``."""
    rows = cursor.execute(
        f"""
        SELECT c.id, c.post_id, c.user_id, c.text, c.created_at, u.name AS user_name
        FROM post_comments c
        LEFT JOIN users u ON u.id = c.user_id
        WHERE c.post_id IN (SELECT p.id FROM posts p WHERE {post_filter})
        ORDER BY c.id ASC
        """,
        params,
    ).fetchall()
    comments: Dict[int, List[CommentRead]] = {}
    for row in rows:
        author = CommentAuthor(id=row["user_id"], name=row["user_name"]) if row["user_name"] is not None else None
        comments.setdefault(row["post_id"], []).append(
            CommentRead(id=row["id"], user=author, text=row["text"], created_at=row["created_at"])
        )
    return comments


def _load_likes(cursor: sqlite3.Cursor, post_filter: str, params: tuple) -> Dict[int, List[int]]:
    rows = cursor.execute(
        f"""
        SELECT l.post_id, l.user_id
        FROM post_likes l
        WHERE l.post_id IN (SELECT p.id FROM posts p WHERE {post_filter})
        ORDER BY l.created_at ASC, l.rowid ASC
        """,
        params,
    ).fetchall()
    likes: Dict[int, List[int]] = {}
    for row in rows:
        likes.setdefault(row["post_id"], []).append(row["user_id"])
    return likes


def _load_posts(cursor: sqlite3.Cursor, post_filter: str, params: tuple) -> List[PostRead]:
    """Load posts matching ``post_filter`` newest first, fully resolved.

    ``post_filter`` is an SQL condition over the ``posts`` table
    aliased as ``p``; it is only ever one of the fixed conditions
    written in this module, values are always bound through ``params``.
    """
    rows = cursor.execute(
        f"{_POST_SELECT} WHERE {post_filter} ORDER BY p.created_at DESC, p.id DESC",
        params,
    ).fetchall()
    if not rows:
        return []
    likes = _load_likes(cursor, post_filter, params)
    comments = _load_comments(cursor, post_filter, params)
    posts: List[PostRead] = []
    for row in rows:
        author = None
        if row["author_name"] is not None:
            author = PostAuthor(id=row["author_id"], name=row["author_name"], email=row["author_email"])
        posts.append(
            PostRead(
                id=row["id"],
                content=row["content"],
                author=author,
                likes=likes.get(row["id"], []),
                comments=comments.get(row["id"], []),
                created_at=row["created_at"],
                updated_at=row["updated_at"],
            )
        )
    return posts


def _get_post_row(cursor: sqlite3.Cursor, post_id: int) -> sqlite3.Row:
    try:
        row = cursor.execute("SELECT id, author_id FROM posts WHERE id = ?", (post_id,)).fetchone()
    except OverflowError:
        # Outside SQLite's 64-bit INTEGER range, so no post can have it
        row = None
    if not row:
        raise NotFoundError("Post not found")
    return row


class PostService:
    """Service for posts and the interactions attached to them."""

    @classmethod
    async def create_post(cls, author_id: int, content: Optional[str]) -> PostRead:
        """Create a post owned by ``author_id``.

        Content is trimmed and must be 1–1000 characters long,
        otherwise ``ValidationError`` is raised.  The new post joins
        the author's owned-post list.
        """
        from minilink_api.app.core.db import get_connection
        text = clean_content(content)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO posts (content, author_id) VALUES (?, ?)",
                (text, author_id),
            )
            post_id = cursor.lastrowid
            conn.commit()
            logger.info("User %s created post %s", author_id, post_id)
            return _load_posts(cursor, "p.id = ?", (post_id,))[0]
        finally:
            conn.close()

    @classmethod
    async def get_feed(cls, viewer_id: int) -> List[PostRead]:
        """Return every post not authored by the viewer, newest first."""
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            return _load_posts(conn.cursor(), "p.author_id != ?", (viewer_id,))
        finally:
            conn.close()

    @classmethod
    async def get_own_posts(cls, viewer_id: int) -> List[PostRead]:
        """Return the viewer's own posts, newest first."""
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            return _load_posts(conn.cursor(), "p.author_id = ?", (viewer_id,))
        finally:
            conn.close()

    @classmethod
    async def get_post(cls, post_id: int) -> PostRead:
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _get_post_row(cursor, post_id)
            return _load_posts(cursor, "p.id = ?", (post_id,))[0]
        finally:
            conn.close()

    @classmethod
    async def update_post(cls, post_id: int, requester_id: int, content: Optional[str]) -> PostRead:
        """Replace the content of a post owned by ``requester_id``.

        A missing or blank ``content`` leaves the post text unchanged.
        Raises ``NotFoundError``, ``AuthorizationError`` when the
        requester is not the author, and ``ValidationError`` when the
        new content is too long.
        """
        from minilink_api.app.core.db import get_connection, NOW_SQL
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = _get_post_row(cursor, post_id)
            if row["author_id"] != requester_id:
                raise AuthorizationError("Unauthorized")
            if content is not None and content.strip():
                cursor.execute(
                    f"UPDATE posts SET content = ?, updated_at = {NOW_SQL} WHERE id = ?",
                    (clean_content(content), post_id),
                )
                conn.commit()
                logger.info("User %s updated post %s", requester_id, post_id)
            return _load_posts(cursor, "p.id = ?", (post_id,))[0]
        finally:
            conn.close()

    @classmethod
    async def delete_post(cls, post_id: int, requester_id: int) -> None:
        """Delete a post owned by ``requester_id`` with its likes and comments."""
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = _get_post_row(cursor, post_id)
            if row["author_id"] != requester_id:
                raise AuthorizationError("Unauthorized")
            cursor.execute("DELETE FROM post_likes WHERE post_id = ?", (post_id,))
            cursor.execute("DELETE FROM post_comments WHERE post_id = ?", (post_id,))
            cursor.execute("DELETE FROM posts WHERE id = ?", (post_id,))
            conn.commit()
            logger.info("User %s deleted post %s", requester_id, post_id)
        finally:
            conn.close()

    @classmethod
    async def toggle_like(cls, post_id: int, user_id: int) -> tuple[bool, List[int]]:
        """Like the post if ``user_id`` has not liked it yet, otherwise unlike it.

        Returns whether the post is now liked by the user, and the
        resulting like set (oldest like first).  The insert and the
        conditional delete run in one transaction, and the
        ``(post_id, user_id)`` key keeps a user from liking twice even
        under concurrent requests.
        """
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _get_post_row(cursor, post_id)
            cursor.execute(
                "INSERT OR IGNORE INTO post_likes (post_id, user_id) VALUES (?, ?)",
                (post_id, user_id),
            )
            liked = cursor.rowcount == 1
            if not liked:
                cursor.execute(
                    "DELETE FROM post_likes WHERE post_id = ? AND user_id = ?",
                    (post_id, user_id),
                )
            conn.commit()
            likes = _load_likes(cursor, "p.id = ?", (post_id,)).get(post_id, [])
            logger.debug("User %s %s post %s", user_id, "liked" if liked else "unliked", post_id)
            return liked, likes
        finally:
            conn.close()

    @classmethod
    async def add_comment(cls, post_id: int, user_id: int, text: Optional[str]) -> List[CommentRead]:
        """Append a comment and return the post's full comment thread."""
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _get_post_row(cursor, post_id)
            cursor.execute(
                "INSERT INTO post_comments (post_id, user_id, text) VALUES (?, ?, ?)",
                (post_id, user_id, clean_comment(text)),
            )
            conn.commit()
            logger.info("User %s commented on post %s", user_id, post_id)
            return _load_comments(cursor, "p.id = ?", (post_id,)).get(post_id, [])
        finally:
            conn.close()

    @classmethod
    async def get_comments(cls, post_id: int) -> List[CommentRead]:
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            cursor = conn.cursor()
            _get_post_row(cursor, post_id)
            return _load_comments(cursor, "p.id = ?", (post_id,)).get(post_id, [])
        finally:
            conn.close()
