"""
Business logic for users.

The ``UserService`` reads and edits user records.  Account creation
and credential checks live in ``AuthService``; this service only
deals with the public side of a user (name, bio, avatar) and with the
operator helpers used by the command line tool.
"""

import logging
from typing import Optional

from ..core.errors import NotFoundError, ValidationError
from ..schemas.user import ProfileRead, ProfileUpdate, UserRead


logger = logging.getLogger(__name__)


def _row_to_user(row) -> UserRead:
    return UserRead(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        bio=row["bio"],
        avatar_url=row["avatar_url"],
    )


class UserService:
    """Service for reading and editing user profiles."""

    @classmethod
    async def get_user_by_id(cls, user_id: int) -> Optional[UserRead]:
        """Retrieve a user by ID, or ``None`` if there is no such user."""
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, name, email, bio, avatar_url FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        except OverflowError:
            return None
        else:
            return _row_to_user(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def get_user_by_email(cls, email: str) -> Optional[UserRead]:
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, name, email, bio, avatar_url FROM users WHERE email = ?",
                (email.strip().lower(),),
            ).fetchone()
            return _row_to_user(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def get_profile(cls, user_id: int) -> ProfileRead:
        """Return a user's profile together with the ids of the posts they own.

        Owned post ids are listed in creation order.  Raises
        ``NotFoundError`` if the user does not exist.
        """
        from minilink_api.app.core.db import get_connection
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                "SELECT id, name, email, bio, avatar_url, created_at FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
            if not row:
                raise NotFoundError("User not found")
            post_ids = [
                r["id"]
                for r in cursor.execute(
                    "SELECT id FROM posts WHERE author_id = ? ORDER BY id ASC",
                    (user_id,),
                ).fetchall()
            ]
            return ProfileRead(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                bio=row["bio"],
                avatar_url=row["avatar_url"],
                posts=post_ids,
                created_at=row["created_at"],
            )
        finally:
            conn.close()

    @classmethod
    async def update_profile(cls, user_id: int, data: ProfileUpdate) -> ProfileRead:
        """Update the supplied profile fields and return the new profile.

        ``name`` may not be blank.  Empty ``bio``/``avatar_url`` values
        clear the field.  Email and password cannot be changed here.
        """
        updates = {}
        if data.name is not None:
            name = data.name.strip()
            if not name:
                raise ValidationError("Name cannot be empty")
            updates["name"] = name
        if data.bio is not None:
            updates["bio"] = data.bio.strip() or None
        if data.avatar_url is not None:
            updates["avatar_url"] = data.avatar_url.strip() or None

        if updates:
            from minilink_api.app.core.db import get_cursor, NOW_SQL
            with get_cursor() as cursor:
                fields = ", ".join(f"{key} = ?" for key in updates)
                cursor.execute(
                    f"UPDATE users SET {fields}, updated_at = {NOW_SQL} WHERE id = ?",
                    (*updates.values(), user_id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError("User not found")
            logger.info("User %s updated profile fields %s", user_id, sorted(updates))
        return await cls.get_profile(user_id)

    @classmethod
    async def set_password(cls, email: str, password: str) -> UserRead:
        """Replace the password hash of the user with the given email."""
        from minilink_api.app.core.db import get_cursor, NOW_SQL
        from minilink_api.app.core.security import hash_password
        if not password:
            raise ValidationError("Password cannot be empty")
        user = await cls.get_user_by_email(email)
        if not user:
            raise NotFoundError("User not found")
        with get_cursor() as cursor:
            cursor.execute(
                f"UPDATE users SET password = ?, updated_at = {NOW_SQL} WHERE id = ?",
                (hash_password(password), user.id),
            )
        logger.info("Password reset for user %s", user.id)
        return user
