"""
Business logic for authentication.

``AuthService`` registers users, checks credentials and resolves
tokens back to users.  Tokens are stateless: logging out only clears
the cookie on the client, and a token stays valid until it expires.
"""

import logging
import sqlite3
from typing import Optional, Tuple

from ..core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from ..core.security import create_user_token, decode_access_token, hash_password, verify_password
from ..schemas.user import LoginRequest, SignupRequest, UserRead
from .user_service import UserService


logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Signup, login and token resolution."""

    @classmethod
    async def signup(cls, data: SignupRequest) -> Tuple[str, UserRead]:
        """Register a new user and issue a token for them.

        Raises ``ValidationError`` if name, email or password is
        missing and ``ConflictError`` if the email is already
        registered.  Returns the token and the public user.
        """
        from minilink_api.app.core.db import get_connection
        name = (data.name or "").strip()
        email = normalize_email(data.email)
        if not name or not email or not data.password:
            raise ValidationError("Please fill all required fields.")
        bio = data.bio.strip() if data.bio and data.bio.strip() else None

        conn = get_connection()
        try:
            cursor = conn.cursor()
            existing = cursor.execute("SELECT id FROM users WHERE email = ?", (email,)).fetchone()
            if existing:
                raise ConflictError("Email already registered.")
            try:
                cursor.execute(
                    "INSERT INTO users (name, email, password, bio) VALUES (?, ?, ?, ?)",
                    (name, email, hash_password(data.password), bio),
                )
            except sqlite3.IntegrityError as e:
                # Lost a race with a concurrent signup for the same email
                raise ConflictError("Email already registered.") from e
            user_id = cursor.lastrowid
            conn.commit()
        finally:
            conn.close()

        logger.info("Registered user %s <%s>", user_id, email)
        user = UserRead(id=user_id, name=name, email=email, bio=bio, avatar_url=None)
        return create_user_token(user_id), user

    @classmethod
    async def login(cls, data: LoginRequest) -> Tuple[str, UserRead]:
        """Check credentials and issue a token.

        Raises ``NotFoundError`` if no user has the email and
        ``AuthError`` if the password does not match.
        """
        from minilink_api.app.core.db import get_connection
        email = normalize_email(data.email)
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, name, email, password, bio, avatar_url FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            raise NotFoundError("User not found")
        if not verify_password(data.password or "", row["password"]):
            logger.warning("Failed login for user %s", row["id"])
            raise AuthError("Invalid password")

        logger.info("User %s logged in", row["id"])
        user = UserRead(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            bio=row["bio"],
            avatar_url=row["avatar_url"],
        )
        return create_user_token(user.id), user

    @classmethod
    async def authenticate(cls, token: Optional[str]) -> UserRead:
        """Resolve a token to the user it was issued for.

        Raises ``AuthError`` if the token is missing, malformed,
        tampered with or expired, or if the user no longer exists.
        """
        if not token:
            raise AuthError("Please login")
        payload = decode_access_token(token)
        if not payload:
            raise AuthError("Invalid or expired token")
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise AuthError("Invalid or expired token")
        user = await UserService.get_user_by_id(user_id)
        if not user:
            raise AuthError("User no longer exists")
        return user
