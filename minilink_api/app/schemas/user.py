"""
Pydantic models for user data.

Request bodies for signup and login keep their fields optional so the
auth service can answer a missing field with the same
``{"message": ...}`` error as every other validation failure.  The
password hash never appears in any response schema.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def check_text(v: Optional[str]) -> Optional[str]:
    """Reject strings that cannot be stored as UTF-8 (lone surrogates)."""
    if v is None:
        return None
    try:
        v.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError("Invalid characters")
    return v


class SignupRequest(BaseModel):
    """Schema for registering a user."""

    name: Optional[str] = Field(None, examples=["Ann Smith"])
    email: Optional[str] = Field(None, examples=["ann@example.com"])
    password: Optional[str] = Field(None, examples=["secret1"])
    bio: Optional[str] = Field(None, examples=["Backend developer"])

    validate_text = field_validator("name", "email", "password", "bio")(check_text)


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, examples=["ann@example.com"])
    password: Optional[str] = Field(None, examples=["secret1"])

    validate_text = field_validator("email", "password")(check_text)


class UserRead(BaseModel):
    """Public representation of a user."""

    id: int
    name: str
    email: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class ProfileRead(UserRead):
    """A user's own profile, including the ids of the posts they own."""

    posts: List[int] = Field(default_factory=list)
    created_at: str


class ProfileUpdate(BaseModel):
    """Schema for editing a profile.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

    validate_text = field_validator("name", "bio", "avatar_url")(check_text)


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserRead


class MessageResponse(BaseModel):
    message: str
